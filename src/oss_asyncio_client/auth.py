"""OSS header and query-string signatures (signature version 1)."""

import base64
import datetime as dt
import email.utils
import hashlib
import hmac
import urllib.parse


def http_date(now: dt.datetime | None = None) -> str:
    """RFC 1123 date as expected in the ``Date`` header."""
    if now is None:
        now = dt.datetime.now(dt.UTC)
    return email.utils.format_datetime(now, usegmt=True)


def expires_at(ttl: int | float) -> int:
    return int(dt.datetime.now(dt.UTC).timestamp() + ttl)


class OSSSignatureV1:
    def __init__(self, access_key_id: str, access_key_secret: str, bucket: str):
        self.access_key_id = access_key_id
        self.access_key_secret = access_key_secret
        self.bucket = bucket

    def _hmac_sha1(self, data: str) -> str:
        digest = hmac.new(
            self.access_key_secret.encode("utf-8"),
            data.encode("utf-8"),
            hashlib.sha1,
        ).digest()
        return base64.b64encode(digest).decode("ascii")

    def _canonical_resource(self, key: str) -> str:
        # the resource is signed unescaped, the service verifies the decoded path
        return f"/{self.bucket}/{key}"

    def _create_string_to_sign(
        self,
        method: str,
        content_md5: str,
        content_type: str,
        date: str,
        key: str,
    ) -> str:
        return "\n".join(
            [
                method,
                content_md5,
                content_type,
                date,
                self._canonical_resource(key),
            ]
        )

    def sign(
        self,
        method: str,
        content_md5: str,
        content_type: str,
        date: str,
        key: str,
    ) -> str:
        """Value of the ``Authorization`` header for one request."""
        string_to_sign = self._create_string_to_sign(
            method, content_md5, content_type, date, key
        )
        return f"OSS {self.access_key_id}:{self._hmac_sha1(string_to_sign)}"

    def sign_url(self, key: str, expires: int) -> str:
        """URL-escaped ``Signature`` query parameter for a GET link."""
        string_to_sign = self._create_string_to_sign("GET", "", "", str(expires), key)
        return urllib.parse.quote(self._hmac_sha1(string_to_sign), safe="")
