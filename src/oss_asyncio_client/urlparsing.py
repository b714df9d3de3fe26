import re
import urllib.parse

from yarl import URL

_DOMAIN = r"([a-zA-Z0-9]([a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,6}"
_ENDPOINT_RE = re.compile(rf"^{_DOMAIN}$")
_BASE_URL_RE = re.compile(rf"^https?://{_DOMAIN}$")
_LEADING_SLASHES_RE = re.compile(r"^/+")


def normalize_key(prefix: str | None, key: str) -> str:
    """Joins the prefix and the key, dropping the leading ``/`` run of both.

    Nothing else is touched: inner slashes, spaces and non-ASCII characters
    are kept as they are, escaping happens only when the request URL is built.
    """
    key = _LEADING_SLASHES_RE.sub("", key)
    return _LEADING_SLASHES_RE.sub("", (prefix or "") + key)


def is_valid_endpoint(endpoint: str) -> bool:
    return bool(_ENDPOINT_RE.match(endpoint))


def is_valid_base_url(url: str) -> bool:
    """Scheme plus domain only, without a trailing slash."""
    return bool(_BASE_URL_RE.match(url))


def quote_key(key: str) -> str:
    return urllib.parse.quote(key, safe="/~")


def get_bucket_url(endpoint: str, bucket: str, secure: bool = False) -> URL:
    """Virtual-hosted bucket URL, ``{scheme}://{bucket}.{endpoint}``."""
    return URL.build(scheme="https" if secure else "http", host=f"{bucket}.{endpoint}")


def get_object_url(bucket_url: URL, key: str, subresource: str | None = None) -> URL:
    return URL.build(
        scheme=bucket_url.scheme,
        host=bucket_url.host,
        port=bucket_url.explicit_port,
        path="/" + quote_key(key),
        query_string=subresource or "",
        encoded=True,
    )
