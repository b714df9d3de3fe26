import logging
from collections.abc import AsyncIterable
from typing import IO

import aiohttp
from multidict import CIMultiDict
from yarl import URL

from .auth import OSSSignatureV1, http_date
from .config import DEFAULT_ENDPOINT, ClientConfig
from .content_type import resolve_content_type
from .reply import Reply
from .urlparsing import get_object_url, normalize_key

logger = logging.getLogger(__name__)

Body = bytes | AsyncIterable[bytes] | IO[bytes] | aiohttp.StreamReader


class _OSSClientBase:
    def __init__(
        self,
        access_key_id: str,
        access_key_secret: str,
        bucket: str,
        endpoint: str | None = DEFAULT_ENDPOINT,
        prefix: str | None = None,
        cdn: str | None = None,
        secure: bool = False,
        connector: aiohttp.BaseConnector | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
    ):
        self._config = ClientConfig(
            access_key_id=access_key_id,
            access_key_secret=access_key_secret,
            bucket=bucket,
            endpoint=endpoint or DEFAULT_ENDPOINT,
            prefix=prefix,
            cdn=cdn,
            secure=secure,
        )
        self._auth = OSSSignatureV1(access_key_id, access_key_secret, bucket)
        self._connector = connector
        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def bucket_url(self) -> URL:
        return self._config.bucket_url

    @property
    def prefix(self) -> str | None:
        return self._config.prefix

    def set_prefix(self, prefix: str | None) -> None:
        self._config = self._config.with_prefix(prefix)

    def _object_key(self, key: str) -> str:
        return normalize_key(self._config.prefix, key)

    async def __aenter__(self):
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self):
        if self._session is None:
            kwargs = {}
            if self._timeout is not None:
                kwargs["timeout"] = self._timeout
            # a shared connector outlives this client
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                connector_owner=self._connector is None,
                **kwargs,
            )

    async def close(self):
        if self._session:
            await self._session.close()
            self._session = None

    async def _request(
        self,
        method: str,
        url: URL,
        headers: dict[str, str],
        data: Body | None = None,
        raw: bool = False,
    ) -> Reply:
        """Sends one request and buffers the whole response.

        Any HTTP status comes back as a ``Reply``. Connection failures raise
        the underlying ``aiohttp.ClientError`` or ``OSError`` untouched.
        """
        await self._ensure_session()

        async with self._session.request(
            method,
            url,
            headers=headers,
            data=data,
            # aiohttp would add a Content-Type that is not part of the signature
            skip_auto_headers=("Content-Type",),
        ) as response:
            buffer = await response.read()
            reply = Reply(
                code=response.status,
                headers=CIMultiDict(response.headers),
                buffer=buffer,
                body="" if raw else buffer.decode("utf-8", errors="replace"),
            )

        logger.debug("%s %s -> %d", method, url, reply.code)
        return reply

    async def _make_request(
        self,
        method: str,
        key: str,
        data: Body | None = None,
        raw: bool = False,
        subresource: str | None = None,
        content_type: str | None = None,
        filename: str | None = None,
        content_md5: str | None = None,
    ) -> Reply:
        object_key = self._object_key(key)
        resolved_type = resolve_content_type(
            method, content_type=content_type, filename=filename, key=object_key
        )
        content_md5 = content_md5 or ""
        date = http_date()

        resource = f"{object_key}?{subresource}" if subresource else object_key
        headers = {
            "Date": date,
            "Authorization": self._auth.sign(
                method, content_md5, resolved_type, date, resource
            ),
        }
        if resolved_type:
            headers["Content-Type"] = resolved_type
        if content_md5:
            headers["Content-MD5"] = content_md5

        url = get_object_url(self.bucket_url, object_key, subresource)
        return await self._request(method, url, headers, data=data, raw=raw)
