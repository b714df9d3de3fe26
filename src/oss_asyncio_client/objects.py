from collections.abc import Awaitable, Callable

from .auth import expires_at
from .base import Body, _OSSClientBase
from .reply import Reply
from .urlparsing import quote_key

Fetcher = Callable[[str], Awaitable[bytes]]


class _ObjectOperations(_OSSClientBase):
    async def put_object(
        self,
        key: str,
        data: Body,
        content_type: str | None = None,
        filename: str | None = None,
        content_md5: str | None = None,
    ) -> Reply:
        """Upload an object.

        The Content-Type comes from the extension of ``filename`` or the key,
        ``content_type`` is only used when neither has a known extension.
        """
        return await self._make_request(
            "PUT",
            key,
            data=data,
            content_type=content_type,
            filename=filename,
            content_md5=content_md5,
        )

    async def get_object(self, key: str) -> Reply:
        # binary payloads, only reply.buffer is filled
        return await self._make_request("GET", key, raw=True)

    async def delete_object(self, key: str) -> Reply:
        return await self._make_request("DELETE", key)

    async def head_object(self, key: str) -> Reply:
        return await self._make_request("HEAD", key)

    async def object_meta(self, key: str) -> Reply:
        """Get object metadata (ETag, size, Last-Modified) without the body."""
        return await self._make_request("GET", key, subresource="objectMeta")

    def get_sign_url(self, key: str, ttl: int = 60) -> str:
        object_key = self._object_key(key)
        expires = expires_at(ttl)
        query = "&".join(
            [
                f"OSSAccessKeyId={quote_key(self._config.access_key_id)}",
                f"Signature={self._auth.sign_url(object_key, expires)}",
                f"Expires={expires}",
            ]
        )
        return f"{self._config.cdn}/{quote_key(object_key)}?{query}"

    async def _fetch_url(self, url: str) -> bytes:
        await self._ensure_session()
        async with self._session.get(url, raise_for_status=True) as response:
            return await response.read()

    async def put_object_with_url(
        self,
        key: str,
        source_url: str,
        fetch: Fetcher | None = None,
    ) -> str:
        """Copy the content of ``source_url`` into ``key``.

        Returns a signed GET URL of the stored object. ``fetch`` downloads the
        source, it defaults to a plain GET through the client's session.
        """
        fetch = fetch or self._fetch_url
        data = await fetch(source_url)
        reply = await self.put_object(key, data)
        reply.raise_for_status()
        return self.get_sign_url(key)
