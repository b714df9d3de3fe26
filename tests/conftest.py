import collections
import datetime as dt

import pytest
from multidict import CIMultiDict

from oss_asyncio_client.client import OSSClient
from oss_asyncio_client.reply import Reply


class MockClient(OSSClient):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._responses = collections.deque()
        self.requests = []

    async def _request(self, method, url, headers, data=None, raw=False):
        self.requests.append(
            {
                "method": method,
                "url": str(url),
                "headers": headers,
                "data": data,
                "raw": raw,
            }
        )
        if self._responses:
            code, body, response_headers = self._responses.popleft()
            return Reply(
                code=code,
                headers=CIMultiDict(response_headers),
                buffer=body,
                body="" if raw else body.decode("utf-8"),
            )
        raise ValueError("No more responses available in the mock client.")

    def add_response(
        self, response: str | bytes = b"", headers: dict | None = None, code=200
    ):
        body = response.encode() if isinstance(response, str) else response
        self._responses.append((code, body, headers or {}))


@pytest.fixture
def mock_datetime(monkeypatch):
    mock_now = dt.datetime(2024, 1, 1, 0, 0, 0, tzinfo=dt.UTC)

    class MockDatetime:
        @staticmethod
        def now(tz=None):
            return mock_now

    class MockDt:
        datetime = MockDatetime
        UTC = dt.UTC

    monkeypatch.setattr("oss_asyncio_client.auth.dt", MockDt)
    return mock_now


@pytest.fixture
def mock_client():
    return MockClient(
        access_key_id="test-access-key",
        access_key_secret="test-secret-key",
        bucket="test-bucket",
        endpoint="oss-cn-hangzhou.aliyuncs.com",
    )
