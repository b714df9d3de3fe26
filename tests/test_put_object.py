import base64
import hashlib
import hmac

import pytest

DATE = "Mon, 01 Jan 2024 00:00:00 GMT"


def expected_auth(string_to_sign: str) -> str:
    digest = hmac.new(b"test-secret-key", string_to_sign.encode(), hashlib.sha1)
    return "OSS test-access-key:" + base64.b64encode(digest.digest()).decode()


@pytest.mark.asyncio
async def test_put_object_minimal(mock_client, mock_datetime):
    mock_client.add_response(
        "",
        headers={
            "ETag": '"5B3C1A2E053D763E1B002CC607C5A0FE"',
            "x-oss-hash-crc64ecma": "316181249502703490",
            "Content-MD5": "WzwaLgU9dj4bACzGB8Wg/g==",
        },
    )

    reply = await mock_client.put_object("OSSClient-data", b"1700000000000")

    assert len(mock_client.requests) == 1
    request = mock_client.requests[0]
    assert request["method"] == "PUT"
    assert (
        request["url"]
        == "http://test-bucket.oss-cn-hangzhou.aliyuncs.com/OSSClient-data"
    )
    assert request["data"] == b"1700000000000"
    assert request["raw"] is False
    assert request["headers"] == {
        "Date": DATE,
        "Authorization": expected_auth(
            f"PUT\n\n\n{DATE}\n/test-bucket/OSSClient-data"
        ),
    }

    assert reply.code == 200
    assert reply.etag == "5B3C1A2E053D763E1B002CC607C5A0FE"
    assert reply.headers["x-oss-hash-crc64ecma"] == "316181249502703490"
    assert reply.headers["content-md5"] == "WzwaLgU9dj4bACzGB8Wg/g=="


@pytest.mark.asyncio
async def test_put_object_infers_content_type(mock_client, mock_datetime):
    mock_client.add_response("")

    await mock_client.put_object("images/logo.png", b"\x89PNG")

    headers = mock_client.requests[0]["headers"]
    assert headers["Content-Type"] == "image/png"
    assert headers["Authorization"] == expected_auth(
        f"PUT\n\nimage/png\n{DATE}\n/test-bucket/images/logo.png"
    )


@pytest.mark.asyncio
async def test_put_object_filename_and_explicit_type(mock_client, mock_datetime):
    mock_client.add_response("")
    mock_client.add_response("")

    await mock_client.put_object("upload", b"{}", filename="data.json")
    await mock_client.put_object("upload", b"hi", content_type="text/plain")

    assert mock_client.requests[0]["headers"]["Content-Type"] == "application/json"
    assert mock_client.requests[1]["headers"]["Content-Type"] == "text/plain"


@pytest.mark.asyncio
async def test_put_object_content_md5(mock_client, mock_datetime):
    mock_client.add_response("")
    md5 = base64.b64encode(hashlib.md5(b"hello").digest()).decode()

    await mock_client.put_object("hello.txt", b"hello", content_md5=md5)

    headers = mock_client.requests[0]["headers"]
    assert headers["Content-MD5"] == md5
    assert headers["Authorization"] == expected_auth(
        f"PUT\n{md5}\ntext/plain\n{DATE}\n/test-bucket/hello.txt"
    )


@pytest.mark.asyncio
async def test_put_object_prefix_and_escaping(mock_client, mock_datetime):
    mock_client.set_prefix("uploads/")
    mock_client.add_response("")

    await mock_client.put_object("/my notes", b"x")

    request = mock_client.requests[0]
    assert request["url"].endswith("/uploads/my%20notes")
    # the signed resource is not escaped
    assert request["headers"]["Authorization"] == expected_auth(
        f"PUT\n\n\n{DATE}\n/test-bucket/uploads/my notes"
    )


@pytest.mark.asyncio
async def test_put_object_streaming_body(mock_client):
    async def chunks():
        yield b"a"
        yield b"b"

    body = chunks()
    mock_client.add_response("")

    await mock_client.put_object("stream", body)

    assert mock_client.requests[0]["data"] is body


@pytest.mark.asyncio
async def test_put_object_error_is_a_reply(mock_client):
    mock_client.add_response(
        "<Error><Code>SignatureDoesNotMatch</Code><Message>bad</Message></Error>",
        code=403,
    )

    reply = await mock_client.put_object("k", b"x")

    assert reply.code == 403
    assert not reply.ok
    assert "SignatureDoesNotMatch" in reply.body
