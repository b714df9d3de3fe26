import dataclasses
import xml.etree.ElementTree as ET

from multidict import CIMultiDict

from .exceptions import (
    OSSAccessDeniedError,
    OSSClientError,
    OSSError,
    OSSInvalidRequestError,
    OSSNotFoundError,
    OSSServerError,
)


@dataclasses.dataclass
class Reply:
    """Normalized result of one request.

    Non-2xx statuses are returned as replies too, call ``raise_for_status``
    to turn them into exceptions.
    """

    code: int
    headers: CIMultiDict[str] = dataclasses.field(default_factory=CIMultiDict)
    buffer: bytes = b""
    body: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.code < 300

    @property
    def etag(self) -> str:
        return self.headers.get("ETag", "").strip('"')

    def raise_for_status(self) -> None:
        if not self.ok:
            text = self.body or self.buffer.decode("utf-8", errors="replace")
            raise parse_error_response(self.code, text)


def parse_error_response(status: int, response_text: str) -> OSSError:
    try:
        root = ET.fromstring(response_text)
        error_code = root.find("Code")
        message = root.find("Message")

        error_code_text = error_code.text if error_code is not None else "Unknown"
        message_text = message.text if message is not None else "Unknown error"

    except ET.ParseError:
        error_code_text = "Unknown"
        message_text = response_text or "Unknown error"

    if status == 404 or error_code_text in ["NoSuchKey", "NoSuchBucket"]:
        return OSSNotFoundError(
            message_text,
            error_code_text if error_code_text != "Unknown" else "NoSuchKey",
        )
    elif status == 403 or error_code_text in ["AccessDenied", "SignatureDoesNotMatch"]:
        return OSSAccessDeniedError(
            message_text,
            error_code_text if error_code_text != "Unknown" else "AccessDenied",
        )
    elif error_code_text == "InvalidRequest":
        return OSSInvalidRequestError(message_text)
    elif 400 <= status < 500:
        return OSSClientError(message_text, status, error_code_text)
    else:
        return OSSServerError(message_text, status, error_code_text)
