"""Minimal asyncio Aliyun OSS client library."""

__version__ = "0.1.0"

from .client import OSSClient
from .config import ClientConfig
from .exceptions import (
    OSSAccessDeniedError,
    OSSClientError,
    OSSConfigurationError,
    OSSError,
    OSSInvalidRequestError,
    OSSNotFoundError,
    OSSServerError,
)
from .reply import Reply

__all__ = [
    "OSSClient",
    "ClientConfig",
    "Reply",
    "OSSError",
    "OSSConfigurationError",
    "OSSClientError",
    "OSSServerError",
    "OSSNotFoundError",
    "OSSAccessDeniedError",
    "OSSInvalidRequestError",
]
