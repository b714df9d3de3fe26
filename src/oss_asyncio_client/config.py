import dataclasses

from yarl import URL

from .exceptions import OSSConfigurationError
from .urlparsing import get_bucket_url, is_valid_base_url, is_valid_endpoint

DEFAULT_ENDPOINT = "oss-cn-hangzhou.aliyuncs.com"


@dataclasses.dataclass(frozen=True)
class ClientConfig:
    access_key_id: str
    access_key_secret: str = dataclasses.field(repr=False)
    bucket: str
    endpoint: str = DEFAULT_ENDPOINT
    prefix: str | None = None
    cdn: str | None = None
    secure: bool = False

    def __post_init__(self):
        for name in ("access_key_id", "access_key_secret", "bucket"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise OSSConfigurationError(f"{name} must be a non-empty string")

        if not self.endpoint:
            object.__setattr__(self, "endpoint", DEFAULT_ENDPOINT)
        elif not is_valid_endpoint(self.endpoint):
            raise OSSConfigurationError(
                f"endpoint must be a domain name, got '{self.endpoint}'"
            )

        if self.cdn:
            if not is_valid_base_url(self.cdn):
                raise OSSConfigurationError(
                    f"cdn must be an http(s) URL without a trailing '/', "
                    f"got '{self.cdn}'"
                )
        else:
            scheme = "https" if self.secure else "http"
            object.__setattr__(self, "cdn", f"{scheme}://{self.host}")

    @property
    def host(self) -> str:
        return f"{self.bucket}.{self.endpoint}"

    @property
    def bucket_url(self) -> URL:
        return get_bucket_url(self.endpoint, self.bucket, self.secure)

    def with_prefix(self, prefix: str | None) -> "ClientConfig":
        return dataclasses.replace(self, prefix=prefix)
