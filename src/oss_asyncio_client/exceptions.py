class OSSError(Exception):
    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code

    def __str__(self) -> str:
        if self.status_code and self.error_code:
            return f"{self.error_code} ({self.status_code}): {self.message}"
        elif self.status_code:
            return f"HTTP {self.status_code}: {self.message}"
        return self.message


class OSSConfigurationError(OSSError, ValueError):
    pass


class OSSClientError(OSSError):
    pass


class OSSServerError(OSSError):
    pass


class OSSNotFoundError(OSSClientError):
    def __init__(
        self,
        message: str = "The specified key does not exist.",
        error_code: str = "NoSuchKey",
    ):
        super().__init__(message, status_code=404, error_code=error_code)


class OSSAccessDeniedError(OSSClientError):
    def __init__(
        self,
        message: str = "You have no right to access this object.",
        error_code: str = "AccessDenied",
    ):
        super().__init__(message, status_code=403, error_code=error_code)


class OSSInvalidRequestError(OSSClientError):
    def __init__(self, message: str = "The request is not valid."):
        super().__init__(message, status_code=400, error_code="InvalidRequest")
