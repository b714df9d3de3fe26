import mimetypes

WRITE_METHODS = frozenset({"PUT", "POST"})


def guess_content_type(name: str | None) -> str | None:
    if not name:
        return None
    content_type, _ = mimetypes.guess_type(name, strict=False)
    return content_type


def resolve_content_type(
    method: str,
    content_type: str | None = None,
    filename: str | None = None,
    key: str = "",
) -> str:
    """Content type to send and sign for a request.

    Only writes carry one. The extension of ``filename`` wins, then the
    extension of the object key, then the explicit ``content_type``.
    """
    if method.upper() not in WRITE_METHODS:
        return ""
    return (
        guess_content_type(filename)
        or guess_content_type(key)
        or content_type
        or ""
    )
