DEFAULT_EXTENSION = "bin"

CONTENT_TYPE_EXTENSIONS = {
    "application/pdf": "pdf",
    "image/svg+xml": "svg",
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/gif": "gif",
    "image/bmp": "bmp",
    "image/webp": "webp",
    "image/x-icon": "ico",
    "image/vnd.microsoft.icon": "ico",
    "image/x-ms-bmp": "bmp",
}


def extension_for(content_type: str | None) -> str:
    """Map a declared content-type to a file extension (exact, case-sensitive match)."""
    if content_type is None:
        return DEFAULT_EXTENSION
    return CONTENT_TYPE_EXTENSIONS.get(content_type, DEFAULT_EXTENSION)
