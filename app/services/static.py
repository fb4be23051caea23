"""Serve the pre-built form page and its sibling assets from one directory."""

import mimetypes
from pathlib import Path
from urllib.parse import unquote

from robyn import Response, status_codes

from app.core.logger import LogIcon, logger


def get_content_type(file_path: Path) -> str:
    content_type, _encoding = mimetypes.guess_type(file_path.name)
    if content_type and content_type.startswith("text/"):
        return f"{content_type}; charset=utf-8"
    return content_type or "application/octet-stream"


def resolve_static_file(static_root: Path, relative_path: str) -> Path | None:
    """Resolve a safe static file path or return None for traversal attempts."""
    root = static_root.resolve()
    candidate = (root / unquote(relative_path).lstrip("/")).resolve()

    try:
        candidate.relative_to(root)
    except ValueError:
        return None

    return candidate


def serve_static(static_root: Path, relative_path: str) -> Response:
    static_path = resolve_static_file(static_root, relative_path)
    if static_path is None:
        logger.warning("Static path escapes root", icon=LogIcon.FORBIDDEN, path=relative_path)
        return Response(
            status_code=status_codes.HTTP_403_FORBIDDEN,
            headers={"content-type": "text/plain; charset=utf-8"},
            description="Forbidden",
        )

    if not static_path.is_file():
        logger.debug("Static file not found", icon=LogIcon.FILE, path=relative_path)
        return Response(
            status_code=status_codes.HTTP_404_NOT_FOUND,
            headers={"content-type": "text/plain; charset=utf-8"},
            description="Not Found",
        )

    return Response(
        status_code=status_codes.HTTP_200_OK,
        headers={"content-type": get_content_type(static_path)},
        description=static_path.read_bytes(),
    )
