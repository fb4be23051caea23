"""Static directory lifespan event."""

from pathlib import Path

from app.core.lifespan import BaseEvent
from app.core.logger import LogIcon, logger
from app.core.settings import settings as st


class StaticDirectoryError(Exception):
    """Raised when the static directory cannot be served."""


def check_static_directory(path: Path, index_file: str) -> Path:
    """Resolve the static root and make sure the form page is there."""
    root = path.resolve()
    if not root.is_dir():
        raise StaticDirectoryError(f"Static directory not found: {root}")
    if not (root / index_file).is_file():
        raise StaticDirectoryError(f"Static directory has no {index_file}: {root}")
    return root


class StaticDirectoryEvent(BaseEvent[Path]):
    """Resolves the static root once at startup."""

    name = "static_root"

    async def startup(self) -> Path:
        root = check_static_directory(st.STATIC_PATH, st.INDEX_FILE)
        file_count = sum(1 for item in root.rglob("*") if item.is_file())
        logger.info("Serving static files", icon=LogIcon.FILE, root=str(root), files=file_count)
        return root
