"""Unified settings for form-demo."""

import importlib.metadata
import tomllib
from pathlib import Path
from typing import ClassVar, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


def read_pyproject(pyproject_path: Path) -> dict:
    """Read pyproject.toml into a dict."""
    if not pyproject_path.is_file():
        return {}
    with pyproject_path.open("rb") as file_handle:
        return tomllib.load(file_handle)


def get_version(project: dict) -> str:
    """Get version from pyproject or fallback to installed package metadata."""
    if version := project.get("project", {}).get("version"):
        return version
    try:
        return importlib.metadata.version("form-demo")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0"


class Settings(BaseSettings):
    """Unified settings for form-demo service."""

    DEBUG: bool = True
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"

    # ClassVar to prevent Pydantic from trying to load from env
    BASE_DIR: ClassVar[Path] = Path(__file__).parent.parent.parent
    PROJECT: ClassVar[dict] = read_pyproject(BASE_DIR / "pyproject.toml")
    API_NAME: ClassVar[str] = PROJECT.get("project", {}).get("name", "form-demo")
    API_VERSION: ClassVar[str] = get_version(PROJECT)

    # Server
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 5000

    # Paths
    STATIC_PATH: ClassVar[Path] = BASE_DIR / "static"
    INDEX_FILE: ClassVar[str] = "index.html"

    # Uploads above this size get a warning in the log
    LARGE_UPLOAD_BYTES: int = 5_000_000

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()  # type: ignore
