"""Public exports for the mxctl package."""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from pathlib import Path

from .config import (
    STORE_DIRNAME,
    find_project_root,
    get_store_root,
    load_config,
    locate_store_root,
)
from .errors import (
    AppError,
    ClipboardError,
    ConfigError,
    ContentError,
    NotFoundError,
    PathTraversalError,
    StoreIOError,
)
from .models import CleanOutcome, CopyOutcome, ListEntry, MxConfig, SnippetMetadata, TouchOutcome
from .resolver import ALIASES, resolve_path, validate_path
from .snippets import copy_snippet, list_snippets
from .store import cat_context, clean_context, touch_context


def _load_local_version() -> str:
    """Return the package version declared in pyproject.toml when metadata is unavailable."""
    pyproject_path = Path(__file__).resolve().parents[2] / "pyproject.toml"
    try:
        raw_text = pyproject_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return "0.0.0"

    try:
        data = tomllib.loads(raw_text)
    except tomllib.TOMLDecodeError:
        return "0.0.0"

    project_section = data.get("project")
    if isinstance(project_section, dict):
        version_value = project_section.get("version")
        if isinstance(version_value, str) and version_value.strip():
            return version_value.strip()
    return "0.0.0"


try:
    __version__ = pkg_version("mxctl")
except PackageNotFoundError:
    __version__ = _load_local_version()

__all__ = [
    "ALIASES",
    "STORE_DIRNAME",
    "AppError",
    "CleanOutcome",
    "ClipboardError",
    "ConfigError",
    "ContentError",
    "CopyOutcome",
    "ListEntry",
    "MxConfig",
    "NotFoundError",
    "PathTraversalError",
    "SnippetMetadata",
    "StoreIOError",
    "TouchOutcome",
    "__version__",
    "cat_context",
    "clean_context",
    "copy_snippet",
    "find_project_root",
    "get_store_root",
    "list_snippets",
    "load_config",
    "locate_store_root",
    "resolve_path",
    "touch_context",
    "validate_path",
]
