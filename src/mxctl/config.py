"""Configuration loading and project root discovery for mxctl."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from mxctl.errors import ConfigError, NotFoundError
from mxctl.models import DEFAULT_ROOT_MARKERS, MxConfig

STORE_DIRNAME: Final[str] = ".mx"

EnvMapping = Mapping[str, str]


def find_project_root(
    start_path: Path | None = None,
    *,
    markers: Iterable[str] = DEFAULT_ROOT_MARKERS,
) -> Path:
    """Return the nearest ancestor that hosts, or should host, the store.

    The walk starts at ``start_path`` (the working directory by default) and
    stops at the first directory containing one of ``markers``. When no
    ancestor carries a marker the starting directory is returned so that
    ``touch`` can create the store there.

    Raises:
        NotFoundError: If the working directory no longer exists.
    """
    try:
        path = (start_path or Path.cwd()).resolve()
    except FileNotFoundError as exc:
        msg = "Unable to determine the current working directory"
        raise NotFoundError(msg) from exc
    if path.is_file():
        path = path.parent

    marker_names = tuple(markers)
    for candidate in (path, *path.parents):
        if any((candidate / marker).exists() for marker in marker_names):
            return candidate
    return path


def get_store_root(project_root: Path) -> Path:
    """Return the store directory located directly under the project root."""
    return project_root / STORE_DIRNAME


def locate_store_root(config: MxConfig | None = None) -> Path:
    """Discover the project root from the working directory and return its store root.

    Without ``config`` the root markers come from :func:`load_config`.
    """
    settings = config or load_config()
    return get_store_root(find_project_root(markers=settings.root_markers))


def load_config(env: EnvMapping | None = None) -> MxConfig:
    """Build an MxConfig from defaults and environment overrides.

    Args:
        env: Environment mapping; defaults to ``os.environ``.

    Returns:
        Validated configuration.

    Raises:
        ConfigError: If an override fails validation.
    """
    env_mapping = os.environ if env is None else env
    overrides = _extract_env_overrides(env_mapping, MxConfig().env_prefix)
    try:
        return MxConfig(**overrides)
    except ValidationError as exc:
        msg = f"Invalid mx configuration: {exc}"
        raise ConfigError(msg) from exc


def _extract_env_overrides(env: EnvMapping, prefix: str) -> dict[str, Any]:
    """Return configuration overrides sourced from environment variables."""
    upper_env = {key.upper(): value for key, value in env.items()}

    overrides: dict[str, Any] = {}
    snippets_key = f"{prefix}SNIPPETS_ROOT"
    if snippets_key in upper_env and upper_env[snippets_key].strip():
        overrides["snippets_root"] = upper_env[snippets_key].strip()

    markers_key = f"{prefix}ROOT_MARKERS"
    if markers_key in upper_env:
        overrides["root_markers"] = _parse_env_list(upper_env[markers_key])

    return overrides


def _parse_env_list(raw_value: str) -> list[str]:
    """Parse a comma-separated string into a normalized list."""
    values = [part.strip() for part in raw_value.split(",")]
    return [value for value in values if value]
