"""Key-to-path resolution and traversal checks for the context store.

Keys are resolved by a short list of rules tried in order; the first rule that
returns a path wins:

1. exact alias (``tk`` -> ``tasks.md``)
2. numbered alias (``tk3`` -> ``tasks-3.md``)
3. pending prefix (``pd-tk`` -> ``pending/tasks.md``)
4. fallback: the key itself, with ``.md`` appended when it has no suffix

Resolution never touches the filesystem. ``validate_path`` is the only gate
that decides whether a resolved path may be used.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from types import MappingProxyType
from typing import Final

from mxctl.errors import PathTraversalError

ALIASES: Final[Mapping[str, PurePosixPath]] = MappingProxyType(
    {
        "tk": PurePosixPath("tasks.md"),
        "rq": PurePosixPath("requirements.md"),
        "ds": PurePosixPath("design.md"),
        "nt": PurePosixPath("notes.md"),
        "st": PurePosixPath("status.md"),
        "rv": PurePosixPath("review.md"),
        "pdt": PurePosixPath("pending/tasks.md"),
        "pdr": PurePosixPath("pending/requirements.md"),
    }
)

DEFAULT_SUFFIX: Final[str] = ".md"
PENDING_PREFIX: Final[str] = "pd-"
PENDING_DIRNAME: Final[str] = "pending"

_NUMBERED_PATTERN: Final[re.Pattern[str]] = re.compile(r"(?P<base>[A-Za-z][A-Za-z_-]*?)(?P<number>[1-9][0-9]*)")
_SEGMENT_SEPARATORS: Final[re.Pattern[str]] = re.compile(r"[\\/]+")

Rule = Callable[[str], PurePosixPath | None]


def resolve_path(key: str) -> PurePosixPath:
    """Return the store-relative path for ``key``.

    Args:
        key: Alias or relative path supplied by the user.

    Returns:
        Relative path inside the store. Never fails.
    """
    for rule in _RULES:
        resolved = rule(key)
        if resolved is not None:
            return resolved
    return _resolve_fallback(key)


def validate_path(original_key: str, resolved: PurePath | str) -> None:
    """Reject resolved paths that would leave the store root.

    The check is purely lexical: ``.`` segments are ignored, ``..`` segments
    pop one level, and both ``/`` and ``\\`` count as separators.

    Args:
        original_key: Key supplied by the user, kept for diagnostics.
        resolved: Output of :func:`resolve_path`.

    Raises:
        PathTraversalError: If the path is absolute, escapes the root, or
            contains a NUL byte.
    """
    text = str(resolved)
    if "\x00" in text:
        raise PathTraversalError(original_key)
    if PurePosixPath(text).is_absolute() or PureWindowsPath(text).anchor:
        raise PathTraversalError(original_key)

    depth = 0
    for segment in _SEGMENT_SEPARATORS.split(text):
        if segment in ("", "."):
            continue
        if segment == "..":
            depth -= 1
            if depth < 0:
                raise PathTraversalError(original_key)
            continue
        depth += 1

    # a path that normalizes to the root names the store itself, not a file
    if depth == 0:
        raise PathTraversalError(original_key)


def _resolve_exact(key: str) -> PurePosixPath | None:
    return ALIASES.get(key)


def _resolve_numbered(key: str) -> PurePosixPath | None:
    match = _NUMBERED_PATTERN.fullmatch(key)
    if match is None:
        return None
    base = ALIASES.get(match.group("base"))
    if base is None:
        return None
    return base.with_name(f"{base.stem}-{match.group('number')}{base.suffix}")


def _resolve_pending(key: str) -> PurePosixPath | None:
    if not key.startswith(PENDING_PREFIX):
        return None
    remainder = key.removeprefix(PENDING_PREFIX)
    base = _resolve_exact(remainder) or _resolve_numbered(remainder)
    if base is None:
        return None
    return base.parent / PENDING_DIRNAME / base.name


def _resolve_fallback(key: str) -> PurePosixPath:
    if PurePosixPath(key).suffix:
        return PurePosixPath(key)
    return PurePosixPath(f"{key}{DEFAULT_SUFFIX}")


_RULES: Final[tuple[Rule, ...]] = (_resolve_exact, _resolve_numbered, _resolve_pending)
