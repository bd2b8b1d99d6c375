"""Read, create and delete context files inside the project store."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from mxctl._internal.clipboard import paste_from_clipboard
from mxctl.config import STORE_DIRNAME, locate_store_root
from mxctl.errors import NotFoundError, StoreIOError
from mxctl.models import CleanOutcome, MxConfig, TouchOutcome
from mxctl.resolver import resolve_path, validate_path


def resolve_context_path(key: str, *, config: MxConfig | None = None) -> tuple[Path, Path]:
    """Return the store root and the validated absolute path for ``key``.

    Raises:
        PathTraversalError: If the key resolves outside the store.
    """
    store_root = locate_store_root(config)
    relative_path = resolve_path(key)
    validate_path(key, relative_path)
    return store_root, Path(os.path.normpath(store_root / relative_path))


def cat_context(key: str, *, config: MxConfig | None = None) -> str:
    """Return the contents of the context file addressed by ``key``.

    Args:
        key: Alias or store-relative path.
        config: Optional configuration overrides.

    Returns:
        Full file contents decoded as UTF-8.

    Raises:
        PathTraversalError: If the key escapes the store.
        NotFoundError: If the file is missing or is not a regular file.
        StoreIOError: If the file cannot be read or decoded.
    """
    store_root, full_path = resolve_context_path(key, config=config)
    relative_path = full_path.relative_to(store_root)

    if not full_path.exists():
        msg = f"Context file not found: {relative_path}"
        raise NotFoundError(msg, path=full_path)
    if not full_path.is_file():
        msg = f"Path is not a file: {relative_path}"
        raise NotFoundError(msg, path=full_path)

    try:
        return full_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Failed to read {relative_path}: {exc}"
        raise StoreIOError(msg) from exc


def touch_context(
    key: str,
    *,
    paste: bool = False,
    force: bool = False,
    config: MxConfig | None = None,
) -> TouchOutcome:
    """Create the context file for ``key``, or truncate it when ``force`` is set.

    An existing file is left untouched unless ``force`` is true; that case is
    reported through the outcome rather than raised. With ``paste`` the
    clipboard text is written into a file that was just created or truncated.

    Raises:
        PathTraversalError: If the key escapes the store.
        NotFoundError: If the target exists but is not a regular file.
        StoreIOError: If the file cannot be created or written.
        ClipboardError: If ``paste`` is set and the clipboard cannot be read.
    """
    _, full_path = resolve_context_path(key, config=config)
    existed = full_path.exists()
    if existed and not full_path.is_file():
        msg = f"Path is not a file: {full_path}"
        raise NotFoundError(msg, path=full_path)

    if existed and not force:
        return TouchOutcome(key=key, path=full_path, existed=True, overwritten=False)

    # clipboard first; a failed paste must leave an existing file untouched
    content = paste_from_clipboard() if paste else ""

    try:
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(content, encoding="utf-8")
    except (OSError, ValueError) as exc:
        msg = f"Failed to write {full_path}: {exc}"
        raise StoreIOError(msg) from exc

    return TouchOutcome(key=key, path=full_path, existed=existed, overwritten=existed)


def clean_context(key: str | None = None, *, config: MxConfig | None = None) -> CleanOutcome:
    """Delete one context file, or the whole store when no key is given.

    Deleting a file also removes ancestor directories that became empty, up
    to but never including the store root.

    Raises:
        PathTraversalError: If the key escapes the store.
        NotFoundError: If the target file does not exist.
        StoreIOError: If deletion fails.
    """
    if key is None:
        store_root = locate_store_root(config)
        if not store_root.exists():
            return CleanOutcome(message=f"{STORE_DIRNAME} directory not found")
        try:
            shutil.rmtree(store_root)
        except OSError as exc:
            msg = f"Failed to remove {store_root}: {exc}"
            raise StoreIOError(msg) from exc
        return CleanOutcome(message=f"Removed {STORE_DIRNAME} directory")

    store_root, target_path = resolve_context_path(key, config=config)
    if not target_path.exists():
        msg = f"File not found: {target_path}"
        raise NotFoundError(msg, path=target_path)
    if not target_path.is_file():
        msg = f"Path is not a file: {target_path}"
        raise NotFoundError(msg, path=target_path)

    try:
        target_path.unlink()
    except OSError as exc:
        msg = f"Failed to remove {target_path}: {exc}"
        raise StoreIOError(msg) from exc

    prune_empty_parents(target_path, store_root)
    return CleanOutcome(message=f"Removed {target_path}")


def prune_empty_parents(path: Path, store_root: Path) -> list[Path]:
    """Remove empty ancestors of ``path`` that lie strictly inside ``store_root``.

    Stops at the first directory that cannot be removed; a non-empty
    directory is the normal way for the walk to end.

    Returns:
        Directories that were removed, deepest first.
    """
    removed: list[Path] = []
    parent = path.parent
    while parent != store_root and parent.is_relative_to(store_root):
        try:
            parent.rmdir()
        except OSError:
            break
        removed.append(parent)
        parent = parent.parent
    return removed
