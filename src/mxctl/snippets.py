"""Snippet indexing, metadata parsing and clipboard copy."""

from __future__ import annotations

import difflib
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

import yaml
from pydantic import ValidationError

from mxctl._internal.clipboard import copy_to_clipboard
from mxctl.config import load_config
from mxctl.errors import ContentError, NotFoundError, StoreIOError
from mxctl.models import CopyOutcome, ListEntry, MxConfig, SnippetMetadata

_FRONTMATTER_BOUNDARY: Final[re.Pattern[str]] = re.compile(r"^---\s*$", re.MULTILINE)
_SNIPPET_SUFFIXES: Final[tuple[str, ...]] = (".md", ".markdown")
_SUGGESTION_LIMIT: Final[int] = 3
_SUGGESTION_CUTOFF: Final[float] = 0.6


@dataclass(frozen=True, slots=True)
class SnippetDocument:
    """Parsed snippet content.

    Attributes:
        key: Path relative to the snippet root, without suffix.
        path: Filesystem path that produced the document.
        metadata: Parsed frontmatter, empty when the file has none.
        body: Markdown body without frontmatter.
    """

    key: str
    path: Path
    metadata: SnippetMetadata
    body: str


def split_frontmatter(raw_text: str) -> tuple[dict[str, Any], str]:
    """Separate optional YAML frontmatter from a markdown document.

    Documents that do not open with ``---`` are returned unchanged with an
    empty metadata mapping.

    Raises:
        ContentError: If a frontmatter block is unterminated or is not a mapping.
    """
    text = raw_text.lstrip("\ufeff")
    opening = _FRONTMATTER_BOUNDARY.match(text)
    if opening is None:
        return {}, text

    closing = _FRONTMATTER_BOUNDARY.search(text, opening.end())
    if closing is None:
        msg = "Frontmatter block is not properly terminated"
        raise ContentError(msg)

    yaml_block = text[opening.end() : closing.start()]
    try:
        metadata = yaml.safe_load(yaml_block) or {}
    except yaml.YAMLError as exc:
        msg = "Unable to parse YAML frontmatter"
        raise ContentError(msg) from exc

    if not isinstance(metadata, dict):
        msg = "YAML frontmatter must deserialize to a mapping"
        raise ContentError(msg)

    body = text[closing.end() :].lstrip("\r\n")
    return metadata, body


def load_snippet(path: Path, snippets_root: Path) -> SnippetDocument:
    """Load one snippet file.

    Raises:
        StoreIOError: If the file cannot be read.
        ContentError: If its frontmatter is malformed.
    """
    try:
        raw_text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Failed to read snippet {path}: {exc}"
        raise StoreIOError(msg) from exc

    try:
        payload, body = split_frontmatter(raw_text)
        metadata = SnippetMetadata(**payload)
    except ContentError as exc:
        msg = f"Invalid snippet {path}: {exc}"
        raise ContentError(msg) from exc
    except (ValidationError, TypeError) as exc:
        msg = f"Invalid metadata in {path}: {exc}"
        raise ContentError(msg) from exc

    return SnippetDocument(key=_snippet_key(path, snippets_root), path=path, metadata=metadata, body=body)


def scan_snippets(snippets_root: Path) -> list[SnippetDocument]:
    """Return every snippet under ``snippets_root`` sorted by key.

    A missing root means no snippets have been written yet.

    Raises:
        NotFoundError: If the root exists but is not a directory.
    """
    if not snippets_root.exists():
        return []
    if not snippets_root.is_dir():
        msg = f"{snippets_root} must be a directory"
        raise NotFoundError(msg, path=snippets_root)

    files = [
        candidate
        for candidate in snippets_root.rglob("*")
        if candidate.is_file() and candidate.suffix.lower() in _SNIPPET_SUFFIXES
    ]
    documents = [load_snippet(path, snippets_root) for path in files]
    return sorted(documents, key=lambda doc: doc.key)


def list_snippets(*, config: MxConfig | None = None) -> list[ListEntry]:
    """Return list entries for all snippets in the configured snippet root.

    Without ``config`` the settings come from :func:`load_config`, so
    ``MX_SNIPPETS_ROOT`` applies to library callers as well as the CLI.
    """
    settings = config or load_config()
    root = settings.snippets_root
    return [
        ListEntry(
            key=document.key,
            relative_path=document.path.relative_to(root).as_posix(),
            title=document.metadata.title,
            description=document.metadata.description,
        )
        for document in scan_snippets(root)
    ]


def find_snippet(documents: list[SnippetDocument], query: str) -> SnippetDocument:
    """Return the snippet matching ``query`` by key, then by unique file stem.

    Raises:
        NotFoundError: If nothing matches or the stem is ambiguous.
    """
    cleaned = query.strip().strip("/")
    for document in documents:
        if document.key == cleaned:
            return document

    stem = cleaned.casefold()
    matches = [document for document in documents if document.path.stem.casefold() == stem]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        candidates = ", ".join(document.key for document in matches)
        msg = f"Snippet '{query}' is ambiguous. Candidates: {candidates}."
        raise NotFoundError(msg)

    keys = [document.key for document in documents]
    suggestions = difflib.get_close_matches(cleaned, keys, n=_SUGGESTION_LIMIT, cutoff=_SUGGESTION_CUTOFF)
    msg = f"Snippet '{query}' was not found."
    if suggestions:
        msg = f"{msg} Did you mean: {', '.join(suggestions)}?"
    raise NotFoundError(msg)


def copy_snippet(query: str, *, config: MxConfig | None = None) -> CopyOutcome:
    """Copy the body of the snippet matching ``query`` to the clipboard.

    Raises:
        NotFoundError: If no snippet matches.
        ClipboardError: If the clipboard cannot be written.
        ConfigError: If ``config`` is omitted and the environment is invalid.
    """
    settings = config or load_config()
    document = find_snippet(scan_snippets(settings.snippets_root), query)
    copy_to_clipboard(document.body)
    return CopyOutcome(key=document.key, path=document.path, characters=len(document.body))


def _snippet_key(path: Path, snippets_root: Path) -> str:
    """Return the snippet key: the relative path without suffix."""
    return path.relative_to(snippets_root).with_suffix("").as_posix()
