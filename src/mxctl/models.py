"""Core data models for the mxctl CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_ROOT_MARKERS: tuple[str, ...] = (".mx", ".git")


def _normalize_optional_text(value: Any) -> str | None:
    """Trim optional text values, returning None when blank."""
    if value is None:
        return None
    normalized = str(value).strip()
    if not normalized:
        return None
    return normalized


class SnippetMetadata(BaseModel):
    """Metadata parsed from the optional frontmatter of a snippet file."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str | None = None
    description: str | None = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def normalize_text(cls, value: Any) -> str | None:
        """Trim optional strings, returning None when blank."""
        return _normalize_optional_text(value)


class MxConfig(BaseModel):
    """Tool configuration derived from environment variables or defaults."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    snippets_root: Path = Field(default_factory=lambda: Path.home() / ".config" / "mx" / "snippets")
    root_markers: tuple[str, ...] = DEFAULT_ROOT_MARKERS
    env_prefix: str = Field(default="MX_")

    @field_validator("snippets_root", mode="before")
    @classmethod
    def expand_snippets_root(cls, value: Any) -> Path:
        """Expand user paths while keeping lazy resolution."""
        if isinstance(value, Path):
            return value.expanduser()
        return Path(str(value)).expanduser()

    @field_validator("root_markers", mode="before")
    @classmethod
    def normalize_markers(cls, values: Any) -> tuple[str, ...]:
        """Trim marker names and reject empty marker lists."""
        if isinstance(values, str) or not isinstance(values, (list, tuple)):
            msg = "Expected a list of marker names"
            raise ValueError(msg)
        markers = tuple(str(value).strip() for value in values if str(value).strip())
        if not markers:
            msg = "root_markers cannot be empty"
            raise ValueError(msg)
        return markers

    @field_validator("env_prefix")
    @classmethod
    def normalize_prefix(cls, value: str) -> str:
        """Ensure environment prefixes are uppercase and suffixed with an underscore."""
        normalized = value.strip().upper()
        if not normalized:
            msg = "env_prefix cannot be blank"
            raise ValueError(msg)
        if not normalized.endswith("_"):
            normalized = f"{normalized}_"
        return normalized


@dataclass(frozen=True, slots=True)
class TouchOutcome:
    """Result of creating or overwriting a context file.

    Attributes:
        key: Key supplied by the caller.
        path: Absolute path of the context file.
        existed: Whether the file was present before the call.
        overwritten: Whether an existing file was truncated.
    """

    key: str
    path: Path
    existed: bool
    overwritten: bool

    @property
    def created(self) -> bool:
        """Return True when the call created a new file."""
        return not self.existed


@dataclass(frozen=True, slots=True)
class CleanOutcome:
    """Result of removing a context file or the whole store."""

    message: str


@dataclass(frozen=True, slots=True)
class ListEntry:
    """Snippet summary shown by the list command.

    Attributes:
        key: Snippet key, the relative path without suffix.
        relative_path: Path relative to the snippet root.
        title: Optional title from frontmatter.
        description: Optional description from frontmatter.
    """

    key: str
    relative_path: str
    title: str | None = None
    description: str | None = None


@dataclass(frozen=True, slots=True)
class CopyOutcome:
    """Result of copying a snippet to the clipboard."""

    key: str
    path: Path
    characters: int
