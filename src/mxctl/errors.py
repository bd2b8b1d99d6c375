"""Error types raised by mxctl operations."""

from __future__ import annotations

from pathlib import Path


class AppError(RuntimeError):
    """Base class for every error surfaced by the context store."""


class NotFoundError(AppError):
    """Raised when a target file or directory is absent or has the wrong type.

    Attributes:
        path: Path that was looked up, when one was computed.
    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class PathTraversalError(AppError):
    """Raised when a key resolves to a path outside the store root.

    Attributes:
        key: Original key supplied by the caller.
    """

    def __init__(self, key: str) -> None:
        super().__init__(f"Path traversal rejected for key '{key}'")
        self.key = key


class StoreIOError(AppError):
    """Raised when the underlying filesystem operation fails."""


class ClipboardError(AppError):
    """Raised when the system clipboard cannot be read or written."""


class ConfigError(AppError):
    """Raised when configuration overrides cannot be parsed."""


class ContentError(AppError):
    """Raised when snippet content cannot be parsed."""
