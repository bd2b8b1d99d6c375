"""Tests for key resolution and traversal validation."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

import pytest
from pytest_mock import MockerFixture

from mxctl.errors import PathTraversalError
from mxctl.resolver import ALIASES, resolve_path, validate_path


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("tk", "tasks.md"),
        ("rq", "requirements.md"),
        ("pdt", "pending/tasks.md"),
        ("tk3", "tasks-3.md"),
        ("rq12", "requirements-12.md"),
        ("pdt2", "pending/tasks-2.md"),
        ("pd-tk", "pending/tasks.md"),
        ("pd-rq2", "pending/requirements-2.md"),
        ("docs/spec", "docs/spec.md"),
        ("somedir.md", "somedir.md"),
        ("notes.txt", "notes.txt"),
    ],
)
def test_resolve_path_applies_rules_in_order(key: str, expected: str) -> None:
    """Exact, numbered, pending and fallback rules should map keys to paths."""
    assert resolve_path(key) == PurePosixPath(expected)


def test_resolve_path_is_deterministic_and_skips_filesystem(mocker: MockerFixture) -> None:
    """Every alias should resolve identically twice without any filesystem access."""
    exists = mocker.patch.object(Path, "exists", side_effect=AssertionError("filesystem touched"))
    stat = mocker.patch.object(Path, "stat", side_effect=AssertionError("filesystem touched"))

    for key, path in ALIASES.items():
        first = resolve_path(key)
        assert first == resolve_path(key)
        assert first == path
        assert first.suffix == ".md"

    exists.assert_not_called()
    stat.assert_not_called()


def test_resolve_path_matching_is_case_sensitive() -> None:
    """Upper-case aliases are not aliases and fall through to the default rule."""
    assert resolve_path("TK") == PurePosixPath("TK.md")
    assert resolve_path("Pd-tk") == PurePosixPath("Pd-tk.md")


def test_resolve_path_requires_positive_numbers() -> None:
    """Zero and zero-padded numbers are not part of the numbered family."""
    assert resolve_path("tk0") == PurePosixPath("tk0.md")
    assert resolve_path("tk01") == PurePosixPath("tk01.md")


def test_resolve_path_unknown_pending_base_falls_back() -> None:
    """`pd-` in front of an unknown key is treated as a plain filename."""
    assert resolve_path("pd-unknown") == PurePosixPath("pd-unknown.md")


def test_resolve_path_empty_key_resolves_to_bare_extension() -> None:
    """The empty key is degenerate but still resolves."""
    assert str(resolve_path("")) == ".md"


@pytest.mark.parametrize(
    "key",
    ["../etc/passwd", "a/../../b", "./../x", "..\\windows\\system32", "a/b/../../../c"],
)
def test_validate_path_rejects_escaping_keys(key: str) -> None:
    """Keys whose normalized path leaves the store must be rejected."""
    with pytest.raises(PathTraversalError) as excinfo:
        validate_path(key, resolve_path(key))

    assert excinfo.value.key == key
    assert key in str(excinfo.value)


@pytest.mark.parametrize("resolved", ["/etc/passwd.md", "C:/Windows/x.md", "\\\\server\\share\\x.md"])
def test_validate_path_rejects_absolute_paths(resolved: str) -> None:
    """Absolute POSIX and Windows paths are never valid store paths."""
    with pytest.raises(PathTraversalError):
        validate_path("key", resolved)


@pytest.mark.parametrize("key", ["tk", "pdt", "a/b/c", "a/../b", "./notes", "deep/./er/x"])
def test_validate_path_accepts_contained_paths(key: str) -> None:
    """Paths that stay inside the store after normalization are accepted."""
    validate_path(key, resolve_path(key))


def test_validate_path_rejects_store_root_itself() -> None:
    """A path that normalizes to the root does not name a file."""
    with pytest.raises(PathTraversalError):
        validate_path("a/..", "a/..")


@pytest.mark.parametrize("key", ["a\x00b", "notes/\x00", "tk\x00"])
def test_validate_path_rejects_nul_bytes(key: str) -> None:
    """Keys with an embedded NUL cannot name a file and are rejected."""
    with pytest.raises(PathTraversalError) as exc_info:
        validate_path(key, resolve_path(key))

    assert exc_info.value.key == key


def test_validate_path_ignores_existing_targets(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Rejection does not depend on whether the escaping target exists."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "outside.md").write_text("secret", encoding="utf-8")

    with pytest.raises(PathTraversalError):
        validate_path("../outside", resolve_path("../outside"))
