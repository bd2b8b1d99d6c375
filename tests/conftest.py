"""Shared pytest fixtures for mxctl."""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from mxctl.models import MxConfig

from .payloads import MxConfigPayload, SnippetMetadataPayload


@pytest.fixture(autouse=True)
def clear_mx_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep MX_ overrides from the developer shell out of every test."""
    for name in ("MX_SNIPPETS_ROOT", "MX_ROOT_MARKERS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a git-marked project directory and make it the working directory."""
    root = tmp_path / "project"
    (root / ".git").mkdir(parents=True)
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def store_dir(project_root: Path) -> Path:
    """Return the `.mx` directory of the project, created empty."""
    store = project_root / ".mx"
    store.mkdir()
    return store


@pytest.fixture
def snippet_metadata_payload() -> SnippetMetadataPayload:
    """Provide canonical snippet metadata for tests."""
    return {
        "title": "  Commit message  ",
        "description": "Conventional commit template",
    }


@pytest.fixture
def mx_config_payload(tmp_path: Path) -> MxConfigPayload:
    """Provide overrides for the MxConfig model."""
    return {
        "snippets_root": tmp_path / "snippets",
        "root_markers": [" .mx ", ".hg", ""],
        "env_prefix": "ctx",
    }


@pytest.fixture
def snippets_root(tmp_path: Path) -> Path:
    """Create a snippet library with and without frontmatter."""
    root = tmp_path / "snippets"
    git_dir = root / "git"
    review_dir = root / "review"
    git_dir.mkdir(parents=True)
    review_dir.mkdir(parents=True)

    (git_dir / "commit.md").write_text(
        dedent(
            """
            ---
            title: Commit message
            description: Conventional commit template
            ---
            feat: describe the change
            """
        ).lstrip(),
        encoding="utf-8",
    )
    (review_dir / "checklist.md").write_text(
        dedent(
            """
            ---
            title: Review checklist
            ---
            - tests pass
            """
        ).lstrip(),
        encoding="utf-8",
    )
    (root / "plain.md").write_text("Plain snippet body\n", encoding="utf-8")
    (root / "ignored.txt").write_text("not a snippet", encoding="utf-8")
    return root


@pytest.fixture
def mx_config(snippets_root: Path) -> MxConfig:
    """Return a configuration pointing at the sample snippet library."""
    return MxConfig(snippets_root=snippets_root)
