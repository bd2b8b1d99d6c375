"""Rich console rendering utilities."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mxctl.models import ListEntry


def render_snippet_table(console: Console, entries: Sequence[ListEntry], snippets_root: Path) -> None:
    """Render a Rich table summarizing snippets for the list command.

    Args:
        console: Rich console for output.
        entries: Snippet entries to display.
        snippets_root: Directory the snippets were read from.
    """
    table = Table(title="Snippets", header_style="bold", show_lines=False, box=box.MINIMAL_DOUBLE_HEAD)
    table.add_column("Key", style="info")
    table.add_column("Title", style="text")
    table.add_column("Description")
    table.add_column("Path")

    for entry in entries:
        table.add_row(
            escape(entry.key),
            escape(entry.title or "-"),
            escape(entry.description or "-"),
            escape(entry.relative_path),
        )

    console.print(table)
    noun = "snippet" if len(entries) == 1 else "snippets"
    console.print(f"[info]{len(entries)} {noun} in {escape(str(snippets_root))}.[/info]")
