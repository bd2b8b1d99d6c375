"""Typer CLI application for mxctl."""

from __future__ import annotations

from typing import Final

import typer
from rich.markup import escape

from mxctl import (
    AppError,
    ClipboardError,
    NotFoundError,
    PathTraversalError,
    __version__,
    cat_context,
    clean_context,
    copy_snippet,
    list_snippets,
    load_config,
    resolve_path,
    touch_context,
)
from mxctl._internal.output.renderers import render_snippet_table
from mxctl._internal.state import CLIState, build_console, build_state
from mxctl.models import MxConfig

_EXIT_CODES: Final[dict[type[AppError], int]] = {
    NotFoundError: 2,
    PathTraversalError: 3,
    ClipboardError: 4,
}

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    pretty_exceptions_enable=False,
    help="Manage project-local context notes addressed by short keys.",
)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose console output."),
) -> None:
    """Parse global options and configure shared state.

    Args:
        ctx: Typer context that stores shared CLI state.
        verbose: Whether to enable verbose console logging.
    """
    console = build_console(timestamps=verbose)
    try:
        config = load_config()
    except AppError as exc:
        console.print(f"[error]Error:[/error] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    ctx.obj = build_state(console, config, verbose=verbose)


@app.command()
def version(ctx: typer.Context) -> None:
    """Display the installed mxctl version."""
    state = _ensure_state(ctx)
    state.console.print(f"[success]mxctl {__version__}[/success]")


@app.command()
def cat(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Alias (tk, rq, pdt, tk2, pd-rq) or store-relative path."),
) -> None:
    """Print the contents of a context file."""
    state = _ensure_state(ctx)
    state.debug(f"Resolved '{key}' to {resolve_path(key)}")
    try:
        content = cat_context(key, config=state.config)
    except AppError as exc:
        _abort(state, exc)
        return
    state.console.out(content, end="", highlight=False)


@app.command()
def touch(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Alias or store-relative path to create."),
    paste: bool = typer.Option(False, "--paste", "-p", help="Fill the new file with the clipboard contents."),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite the file if it already exists."),
) -> None:
    """Create a context file, or truncate it with --force.

    Args:
        ctx: Typer context for the current invocation.
        key: Key naming the context file.
        paste: Whether to write clipboard text into the created file.
        force: Whether an existing file is overwritten.
    """
    state = _ensure_state(ctx)
    state.debug(f"Resolved '{key}' to {resolve_path(key)}")
    try:
        outcome = touch_context(key, paste=paste, force=force, config=state.config)
    except AppError as exc:
        _abort(state, exc)
        return

    if outcome.created:
        state.console.print(f"[success]Created {escape(str(outcome.path))}[/success]")
    elif outcome.overwritten:
        state.console.print(f"[success]Overwrote {escape(str(outcome.path))}[/success]")
    else:
        state.console.print(f"[warning]{escape(str(outcome.path))} already exists; use --force to overwrite.[/warning]")
        return

    if paste:
        state.console.print("[info]Pasted clipboard contents.[/info]")


@app.command()
def clean(
    ctx: typer.Context,
    key: str | None = typer.Argument(None, help="File to delete. Omit to remove the whole store."),
) -> None:
    """Delete a context file and its empty parents, or the whole store."""
    state = _ensure_state(ctx)
    try:
        outcome = clean_context(key, config=state.config)
    except AppError as exc:
        _abort(state, exc)
        return
    state.console.print(f"[success]{escape(outcome.message)}[/success]")


@app.command("list")
def list_command(ctx: typer.Context) -> None:
    """Render a table of available snippets."""
    state = _ensure_state(ctx)
    snippets_root = state.config.snippets_root
    state.debug(f"Scanning snippets under {snippets_root}")
    try:
        entries = list_snippets(config=state.config)
    except AppError as exc:
        _abort(state, exc)
        return

    if not entries:
        state.console.print(f"[warning]No snippets found under {snippets_root}.[/warning]")
        return
    render_snippet_table(state.console, entries, snippets_root)


@app.command()
def copy(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Snippet key or file stem."),
) -> None:
    """Copy a snippet body to the clipboard."""
    state = _ensure_state(ctx)
    try:
        outcome = copy_snippet(query, config=state.config)
    except AppError as exc:
        _abort(state, exc)
        return
    state.console.print(f"[success]Copied snippet '{outcome.key}' ({outcome.characters} characters).[/success]")


def _abort(state: CLIState, error: AppError) -> None:
    """Print a styled error message and exit with the code mapped to the error kind.

    Args:
        state: CLI state.
        error: Error raised by a library operation.
    """
    exit_code = _EXIT_CODES.get(type(error), 1)
    state.console.print(f"[error]Error:[/error] {escape(str(error))}")
    raise typer.Exit(code=exit_code)


def _ensure_state(ctx: typer.Context) -> CLIState:
    """Return the CLI state, creating a minimal default if the callback was bypassed.

    Args:
        ctx: Typer context.

    Returns:
        CLIState instance.
    """
    state = ctx.obj
    if isinstance(state, CLIState):
        return state
    fallback_state = build_state(build_console(), MxConfig())
    ctx.obj = fallback_state
    return fallback_state
