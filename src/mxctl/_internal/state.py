"""Console and configuration shared by the CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

from mxctl.models import MxConfig

CLI_THEME: Final[Theme] = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "green",
    }
)


@dataclass(slots=True)
class CLIState:
    """State shared between CLI commands during a single invocation.

    ``diagnostics`` is the console that receives ``--verbose`` output; it is
    ``None`` when diagnostics are off.
    """

    console: Console
    config: MxConfig
    diagnostics: Console | None = None

    def debug(self, message: str) -> None:
        if self.diagnostics is not None:
            self.diagnostics.log(f"[info]{escape(message)}[/info]")


def build_console(*, timestamps: bool = False) -> Console:
    """Return a themed Rich console writing to stdout.

    Args:
        timestamps: Prefix ``Console.log`` lines with the time of day.
    """
    return Console(
        theme=CLI_THEME,
        highlight=False,
        soft_wrap=True,
        log_path=False,
        log_time=timestamps,
    )


def build_state(console: Console, config: MxConfig, *, verbose: bool = False) -> CLIState:
    """Bundle ``console`` and ``config``, routing diagnostics to the same console when verbose."""
    return CLIState(console=console, config=config, diagnostics=console if verbose else None)
