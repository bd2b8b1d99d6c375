"""Clipboard integration utilities."""

from __future__ import annotations

import shutil
import subprocess
import sys

import pyperclip

from mxctl.errors import ClipboardError

_LINUX_COPY_COMMANDS: tuple[list[str], ...] = (["xclip", "-selection", "clipboard"], ["wl-copy"])
_LINUX_PASTE_COMMANDS: tuple[list[str], ...] = (["xclip", "-selection", "clipboard", "-o"], ["wl-paste", "--no-newline"])


def copy_to_clipboard(content: str) -> None:
    """Copy the provided text to the system clipboard.

    Args:
        content: Text to copy to clipboard.

    Raises:
        ClipboardError: If clipboard integration is unavailable or fails.
    """
    try:
        pyperclip.copy(content)
        return
    except pyperclip.PyperclipException:
        pass  # pyperclip found no backend; try the platform tools directly

    platform = sys.platform
    if platform == "darwin":
        _run_clipboard_command(["pbcopy"], content)
        return
    if platform.startswith("win"):
        _run_clipboard_command(["clip"], content)
        return

    for command in _LINUX_COPY_COMMANDS:
        if shutil.which(command[0]) is None:
            continue
        _run_clipboard_command(command, content)
        return

    msg = "Clipboard integration is not available on this platform."
    raise ClipboardError(msg)


def paste_from_clipboard() -> str:
    """Return the current text content of the system clipboard.

    Raises:
        ClipboardError: If clipboard integration is unavailable or fails.
    """
    try:
        return pyperclip.paste()
    except pyperclip.PyperclipException:
        pass

    platform = sys.platform
    if platform == "darwin":
        return _run_clipboard_command(["pbpaste"])
    if platform.startswith("win"):
        return _run_clipboard_command(["powershell", "-NoProfile", "-Command", "Get-Clipboard"])

    for command in _LINUX_PASTE_COMMANDS:
        if shutil.which(command[0]) is None:
            continue
        return _run_clipboard_command(command)

    msg = "Clipboard integration is not available on this platform."
    raise ClipboardError(msg)


def _run_clipboard_command(command: list[str], content: str | None = None) -> str:
    """Execute a clipboard command, feeding ``content`` through stdin when given.

    Args:
        command: Command and arguments to execute.
        content: Text to pass to the command via stdin.

    Returns:
        Decoded standard output of the command.

    Raises:
        ClipboardError: If the command fails or its output is not UTF-8.
    """
    payload = content.encode("utf-8") if content is not None else None
    try:
        completed = subprocess.run(command, input=payload, capture_output=True, check=True)
    except (OSError, subprocess.CalledProcessError) as exc:  # pragma: no cover - platform dependent
        msg = f"Clipboard command {' '.join(command)} failed: {exc}"
        raise ClipboardError(msg) from exc
    try:
        return completed.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        msg = f"Clipboard command {' '.join(command)} returned non UTF-8 output: {exc}"
        raise ClipboardError(msg) from exc
