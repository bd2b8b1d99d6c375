"""Tests for clipboard integration."""

from __future__ import annotations

import subprocess

import pyperclip
import pytest
from pytest_mock import MockerFixture

from mxctl._internal.clipboard import copy_to_clipboard, paste_from_clipboard
from mxctl.errors import ClipboardError


def test_copy_uses_pyperclip(mocker: MockerFixture) -> None:
    """pyperclip is the primary clipboard backend."""
    copy_mock = mocker.patch("mxctl._internal.clipboard.pyperclip.copy")
    run_mock = mocker.patch("mxctl._internal.clipboard.subprocess.run")

    copy_to_clipboard("hello")

    copy_mock.assert_called_once_with("hello")
    run_mock.assert_not_called()


def test_paste_uses_pyperclip(mocker: MockerFixture) -> None:
    """paste returns the pyperclip clipboard text."""
    mocker.patch("mxctl._internal.clipboard.pyperclip.paste", return_value="clip text")

    assert paste_from_clipboard() == "clip text"


def test_copy_falls_back_to_platform_command(mocker: MockerFixture) -> None:
    """Without a pyperclip backend the linux tools are used."""
    mocker.patch("mxctl._internal.clipboard.pyperclip.copy", side_effect=pyperclip.PyperclipException("none"))
    mocker.patch("mxctl._internal.clipboard.sys.platform", "linux")
    mocker.patch(
        "mxctl._internal.clipboard.shutil.which",
        side_effect=lambda name: "/usr/bin/wl-copy" if name == "wl-copy" else None,
    )
    run_mock = mocker.patch(
        "mxctl._internal.clipboard.subprocess.run",
        return_value=subprocess.CompletedProcess(["wl-copy"], 0, stdout=b""),
    )

    copy_to_clipboard("hello")

    run_mock.assert_called_once_with(["wl-copy"], input=b"hello", capture_output=True, check=True)


def test_paste_falls_back_to_platform_command(mocker: MockerFixture) -> None:
    """paste decodes the output of the macOS pbpaste tool."""
    mocker.patch("mxctl._internal.clipboard.pyperclip.paste", side_effect=pyperclip.PyperclipException("none"))
    mocker.patch("mxctl._internal.clipboard.sys.platform", "darwin")
    mocker.patch(
        "mxctl._internal.clipboard.subprocess.run",
        return_value=subprocess.CompletedProcess(["pbpaste"], 0, stdout="pasted ✓".encode()),
    )

    assert paste_from_clipboard() == "pasted ✓"


def test_clipboard_unavailable_raises(mocker: MockerFixture) -> None:
    """No backend and no platform tools raise ClipboardError."""
    mocker.patch("mxctl._internal.clipboard.pyperclip.paste", side_effect=pyperclip.PyperclipException("none"))
    mocker.patch("mxctl._internal.clipboard.sys.platform", "linux")
    mocker.patch("mxctl._internal.clipboard.shutil.which", return_value=None)

    with pytest.raises(ClipboardError, match="not available"):
        paste_from_clipboard()


def test_paste_rejects_undecodable_platform_output(mocker: MockerFixture) -> None:
    """Bytes that are not UTF-8 raise instead of being silently replaced."""
    mocker.patch("mxctl._internal.clipboard.pyperclip.paste", side_effect=pyperclip.PyperclipException("none"))
    mocker.patch("mxctl._internal.clipboard.sys.platform", "darwin")
    mocker.patch(
        "mxctl._internal.clipboard.subprocess.run",
        return_value=subprocess.CompletedProcess(["pbpaste"], 0, stdout=b"\xff\xfe broken"),
    )

    with pytest.raises(ClipboardError, match="non UTF-8"):
        paste_from_clipboard()
