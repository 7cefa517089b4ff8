# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich console helpers for user-facing CLI output."""

from __future__ import annotations

import logging
import sys
from functools import lru_cache
from typing import Final, Literal

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=4)
def get_console(*, color: bool, stderr: bool = False) -> Console:
    """Return a cached Rich console configured for ``color`` preferences.

    Args:
        color: ``True`` when ANSI colour output should be enabled.
        stderr: ``True`` to write to standard error instead of standard output.

    Returns:
        Console: Console matching the requested presentation flags.
    """

    tty = detect_tty()
    color_system: Literal["auto"] | None = "auto" if color and tty else None
    return Console(
        color_system=color_system,
        no_color=not (color and tty),
        stderr=stderr,
        soft_wrap=True,
    )


def _print_line(msg: str, *, style: str, use_color: bool, stderr: bool = False) -> None:
    console = get_console(color=use_color, stderr=stderr)
    text = Text(msg)
    if use_color:
        text.stylize(style)
    console.print(text)


def ok(msg: str, *, use_color: bool = True) -> None:
    """Emit a success message."""

    _print_line(msg, style="green", use_color=use_color)


def fail(msg: str, *, use_color: bool = True) -> None:
    """Emit an error message to standard error."""

    _print_line(msg, style="red", use_color=use_color, stderr=True)


def configure_logging(*, verbose: bool) -> None:
    """Route library logging through a Rich handler on standard error.

    Args:
        verbose: ``True`` enables debug records; otherwise only warnings are shown.
    """

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=get_console(color=detect_tty(), stderr=True), show_path=False)],
        force=True,
    )


__all__: Final[tuple[str, ...]] = (
    "configure_logging",
    "detect_tty",
    "fail",
    "get_console",
    "ok",
)
