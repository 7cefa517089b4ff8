# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Marker values that give a descriptor field special meaning."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


class Sentinel:
    """Base for field values that steer emission instead of carrying data."""

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class CommandName(Sentinel):
    """Name the command (or sub-command scope) being built.

    An empty ``value`` falls back to the field's label, then its primary
    option name, then the field name formatted as a command word. The field's
    ``delimiters``, ``joiner`` and ``keyjoiner`` settings become the defaults
    of every field that follows it in the same record.
    """

    value: str = ""

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ArgName(Sentinel):
    """Inject a bare option name (``--name`` or ``-name``) for a nested scope."""


__all__: Final[tuple[str, ...]] = ("ArgName", "CommandName", "Sentinel")
