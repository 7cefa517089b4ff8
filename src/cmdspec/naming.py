# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for turning Python identifiers into command words."""

from __future__ import annotations

import re
from typing import Final

_ACRONYM_BOUNDARY: Final[re.Pattern[str]] = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY: Final[re.Pattern[str]] = re.compile(r"([a-z\d])([A-Z])")
_SEPARATOR_RUN: Final[re.Pattern[str]] = re.compile(r"[-\s_]+")


def underscore(name: str) -> str:
    """Return ``name`` as a lower-case, underscore separated word.

    Args:
        name: Identifier in ``CamelCase``, ``snake_case`` or ``kebab-case``.

    Returns:
        str: Normalised identifier such as ``almost_all`` or ``http_server``.
    """

    text = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    text = _WORD_BOUNDARY.sub(r"\1_\2", text)
    return _SEPARATOR_RUN.sub("_", text).strip("_").lower()


def command_word(name: str, separator: str = "-") -> str:
    """Return ``name`` formatted as a command word joined by ``separator``."""

    return underscore(name).replace("_", separator)


__all__: Final[tuple[str, ...]] = ("command_word", "underscore")
