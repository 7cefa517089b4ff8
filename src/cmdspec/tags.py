# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Decoding of per-field annotation strings.

The annotation grammar is ``name[|alias...][,key[=value]]*``. The first
segment lists alternative option names, the remaining segments toggle flags
(``required``, ``positional``, ``long``, ``short``, ``suffixprev``,
``skipname``) or set values (``label``, ``delimiters``, ``joiner``,
``keyjoiner``, ``exclusive``). Values may be wrapped in one pair of square
brackets so that commas and spaces survive, e.g. ``joiner=[ ]`` or
``delimiters=[,;]``; commas are only treated as segment separators outside
brackets.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Final

from .errors import MalformedTagError
from .settings import DEFAULT_SETTINGS, MarshalSettings

LOGGER = logging.getLogger(__name__)

SKIP_TAG: Final[str] = "-"
OPTION_SEPARATOR: Final[str] = "|"
SEGMENT_SEPARATOR: Final[str] = ","

_FLAG_KEYS: Final[frozenset[str]] = frozenset(
    {"required", "positional", "long", "short", "suffixprev", "skipname"},
)
_VALUE_KEYS: Final[frozenset[str]] = frozenset({"label", "delimiters", "joiner", "keyjoiner", "exclusive"})


@dataclass(frozen=True, slots=True)
class TagDefaults:
    """Delimiter and joiner configuration inherited by the fields of one scope."""

    delimiters: tuple[str, ...]
    joiner: str
    key_part_joiner: str

    @classmethod
    def from_settings(cls, settings: MarshalSettings = DEFAULT_SETTINGS) -> TagDefaults:
        """Return the root defaults derived from ``settings``."""

        return cls(
            delimiters=(settings.argument_delimiter,),
            joiner=settings.value_joiner,
            key_part_joiner=settings.key_part_joiner,
        )

    def delimiter_at(self, index: int, fallback: str) -> str:
        """Return the delimiter at ``index``.

        Indexes past the end repeat the last delimiter; ``fallback`` is used
        when no delimiters are configured at all.
        """

        if not self.delimiters:
            return fallback
        if index >= len(self.delimiters):
            return self.delimiters[-1]
        return self.delimiters[index]


@dataclass(frozen=True, slots=True)
class FieldTag:
    """Decoded field annotation.

    ``delimiters``, ``joiner`` and ``key_part_joiner`` are ``None`` unless the
    annotation sets them; :meth:`resolve` fills them from the scope defaults.
    """

    options: tuple[str, ...] = ()
    label: str = ""
    skip_name: bool = False
    required: bool = False
    positional: bool = False
    long_option: bool = False
    force_short: bool = False
    suffix_previous: bool = False
    delimiters: tuple[str, ...] | None = None
    mutually_exclusive_with: tuple[str, ...] = ()
    key_part_joiner: str | None = None
    joiner: str | None = None

    @property
    def primary_option(self) -> str:
        """Return the first option name, or an empty string for anonymous fields."""

        return self.options[0] if self.options else ""

    def resolve(self, defaults: TagDefaults) -> TagDefaults:
        """Return the effective delimiter configuration for this field."""

        return TagDefaults(
            delimiters=defaults.delimiters if self.delimiters is None else self.delimiters,
            joiner=defaults.joiner if self.joiner is None else self.joiner,
            key_part_joiner=defaults.key_part_joiner if self.key_part_joiner is None else self.key_part_joiner,
        )


EMPTY_TAG: Final[FieldTag] = FieldTag()


def _split_segments(raw: str) -> list[str]:
    """Split ``raw`` on commas that are not enclosed in square brackets."""

    segments: list[str] = []
    current: list[str] = []
    depth = 0
    for char in raw:
        if char == "[":
            depth += 1
        elif char == "]" and depth:
            depth -= 1
        elif char == SEGMENT_SEPARATOR and not depth:
            segments.append("".join(current))
            current = []
            continue
        current.append(char)
    segments.append("".join(current))
    return segments


def _strip_brackets(value: str) -> str:
    """Remove one leading ``[`` and one trailing ``]`` when present."""

    value = value.removeprefix("[")
    return value.removesuffix("]")


def parse_tag(raw: str, *, context: str = "") -> FieldTag:
    """Decode the annotation ``raw`` into a :class:`FieldTag`.

    Args:
        raw: Annotation string such as ``"all|a"`` or ``",suffixprev,delimiters=[:]"``.
        context: Dotted field path used in error messages.

    Returns:
        FieldTag: Decoded annotation. Delimiter settings left unset inherit
        from the enclosing scope at emission time.

    Raises:
        MalformedTagError: If a value key (or an unknown key) appears without ``=value``.
    """

    if not raw:
        return EMPTY_TAG

    head, *segments = _split_segments(raw)
    tag = FieldTag(options=tuple(name for name in head.split(OPTION_SEPARATOR) if name))

    for segment in segments:
        if not segment:
            continue
        key, has_value, value = segment.partition("=")
        if key in _FLAG_KEYS:
            tag = _apply_flag(tag, key)
            continue
        if not has_value:
            raise MalformedTagError(key, raw, context=context)
        if key not in _VALUE_KEYS:
            LOGGER.debug("%s: ignoring unknown tag option %r", context or raw, key)
            continue
        tag = _apply_value(tag, key, _strip_brackets(value))

    # several aliases without an explicit form: the first one is a long option
    if not tag.force_short and not tag.long_option and len(tag.options) > 1:
        tag = replace(tag, long_option=True)
    return tag


def _apply_flag(tag: FieldTag, key: str) -> FieldTag:
    match key:
        case "required":
            return replace(tag, required=True)
        case "positional":
            return replace(tag, positional=True)
        case "long":
            return tag if tag.force_short else replace(tag, long_option=True)
        case "short":
            return replace(tag, long_option=False, force_short=True)
        case "suffixprev":
            return replace(tag, suffix_previous=True)
        case _:
            return replace(tag, skip_name=True)


def _apply_value(tag: FieldTag, key: str, value: str) -> FieldTag:
    match key:
        case "label":
            return replace(tag, label=value)
        case "delimiters":
            return replace(tag, delimiters=tuple(value))
        case "joiner":
            return replace(tag, joiner=value)
        case "keyjoiner":
            return replace(tag, key_part_joiner=value)
        case _:
            labels = tuple(entry for entry in value.split(OPTION_SEPARATOR) if entry)
            return replace(tag, mutually_exclusive_with=labels)


__all__: Final[tuple[str, ...]] = (
    "EMPTY_TAG",
    "SKIP_TAG",
    "FieldTag",
    "TagDefaults",
    "parse_tag",
)
