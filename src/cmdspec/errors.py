# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised while marshalling command descriptors."""

from __future__ import annotations

from typing import Final


class CmdspecError(RuntimeError):
    """Base class for every error raised by the marshalling core."""


class MalformedTagError(CmdspecError):
    """Raised when a field annotation uses a value key without a value."""

    def __init__(self, key: str, tag: str, *, context: str = "") -> None:
        """Create the error for ``key`` found in the annotation ``tag``.

        Args:
            key: Tag option that requires ``=value`` but was given none.
            tag: Raw annotation string containing the offending option.
            context: Dotted field path used to locate the annotation.
        """

        location = f"{context}: " if context else ""
        super().__init__(f"{location}tag option '{key}' requires a value (in {tag!r})")
        self.key = key
        self.tag = tag
        self.context = context


class UnsupportedValueError(CmdspecError):
    """Raised when a field value cannot be rendered as a command token."""

    def __init__(self, field: str, value: object) -> None:
        super().__init__(f"{field}: unsupported value of type {type(value).__name__}: {value!r}")
        self.field = field
        self.value = value


class EmptyInputError(CmdspecError):
    """Raised when a marshalling entry point receives nothing usable."""


class NonStructInputError(CmdspecError):
    """Raised when the input is neither a descriptor record nor a token list."""

    def __init__(self, value: object, *, expected: str = "a dataclass or pydantic model instance") -> None:
        super().__init__(f"expected {expected}, got {type(value).__name__}")
        self.value = value


class SettingsError(CmdspecError):
    """Raised when marshalling settings fail validation."""


__all__: Final[tuple[str, ...]] = (
    "CmdspecError",
    "EmptyInputError",
    "MalformedTagError",
    "NonStructInputError",
    "SettingsError",
    "UnsupportedValueError",
)
