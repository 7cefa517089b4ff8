# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Value resolution helpers used while walking descriptor fields."""

from __future__ import annotations

import math
import os
from collections.abc import Iterator, Mapping, Sized
from enum import Enum
from numbers import Number
from typing import Any, Final

from .errors import UnsupportedValueError

REPEATED_TYPES: Final[tuple[type, ...]] = (list, tuple, set, frozenset)
_UNORDERED_TYPES: Final[tuple[type, ...]] = (set, frozenset)


def resolve_value(value: Any) -> Any:
    """Unwrap one level of value indirection (enum members, path-like objects)."""

    if isinstance(value, Enum):
        return value.value
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    return value


def sliceify(value: Any) -> list[Any]:
    """Return ``value`` as a list, expanding repeated containers.

    ``None`` entries are dropped; sets are ordered by their rendered text so
    output stays deterministic.
    """

    if value is None:
        return []
    if isinstance(value, _UNORDERED_TYPES):
        return sorted((item for item in value if item is not None), key=str)
    if isinstance(value, REPEATED_TYPES):
        return [item for item in value if item is not None]
    return [value]


def is_zero(value: Any) -> bool:
    """Return ``True`` when ``value`` is the zero value of its type."""

    if value is None:
        return True
    if isinstance(value, Enum):
        return is_zero(value.value)
    if isinstance(value, bool):
        return not value
    if isinstance(value, Number):
        return value == 0
    if isinstance(value, (str, bytes, bytearray, Sized)):
        return len(value) == 0
    return False


def stringify(value: Any, *, field: str) -> str:
    """Render a scalar ``value`` as a command token.

    Args:
        value: Scalar value, possibly wrapped in an enum or path object.
        field: Dotted field path reported when ``value`` cannot be rendered.

    Returns:
        str: Token text. Booleans render as ``true``/``false`` and integral
        floats drop their fractional part.

    Raises:
        UnsupportedValueError: If ``value`` is not a renderable scalar.
    """

    value = resolve_value(value)
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise UnsupportedValueError(field, value) from exc
    if isinstance(value, Number):
        return str(value)
    raise UnsupportedValueError(field, value)


def walk_mapping(value: Mapping[Any, Any], *, field: str) -> Iterator[tuple[tuple[str, ...], Any]]:
    """Yield ``(key_path, leaf)`` pairs of a nested mapping depth-first.

    Nested mappings and sequences are descended into (sequence indexes become
    key segments); every other value, ``None`` included, is a leaf. Keys are
    visited in the mapping's own iteration order.

    Args:
        value: Mapping to walk.
        field: Dotted field path reported for unrenderable keys.

    Yields:
        tuple[tuple[str, ...], Any]: Key path segments and the leaf value.
    """

    yield from _walk(value, (), field=field)


def _walk(node: Any, path: tuple[str, ...], *, field: str) -> Iterator[tuple[tuple[str, ...], Any]]:
    if isinstance(node, Mapping):
        for key, child in node.items():
            yield from _walk(child, (*path, stringify(key, field=field)), field=field)
    elif isinstance(node, (list, tuple)):
        for index, child in enumerate(node):
            yield from _walk(child, (*path, str(index)), field=field)
    else:
        yield path, node


__all__: Final[tuple[str, ...]] = (
    "REPEATED_TYPES",
    "is_zero",
    "resolve_value",
    "sliceify",
    "stringify",
    "walk_mapping",
)
