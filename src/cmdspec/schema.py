# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Declarative field schemas for command descriptor types.

A descriptor is a dataclass or a pydantic model whose fields carry an
annotation string under the ``cmdspec`` metadata key. The schema of each
descriptor type is decoded once and cached, so malformed annotations surface
on the first marshal of that type.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Final

from pydantic import BaseModel, Field

from .errors import NonStructInputError
from .tags import SKIP_TAG, FieldTag, parse_tag

TAG_METADATA_KEY: Final[str] = "cmdspec"


def arg(tag: str = "", **kwargs: Any) -> Any:
    """Return a dataclass field annotated with ``tag``.

    Args:
        tag: Annotation string, e.g. ``"all|a"`` or ``",positional"``.
        **kwargs: Forwarded to :func:`dataclasses.field` (``default``,
            ``default_factory``, ``repr`` ...).

    Returns:
        Any: Field definition usable as a dataclass attribute default.
    """

    metadata = {**kwargs.pop("metadata", {}), TAG_METADATA_KEY: tag}
    return dataclasses.field(metadata=metadata, **kwargs)


def model_arg(tag: str = "", default: Any = ..., **kwargs: Any) -> Any:
    """Return a pydantic field annotated with ``tag``.

    Args:
        tag: Annotation string.
        default: Field default; omitted means the field is required.
        **kwargs: Forwarded to :func:`pydantic.Field`.

    Returns:
        Any: Pydantic ``FieldInfo`` usable as a model attribute default.
    """

    extra = dict(kwargs.pop("json_schema_extra", None) or {})
    extra[TAG_METADATA_KEY] = tag
    return Field(default, json_schema_extra=extra, **kwargs)


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Exported descriptor field together with its decoded annotation."""

    name: str
    raw_tag: str
    tag: FieldTag


@dataclass(frozen=True, slots=True)
class CommandSchema:
    """Ordered field specifications of one descriptor type."""

    name: str
    fields: tuple[FieldSpec, ...]

    def values(self, record: object) -> Iterator[tuple[FieldSpec, Any]]:
        """Yield each field specification with its value on ``record``."""

        for spec in self.fields:
            yield spec, getattr(record, spec.name)


def is_record_type(cls: object) -> bool:
    """Return ``True`` when ``cls`` is a dataclass or pydantic model class."""

    if not isinstance(cls, type):
        return False
    return dataclasses.is_dataclass(cls) or issubclass(cls, BaseModel)


def is_record(value: object) -> bool:
    """Return ``True`` when ``value`` is a descriptor instance."""

    return not isinstance(value, type) and is_record_type(type(value))


def _declared_fields(cls: type) -> Iterator[tuple[str, str]]:
    """Yield ``(name, raw_tag)`` pairs in declaration order."""

    if dataclasses.is_dataclass(cls):
        for field in dataclasses.fields(cls):
            yield field.name, str(field.metadata.get(TAG_METADATA_KEY, ""))
        return
    model_fields: Mapping[str, Any] = cls.model_fields  # type: ignore[attr-defined]
    for name, info in model_fields.items():
        extra = info.json_schema_extra
        raw = extra.get(TAG_METADATA_KEY, "") if isinstance(extra, Mapping) else ""
        yield name, str(raw)


@lru_cache(maxsize=None)
def describe(cls: type) -> CommandSchema:
    """Return the cached :class:`CommandSchema` for the descriptor type ``cls``.

    Args:
        cls: Dataclass or pydantic model class.

    Returns:
        CommandSchema: Exported, non-skipped fields with decoded annotations.

    Raises:
        NonStructInputError: If ``cls`` is not a descriptor type.
        MalformedTagError: If any field annotation is malformed.
    """

    if not is_record_type(cls):
        raise NonStructInputError(cls, expected="a dataclass or pydantic model class")
    specs: list[FieldSpec] = []
    for name, raw in _declared_fields(cls):
        if name.startswith("_") or raw == SKIP_TAG:
            continue
        specs.append(FieldSpec(name=name, raw_tag=raw, tag=parse_tag(raw, context=f"{cls.__name__}.{name}")))
    return CommandSchema(name=cls.__name__, fields=tuple(specs))


__all__: Final[tuple[str, ...]] = (
    "TAG_METADATA_KEY",
    "CommandSchema",
    "FieldSpec",
    "arg",
    "describe",
    "is_record",
    "is_record_type",
    "model_arg",
)
