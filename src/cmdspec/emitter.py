# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Recursive emission of command tokens from descriptor records.

Each descriptor record is one scope: it owns a token accumulator, a
separator and the delimiter defaults inherited by its fields. Fields are
visited in declaration order and every value is dispatched to exactly one
rule, in priority order:

1. :class:`~cmdspec.sentinels.CommandName` names the scope and resets its defaults.
2. :class:`~cmdspec.sentinels.ArgName` injects a bare option name.
3. Mappings expand into ``key[joiner]value`` options.
4. Nested records recurse and are spliced into the parent scope.
5. ``suffixprev`` fields extend the previous token in place.
6. ``positional`` fields append their values verbatim.
7. Everything else renders as a flag or an option with values.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any, Final

from .errors import NonStructInputError
from .naming import command_word
from .schema import FieldSpec, describe, is_record
from .sentinels import ArgName, CommandName
from .settings import DEFAULT_SETTINGS, MarshalSettings
from .tags import FieldTag, TagDefaults
from .values import REPEATED_TYPES, is_zero, resolve_value, sliceify, stringify, walk_mapping

LOGGER = logging.getLogger(__name__)

LONG_PREFIX: Final[str] = "--"
SHORT_PREFIX: Final[str] = "-"


@dataclass(frozen=True, slots=True)
class Emission:
    """Tokens produced for one scope and the separator that joins them."""

    tokens: tuple[str, ...]
    separator: str

    def joined(self) -> str:
        """Return the tokens joined with the scope separator."""

        return self.separator.join(self.tokens)


@dataclass(frozen=True, slots=True)
class _ScopeState:
    """Separator and inherited defaults threaded through the fields of a scope."""

    separator: str
    defaults: TagDefaults


@dataclass(frozen=True, slots=True)
class _FieldContext:
    """Per-field data shared by the emission rules."""

    spec: FieldSpec
    effective: TagDefaults
    option: str
    path: str

    @property
    def tag(self) -> FieldTag:
        return self.spec.tag


class Emitter:
    """Turn descriptor records into ordered command tokens."""

    def __init__(self, settings: MarshalSettings = DEFAULT_SETTINGS) -> None:
        """Create an emitter applying ``settings`` as the global defaults."""

        self._settings = settings

    @property
    def settings(self) -> MarshalSettings:
        """Return the settings applied by this emitter."""

        return self._settings

    def emit(
        self,
        record: object,
        *,
        top_level: bool = True,
        defaults: TagDefaults | None = None,
        path: str = "",
    ) -> Emission:
        """Emit the tokens of ``record``.

        Args:
            record: Dataclass or pydantic model instance.
            top_level: Seed the scope with the record type name as the command word.
            defaults: Delimiter defaults inherited from the enclosing scope.
            path: Dotted field path of ``record`` used in error messages.

        Returns:
            Emission: Tokens of this scope and the separator that joins them.

        Raises:
            NonStructInputError: If ``record`` is not a descriptor instance.
            MalformedTagError: If a field annotation is malformed.
            UnsupportedValueError: If a field value cannot be rendered.
        """

        if not is_record(record):
            raise NonStructInputError(record)
        schema = describe(type(record))
        path = path or schema.name
        tokens: list[str] = []
        if top_level:
            tokens.append(command_word(schema.name, self._settings.command_word_separator))

        state = _ScopeState(
            separator=self._settings.argument_delimiter,
            defaults=defaults if defaults is not None else TagDefaults.from_settings(self._settings),
        )
        for spec, value in schema.values(record):
            state = self._emit_field(tokens, state, spec, value, path=f"{path}.{spec.name}")
        return Emission(tokens=tuple(tokens), separator=state.separator)

    def _emit_field(
        self,
        tokens: list[str],
        state: _ScopeState,
        spec: FieldSpec,
        value: Any,
        *,
        path: str,
    ) -> _ScopeState:
        """Emit every element of one field and return the updated scope state."""

        ctx = _FieldContext(
            spec=spec,
            effective=spec.tag.resolve(state.defaults),
            option=spec.tag.primary_option or command_word(spec.name, self._settings.command_word_separator),
            path=path,
        )
        repeated = isinstance(value, REPEATED_TYPES)
        for index, element in enumerate(sliceify(value)):
            where = f"{path}[{index}]" if repeated else path
            match element:
                case CommandName(value=literal):
                    LOGGER.debug("%s: command name", where)
                    state = self._name_command(tokens, state, ctx, literal)
                case ArgName():
                    LOGGER.debug("%s: argument name", where)
                    self._inject_arg_name(tokens, ctx)
                case Mapping():
                    LOGGER.debug("%s: mapping expansion", where)
                    self._expand_mapping(tokens, state, ctx, element, where)
                case _ if is_record(element):
                    LOGGER.debug("%s: nested record", where)
                    self._descend(tokens, state, ctx, element, where)
                case _ if ctx.tag.suffix_previous:
                    LOGGER.debug("%s: suffix previous", where)
                    self._suffix_previous(tokens, ctx, element, where)
                case _ if ctx.tag.positional:
                    LOGGER.debug("%s: positional", where)
                    tokens.extend(stringify(item, field=where) for item in sliceify(element))
                case _:
                    self._scalar(tokens, ctx, element, where)
        return state

    def _name_command(self, tokens: list[str], state: _ScopeState, ctx: _FieldContext, literal: str) -> _ScopeState:
        """Replace the scope tokens with the command name and adopt the field defaults."""

        name = literal or ctx.tag.label or ctx.option
        tokens[:] = [name]
        separator = ctx.effective.delimiters[0] if ctx.effective.delimiters else state.separator
        return replace(state, separator=separator, defaults=ctx.effective)

    def _inject_arg_name(self, tokens: list[str], ctx: _FieldContext) -> None:
        prefix = SHORT_PREFIX if ctx.tag.force_short else LONG_PREFIX
        tokens.append(prefix + (ctx.tag.label or ctx.option))

    def _expand_mapping(
        self,
        tokens: list[str],
        state: _ScopeState,
        ctx: _FieldContext,
        mapping: Mapping[Any, Any],
        where: str,
    ) -> None:
        """Append one option per mapping leaf, keyed by its joined key path."""

        prefix = ""
        if ctx.tag.force_short:
            prefix = SHORT_PREFIX
        elif ctx.tag.long_option:
            prefix = LONG_PREFIX
        joiner = ctx.effective.joiner
        for key_path, leaf in walk_mapping(mapping, field=where):
            key = prefix + ctx.effective.key_part_joiner.join(key_path)
            if leaf is None:
                tokens.append(key)
                continue
            text = stringify(leaf, field=f"{where}.{'.'.join(key_path)}")
            if joiner == state.separator:
                tokens.extend((key, text))
            else:
                tokens.append(f"{key}{joiner}{text}")

    def _descend(
        self,
        tokens: list[str],
        state: _ScopeState,
        ctx: _FieldContext,
        record: object,
        where: str,
    ) -> None:
        """Emit a nested record and splice its tokens into this scope."""

        child = self.emit(record, top_level=False, defaults=ctx.effective, path=where)
        if not child.tokens:
            return
        if child.separator == state.separator:
            tokens.extend(child.tokens)
        else:
            tokens.append(child.joined())

    def _suffix_previous(self, tokens: list[str], ctx: _FieldContext, value: Any, where: str) -> None:
        if not tokens or (is_zero(value) and not ctx.tag.required):
            return
        delimiter = ctx.effective.delimiter_at(0, self._settings.argument_delimiter)
        tokens[-1] = f"{tokens[-1]}{delimiter}{stringify(value, field=where)}"

    def _scalar(self, tokens: list[str], ctx: _FieldContext, value: Any, where: str) -> None:
        """Render a flag (booleans) or an option followed by its values."""

        if isinstance(value, bool):
            if value:
                LOGGER.debug("%s: flag", where)
                self._append_option(tokens, ctx)
            return
        value = resolve_value(value)
        if is_zero(value) and not ctx.tag.required:
            return
        LOGGER.debug("%s: option", where)
        self._append_option(tokens, ctx, [stringify(item, field=where) for item in sliceify(value)])

    def _append_option(self, tokens: list[str], ctx: _FieldContext, values: Sequence[str] = ()) -> None:
        """Append ``-name``/``--name`` and ``values``, pre-joining long options."""

        argset: list[str] = []
        prejoin = False
        if not ctx.tag.skip_name:
            if ctx.tag.long_option and not ctx.tag.force_short:
                argset.append(LONG_PREFIX + ctx.option)
                prejoin = True
            else:
                argset.append(SHORT_PREFIX + ctx.option)
        argset.extend(values)
        if prejoin and len(argset) >= 2:
            tokens.append(f"{argset[0]}{ctx.effective.joiner}{argset[1]}")
            tokens.extend(argset[2:])
        else:
            tokens.extend(argset)


def emit(
    record: object,
    *,
    top_level: bool = True,
    settings: MarshalSettings = DEFAULT_SETTINGS,
) -> Emission:
    """Emit ``record`` with a one-off :class:`Emitter` configured by ``settings``."""

    return Emitter(settings).emit(record, top_level=top_level)


__all__: Final[tuple[str, ...]] = ("Emission", "Emitter", "emit")
