# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Public entry points wrapping the recursive emitter."""

from __future__ import annotations

import logging
import shlex
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Final, NoReturn

from .emitter import Emission, Emitter
from .errors import CmdspecError, EmptyInputError, NonStructInputError
from .process import CommandProcess
from .schema import is_record
from .settings import DEFAULT_SETTINGS, MarshalSettings

LOGGER = logging.getLogger(__name__)


def _emit(descriptor: object, settings: MarshalSettings | None) -> Emission:
    if descriptor is None:
        raise EmptyInputError("cannot marshal an empty descriptor")
    return Emitter(settings or DEFAULT_SETTINGS).emit(descriptor, top_level=True)


def marshal(descriptor: object, *, settings: MarshalSettings | None = None) -> str:
    """Return ``descriptor`` as a single command line string.

    Args:
        descriptor: Dataclass or pydantic model instance describing the command.
        settings: Global delimiter defaults; :data:`DEFAULT_SETTINGS` when omitted.

    Returns:
        str: Command tokens joined with the top-level separator. No shell
        quoting is applied.

    Raises:
        CmdspecError: If the descriptor cannot be marshalled.
    """

    return _emit(descriptor, settings).joined()


def parse(descriptor: object, *, settings: MarshalSettings | None = None) -> list[str]:
    """Return the command tokens of ``descriptor``, suitable as a process argv.

    Raises:
        CmdspecError: If the descriptor cannot be marshalled.
    """

    return list(_emit(descriptor, settings).tokens)


def _abort(exc: CmdspecError) -> NoReturn:
    LOGGER.critical("%s", exc)
    raise SystemExit(str(exc)) from exc


def must_parse(descriptor: object, *, settings: MarshalSettings | None = None) -> list[str]:
    """Return the tokens of ``descriptor``, exiting the process on any marshalling error."""

    try:
        return parse(descriptor, settings=settings)
    except CmdspecError as exc:
        _abort(exc)


def build_process(
    command: object,
    *,
    settings: MarshalSettings | None = None,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> CommandProcess:
    """Build a launchable process handle.

    Args:
        command: Descriptor record, a command string (split with :func:`shlex.split`)
            or a sequence of string tokens.
        settings: Global delimiter defaults used for descriptor records.
        cwd: Working directory for the process.
        env: Environment for the process; inherited when omitted.

    Returns:
        CommandProcess: Handle whose executable is the first token.

    Raises:
        EmptyInputError: If ``command`` is ``None`` or yields no tokens.
        NonStructInputError: If ``command`` has an unsupported shape or is a
            string with unbalanced quotes.
        CmdspecError: If a descriptor record cannot be marshalled.
    """

    if command is None:
        raise EmptyInputError("cannot build a process from an empty command")
    tokens: list[str]
    if is_record(command):
        tokens = parse(command, settings=settings)
    elif isinstance(command, str):
        try:
            tokens = shlex.split(command)
        except ValueError as exc:
            raise NonStructInputError(command, expected="a well-formed command string") from exc
    elif isinstance(command, Sequence) and all(isinstance(token, str) for token in command):
        tokens = list(command)
    else:
        raise NonStructInputError(command, expected="a descriptor record, a string or a sequence of strings")
    return CommandProcess.from_tokens(tokens, cwd=cwd, env=env)


def must_build_process(
    command: object,
    *,
    settings: MarshalSettings | None = None,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> CommandProcess:
    """Build a process handle, exiting the process on any error."""

    try:
        return build_process(command, settings=settings, cwd=cwd, env=env)
    except CmdspecError as exc:
        _abort(exc)


__all__: Final[tuple[str, ...]] = (
    "build_process",
    "marshal",
    "must_build_process",
    "must_parse",
    "parse",
)
