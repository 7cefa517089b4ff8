# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Declarative command descriptors marshalled into process argument lists."""

from __future__ import annotations

from typing import Final

from .api import build_process, marshal, must_build_process, must_parse, parse
from .emitter import Emission, Emitter, emit
from .errors import (
    CmdspecError,
    EmptyInputError,
    MalformedTagError,
    NonStructInputError,
    SettingsError,
    UnsupportedValueError,
)
from .process import CommandProcess, SubprocessExecutionError
from .schema import CommandSchema, FieldSpec, arg, describe, model_arg
from .sentinels import ArgName, CommandName, Sentinel
from .settings import DEFAULT_SETTINGS, MarshalSettings, load_settings
from .tags import FieldTag, TagDefaults, parse_tag

__version__: Final[str] = "0.1.0"

__all__: Final[tuple[str, ...]] = (
    "DEFAULT_SETTINGS",
    "ArgName",
    "CmdspecError",
    "CommandName",
    "CommandProcess",
    "CommandSchema",
    "Emission",
    "Emitter",
    "EmptyInputError",
    "FieldSpec",
    "FieldTag",
    "MalformedTagError",
    "MarshalSettings",
    "NonStructInputError",
    "Sentinel",
    "SettingsError",
    "SubprocessExecutionError",
    "TagDefaults",
    "UnsupportedValueError",
    "arg",
    "build_process",
    "describe",
    "emit",
    "load_settings",
    "marshal",
    "model_arg",
    "must_build_process",
    "must_parse",
    "parse",
    "parse_tag",
)
