# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the public marshalling entry points."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pytest

from cmdspec import (
    CommandProcess,
    EmptyInputError,
    MalformedTagError,
    NonStructInputError,
    arg,
    build_process,
    marshal,
    must_build_process,
    must_parse,
    parse,
)
from cmdspec.settings import MarshalSettings
from tests.helpers.descriptors import SAMPLE_LS


@dataclass
class Broken:
    value: str = arg("foo,delimiters", default="x")


def test_marshal_joins_with_single_space() -> None:
    assert marshal(SAMPLE_LS) == "ls --all -l --human-readable /foo /bar/*.txt /baz/"


def test_parse_returns_raw_tokens() -> None:
    assert parse(SAMPLE_LS) == ["ls", "--all", "-l", "--human-readable", "/foo", "/bar/*.txt", "/baz/"]


def test_parse_honours_settings() -> None:
    settings = MarshalSettings(argument_delimiter="|")
    assert marshal(SAMPLE_LS, settings=settings) == "ls|--all|-l|--human-readable|/foo|/bar/*.txt|/baz/"


def test_malformed_tag_aborts_without_tokens() -> None:
    with pytest.raises(MalformedTagError) as excinfo:
        parse(Broken())
    assert excinfo.value.key == "delimiters"


def test_empty_input_is_rejected() -> None:
    with pytest.raises(EmptyInputError):
        parse(None)
    with pytest.raises(EmptyInputError):
        marshal(None)


def test_non_record_input_is_rejected() -> None:
    with pytest.raises(NonStructInputError):
        parse("ls -la")


def test_must_parse_exits_on_error(caplog: pytest.LogCaptureFixture) -> None:
    with pytest.raises(SystemExit) as excinfo:
        must_parse(Broken())
    assert "delimiters" in str(excinfo.value.code)
    assert any("delimiters" in record.getMessage() for record in caplog.records)


def test_must_parse_returns_tokens() -> None:
    assert must_parse(SAMPLE_LS)[0] == "ls"


def test_build_process_from_descriptor(tmp_path: Path) -> None:
    process = build_process(SAMPLE_LS, cwd=tmp_path)
    assert process.executable == "ls"
    assert process.args == ("--all", "-l", "--human-readable", "/foo", "/bar/*.txt", "/baz/")
    assert process.cwd == tmp_path


def test_build_process_from_string_and_tokens() -> None:
    assert build_process("grep -r 'two words' src").argv == ["grep", "-r", "two words", "src"]
    assert build_process(["echo", "hi"]) == CommandProcess(executable="echo", args=("hi",))
    assert build_process(("true",)).args == ()


@pytest.mark.parametrize("command", [None, "", "   ", []])
def test_build_process_rejects_empty_commands(command: object) -> None:
    with pytest.raises(EmptyInputError):
        build_process(command)


@pytest.mark.parametrize("command", [42, {"cmd": "ls"}, ["ls", 1], b"ls"])
def test_build_process_rejects_unsupported_shapes(command: object) -> None:
    with pytest.raises(NonStructInputError):
        build_process(command)


def test_must_build_process_exits_on_error() -> None:
    with pytest.raises(SystemExit):
        must_build_process(42)


def test_build_process_rejects_unbalanced_quotes() -> None:
    with pytest.raises(NonStructInputError) as excinfo:
        build_process("ls 'unterminated")
    assert "well-formed command string" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, ValueError)


def test_must_build_process_exits_on_unbalanced_quotes() -> None:
    with pytest.raises(SystemExit) as excinfo:
        must_build_process('echo "half')
    assert "well-formed command string" in str(excinfo.value.code)
