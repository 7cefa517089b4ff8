# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for value resolution helpers."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from pathlib import Path

import pytest

from cmdspec.errors import UnsupportedValueError
from cmdspec.naming import command_word, underscore
from cmdspec.values import is_zero, resolve_value, sliceify, stringify, walk_mapping


class Preset(str, Enum):
    FAST = "veryfast"
    NONE = ""


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("AlmostAll", "almost_all"),
        ("FFMPEG", "ffmpeg"),
        ("HTTPServer", "http_server"),
        ("block_size", "block_size"),
        ("human-readable", "human_readable"),
    ],
)
def test_underscore(name: str, expected: str) -> None:
    assert underscore(name) == expected


def test_command_word_uses_separator() -> None:
    assert command_word("LsCommand") == "ls-command"
    assert command_word("block_size", "+") == "block+size"


@pytest.mark.parametrize("value", [None, False, 0, 0.0, "", b"", [], {}, Decimal(0), Preset.NONE])
def test_zero_values(value: object) -> None:
    assert is_zero(value) is True


@pytest.mark.parametrize("value", [True, 1, -1.5, "x", [0], {"a": None}, Preset.FAST])
def test_non_zero_values(value: object) -> None:
    assert is_zero(value) is False


def test_resolve_value_unwraps_enums_and_paths() -> None:
    assert resolve_value(Preset.FAST) == "veryfast"
    assert resolve_value(Path("/tmp/out.mkv")) == "/tmp/out.mkv"
    assert resolve_value(3) == 3


def test_sliceify_expands_containers_and_drops_none() -> None:
    assert sliceify(None) == []
    assert sliceify("abc") == ["abc"]
    assert sliceify(["a", None, "b"]) == ["a", "b"]
    assert sliceify(("x",)) == ["x"]
    assert sliceify({"b", "a"}) == ["a", "b"]


def test_stringify_scalars() -> None:
    assert stringify("text", field="f") == "text"
    assert stringify(True, field="f") == "true"
    assert stringify(False, field="f") == "false"
    assert stringify(24, field="f") == "24"
    assert stringify(2.0, field="f") == "2"
    assert stringify(0.25, field="f") == "0.25"
    assert stringify(b"bytes", field="f") == "bytes"
    assert stringify(Decimal("1.50"), field="f") == "1.50"
    assert stringify(Preset.FAST, field="f") == "veryfast"


def test_stringify_rejects_unsupported_values() -> None:
    with pytest.raises(UnsupportedValueError) as excinfo:
        stringify(object(), field="Cmd.value")
    assert excinfo.value.field == "Cmd.value"


def test_walk_mapping_is_depth_first_in_insertion_order() -> None:
    data = {"b": {"y": 1, "x": None}, "a": [10, 20]}
    assert list(walk_mapping(data, field="f")) == [
        (("b", "y"), 1),
        (("b", "x"), None),
        (("a", "0"), 10),
        (("a", "1"), 20),
    ]
