# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the cmdspec command line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cmdspec.cli import app

runner = CliRunner()

BROKEN_MODULE = '''
from dataclasses import dataclass

from cmdspec import arg


@dataclass
class Broken:
    value: str = arg("foo,joiner", default="x")
'''


def test_render_joined_command() -> None:
    result = runner.invoke(app, ["render", "tests.helpers.descriptors:SAMPLE_LS"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "ls --all -l --human-readable /foo /bar/*.txt /baz/"


def test_render_calls_factories() -> None:
    result = runner.invoke(app, ["render", "tests.helpers.descriptors:transcode"])
    assert result.exit_code == 0
    assert result.stdout.startswith("ffmpeg -loglevel error -i /my/file.avi")


def test_render_tokens_one_per_line() -> None:
    result = runner.invoke(app, ["render", "tests.helpers.descriptors:SAMPLE_LS", "--tokens"])
    assert result.exit_code == 0
    assert result.stdout.splitlines()[:3] == ["ls", "--all", "-l"]


def test_render_json() -> None:
    result = runner.invoke(app, ["render", "tests.helpers.descriptors:Ls", "--json"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == ["ls", "--block-size 0"]


def test_render_with_config(tmp_path: Path) -> None:
    config = tmp_path / "cmdspec.toml"
    config.write_text('key_value_joiner = "="\n', encoding="utf-8")
    result = runner.invoke(app, ["render", "tests.helpers.descriptors:Ls", "--json", "--config", str(config)])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == ["ls", "--block-size=0"]


def test_render_reports_marshalling_errors(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "broken_descriptors.py").write_text(BROKEN_MODULE, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    result = runner.invoke(app, ["render", "broken_descriptors:Broken"])
    assert result.exit_code == 1
    assert "joiner" in result.output


def test_render_rejects_malformed_targets() -> None:
    result = runner.invoke(app, ["render", "no-colon"])
    assert result.exit_code == 2


def test_tag_command_describes_annotation() -> None:
    result = runner.invoke(app, ["tag", "all|a,required"])
    assert result.exit_code == 0
    assert "all | a" in result.stdout
    assert "Required" in result.stdout


def test_tag_command_reports_malformed_annotation() -> None:
    result = runner.invoke(app, ["tag", "foo,label"])
    assert result.exit_code == 1
    assert "label" in result.output


def test_schema_command_lists_fields() -> None:
    result = runner.invoke(app, ["schema", "tests.helpers.descriptors:CodecOptions"])
    assert result.exit_code == 0
    for name in ("arg_name", "stream", "codec", "parameters"):
        assert name in result.stdout
    assert "4 field(s)" in result.stdout
