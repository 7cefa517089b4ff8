# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Descriptor types shared across the test-suite."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from cmdspec import ArgName, CommandName, arg


@dataclass
class Ls:
    all: bool = arg("all|a", default=False)
    almost_all: bool = arg("A", default=False)
    block_size: int = arg("block-size,long,required", default=0)
    format: str = arg("format,long,joiner==", default="")
    paths: list[str] = arg(",positional", default_factory=list)


@dataclass
class ListDirectory:
    name: CommandName = arg(default=CommandName("ls"))
    all: bool = arg("all|a", default=False)
    long_format: bool = arg("l", default=False)
    human_readable: bool = arg("human-readable|h,long", default=False)
    paths: list[str] = arg(",positional", default_factory=list)


@dataclass
class GlobalOptions:
    force_overwrite: bool = arg("y", default=False)
    never_overwrite: bool = arg("n", default=False)
    show_help: bool = arg("help|h|?", default=False)
    show_version: bool = arg("version", default=False)
    hide_banner: bool = arg("hide_banner", default=False)
    log_level: str = arg("loglevel|v,short", default="")
    cpu_flags: list[str] = arg("cpuflags", default_factory=list)


@dataclass
class CodecOptions:
    arg_name: ArgName = arg("codec,short", default=ArgName())
    stream: str = arg(",suffixprev,delimiters=[:]", default="")
    codec: str = arg(",skipname", default="")
    parameters: list[str] = arg(",positional", default_factory=list)


@dataclass
class MetadataValue:
    metadata: ArgName = arg(",short", default=ArgName())
    metastream: str = arg(",suffixprev,delimiters=[:]", default="")
    key: str = arg(",skipname", default="")
    value: Any = arg(",suffixprev,delimiters=[=]", default=None)


@dataclass
class Common:
    format: str = arg("f", default="")
    codecs: list[CodecOptions] = field(default_factory=list)
    duration: str = arg("t", default="")
    seek_start: str = arg("ss", default="")


@dataclass
class InputOptions:
    common: Common = field(default_factory=Common)
    input_time_offset: str = arg("itsoffset", default="")
    metadata: list[MetadataValue] = field(default_factory=list)
    url: str = arg("i,required", default="")


@dataclass
class OutputOptions:
    common: Common = field(default_factory=Common)
    output_duration: str = arg("to", default="")
    limit_size: int = arg("fs", default=0)
    url: str = arg(",positional,required", default="")


@dataclass
class FFMPEG:
    command: CommandName = arg("ffmpeg", default=CommandName())
    global_options: GlobalOptions | None = arg(",label=global_options", default=None)
    input: InputOptions | None = arg(",label=input_file_options", default=None)
    output: OutputOptions | None = arg(",label=output_file_options", default=None)


def transcode() -> FFMPEG:
    """Return a two-stream transcode invocation."""

    return FFMPEG(
        global_options=GlobalOptions(log_level="error"),
        input=InputOptions(url="/my/file.avi"),
        output=OutputOptions(
            common=Common(
                codecs=[
                    CodecOptions(
                        stream="v",
                        codec="libx264",
                        parameters=[
                            "-preset",
                            "veryfast",
                            "-x264opts",
                            "keyint=24:min-keyint=24:scenecut=-1",
                            "-pix_fmt",
                            "yuv420p",
                        ],
                    ),
                    CodecOptions(stream="a", codec="aac"),
                ],
            ),
            url="/my/file.mkv",
        ),
    )


SAMPLE_LS = ListDirectory(all=True, long_format=True, human_readable=True, paths=["/foo", "/bar/*.txt", "/baz/"])
