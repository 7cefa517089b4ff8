# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Command line interface for inspecting and rendering command descriptors."""

from __future__ import annotations

import json
from importlib import import_module
from pathlib import Path
from typing import Annotated, Any

import typer
from rich import box
from rich.markup import escape
from rich.table import Table

from .api import parse
from .console import configure_logging, detect_tty, fail, get_console, ok
from .emitter import Emitter
from .errors import CmdspecError
from .schema import describe, is_record, is_record_type
from .settings import DEFAULT_SETTINGS, MarshalSettings, load_settings
from .tags import FieldTag, parse_tag

app = typer.Typer(
    name="cmdspec",
    help="Render declarative command descriptors into command lines.",
    no_args_is_help=True,
    add_completion=False,
)

TARGET_ARGUMENT = Annotated[
    str,
    typer.Argument(metavar="MODULE:ATTR", help="Import path of a descriptor instance, class or factory."),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="TOML settings file or pyproject.toml with [tool.cmdspec]."),
]
VERBOSE_OPTION = Annotated[bool, typer.Option("--verbose", "-v", help="Log every emitted field.")]


def load_target(target: str) -> Any:
    """Import the object named by ``module:attr`` (attributes may be dotted).

    Raises:
        typer.BadParameter: If the target is malformed or cannot be imported.
    """

    module_name, _, attr_path = target.partition(":")
    if not module_name or not attr_path:
        raise typer.BadParameter(f"expected MODULE:ATTR, got {target!r}")
    try:
        obj: Any = import_module(module_name)
    except ImportError as exc:
        raise typer.BadParameter(f"cannot import {module_name!r}: {exc}") from exc
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise typer.BadParameter(f"{module_name!r} has no attribute {attr_path!r}") from exc
    return obj


def _resolve_descriptor(obj: Any) -> object:
    """Return a descriptor instance, instantiating classes and calling factories."""

    if is_record(obj):
        return obj
    if callable(obj):
        return obj()
    return obj


def _settings(config: Path | None) -> MarshalSettings:
    return load_settings(config) if config is not None else DEFAULT_SETTINGS


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


def build_tag_table(tag: FieldTag, *, title: str) -> Table:
    """Return a rich table describing a decoded annotation."""

    table = Table(title=escape(title), box=box.SIMPLE)
    table.add_column("Property", style="bold")
    table.add_column("Value", overflow="fold")
    table.add_row("Options", escape(" | ".join(tag.options)) or "-")
    table.add_row("Label", escape(tag.label) or "-")
    table.add_row("Required", _yes_no(tag.required))
    table.add_row("Positional", _yes_no(tag.positional))
    table.add_row("Long", _yes_no(tag.long_option))
    table.add_row("Short", _yes_no(tag.force_short))
    table.add_row("Suffix Previous", _yes_no(tag.suffix_previous))
    table.add_row("Skip Name", _yes_no(tag.skip_name))
    table.add_row("Delimiters", "inherited" if tag.delimiters is None else repr(list(tag.delimiters)))
    table.add_row("Joiner", "inherited" if tag.joiner is None else repr(tag.joiner))
    table.add_row("Key Joiner", "inherited" if tag.key_part_joiner is None else repr(tag.key_part_joiner))
    table.add_row("Exclusive With", ", ".join(tag.mutually_exclusive_with) or "-")
    return table


@app.command("render")
def render_command(
    target: TARGET_ARGUMENT,
    tokens: Annotated[bool, typer.Option("--tokens", help="Print one token per line.")] = False,
    as_json: Annotated[bool, typer.Option("--json", help="Print the tokens as a JSON array.")] = False,
    config: CONFIG_OPTION = None,
    verbose: VERBOSE_OPTION = False,
) -> None:
    """Render a descriptor as a command line."""

    configure_logging(verbose=verbose)
    try:
        settings = _settings(config)
        descriptor = _resolve_descriptor(load_target(target))
        if as_json:
            typer.echo(json.dumps(parse(descriptor, settings=settings)))
            return
        emission = Emitter(settings).emit(descriptor)
    except CmdspecError as exc:
        fail(str(exc), use_color=detect_tty())
        raise typer.Exit(code=1) from exc
    if tokens:
        for token in emission.tokens:
            typer.echo(token)
        return
    typer.echo(emission.joined())


@app.command("tag")
def tag_command(
    annotation: Annotated[str, typer.Argument(help="Annotation string, e.g. 'all|a,long'.")],
) -> None:
    """Decode an annotation string and show its properties."""

    try:
        decoded = parse_tag(annotation)
    except CmdspecError as exc:
        fail(str(exc), use_color=detect_tty())
        raise typer.Exit(code=1) from exc
    get_console(color=detect_tty()).print(build_tag_table(decoded, title=annotation or "<empty>"))


@app.command("schema")
def schema_command(target: TARGET_ARGUMENT) -> None:
    """Show the annotated fields of a descriptor type."""

    obj = load_target(target)
    cls = obj if is_record_type(obj) else type(obj)
    try:
        schema = describe(cls)
    except CmdspecError as exc:
        fail(str(exc), use_color=detect_tty())
        raise typer.Exit(code=1) from exc

    table = Table(title=schema.name, box=box.SIMPLE, expand=True)
    table.add_column("Field", style="bold")
    table.add_column("Tag", overflow="fold")
    table.add_column("Options", overflow="fold")
    table.add_column("Flags", overflow="fold")
    for spec in schema.fields:
        tag = spec.tag
        flags = [
            name
            for name, enabled in (
                ("required", tag.required),
                ("positional", tag.positional),
                ("long", tag.long_option),
                ("short", tag.force_short),
                ("suffixprev", tag.suffix_previous),
                ("skipname", tag.skip_name),
            )
            if enabled
        ]
        table.add_row(
            spec.name,
            escape(spec.raw_tag) or "-",
            escape(" | ".join(tag.options)) or "-",
            ", ".join(flags) or "-",
        )
    console = get_console(color=detect_tty())
    console.print(table)
    ok(f"{len(schema.fields)} field(s)", use_color=detect_tty())


def main() -> None:
    """Console script entry point."""

    app()


__all__ = ["app", "load_target", "main"]
