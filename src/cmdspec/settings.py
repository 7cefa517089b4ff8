# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Configuration model for the global marshalling defaults."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import SettingsError

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "cmdspec"


class MarshalSettings(BaseModel):
    """Delimiters and joiners applied when an annotation does not override them."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    argument_delimiter: str = " "
    command_word_separator: str = "-"
    key_part_joiner: str = "."
    key_value_joiner: str | None = Field(
        default=None,
        description="Joiner between an option name and its value; defaults to the argument delimiter.",
    )

    @property
    def value_joiner(self) -> str:
        """Return the effective option/value joiner."""

        return self.argument_delimiter if self.key_value_joiner is None else self.key_value_joiner


DEFAULT_SETTINGS: Final[MarshalSettings] = MarshalSettings()


def settings_from_mapping(data: Mapping[str, Any], *, context: str = "settings") -> MarshalSettings:
    """Validate ``data`` into :class:`MarshalSettings`.

    Args:
        data: Raw key/value pairs, using either ``snake_case`` or ``kebab-case`` keys.
        context: Human-readable source description used in error messages.

    Returns:
        MarshalSettings: Validated, immutable settings.

    Raises:
        SettingsError: If ``data`` contains unknown keys or invalid values.
    """

    normalised = {str(key).replace("-", "_"): value for key, value in data.items()}
    try:
        return MarshalSettings.model_validate(normalised)
    except ValidationError as exc:
        raise SettingsError(f"{context}: {exc}") from exc


def load_settings(path: Path) -> MarshalSettings:
    """Load settings from a TOML file.

    A ``pyproject.toml`` is read from its ``[tool.cmdspec]`` table; any other
    file is treated as a standalone settings document. Missing tables yield
    the defaults.

    Args:
        path: TOML file to read.

    Returns:
        MarshalSettings: Settings declared in ``path``.

    Raises:
        SettingsError: If the file cannot be read, is not valid TOML, or holds invalid settings.
    """

    try:
        with path.open("rb") as handle:
            document = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise SettingsError(f"{path}: {exc}") from exc

    section: Any = document
    if path.name == PYPROJECT_FILENAME:
        tool_section = document.get(PYPROJECT_TOOL_KEY)
        section = tool_section.get(PYPROJECT_SECTION_KEY) if isinstance(tool_section, Mapping) else None
        if section is None:
            return DEFAULT_SETTINGS
    if not isinstance(section, Mapping):
        raise SettingsError(f"{path}: settings must be a table")
    return settings_from_mapping(section, context=str(path))


__all__: Final[tuple[str, ...]] = (
    "DEFAULT_SETTINGS",
    "MarshalSettings",
    "load_settings",
    "settings_from_mapping",
)
