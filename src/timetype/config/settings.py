"""Settings for the timetype CLI — flags, env vars, and TOML in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``TIMETYPE_*`` prefix
  3. TOML file    — ``timetype.toml`` discovered via walk-up
  4. Code defaults
"""

from __future__ import annotations

import os
import threading
import tomllib
from datetime import tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import click
from pydantic import field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from timetype.clock import UTC

CONFIG_FILENAME = "timetype.toml"
CONFIG_ENV_VAR = "TIMETYPE_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Locate the TOML file: ``$TIMETYPE_CONFIG`` if set, else the nearest
    ``timetype.toml`` in *start* (default: cwd) or one of its parents.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def resolve_zone(name: str) -> tzinfo:
    """Map a zone name to a tzinfo; ``UTC`` is ``datetime.timezone.utc``."""
    if name.upper() == "UTC":
        return UTC
    return ZoneInfo(name)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``timetype.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class TimetypeSettings(BaseSettings):
    """Unified settings for the timetype CLI.

    Attributes:
        zone: Zone name attached to parsed clocks.
        config_path: The TOML file that was read, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "TIMETYPE_",
    }

    config_path: Path | None = None

    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    zone: str = "UTC"

    @field_validator("zone")
    @classmethod
    def _known_zone(cls, value: str) -> str:
        try:
            resolve_zone(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            msg = f"Unknown time zone: {value}"
            raise ValueError(msg) from exc
        return value

    @property
    def tz(self) -> tzinfo:
        return resolve_zone(self.zone)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> TimetypeSettings:
        """Construct settings from CLI invocation.

        Uses *config_path* when given, otherwise discovers
        ``timetype.toml`` by walking up from *start*. CLI flags that are
        ``None`` are left to the lower-priority sources.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        flags = {key: val for key, val in cli_flags.items() if val is not None}

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **flags)
        finally:
            _tls.toml_path = None
