"""Unified settings: one object built from every configuration source.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``ORGMAP_*`` prefix, ``__`` for nested sections
  3. TOML file: ``orgmap.toml`` discovered via walk-up
  4. Code defaults: baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from orgmap.config.discovery import find_config
from orgmap.config.models import HierarchyConfig, StoreConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from an ``orgmap.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# TOML path handed to the settings_customise_sources classmethod.
_tls = threading.local()


class OrgmapSettings(BaseSettings):
    """Frozen settings for one CLI invocation, stored on the Click context.

    Attributes:
        root: Workspace root (directory holding ``orgmap.toml``, or CWD).
        config_path: The TOML file in effect, if any.
        dataset: ``--dataset`` override of ``store.dataset``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ORGMAP_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    dataset: str | None = None

    # --- TOML sections ---
    store: StoreConfig = Field(default_factory=StoreConfig)
    hierarchy: HierarchyConfig = Field(default_factory=HierarchyConfig)

    @property
    def active_dataset(self) -> str:
        return self.dataset or self.store.dataset

    @property
    def db_path(self) -> Path:
        path = self.store.path
        return path if path.is_absolute() else self.root / path

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source between env vars and defaults."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_path", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> OrgmapSettings:
        """Construct settings for a CLI invocation.

        Uses the explicit *config_path* or walk-up discovery from *root*;
        the workspace root defaults to the config file's directory.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(root)

        if root is None:
            root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(root=root, config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None
