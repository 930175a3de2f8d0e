"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``POMOCTL_*`` prefix
  3. TOML file    — ``pomoctl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` fed by
:func:`pomoctl.config.discovery.resolve_config`.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from pomoctl.config.discovery import read_config, resolve_config
from pomoctl.config.models import SoundConfig, StoreConfig, TimerConfig
from pomoctl.domain.lifecycle import AdvancePolicy


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``pomoctl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data = read_config(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class PomoSettings(BaseSettings):
    """Unified settings for the pomoctl CLI.

    Stored on the :class:`AppContext` at the CLI root level.

    Attributes:
        state_root: Directory holding the ``.pomoctl/`` state directory
            (parent of ``pomoctl.toml``, or CWD if no config found).
        config_path: Explicit ``--config`` override, or None for discovery.
        policy: ``--policy`` override; None defers to ``[timer] policy``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "POMOCTL_",
        "env_nested_delimiter": "__",
    }

    # --- Resolved path (not in TOML — derived from config location) ---
    state_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    policy: AdvancePolicy | None = None

    # --- TOML sections ---
    timer: TimerConfig = Field(default_factory=TimerConfig)
    sound: SoundConfig = Field(default_factory=SoundConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)

    @property
    def effective_policy(self) -> AdvancePolicy:
        return self.policy or self.timer.policy

    @property
    def state_dir(self) -> Path:
        return self.state_root / self.store.dirname

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
        state_root: Path | None = None,
        **cli_flags: Any,
    ) -> PomoSettings:
        """Construct settings from a CLI invocation.

        Discovers ``pomoctl.toml`` via walk-up (or explicit *config_path*),
        resolves *state_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides. Flags passed
        as None are dropped so they don't mask env or TOML values.
        """
        toml_path, resolved_root = resolve_config(config_path, state_root)
        overrides = {k: v for k, v in cli_flags.items() if v is not None}

        _tls.toml_path = toml_path
        try:
            return cls(
                state_root=resolved_root,
                config_path=toml_path,
                **overrides,
            )
        finally:
            _tls.toml_path = None
