"""Configuration model and loaders for idebridge.

Responsibilities:
- Define runtime configuration as a typed dataclass.
- Provide loader entry points for file- and environment-based configuration.
- Merge sources with deterministic precedence: CLI > environment > file > defaults.

Key types:
- `BridgeConfig`: normalized runtime settings for one bridge.
- `ConfigLoader`: static construction helpers for `BridgeConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .discovery.finder import DEFAULT_MAX_DEPTH
from .parsing import normalize_optional_string, parse_permissive_boolean
from .platforms.windows import DEFAULT_EXTRA_PROGRAM_DIRS
from .telemetry.logger import is_known_level


DEFAULT_APP_NAME = "TCSAS-Devtools"

_ENV_KEYS = {
    "app_name": "IDEBRIDGE_APP_NAME",
    "install_path": "IDEBRIDGE_INSTALL_PATH",
    "search_depth": "IDEBRIDGE_SEARCH_DEPTH",
    "revalidate_cache": "IDEBRIDGE_REVALIDATE_CACHE",
    "cli_timeout_seconds": "IDEBRIDGE_CLI_TIMEOUT",
    "log_level": "IDEBRIDGE_LOG_LEVEL",
}


@dataclass(slots=True)
class BridgeConfig:
    """Runtime configuration for one bridged application.

    Attributes:
        app_name: Human-readable application name used as the discovery key.
        install_path: Optional override path checked before platform probing.
        search_depth: Depth budget for the recursive executable finder.
        revalidate_cache: Whether cached records are existence-checked before use.
        extra_program_dirs: Additional Windows program-files roots.
        cli_timeout_seconds: Optional timeout for CLI invocations.
        log_level: Minimum log level for bridge events.
    """

    app_name: str = DEFAULT_APP_NAME
    install_path: Path | None = None
    search_depth: int = DEFAULT_MAX_DEPTH
    revalidate_cache: bool = True
    extra_program_dirs: tuple[str, ...] = field(default=DEFAULT_EXTRA_PROGRAM_DIRS)
    cli_timeout_seconds: float | None = None
    log_level: str = "INFO"

    def validate(self) -> None:
        """Validate configuration values before building a bridge."""

        if normalize_optional_string(self.app_name) is None:
            raise ValueError("`app_name` must be a non-empty string.")
        if self.search_depth < 0:
            raise ValueError("`search_depth` must be zero or a positive integer.")
        if self.cli_timeout_seconds is not None and self.cli_timeout_seconds <= 0:
            raise ValueError("`cli_timeout_seconds` must be a positive number.")
        if not is_known_level(self.log_level):
            raise ValueError("`log_level` must be one of DEBUG, INFO, WARNING, ERROR.")

    def with_overrides(self, **overrides: object) -> BridgeConfig:
        """Return a copy with every non-`None` override applied."""

        applied = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **applied)


class ConfigLoader:
    """Factory methods for loading `BridgeConfig` from multiple sources."""

    @staticmethod
    def from_yaml(path: Path) -> BridgeConfig:
        """Load configuration from a YAML file."""

        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping.")
        return ConfigLoader._build_config_from_mapping(BridgeConfig(), payload, f"YAML config `{path}`")

    @staticmethod
    def from_env(
        env: Mapping[str, str] | None = None,
        base: BridgeConfig | None = None,
    ) -> BridgeConfig:
        """Apply `IDEBRIDGE_*` environment variables on top of `base`."""

        source = env if env is not None else os.environ
        payload: dict[str, Any] = {}
        for key, env_key in _ENV_KEYS.items():
            value = normalize_optional_string(source.get(env_key))
            if value is not None:
                payload[key] = value
        return ConfigLoader._build_config_from_mapping(
            base if base is not None else BridgeConfig(), payload, "Environment"
        )

    @staticmethod
    def resolve(
        config_file: Path | None = None,
        env: Mapping[str, str] | None = None,
        **cli_overrides: object,
    ) -> BridgeConfig:
        """Resolve effective configuration from file, environment, and CLI values."""

        base = ConfigLoader.from_yaml(config_file) if config_file is not None else BridgeConfig()
        merged = ConfigLoader.from_env(env, base=base).with_overrides(**cli_overrides)
        merged.validate()
        return merged

    @staticmethod
    def _build_config_from_mapping(
        base: BridgeConfig, payload: Mapping[str, Any], source_label: str
    ) -> BridgeConfig:
        ConfigLoader._validate_keys(payload, source_label)
        updates: dict[str, Any] = {}
        if "app_name" in payload:
            app_name = normalize_optional_string(payload["app_name"])
            if app_name is None:
                raise ValueError(f"{source_label} field `app_name` must be a non-empty string.")
            updates["app_name"] = app_name
        if "install_path" in payload:
            install_path = normalize_optional_string(payload["install_path"])
            updates["install_path"] = Path(install_path) if install_path is not None else None
        if "search_depth" in payload:
            updates["search_depth"] = ConfigLoader._non_negative_int(
                payload["search_depth"], "search_depth", source_label
            )
        if "revalidate_cache" in payload:
            parsed = parse_permissive_boolean(payload["revalidate_cache"])
            if parsed is None:
                raise ValueError(
                    f"{source_label} field `revalidate_cache` must be a boolean value "
                    "(`true`/`false`, `1`/`0`, `yes`/`no`)."
                )
            updates["revalidate_cache"] = parsed
        if "extra_program_dirs" in payload:
            updates["extra_program_dirs"] = ConfigLoader._string_tuple(
                payload["extra_program_dirs"], "extra_program_dirs", source_label
            )
        if "cli_timeout_seconds" in payload:
            updates["cli_timeout_seconds"] = ConfigLoader._optional_positive_float(
                payload["cli_timeout_seconds"], "cli_timeout_seconds", source_label
            )
        if "log_level" in payload:
            level = normalize_optional_string(payload["log_level"])
            if level is None or not is_known_level(level):
                raise ValueError(
                    f"{source_label} field `log_level` must be one of DEBUG, INFO, WARNING, ERROR."
                )
            updates["log_level"] = level.upper()
        return replace(base, **updates)

    @staticmethod
    def _validate_keys(payload: Mapping[str, Any], source_label: str) -> None:
        allowed = {config_field.name for config_field in fields(BridgeConfig)}
        unknown = sorted(str(key) for key in payload.keys() if key not in allowed)
        if unknown:
            raise ValueError(f"{source_label} contains unknown field(s): {', '.join(unknown)}.")

    @staticmethod
    def _non_negative_int(raw_value: Any, key: str, source_label: str) -> int:
        if isinstance(raw_value, bool):
            raise ValueError(f"{source_label} field `{key}` must be a non-negative integer.")
        try:
            parsed = int(str(raw_value).strip())
        except ValueError as exc:
            raise ValueError(
                f"{source_label} field `{key}` must be a non-negative integer."
            ) from exc
        if parsed < 0:
            raise ValueError(f"{source_label} field `{key}` must be a non-negative integer.")
        return parsed

    @staticmethod
    def _optional_positive_float(raw_value: Any, key: str, source_label: str) -> float | None:
        normalized = normalize_optional_string(raw_value)
        if normalized is None:
            return None
        if isinstance(raw_value, bool):
            raise ValueError(f"{source_label} field `{key}` must be a positive number.")
        try:
            parsed = float(normalized)
        except ValueError as exc:
            raise ValueError(f"{source_label} field `{key}` must be a positive number.") from exc
        if parsed <= 0:
            raise ValueError(f"{source_label} field `{key}` must be a positive number.")
        return parsed

    @staticmethod
    def _string_tuple(raw_value: Any, key: str, source_label: str) -> tuple[str, ...]:
        if raw_value is None:
            return ()
        if isinstance(raw_value, str):
            raw_items: list[Any] = [raw_value]
        elif isinstance(raw_value, (list, tuple)):
            raw_items = list(raw_value)
        else:
            raise ValueError(f"{source_label} field `{key}` must be a list of paths.")

        items: list[str] = []
        for raw_item in raw_items:
            item = normalize_optional_string(raw_item)
            if item is None:
                raise ValueError(f"{source_label} field `{key}` contains a blank entry.")
            items.append(item)
        return tuple(items)
