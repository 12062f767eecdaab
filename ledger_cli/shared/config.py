"""Configuration loading utilities for the ledger CLI suite."""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml

from . import paths
from .exceptions import ConfigurationError

OUTPUT_FORMATS = ("csv", "json")


@dataclass(frozen=True, slots=True)
class MT940Settings:
    """MT940 decoding configuration."""

    encoding: str  # legacy code page applied to every line
    account_label_prefix: str
    century: str  # two digits prepended to YYMMDD dates


@dataclass(frozen=True, slots=True)
class OutputSettings:
    """Where and how decoded ledgers are written."""

    directory: Path
    format: str  # "csv" or "json"


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Top-level application configuration."""

    source_path: Path
    mt940: MT940Settings
    output: OutputSettings

    def with_output_directory(self, new_path: str | Path) -> AppConfig:
        """Return a copy with an updated output directory."""
        resolved = paths.resolve_path(new_path)
        new_output = replace(self.output, directory=resolved)
        return replace(self, output=new_output)


def _default_config(env: Mapping[str, str]) -> dict[str, Any]:
    return {
        "mt940": {
            "encoding": "cp852",
            "account_label_prefix": "ING",
            "century": "20",
        },
        "output": {
            "directory": str(paths.default_output_dir(env=env)),
            "format": "csv",
        },
    }


ENV_OVERRIDE_SPEC: dict[str, str] = {
    "mt940.encoding": "LEDGERCLI_MT940_ENCODING",
    "mt940.account_label_prefix": "LEDGERCLI_MT940_ACCOUNT_LABEL",
    "mt940.century": "LEDGERCLI_MT940_CENTURY",
    "output.directory": paths.OUTPUT_DIR_ENV,
    "output.format": "LEDGERCLI_OUTPUT_FORMAT",
}


def load_config(
    config_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load configuration from defaults, YAML file, and env overrides."""
    env = dict(env or os.environ)
    resolved_config_path = _resolve_config_path(config_path, env)
    file_data = _load_yaml(resolved_config_path)
    defaults = _default_config(env)
    merged: dict[str, Any] = _deep_merge(defaults, file_data)
    merged = _apply_env_overrides(merged, env)
    return _build_config(merged, resolved_config_path)


def _resolve_config_path(
    config_path: str | Path | None, env: Mapping[str, str]
) -> Path:
    if config_path:
        return paths.resolve_path(config_path)
    return paths.default_config_path(env=env)


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
        if not isinstance(data, MutableMapping):
            raise ConfigurationError(f"Config file at {path} must define a mapping root object.")
        return dict(data)


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides(config: dict[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    config_copy = _deep_merge(config, {})  # shallow copy via merge
    for dotted_key, env_key in ENV_OVERRIDE_SPEC.items():
        if env_key not in env:
            continue
        _assign_nested(config_copy, dotted_key.split("."), env[env_key].strip())
    return config_copy


def _assign_nested(target: MutableMapping[str, Any], keys: list[str], value: Any) -> None:
    current = target
    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], MutableMapping):
            current[key] = {}
        current = current[key]  # type: ignore[assignment]
    current[keys[-1]] = value


def _build_config(data: Mapping[str, Any], source_path: Path) -> AppConfig:
    try:
        mt940_cfg = data["mt940"]
        mt940 = MT940Settings(
            encoding=str(mt940_cfg["encoding"]),
            account_label_prefix=str(mt940_cfg["account_label_prefix"]),
            century=str(mt940_cfg["century"]),
        )
        output_cfg = data["output"]
        output = OutputSettings(
            directory=paths.resolve_path(str(output_cfg["directory"])),
            format=str(output_cfg["format"]).lower(),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid configuration structure: {exc}") from exc

    try:
        codecs.lookup(mt940.encoding)
    except LookupError as exc:
        raise ConfigurationError(f"Unknown MT940 encoding '{mt940.encoding}'") from exc
    if len(mt940.century) != 2 or not mt940.century.isdigit():
        raise ConfigurationError(
            f"mt940.century must be two digits, got '{mt940.century}'"
        )
    if output.format not in OUTPUT_FORMATS:
        raise ConfigurationError(
            f"output.format must be one of {', '.join(OUTPUT_FORMATS)}, got '{output.format}'"
        )

    return AppConfig(source_path=source_path, mt940=mt940, output=output)
