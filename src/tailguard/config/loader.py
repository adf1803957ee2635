"""Load and merge configuration from .tailguard.toml and env vars."""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from tailguard.config.schema import (
    OUTPUT_FORMATS,
    SEVERITY_ORDER,
    AllowlistConfig,
    IgnoreConfig,
    OutputConfig,
    RulesConfig,
    ScanConfig,
    TailguardConfig,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".tailguard.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    unknown = set(raw) - valid_fields
    if unknown:
        logger.debug("Ignoring unknown keys in [%s]: %s", section, ", ".join(sorted(unknown)))
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: TailguardConfig) -> None:
    if cfg.scan.fail_on not in SEVERITY_ORDER:
        raise ConfigError(
            f"scan.fail_on must be one of {', '.join(SEVERITY_ORDER)}, got {cfg.scan.fail_on!r}"
        )
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"output.format must be one of {', '.join(OUTPUT_FORMATS)}, got {cfg.output.format!r}"
        )


def _merge_env_overrides(cfg: TailguardConfig) -> None:
    """Apply TAILGUARD_* environment variable overrides."""
    if val := os.environ.get("TAILGUARD_FAIL_ON"):
        if val in SEVERITY_ORDER:
            cfg.scan.fail_on = val  # type: ignore[assignment]
    if val := os.environ.get("TAILGUARD_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("TAILGUARD_DISABLE_RULES"):
        cfg.rules.disable.extend(r.strip() for r in val.split(",") if r.strip())
    if val := os.environ.get("TAILGUARD_IGNORE_PATHS"):
        cfg.ignore.paths.extend(p.strip() for p in val.split(os.pathsep) if p.strip())


def load_config(
    root: Path,
    config_override: Optional[str] = None,
) -> TailguardConfig:
    """Load, validate, and return a TailguardConfig."""
    config_path = find_config_file(root, config_override)

    if config_path is None:
        cfg = TailguardConfig()
    else:
        logger.info("Loading config from %s", config_path)
        raw = _parse_toml(config_path)
        try:
            cfg = TailguardConfig(
                version=str(raw.get("version", "1.0")),
                scan=_build_section(raw, ScanConfig, "scan"),
                output=_build_section(raw, OutputConfig, "output"),
                rules=_build_section(raw, RulesConfig, "rules"),
                ignore=_build_section(raw, IgnoreConfig, "ignore"),
                allowlist=_build_section(raw, AllowlistConfig, "allowlist"),
            )
        except TypeError as exc:
            raise ConfigError(f"Invalid config in {config_path}: {exc}") from exc
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
