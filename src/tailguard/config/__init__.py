"""Configuration loading, schema, and defaults."""

from tailguard.config.loader import ConfigError, load_config
from tailguard.config.schema import Severity, TailguardConfig, severity_at_or_above

__all__ = [
    "ConfigError",
    "Severity",
    "TailguardConfig",
    "load_config",
    "severity_at_or_above",
]
