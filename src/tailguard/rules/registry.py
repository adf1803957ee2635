"""Rule registry — loads built-in and custom rules into a RuleEngine."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml

from tailguard.config.schema import TailguardConfig
from tailguard.rules.models import InvalidRuleError, Rule, class_token_rule, pattern_rule
from tailguard.scanner.engine import RuleEngine

logger = logging.getLogger(__name__)

CUSTOM_RULES_DIR = ".tailguard-rules"

_SCOPES = {"text": pattern_rule, "class": class_token_rule}


def rule_from_dict(entry: Dict[str, Any], source: str = "<custom>") -> Rule:
    """Build a Rule from a custom rule mapping (one YAML list entry)."""
    if not isinstance(entry, dict):
        raise InvalidRuleError(f"{source}: rule entry must be a mapping")
    rule_id = entry.get("id")
    if not rule_id:
        raise InvalidRuleError(f"{source}: rule is missing an id")
    pattern = entry.get("pattern")
    if not pattern:
        raise InvalidRuleError(f"{source}: rule {rule_id!r} is missing a pattern")
    scope = entry.get("scope", "text")
    factory = _SCOPES.get(scope)
    if factory is None:
        raise InvalidRuleError(
            f"{source}: rule {rule_id!r} has unknown scope {scope!r} (expected text or class)"
        )
    return factory(
        id=str(rule_id),
        description=entry.get("description", ""),
        pattern=str(pattern),
        severity=entry.get("severity", "warning"),
        name=entry.get("name"),
        message=entry.get("message"),
    )


def load_rule_file(path: Path) -> List[Rule]:
    """Parse a YAML rule file (a single mapping or a list of mappings)."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise InvalidRuleError(f"Failed to read rule file {path}: {exc}") from exc
    if data is None:
        return []
    if not isinstance(data, list):
        data = [data]
    return [rule_from_dict(entry, source=str(path)) for entry in data]


def load_custom_rules(directory: Path) -> List[Rule]:
    """Load every ``*.yaml`` / ``*.yml`` rule file in *directory*, sorted by name."""
    rules: List[Rule] = []
    if not directory.is_dir():
        return rules
    for path in sorted(directory.iterdir()):
        if path.suffix in (".yaml", ".yml"):
            loaded = load_rule_file(path)
            logger.info("Loaded %d custom rule(s) from %s", len(loaded), path)
            rules.extend(loaded)
    return rules


def build_engine(config: TailguardConfig, root: Path) -> RuleEngine:
    """Create an engine holding the config-selected built-in and custom rules.

    Raises InvalidRuleError / DuplicateRuleError for a bad catalog.
    """
    from tailguard.rules.builtin import ALL_BUILTIN_RULES

    candidates = [*ALL_BUILTIN_RULES, *load_custom_rules(root / CUSTOM_RULES_DIR)]

    engine = RuleEngine()
    for rule in candidates:
        if not config.rule_selected(rule.id):
            logger.debug("Rule %s disabled by config", rule.id)
            continue
        engine.register(rule)
    return engine
