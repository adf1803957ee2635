"""Rule catalog: models, detector factories, built-in rules."""

from tailguard.rules.models import (
    DuplicateRuleError,
    InvalidRuleError,
    Rule,
    class_token_rule,
    pattern_rule,
    validate_rule,
)

__all__ = [
    "DuplicateRuleError",
    "InvalidRuleError",
    "Rule",
    "class_token_rule",
    "pattern_rule",
    "validate_rule",
]
