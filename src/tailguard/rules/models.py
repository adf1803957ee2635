"""Rule data model: id, description, detector callable and severity."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from tailguard.config.schema import SEVERITY_ORDER, Severity
from tailguard.findings.models import Span
from tailguard.rules.markup import iter_class_tokens

Detector = Callable[[str], Iterable[Span]]


class InvalidRuleError(ValueError):
    """Raised when a rule is malformed at registration time."""


class DuplicateRuleError(ValueError):
    """Raised when a rule id is already registered."""


@dataclass(frozen=True)
class Rule:
    """A single lint rule.

    ``detect`` maps the scanned text to the spans that violate the rule.
    ``message`` is reported with every finding; it falls back to
    ``description`` when not given.
    """

    id: str
    description: str
    detect: Detector
    severity: Severity = "warning"
    name: Optional[str] = None
    message: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or self.id

    @property
    def finding_message(self) -> str:
        return self.message or self.description


def validate_rule(rule: Rule) -> None:
    """Raise InvalidRuleError unless *rule* is well-formed."""
    if not isinstance(rule, Rule):
        raise InvalidRuleError(f"Expected a Rule, got {type(rule).__name__}")
    if not isinstance(rule.id, str) or not rule.id.strip():
        raise InvalidRuleError("Rule is missing an id")
    if not isinstance(rule.description, str) or not rule.description.strip():
        raise InvalidRuleError(f"Rule {rule.id!r} has an empty description")
    if not callable(rule.detect):
        raise InvalidRuleError(f"Rule {rule.id!r} has a non-callable detector")
    if rule.severity not in SEVERITY_ORDER:
        raise InvalidRuleError(
            f"Rule {rule.id!r} has unknown severity {rule.severity!r} "
            f"(expected one of: {', '.join(SEVERITY_ORDER)})"
        )


# ---- detector factories ----


def regex_detector(pattern: str, flags: int = 0, group: str = "match") -> Detector:
    """Detector reporting every match of *pattern* in the whole text.

    When the pattern has a named group *group*, the span covers that group
    only; otherwise it covers the full match. Zero-width matches are skipped.
    """
    try:
        compiled = re.compile(pattern, flags)
    except re.error as exc:
        raise InvalidRuleError(f"Invalid pattern {pattern!r}: {exc}") from exc
    if compiled.fullmatch("") is not None:
        raise InvalidRuleError(f"Pattern {pattern!r} matches the empty string")

    def detect(text: str) -> Iterable[Span]:
        for m in compiled.finditer(text):
            if group in compiled.groupindex and m.group(group) is not None:
                span = Span(m.start(group), m.end(group))
            else:
                span = Span(m.start(), m.end())
            if span.end > span.start:
                yield span

    return detect


def class_token_detector(pattern: str, flags: int = 0) -> Detector:
    """Detector reporting class-attribute tokens whose utility fully matches *pattern*.

    Variant prefixes (``hover:``, ``md:``) are stripped before matching and
    the span covers the utility part of the token only.
    """
    try:
        compiled = re.compile(pattern, flags)
    except re.error as exc:
        raise InvalidRuleError(f"Invalid pattern {pattern!r}: {exc}") from exc

    def detect(text: str) -> Iterable[Span]:
        for token in iter_class_tokens(text):
            if compiled.fullmatch(token.utility):
                yield token.utility_span

    return detect


def pattern_rule(
    id: str,
    description: str,
    pattern: str,
    severity: Severity = "warning",
    *,
    name: Optional[str] = None,
    message: Optional[str] = None,
    flags: int = 0,
) -> Rule:
    """Build a Rule that matches *pattern* anywhere in the text."""
    return Rule(
        id=id,
        description=description,
        detect=regex_detector(pattern, flags),
        severity=severity,
        name=name,
        message=message,
    )


def class_token_rule(
    id: str,
    description: str,
    pattern: str,
    severity: Severity = "warning",
    *,
    name: Optional[str] = None,
    message: Optional[str] = None,
    flags: int = 0,
) -> Rule:
    """Build a Rule that matches *pattern* against each class-attribute utility."""
    return Rule(
        id=id,
        description=description,
        detect=class_token_detector(pattern, flags),
        severity=severity,
        name=name,
        message=message,
    )
