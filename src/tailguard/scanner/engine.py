"""Core rule engine — an append-only rule catalog and a pure ``scan``.

The catalog is stored as a tuple that is swapped on every registration, so a
scan running alongside a registration sees either the complete new rule or
none of it. ``scan`` itself never mutates the engine or the text.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from tailguard.findings.models import Finding, Span
from tailguard.rules.models import DuplicateRuleError, Rule, validate_rule

logger = logging.getLogger(__name__)


class ScanError(Exception):
    """Raised when scan input cannot be read."""


def _rule_failure(rule: Rule, exc: Exception) -> Finding:
    return Finding(
        rule_id=rule.id,
        span=Span(0, 0),
        message=f"Rule {rule.id!r} failed during evaluation: {type(exc).__name__}: {exc}",
        severity="error",
    )


def evaluate_rule(rule: Rule, text: str) -> List[Finding]:
    """Run one rule over *text*.

    A detector that raises yields a single synthetic error finding instead of
    its partial results.
    """
    try:
        spans = list(rule.detect(text))
        for span in spans:
            if not isinstance(span, Span):
                raise TypeError(f"detector returned {type(span).__name__}, expected Span")
            if span.end > len(text):
                raise ValueError(f"span {span.start}:{span.end} is past end of text")
    except Exception as exc:
        logger.warning("Rule %s raised %s; reporting as a finding", rule.id, type(exc).__name__)
        logger.debug("Rule %s failure detail", rule.id, exc_info=True)
        return [_rule_failure(rule, exc)]

    message = rule.finding_message
    return [
        Finding(rule_id=rule.id, span=span, message=message, severity=rule.severity)
        for span in spans
    ]


class FindingSequence:
    """Lazy, restartable view over the findings of one ``(rules, text)`` pair.

    Nothing is evaluated until iteration starts. Each iteration re-runs the
    rules from scratch and yields findings ordered by ``(span.start, rule_id)``.
    """

    def __init__(self, rules: Tuple[Rule, ...], text: str) -> None:
        self._rules = rules
        self._text = text

    def __iter__(self) -> Iterator[Finding]:
        collected: List[Finding] = []
        for rule in self._rules:
            collected.extend(evaluate_rule(rule, self._text))
        collected.sort(key=lambda f: f.sort_key)
        yield from collected

    def __repr__(self) -> str:
        return f"FindingSequence(rules={len(self._rules)}, text_length={len(self._text)})"


class RuleEngine:
    """Ordered, append-only catalog of rules."""

    def __init__(self, rules: Optional[Iterable[Rule]] = None) -> None:
        self._rules: Tuple[Rule, ...] = ()
        if rules is not None:
            self.register_many(rules)

    # ---- registration ----

    def register(self, rule: Rule) -> None:
        validate_rule(rule)
        if any(r.id == rule.id for r in self._rules):
            raise DuplicateRuleError(f"Rule {rule.id!r} is already registered")
        self._rules = self._rules + (rule,)
        logger.debug("Registered rule %s (%s)", rule.id, rule.severity)

    def register_many(self, rules: Iterable[Rule]) -> None:
        for r in rules:
            self.register(r)

    # ---- queries ----

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return self._rules

    def get(self, rule_id: str) -> Optional[Rule]:
        for r in self._rules:
            if r.id == rule_id:
                return r
        return None

    def __contains__(self, rule_id: object) -> bool:
        return any(r.id == rule_id for r in self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    # ---- scanning ----

    def scan(self, text: str) -> FindingSequence:
        """Return the ordered findings of every registered rule over *text*."""
        return FindingSequence(self._rules, text)
