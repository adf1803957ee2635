"""Inline suppression comments.

Suppression conventions:
  - ``// tailguard-ignore`` at the end of line N suppresses ALL rules on line N.
  - The same comment standing alone on line N suppresses line N+1.
  - ``tailguard-ignore[rule-a, rule-b]`` suppresses only those rules.
  - ``//``, ``/* */``, JSX ``{/* */}`` and HTML ``<!-- -->`` comments are all
    recognised.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Tuple

_SUPPRESS_RE = re.compile(
    r"(?://|/\*|<!--)\s*tailguard-ignore"
    r"(?:\[([A-Za-z0-9_,\s-]+)\])?"  # optional [rule-a, rule-b]
    r"\s*(?:\*/\s*\}?|-->)?\s*$"
)


@dataclass(frozen=True)
class Suppression:
    """Audit record of a suppressed finding."""

    rule_id: str
    path: str
    line: int
    reason: str  # 'inline' | 'next-line'
    source: str  # e.g. 'tailguard-ignore[no-hardcoded-color]'


def parse_inline_suppression(line_content: str) -> Tuple[bool, Optional[FrozenSet[str]]]:
    """Parse a line for a ``tailguard-ignore`` comment.

    Returns:
        (is_suppressed, rule_ids). *rule_ids* is None to suppress ALL rules,
        or a frozenset of specific IDs.
    """
    m = _SUPPRESS_RE.search(line_content)
    if m is None:
        return False, None
    scope = m.group(1)
    if scope:
        ids = frozenset(r.strip() for r in scope.split(",") if r.strip())
        return True, ids
    return True, None


def is_pure_comment(line_content: str) -> bool:
    """Return True if the line is a standalone JS/CSS/JSX/HTML comment."""
    stripped = line_content.strip()
    return stripped.startswith(("//", "/*", "{/*", "<!--", "*"))


class SuppressionChecker:
    """Check whether a finding on a given line should be suppressed."""

    def __init__(self, path: str) -> None:
        self.path = path
        # line -> (reason, specific_rules)
        self._lines: Dict[int, Tuple[str, Optional[FrozenSet[str]]]] = {}

    @classmethod
    def from_text(cls, text: str, path: str) -> "SuppressionChecker":
        checker = cls(path)
        # "\n" only, the same line model as findings.locator.LineIndex
        checker.register_lines(list(enumerate(text.split("\n"), 1)))
        return checker

    def register_lines(self, lines: List[Tuple[int, str]]) -> None:
        """Pre-scan lines for suppression markers.

        *lines* is a list of (line_no, content) tuples **in order**.
        """
        pending: Optional[FrozenSet[str]] = None
        pending_active = False

        for line_no, content in lines:
            is_suppressed, rule_ids = parse_inline_suppression(content)

            if is_suppressed:
                self._lines[line_no] = ("inline", rule_ids)
                pending_active = is_pure_comment(content)
                pending = rule_ids
                continue

            if pending_active:
                self._lines[line_no] = ("next-line", pending)
            pending_active = False
            pending = None

    def is_suppressed(self, line_no: int, rule_id: str) -> Optional[Suppression]:
        """Return a Suppression record if the finding should be suppressed, else None."""
        entry = self._lines.get(line_no)
        if entry is None:
            return None
        reason, specific_ids = entry
        if specific_ids is None:
            source = "tailguard-ignore"
        elif rule_id in specific_ids:
            source = f"tailguard-ignore[{rule_id}]"
        else:
            return None
        return Suppression(rule_id=rule_id, path=self.path, line=line_no, reason=reason, source=source)

    @property
    def marked_lines(self) -> List[int]:
        return sorted(self._lines)


def find_suppression_comments(text: str) -> List[Tuple[int, str]]:
    """Return (line_no, scope) for every suppression comment in *text*.

    *scope* is ``"ALL"`` or the comma-joined rule ids.
    """
    found = []
    for line_no, content in enumerate(text.split("\n"), 1):
        ok, ids = parse_inline_suppression(content)
        if ok:
            found.append((line_no, "ALL" if ids is None else ",".join(sorted(ids))))
    return found
