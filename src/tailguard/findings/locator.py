"""Offset -> line:col conversion and severity gating."""

from __future__ import annotations

from bisect import bisect_right
from typing import Iterable, List

from tailguard.config.schema import severity_at_or_above
from tailguard.findings.models import Finding, LocatedFinding


class LineIndex:
    """Maps character offsets of a text to 1-based (line, column) pairs."""

    def __init__(self, text: str) -> None:
        self._starts = [0]
        for i, ch in enumerate(text):
            if ch == "\n":
                self._starts.append(i + 1)

    def position(self, offset: int) -> tuple[int, int]:
        line = bisect_right(self._starts, offset)
        return line, offset - self._starts[line - 1] + 1

    def line_count(self) -> int:
        return len(self._starts)


def locate(
    findings: Iterable[Finding],
    text: str,
    path: str,
    fail_on: str,
) -> List[LocatedFinding]:
    """Place engine findings in *path*, preserving their order."""
    index = LineIndex(text)
    located: List[LocatedFinding] = []
    for f in findings:
        line, col = index.position(f.span.start)
        located.append(
            LocatedFinding(
                rule_id=f.rule_id,
                severity=f.severity,
                message=f.message,
                path=path,
                line=line,
                col=col,
                span=f.span,
                matched_text=f.span.slice(text),
                is_blocking=severity_at_or_above(f.severity, fail_on),
            )
        )
    return located
