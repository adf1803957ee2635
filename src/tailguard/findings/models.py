"""Finding data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True, order=True)
class Span:
    """Half-open character range ``[start, end)`` in the scanned text."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"Span start must be >= 0, got {self.start}")
        if self.end < self.start:
            raise ValueError(f"Span end {self.end} is before start {self.start}")

    def __len__(self) -> int:
        return self.end - self.start

    def slice(self, text: str) -> str:
        return text[self.start:self.end]


@dataclass(frozen=True)
class Finding:
    """A single rule match produced by the engine."""

    rule_id: str
    span: Span
    message: str
    severity: str = "warning"

    @property
    def sort_key(self) -> tuple[int, str]:
        return (self.span.start, self.rule_id)


@dataclass
class LocatedFinding:
    """An engine finding placed in a file, with severity gating applied."""

    rule_id: str
    severity: str
    message: str
    path: str
    line: int
    col: int
    span: Span
    matched_text: str = ""
    is_blocking: bool = True  # does this finding cause exit code 1?

    @property
    def location(self) -> str:
        return f"{self.line}:{self.col}"


@dataclass
class ScanResult:
    """Complete result of a scan run."""

    findings: List[LocatedFinding] = field(default_factory=list)
    suppressed: List["Suppression"] = field(default_factory=list)  # type: ignore[name-defined]
    skipped_files: List[str] = field(default_factory=list)
    scanned_files: int = 0
    blocked: bool = False
    scan_duration_ms: float = 0.0

    @property
    def total_findings(self) -> int:
        return len(self.findings)

    @property
    def blocking_findings(self) -> List[LocatedFinding]:
        return [f for f in self.findings if f.is_blocking]

    @property
    def informational_findings(self) -> List[LocatedFinding]:
        return [f for f in self.findings if not f.is_blocking]

    def merge(self, other: "ScanResult") -> None:
        """Fold *other* into this result (used when scanning many files)."""
        self.findings.extend(other.findings)
        self.suppressed.extend(other.suppressed)
        self.skipped_files.extend(other.skipped_files)
        self.scanned_files += other.scanned_files
        self.blocked = self.blocked or other.blocked
