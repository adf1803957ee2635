"""Plain-text reporter, one ``path:line:col [severity] rule: message`` line per finding."""

from __future__ import annotations

from typing import List

from tailguard.findings.models import LocatedFinding, ScanResult


def format_finding(finding: LocatedFinding, *, with_path: bool = True) -> str:
    line = f"{finding.line}:{finding.col} [{finding.severity}] {finding.rule_id}: {finding.message}"
    return f"{finding.path}:{line}" if with_path else line


def render(result: ScanResult, *, show_summary: bool = True) -> str:
    """Return the report as a string (no trailing newline)."""
    lines: List[str] = [format_finding(f) for f in result.findings]
    if show_summary:
        errors = sum(1 for f in result.findings if f.severity == "error")
        warnings = result.total_findings - errors
        lines.append(
            f"{result.total_findings} finding(s) ({errors} error, {warnings} warning) "
            f"in {result.scanned_files} file(s)"
        )
    return "\n".join(lines)
