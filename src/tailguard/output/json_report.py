"""JSON reporter for CI pipelines and editor integrations."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from tailguard.findings.models import ScanResult


def to_dict(result: ScanResult) -> Dict[str, Any]:
    """Convert ScanResult to a JSON-serialisable dict."""
    findings_list: List[Dict[str, Any]] = []
    for f in result.findings:
        findings_list.append({
            "rule": f.rule_id,
            "severity": f.severity,
            "message": f.message,
            "file": f.path,
            "line": f.line,
            "column": f.col,
            "span": {"start": f.span.start, "end": f.span.end},
            "match": f.matched_text,
            "is_blocking": f.is_blocking,
        })

    suppressed_list: List[Dict[str, Any]] = []
    for s in result.suppressed:
        suppressed_list.append({
            "rule": s.rule_id,
            "file": s.path,
            "line": s.line,
            "reason": s.reason,
            "source": s.source,
        })

    return {
        "version": "1.0",
        "scanned_files": result.scanned_files,
        "total_findings": result.total_findings,
        "blocked": result.blocked,
        "findings": findings_list,
        "suppressed": len(result.suppressed),
        "suppressed_details": suppressed_list,
        "skipped_files": result.skipped_files,
        "scan_duration_ms": result.scan_duration_ms,
    }


def render(result: ScanResult) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result), indent=2)
