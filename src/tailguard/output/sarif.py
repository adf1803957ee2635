"""SARIF v2.1.0 reporter: GitHub code scanning upload format."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence

from tailguard import __version__
from tailguard.findings.models import ScanResult
from tailguard.rules.models import Rule

_SCHEMA = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/main/sarif-2.1/schema/sarif-schema-2.1.0.json"


def _rule_descriptor(rule_id: str, rule: Optional[Rule]) -> Dict[str, Any]:
    if rule is None:
        return {"id": rule_id, "name": rule_id}
    return {
        "id": rule.id,
        "name": rule.display_name,
        "shortDescription": {"text": rule.display_name},
        "fullDescription": {"text": rule.description},
        "defaultConfiguration": {"level": rule.severity},
    }


def to_dict(result: ScanResult, rules: Sequence[Rule] = ()) -> Dict[str, Any]:
    """Convert ScanResult to a SARIF v2.1.0 dict.

    *rules* supplies descriptions for the driver's rule table; rule ids seen in
    findings but absent from *rules* get a minimal descriptor.
    """
    by_id = {r.id: r for r in rules}
    descriptors: List[Dict[str, Any]] = []
    seen: set[str] = set()
    results: List[Dict[str, Any]] = []

    for f in result.findings:
        if f.rule_id not in seen:
            seen.add(f.rule_id)
            descriptors.append(_rule_descriptor(f.rule_id, by_id.get(f.rule_id)))

        results.append({
            "ruleId": f.rule_id,
            "level": f.severity,
            "message": {"text": f.message},
            "locations": [
                {
                    "physicalLocation": {
                        "artifactLocation": {"uri": f.path},
                        "region": {
                            "startLine": f.line,
                            "startColumn": f.col,
                            "charOffset": f.span.start,
                            "charLength": len(f.span),
                        },
                    }
                }
            ],
        })

    return {
        "$schema": _SCHEMA,
        "version": "2.1.0",
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": "tailguard",
                        "version": __version__,
                        "rules": descriptors,
                    }
                },
                "results": results,
            }
        ],
    }


def render(result: ScanResult, rules: Sequence[Rule] = ()) -> str:
    """Return SARIF JSON string."""
    return json.dumps(to_dict(result, rules), indent=2)
