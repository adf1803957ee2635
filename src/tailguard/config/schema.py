"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

Severity = Literal["warning", "error"]
OutputFormat = Literal["text", "terminal", "json", "sarif"]

SEVERITY_ORDER: dict[str, int] = {
    "warning": 0,
    "error": 1,
}

OUTPUT_FORMATS = ("text", "terminal", "json", "sarif")

DEFAULT_EXTENSIONS = [".tsx", ".jsx", ".ts", ".js", ".mdx", ".html", ".css"]


def severity_at_or_above(finding_sev: str, threshold: str) -> bool:
    """Return True if *finding_sev* is at or above *threshold*."""
    return SEVERITY_ORDER.get(finding_sev, 0) >= SEVERITY_ORDER.get(threshold, 0)


@dataclass
class ScanConfig:
    fail_on: Severity = "error"  # findings at or above this level are blocking
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    max_file_size_kb: int = 512


@dataclass
class OutputConfig:
    format: OutputFormat = "text"
    show_summary: bool = True


@dataclass
class RulesConfig:
    enable: List[str] = field(default_factory=list)  # empty = all enabled
    disable: List[str] = field(default_factory=list)


@dataclass
class IgnoreConfig:
    files: List[str] = field(default_factory=list)
    rules: List[str] = field(default_factory=list)
    paths: List[str] = field(default_factory=list)


@dataclass
class AllowlistConfig:
    patterns: List[str] = field(default_factory=list)


@dataclass
class TailguardConfig:
    version: str = "1.0"
    scan: ScanConfig = field(default_factory=ScanConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    rules: RulesConfig = field(default_factory=RulesConfig)
    ignore: IgnoreConfig = field(default_factory=IgnoreConfig)
    allowlist: AllowlistConfig = field(default_factory=AllowlistConfig)

    def rule_selected(self, rule_id: str) -> bool:
        """Return True unless config filters *rule_id* out of the catalog."""
        if self.rules.enable and rule_id not in self.rules.enable:
            return False
        return rule_id not in self.rules.disable and rule_id not in self.ignore.rules
