"""Scanner — rule engine, scan pipeline, suppression."""

from tailguard.scanner.engine import FindingSequence, RuleEngine, ScanError
from tailguard.scanner.runner import scan_paths, scan_text
from tailguard.scanner.suppression import Suppression, SuppressionChecker

__all__ = [
    "FindingSequence",
    "RuleEngine",
    "ScanError",
    "Suppression",
    "SuppressionChecker",
    "scan_paths",
    "scan_text",
]
