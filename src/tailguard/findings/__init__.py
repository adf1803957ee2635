"""Finding models and location."""

from tailguard.findings.locator import LineIndex, locate
from tailguard.findings.models import Finding, LocatedFinding, ScanResult, Span

__all__ = ["Finding", "LineIndex", "LocatedFinding", "ScanResult", "Span", "locate"]
