"""Scan pipeline: files and text in, located and gated findings out."""

from __future__ import annotations

import logging
import re
import time
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from tailguard.config.schema import TailguardConfig
from tailguard.findings.locator import locate
from tailguard.findings.models import ScanResult
from tailguard.scanner.engine import RuleEngine, ScanError
from tailguard.scanner.suppression import SuppressionChecker

logger = logging.getLogger(__name__)


def _compile_allowlist(config: TailguardConfig) -> List[re.Pattern[str]]:
    try:
        return [re.compile(p) for p in config.allowlist.patterns]
    except re.error as exc:
        raise ScanError(f"Invalid allowlist pattern: {exc}") from exc


def _scan_one(
    text: str,
    engine: RuleEngine,
    config: TailguardConfig,
    path: str,
    allowlist: Sequence[re.Pattern[str]],
) -> ScanResult:
    suppression = SuppressionChecker.from_text(text, path)
    result = ScanResult(scanned_files=1)

    for finding in locate(engine.scan(text), text, path, config.scan.fail_on):
        if finding.matched_text and any(p.search(finding.matched_text) for p in allowlist):
            logger.debug("%s:%s %s allowlisted", path, finding.location, finding.rule_id)
            continue
        sup = suppression.is_suppressed(finding.line, finding.rule_id)
        if sup is not None:
            result.suppressed.append(sup)
            continue
        result.findings.append(finding)

    result.blocked = any(f.is_blocking for f in result.findings)
    return result


def scan_text(
    text: str,
    engine: RuleEngine,
    config: Optional[TailguardConfig] = None,
    path: str = "<stdin>",
) -> ScanResult:
    """Scan a single text blob. Returns a ScanResult."""
    cfg = config or TailguardConfig()
    start = time.perf_counter()
    result = _scan_one(text, engine, cfg, path, _compile_allowlist(cfg))
    result.scan_duration_ms = round((time.perf_counter() - start) * 1000, 2)
    return result


def _path_tails(path: str) -> List[str]:
    """``a/b/c.tsx`` -> [``a/b/c.tsx``, ``b/c.tsx``, ``c.tsx``]."""
    parts = [p for p in path.split("/") if p not in ("", ".")]
    return ["/".join(parts[i:]) for i in range(len(parts))]


def ignore_globs(config: TailguardConfig) -> List[str]:
    return config.ignore.files + config.ignore.paths


def is_ignored(path: str, globs: Sequence[str]) -> bool:
    """Match *globs* against the path and every trailing sub-path of it."""
    return any(fnmatch(tail, g) for tail in _path_tails(path) for g in globs)


def iter_source_files(paths: Iterable[Path], config: TailguardConfig) -> Iterator[Path]:
    """Expand *paths* into the files to scan. Raises ScanError on a missing path."""
    extensions = {e.lower() for e in config.scan.extensions}
    for p in paths:
        if p.is_file():
            yield p
        elif p.is_dir():
            for child in sorted(p.rglob("*")):
                if child.is_file() and child.suffix.lower() in extensions:
                    yield child
        else:
            raise ScanError(f"Path not found: {p}")


def scan_paths(
    paths: Sequence[Path],
    engine: RuleEngine,
    config: TailguardConfig,
) -> ScanResult:
    """Scan files and directories. Returns one merged ScanResult."""
    start = time.perf_counter()
    allowlist = _compile_allowlist(config)
    ignored = ignore_globs(config)
    max_bytes = config.scan.max_file_size_kb * 1024

    result = ScanResult()
    for file in iter_source_files(paths, config):
        display = file.as_posix()

        if is_ignored(display, ignored):
            result.skipped_files.append(f"{display} (ignored)")
            continue
        try:
            if file.stat().st_size > max_bytes:
                result.skipped_files.append(f"{display} (too large)")
                continue
            text = file.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            result.skipped_files.append(f"{display} (not utf-8)")
            continue
        except OSError as exc:
            raise ScanError(f"Cannot read {display}: {exc.strerror or exc}") from exc

        logger.debug("Scanning %s", display)
        result.merge(_scan_one(text, engine, config, display, allowlist))

    result.scan_duration_ms = round((time.perf_counter() - start) * 1000, 2)
    logger.info(
        "Scanned %d file(s): %d finding(s), %d suppressed, %d skipped",
        result.scanned_files, result.total_findings,
        len(result.suppressed), len(result.skipped_files),
    )
    return result
