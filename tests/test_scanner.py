"""Tests for the scan pipeline: location, suppression, allowlist, files."""

from __future__ import annotations

from pathlib import Path

import pytest

from tailguard.config.schema import TailguardConfig
from tailguard.findings.locator import LineIndex
from tailguard.scanner.engine import ScanError
from tailguard.scanner.runner import scan_paths, scan_text


class TestLineIndex:
    def test_positions(self):
        index = LineIndex("ab\ncd\n\nef")
        assert index.position(0) == (1, 1)
        assert index.position(1) == (1, 2)
        assert index.position(3) == (2, 1)
        assert index.position(6) == (3, 1)
        assert index.position(7) == (4, 1)
        assert index.line_count() == 4


class TestScanText:
    def test_clean(self, engine, clean_component):
        result = scan_text(clean_component, engine)
        assert result.total_findings == 0
        assert result.blocked is False
        assert result.scanned_files == 1

    def test_findings_located(self, engine, dirty_component):
        result = scan_text(dirty_component, engine, path="card.tsx")
        rules = [(f.rule_id, f.line) for f in result.findings]
        assert rules == [
            ("no-hardcoded-color", 3),
            ("no-arbitrary-bracket-spacing", 3),
            ("no-v3-gradient-syntax", 3),
            ("breakpoint-order", 4),
        ]
        first = result.findings[0]
        assert first.path == "card.tsx"
        assert first.col == dirty_component.splitlines()[2].index("bg-blue-500") + 1
        assert first.matched_text == "bg-blue-500"

    def test_error_blocks_by_default(self, engine, dirty_component):
        result = scan_text(dirty_component, engine)
        assert result.blocked is True
        assert {f.rule_id for f in result.blocking_findings} == {
            "no-hardcoded-color", "no-v3-gradient-syntax",
        }

    def test_warnings_do_not_block(self, engine):
        result = scan_text('<div className="w-[16px]" />', engine)
        assert result.total_findings == 1
        assert result.blocked is False
        assert len(result.informational_findings) == 1

    def test_fail_on_warning(self, engine):
        cfg = TailguardConfig()
        cfg.scan.fail_on = "warning"
        result = scan_text('<div className="w-[16px]" />', engine, cfg)
        assert result.blocked is True

    def test_allowlist(self, engine):
        cfg = TailguardConfig()
        cfg.allowlist.patterns = [r"^bg-red-500$"]
        result = scan_text('<div className="bg-red-500 bg-blue-500" />', engine, cfg)
        assert [f.matched_text for f in result.findings] == ["bg-blue-500"]

    def test_invalid_allowlist_pattern(self, engine):
        cfg = TailguardConfig()
        cfg.allowlist.patterns = ["("]
        with pytest.raises(ScanError):
            scan_text("x", engine, cfg)


class TestSuppressionInScan:
    def test_same_line(self, engine):
        text = '<div className="bg-blue-500" /> {/* tailguard-ignore */}\n'
        result = scan_text(text, engine)
        assert result.total_findings == 0
        assert len(result.suppressed) == 1
        assert result.suppressed[0].reason == "inline"

    def test_next_line(self, engine):
        text = '// tailguard-ignore[no-hardcoded-color]\n<div className="bg-blue-500 bg-gradient-to-r" />\n'
        result = scan_text(text, engine)
        assert [f.rule_id for f in result.findings] == ["no-v3-gradient-syntax"]
        assert [s.rule_id for s in result.suppressed] == ["no-hardcoded-color"]
        assert result.suppressed[0].reason == "next-line"

    def test_unicode_line_separator_before_finding(self, engine):
        text = 'const s = "a\u2028b"\n<div className="bg-red-500" /> {/* tailguard-ignore */}\n'
        result = scan_text(text, engine)
        assert result.total_findings == 0
        assert [(s.line, s.rule_id) for s in result.suppressed] == [(2, "no-hardcoded-color")]


class TestScanPaths:
    def test_directory(self, engine, project):
        cfg = TailguardConfig()
        cfg.ignore.files = ["node_modules/*"]
        result = scan_paths([project], engine, cfg)
        assert result.scanned_files == 2
        assert {Path(f.path).name for f in result.findings} == {"card.tsx"}
        assert [(f.rule_id, f.line) for f in result.findings] == [
            ("no-hardcoded-color", 1),
            ("no-arbitrary-bracket-spacing", 2),
        ]
        assert any("node_modules" in s and "(ignored)" in s for s in result.skipped_files)
        assert result.blocked is True

    def test_extension_filter(self, engine, project):
        cfg = TailguardConfig()
        cfg.ignore.files = ["node_modules/*"]
        result = scan_paths([project], engine, cfg)
        assert not any("notes.txt" in f.path for f in result.findings)

    def test_explicit_file_scanned_regardless_of_extension(self, engine, project):
        result = scan_paths([project / "app" / "notes.txt"], engine, TailguardConfig())
        assert [f.rule_id for f in result.findings] == ["no-v3-gradient-syntax"]

    def test_missing_path(self, engine, tmp_path):
        with pytest.raises(ScanError):
            scan_paths([tmp_path / "nope.tsx"], engine, TailguardConfig())

    def test_oversized_skipped(self, engine, project):
        cfg = TailguardConfig()
        cfg.scan.max_file_size_kb = 0
        result = scan_paths([project / "app" / "card.tsx"], engine, cfg)
        assert result.scanned_files == 0
        assert any("too large" in s for s in result.skipped_files)

    def test_non_utf8_skipped(self, engine, tmp_path):
        bad = tmp_path / "bad.tsx"
        bad.write_bytes(b"\xff\xfe\x00bg-blue-500")
        result = scan_paths([bad], engine, TailguardConfig())
        assert result.scanned_files == 0
        assert any("not utf-8" in s for s in result.skipped_files)

    def test_ignore_basename_glob(self, engine, project):
        cfg = TailguardConfig()
        cfg.ignore.paths = ["card.tsx", "node_modules/*"]
        result = scan_paths([project], engine, cfg)
        assert result.total_findings == 0
