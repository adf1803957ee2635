"""Tests for inline suppression comments."""

from tailguard.scanner.suppression import (
    SuppressionChecker,
    find_suppression_comments,
    parse_inline_suppression,
)


class TestInlineParsing:
    def test_line_comment(self):
        ok, ids = parse_inline_suppression('const x = "bg-red-500" // tailguard-ignore')
        assert ok is True
        assert ids is None

    def test_block_comment(self):
        ok, ids = parse_inline_suppression("color: red; /* tailguard-ignore */")
        assert ok is True

    def test_jsx_comment(self):
        ok, ids = parse_inline_suppression("{/* tailguard-ignore[no-hardcoded-color] */}")
        assert ok is True
        assert ids == frozenset({"no-hardcoded-color"})

    def test_html_comment(self):
        ok, _ = parse_inline_suppression("<!-- tailguard-ignore -->")
        assert ok is True

    def test_rule_scoped_list(self):
        ok, ids = parse_inline_suppression("// tailguard-ignore[breakpoint-order, no-v3-gradient-syntax]")
        assert ok is True
        assert ids == frozenset({"breakpoint-order", "no-v3-gradient-syntax"})

    def test_no_suppression(self):
        assert parse_inline_suppression('<div className="p-4" />') == (False, None)

    def test_marker_outside_comment_ignored(self):
        ok, _ = parse_inline_suppression('const label = "tailguard-ignore"')
        assert ok is False


class TestSuppressionChecker:
    def test_same_line_suppression(self):
        checker = SuppressionChecker.from_text(
            'a\n<div className="bg-red-500" /> {/* tailguard-ignore */}\nc\n', "x.tsx"
        )
        sup = checker.is_suppressed(2, "no-hardcoded-color")
        assert sup is not None
        assert sup.reason == "inline"
        assert sup.path == "x.tsx"
        assert checker.is_suppressed(3, "no-hardcoded-color") is None

    def test_next_line_suppression(self):
        checker = SuppressionChecker.from_text(
            "// tailguard-ignore\n<div />\n<span />\n", "x.tsx"
        )
        assert checker.is_suppressed(2, "any-rule") is not None
        assert checker.is_suppressed(3, "any-rule") is None

    def test_trailing_comment_does_not_cover_next_line(self):
        checker = SuppressionChecker.from_text(
            "<div /> // tailguard-ignore\n<span />\n", "x.tsx"
        )
        assert checker.is_suppressed(1, "r") is not None
        assert checker.is_suppressed(2, "r") is None

    def test_scoped_suppression(self):
        checker = SuppressionChecker.from_text(
            "// tailguard-ignore[breakpoint-order]\n<p />\n", "x.tsx"
        )
        sup = checker.is_suppressed(2, "breakpoint-order")
        assert sup is not None
        assert sup.source == "tailguard-ignore[breakpoint-order]"
        assert checker.is_suppressed(2, "no-hardcoded-color") is None

    def test_marked_lines(self):
        checker = SuppressionChecker.from_text("// tailguard-ignore\nx\n", "x.tsx")
        assert checker.marked_lines == [1, 2]

    def test_unicode_line_separator_does_not_shift_lines(self):
        checker = SuppressionChecker.from_text(
            'const s = "a\u2028b"\n<div className="bg-red-500" /> {/* tailguard-ignore */}\n', "x.tsx"
        )
        assert checker.is_suppressed(2, "no-hardcoded-color") is not None
        assert checker.is_suppressed(3, "no-hardcoded-color") is None

    def test_form_feed_does_not_shift_lines(self):
        checker = SuppressionChecker.from_text(
            '/* a\x0cb */\n<div className="bg-red-500" /> // tailguard-ignore\n', "x.tsx"
        )
        assert checker.is_suppressed(2, "no-hardcoded-color") is not None

    def test_crlf_line_endings(self):
        checker = SuppressionChecker.from_text("// tailguard-ignore\r\n<div />\r\n", "x.tsx")
        assert checker.is_suppressed(2, "r") is not None


class TestFindComments:
    def test_audit_listing(self):
        text = "a\n// tailguard-ignore\nb // tailguard-ignore[r2,r1]\n"
        assert find_suppression_comments(text) == [(2, "ALL"), (3, "r1,r2")]

    def test_audit_lines_split_on_newline_only(self):
        text = "a b\x0cc\n// tailguard-ignore\n"
        assert find_suppression_comments(text) == [(2, "ALL")]
