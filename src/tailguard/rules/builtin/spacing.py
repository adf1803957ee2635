"""Spacing rules — prefer the native scale over bracketed arbitrary values.

Only bracket values with an exact native equivalent are reported: whole
pixel lengths (the v4 spacing scale is 0.25rem = 4px per step, so any whole
pixel count is expressible), integer z-index values, and the 25/50/75/100%
fractions on sizing and inset utilities. Anything else (``calc()``,
``var()``, rem/vh units, grid templates) is treated as irreducible.
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from tailguard.findings.models import Span
from tailguard.rules.markup import iter_class_tokens
from tailguard.rules.models import Rule

SPACING_UTILITIES = (
    "w", "h", "min-w", "max-w", "min-h", "max-h", "size",
    "p", "px", "py", "pt", "pr", "pb", "pl", "ps", "pe",
    "m", "mx", "my", "mt", "mr", "mb", "ml", "ms", "me",
    "gap", "gap-x", "gap-y", "space-x", "space-y",
    "inset", "inset-x", "inset-y", "top", "right", "bottom", "left", "start", "end",
)

FRACTION_UTILITIES = frozenset({
    "w", "h", "min-w", "max-w", "min-h", "max-h", "size",
    "inset", "inset-x", "inset-y", "top", "right", "bottom", "left", "start", "end",
})

PERCENT_FRACTIONS = {"25": "1/4", "50": "1/2", "75": "3/4", "100": "full"}

_ARBITRARY_RE = re.compile(
    r"(?P<neg>-)?(?P<util>{utils}|z)-\[(?P<value>[^\]]+)\]".format(
        utils="|".join(re.escape(u) for u in sorted(SPACING_UTILITIES, key=len, reverse=True)),
    )
)
_PX_RE = re.compile(r"(\d+)px")
_INT_RE = re.compile(r"\d+")
_PERCENT_RE = re.compile(r"(\d+)%")


def _scale_step(px: int) -> str:
    if px == 1:
        return "px"
    step = px / 4
    return str(int(step)) if step.is_integer() else f"{step:g}"


def native_equivalent(utility: str) -> Optional[str]:
    """Return the native utility equivalent of *utility*, or None if it has none.

    ``w-[16px]`` -> ``w-4``, ``z-[50]`` -> ``z-50``, ``w-[50%]`` -> ``w-1/2``.
    """
    m = _ARBITRARY_RE.fullmatch(utility)
    if m is None:
        return None
    neg = m.group("neg") or ""
    util = m.group("util")
    value = m.group("value").strip()

    if util == "z":
        if _INT_RE.fullmatch(value):
            return f"{neg}z-{int(value)}"
        return None

    px = _PX_RE.fullmatch(value)
    if px:
        return f"{neg}{util}-{_scale_step(int(px.group(1)))}"

    pct = _PERCENT_RE.fullmatch(value)
    if pct and util in FRACTION_UTILITIES and pct.group(1) in PERCENT_FRACTIONS:
        return f"{neg}{util}-{PERCENT_FRACTIONS[pct.group(1)]}"
    return None


def detect_arbitrary_spacing(text: str) -> Iterator[Span]:
    for token in iter_class_tokens(text):
        if native_equivalent(token.utility) is not None:
            yield token.utility_span


NO_ARBITRARY_BRACKET_SPACING = Rule(
    id="no-arbitrary-bracket-spacing",
    name="Arbitrary Spacing Value",
    description="Flags bracketed size, spacing and z-index values that have a native scale utility.",
    detect=detect_arbitrary_spacing,
    severity="warning",
    message="Arbitrary value has a native scale equivalent; use it (w-4 instead of w-[16px], z-50 instead of z-[50]).",
)

ALL_SPACING_RULES = [NO_ARBITRARY_BRACKET_SPACING]
