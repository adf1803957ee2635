"""Responsive rules: mobile-first, breakpoint prefixes in ascending order."""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from tailguard.findings.models import Span
from tailguard.rules.markup import ClassToken, iter_attribute_tokens, iter_class_attributes
from tailguard.rules.models import Rule

BREAKPOINTS = ("sm", "md", "lg", "xl", "2xl")
_RANK = {bp: i for i, bp in enumerate(BREAKPOINTS)}


def breakpoint_of(token: ClassToken) -> Optional[str]:
    """Return the responsive breakpoint a token is scoped to, if any."""
    for variant in token.variants:
        if variant in _RANK:
            return variant
    return None


def responsive_sequence(tokens: List[ClassToken]) -> List[Tuple[str, ClassToken]]:
    seq = []
    for token in tokens:
        bp = breakpoint_of(token)
        if bp is not None:
            seq.append((bp, token))
    return seq


def is_ascending(breakpoints: List[str]) -> bool:
    ranks = [_RANK[bp] for bp in breakpoints]
    return all(a <= b for a, b in zip(ranks, ranks[1:]))


def detect_breakpoint_order(text: str) -> Iterator[Span]:
    for attr in iter_class_attributes(text):
        seq = responsive_sequence(list(iter_attribute_tokens(attr)))
        if len(seq) < 2 or is_ascending([bp for bp, _ in seq]):
            continue
        # One finding per attribute, covering the responsive tokens.
        first, last = seq[0][1], seq[-1][1]
        yield Span(first.span.start, last.span.end)


BREAKPOINT_ORDER = Rule(
    id="breakpoint-order",
    name="Breakpoint Order",
    description="Flags class attributes whose sm/md/lg/xl/2xl prefixes are not in ascending order.",
    detect=detect_breakpoint_order,
    severity="warning",
    message="Responsive prefixes out of order; write mobile-first (sm: then md: then lg: then xl: then 2xl:).",
)

ALL_BREAKPOINT_RULES = [BREAKPOINT_ORDER]
