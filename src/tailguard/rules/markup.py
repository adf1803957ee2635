"""Class-attribute extraction and utility tokenising.

Only the shape the rules need is recognised: ``className=`` / ``class=``
followed by a ``"``, ``'`` or backtick quoted string, optionally wrapped in
``{...}``. Everything else in the document is opaque text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Tuple

from tailguard.findings.models import Span

_CLASS_ATTR_RE = re.compile(
    r"(?<![\w-])(?:className|class)\s*=\s*\{?\s*"
    r"(?P<quote>[\"'`])(?P<value>.*?)(?P=quote)",
    re.DOTALL,
)

_TOKEN_RE = re.compile(r"\S+")


@dataclass(frozen=True)
class ClassAttribute:
    """A class attribute value and the offset where it starts in the document."""

    start: int
    value: str

    @property
    def span(self) -> Span:
        return Span(self.start, self.start + len(self.value))


@dataclass(frozen=True)
class ClassToken:
    """One whitespace-separated token of a class attribute.

    ``variants`` holds the ``:``-separated prefixes (``("md", "hover")``) and
    ``utility`` the remaining utility with any ``!`` important marker removed.
    """

    start: int
    raw: str
    variants: Tuple[str, ...]
    utility: str
    utility_offset: int

    @property
    def span(self) -> Span:
        return Span(self.start, self.start + len(self.raw))

    @property
    def utility_span(self) -> Span:
        begin = self.start + self.utility_offset
        return Span(begin, begin + len(self.utility))


def iter_class_attributes(text: str) -> Iterator[ClassAttribute]:
    for m in _CLASS_ATTR_RE.finditer(text):
        yield ClassAttribute(start=m.start("value"), value=m.group("value"))


def split_variants(token: str) -> Tuple[Tuple[str, ...], str, int]:
    """Split *token* into (variants, utility, utility_offset).

    Colons inside ``[...]`` or ``(...)`` belong to arbitrary values and are
    not variant separators.
    """
    depth = 0
    cuts = []
    for i, ch in enumerate(token):
        if ch in "[(":
            depth += 1
        elif ch in "])":
            depth = max(depth - 1, 0)
        elif ch == ":" and depth == 0:
            cuts.append(i)

    variants = []
    prev = 0
    for cut in cuts:
        variants.append(token[prev:cut])
        prev = cut + 1

    utility = token[prev:]
    offset = prev
    if utility.startswith("!"):
        utility = utility[1:]
        offset += 1
    if utility.endswith("!"):
        utility = utility[:-1]
    return tuple(variants), utility, offset


def iter_attribute_tokens(attr: ClassAttribute) -> Iterator[ClassToken]:
    for m in _TOKEN_RE.finditer(attr.value):
        raw = m.group(0)
        variants, utility, offset = split_variants(raw)
        if not utility:
            continue
        yield ClassToken(
            start=attr.start + m.start(),
            raw=raw,
            variants=variants,
            utility=utility,
            utility_offset=offset,
        )


def iter_class_tokens(text: str) -> Iterator[ClassToken]:
    """Yield every token of every class attribute in *text*, in document order."""
    for attr in iter_class_attributes(text):
        yield from iter_attribute_tokens(attr)
