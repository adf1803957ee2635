"""Color rules — semantic design tokens only, no raw palette or literal colors."""

from __future__ import annotations

import re
from typing import Iterator

from tailguard.findings.models import Span
from tailguard.rules.markup import iter_class_tokens
from tailguard.rules.models import Rule

PALETTE = (
    "slate", "gray", "zinc", "neutral", "stone",
    "red", "orange", "amber", "yellow", "lime", "green", "emerald", "teal",
    "cyan", "sky", "blue", "indigo", "violet", "purple", "fuchsia", "pink", "rose",
)

SHADES = ("50", "100", "200", "300", "400", "500", "600", "700", "800", "900", "950")

COLOR_UTILITIES = (
    "bg", "text", "border", "border-x", "border-y", "border-t", "border-r",
    "border-b", "border-l", "border-s", "border-e", "ring", "ring-offset",
    "outline", "divide", "decoration", "placeholder", "caret", "accent",
    "fill", "stroke", "shadow", "inset-shadow", "inset-ring", "from", "via", "to",
)

_PALETTE_RE = re.compile(
    r"-?(?:{utils})-(?:{palette})-(?:{shades})(?:/(?:\d{{1,3}}|\[[^\]]+\]))?".format(
        utils="|".join(re.escape(u) for u in sorted(COLOR_UTILITIES, key=len, reverse=True)),
        palette="|".join(PALETTE),
        shades="|".join(SHADES),
    )
)

# bg-[#ff0000], text-[rgb(0_0_0)], border-[hsl(210,40%,96%)], fill-[#fff]/50
_LITERAL_RE = re.compile(
    r"-?(?:{utils})-\[(?:color:)?(?:#[0-9a-fA-F]{{3,8}}|(?:rgba?|hsla?)\([^\]]*\))\](?:/\d{{1,3}})?".format(
        utils="|".join(re.escape(u) for u in sorted(COLOR_UTILITIES, key=len, reverse=True)),
    )
)


def detect_hardcoded_colors(text: str) -> Iterator[Span]:
    for token in iter_class_tokens(text):
        if _PALETTE_RE.fullmatch(token.utility) or _LITERAL_RE.fullmatch(token.utility):
            yield token.utility_span


NO_HARDCODED_COLOR = Rule(
    id="no-hardcoded-color",
    name="Hardcoded Color",
    description="Flags palette colors (bg-blue-500) and literal hex/rgb()/hsl() values in class attributes.",
    detect=detect_hardcoded_colors,
    severity="error",
    message="Hardcoded color; use a semantic theme token (bg-primary, text-muted-foreground).",
)

ALL_COLOR_RULES = [NO_HARDCODED_COLOR]
