"""Gradient rules: Tailwind v4 renamed bg-gradient-to-* to bg-linear-to-*."""

from tailguard.rules.models import pattern_rule

NO_V3_GRADIENT_SYNTAX = pattern_rule(
    id="no-v3-gradient-syntax",
    name="v3 Gradient Syntax",
    description="Flags the deprecated bg-gradient-to-* prefix.",
    pattern=r"bg-gradient-to-[\w-]*",
    severity="error",
    message="bg-gradient-to-* is v3 syntax; use bg-linear-to-* (bg-linear-to-r).",
)

ALL_GRADIENT_RULES = [NO_V3_GRADIENT_SYNTAX]
