"""Tailwind v3 -> v4 migration rules (removed directives and utilities)."""

from tailguard.rules.models import class_token_rule, pattern_rule

NO_V3_DIRECTIVES = pattern_rule(
    id="no-v3-directives",
    name="v3 @tailwind Directive",
    description="Flags @tailwind base/components/utilities directives.",
    pattern=r"@tailwind\s+(?:base|components|utilities|variants)\b",
    severity="error",
    message='@tailwind directives were removed in v4; use @import "tailwindcss".',
)

NO_DEPRECATED_UTILITY = class_token_rule(
    id="no-deprecated-utility",
    name="Deprecated Utility",
    description="Flags utilities removed in Tailwind v4 (opacity-* modifiers, flex-grow/shrink, overflow-ellipsis, decoration-slice/clone).",
    pattern=(
        r"(?:bg|text|border|divide|ring|placeholder)-opacity-(?:\d+|\[[^\]]+\])"
        r"|flex-(?:shrink|grow)(?:-\d+)?"
        r"|overflow-ellipsis"
        r"|decoration-(?:slice|clone)"
    ),
    severity="warning",
    message="Utility was removed in v4; use the replacement (bg-black/50, shrink-0, grow, text-ellipsis, box-decoration-slice).",
)

ALL_MIGRATION_RULES = [NO_V3_DIRECTIVES, NO_DEPRECATED_UTILITY]
