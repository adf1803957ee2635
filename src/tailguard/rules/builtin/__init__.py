"""Built-in rules — aggregate all categories."""

from tailguard.rules.builtin.boundaries import ALL_BOUNDARY_RULES
from tailguard.rules.builtin.breakpoints import ALL_BREAKPOINT_RULES
from tailguard.rules.builtin.colors import ALL_COLOR_RULES
from tailguard.rules.builtin.gradients import ALL_GRADIENT_RULES
from tailguard.rules.builtin.migration import ALL_MIGRATION_RULES
from tailguard.rules.builtin.spacing import ALL_SPACING_RULES
from tailguard.rules.models import Rule

ALL_BUILTIN_RULES: list[Rule] = [
    *ALL_COLOR_RULES,
    *ALL_SPACING_RULES,
    *ALL_GRADIENT_RULES,
    *ALL_BREAKPOINT_RULES,
    *ALL_BOUNDARY_RULES,
    *ALL_MIGRATION_RULES,
]

__all__ = ["ALL_BUILTIN_RULES"]
