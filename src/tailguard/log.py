"""Logging setup for the CLI.

Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves.
"""

from __future__ import annotations

import logging
import sys

_configured = False


def setup_logging(level: str = "WARNING") -> None:
    """Set the ``tailguard`` logger level and attach a stderr handler once."""
    global _configured
    root = logging.getLogger("tailguard")
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    if _configured:
        return

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter("%(levelname)-8s %(name)s: %(message)s"))
    root.addHandler(console)

    _configured = True
