"""Utilities for formscan."""

from .determinism import make_rng, set_determinism
from .logging import setup_logging

__all__ = [
    "make_rng",
    "setup_logging",
    "set_determinism",
]
