"""Command-line interface for formscan."""

from .main import main

__all__ = ["main"]
