"""Console renderers."""

from .console import render_scenario

__all__ = ["render_scenario"]
