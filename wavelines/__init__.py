"""Animated vertical wave lines driven by scroll and wheel input."""

__version__ = "0.1.0"
