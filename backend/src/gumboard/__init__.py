"""Gumboard - collaborative sticky-note boards."""

__version__ = "0.1.0"
