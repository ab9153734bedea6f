"""Gumboard test suite."""
