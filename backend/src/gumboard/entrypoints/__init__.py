"""Entrypoints - HTTP surface of the application."""
