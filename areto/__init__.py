"""Areto quiz builder and player."""

__version__ = "1.0.0"
