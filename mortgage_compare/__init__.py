"""Offset mortgage vs. savings comparison service."""

__version__ = "0.1.0"
