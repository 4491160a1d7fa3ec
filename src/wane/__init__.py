"""Wane component compiler core."""

__version__ = "0.1.0"
