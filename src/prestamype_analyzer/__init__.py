"""Scoring and budget allocation for Prestamype lending opportunities."""

__version__ = "0.1.0"
