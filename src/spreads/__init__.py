"""Spreads market-data backend."""

__version__ = "0.1.0"
