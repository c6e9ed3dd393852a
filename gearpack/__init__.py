"""Gear catalog matching and AI packing plan resolution."""

__version__ = "0.1.0"
