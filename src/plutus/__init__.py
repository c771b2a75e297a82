"""Plutus: student budget tracking."""

__version__ = "1.0.0"
