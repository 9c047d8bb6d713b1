"""Deterministic simulation core for a gladiator-management game."""

__version__ = "0.1.0"
