"""Exception hierarchy shared by every subsystem."""

from __future__ import annotations


class LudusError(Exception):
    """Base class for simulation errors; the prior state stays valid."""


class ValidationError(LudusError, ValueError):
    """Malformed or inconsistent input, raised before anything changes."""


class FighterStateError(LudusError, RuntimeError):
    """A caller asked a fighter to do something its state forbids."""


class NameGenerationError(LudusError, LookupError):
    """The name pool has no names left to issue."""
