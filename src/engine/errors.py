"""
Destiny Dice - Engine Exceptions

Errors raised by symbol lookup, theme loading and the Destiny Pool.
"""


class DestinyDiceError(Exception):
    """Base class for all engine errors."""


class InvalidFaceIndex(DestinyDiceError, ValueError):
    """A face lookup fell outside ``[1, face_count]``."""


class UnknownTheme(DestinyDiceError, LookupError):
    """No symbol table is registered under the requested theme name."""


class InsufficientPool(DestinyDiceError):
    """A Destiny flip was attempted from an empty side."""


class Unauthorized(DestinyDiceError, PermissionError):
    """A privileged Destiny operation was attempted by an observer."""
