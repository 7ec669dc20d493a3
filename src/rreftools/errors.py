from __future__ import annotations


class RrefError(Exception):
    """Base class for every error raised by rreftools."""


class InvalidInputError(RrefError, ValueError):
    """Malformed matrix input: bad row length, bad size, bad token."""


class EmptyInputError(InvalidInputError):
    """No rows at all, or a row with no entries."""


class IOFailureError(RrefError, OSError):
    """Reading a text source failed."""


class NumericDegeneracyError(RrefError, ArithmeticError):
    """Division by a zero pivot or a non-finite intermediate value."""
