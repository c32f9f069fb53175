"""
chordplots/errors.py - Exception hierarchy.

Every error raised by the library derives from ChordPlotsError. The three
concrete kinds also derive from ValueError so callers that only care about
"bad input" can catch that instead.

    ConfigurationError - a layout option or filter argument is invalid
                         (unknown sort policy, fixed order that is not a
                         permutation, negative radius, ...).
    DomainError        - the data cannot be laid out at all (total flow is
                         zero or negative, non-finite matrix cells).
    DimensionError     - matrix / label / group sizes are inconsistent.
                         Raised when the data model is constructed, never
                         re-checked at layout time.
"""

from typing import Any


class ChordPlotsError(Exception):
    """Base class for all chordplots errors."""

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value


class ConfigurationError(ChordPlotsError, ValueError):
    """Invalid configuration value. `field` names the offending option."""


class DomainError(ChordPlotsError, ValueError):
    """The input data violates an invariant required for layout."""


class DimensionError(ChordPlotsError, ValueError):
    """Matrix, label and group sizes do not agree."""
