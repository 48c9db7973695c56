"""Exception hierarchy for holidaycal.

Subclasses also derive from the builtin exception callers would naturally
catch (``ValueError`` for bad input, ``KeyError`` for failed lookups).
"""

from __future__ import annotations


class HolidayError(Exception):
    """Base class for all holidaycal errors."""


class InvalidRuleError(HolidayError, ValueError):
    """A holiday rule was constructed with out-of-range fields."""


class InvalidYearError(HolidayError, ValueError):
    """A year outside the range an algorithm is defined for."""


class UnknownResolverError(HolidayError, KeyError):
    """No resolver is registered under the requested name."""

    def __str__(self) -> str:
        # KeyError repr-quotes its message; show it verbatim instead.
        return str(self.args[0]) if self.args else ""


class DuplicateResolverError(HolidayError, ValueError):
    """A resolver name is already registered."""


class UnknownPresetError(HolidayError, KeyError):
    """No country preset exists for the requested code."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class ConfigError(HolidayError):
    """A configuration file is missing, unreadable or malformed."""
