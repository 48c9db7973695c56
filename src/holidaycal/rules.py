"""Holiday rule values.

A holiday rule is a year-independent description of when a holiday falls.
Each shape is its own immutable class, so a rule can never mix, say, a
fixed day with a weekday ordinal:

* ``FixedDate(month, day)``: March 14 every year.
* ``FloatingWeekday(month, weekday, ordinal)``: the 2nd Monday of October,
  or with a negative ordinal the last Monday of May.
* ``YearDay(day_of_year)``: the 183rd day of the year.
* ``Computed(resolver)``: delegated to a named resolver, see
  ``holidaycal.resolvers``.

Weekdays follow the ``datetime`` convention: 0 = Monday ... 6 = Sunday.
"""

from __future__ import annotations

import calendar
import datetime
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from holidaycal.errors import InvalidRuleError, UnknownResolverError
from holidaycal.resolvers import Resolver, get_resolver, resolver_key

WEEKDAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

MAX_ORDINAL = 5  # no weekday occurs more than five times in a month


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise InvalidRuleError(f"month must be in 1..12, got {month}")


def _check_weekday(weekday: int) -> None:
    if not 0 <= weekday <= 6:
        raise InvalidRuleError(f"weekday must be in 0..6 (Monday..Sunday), got {weekday}")


# ---------------------------------------------------------------------------
# Rule shapes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FixedDate:
    """The same month and day every year."""

    month: int
    day: int

    def __post_init__(self) -> None:
        _check_month(self.month)
        # Leap year, so February 29 is accepted.
        last = days_in_month(2000, self.month)
        if not 1 <= self.day <= last:
            msg = f"day must be in 1..{last} for month {self.month}, got {self.day}"
            raise InvalidRuleError(msg)


@dataclass(frozen=True)
class FloatingWeekday:
    """The *ordinal*-th *weekday* of *month*; negative ordinals count from the end."""

    month: int
    weekday: int
    ordinal: int

    def __post_init__(self) -> None:
        _check_month(self.month)
        _check_weekday(self.weekday)
        if self.ordinal == 0 or abs(self.ordinal) > MAX_ORDINAL:
            msg = f"ordinal must be in -{MAX_ORDINAL}..-1 or 1..{MAX_ORDINAL}, got {self.ordinal}"
            raise InvalidRuleError(msg)


@dataclass(frozen=True)
class YearDay:
    """The *day_of_year*-th day of the year, 1-based."""

    day_of_year: int

    def __post_init__(self) -> None:
        if not 1 <= self.day_of_year <= 366:
            raise InvalidRuleError(f"day_of_year must be in 1..366, got {self.day_of_year}")


@dataclass(frozen=True)
class Computed:
    """A date produced by a registered resolver."""

    resolver: str

    def __post_init__(self) -> None:
        key = resolver_key(self.resolver)
        try:
            get_resolver(key)
        except UnknownResolverError as exc:
            raise InvalidRuleError(str(exc)) from None
        # Store the plain string so Computed(Resolver.X) == Computed("x") hashes alike.
        object.__setattr__(self, "resolver", key)


HolidayRule = Union[FixedDate, FloatingWeekday, YearDay, Computed]


# ---------------------------------------------------------------------------
# Weekday arithmetic
# ---------------------------------------------------------------------------


def is_weekday_n(d: datetime.date, weekday: int, n: int) -> bool:
    """Return whether *d* is the *n*-th *weekday* of its month.

    Positive *n* counts from the 1st (1 = first), negative *n* from the end
    of the month (-1 = last).  ``n == 0`` never matches.
    """
    if n == 0 or d.weekday() != weekday:
        return False
    if n > 0:
        return 7 * (n - 1) < d.day <= 7 * n
    later = (days_in_month(d.year, d.month) - d.day) // 7
    return later == -n - 1


# ---------------------------------------------------------------------------
# Observed dates
# ---------------------------------------------------------------------------


class ObservedRule(str, Enum):
    """How a holiday that falls on a weekend is observed."""

    NEAREST = "nearest"  # Saturday -> Friday, Sunday -> Monday
    EXACT = "exact"  # no shift
    MONDAY = "monday"  # Saturday and Sunday -> Monday


def observed_date(d: datetime.date, rule: ObservedRule = ObservedRule.NEAREST) -> datetime.date:
    """Shift a holiday on *d* to its *observed* date under *rule*."""
    wd = d.weekday()
    if rule is ObservedRule.EXACT or wd < 5:
        return d
    if rule is ObservedRule.NEAREST:
        if wd == 5:
            return d - datetime.timedelta(days=1)
        return d + datetime.timedelta(days=1)
    return d + datetime.timedelta(days=7 - wd)


# ---------------------------------------------------------------------------
# Plain-dict form
# ---------------------------------------------------------------------------


def parse_weekday(value: int | str) -> int:
    """Accept ``0..6``, ``"monday"`` or ``"mon"`` (case-insensitive)."""
    if isinstance(value, bool):
        raise InvalidRuleError(f"Invalid weekday {value!r}")
    if isinstance(value, int):
        _check_weekday(value)
        return value
    name = str(value).strip().lower()
    for i, full in enumerate(WEEKDAY_NAMES):
        if name in (full, full[:3]):
            return i
    raise InvalidRuleError(f"Invalid weekday {value!r}")


def rule_to_dict(rule: HolidayRule) -> dict[str, Any]:
    if isinstance(rule, FixedDate):
        return {"type": "fixed", "month": rule.month, "day": rule.day}
    if isinstance(rule, FloatingWeekday):
        return {
            "type": "floating",
            "month": rule.month,
            "weekday": WEEKDAY_NAMES[rule.weekday],
            "ordinal": rule.ordinal,
        }
    if isinstance(rule, YearDay):
        return {"type": "year_day", "day": rule.day_of_year}
    if isinstance(rule, Computed):
        return {"type": "computed", "resolver": rule.resolver}
    raise InvalidRuleError(f"Not a holiday rule: {rule!r}")


def _int_field(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRuleError(f"Rule field {key!r} must be an integer, got {value!r}")
    return value


def rule_from_dict(data: dict[str, Any]) -> HolidayRule:
    """Build a rule from its plain-dict form (see ``rule_to_dict``)."""
    if not isinstance(data, dict):
        raise InvalidRuleError(f"Rule must be an object, got {type(data).__name__}")
    kind = data.get("type")
    if kind == "fixed":
        return FixedDate(_int_field(data, "month"), _int_field(data, "day"))
    if kind == "floating":
        if "weekday" not in data:
            raise InvalidRuleError("Rule field 'weekday' is required")
        return FloatingWeekday(
            _int_field(data, "month"),
            parse_weekday(data["weekday"]),
            _int_field(data, "ordinal"),
        )
    if kind == "year_day":
        return YearDay(_int_field(data, "day"))
    if kind == "computed":
        resolver = data.get("resolver")
        if not isinstance(resolver, str):
            raise InvalidRuleError(f"Rule field 'resolver' must be a string, got {resolver!r}")
        return Computed(resolver)
    raise InvalidRuleError(
        f"Unknown rule type {kind!r}. Expected one of: computed, fixed, floating, year_day"
    )


__all__ = [
    "Computed",
    "FixedDate",
    "FloatingWeekday",
    "HolidayRule",
    "ObservedRule",
    "Resolver",
    "YearDay",
    "is_weekday_n",
    "observed_date",
    "parse_weekday",
    "rule_from_dict",
    "rule_to_dict",
]
