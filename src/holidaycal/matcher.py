"""Match calendar dates against holiday rules.

Computed rules are resolved at most once per (year, location): the matcher
keeps the last resolution of each rule in a side table, so the rules
themselves stay immutable and can be shared freely.  A memo entry is a
single tuple that is re-validated on every lookup (year, location and the
resolver currently registered) and replaced whole, so interleaved callers
at worst recompute a date, never trust a stale one.
"""

from __future__ import annotations

import calendar
import datetime
import logging
from typing import NamedTuple

from holidaycal.errors import InvalidRuleError, UnknownResolverError
from holidaycal.resolvers import ResolverFn, get_resolver
from holidaycal.rules import (
    Computed,
    FixedDate,
    FloatingWeekday,
    HolidayRule,
    YearDay,
    days_in_month,
    is_weekday_n,
)

logger = logging.getLogger(__name__)


class CacheInfo(NamedTuple):
    hits: int
    misses: int
    size: int


class _Resolution(NamedTuple):
    fn: ResolverFn
    year: int
    location: object
    month: int
    day: int


def location_of(d: datetime.date) -> object:
    """Location identity carried by *d*: its ``tzinfo``, or ``None`` for a plain date."""
    if isinstance(d, datetime.datetime):
        return d.tzinfo
    return None


class HolidayMatcher:
    """Decides whether dates fall on holiday rules, memoising computed rules."""

    def __init__(self) -> None:
        self._memo: dict[Computed, _Resolution] = {}
        self._hits = 0
        self._misses = 0

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, rule: Computed, year: int, location: object = None) -> tuple[int, int]:
        """Return the ``(month, day)`` *rule* falls on in *year*.

        A memo entry only counts while the registry still maps the rule's
        name to the callable that produced it, so replacing a resolver
        takes effect on the next lookup.  Raises ``UnknownResolverError``
        if the resolver has been unregistered.
        """
        if not isinstance(rule, Computed):
            raise InvalidRuleError(f"Only computed rules need resolving, got {rule!r}")

        fn = get_resolver(rule.resolver)
        entry = self._memo.get(rule)
        if (
            entry is not None
            and entry.fn is fn
            and entry.year == year
            and entry.location == location
        ):
            self._hits += 1
            return entry.month, entry.day

        self._misses += 1
        month, day = fn(year, location)
        logger.debug(
            "Resolved %s for %d (%r) -> %02d-%02d", rule.resolver, year, location, month, day
        )
        self._memo[rule] = _Resolution(fn, year, location, month, day)
        return month, day

    def cache_info(self) -> CacheInfo:
        return CacheInfo(self._hits, self._misses, len(self._memo))

    def clear(self) -> None:
        self._memo.clear()
        self._hits = 0
        self._misses = 0

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def matches(self, rule: HolidayRule, d: datetime.date, location: object = None) -> bool:
        """Return whether *d* is the date *rule* describes.

        *location* defaults to the location identity carried by *d* (see
        ``location_of``).  Objects that are not holiday rules never match, and
        neither do computed rules whose resolver has been unregistered.
        """
        if isinstance(rule, Computed):
            loc = location_of(d) if location is None else location
            try:
                month, day = self.resolve(rule, d.year, loc)
            except UnknownResolverError:
                logger.warning("Ignoring holiday rule with unregistered resolver %r", rule.resolver)
                return False
            return d.month == month and d.day == day
        if isinstance(rule, FixedDate):
            return d.month == rule.month and d.day == rule.day
        if isinstance(rule, FloatingWeekday):
            return d.month == rule.month and is_weekday_n(d, rule.weekday, rule.ordinal)
        if isinstance(rule, YearDay):
            return d.timetuple().tm_yday == rule.day_of_year

        logger.warning("Ignoring malformed holiday rule %r", rule)
        return False

    def date_for(
        self, rule: HolidayRule, year: int, location: object = None
    ) -> datetime.date | None:
        """Return the date *rule* falls on in *year*, or ``None`` if it has none.

        A rule has no date when, for instance, it asks for a fifth Monday
        the month does not have, or for February 29 in a common year.
        """
        if isinstance(rule, Computed):
            try:
                month, day = self.resolve(rule, year, location)
            except UnknownResolverError:
                logger.warning("Ignoring holiday rule with unregistered resolver %r", rule.resolver)
                return None
            return datetime.date(year, month, day)
        if isinstance(rule, FixedDate):
            try:
                return datetime.date(year, rule.month, rule.day)
            except ValueError:
                return None
        if isinstance(rule, FloatingWeekday):
            return _nth_weekday(year, rule.month, rule.weekday, rule.ordinal)
        if isinstance(rule, YearDay):
            if rule.day_of_year > (366 if calendar.isleap(year) else 365):
                return None
            return datetime.date(year, 1, 1) + datetime.timedelta(days=rule.day_of_year - 1)

        logger.warning("Ignoring malformed holiday rule %r", rule)
        return None


def _nth_weekday(year: int, month: int, weekday: int, n: int) -> datetime.date | None:
    """Return the *n*-th *weekday* of *month*, counting from the end when *n* < 0."""
    last = days_in_month(year, month)
    if n > 0:
        # Days until the first target weekday
        delta = (weekday - datetime.date(year, month, 1).weekday()) % 7
        day = 1 + delta + 7 * (n - 1)
    else:
        delta = (datetime.date(year, month, last).weekday() - weekday) % 7
        day = last - delta - 7 * (-n - 1)
    if not 1 <= day <= last:
        return None
    return datetime.date(year, month, day)


_default_matcher = HolidayMatcher()


def default_matcher() -> HolidayMatcher:
    return _default_matcher


def matches(rule: HolidayRule, d: datetime.date, location: object = None) -> bool:
    """``HolidayMatcher.matches`` on the shared default matcher."""
    return _default_matcher.matches(rule, d, location)


def date_for(rule: HolidayRule, year: int, location: object = None) -> datetime.date | None:
    """``HolidayMatcher.date_for`` on the shared default matcher."""
    return _default_matcher.date_for(rule, year, location)
