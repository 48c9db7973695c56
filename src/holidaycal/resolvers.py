"""Date resolvers for holidays that need more than a month and a day.

A resolver turns a year (and an opaque location identity) into the
``(month, day)`` a holiday falls on that year.  The built-ins cover the
Easter cycle plus two holidays that carry their own weekend shift; callers
can register more under their own names.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Callable
from enum import Enum

from holidaycal.errors import DuplicateResolverError, InvalidYearError, UnknownResolverError

logger = logging.getLogger(__name__)

FIRST_GREGORIAN_YEAR = 1583

ResolverFn = Callable[[int, object], tuple[int, int]]
"""Signature: fn(year, location) -> (month, day)."""


class Resolver(str, Enum):
    """Identifiers of the built-in resolvers."""

    EASTER_SUNDAY = "easter_sunday"
    GOOD_FRIDAY = "good_friday"
    EASTER_MONDAY = "easter_monday"
    ASCENSION_DAY = "ascension_day"
    WHIT_MONDAY = "whit_monday"
    KINGS_DAY = "kings_day"
    NEW_YEAR_SHIFTED = "new_year_shifted"


# ---------------------------------------------------------------------------
# Easter cycle
# ---------------------------------------------------------------------------


def easter_sunday(year: int) -> datetime.date:
    """Return Gregorian Easter Sunday for *year*.

    Meeus/Jones/Butcher algorithm.  Raises ``InvalidYearError`` for years
    before the Gregorian reform.
    """
    if year < FIRST_GREGORIAN_YEAR:
        msg = f"Easter is only defined for Gregorian years (>= {FIRST_GREGORIAN_YEAR}), got {year}"
        raise InvalidYearError(msg)

    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return datetime.date(year, month, day + 1)


def _easter_offset(year: int, days: int) -> datetime.date:
    return easter_sunday(year) + datetime.timedelta(days=days)


def good_friday(year: int) -> datetime.date:
    return _easter_offset(year, -2)


def easter_monday(year: int) -> datetime.date:
    return _easter_offset(year, 1)


def ascension_day(year: int) -> datetime.date:
    """Ascension Day, the 40th day of Easter (Easter + 39)."""
    return _easter_offset(year, 39)


def whit_monday(year: int) -> datetime.date:
    """Whit Monday, the day after Pentecost (Easter + 50)."""
    return _easter_offset(year, 50)


# ---------------------------------------------------------------------------
# Holidays with a built-in weekend shift
# ---------------------------------------------------------------------------


def kings_day(year: int) -> datetime.date:
    """Dutch King's Day: April 27, moved back to the 26th on a Sunday."""
    d = datetime.date(year, 4, 27)
    if d.weekday() == 6:  # Sunday
        return d - datetime.timedelta(days=1)
    return d


def new_year_shifted(year: int) -> datetime.date:
    """New Year's Day, moved to the following Monday when on a weekend."""
    d = datetime.date(year, 1, 1)
    if d.weekday() == 5:  # Saturday
        return d + datetime.timedelta(days=2)
    if d.weekday() == 6:  # Sunday
        return d + datetime.timedelta(days=1)
    return d


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_BUILTIN_FNS: dict[Resolver, Callable[[int], datetime.date]] = {
    Resolver.EASTER_SUNDAY: easter_sunday,
    Resolver.GOOD_FRIDAY: good_friday,
    Resolver.EASTER_MONDAY: easter_monday,
    Resolver.ASCENSION_DAY: ascension_day,
    Resolver.WHIT_MONDAY: whit_monday,
    Resolver.KINGS_DAY: kings_day,
    Resolver.NEW_YEAR_SHIFTED: new_year_shifted,
}


def _month_day(fn: Callable[[int], datetime.date]) -> ResolverFn:
    def resolver(year: int, location: object = None) -> tuple[int, int]:
        d = fn(year)
        return d.month, d.day

    resolver.__name__ = fn.__name__
    resolver.__doc__ = fn.__doc__
    return resolver


_registry: dict[str, ResolverFn] = {r.value: _month_day(fn) for r, fn in _BUILTIN_FNS.items()}


def resolver_key(name: str | Resolver) -> str:
    """Normalise a resolver identifier to its plain string key."""
    return name.value if isinstance(name, Resolver) else str(name)


def register_resolver(name: str, fn: ResolverFn, *, replace: bool = False) -> None:
    """Register *fn* under *name* so ``Computed(name)`` rules can use it.

    Built-in names can never be replaced.
    """
    key = resolver_key(name)
    if key in _registry and (not replace or key in Resolver._value2member_map_):
        raise DuplicateResolverError(f"Resolver {key!r} is already registered")
    logger.debug("Registering resolver %r", key)
    _registry[key] = fn


def unregister_resolver(name: str) -> None:
    """Remove a previously registered external resolver."""
    key = resolver_key(name)
    if key in Resolver._value2member_map_:
        raise DuplicateResolverError(f"Built-in resolver {key!r} cannot be unregistered")
    if _registry.pop(key, None) is None:
        raise UnknownResolverError(f"Unknown resolver {key!r}")


def get_resolver(name: str | Resolver) -> ResolverFn:
    key = resolver_key(name)
    try:
        return _registry[key]
    except KeyError:
        supported = ", ".join(sorted(_registry))
        raise UnknownResolverError(f"Unknown resolver {key!r}. Registered: {supported}") from None


def available_resolvers() -> list[str]:
    return sorted(_registry)


def resolve(name: str | Resolver, year: int, location: object = None) -> tuple[int, int]:
    """Return the ``(month, day)`` resolver *name* yields for *year*."""
    return get_resolver(name)(year, location)
