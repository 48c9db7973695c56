"""Built-in holiday presets for common countries.

Each preset is a plain list of ``(name, rule)`` pairs plus the observed
policy applied to its fixed-date holidays.  Computed holidays that carry
their own weekend shift (King's Day, the British New Year) are never
shifted again.
"""

from __future__ import annotations

import calendar
import datetime
from collections.abc import Iterable
from typing import NamedTuple

from holidaycal.errors import UnknownPresetError
from holidaycal.matcher import HolidayMatcher, default_matcher
from holidaycal.resolvers import Resolver
from holidaycal.rules import (
    Computed,
    FixedDate,
    FloatingWeekday,
    HolidayRule,
    ObservedRule,
    observed_date,
)

NamedRule = tuple[str, HolidayRule]


class Preset(NamedTuple):
    code: str
    description: str
    holidays: list[NamedRule]
    observed: ObservedRule = ObservedRule.EXACT


# ---------------------------------------------------------------------------
# Shared rules
# ---------------------------------------------------------------------------

NEW_YEAR = FixedDate(1, 1)
LABOUR_DAY = FixedDate(5, 1)
CHRISTMAS_DAY = FixedDate(12, 25)
BOXING_DAY = FixedDate(12, 26)
GOOD_FRIDAY = Computed(Resolver.GOOD_FRIDAY)
EASTER_MONDAY = Computed(Resolver.EASTER_MONDAY)
ASCENSION_DAY = Computed(Resolver.ASCENSION_DAY)
WHIT_MONDAY = Computed(Resolver.WHIT_MONDAY)


# ---------------------------------------------------------------------------
# Country presets
# ---------------------------------------------------------------------------

US_HOLIDAYS: list[NamedRule] = [
    ("New Year's Day", NEW_YEAR),
    ("Martin Luther King Jr. Day", FloatingWeekday(1, calendar.MONDAY, 3)),
    ("Presidents' Day", FloatingWeekday(2, calendar.MONDAY, 3)),
    ("Memorial Day", FloatingWeekday(5, calendar.MONDAY, -1)),
    ("Independence Day", FixedDate(7, 4)),
    ("Labor Day", FloatingWeekday(9, calendar.MONDAY, 1)),
    ("Columbus Day", FloatingWeekday(10, calendar.MONDAY, 2)),
    ("Veterans Day", FixedDate(11, 11)),
    ("Thanksgiving", FloatingWeekday(11, calendar.THURSDAY, 4)),
    ("Christmas Day", CHRISTMAS_DAY),
]

# TARGET2 closing days
ECB_HOLIDAYS: list[NamedRule] = [
    ("New Year's Day", NEW_YEAR),
    ("Good Friday", GOOD_FRIDAY),
    ("Easter Monday", EASTER_MONDAY),
    ("Labour Day", LABOUR_DAY),
    ("Christmas Day", CHRISTMAS_DAY),
    ("Christmas Holiday", BOXING_DAY),
]

DE_HOLIDAYS: list[NamedRule] = [
    ("Neujahr", NEW_YEAR),
    ("Karfreitag", GOOD_FRIDAY),
    ("Ostermontag", EASTER_MONDAY),
    ("Tag der Arbeit", LABOUR_DAY),
    ("Christi Himmelfahrt", ASCENSION_DAY),
    ("Pfingstmontag", WHIT_MONDAY),
    ("Tag der Deutschen Einheit", FixedDate(10, 3)),
    ("Erster Weihnachtstag", CHRISTMAS_DAY),
    ("Zweiter Weihnachtstag", BOXING_DAY),
]

NL_HOLIDAYS: list[NamedRule] = [
    ("Nieuwjaar", NEW_YEAR),
    ("Goede Vrijdag", GOOD_FRIDAY),
    ("Paasmaandag", EASTER_MONDAY),
    ("Koningsdag", Computed(Resolver.KINGS_DAY)),
    ("Bevrijdingsdag", FixedDate(5, 5)),
    ("Hemelvaart", ASCENSION_DAY),
    ("Pinkstermaandag", WHIT_MONDAY),
    ("Eerste Kerstdag", CHRISTMAS_DAY),
    ("Tweede Kerstdag", BOXING_DAY),
]

GB_HOLIDAYS: list[NamedRule] = [
    ("New Year's Day", Computed(Resolver.NEW_YEAR_SHIFTED)),
    ("Good Friday", GOOD_FRIDAY),
    ("Easter Monday", EASTER_MONDAY),
    ("Early May Bank Holiday", FloatingWeekday(5, calendar.MONDAY, 1)),
    ("Spring Bank Holiday", FloatingWeekday(5, calendar.MONDAY, -1)),
    ("Summer Bank Holiday", FloatingWeekday(8, calendar.MONDAY, -1)),
    ("Christmas Day", CHRISTMAS_DAY),
    ("Boxing Day", BOXING_DAY),
]

PRESETS: dict[str, Preset] = {
    "us": Preset("us", "United States federal holidays", US_HOLIDAYS, ObservedRule.NEAREST),
    "ecb": Preset("ecb", "TARGET2 (European Central Bank) closing days", ECB_HOLIDAYS),
    "de": Preset("de", "Germany public holidays", DE_HOLIDAYS),
    "nl": Preset("nl", "Netherlands public holidays", NL_HOLIDAYS),
    "gb": Preset("gb", "Great Britain bank holidays", GB_HOLIDAYS),
}


def get_preset(country: str) -> Preset:
    """Return the preset for *country* (case-insensitive).

    Raises ``UnknownPresetError`` (a ``KeyError``) if the country is not supported.
    """
    preset = PRESETS.get(country.strip().lower())
    if preset is None:
        supported = ", ".join(sorted(PRESETS))
        msg = f"Unknown country preset {country!r}. Supported: {supported}"
        raise UnknownPresetError(msg)
    return preset


# ---------------------------------------------------------------------------
# Queries over rule lists
# ---------------------------------------------------------------------------


def holidays_for_year(
    rules: Iterable[NamedRule],
    year: int,
    *,
    observed: ObservedRule = ObservedRule.EXACT,
    location: object = None,
    matcher: HolidayMatcher | None = None,
) -> list[tuple[datetime.date, str]]:
    """Return sorted ``(date, name)`` pairs for every rule that falls in *year*.

    Fixed-date holidays are moved to their observed date, which may land in
    the neighbouring year (New Year's Day on a Saturday is observed on
    December 31 under ``NEAREST``).
    """
    m = matcher or default_matcher()
    result: list[tuple[datetime.date, str]] = []
    for name, rule in rules:
        d = m.date_for(rule, year, location)
        if d is None:
            continue
        if isinstance(rule, FixedDate):
            d = observed_date(d, observed)
        result.append((d, name))
    return sorted(result)


def holiday_name(
    rules: Iterable[NamedRule],
    d: datetime.date,
    *,
    observed: ObservedRule = ObservedRule.EXACT,
    location: object = None,
    matcher: HolidayMatcher | None = None,
) -> str | None:
    """Return the name of the first rule *d* is a holiday under, else ``None``."""
    m = matcher or default_matcher()
    for name, rule in rules:
        if isinstance(rule, FixedDate) and observed is not ObservedRule.EXACT:
            # A weekend shift can push the observed date across a year boundary.
            for year in (d.year - 1, d.year, d.year + 1):
                if not datetime.MINYEAR <= year <= datetime.MAXYEAR:
                    continue
                nominal = m.date_for(rule, year)
                if nominal is not None and observed_date(nominal, observed) == d:
                    return name
        elif m.matches(rule, d, location):
            return name
    return None


def get_holidays(
    country: str,
    year: int,
    *,
    observed: ObservedRule | None = None,
    location: object = None,
) -> list[tuple[datetime.date, str]]:
    """Return ``(date, name)`` pairs for the given *country* preset and *year*.

    *observed* overrides the preset's own policy for fixed-date holidays.
    Raises ``UnknownPresetError`` if the country is not supported.
    """
    preset = get_preset(country)
    policy = preset.observed if observed is None else observed
    return holidays_for_year(preset.holidays, year, observed=policy, location=location)


def is_holiday(
    country: str,
    d: datetime.date,
    *,
    observed: ObservedRule | None = None,
    location: object = None,
) -> str | None:
    """Return the holiday name if *d* is a holiday in *country*, else ``None``."""
    preset = get_preset(country)
    policy = preset.observed if observed is None else observed
    return holiday_name(preset.holidays, d, observed=policy, location=location)
