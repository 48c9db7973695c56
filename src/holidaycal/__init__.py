"""Holiday rules and matching.

Describe when holidays fall (fixed dates, floating weekdays, days of the
year, or Easter-style computed dates), decide whether a date is one, and
shift weekend holidays to their observed dates.
"""

from holidaycal.errors import (
    ConfigError,
    DuplicateResolverError,
    HolidayError,
    InvalidRuleError,
    InvalidYearError,
    UnknownPresetError,
    UnknownResolverError,
)
from holidaycal.matcher import CacheInfo, HolidayMatcher, date_for, matches
from holidaycal.presets import PRESETS, Preset, get_holidays, get_preset, is_holiday
from holidaycal.resolvers import (
    Resolver,
    ascension_day,
    easter_monday,
    easter_sunday,
    good_friday,
    kings_day,
    new_year_shifted,
    register_resolver,
    resolve,
    unregister_resolver,
    whit_monday,
)
from holidaycal.rules import (
    Computed,
    FixedDate,
    FloatingWeekday,
    HolidayRule,
    ObservedRule,
    YearDay,
    is_weekday_n,
    observed_date,
)

__all__ = [
    "PRESETS",
    "CacheInfo",
    "Computed",
    "ConfigError",
    "DuplicateResolverError",
    "FixedDate",
    "FloatingWeekday",
    "HolidayError",
    "HolidayMatcher",
    "HolidayRule",
    "InvalidRuleError",
    "InvalidYearError",
    "ObservedRule",
    "Preset",
    "Resolver",
    "UnknownPresetError",
    "UnknownResolverError",
    "YearDay",
    "ascension_day",
    "date_for",
    "easter_monday",
    "easter_sunday",
    "get_holidays",
    "get_preset",
    "good_friday",
    "is_holiday",
    "is_weekday_n",
    "kings_day",
    "matches",
    "new_year_shifted",
    "observed_date",
    "register_resolver",
    "resolve",
    "unregister_resolver",
    "whit_monday",
]
