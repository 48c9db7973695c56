from __future__ import annotations

import calendar
import datetime

import pytest

from holidaycal.errors import InvalidRuleError
from holidaycal.resolvers import Resolver
from holidaycal.rules import (
    Computed,
    FixedDate,
    FloatingWeekday,
    ObservedRule,
    YearDay,
    is_weekday_n,
    observed_date,
    parse_weekday,
    rule_from_dict,
    rule_to_dict,
)


class TestConstruction:
    def test_fixed_date(self) -> None:
        rule = FixedDate(3, 14)
        assert (rule.month, rule.day) == (3, 14)

    def test_fixed_date_leap_day_allowed(self) -> None:
        FixedDate(2, 29)

    @pytest.mark.parametrize(("month", "day"), [(0, 1), (13, 1), (2, 30), (4, 31), (1, 0)])
    def test_fixed_date_out_of_range(self, month: int, day: int) -> None:
        with pytest.raises(InvalidRuleError):
            FixedDate(month, day)

    def test_floating_zero_ordinal_rejected(self) -> None:
        with pytest.raises(InvalidRuleError, match="ordinal"):
            FloatingWeekday(1, calendar.MONDAY, 0)

    def test_floating_ordinal_out_of_range(self) -> None:
        with pytest.raises(InvalidRuleError):
            FloatingWeekday(1, calendar.MONDAY, 6)
        with pytest.raises(InvalidRuleError):
            FloatingWeekday(1, calendar.MONDAY, -6)

    def test_floating_bad_weekday(self) -> None:
        with pytest.raises(InvalidRuleError, match="weekday"):
            FloatingWeekday(1, 7, 1)

    def test_year_day_bounds(self) -> None:
        YearDay(1)
        YearDay(366)
        with pytest.raises(InvalidRuleError):
            YearDay(0)
        with pytest.raises(InvalidRuleError):
            YearDay(367)

    def test_invalid_rule_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            FixedDate(2, 31)

    def test_computed_unknown_resolver(self) -> None:
        with pytest.raises(InvalidRuleError, match="Unknown resolver"):
            Computed("no_such_resolver")

    def test_computed_enum_and_name_are_equal(self) -> None:
        by_enum = Computed(Resolver.GOOD_FRIDAY)
        by_name = Computed("good_friday")
        assert by_enum == by_name
        assert hash(by_enum) == hash(by_name)
        assert by_enum.resolver == "good_friday"

    def test_rules_are_immutable(self) -> None:
        rule = FixedDate(12, 25)
        with pytest.raises(AttributeError):
            rule.day = 26  # type: ignore[misc]

    def test_rules_usable_as_keys(self) -> None:
        table = {FixedDate(12, 25): "xmas", FloatingWeekday(5, 0, -1): "memorial"}
        assert table[FixedDate(12, 25)] == "xmas"
        assert table[FloatingWeekday(5, 0, -1)] == "memorial"


class TestIsWeekdayN:
    def test_third_monday_january_2021(self) -> None:
        assert is_weekday_n(datetime.date(2021, 1, 18), calendar.MONDAY, 3)
        assert not is_weekday_n(datetime.date(2021, 1, 11), calendar.MONDAY, 3)
        assert not is_weekday_n(datetime.date(2021, 1, 25), calendar.MONDAY, 3)

    def test_last_monday_may_2021(self) -> None:
        assert is_weekday_n(datetime.date(2021, 5, 31), calendar.MONDAY, -1)
        assert not is_weekday_n(datetime.date(2021, 5, 24), calendar.MONDAY, -1)
        assert is_weekday_n(datetime.date(2021, 5, 24), calendar.MONDAY, -2)

    def test_last_monday_august_2020(self) -> None:
        assert is_weekday_n(datetime.date(2020, 8, 31), calendar.MONDAY, -1)

    def test_last_occurrence_in_fourth_week(self) -> None:
        # February 2021 has exactly four Mondays; the 22nd is both 4th and last
        d = datetime.date(2021, 2, 22)
        assert is_weekday_n(d, calendar.MONDAY, 4)
        assert is_weekday_n(d, calendar.MONDAY, -1)
        assert not is_weekday_n(d, calendar.MONDAY, 5)

    def test_fifth_occurrence_in_leap_february(self) -> None:
        # February 2024 has five Thursdays: 1, 8, 15, 22, 29
        assert is_weekday_n(datetime.date(2024, 2, 29), calendar.THURSDAY, 5)
        assert is_weekday_n(datetime.date(2024, 2, 29), calendar.THURSDAY, -1)
        assert is_weekday_n(datetime.date(2024, 2, 1), calendar.THURSDAY, -5)
        assert is_weekday_n(datetime.date(2024, 2, 1), calendar.THURSDAY, 1)

    def test_wrong_weekday_never_matches(self) -> None:
        assert not is_weekday_n(datetime.date(2021, 1, 19), calendar.MONDAY, 3)

    def test_zero_never_matches(self) -> None:
        for day in range(1, 32):
            d = datetime.date(2021, 1, day)
            assert not is_weekday_n(d, d.weekday(), 0)


class TestObservedDate:
    saturday = datetime.date(2026, 7, 4)
    sunday = datetime.date(2021, 7, 4)
    weekday = datetime.date(2025, 7, 4)

    def test_nearest(self) -> None:
        assert observed_date(self.saturday, ObservedRule.NEAREST) == datetime.date(2026, 7, 3)
        assert observed_date(self.sunday, ObservedRule.NEAREST) == datetime.date(2021, 7, 5)

    def test_exact(self) -> None:
        assert observed_date(self.saturday, ObservedRule.EXACT) == self.saturday
        assert observed_date(self.sunday, ObservedRule.EXACT) == self.sunday

    def test_monday(self) -> None:
        assert observed_date(self.saturday, ObservedRule.MONDAY) == datetime.date(2026, 7, 6)
        assert observed_date(self.sunday, ObservedRule.MONDAY) == datetime.date(2021, 7, 5)

    def test_weekday_unchanged(self) -> None:
        for rule in ObservedRule:
            assert observed_date(self.weekday, rule) == self.weekday

    def test_nearest_crosses_year(self) -> None:
        # January 1, 2022 is a Saturday
        assert observed_date(datetime.date(2022, 1, 1)) == datetime.date(2021, 12, 31)


class TestDictForm:
    def test_fixed_from_dict(self) -> None:
        assert rule_from_dict({"type": "fixed", "month": 3, "day": 14}) == FixedDate(3, 14)

    def test_floating_weekday_names(self) -> None:
        expected = FloatingWeekday(1, calendar.MONDAY, 3)
        for weekday in ("mon", "Monday", 0):
            data = {"type": "floating", "month": 1, "weekday": weekday, "ordinal": 3}
            assert rule_from_dict(data) == expected

    def test_year_day_from_dict(self) -> None:
        assert rule_from_dict({"type": "year_day", "day": 183}) == YearDay(183)

    def test_computed_from_dict(self) -> None:
        rule = rule_from_dict({"type": "computed", "resolver": "kings_day"})
        assert rule == Computed(Resolver.KINGS_DAY)

    def test_to_dict(self) -> None:
        assert rule_to_dict(FloatingWeekday(11, calendar.THURSDAY, 4)) == {
            "type": "floating",
            "month": 11,
            "weekday": "thursday",
            "ordinal": 4,
        }
        assert rule_to_dict(Computed(Resolver.WHIT_MONDAY)) == {
            "type": "computed",
            "resolver": "whit_monday",
        }

    def test_to_dict_rejects_non_rule(self) -> None:
        with pytest.raises(InvalidRuleError):
            rule_to_dict("christmas")  # type: ignore[arg-type]

    def test_unknown_type(self) -> None:
        with pytest.raises(InvalidRuleError, match="Unknown rule type"):
            rule_from_dict({"type": "lunar"})

    def test_missing_field(self) -> None:
        with pytest.raises(InvalidRuleError, match="'day'"):
            rule_from_dict({"type": "fixed", "month": 3})

    def test_non_integer_field(self) -> None:
        with pytest.raises(InvalidRuleError):
            rule_from_dict({"type": "fixed", "month": "3", "day": 14})

    def test_not_a_dict(self) -> None:
        with pytest.raises(InvalidRuleError, match="must be an object"):
            rule_from_dict(["fixed", 3, 14])  # type: ignore[arg-type]

    def test_bad_weekday_name(self) -> None:
        with pytest.raises(InvalidRuleError):
            parse_weekday("funday")
