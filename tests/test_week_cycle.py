"""Tests für den A/B-Wochenzyklus."""

import logging
from datetime import date, timedelta

from engine.week_cycle import WeekCycleResolver
from models.academic_year import AcademicYear
from models.event import Holiday


def _make_year(**kw) -> AcademicYear:
    defaults = dict(start_date=date(2025, 1, 6), cycle_length=2)
    defaults.update(kw)
    return AcademicYear(**defaults)


def _make_holiday(start: str, end: str, id: int = 1, **kw) -> Holiday:
    return Holiday(id=id, name=kw.pop("name", "Break"), start_date=start, end_date=end, **kw)


class TestResolve:
    def test_alternating_weeks(self):
        resolver = WeekCycleResolver(_make_year())
        assert resolver.resolve(date(2025, 1, 6)) == 1
        assert resolver.resolve(date(2025, 1, 13)) == 2
        assert resolver.resolve(date(2025, 1, 20)) == 1

    def test_whole_week_shares_number(self):
        resolver = WeekCycleResolver(_make_year())
        assert {resolver.resolve(date(2025, 1, 13) + timedelta(days=i))
                for i in range(7)} == {2}

    def test_idempotent(self):
        resolver = WeekCycleResolver(_make_year())
        day = date(2025, 3, 12)
        assert resolver.resolve(day) == resolver.resolve(day)

    def test_result_in_cycle_range(self):
        resolver = WeekCycleResolver(_make_year())
        for i in range(0, 200, 3):
            assert resolver.resolve(date(2025, 1, 6) + timedelta(days=i)) in (1, 2)

    def test_single_week_cycle(self):
        resolver = WeekCycleResolver(_make_year(cycle_length=1))
        assert resolver.resolve(date(2025, 1, 13)) == 1
        assert resolver.resolve(date(2025, 1, 20)) == 1

    def test_no_academic_year(self):
        assert WeekCycleResolver(None).resolve(date(2025, 1, 6)) is None

    def test_before_start_and_after_end(self):
        resolver = WeekCycleResolver(_make_year(end_date=date(2025, 7, 18)))
        assert resolver.resolve(date(2025, 1, 5)) is None
        assert resolver.resolve(date(2025, 7, 18)) is not None
        assert resolver.resolve(date(2025, 7, 21)) is None

    def test_cycle_anchor_mid_week(self):
        """Die Woche des Ankers ist Woche 1; Tage davor haben keine Woche."""
        resolver = WeekCycleResolver(_make_year(week_cycle_start_date=date(2025, 1, 8)))
        assert resolver.resolve(date(2025, 1, 6)) is None
        assert resolver.resolve(date(2025, 1, 8)) == 1
        assert resolver.resolve(date(2025, 1, 13)) == 2

    def test_later_anchor_shifts_cycle(self):
        resolver = WeekCycleResolver(_make_year(week_cycle_start_date=date(2025, 1, 13)))
        assert resolver.resolve(date(2025, 1, 13)) == 1
        assert resolver.resolve(date(2025, 1, 20)) == 2


class TestHolidayWeeks:
    def test_skipped_week_does_not_advance(self):
        resolver = WeekCycleResolver(
            _make_year(skip_holiday_weeks=True),
            [_make_holiday("2025-01-13", "2025-01-17")],
        )
        assert resolver.resolve(date(2025, 1, 6)) == 1
        assert resolver.resolve(date(2025, 1, 14)) is None
        assert resolver.resolve(date(2025, 1, 20)) == 2
        assert resolver.resolve(date(2025, 1, 27)) == 1

    def test_without_skip_holidays_count(self):
        resolver = WeekCycleResolver(
            _make_year(), [_make_holiday("2025-01-13", "2025-01-17")])
        assert resolver.resolve(date(2025, 1, 14)) == 2
        assert resolver.resolve(date(2025, 1, 20)) == 1

    def test_partial_holiday_week_counts(self):
        resolver = WeekCycleResolver(
            _make_year(skip_holiday_weeks=True),
            [_make_holiday("2025-01-13", "2025-01-16")],
        )
        assert resolver.resolve(date(2025, 1, 14)) == 2
        assert resolver.resolve(date(2025, 1, 20)) == 1

    def test_adjacent_holidays_cover_week(self):
        resolver = WeekCycleResolver(
            _make_year(skip_holiday_weeks=True),
            [_make_holiday("2025-01-10", "2025-01-14"),
             _make_holiday("2025-01-15", "2025-01-19", id=2)],
        )
        assert resolver.is_week_fully_covered(date(2025, 1, 15))
        assert resolver.resolve(date(2025, 1, 20)) == 2

    def test_malformed_holiday_is_ignored(self, caplog):
        with caplog.at_level(logging.WARNING):
            resolver = WeekCycleResolver(
                _make_year(skip_holiday_weeks=True),
                [_make_holiday("someday", "2025-01-17")],
            )
        assert resolver.holidays == []
        assert resolver.resolve(date(2025, 1, 13)) == 2
        assert "nicht lesbar" in caplog.text


class TestLabelsAndSchoolDays:
    def test_week_label_only_on_mondays(self):
        resolver = WeekCycleResolver(_make_year())
        assert resolver.week_label(date(2025, 1, 13)) == 2
        assert resolver.week_label(date(2025, 1, 14)) is None

    def test_school_days(self):
        resolver = WeekCycleResolver(
            _make_year(), [_make_holiday("2025-01-08", "2025-01-08")])
        assert not resolver.is_school_day(date(2025, 1, 11))
        assert not resolver.is_school_day(date(2025, 1, 8))
        assert resolver.is_school_day(date(2025, 1, 9))
        assert len(resolver.school_days_between(date(2025, 1, 6), date(2025, 1, 12))) == 4
