"""Wochenzyklus: Welche Woche (1 oder 2) gilt an einem Datum?

Referenz ist der Montag der Woche, die ``week_cycle_start_date`` enthält
(Woche 1). Mit ``skip_holiday_weeks`` zählen Wochen, deren Montag bis Freitag
komplett in Ferien liegen, nicht mit; sie selbst haben keine Woche.
"""

import logging
from datetime import date, timedelta
from typing import Iterable, Optional

from engine.dates import daterange, monday_of, parse_date
from models.academic_year import AcademicYear
from models.event import Holiday

logger = logging.getLogger(__name__)


class WeekCycleResolver:
    """Bestimmt die Zyklus-Woche eines Datums.

    Rein und idempotent: Der Resolver hält nur die bei der Erzeugung
    eingelesenen Ferienzeiträume.
    """

    def __init__(self, academic_year: Optional[AcademicYear],
                 holidays: Iterable[Holiday] = ()):
        self.academic_year = academic_year
        # (Ferien, Beginn, Ende) aller lesbaren Ferienzeiträume
        self.holidays: list[tuple[Holiday, date, date]] = []
        for holiday in holidays:
            start = parse_date(holiday.start_date)
            end = parse_date(holiday.end_date)
            if start is None or end is None:
                logger.warning(
                    f"Ferien {holiday.id} ('{holiday.name}') übersprungen: "
                    f"Datum '{holiday.start_date}'–'{holiday.end_date}' nicht lesbar")
                continue
            self.holidays.append((holiday, start, end))

    # ─── Ferien ───

    def is_holiday(self, day: date) -> bool:
        """True, wenn ``day`` in einem Ferienzeitraum liegt (inklusive Grenzen)."""
        return any(start <= day <= end for _, start, end in self.holidays)

    def is_week_fully_covered(self, day: date) -> bool:
        """True, wenn Montag bis Freitag der Woche von ``day`` Ferientage sind."""
        if not self.holidays:
            return False
        monday = monday_of(day)
        return all(self.is_holiday(monday + timedelta(days=i)) for i in range(5))

    # ─── Zyklus ───

    def in_year(self, day: date) -> bool:
        ay = self.academic_year
        if ay is None or day < ay.start_date:
            return False
        return ay.end_date is None or day <= ay.end_date

    def resolve(self, day: date) -> Optional[int]:
        """Zyklus-Woche (1..cycle_length) oder None außerhalb des Zyklus."""
        ay = self.academic_year
        if not self.in_year(day):
            return None
        anchor = ay.cycle_anchor
        if day < anchor:
            return None
        if ay.skip_holiday_weeks and self.is_week_fully_covered(day):
            return None

        anchor_monday = monday_of(anchor)
        diff = (monday_of(day) - anchor_monday).days // 7
        if ay.skip_holiday_weeks:
            elapsed = sum(
                1 for i in range(1, diff + 1)
                if not self.is_week_fully_covered(anchor_monday + timedelta(weeks=i))
            )
        else:
            elapsed = diff
        return elapsed % ay.cycle_length + 1

    def week_label(self, day: date) -> Optional[int]:
        """Wochennummer für die Kalender-Anzeige: nur an Montagen, sonst None."""
        if day.weekday() != 0:
            return None
        return self.resolve(day)

    # ─── Schultage ───

    def is_school_day(self, day: date) -> bool:
        """Im Schuljahr, Montag bis Freitag und kein Ferientag."""
        return self.in_year(day) and day.weekday() < 5 and not self.is_holiday(day)

    def school_days_between(self, start: date, end: date) -> list[date]:
        """Alle Schultage von start bis end (inklusive)."""
        return [d for d in daterange(start, end) if self.is_school_day(d)]
