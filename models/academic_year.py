"""Datenmodell für das Schuljahr und seinen Wochenzyklus (Pydantic v2)."""

from datetime import date
from typing import Optional

from pydantic import Field, model_validator

from models.base import Record


class AcademicYear(Record):
    """Schuljahr mit A/B-Wochen-Zyklus.

    Die Woche, die week_cycle_start_date enthält, ist immer Woche 1.
    Ohne week_cycle_start_date beginnt der Zyklus mit start_date.
    """

    start_date: date
    end_date: Optional[date] = None
    week_cycle_start_date: Optional[date] = None
    cycle_length: int = Field(2, ge=1, le=2)   # 1 = jede Woche gleich, 2 = A/B
    skip_holiday_weeks: bool = False
    name: Optional[str] = None

    @property
    def cycle_anchor(self) -> date:
        """Referenzdatum für Woche 1."""
        return self.week_cycle_start_date or self.start_date

    @model_validator(mode='after')
    def _check_bounds(self):
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError(
                f"end_date ({self.end_date}) liegt vor start_date ({self.start_date})")
        return self
