"""Einheitliche Anzeige-Einheiten (DisplayUnit) für alle Kalenderquellen.

Jede Quelle (Stunde, Termin, Ferien, Aktivität) wird zu genau einer
Variante; ``kind`` ist der Diskriminator der Union.
"""

from datetime import date, datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _UnitBase(BaseModel):
    """Felder, die jede Anzeige-Einheit trägt."""

    model_config = ConfigDict(frozen=True)

    id: str                  # eindeutig pro Tag, z.B. "holiday-3-2025-02-03"
    source_id: str           # Quelle über alle Tage, z.B. "holiday-3"
    title: str
    start: datetime          # Wanduhrzeit, ohne Zeitzone
    end: datetime
    color: str
    all_day: bool = False

    @property
    def day(self) -> date:
        """Kalendertag, dem diese Einheit zugeordnet ist."""
        return self.start.date()


class LessonUnit(_UnitBase):
    """Geplante Stunde (Gruppe) oder synthetisierter Platzhalter."""

    kind: Literal["lesson"] = "lesson"
    class_name: Optional[str] = None
    subject_name: Optional[str] = None
    class_id: Optional[int] = None
    subject_id: Optional[int] = None
    lesson_ids: list[int] = []          # leer bei Platzhaltern
    is_unfinished: bool = False
    plan_completed: bool = False
    timetable_slot_id: Optional[int] = None
    location: Optional[str] = None
    description: Optional[str] = None


class EventUnit(_UnitBase):
    """Einmaliger Termin (ggf. Tagesausschnitt eines mehrtägigen Termins)."""

    kind: Literal["event"] = "event"
    is_multi_day: bool = False
    start_date_str: Optional[str] = None
    end_date_str: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None


class HolidayUnit(_UnitBase):
    """Ferientag; immer ganztägig."""

    kind: Literal["holiday"] = "holiday"
    all_day: bool = True
    holiday_type: str = "holiday"
    is_multi_day: bool = False
    start_date_str: Optional[str] = None
    end_date_str: Optional[str] = None
    description: Optional[str] = None


class ActivityUnit(_UnitBase):
    """Aktivität auf einem Stundenplan-Slot (Konferenz, Aufsicht, ...)."""

    kind: Literal["activity"] = "activity"
    activity_type: Optional[str] = None
    timetable_slot_id: Optional[int] = None
    location: Optional[str] = None
    description: Optional[str] = None


DisplayUnit = Annotated[
    Union[LessonUnit, EventUnit, HolidayUnit, ActivityUnit],
    Field(discriminator="kind"),
]

KINDS: tuple[str, ...] = ("lesson", "event", "holiday", "activity")
