"""Wiederkehrende Stundenplan-Vorlage: Zeitslots, Einträge, Aktivitäten."""

from typing import Optional

from models.base import Record


class TimetableSlot(Record):
    """Zeitfenster im Wochenzyklus (kein Datum!), z.B. 09:00–10:00."""

    id: int
    start_time: str                   # "HH:MM"
    end_time: str                     # "HH:MM"
    week_number: Optional[int] = 1    # 1 oder 2
    label: Optional[str] = None       # "Period 1"
    period: Optional[int] = None


class TimetableEntry(Record):
    """Klasse/Fach auf einem (Wochentag, Woche, Slot)-Tripel.

    Ohne classId und subjectId bleibt der Slot leer (unsichtbar).
    """

    id: int
    day_of_week: Optional[str] = None       # "Monday".."Sunday"
    week_number: Optional[int] = None
    timetable_slot_id: Optional[int] = None
    class_id: Optional[int] = None
    subject_id: Optional[int] = None
    room: Optional[str] = None
    notes: Optional[str] = None

    @property
    def is_assigned(self) -> bool:
        """True, wenn Klasse oder Fach gesetzt ist."""
        return self.class_id is not None or self.subject_id is not None


class TimetableActivity(Record):
    """Nicht-Unterrichts-Belegung eines Slots (Konferenz, Aufsicht, ...)."""

    id: int
    day_of_week: Optional[str] = None
    week_number: Optional[int] = None
    timetable_slot_id: Optional[int] = None
    title: Optional[str] = None
    activity_type: Optional[str] = None     # "meeting", "duty", ...
    color: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None
