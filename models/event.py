"""Einmalige Termine und Ferien.

Datums-/Zeitfelder bleiben Strings: Ein kaputter Datensatz soll beim
Aggregieren übersprungen werden, nicht das Laden des ganzen Snapshots
verhindern.
"""

from typing import Optional

from models.base import Record


class CalendarEvent(Record):
    """Vom Nutzer angelegter Termin, ggf. über mehrere Tage."""

    id: int
    title: str = ""
    start_time: str                   # ISO-Datum/Zeit, z.B. "2025-02-03T14:00:00"
    end_time: str
    all_day: bool = False
    color: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None


class Holiday(Record):
    """Benannter Ferienzeitraum (Start und Ende inklusive), immer ganztägig."""

    id: int
    name: str = ""
    start_date: str                   # "YYYY-MM-DD"
    end_date: str
    holiday_type: Optional[str] = "holiday"
    color: Optional[str] = None
