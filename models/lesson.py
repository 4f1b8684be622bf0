"""Konkrete Unterrichtsstunden sowie Klassen- und Fach-Stammdaten."""

from typing import Optional

from models.base import Record


class SchoolClass(Record):
    """Eine Lerngruppe (z.B. '7B')."""

    id: int
    name: str
    color: Optional[str] = None


class Subject(Record):
    """Ein Unterrichtsfach (z.B. 'Maths')."""

    id: int
    name: str
    color: Optional[str] = None


class Lesson(Record):
    """Geplante Stunde an einem konkreten Datum in einem Zeitslot.

    ``date`` darf einen Uhrzeit-Anteil tragen ("2025-02-03T00:00:00Z");
    verglichen wird nur der YYYY-MM-DD-Teil.
    """

    id: int
    date: str
    timetable_slot_id: Optional[int] = None
    class_id: Optional[int] = None
    subject_id: Optional[int] = None
    title: str = ""
    lesson_plan: Optional[str] = None
    plan_completed: bool = False
    color: Optional[str] = None
