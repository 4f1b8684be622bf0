"""Änderungssätze für das Bearbeiten von Stunden(-Gruppen).

Eine Stundengruppe wird beim Speichern komplett ersetzt: Alle bisherigen
Stunden der Gruppe werden gelöscht und für jeden gewählten Slot eine neue
Stunde angelegt. Platzhalter haben nichts zu löschen. Angewendet werden die
Änderungen von der Persistenzschicht der Host-Anwendung.
"""

from dataclasses import dataclass, field
from typing import Optional

from pydantic import Field, field_validator

from engine.dates import date_key
from models.base import Record
from models.display import LessonUnit
from models.lesson import Lesson

DEFAULT_LESSON_COLOR = "#6B7280"


class LessonForm(Record):
    """Formularwerte beim Anlegen/Bearbeiten einer Stunde."""

    title: str = ""
    date: str
    timetable_slot_ids: list[int] = Field(default_factory=list)
    class_id: Optional[int] = None
    subject_id: Optional[int] = None
    lesson_plan: str = ""
    color: str = DEFAULT_LESSON_COLOR
    plan_completed: bool = False

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: str) -> str:
        key = date_key(v)
        if key is None:
            raise ValueError(f"Datum '{v}' ist nicht im Format YYYY-MM-DD")
        return key


class LessonDraft(Record):
    """Neu anzulegende Stunde (noch ohne ID)."""

    date: str
    timetable_slot_id: int
    class_id: Optional[int] = None
    subject_id: Optional[int] = None
    title: str = ""
    lesson_plan: Optional[str] = None
    plan_completed: bool = False
    color: Optional[str] = None


@dataclass
class LessonChangeSet:
    delete_ids: list[int] = field(default_factory=list)
    create: list[LessonDraft] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.delete_ids and not self.create


def lesson_form_data(unit: LessonUnit, lessons: list[Lesson]) -> LessonForm:
    """Startwerte des Bearbeiten-Formulars für eine Stunden-Einheit.

    Platzhalter liefern ihren eigenen Slot, Gruppen die Slots ihrer Stunden.
    """
    if unit.is_unfinished:
        slot_ids = [unit.timetable_slot_id] if unit.timetable_slot_id is not None else []
        class_id, subject_id = unit.class_id, unit.subject_id
    else:
        members = [l for l in lessons if l.id in unit.lesson_ids]
        slot_ids = [l.timetable_slot_id for l in members if l.timetable_slot_id is not None]
        first = members[0] if members else None
        class_id = first.class_id if first else unit.class_id
        subject_id = first.subject_id if first else unit.subject_id

    return LessonForm(
        title=unit.title,
        date=unit.day.isoformat(),
        timetable_slot_ids=slot_ids,
        class_id=class_id,
        subject_id=subject_id,
        lesson_plan=unit.description or "",
        color=unit.color or DEFAULT_LESSON_COLOR,
        plan_completed=unit.plan_completed,
    )


def plan_lesson_delete(unit: LessonUnit) -> list[int]:
    """IDs der zu löschenden Stunden; Platzhalter löschen nichts."""
    if unit.is_unfinished:
        return []
    return list(unit.lesson_ids)


def plan_lesson_save(unit: Optional[LessonUnit], form: LessonForm) -> LessonChangeSet:
    """Ersetzt die Gruppe durch eine Stunde pro gewähltem Slot.

    ``unit`` ist None beim Anlegen einer ganz neuen Stunde.
    """
    delete_ids = plan_lesson_delete(unit) if unit is not None else []
    create = [
        LessonDraft(
            date=form.date,
            timetable_slot_id=slot_id,
            class_id=form.class_id,
            subject_id=form.subject_id,
            title=form.title,
            lesson_plan=form.lesson_plan or None,
            plan_completed=form.plan_completed,
            color=form.color,
        )
        # Reihenfolge bleibt, doppelte Slots zählen einmal
        for slot_id in dict.fromkeys(form.timetable_slot_ids)
    ]
    return LessonChangeSet(delete_ids=delete_ids, create=create)
