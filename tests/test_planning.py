"""Tests für Änderungssätze beim Bearbeiten von Stunden."""

from datetime import date

import pytest
from pydantic import ValidationError

from engine.aggregator import EventAggregator
from engine.materializer import SlotMaterializer
from engine.planning import LessonForm, lesson_form_data, plan_lesson_delete, plan_lesson_save
from models.academic_year import AcademicYear
from models.lesson import Lesson, SchoolClass, Subject
from models.snapshot import CalendarSnapshot
from models.timetable import TimetableEntry, TimetableSlot


def _make_snapshot() -> CalendarSnapshot:
    return CalendarSnapshot(
        academic_year=AcademicYear(start_date=date(2025, 1, 6)),
        timetable_slots=[
            TimetableSlot(id=1, start_time="09:00", end_time="09:30"),
            TimetableSlot(id=2, start_time="09:30", end_time="10:00"),
        ],
        timetable_entries=[
            TimetableEntry(id=1, day_of_week="Monday", week_number=1,
                           timetable_slot_id=1, class_id=1, subject_id=2),
        ],
        lessons=[
            Lesson(id=10, date="2025-02-10", timetable_slot_id=1, class_id=1,
                   subject_id=2, title="Fractions", lesson_plan="Intro"),
            Lesson(id=11, date="2025-02-10", timetable_slot_id=2, class_id=1,
                   subject_id=2, title="Fractions"),
        ],
        classes=[SchoolClass(id=1, name="7B", color="#EF4444")],
        subjects=[Subject(id=2, name="Maths", color="#3B82F6")],
    )


def _make_group():
    snap = _make_snapshot()
    return snap, EventAggregator(snap).day(date(2025, 2, 10)).timed[0]


def _make_placeholder():
    snap = _make_snapshot()
    return snap, SlotMaterializer(snap).materialize(date(2025, 2, 3))[0]


class TestLessonForm:
    def test_date_is_normalized(self):
        form = LessonForm(date="2025-02-10T00:00:00Z", timetable_slot_ids=[1])
        assert form.date == "2025-02-10"

    def test_invalid_date_rejected(self):
        with pytest.raises(ValidationError):
            LessonForm(date="10.02.2025")

    def test_camel_case_input(self):
        form = LessonForm.model_validate(
            {"date": "2025-02-10", "timetableSlotIds": [1, 2], "classId": 1})
        assert form.timetable_slot_ids == [1, 2]
        assert form.class_id == 1


class TestFormData:
    def test_group_prefills_member_slots(self):
        snap, unit = _make_group()
        form = lesson_form_data(unit, snap.lessons)
        assert form.timetable_slot_ids == [1, 2]
        assert form.title == "Fractions"
        assert form.date == "2025-02-10"
        assert form.class_id == 1
        assert form.lesson_plan == "Intro"

    def test_placeholder_prefills_own_slot(self):
        snap, unit = _make_placeholder()
        form = lesson_form_data(unit, snap.lessons)
        assert form.timetable_slot_ids == [1]
        assert form.subject_id == 2
        assert form.date == "2025-02-03"


class TestChangeSets:
    def test_delete_group(self):
        _, unit = _make_group()
        assert plan_lesson_delete(unit) == [10, 11]

    def test_delete_placeholder_is_noop(self):
        _, unit = _make_placeholder()
        assert plan_lesson_delete(unit) == []

    def test_save_group_replaces_members(self):
        snap, unit = _make_group()
        form = lesson_form_data(unit, snap.lessons).model_copy(
            update={"timetable_slot_ids": [2, 1, 2], "title": "Decimals"})
        changes = plan_lesson_save(unit, form)
        assert changes.delete_ids == [10, 11]
        assert [d.timetable_slot_id for d in changes.create] == [2, 1]
        assert all(d.title == "Decimals" for d in changes.create)
        assert all(d.date == "2025-02-10" for d in changes.create)

    def test_save_placeholder_only_creates(self):
        snap, unit = _make_placeholder()
        changes = plan_lesson_save(unit, lesson_form_data(unit, snap.lessons))
        assert changes.delete_ids == []
        assert len(changes.create) == 1
        assert changes.create[0].class_id == 1

    def test_save_new_lesson(self):
        changes = plan_lesson_save(None, LessonForm(date="2025-02-10", timetable_slot_ids=[1]))
        assert changes.delete_ids == []
        assert len(changes.create) == 1
        assert changes.create[0].color == "#6B7280"

    def test_empty_change_set(self):
        changes = plan_lesson_save(None, LessonForm(date="2025-02-10"))
        assert changes.is_empty
