from models.academic_year import AcademicYear
from models.timetable import TimetableSlot, TimetableEntry, TimetableActivity
from models.lesson import Lesson, SchoolClass, Subject
from models.event import CalendarEvent, Holiday
from models.display import (
    ActivityUnit,
    DisplayUnit,
    EventUnit,
    HolidayUnit,
    LessonUnit,
)
from models.snapshot import CalendarSnapshot, ReferenceReport, SnapshotLoadError

__all__ = [
    "AcademicYear",
    "TimetableSlot",
    "TimetableEntry",
    "TimetableActivity",
    "Lesson",
    "SchoolClass",
    "Subject",
    "CalendarEvent",
    "Holiday",
    "ActivityUnit",
    "DisplayUnit",
    "EventUnit",
    "HolidayUnit",
    "LessonUnit",
    "CalendarSnapshot",
    "ReferenceReport",
    "SnapshotLoadError",
]
