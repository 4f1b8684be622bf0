"""Materialisiert die wiederkehrende Stundenplan-Vorlage für konkrete Tage.

Pro Slot-Vorkommen gilt: konkrete Stunde > Aktivität > Platzhalter.
Konkrete Stunden selbst liefert der EventAggregator; hier werden sie nur
genutzt, um ihre Slots als belegt zu markieren.
"""

import logging
from datetime import date
from typing import Optional, Union

from config.schema import CalendarConfig, ColorPreference
from engine.dates import at_time, date_key, daterange, day_name, normalize_day_name, parse_hhmm
from engine.week_cycle import WeekCycleResolver
from models.display import ActivityUnit, LessonUnit
from models.snapshot import CalendarSnapshot
from models.timetable import TimetableActivity, TimetableEntry, TimetableSlot

logger = logging.getLogger(__name__)

MaterializedUnit = Union[ActivityUnit, LessonUnit]

DEFAULT_ACTIVITY_TITLE = "Untitled Activity"


def _first_per_slot(records: list, kind: str) -> dict[int, Union[TimetableEntry, TimetableActivity]]:
    """Slot-ID → Datensatz mit der kleinsten ID; Duplikate werden geloggt."""
    result: dict[int, Union[TimetableEntry, TimetableActivity]] = {}
    for rec in sorted(records, key=lambda r: r.id):
        slot_id = rec.timetable_slot_id
        if slot_id in result:
            logger.debug(
                f"{kind} {rec.id}: Slot {slot_id} bereits durch {kind} "
                f"{result[slot_id].id} belegt, übersprungen")
            continue
        result[slot_id] = rec
    return result


class SlotMaterializer:
    """Erzeugt Aktivitäten und Platzhalter-Stunden aus der Vorlage."""

    def __init__(self, snapshot: CalendarSnapshot,
                 config: Optional[CalendarConfig] = None,
                 resolver: Optional[WeekCycleResolver] = None):
        self.snapshot = snapshot
        self.config = config or CalendarConfig()
        self.resolver = resolver or WeekCycleResolver(
            snapshot.academic_year, snapshot.holidays)
        self._slots = snapshot.slot_map()
        self._classes = snapshot.class_map()
        self._subjects = snapshot.subject_map()

        # Datumsschlüssel → Slot-IDs mit konkreter Stunde
        self._lesson_slots: dict[str, set] = {}
        for lesson in snapshot.lessons:
            key = date_key(lesson.date)
            if key is not None:
                self._lesson_slots.setdefault(key, set()).add(lesson.timetable_slot_id)

    # ─── Öffentliche API ───

    def materialize(self, day: date) -> list[MaterializedUnit]:
        """Alle Aktivitäten und Platzhalter eines Tages, nach Slot-Beginn sortiert."""
        week = self.resolver.resolve(day)
        if week is None:
            return []

        weekday = day_name(day).lower()
        resolved = self._lesson_slots.get(day.isoformat(), set())

        activities = _first_per_slot(
            [a for a in self.snapshot.timetable_activities
             if self._matches(a, weekday, week)], "Aktivität")
        entries = _first_per_slot(
            [e for e in self.snapshot.timetable_entries
             if self._matches(e, weekday, week)], "Eintrag")

        slot_ids = set(activities) | set(entries)
        slots: list[TimetableSlot] = []
        for slot_id in slot_ids:
            slot = self._slots.get(slot_id)
            if slot is None:
                logger.debug(f"Slot {slot_id} unbekannt, Vorlage am {day} übersprungen")
                continue
            if parse_hhmm(slot.start_time) is None or parse_hhmm(slot.end_time) is None:
                logger.debug(f"Slot {slot_id}: Uhrzeit nicht lesbar, übersprungen")
                continue
            slots.append(slot)
        slots.sort(key=lambda s: (parse_hhmm(s.start_time), s.id))

        units: list[MaterializedUnit] = []
        claimed: set[int] = set()
        for slot in slots:
            if slot.id in resolved:
                continue
            activity = activities.get(slot.id)
            if activity is not None:
                units.append(self._activity_unit(activity, slot, day))
                claimed.add(slot.id)

        for slot in slots:
            if slot.id in resolved or slot.id in claimed:
                continue
            entry = entries.get(slot.id)
            if entry is not None and entry.is_assigned:
                units.append(self._placeholder_unit(entry, slot, day))

        units.sort(key=lambda u: (u.start, u.kind != "activity", u.id))
        return units

    def materialize_range(self, start: date, end: date) -> dict[date, list[MaterializedUnit]]:
        """materialize() für jeden Tag von start bis end (inklusive)."""
        return {d: self.materialize(d) for d in daterange(start, end)}

    # ─── Intern ───

    @staticmethod
    def _matches(rec: Union[TimetableEntry, TimetableActivity], weekday: str, week: int) -> bool:
        if normalize_day_name(rec.day_of_week) != weekday:
            return False
        return rec.week_number is not None and rec.week_number == week

    def _activity_unit(self, activity: TimetableActivity, slot: TimetableSlot,
                       day: date) -> ActivityUnit:
        return ActivityUnit(
            id=f"activity-{activity.id}-{day.isoformat()}",
            source_id=f"activity-{activity.id}",
            title=activity.title or DEFAULT_ACTIVITY_TITLE,
            start=at_time(day, slot.start_time),
            end=at_time(day, slot.end_time),
            color=activity.color or self.config.colors.activity_fallback,
            activity_type=activity.activity_type,
            timetable_slot_id=slot.id,
            location=activity.location,
            description=activity.description or activity.notes,
        )

    def _placeholder_unit(self, entry: TimetableEntry, slot: TimetableSlot,
                          day: date) -> LessonUnit:
        cls = self._classes.get(entry.class_id) if entry.class_id is not None else None
        subj = self._subjects.get(entry.subject_id) if entry.subject_id is not None else None
        class_name = cls.name if cls else None
        subject_name = subj.name if subj else None
        class_color = cls.color if cls else None
        subject_color = subj.color if subj else None

        if self.config.color_preference == ColorPreference.SUBJECT:
            title = f"{subject_name or 'Subject'} - {class_name or 'Class'}"
            color = subject_color or class_color
        else:
            title = f"{class_name or 'Class'} - {subject_name or 'Subject'}"
            color = class_color or subject_color

        return LessonUnit(
            id=f"unfinished-lesson-{day.isoformat()}-{slot.id}",
            source_id=f"entry-{entry.id}",
            title=title,
            start=at_time(day, slot.start_time),
            end=at_time(day, slot.end_time),
            color=color or self.config.colors.lesson_fallback,
            class_name=class_name,
            subject_name=subject_name,
            class_id=entry.class_id,
            subject_id=entry.subject_id,
            lesson_ids=[],
            is_unfinished=True,
            timetable_slot_id=slot.id,
            location=entry.room,
            description=entry.notes,
        )
