"""Führt alle Kalenderquellen pro Tag zu einer sortierten Agenda zusammen.

Quellen: materialisierte Vorlage (Aktivitäten, Platzhalter), konkrete Stunden
(gruppiert), einmalige Termine und Ferien.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional

from config.defaults import HOLIDAY_TYPES, holiday_type_label
from config.schema import CalendarConfig, ColorPreference
from engine.dates import END_OF_DAY, at_time, clip_to_day, date_key, daterange, parse_datetime
from engine.materializer import SlotMaterializer
from engine.week_cycle import WeekCycleResolver
from models.display import EventUnit, HolidayUnit, LessonUnit
from models.event import CalendarEvent
from models.lesson import Lesson
from models.snapshot import CalendarSnapshot

logger = logging.getLogger(__name__)


@dataclass
class DayAgenda:
    """Alle Einheiten eines Tages: mit Uhrzeit und ganztägig."""
    day: date
    timed: list = field(default_factory=list)      # nach (start, kind, title, id)
    all_day: list = field(default_factory=list)    # nach Titel

    @property
    def units(self) -> list:
        return self.all_day + self.timed

    def __len__(self) -> int:
        return len(self.timed) + len(self.all_day)


class EventAggregator:
    """Kombiniert Vorlage, Stunden, Termine und Ferien für beliebige Tage."""

    def __init__(self, snapshot: CalendarSnapshot,
                 config: Optional[CalendarConfig] = None):
        self.snapshot = snapshot
        self.config = config or CalendarConfig()
        self.resolver = WeekCycleResolver(snapshot.academic_year, snapshot.holidays)
        self.materializer = SlotMaterializer(snapshot, self.config, self.resolver)
        self._slots = snapshot.slot_map()
        self._classes = snapshot.class_map()
        self._subjects = snapshot.subject_map()

        self._lessons_by_day: dict[str, list[Lesson]] = {}
        for lesson in snapshot.lessons:
            key = date_key(lesson.date)
            if key is None:
                logger.warning(
                    f"Stunde {lesson.id} übersprungen: Datum '{lesson.date}' nicht lesbar")
                continue
            self._lessons_by_day.setdefault(key, []).append(lesson)

        self._events: list[tuple[CalendarEvent, datetime, datetime]] = []
        for event in snapshot.events:
            start = parse_datetime(event.start_time)
            end = parse_datetime(event.end_time)
            if start is None or end is None:
                logger.warning(
                    f"Termin {event.id} ('{event.title}') übersprungen: "
                    f"Zeit '{event.start_time}'–'{event.end_time}' nicht lesbar")
                continue
            if end < start:
                end = start
            self._events.append((event, start, end))

    # ─── Öffentliche API ───

    def day(self, day: date) -> DayAgenda:
        """Agenda eines Tages."""
        agenda = DayAgenda(day=day)
        for unit in self.materializer.materialize(day):
            agenda.timed.append(unit)
        agenda.timed.extend(self._lesson_groups(day))
        for unit in self._event_units(day):
            (agenda.all_day if unit.all_day else agenda.timed).append(unit)
        agenda.all_day.extend(self._holiday_units(day))

        agenda.timed.sort(key=lambda u: (u.start, u.kind, u.title, u.id))
        agenda.all_day.sort(key=lambda u: (u.title, u.id))
        return agenda

    def range(self, start: date, end: date) -> dict[date, DayAgenda]:
        """day() für jeden Tag von start bis end (inklusive)."""
        return {d: self.day(d) for d in daterange(start, end)}

    # ─── Stunden ───

    def _lesson_times(self, lesson: Lesson, day: date) -> tuple[datetime, datetime]:
        slot = self._slots.get(lesson.timetable_slot_id)
        if slot is not None:
            start, end = at_time(day, slot.start_time), at_time(day, slot.end_time)
            if start is not None and end is not None:
                return start, end
        defaults = self.config.lesson_defaults
        logger.warning(
            f"Stunde {lesson.id}: Zeitslot {lesson.timetable_slot_id} unbekannt, "
            f"Ersatzzeit {defaults.start_time}–{defaults.end_time}")
        return at_time(day, defaults.start_time), at_time(day, defaults.end_time)

    def _lesson_groups(self, day: date) -> list[LessonUnit]:
        """Konkrete Stunden eines Tages, gruppiert nach (Titel, Klasse, Fach)."""
        groups: dict[tuple, list[tuple[datetime, datetime, Lesson]]] = {}
        for lesson in self._lessons_by_day.get(day.isoformat(), []):
            cls = self._classes.get(lesson.class_id)
            subj = self._subjects.get(lesson.subject_id)
            class_name = cls.name if cls else None
            subject_name = subj.name if subj else None
            title = lesson.title or self._default_title(class_name, subject_name)
            start, end = self._lesson_times(lesson, day)
            groups.setdefault((title, class_name, subject_name), []).append(
                (start, end, lesson))

        units = []
        for (title, class_name, subject_name), members in groups.items():
            members.sort(key=lambda m: (m[0], m[2].id))
            first = members[0][2]
            cls = self._classes.get(first.class_id)
            subj = self._subjects.get(first.subject_id)
            units.append(LessonUnit(
                id=f"lesson-group-{first.id}",
                source_id=f"lesson-group-{first.id}",
                title=title,
                start=min(m[0] for m in members),
                end=max(m[1] for m in members),
                color=first.color or self._preferred_color(
                    cls.color if cls else None, subj.color if subj else None),
                class_name=class_name,
                subject_name=subject_name,
                class_id=first.class_id,
                subject_id=first.subject_id,
                lesson_ids=[m[2].id for m in members],
                plan_completed=all(m[2].plan_completed for m in members),
                timetable_slot_id=first.timetable_slot_id,
                description=first.lesson_plan,
            ))
        return units

    def _default_title(self, class_name: Optional[str], subject_name: Optional[str]) -> str:
        if self.config.color_preference == ColorPreference.SUBJECT:
            return f"{subject_name or 'Subject'} - {class_name or 'Class'}"
        return f"{class_name or 'Class'} - {subject_name or 'Subject'}"

    def _preferred_color(self, class_color: Optional[str],
                         subject_color: Optional[str]) -> str:
        if self.config.color_preference == ColorPreference.SUBJECT:
            color = subject_color or class_color
        else:
            color = class_color or subject_color
        return color or self.config.colors.lesson_fallback

    # ─── Termine ───

    def _event_units(self, day: date) -> list[EventUnit]:
        units = []
        for event, start, end in self._events:
            if not (start.date() <= day <= end.date()):
                continue
            multi_day = start.date() != end.date()
            day_start, day_end = clip_to_day(day, start, end)
            if event.all_day:
                day_start = datetime.combine(day, time.min)
                day_end = datetime.combine(day, END_OF_DAY)
            units.append(EventUnit(
                id=f"event-{event.id}-{day.isoformat()}" if multi_day else f"event-{event.id}",
                source_id=f"event-{event.id}",
                title=event.title,
                start=day_start,
                end=day_end,
                color=event.color or self.config.colors.event_fallback,
                all_day=event.all_day,
                is_multi_day=multi_day,
                start_date_str=start.date().isoformat(),
                end_date_str=end.date().isoformat(),
                location=event.location,
                description=event.description,
            ))
        return units

    # ─── Ferien ───

    def _holiday_units(self, day: date) -> list[HolidayUnit]:
        units = []
        for holiday, start, end in self.resolver.holidays:
            if not (start <= day <= end):
                continue
            holiday_type = holiday.holiday_type or "holiday"
            type_color = HOLIDAY_TYPES[holiday_type][1] if holiday_type in HOLIDAY_TYPES else None
            units.append(HolidayUnit(
                id=f"holiday-{holiday.id}-{day.isoformat()}",
                source_id=f"holiday-{holiday.id}",
                title=holiday.name or holiday_type_label(holiday_type),
                start=datetime.combine(day, time.min),
                end=datetime.combine(day, END_OF_DAY),
                color=holiday.color or type_color or self.config.colors.holiday_fallback,
                holiday_type=holiday_type,
                is_multi_day=start != end,
                start_date_str=start.isoformat(),
                end_date_str=end.isoformat(),
            ))
        return units
