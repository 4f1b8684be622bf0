"""Demo-Daten-Generator für den Unterrichtskalender.

Erzeugt einen reproduzierbaren Snapshot mit A/B-Wochen-Stundenplan.

Absichtlich enthaltene Sonderfälle:
  1. Doppelstunden: zwei aufeinanderfolgende Stunden mit gleichem Titel
     (werden zu einer Gruppe zusammengefasst)
  2. Leere Einträge: Slots ohne Klasse und Fach (unsichtbar)
  3. Aktivitäten: Konferenz und Aufsicht verdrängen Platzhalter
  4. Mehrtägige Termine und Ferien, darunter volle Ferienwochen
  5. Überlappender Termin am Nachmittag (zweite Spalte neben einer Stunde)
"""

import random
from datetime import date, timedelta
from typing import Optional

from config.schema import CalendarConfig
from config.defaults import DAY_NAMES
from engine.dates import daterange
from engine.week_cycle import WeekCycleResolver
from models.academic_year import AcademicYear
from models.event import CalendarEvent, Holiday
from models.lesson import Lesson, SchoolClass, Subject
from models.snapshot import CalendarSnapshot
from models.timetable import TimetableActivity, TimetableEntry, TimetableSlot

# ─── Stammdaten ───────────────────────────────────────────────────────────────

_CLASSES: list[tuple[str, str]] = [
    ("7A", "#3B82F6"), ("7B", "#EF4444"), ("8C", "#10B981"),
    ("9A", "#F59E0B"), ("10B", "#8B5CF6"), ("11 Set 2", "#EC4899"),
]

_SUBJECTS: list[tuple[str, str]] = [
    ("Maths", "#2563EB"), ("Physics", "#DC2626"), ("Computing", "#059669"),
]

# (Beginn, Ende) der Unterrichtsstunden
_PERIODS: list[tuple[str, str]] = [
    ("08:50", "09:50"), ("09:50", "10:50"), ("11:10", "12:10"),
    ("12:10", "13:10"), ("14:00", "15:00"), ("15:00", "16:00"),
]

_TOPICS: dict[str, list[str]] = {
    "Maths": ["Fractions", "Linear Equations", "Pythagoras", "Probability"],
    "Physics": ["Forces", "Energy Stores", "Circuits", "Waves"],
    "Computing": ["Algorithms", "Binary", "Python Loops", "Networks"],
}


class DemoDataGenerator:
    """Generiert einen vollständigen Demo-Snapshot."""

    def __init__(self, config: Optional[CalendarConfig] = None,
                 seed: Optional[int] = None,
                 start_date: date = date(2025, 9, 1)) -> None:
        self.config = config or CalendarConfig()
        self.rng = random.Random(seed)
        # Schuljahresbeginn immer auf einen Montag legen
        self.start_date = start_date - timedelta(days=start_date.weekday())

    # ─── Vorlage ──────────────────────────────────────────────────────────────

    def _generate_academic_year(self) -> AcademicYear:
        return AcademicYear(
            name=f"{self.start_date.year}/{self.start_date.year + 1}",
            start_date=self.start_date,
            end_date=self.start_date + timedelta(weeks=46) - timedelta(days=3),
            week_cycle_start_date=self.start_date,
            cycle_length=2,
            skip_holiday_weeks=True,
        )

    def _generate_slots(self) -> list[TimetableSlot]:
        return [
            TimetableSlot(id=i, start_time=start, end_time=end,
                          week_number=1, label=f"Period {i}", period=i)
            for i, (start, end) in enumerate(_PERIODS, start=1)
        ]

    def _generate_entries(self, classes: list[SchoolClass],
                          subjects: list[Subject]) -> list[TimetableEntry]:
        """Belegt ca. 70 % der Slots; Rest bleibt als leerer Eintrag stehen."""
        entries = []
        next_id = 1
        for week in (1, 2):
            for day in DAY_NAMES[:5]:
                for slot_id in range(1, len(_PERIODS) + 1):
                    assigned = self.rng.random() < 0.7
                    cls = self.rng.choice(classes) if assigned else None
                    subj = self.rng.choice(subjects) if assigned else None
                    entries.append(TimetableEntry(
                        id=next_id,
                        day_of_week=day,
                        week_number=week,
                        timetable_slot_id=slot_id,
                        class_id=cls.id if cls else None,
                        subject_id=subj.id if subj else None,
                        room=f"R{self.rng.randint(1, 3)}{self.rng.randint(10, 25)}" if assigned else None,
                    ))
                    next_id += 1
        return entries

    def _generate_activities(self) -> list[TimetableActivity]:
        return [
            TimetableActivity(id=1, day_of_week="Wednesday", week_number=1,
                              timetable_slot_id=6, title="Department Meeting",
                              activity_type="meeting", color="#8B5CF6",
                              location="Staff Room"),
            TimetableActivity(id=2, day_of_week="Tuesday", week_number=2,
                              timetable_slot_id=3, title="Corridor Duty",
                              activity_type="duty", color="#F97316"),
            TimetableActivity(id=3, day_of_week="Friday", week_number=1,
                              timetable_slot_id=1, title=None,
                              activity_type="ppa"),
        ]

    # ─── Konkrete Daten ───────────────────────────────────────────────────────

    def _generate_holidays(self) -> list[Holiday]:
        s = self.start_date
        return [
            Holiday(id=1, name="October Half Term", holiday_type="half_term",
                    start_date=(s + timedelta(weeks=8)).isoformat(),
                    end_date=(s + timedelta(weeks=8, days=4)).isoformat()),
            Holiday(id=2, name="Christmas Holidays", holiday_type="holiday",
                    start_date=(s + timedelta(weeks=16)).isoformat(),
                    end_date=(s + timedelta(weeks=17, days=4)).isoformat()),
            Holiday(id=3, name="INSET Day", holiday_type="inset_day",
                    start_date=(s + timedelta(weeks=18)).isoformat(),
                    end_date=(s + timedelta(weeks=18)).isoformat()),
        ]

    def _generate_events(self) -> list[CalendarEvent]:
        s = self.start_date

        def d(weeks: int, days: int) -> str:
            return (s + timedelta(weeks=weeks, days=days)).isoformat()

        return [
            CalendarEvent(id=1, title="Parents' Evening",
                          start_time=f"{d(0, 3)}T15:30:00", end_time=f"{d(0, 3)}T18:00:00",
                          color="#0EA5E9", location="Main Hall"),
            CalendarEvent(id=2, title="Year 9 Field Trip",
                          start_time=f"{d(1, 1)}T08:00:00", end_time=f"{d(1, 3)}T17:00:00",
                          color="#14B8A6", location="Peak District"),
            CalendarEvent(id=3, title="Sports Day", all_day=True,
                          start_time=f"{d(1, 4)}", end_time=f"{d(1, 4)}"),
        ]

    def _generate_lessons(self, entries: list[TimetableEntry],
                          academic_year: AcademicYear,
                          holidays: list[Holiday],
                          subjects: list[Subject]) -> list[Lesson]:
        """Plant ca. die Hälfte der Vorkommen der ersten zwei Wochen.

        Aufeinanderfolgende Slots mit gleicher Klasse und gleichem Fach
        bekommen denselben Titel (Doppelstunde).
        """
        resolver = WeekCycleResolver(academic_year, holidays)
        subject_names = {s.id: s.name for s in subjects}
        lessons: list[Lesson] = []
        next_id = 1
        for day in daterange(self.start_date, self.start_date + timedelta(days=11)):
            week = resolver.resolve(day)
            if week is None or day.weekday() >= 5:
                continue
            todays = sorted(
                (e for e in entries
                 if e.day_of_week == DAY_NAMES[day.weekday()]
                 and e.week_number == week and e.is_assigned),
                key=lambda e: e.timetable_slot_id,
            )
            previous = None
            for entry in todays:
                double = (previous is not None
                          and previous[0].class_id == entry.class_id
                          and previous[0].subject_id == entry.subject_id
                          and previous[0].timetable_slot_id + 1 == entry.timetable_slot_id)
                if double:
                    title = previous[1]
                elif self.rng.random() < 0.5:
                    topics = _TOPICS.get(subject_names.get(entry.subject_id), ["Revision"])
                    title = self.rng.choice(topics)
                else:
                    previous = None
                    continue
                lessons.append(Lesson(
                    id=next_id,
                    date=day.isoformat(),
                    timetable_slot_id=entry.timetable_slot_id,
                    class_id=entry.class_id,
                    subject_id=entry.subject_id,
                    title=title,
                    lesson_plan=f"Starter, main task and plenary on {title.lower()}.",
                    plan_completed=day < self.start_date + timedelta(days=4),
                ))
                next_id += 1
                previous = (entry, title)
        return lessons

    # ─── Vollständiger Datensatz ──────────────────────────────────────────────

    def generate(self) -> CalendarSnapshot:
        """Erzeugt den vollständigen Snapshot."""
        classes = [SchoolClass(id=i, name=n, color=c)
                   for i, (n, c) in enumerate(_CLASSES, start=1)]
        subjects = [Subject(id=i, name=n, color=c)
                    for i, (n, c) in enumerate(_SUBJECTS, start=1)]
        academic_year = self._generate_academic_year()
        holidays = self._generate_holidays()
        entries = self._generate_entries(classes, subjects)
        return CalendarSnapshot(
            academic_year=academic_year,
            timetable_slots=self._generate_slots(),
            timetable_entries=entries,
            timetable_activities=self._generate_activities(),
            lessons=self._generate_lessons(entries, academic_year, holidays, subjects),
            classes=classes,
            subjects=subjects,
            events=self._generate_events(),
            holidays=holidays,
        )

    # ─── Ausgabe ──────────────────────────────────────────────────────────────

    def print_summary(self, data: CalendarSnapshot) -> None:
        """Gibt eine Rich-Tabelle mit Übersicht der erzeugten Daten aus."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        console = Console()
        table = Table(title="Erzeugte Demo-Daten", box=box.ROUNDED)
        table.add_column("Kategorie", style="bold cyan")
        table.add_column("Anzahl", justify="right")
        table.add_column("Details")

        assigned = sum(1 for e in data.timetable_entries if e.is_assigned)
        table.add_row("Klassen", str(len(data.classes)), "")
        table.add_row("Fächer", str(len(data.subjects)), "")
        table.add_row("Zeitslots", str(len(data.timetable_slots)), "")
        table.add_row("Einträge", str(len(data.timetable_entries)),
                      f"{assigned} belegt, {len(data.timetable_entries) - assigned} leer")
        table.add_row("Aktivitäten", str(len(data.timetable_activities)), "")
        table.add_row("Stunden", str(len(data.lessons)), "")
        table.add_row("Termine", str(len(data.events)), "")
        table.add_row("Ferien", str(len(data.holidays)), "")

        console.print(table)
