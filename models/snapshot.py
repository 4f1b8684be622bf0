"""CalendarSnapshot: Alle Kalender-Eingaben eines Render-Durchlaufs + Referenz-Check."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from config.defaults import DAY_NAMES
from engine.dates import normalize_day_name, parse_date, parse_datetime, parse_hhmm
from models.academic_year import AcademicYear
from models.base import Record
from models.event import CalendarEvent, Holiday
from models.lesson import Lesson, SchoolClass, Subject
from models.timetable import TimetableActivity, TimetableEntry, TimetableSlot


class SnapshotLoadError(Exception):
    """Snapshot-Datei fehlt, ist kein JSON oder passt nicht zum Schema."""


class ReferenceReport(BaseModel):
    """Ergebnis des Referenz-Checks (reine Diagnose, blockiert nie das Rendern)."""

    errors: list[str]      # Datensätze, die beim Rendern übersprungen werden
    warnings: list[str]    # Auffälligkeiten mit Fallback-Verhalten

    @property
    def is_clean(self) -> bool:
        return not self.errors

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.markup import escape
        from rich.panel import Panel

        console = Console()
        if self.is_clean:
            status = "[bold green]✓ KONSISTENT[/bold green]"
        else:
            status = "[bold red]✗ FEHLERHAFTE REFERENZEN[/bold red]"

        lines = [status]
        if self.errors:
            lines.append("\n[red bold]Fehler (werden übersprungen):[/red bold]")
            for e in self.errors:
                lines.append(f"  [red]• {escape(e)}[/red]")
        if self.warnings:
            lines.append("\n[yellow bold]Warnungen:[/yellow bold]")
            for w in self.warnings:
                lines.append(f"  [yellow]• {escape(w)}[/yellow]")
        if not self.errors and not self.warnings:
            lines.append("[dim]Keine Probleme gefunden.[/dim]")

        console.print(Panel("\n".join(lines), title="Referenz-Check", border_style="cyan"))


_VALID_DAYS = {d.lower() for d in DAY_NAMES}


class CalendarSnapshot(Record):
    """Unveränderlicher Satz aller Eingaben: Vorlage, Stunden, Termine, Ferien."""

    academic_year: Optional[AcademicYear] = None
    timetable_slots: list[TimetableSlot] = []
    timetable_entries: list[TimetableEntry] = []
    timetable_activities: list[TimetableActivity] = []
    lessons: list[Lesson] = []
    classes: list[SchoolClass] = []
    subjects: list[Subject] = []
    events: list[CalendarEvent] = []
    holidays: list[Holiday] = []
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    data_version: str = "1.0"

    # ─── Lookups ───

    def slot_map(self) -> dict[int, TimetableSlot]:
        return {s.id: s for s in self.timetable_slots}

    def class_map(self) -> dict[int, SchoolClass]:
        return {c.id: c for c in self.classes}

    def subject_map(self) -> dict[int, Subject]:
        return {s.id: s for s in self.subjects}

    # ─── Übersicht ───

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        ay = self.academic_year
        lines = [
            f"Schuljahr: {ay.name or '-'} ({ay.start_date} – {ay.end_date or 'offen'}, "
            f"{ay.cycle_length}-Wochen-Zyklus"
            f"{', Ferienwochen übersprungen' if ay.skip_holiday_weeks else ''})"
            if ay else "Schuljahr: nicht gesetzt (keine Platzhalter)",
            f"Klassen: {len(self.classes)}",
            f"Fächer: {len(self.subjects)}",
            f"Zeitslots: {len(self.timetable_slots)}",
            f"Stundenplan-Einträge: {len(self.timetable_entries)} "
            f"({sum(1 for e in self.timetable_entries if e.is_assigned)} belegt)",
            f"Aktivitäten: {len(self.timetable_activities)}",
            f"Geplante Stunden: {len(self.lessons)} "
            f"({sum(1 for l in self.lessons if l.plan_completed)} abgeschlossen)",
            f"Termine: {len(self.events)}",
            f"Ferien: {len(self.holidays)}",
        ]
        return "\n".join(lines)

    # ─── Referenz-Check ───

    def check_references(self) -> ReferenceReport:
        """Prüft Verweise und Datumsangaben aller Datensätze.

        Prüfungen:
        1. Zeitslots: Uhrzeiten lesbar, Ende nach Beginn
        2. Einträge/Aktivitäten: Slot, Wochentag, Woche, Klasse/Fach bekannt
        3. Doppelte Belegung desselben (Wochentag, Woche, Slot)
        4. Stunden: Datum lesbar, Slot/Klasse/Fach bekannt
        5. Termine und Ferien: Datumsangaben lesbar, Ende nicht vor Beginn
        """
        errors: list[str] = []
        warnings: list[str] = []

        slots = self.slot_map()
        classes = self.class_map()
        subjects = self.subject_map()
        cycle = self.academic_year.cycle_length if self.academic_year else 2

        if self.academic_year is None:
            warnings.append(
                "Kein Schuljahr gesetzt – es werden keine Platzhalter oder "
                "Aktivitäten erzeugt.")

        # ── 1. Zeitslots ─────────────────────────────────────────────────
        for slot in self.timetable_slots:
            start, end = parse_hhmm(slot.start_time), parse_hhmm(slot.end_time)
            if start is None or end is None:
                errors.append(
                    f"Zeitslot {slot.id}: Uhrzeit '{slot.start_time}'–'{slot.end_time}' "
                    f"ist nicht im Format HH:MM.")
            elif end <= start:
                warnings.append(
                    f"Zeitslot {slot.id}: Ende {slot.end_time} liegt nicht nach "
                    f"Beginn {slot.start_time} – wird als eine Rasterzeile dargestellt.")

        # ── 2./3. Einträge und Aktivitäten ───────────────────────────────
        occupied: dict[tuple, str] = {}
        records = [("Eintrag", e) for e in self.timetable_entries]
        records += [("Aktivität", a) for a in self.timetable_activities]
        for label, rec in records:
            name = f"{label} {rec.id}"
            if rec.timetable_slot_id not in slots:
                errors.append(f"{name}: Zeitslot {rec.timetable_slot_id} existiert nicht.")
            day = normalize_day_name(rec.day_of_week)
            if day not in _VALID_DAYS:
                errors.append(f"{name}: Unbekannter Wochentag '{rec.day_of_week}'.")
            if rec.week_number is None:
                warnings.append(f"{name}: Keine Woche gesetzt – passt auf kein Datum.")
            elif not (1 <= rec.week_number <= cycle):
                warnings.append(
                    f"{name}: Woche {rec.week_number} liegt außerhalb des "
                    f"{cycle}-Wochen-Zyklus.")
            if isinstance(rec, TimetableEntry):
                if rec.class_id is not None and rec.class_id not in classes:
                    warnings.append(f"{name}: Klasse {rec.class_id} existiert nicht.")
                if rec.subject_id is not None and rec.subject_id not in subjects:
                    warnings.append(f"{name}: Fach {rec.subject_id} existiert nicht.")
                if not rec.is_assigned:
                    continue

            key = (label, day, rec.week_number, rec.timetable_slot_id)
            if key in occupied:
                warnings.append(
                    f"{name}: Slot {rec.timetable_slot_id} am {rec.day_of_week} "
                    f"(Woche {rec.week_number}) ist bereits durch {occupied[key]} belegt.")
            else:
                occupied[key] = name

        # ── 4. Stunden ───────────────────────────────────────────────────
        for lesson in self.lessons:
            name = f"Stunde {lesson.id}"
            if parse_date(lesson.date) is None:
                errors.append(f"{name}: Datum '{lesson.date}' ist nicht lesbar.")
            if lesson.timetable_slot_id not in slots:
                warnings.append(
                    f"{name}: Zeitslot {lesson.timetable_slot_id} existiert nicht – "
                    f"Ersatz-Uhrzeit wird verwendet.")
            if lesson.class_id is not None and lesson.class_id not in classes:
                warnings.append(f"{name}: Klasse {lesson.class_id} existiert nicht.")
            if lesson.subject_id is not None and lesson.subject_id not in subjects:
                warnings.append(f"{name}: Fach {lesson.subject_id} existiert nicht.")

        # ── 5. Termine und Ferien ────────────────────────────────────────
        for event in self.events:
            start, end = parse_datetime(event.start_time), parse_datetime(event.end_time)
            if start is None or end is None:
                errors.append(
                    f"Termin {event.id} ('{event.title}'): Zeitangabe nicht lesbar.")
            elif end < start:
                warnings.append(
                    f"Termin {event.id} ('{event.title}'): Ende liegt vor Beginn.")

        for holiday in self.holidays:
            start, end = parse_date(holiday.start_date), parse_date(holiday.end_date)
            if start is None or end is None:
                errors.append(
                    f"Ferien {holiday.id} ('{holiday.name}'): Datum nicht lesbar.")
            elif end < start:
                errors.append(
                    f"Ferien {holiday.id} ('{holiday.name}'): Ende liegt vor Beginn.")

        return ReferenceReport(errors=errors, warnings=warnings)

    # ─── Persistenz ────────────────────────────────────────────────────────

    def save_json(self, path: Path) -> None:
        """Speichert den kompletten Snapshot als JSON-Datei (camelCase)."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        now = datetime.now(timezone.utc)
        updated = self.model_copy(update={
            "modified_at": now,
            "created_at": self.created_at or now,
        })
        with open(path, "w", encoding="utf-8") as f:
            f.write(updated.model_dump_json(indent=2, by_alias=True))

    @classmethod
    def load_json(cls, path: Path) -> "CalendarSnapshot":
        """Lädt einen Snapshot aus einer JSON-Datei.

        Raises:
            SnapshotLoadError: Datei fehlt, ist kein JSON oder verletzt das Schema.
        """
        path = Path(path)
        if not path.exists():
            raise SnapshotLoadError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            raw = f.read()
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise SnapshotLoadError(f"{path}: kein gültiges JSON ({e})") from e
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise SnapshotLoadError(
                f"{path}: Snapshot passt nicht zum Schema:\n{e}") from e
