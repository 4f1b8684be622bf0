"""Tests für Excel-Export und Terminal-Renderer."""

from datetime import date, datetime
from pathlib import Path

from openpyxl import load_workbook

from config.schema import CalendarConfig, ColorConfig
from data.demo_data import DemoDataGenerator
from engine.layout import CalendarLayout
from export.excel_export import ExcelExporter
from export.helpers import (
    KIND_LABELS,
    format_time_range,
    format_unit,
    plain_hex,
    rich_label,
    unit_badge,
)
from export.tui_renderer import (
    render_day_rows,
    render_month_rows,
    render_week_all_day,
    render_week_rows,
)
from models.academic_year import AcademicYear
from models.display import KINDS, ActivityUnit, EventUnit, HolidayUnit, LessonUnit
from models.event import CalendarEvent
from models.lesson import Lesson
from models.snapshot import CalendarSnapshot
from models.timetable import TimetableSlot


def _make_layout() -> CalendarLayout:
    snap = DemoDataGenerator(seed=3, start_date=date(2025, 9, 1)).generate()
    return CalendarLayout(snap, CalendarConfig())


def _bracket_snapshot() -> CalendarSnapshot:
    """Titel mit eckigen Klammern, die Rich sonst als Markup lesen würde."""
    return CalendarSnapshot(
        academic_year=AcademicYear(start_date=date(2025, 1, 6)),
        timetable_slots=[TimetableSlot(id=1, start_time="09:00", end_time="10:00")],
        lessons=[Lesson(id=1, date="2025-02-03", timetable_slot_id=1,
                        title="Revision [/] recap")],
        events=[
            CalendarEvent(id=1, title="Drama [bold]club", start_time="2025-02-03T14:00:00",
                          end_time="2025-02-03T15:00:00", location="Hall [A]"),
            CalendarEvent(id=2, title="Trip [/x]", start_time="2025-02-04T00:00:00",
                          end_time="2025-02-05T23:59:00", all_day=True),
        ],
    )


# ─── HELFER ───────────────────────────────────────────────────────────────────

class TestHelpers:
    def test_plain_hex(self):
        assert plain_hex("#aabbcc") == "AABBCC"
        assert plain_hex("nope") == "FFFFFF"
        assert plain_hex("", fallback="000000") == "000000"

    def test_rich_label(self):
        assert rich_label("Termin", "#1E3A8A") == "[white on #1E3A8A] Termin [/]"
        assert rich_label("Termin", "#FCD34D").startswith("[black on #FCD34D]")
        assert rich_label("[x]", "nope") == "\\[x]"

    def test_rich_label_dark_threshold(self):
        # Helligkeit von #FCD34D liegt bei etwa 0.82
        assert rich_label("Termin", "#FCD34D", 0.9).startswith("[white on #FCD34D]")
        assert rich_label("Termin", "#1E3A8A", 0.0).startswith("[black on #1E3A8A]")

    def test_unit_formatting(self):
        event = EventUnit(
            id="event-2-2025-09-09", source_id="event-2", title="Field Trip",
            start=datetime(2025, 9, 9, 8, 0), end=datetime(2025, 9, 9, 23, 59, 59),
            color="#14B8A6", is_multi_day=True, start_date_str="2025-09-09",
            end_date_str="2025-09-11", location="Peak District",
        )
        assert format_time_range(event) == "08:00–23:59"
        assert unit_badge(event) == "2025-09-09 – 2025-09-11"
        assert format_unit(event).split("\n") == [
            "Field Trip (2025-09-09 – 2025-09-11)", "08:00–23:59", "Peak District"]

    def test_kind_labels_cover_every_kind(self):
        assert list(KIND_LABELS) == list(KINDS)
        assert KIND_LABELS["holiday"] == "Ferien"
        for unit_cls in (LessonUnit, EventUnit, HolidayUnit, ActivityUnit):
            assert unit_cls.model_fields["kind"].default in KINDS

    def test_placeholder_badge(self):
        unit = LessonUnit(
            id="unfinished-lesson-2025-09-01-1", source_id="entry-1", title="7B - Maths",
            start=datetime(2025, 9, 1, 9, 0), end=datetime(2025, 9, 1, 10, 0),
            color="#EF4444", is_unfinished=True,
        )
        assert unit_badge(unit) == "offen"


# ─── TERMINAL ─────────────────────────────────────────────────────────────────

class TestTuiRenderer:
    def test_day_rows(self):
        view = _make_layout().day_view(date(2025, 9, 4))
        rows = render_day_rows(view)
        assert len(rows) == len(view.all_day) + len(view.blocks)
        assert all(len(r) == 5 for r in rows)
        assert any(r[2] == "Parents' Evening" for r in rows)

    def test_day_rows_follow_dark_threshold(self):
        config = CalendarConfig(colors=ColorConfig(dark_threshold=0.0))
        view = _make_layout().day_view(date(2025, 9, 4))
        rows = render_day_rows(view, config)
        labels = [r[1] for r in rows[len(view.all_day):]]
        assert labels
        assert all(label.startswith("[black on") for label in labels)

    def test_bracketed_titles_are_escaped(self):
        snap = _bracket_snapshot()
        layout = CalendarLayout(snap, CalendarConfig())
        day = date(2025, 2, 3)

        rows = render_day_rows(layout.day_view(day))
        titles = {r[2] for r in rows}
        assert "Revision \\[/] recap" in titles
        assert "Drama \\[bold]club" in titles

        week = layout.week_view(day)
        cells = "".join("".join(r) for r in render_week_rows(week, layout.config))
        assert "Revision \\[/] recap" in cells
        assert "Trip \\[/x]" in render_week_all_day(week)[1]

        month = "".join("".join(r) for r in render_month_rows(layout.month_view(2025, 2)))
        assert "Drama \\[bold]club" in month

    def test_week_rows_cover_visible_hours(self):
        layout = _make_layout()
        view = layout.week_view(date(2025, 9, 8))
        rows = render_week_rows(view, layout.config)
        assert len(rows) == layout.config.grid.day_end_hour - layout.config.grid.day_start_hour
        assert all(len(r) == 8 for r in rows)
        all_day = render_week_all_day(view)
        assert len(all_day) == 7
        assert "Sports Day" in all_day[4]

    def test_month_rows(self):
        view = _make_layout().month_view(2025, 9)
        rows = render_month_rows(view)
        assert len(rows) == len(view.weeks)
        assert rows[0][0] == "W1"


# ─── EXCEL ────────────────────────────────────────────────────────────────────

class TestExcelExport:
    def test_workbook_sheets(self, tmp_path: Path):
        layout = _make_layout()
        out = ExcelExporter(layout).export(date(2025, 9, 10), tmp_path / "woche.xlsx")
        assert out.exists()

        wb = load_workbook(out)
        assert wb.sheetnames == ["Woche", "Agenda"]
        view = layout.week_view(date(2025, 9, 10))
        assert wb["Agenda"].max_row == len(view.blocks) + 1
        assert "Woche ab 08.09.2025" in wb["Woche"]["A1"].value

    def test_multi_day_bar_is_merged(self, tmp_path: Path):
        # Herbstferien Mo–Fr ab 27.10.2025
        out = ExcelExporter(_make_layout()).export(date(2025, 10, 27), tmp_path / "woche.xlsx")
        ws = load_workbook(out)["Woche"]
        assert ws.merged_cells.ranges
