"""Tests für die Kommandozeile (click)."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from main import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def snapshot_path(runner: CliRunner, tmp_path: Path) -> Path:
    path = tmp_path / "snapshot.json"
    result = runner.invoke(cli, [
        "--config", str(tmp_path / "calendar_config.yaml"),
        "generate", "--seed", "1", "--start", "2025-09-01", "--output", str(path),
    ], obj={})
    assert result.exit_code == 0, result.output
    return path


def _invoke(runner: CliRunner, tmp_path: Path, *args: str):
    return runner.invoke(
        cli, ["--config", str(tmp_path / "calendar_config.yaml"), *args], obj={})


class TestGenerateAndCheck:
    def test_generate_writes_snapshot(self, snapshot_path: Path):
        assert snapshot_path.exists()

    def test_check_clean_snapshot(self, runner, tmp_path, snapshot_path):
        result = _invoke(runner, tmp_path, "check", str(snapshot_path))
        assert result.exit_code == 0
        assert "KONSISTENT" in result.output

    def test_check_missing_file(self, runner, tmp_path):
        result = _invoke(runner, tmp_path, "check", str(tmp_path / "missing.json"))
        assert result.exit_code == 1
        assert "nicht gefunden" in result.output


class TestWeekNumber:
    def test_alternating(self, runner, tmp_path, snapshot_path):
        result = _invoke(runner, tmp_path, "week-number", str(snapshot_path), "--date", "2025-09-08")
        assert result.exit_code == 0
        assert "Woche 2" in result.output

    def test_holiday_week(self, runner, tmp_path, snapshot_path):
        result = _invoke(runner, tmp_path, "week-number", str(snapshot_path), "-d", "2025-10-28")
        assert "Ferienwoche" in result.output

    def test_invalid_date(self, runner, tmp_path, snapshot_path):
        result = _invoke(runner, tmp_path, "week-number", str(snapshot_path), "--date", "28.10.2025")
        assert result.exit_code == 2


class TestShow:
    @pytest.mark.parametrize("view", ["day", "week", "month"])
    def test_views_render(self, runner, tmp_path, snapshot_path, view):
        result = _invoke(runner, tmp_path, "show", view, str(snapshot_path), "--date", "2025-09-04")
        assert result.exit_code == 0, result.output

    def test_day_view_lists_event(self, runner, tmp_path, snapshot_path):
        result = _invoke(runner, tmp_path, "show", "day", str(snapshot_path), "--date", "2025-09-04")
        assert "Parents' Evening" in result.output


class TestExportAndConfig:
    def test_export_xlsx(self, runner, tmp_path, snapshot_path):
        out = tmp_path / "woche.xlsx"
        result = _invoke(runner, tmp_path, "export", str(snapshot_path),
                         "--date", "2025-09-08", "--output", str(out))
        assert result.exit_code == 0, result.output
        assert out.exists()

    def test_config_init_and_show(self, runner, tmp_path):
        result = _invoke(runner, tmp_path, "config", "init")
        assert result.exit_code == 0
        assert (tmp_path / "calendar_config.yaml").exists()

        again = _invoke(runner, tmp_path, "config", "init")
        assert again.exit_code == 1
        forced = _invoke(runner, tmp_path, "config", "init", "--force")
        assert forced.exit_code == 0

        shown = _invoke(runner, tmp_path, "config", "show")
        assert shown.exit_code == 0
        assert "classic" in shown.output

    def test_broken_config_aborts(self, runner, tmp_path, snapshot_path):
        (tmp_path / "calendar_config.yaml").write_text("card_style: glitter\n", encoding="utf-8")
        result = _invoke(runner, tmp_path, "show", "day", str(snapshot_path))
        assert result.exit_code == 1


class TestBracketedTitles:
    @pytest.fixture
    def bracket_path(self, tmp_path: Path) -> Path:
        from datetime import date

        from models.academic_year import AcademicYear
        from models.event import CalendarEvent
        from models.lesson import Lesson
        from models.snapshot import CalendarSnapshot
        from models.timetable import TimetableSlot

        path = tmp_path / "brackets.json"
        CalendarSnapshot(
            academic_year=AcademicYear(start_date=date(2025, 1, 6)),
            timetable_slots=[TimetableSlot(id=1, start_time="09:00", end_time="10:00")],
            lessons=[Lesson(id=1, date="2025-02-03", timetable_slot_id=1,
                            title="Revision [/] recap")],
            events=[CalendarEvent(id=1, title="[bold]", start_time="2025-02-03T14:00:00",
                                  end_time="2025-02-03T15:00:00")],
        ).save_json(path)
        return path

    @pytest.mark.parametrize("view", ["day", "week", "month"])
    def test_views_render(self, runner, tmp_path, bracket_path, view):
        result = _invoke(runner, tmp_path, "show", view, str(bracket_path), "--date", "2025-02-03")
        assert result.exit_code == 0, result.output

    def test_day_view_shows_title_literally(self, runner, tmp_path, bracket_path):
        result = _invoke(runner, tmp_path, "show", "day", str(bracket_path), "--date", "2025-02-03")
        assert "[/]" in result.output
        assert "[bold]" in result.output
