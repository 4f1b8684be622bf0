"""Rasterkoordinaten für Tages-, Wochen- und Monatsansicht.

Ein Tag hat 288 Zeilen à 5 Minuten. Vor 00:00 liegen ``header_offset``
Kopfzeilen. Spalten: Montag = 1 … Sonntag = 7.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

ROWS_PER_HOUR = 12
ROWS_PER_DAY = 24 * ROWS_PER_HOUR
DEFAULT_HEADER_OFFSET = 2


@dataclass(frozen=True)
class GridPosition:
    start_row: int
    end_row: int
    duration: int       # mindestens 1
    day_column: int     # 1 = Montag … 7 = Sonntag


def time_to_row(hour: int, minute: int, header_offset: int = DEFAULT_HEADER_OFFSET) -> int:
    """Rasterzeile einer Uhrzeit; Minuten werden auf 5 abgerundet."""
    return hour * ROWS_PER_HOUR + minute // 5 + header_offset


def day_column(day: date) -> int:
    """Spalte eines Datums in der Wochenansicht (Montag = 1, Sonntag = 7)."""
    return day.isoweekday()


def js_weekday_to_column(weekday: int) -> int:
    """Wochentag mit Sonntag = 0 (0..6) → Spalte 1..7."""
    return 7 if weekday == 0 else weekday


def grid_position(unit, header_offset: int = DEFAULT_HEADER_OFFSET) -> GridPosition:
    """Rasterposition einer Einheit mit Uhrzeit.

    Endet die Einheit an einem späteren Tag, reicht sie bis zum Tagesende.
    Null- oder negative Dauer ergibt eine Zeile.
    """
    start, end = unit.start, unit.end
    start_row = time_to_row(start.hour, start.minute, header_offset)
    if end.date() > start.date():
        end_row = ROWS_PER_DAY + header_offset
    else:
        end_row = time_to_row(end.hour, end.minute, header_offset)
    duration = max(1, end_row - start_row)
    return GridPosition(
        start_row=start_row,
        end_row=start_row + duration,
        duration=duration,
        day_column=day_column(start.date()),
    )


def span_columns(start: date, end: date, week_start: date) -> Optional[tuple[int, int]]:
    """(Startspalte, Spaltenzahl) eines mehrtägigen Balkens in der Woche.

    Der Zeitraum wird auf Montag..Sonntag ab ``week_start`` beschnitten;
    None, wenn er die Woche nicht berührt.
    """
    week_end = week_start + timedelta(days=6)
    if end < start or end < week_start or start > week_end:
        return None
    first = max(start, week_start)
    last = min(end, week_end)
    return (first - week_start).days + 1, (last - first).days + 1


# ─── Monatsansicht ───

@dataclass
class MonthCell:
    day: date
    visible: list
    overflow: int       # Anzahl ausgeblendeter Einträge ("+N more")
    in_month: bool = True
    week_number: Optional[int] = None   # nur an Montagen gesetzt

    @property
    def total(self) -> int:
        return len(self.visible) + self.overflow


def month_cell(day: date, units: list, limit: int = 3) -> MonthCell:
    """Tageszelle: Ganztägiges zuerst (alphabetisch), dann nach Beginn."""
    all_day = sorted((u for u in units if u.all_day), key=lambda u: (u.title, u.id))
    timed = sorted((u for u in units if not u.all_day), key=lambda u: (u.start, u.title, u.id))
    ordered = all_day + timed
    return MonthCell(day=day, visible=ordered[:limit], overflow=max(0, len(ordered) - limit))
