"""Setzt Agenda, Raster, Spalten und Farben zu fertigen Ansichten zusammen.

Jede Ansicht enthält alles, was die Oberfläche zum Zeichnen braucht:
Rasterzeilen, Tages- und Überlappungsspalten sowie aufgelöste Farben.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from config.schema import CalendarConfig
from engine.aggregator import DayAgenda, EventAggregator
from engine.dates import month_grid, parse_date, week_dates
from engine.grid import MonthCell, grid_position, month_cell, span_columns
from engine.overlap import assign_columns
from models.snapshot import CalendarSnapshot
from styling.card_styles import block_style

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PositionedBlock:
    """Einheit mit Uhrzeit, fertig positioniert im 5-Minuten-Raster."""
    unit: object
    start_row: int
    end_row: int
    duration: int
    day_column: int
    column: int
    total_columns: int
    background: str
    border_color: str
    text_color: str
    border_style: str = "solid"
    opacity: float = 1.0

    @property
    def id(self) -> str:
        return self.unit.id

    @property
    def width_percent(self) -> float:
        return 100.0 / self.total_columns

    @property
    def left_percent(self) -> float:
        return self.column * self.width_percent


@dataclass(frozen=True)
class SpanBlock:
    """Ganztägiger Balken in der Wochenansicht (ggf. über mehrere Tage)."""
    source_id: str
    title: str
    kind: str
    start_column: int       # 1 = Montag
    span: int               # Anzahl Tagesspalten
    lane: int               # Zeile im Ganztags-Bereich, 0-basiert
    background: str
    text_color: str
    units: tuple = ()


@dataclass
class DayView:
    day: date
    week_number: Optional[int]
    all_day: list
    blocks: list[PositionedBlock]


@dataclass
class WeekView:
    week_start: date
    days: list[date]
    week_number: Optional[int]
    all_day_bars: list[SpanBlock]
    blocks: list[PositionedBlock]

    def blocks_for(self, day: date) -> list[PositionedBlock]:
        return [b for b in self.blocks if b.unit.day == day]


@dataclass
class MonthWeek:
    week_start: date
    week_number: Optional[int]      # Zyklus-Woche des Montags
    cells: list[MonthCell] = field(default_factory=list)


@dataclass
class MonthView:
    year: int
    month: int
    weeks: list[MonthWeek]

    def cell(self, day: date) -> Optional[MonthCell]:
        for week in self.weeks:
            for c in week.cells:
                if c.day == day:
                    return c
        return None


class CalendarLayout:
    """Baut Tages-, Wochen- und Monatsansichten aus einem Snapshot."""

    def __init__(self, snapshot: CalendarSnapshot,
                 config: Optional[CalendarConfig] = None,
                 aggregator: Optional[EventAggregator] = None):
        self.config = config or CalendarConfig()
        self.aggregator = aggregator or EventAggregator(snapshot, self.config)
        self.resolver = self.aggregator.resolver

    # ─── Bausteine ───

    def position_blocks(self, agenda: DayAgenda) -> list[PositionedBlock]:
        """Rasterposition, Überlappungsspalte und Farben aller Einheiten mit Uhrzeit."""
        offset = self.config.grid.header_offset
        positions = {u.id: grid_position(u, offset) for u in agenda.timed}
        columns = assign_columns([
            (u.id, u.kind, positions[u.id].start_row, positions[u.id].end_row)
            for u in agenda.timed
        ])
        blocks = []
        for unit in agenda.timed:
            pos = positions[unit.id]
            col = columns[unit.id]
            style = block_style(unit, self.config)
            blocks.append(PositionedBlock(
                unit=unit,
                start_row=pos.start_row,
                end_row=pos.end_row,
                duration=pos.duration,
                day_column=pos.day_column,
                column=col.column,
                total_columns=col.total_columns,
                background=style.background,
                border_color=style.border_color,
                text_color=style.text_color,
                border_style=style.border_style,
                opacity=style.opacity,
            ))
        return blocks

    def _span_bars(self, agendas: list[DayAgenda], week_start: date) -> list[SpanBlock]:
        """Fasst die Tagesausschnitte ganztägiger Einheiten zu Balken zusammen."""
        grouped: dict[str, list] = {}
        for agenda in agendas:
            for unit in agenda.all_day:
                grouped.setdefault(unit.source_id, []).append(unit)

        bars = []
        for source_id, units in grouped.items():
            first = units[0]
            start = parse_date(getattr(first, "start_date_str", None)) or first.day
            end = parse_date(getattr(first, "end_date_str", None)) or units[-1].day
            cols = span_columns(start, end, week_start)
            if cols is None:
                logger.debug(f"{source_id}: außerhalb der Woche ab {week_start}")
                continue
            style = block_style(first, self.config)
            bars.append((cols, first, units, style))

        # Nach Startspalte, längere zuerst; dann in die erste freie Zeile
        bars.sort(key=lambda b: (b[0][0], -b[0][1], b[1].title, b[1].source_id))
        lanes: list[list[tuple[int, int]]] = []
        result = []
        for (start_col, span), first, units, style in bars:
            interval = (start_col, start_col + span)
            for lane_index, taken in enumerate(lanes):
                if all(interval[0] >= e or interval[1] <= s for s, e in taken):
                    taken.append(interval)
                    break
            else:
                lanes.append([interval])
                lane_index = len(lanes) - 1
            result.append(SpanBlock(
                source_id=first.source_id,
                title=first.title,
                kind=first.kind,
                start_column=start_col,
                span=span,
                lane=lane_index,
                background=style.background,
                text_color=style.text_color,
                units=tuple(units),
            ))
        return result

    # ─── Ansichten ───

    def day_view(self, day: date) -> DayView:
        agenda = self.aggregator.day(day)
        return DayView(
            day=day,
            week_number=self.resolver.resolve(day),
            all_day=list(agenda.all_day),
            blocks=self.position_blocks(agenda),
        )

    def week_view(self, day: date) -> WeekView:
        """Woche (Montag bis Sonntag), die ``day`` enthält."""
        days = week_dates(day)
        agendas = [self.aggregator.day(d) for d in days]
        blocks = []
        for agenda in agendas:
            blocks.extend(self.position_blocks(agenda))
        return WeekView(
            week_start=days[0],
            days=days,
            week_number=self.resolver.resolve(days[0]),
            all_day_bars=self._span_bars(agendas, days[0]),
            blocks=blocks,
        )

    def month_view(self, year: int, month: int) -> MonthView:
        limit = self.config.month.max_events_per_cell
        weeks = []
        for row in month_grid(year, month):
            week = MonthWeek(week_start=row[0], week_number=self.resolver.week_label(row[0]))
            for d in row:
                cell = month_cell(d, self.aggregator.day(d).units, limit)
                cell.in_month = d.month == month
                cell.week_number = self.resolver.week_label(d)
                week.cells.append(cell)
            weeks.append(week)
        return MonthView(year=year, month=month, weeks=weeks)
