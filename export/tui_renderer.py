"""Gemeinsamer Renderer für die Terminal-Anzeige (Rich-Tabellen in main.py).

Liefert nur Tabellenzeilen aus Strings; das Zeichnen übernimmt cmd_show.
"""

from typing import TYPE_CHECKING, Optional

from rich.markup import escape

from export.helpers import KIND_LABELS, format_time_range, format_unit, rich_label, unit_badge

if TYPE_CHECKING:
    from config.schema import CalendarConfig
    from engine.layout import DayView, MonthView, WeekView


def _title_cell(unit) -> str:
    badge = unit_badge(unit)
    return escape(f"{unit.title} ({badge})" if badge else unit.title)


def _location_cell(unit) -> str:
    return escape(getattr(unit, "location", None) or "")


def render_day_rows(view: "DayView", config: Optional["CalendarConfig"] = None) -> list[list[str]]:
    """Gibt Tabellenzeilen für die Tagesansicht zurück.

    Jede Zeile: [Zeit, Art, Titel, Ort, Spalte]
    Ganztägiges steht oben, danach die Blöcke nach Beginn.
    Titel und Orte sind für Rich-Markup escaped.
    """
    threshold = config.colors.dark_threshold if config is not None else 0.8
    rows: list[list[str]] = []
    for unit in view.all_day:
        rows.append([
            format_time_range(unit),
            KIND_LABELS[unit.kind],
            _title_cell(unit),
            _location_cell(unit),
            "—",
        ])
    for block in view.blocks:
        unit = block.unit
        rows.append([
            format_time_range(unit),
            rich_label(KIND_LABELS[unit.kind], block.background, threshold),
            _title_cell(unit),
            _location_cell(unit),
            f"{block.column + 1}/{block.total_columns}",
        ])
    return rows


def render_week_all_day(view: "WeekView") -> list[str]:
    """Ganztags-Zeile: pro Tagesspalte die Titel aller Balken, die sie abdecken."""
    cells: list[list[str]] = [[] for _ in range(7)]
    for bar in sorted(view.all_day_bars, key=lambda b: (b.lane, b.start_column)):
        for col in range(bar.start_column, bar.start_column + bar.span):
            cells[col - 1].append(escape(bar.title))
    return ["\n".join(c) if c else "" for c in cells]


def render_week_rows(view: "WeekView", config: "CalendarConfig") -> list[list[str]]:
    """Gibt Stundenzeilen für die Wochenansicht zurück.

    Jede Zeile: [Stunde, Mo, Di, Mi, Do, Fr, Sa, So]
    Blöcke vor dem sichtbaren Bereich landen in der ersten, danach in der
    letzten Zeile.
    """
    first_hour = config.grid.day_start_hour
    last_hour = config.grid.day_end_hour - 1
    buckets: dict[tuple[int, int], list] = {}
    for block in view.blocks:
        hour = min(max(block.unit.start.hour, first_hour), last_hour)
        buckets.setdefault((hour, block.day_column), []).append(block)

    rows: list[list[str]] = []
    for hour in range(first_hour, last_hour + 1):
        cells = [f"{hour:02d}:00"]
        for col in range(1, 8):
            here = sorted(buckets.get((hour, col), []), key=lambda b: (b.column, b.unit.start))
            cells.append("\n──\n".join(escape(format_unit(b.unit)) for b in here) if here else "—")
        rows.append(cells)
    return rows


def render_month_rows(view: "MonthView") -> list[list[str]]:
    """Gibt Wochenzeilen für die Monatsansicht zurück.

    Jede Zeile: [Zyklus-Woche, Mo..So]; Zelle = Tag, sichtbare Titel, '+N more'.
    """
    rows: list[list[str]] = []
    for week in view.weeks:
        cells = [f"W{week.week_number}" if week.week_number else ""]
        for cell in week.cells:
            lines = [f"{cell.day.day:2d}" if cell.in_month else f"[dim]{cell.day.day:2d}[/dim]"]
            for unit in cell.visible:
                title = escape(unit.title)
                lines.append(title if unit.all_day else f"{unit.start:%H:%M} {title}")
            if cell.overflow:
                lines.append(f"+ {cell.overflow} more")
            cells.append("\n".join(lines))
        rows.append(cells)
    return rows
