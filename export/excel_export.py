"""Excel-Export der Wochenansicht (openpyxl)."""

from datetime import date
from pathlib import Path
from typing import Optional

from config.defaults import DAY_SHORT
from config.schema import CalendarConfig
from engine.layout import CalendarLayout, PositionedBlock, WeekView
from styling.contrast import choose_text_color, contrast_ratio

from export.helpers import (
    COLORS, KIND_LABELS, format_date, format_time_range, format_unit,
    format_units, plain_hex, today_str,
)


class ExcelExporter:
    """Exportiert eine Kalenderwoche in eine Excel-Datei mit 2 Sheets."""

    # Spaltenbreiten (Excel-Einheiten)
    COL_ZEIT_W = 9
    COL_DAY_W  = 24

    # Zeilenhöhen (Punkte)
    ROW_HEADER_H  = 22
    ROW_HOUR_H    = 60
    ROW_ALL_DAY_H = 30

    def __init__(self, layout: CalendarLayout, config: Optional[CalendarConfig] = None):
        self.layout = layout
        self.config = config or layout.config

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, day: date, output_path: Path) -> Path:
        """Erstellt die Excel-Datei für die Woche, die ``day`` enthält."""
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        view = self.layout.week_view(day)
        self._sheet_woche(wb, view)
        self._sheet_agenda(wb, view)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        return output_path

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _center_align(self, wrap: bool = True):
        from openpyxl.styles import Alignment
        return Alignment(wrap_text=wrap, horizontal="center", vertical="center")

    def _thin_border(self, style: str = "thin", color: str = "BBBBBB"):
        from openpyxl.styles import Border, Side
        s = Side(border_style=style, color=color)
        return Border(left=s, right=s, top=s, bottom=s)

    def _header_cell(self, ws, row: int, col: int, text: str) -> None:
        from openpyxl.styles import Font
        cell = ws.cell(row=row, column=col, value=text)
        cell.fill = self._fill(COLORS["header"])
        cell.font = Font(bold=True, color="FFFFFF", size=10)
        cell.alignment = self._center_align(wrap=False)
        cell.border = self._thin_border()

    def _style_block_cell(self, cell, block: PositionedBlock) -> None:
        """Zellfarbe aus dem Block; Schrift nach Kontrast der Excel-Füllung."""
        from openpyxl.styles import Font
        # Excel kennt keinen Alpha-Kanal: Rahmenfarbe auf 6 Stellen kürzen
        border_hex = plain_hex(block.border_color[:7], fallback="BBBBBB")
        background = plain_hex(block.background, fallback=COLORS["free"])
        text = choose_text_color(
            f"#{background}", self.config.colors.text_light,
            self.config.colors.text_dark, self.config.colors.wcag_aa).text_color
        cell.fill = self._fill(background)
        cell.font = Font(size=8, color=plain_hex(text, fallback="000000"),
                         italic=block.border_style == "dashed")
        cell.border = self._thin_border(
            "dashed" if block.border_style == "dashed" else "thin", border_hex)

    # ─── Sheet: Woche ─────────────────────────────────────────────────────────

    def _sheet_woche(self, wb, view: WeekView) -> None:
        from openpyxl.styles import Font
        from openpyxl.utils import get_column_letter

        ws = wb.create_sheet(title="Woche")
        week = f" (Woche {view.week_number})" if view.week_number else ""
        ws.cell(row=1, column=1,
                value=f"Woche ab {format_date(view.week_start)}{week}").font = Font(bold=True, size=14)
        ws.cell(row=2, column=1, value=f"Erstellt: {today_str()}")

        header_row = 4
        self._header_cell(ws, header_row, 1, "Zeit")
        for i, d in enumerate(view.days):
            self._header_cell(ws, header_row, i + 2, f"{DAY_SHORT[i]} {d:%d.%m.}")
        ws.row_dimensions[header_row].height = self.ROW_HEADER_H

        # Ganztägige Balken: verbundene Zellen über die abgedeckten Tage
        border = self._thin_border()
        row = header_row + 1
        lanes = max((b.lane for b in view.all_day_bars), default=-1) + 1
        for lane in range(lanes):
            ws.cell(row=row, column=1, value="ganztägig" if lane == 0 else "").border = border
            for bar in (b for b in view.all_day_bars if b.lane == lane):
                first_col = bar.start_column + 1
                last_col = first_col + bar.span - 1
                cell = ws.cell(row=row, column=first_col, value=bar.title)
                cell.fill = self._fill(plain_hex(bar.background, fallback=COLORS["all_day"]))
                cell.font = Font(size=8, bold=True, color=plain_hex(bar.text_color, "000000"))
                cell.alignment = self._center_align()
                if last_col > first_col:
                    ws.merge_cells(start_row=row, start_column=first_col,
                                   end_row=row, end_column=last_col)
            ws.row_dimensions[row].height = self.ROW_ALL_DAY_H
            row += 1

        # Stundenzeilen
        first_hour = self.config.grid.day_start_hour
        last_hour = self.config.grid.day_end_hour - 1
        buckets: dict[tuple[int, int], list[PositionedBlock]] = {}
        for block in view.blocks:
            hour = min(max(block.unit.start.hour, first_hour), last_hour)
            buckets.setdefault((hour, block.day_column), []).append(block)

        for hour in range(first_hour, last_hour + 1):
            c = ws.cell(row=row, column=1, value=f"{hour:02d}:00")
            c.alignment = self._center_align(wrap=False)
            c.border = border
            c.font = Font(bold=True, size=9)
            for col in range(1, 8):
                here = sorted(buckets.get((hour, col), []),
                              key=lambda b: (b.column, b.unit.start))
                cell = ws.cell(row=row, column=col + 1,
                               value=format_units([b.unit for b in here]))
                cell.alignment = self._center_align()
                if here:
                    self._style_block_cell(cell, here[0])
                else:
                    weekend = col >= 6
                    cell.fill = self._fill(COLORS["weekend"] if weekend else COLORS["free"])
                    cell.border = border
            ws.row_dimensions[row].height = self.ROW_HOUR_H
            row += 1

        ws.column_dimensions["A"].width = self.COL_ZEIT_W
        for col in range(2, 9):
            ws.column_dimensions[get_column_letter(col)].width = self.COL_DAY_W
        ws.freeze_panes = ws.cell(row=header_row + 1, column=2)

    # ─── Sheet: Agenda ────────────────────────────────────────────────────────

    def _sheet_agenda(self, wb, view: WeekView) -> None:
        """Flache Liste aller Blöcke inkl. Rasterposition und Kontrast."""
        from openpyxl.styles import Font

        ws = wb.create_sheet(title="Agenda")
        headers = ["Datum", "Zeit", "Art", "Titel", "Ort", "Zeile", "Dauer",
                   "Spalte", "Hintergrund", "Schrift", "Kontrast"]
        for col, h in enumerate(headers, 1):
            self._header_cell(ws, 1, col, h)

        border = self._thin_border()
        row = 2
        for block in sorted(view.blocks, key=lambda b: (b.unit.start, b.column)):
            unit = block.unit
            ratio = contrast_ratio(block.background, block.text_color)
            values = [
                format_date(unit.day),
                format_time_range(unit),
                KIND_LABELS[unit.kind],
                format_unit(unit, with_time=False).split("\n")[0],
                getattr(unit, "location", None) or "",
                block.start_row,
                block.duration,
                f"{block.column + 1}/{block.total_columns}",
                block.background,
                block.text_color,
                round(ratio, 2),
            ]
            for col, value in enumerate(values, 1):
                ws.cell(row=row, column=col, value=value).border = border
            ws.cell(row=row, column=9).fill = self._fill(plain_hex(block.background))
            if ratio < self.config.colors.wcag_aa:
                ws.cell(row=row, column=11).font = Font(color="CC0000", bold=True)
            row += 1

        for col, width in zip("ABCDEFGHIJK", (12, 13, 10, 32, 16, 7, 7, 8, 12, 10, 9)):
            ws.column_dimensions[col].width = width
