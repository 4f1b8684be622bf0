"""Gemeinsame Hilfsfunktionen für Terminal-Anzeige und Excel-Export."""

from datetime import date

from rich.markup import escape

from config.defaults import holiday_type_label
from models.display import KINDS
from styling.colors import hex_to_rgb, is_color_dark, is_valid_hex

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "header":   "4472C4",
    "free":     "F5F5F5",
    "all_day":  "EEF2FF",
    "weekend":  "E5E7EB",
    "outside":  "FAFAFA",
}

# Reihenfolge wie KINDS
KIND_LABELS: dict[str, str] = dict(zip(KINDS, ("Stunde", "Termin", "Ferien", "Aktivität")))


def plain_hex(color: str, fallback: str = "FFFFFF") -> str:
    """'#aabbcc' → 'AABBCC' für openpyxl; ungültige Farben → fallback."""
    rgb = hex_to_rgb(color) if color else None
    if rgb is None:
        return fallback
    return "{:02X}{:02X}{:02X}".format(*rgb)


def rich_label(text: str, background: str, dark_threshold: float = 0.8) -> str:
    """Rich-Markup: Text auf Farbfläche, Schrift weiß oder schwarz."""
    if not is_valid_hex(background):
        return escape(text)
    fg = "white" if is_color_dark(background, dark_threshold) else "black"
    bg = background if background.startswith("#") else f"#{background}"
    return f"[{fg} on {bg}] {escape(text)} [/]"


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


def format_date(day: date) -> str:
    return day.strftime("%d.%m.%Y")


# ─── Zelleninhalt-Formatierung ────────────────────────────────────────────────

def format_time_range(unit) -> str:
    """'09:00–10:00' bzw. 'ganztägig'."""
    if unit.all_day:
        return "ganztägig"
    return f"{unit.start:%H:%M}–{unit.end:%H:%M}"


def unit_badge(unit) -> str:
    """Kurzer Status-Zusatz: offen, abgeschlossen, mehrtägig, Ferientyp."""
    if unit.kind == "lesson":
        if unit.is_unfinished:
            return "offen"
        if unit.plan_completed:
            return "✓"
        if len(unit.lesson_ids) > 1:
            return f"{len(unit.lesson_ids)} Std."
    elif unit.kind == "holiday":
        return holiday_type_label(unit.holiday_type)
    elif unit.kind == "event" and unit.is_multi_day:
        return f"{unit.start_date_str} – {unit.end_date_str}"
    elif unit.kind == "activity" and unit.activity_type:
        return unit.activity_type
    return ""


def format_unit(unit, with_time: bool = True) -> str:
    """Formatiert eine Einheit als Zelleninhalt.

    Zeile 1: Titel (+ Status), Zeile 2: Uhrzeit, Zeile 3: Ort
    """
    badge = unit_badge(unit)
    lines = [f"{unit.title} ({badge})" if badge else unit.title]
    if with_time:
        lines.append(format_time_range(unit))
    location = getattr(unit, "location", None)
    if location:
        lines.append(location)
    return "\n".join(lines)


def format_units(units: list, with_time: bool = True) -> str:
    """Mehrere Einheiten für eine Zelle (getrennt durch ──)."""
    if not units:
        return ""
    return "\n──\n".join(format_unit(u, with_time) for u in units)
