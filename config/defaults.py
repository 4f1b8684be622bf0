from config.schema import (
    CalendarConfig,
    ColorConfig,
    ColorPreference,
    GridConfig,
    LessonDefaults,
    MonthViewConfig,
)


# ─── KARTENSTILE ───
# Stil-ID → Deckkraft von Hintergrund und Rahmen (0..1).
# CSS-Klassen sind Sache der Oberfläche; hier zählt nur die Farbberechnung.

CARD_STYLES: dict[str, dict] = {
    "classic":       {"name": "Classic",       "background_opacity": 0.40, "border_opacity": 0.67},
    "minimal":       {"name": "Minimal",       "background_opacity": 0.30, "border_opacity": 0.50},
    "rounded":       {"name": "Rounded",       "background_opacity": 0.40, "border_opacity": 0.70},
    "bold":          {"name": "Bold",          "background_opacity": 0.50, "border_opacity": 0.90},
    "soft":          {"name": "Soft",          "background_opacity": 0.35, "border_opacity": 0.40},
    "outlined":      {"name": "Outlined",      "background_opacity": 0.20, "border_opacity": 0.80},
    "elevated":      {"name": "Elevated",      "background_opacity": 0.45, "border_opacity": 0.60},
    "flat":          {"name": "Flat",          "background_opacity": 0.50, "border_opacity": 0.00},
    "pill":          {"name": "Pill",          "background_opacity": 0.40, "border_opacity": 0.70},
    "modern":        {"name": "Modern",        "background_opacity": 0.40, "border_opacity": 0.50},
    "vibrant":       {"name": "Vibrant",       "background_opacity": 0.60, "border_opacity": 1.00},
    "subtle":        {"name": "Subtle",        "background_opacity": 0.15, "border_opacity": 0.30},
    "neon":          {"name": "Neon",          "background_opacity": 0.25, "border_opacity": 1.00},
    "muted":         {"name": "Muted",         "background_opacity": 0.25, "border_opacity": 0.35},
    "colorful":      {"name": "Colorful",      "background_opacity": 0.70, "border_opacity": 0.60},
    "outline-heavy": {"name": "Heavy Outline", "background_opacity": 0.20, "border_opacity": 1.00},
    "outline-thin":  {"name": "Thin Outline",  "background_opacity": 0.50, "border_opacity": 0.90},
    "glow":          {"name": "Glow",          "background_opacity": 0.35, "border_opacity": 0.80},
    "washed":        {"name": "Washed",        "background_opacity": 0.10, "border_opacity": 0.20},
    "rich":          {"name": "Rich",          "background_opacity": 0.55, "border_opacity": 0.85},
    "crisp":         {"name": "Crisp",         "background_opacity": 0.45, "border_opacity": 0.95},
    "pastel":        {"name": "Pastel",        "background_opacity": 0.30, "border_opacity": 0.40},
    "bold-outline":  {"name": "Bold Outline",  "background_opacity": 0.30, "border_opacity": 1.00},
    "soft-glow":     {"name": "Soft Glow",     "background_opacity": 0.30, "border_opacity": 0.50},
    "high-contrast": {"name": "High Contrast", "background_opacity": 0.20, "border_opacity": 1.00},
    "low-contrast":  {"name": "Low Contrast",  "background_opacity": 0.40, "border_opacity": 0.40},
    "ethereal":      {"name": "Ethereal",      "background_opacity": 0.20, "border_opacity": 0.30},
    "solid":         {"name": "Solid",         "background_opacity": 0.30, "border_opacity": 0.95},
}


# ─── FERIEN-TYPEN ───
# Typ → (Anzeigename, Standardfarbe)

HOLIDAY_TYPES: dict[str, tuple[str, str]] = {
    "holiday":      ("Holiday",      "#EF4444"),   # rot
    "half_term":    ("Half Term",    "#10B981"),   # smaragd
    "training_day": ("Training Day", "#8B5CF6"),   # violett
    "planning_day": ("Planning Day", "#F97316"),   # orange
    "term_break":   ("Term Break",   "#F59E0B"),   # bernstein
    "inset_day":    ("INSET Day",    "#3B82F6"),   # blau
}


def holiday_type_label(holiday_type: str | None) -> str:
    """Anzeigename eines Ferien-Typs; unbekannte Typen gelten als 'Holiday'."""
    return HOLIDAY_TYPES.get(holiday_type or "holiday", HOLIDAY_TYPES["holiday"])[0]


def holiday_type_color(holiday_type: str | None) -> str:
    """Standardfarbe eines Ferien-Typs."""
    return HOLIDAY_TYPES.get(holiday_type or "holiday", HOLIDAY_TYPES["holiday"])[1]


DAY_NAMES: list[str] = [
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
]
DAY_SHORT: list[str] = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def default_calendar_config() -> CalendarConfig:
    """Komplette Default-Konfiguration.

    Raster:      5-Minuten-Zeilen, 2 Kopfzeilen (Wochenansicht)
    Monat:       3 Einträge pro Zelle, Rest als "+N more"
    Platzhalter: "Klasse - Fach"
    Schrift:     #FFFFFF oder #1F2937 nach WCAG AA (4.5:1)
    """
    return CalendarConfig(
        color_preference=ColorPreference.CLASS,
        grid=GridConfig(header_offset=2, day_start_hour=7, day_end_hour=18),
        month=MonthViewConfig(max_events_per_cell=3),
        colors=ColorConfig(),
        card_style="classic",
        lesson_defaults=LessonDefaults(start_time="09:00", end_time="10:00"),
    )
