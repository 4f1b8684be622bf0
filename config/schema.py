from pydantic import BaseModel, Field, field_validator, model_validator
from enum import Enum


class ColorPreference(str, Enum):
    """Steuert Titel-Reihenfolge und Farbe synthetisierter Platzhalter."""
    SUBJECT = "subject"
    CLASS = "class"


def _check_hhmm(value: str) -> str:
    parts = value.split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Uhrzeit '{value}' ist nicht im Format HH:MM")
    hour, minute = int(parts[0]), int(parts[1])
    if not (0 <= hour < 24 and 0 <= minute < 60):
        raise ValueError(f"Uhrzeit '{value}' liegt außerhalb von 00:00–23:59")
    return f"{hour:02d}:{minute:02d}"


def _check_hex(value: str) -> str:
    v = value.strip()
    if not v.startswith("#"):
        v = "#" + v
    if len(v) != 7 or any(c not in "0123456789abcdefABCDEF" for c in v[1:]):
        raise ValueError(f"Farbe '{value}' ist kein 6-stelliges Hex (#RRGGBB)")
    return v.upper()


# ─── RASTER ───

class GridConfig(BaseModel):
    """5-Minuten-Raster der Tages- und Wochenansicht.

    288 Zeilen pro Tag (24h × 12). Vor der ersten Zeitzeile liegen
    header_offset Kopfzeilen (Wochenansicht: 2, Tagesansicht: 6).
    """
    # Anzahl Kopfzeilen vor 00:00
    header_offset: int = Field(2, ge=0, le=24,
        description="Kopfzeilen vor der ersten Zeitzeile")
    # Sichtbarer Ausschnitt in der Terminal-Ansicht
    day_start_hour: int = Field(7, ge=0, le=23,
        description="Erste angezeigte Stunde (Terminal)")
    day_end_hour: int = Field(18, ge=1, le=24,
        description="Letzte angezeigte Stunde (Terminal, exklusiv)")

    @model_validator(mode='after')
    def validate_hours(self):
        if self.day_end_hour <= self.day_start_hour:
            raise ValueError(
                f"day_end_hour ({self.day_end_hour}) muss nach "
                f"day_start_hour ({self.day_start_hour}) liegen")
        return self


class MonthViewConfig(BaseModel):
    """Monatsansicht: wie viele Einträge pro Tageszelle sichtbar sind."""
    max_events_per_cell: int = Field(3, ge=1, le=20,
        description="Sichtbare Einträge pro Zelle, Rest als '+N more'")


# ─── FARBEN ───

class ColorConfig(BaseModel):
    """Schriftfarben, Kontrastschwelle und Fallback-Farben pro Eintragsart."""
    text_light: str = "#FFFFFF"
    text_dark: str = "#1F2937"
    # WCAG-AA-Schwelle für normalen Text
    wcag_aa: float = Field(4.5, ge=1.0, le=21.0)
    # Schwelle der einfachen Helligkeits-Heuristik (is_color_dark)
    dark_threshold: float = Field(0.8, ge=0.0, le=1.0)
    lesson_fallback: str = "#6B7280"
    placeholder_fallback: str = "#FCD34D"
    event_fallback: str = "#6B7280"
    holiday_fallback: str = "#10B981"
    activity_fallback: str = "#8B5CF6"
    # Rahmenfarbe, wenn der Kartenstil keinen Rahmen hat
    neutral_border: str = "#374151"

    @field_validator(
        "text_light", "text_dark", "lesson_fallback", "placeholder_fallback",
        "event_fallback", "holiday_fallback", "activity_fallback",
        "neutral_border",
    )
    @classmethod
    def normalize_hex(cls, v: str) -> str:
        return _check_hex(v)


# ─── STUNDEN ───

class LessonDefaults(BaseModel):
    """Ersatz-Uhrzeiten für Stunden, deren Zeitslot nicht (mehr) existiert."""
    start_time: str = "09:00"
    end_time: str = "10:00"

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_time(cls, v: str) -> str:
        return _check_hhmm(v)


# ─── GESAMT-CONFIG ───

class CalendarConfig(BaseModel):
    """Gesamtkonfiguration des Kalenders."""
    # Titel-Reihenfolge der Platzhalter: "Fach - Klasse" oder "Klasse - Fach"
    color_preference: ColorPreference = Field(ColorPreference.CLASS)
    # 5-Minuten-Raster
    grid: GridConfig = Field(default_factory=GridConfig)
    # Monatsansicht
    month: MonthViewConfig = Field(default_factory=MonthViewConfig)
    # Farben und Kontrast
    colors: ColorConfig = Field(default_factory=ColorConfig)
    # Kartenstil (bestimmt Hintergrund- und Rahmen-Deckkraft)
    card_style: str = Field("classic",
        description="ID eines Kartenstils aus config.defaults.CARD_STYLES")
    # Ersatz-Uhrzeiten für Stunden ohne Zeitslot
    lesson_defaults: LessonDefaults = Field(default_factory=LessonDefaults)

    @field_validator("card_style")
    @classmethod
    def known_card_style(cls, v: str) -> str:
        from config.defaults import CARD_STYLES
        if v not in CARD_STYLES:
            raise ValueError(
                f"Unbekannter Kartenstil '{v}'. Verfügbar: {sorted(CARD_STYLES)}")
        return v
