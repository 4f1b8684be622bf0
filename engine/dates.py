"""Zentrale Datums-Normalisierung.

Alle Datumsvergleiche im Kalender laufen über YYYY-MM-DD-Schlüssel bzw.
``datetime.date``. Uhrzeit-Anteile und Zeitzonen-Suffixe werden abgeschnitten,
nie umgerechnet: "2025-02-03T23:30:00Z" gehört zum 03.02., egal in welcher
Zeitzone der Kalender läuft.
"""

import re
from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional, Union

from config.defaults import DAY_NAMES

_DATE_PREFIX_RE = re.compile(r"^\s*(\d{4})-(\d{2})-(\d{2})")
_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?\s*$")

DateLike = Union[str, date, datetime]

END_OF_DAY = time(23, 59, 59)


def parse_date(value: Optional[DateLike]) -> Optional[date]:
    """Liefert das Kalenderdatum oder None bei fehlenden/kaputten Werten.

    Strings werden nur über ihr YYYY-MM-DD-Präfix gelesen.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    m = _DATE_PREFIX_RE.match(value)
    if m is None:
        return None
    try:
        return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError:
        return None


def date_key(value: Optional[DateLike]) -> Optional[str]:
    """Normalisierter Vergleichsschlüssel 'YYYY-MM-DD' (oder None)."""
    d = parse_date(value)
    return d.isoformat() if d is not None else None


def parse_datetime(value: Optional[DateLike]) -> Optional[datetime]:
    """Liest einen ISO-Zeitstempel als naive Wanduhrzeit.

    Ein reines Datum ergibt Mitternacht. Zeitzonen-Angaben ("Z", "+01:00")
    werden verworfen, nicht umgerechnet.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str) or not value.strip():
        return None
    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1]
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    return parsed.replace(tzinfo=None)


def parse_hhmm(value: Optional[str]) -> Optional[tuple[int, int]]:
    """'09:05' → (9, 5); Sekunden werden ignoriert. None bei ungültigen Werten."""
    if not isinstance(value, str):
        return None
    m = _TIME_RE.match(value)
    if m is None:
        return None
    hour, minute = int(m.group(1)), int(m.group(2))
    if not (0 <= hour < 24 and 0 <= minute < 60):
        return None
    return hour, minute


def at_time(day: date, hhmm: str) -> Optional[datetime]:
    """Kombiniert einen Tag mit einer 'HH:MM'-Uhrzeit."""
    parsed = parse_hhmm(hhmm)
    if parsed is None:
        return None
    return datetime.combine(day, time(parsed[0], parsed[1]))


# ─── Wochentage & Wochen ──────────────────────────────────────────────────────

def day_name(day: date) -> str:
    """Englischer Wochentagsname in Langform ('Monday')."""
    return DAY_NAMES[day.weekday()]


def normalize_day_name(value: Optional[str]) -> Optional[str]:
    """' MONDAY ' → 'monday'; None bleibt None."""
    if value is None:
        return None
    cleaned = value.strip().lower()
    return cleaned or None


def monday_of(day: date) -> date:
    """Montag der Woche, die ``day`` enthält (Sonntag gehört zur Vorwoche)."""
    return day - timedelta(days=day.weekday())


def daterange(start: date, end: date) -> Iterator[date]:
    """Alle Tage von start bis end (beide inklusive)."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def week_dates(day: date) -> list[date]:
    """Montag..Sonntag der Woche von ``day``."""
    start = monday_of(day)
    return [start + timedelta(days=i) for i in range(7)]


def month_grid(year: int, month: int) -> list[list[date]]:
    """Wochenzeilen (Mo–So) für die Monatsansicht.

    Beginnt mit dem Montag vor/an dem Monatsersten und endet mit dem
    Sonntag nach/an dem Monatsletzten.
    """
    first = date(year, month, 1)
    if month == 12:
        last = date(year + 1, 1, 1) - timedelta(days=1)
    else:
        last = date(year, month + 1, 1) - timedelta(days=1)
    start = monday_of(first)
    end = monday_of(last) + timedelta(days=6)
    days = list(daterange(start, end))
    return [days[i:i + 7] for i in range(0, len(days), 7)]


def clip_to_day(
    day: date, start: datetime, end: datetime
) -> tuple[datetime, datetime]:
    """Tagesausschnitt eines (ggf. mehrtägigen) Zeitraums.

    Erster Tag: Original-Beginn, sonst 00:00.
    Letzter Tag: Original-Ende, sonst 23:59:59.
    """
    day_start = start if start.date() == day else datetime.combine(day, time.min)
    day_end = end if end.date() == day else datetime.combine(day, END_OF_DAY)
    return day_start, day_end
