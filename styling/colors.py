"""Farb-Grundfunktionen: Hex-Parsing, Aufhellen/Abdunkeln, Luminanz.

Alle Funktionen sind tolerant: Ungültige Farben (kein 6-stelliges Hex)
werden unverändert zurückgegeben, statt eine Exception zu werfen.
"""

import re
from typing import Optional

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


def hex_to_rgb(hex_color: str) -> Optional[tuple[int, int, int]]:
    """Wandelt '#RRGGBB' (oder 'RRGGBB') in ein (r, g, b)-Tupel um.

    Gibt None zurück, wenn die Farbe kein gültiges 6-stelliges Hex ist.
    """
    if not isinstance(hex_color, str):
        return None
    m = _HEX_RE.match(hex_color.strip())
    if m is None:
        return None
    h = m.group(1)
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Baut einen '#RRGGBB'-String; Kanäle werden auf 0..255 begrenzt."""
    channels = [max(0, min(255, int(round(c)))) for c in (r, g, b)]
    return "#" + "".join(f"{c:02X}" for c in channels)


def is_valid_hex(color: str) -> bool:
    """True für gültige 6-stellige Hex-Farben (mit oder ohne '#')."""
    return hex_to_rgb(color) is not None


def lighten_color(color: str, amount: float = 0.7) -> str:
    """Mischt die Farbe anteilig mit Weiß (amount=0 → unverändert, 1 → Weiß)."""
    rgb = hex_to_rgb(color)
    if rgb is None:
        return color
    r, g, b = rgb
    return rgb_to_hex(
        r + (255 - r) * amount,
        g + (255 - g) * amount,
        b + (255 - b) * amount,
    )


def darken_color(color: str, amount: float = 0.3) -> str:
    """Skaliert alle Kanäle Richtung Schwarz (amount=0 → unverändert)."""
    rgb = hex_to_rgb(color)
    if rgb is None:
        return color
    r, g, b = rgb
    return rgb_to_hex(r * (1 - amount), g * (1 - amount), b * (1 - amount))


def with_alpha(color: str, opacity: float) -> str:
    """Hängt einen Alpha-Kanal an: '#RRGGBB' → '#RRGGBBAA'."""
    rgb = hex_to_rgb(color)
    if rgb is None:
        return color
    alpha = max(0, min(255, int(round(opacity * 255))))
    return f"{rgb_to_hex(*rgb)}{alpha:02X}"


# ─── Luminanz ─────────────────────────────────────────────────────────────────

def _linearize(channel: float) -> float:
    """sRGB-Gammakorrektur eines Kanals im Bereich 0..1."""
    if channel <= 0.03928:
        return channel / 12.92
    return ((channel + 0.055) / 1.055) ** 2.4


def relative_luminance(color: str) -> float:
    """Relative Luminanz nach WCAG 2.x (0.0 = Schwarz, 1.0 = Weiß).

    Ungültige Farben liefern 0.5 (neutraler Mittelwert).
    """
    rgb = hex_to_rgb(color)
    if rgb is None:
        return 0.5
    r, g, b = (_linearize(c / 255) for c in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def perceived_brightness(color: str) -> Optional[float]:
    """Einfache Helligkeit 0.299R + 0.587G + 0.114B, normiert auf 0..1.

    Getrennt von relative_luminance(); für schnelle Hell/Dunkel-Entscheidungen.
    """
    rgb = hex_to_rgb(color)
    if rgb is None:
        return None
    r, g, b = rgb
    return (0.299 * r + 0.587 * g + 0.114 * b) / 255


def is_color_dark(color: str, threshold: float = 0.8) -> bool:
    """True, wenn auf dieser Farbe weiße Schrift verwendet werden soll.

    Sehr aggressive Schwelle (0.8): fast alle Farben gelten als "dunkel".
    Ungültige Farben gelten als hell.
    """
    brightness = perceived_brightness(color)
    if brightness is None:
        return False
    return brightness < threshold
