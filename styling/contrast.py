"""Kontrast-Engine: wählt eine lesbare Schriftfarbe für beliebige Hintergründe."""

from dataclasses import dataclass

from styling.colors import relative_luminance

TEXT_LIGHT = "#FFFFFF"
TEXT_DARK = "#1F2937"
WCAG_AA = 4.5


def contrast_ratio(color_a: str, color_b: str) -> float:
    """WCAG-Kontrastverhältnis (L_hell + 0.05) / (L_dunkel + 0.05), 1.0..21.0."""
    lum_a = relative_luminance(color_a)
    lum_b = relative_luminance(color_b)
    lighter = max(lum_a, lum_b)
    darker = min(lum_a, lum_b)
    return (lighter + 0.05) / (darker + 0.05)


@dataclass(frozen=True)
class ContrastChoice:
    """Ergebnis der Schriftfarben-Wahl inkl. beider Kontrastwerte."""

    text_color: str
    ratio: float
    light_ratio: float
    dark_ratio: float
    meets_aa: bool


def choose_text_color(
    background: str,
    light: str = TEXT_LIGHT,
    dark: str = TEXT_DARK,
    threshold: float = WCAG_AA,
) -> ContrastChoice:
    """Wählt zwischen heller und dunkler Schrift.

    Regeln:
    1. Beide erfüllen AA → die mit dem höheren Kontrast.
    2. Nur eine erfüllt AA → diese.
    3. Keine erfüllt AA → trotzdem die mit dem höheren Kontrast
       (kein Fehlerzustand).
    Bei Gleichstand gewinnt die dunkle Schrift.
    """
    light_ratio = contrast_ratio(background, light)
    dark_ratio = contrast_ratio(background, dark)
    light_ok = light_ratio >= threshold
    dark_ok = dark_ratio >= threshold

    if light_ok and not dark_ok:
        text = light
    elif dark_ok and not light_ok:
        text = dark
    else:
        text = light if light_ratio > dark_ratio else dark

    ratio = light_ratio if text == light else dark_ratio
    return ContrastChoice(
        text_color=text,
        ratio=ratio,
        light_ratio=light_ratio,
        dark_ratio=dark_ratio,
        meets_aa=ratio >= threshold,
    )


def contrast_text_color(background: str) -> str:
    """Kurzform: nur die gewählte Schriftfarbe (#FFFFFF oder #1F2937)."""
    return choose_text_color(background).text_color
