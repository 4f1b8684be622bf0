"""Farben eines Kalender-Blocks je nach Kartenstil und Status der Einheit."""

from dataclasses import dataclass
from typing import Optional

from config.defaults import CARD_STYLES
from config.schema import CalendarConfig
from styling.colors import darken_color, lighten_color, with_alpha
from styling.contrast import choose_text_color


@dataclass(frozen=True)
class BlockStyle:
    background: str
    border_color: str
    text_color: str
    border_style: str = "solid"     # "solid" | "dashed"
    opacity: float = 1.0


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def card_style(style_id: str) -> dict:
    """Kartenstil-Eintrag; unbekannte IDs fallen auf 'classic' zurück."""
    return CARD_STYLES.get(style_id, CARD_STYLES["classic"])


def block_style(unit, config: Optional[CalendarConfig] = None) -> BlockStyle:
    """Hintergrund, Rahmen und Schrift für eine Anzeige-Einheit.

    Platzhalter (unfertige Stunden) sind blass, gestrichelt und halbtransparent.
    Abgeschlossene Stunden werden kräftiger hinterlegt als offene.
    """
    config = config or CalendarConfig()
    colors = config.colors
    style = card_style(config.card_style)
    bg_opacity = style["background_opacity"]
    border_opacity = style["border_opacity"]

    is_unfinished = getattr(unit, "is_unfinished", False)
    plan_completed = getattr(unit, "plan_completed", False)

    if is_unfinished:
        color = unit.color or colors.placeholder_fallback
        border = darken_color(color, 0.2)
        if border_opacity > 0:
            border = with_alpha(border, _clamp(border_opacity * 0.67 * 0.4))
        return BlockStyle(
            background=lighten_color(color, 0.7),
            border_color=border if border_opacity > 0 else colors.neutral_border,
            text_color=colors.text_dark,
            border_style="dashed",
            opacity=0.6,
        )

    color = unit.color
    if plan_completed:
        background = lighten_color(color, _clamp(bg_opacity - 0.1))
        border_alpha = border_opacity * 0.67 * 0.8
    else:
        background = lighten_color(color, _clamp(bg_opacity + 0.35))
        border_alpha = border_opacity * 0.67

    text = choose_text_color(
        background, colors.text_light, colors.text_dark, colors.wcag_aa).text_color
    if border_opacity > 0:
        border = with_alpha(color, _clamp(border_alpha))
    else:
        border = colors.neutral_border
    return BlockStyle(background=background, border_color=border, text_color=text)
