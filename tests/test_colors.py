"""Tests für Farb-Grundfunktionen, Kontrast-Engine und Kartenstile."""

from datetime import datetime

import pytest

from config.schema import CalendarConfig
from models.display import EventUnit, LessonUnit
from styling.card_styles import block_style, card_style
from styling.colors import (
    darken_color,
    hex_to_rgb,
    is_color_dark,
    is_valid_hex,
    lighten_color,
    perceived_brightness,
    relative_luminance,
    with_alpha,
)
from styling.contrast import (
    TEXT_DARK,
    TEXT_LIGHT,
    choose_text_color,
    contrast_ratio,
    contrast_text_color,
)


def _make_lesson(color="#3B82F6", **kw) -> LessonUnit:
    defaults = dict(
        id="lesson-group-1", source_id="lesson-group-1", title="Fractions",
        start=datetime(2025, 2, 3, 9, 0), end=datetime(2025, 2, 3, 10, 0),
        color=color, lesson_ids=[1],
    )
    defaults.update(kw)
    return LessonUnit(**defaults)


# ─── GRUNDFUNKTIONEN ──────────────────────────────────────────────────────────

class TestColorHelpers:
    def test_hex_to_rgb_with_and_without_hash(self):
        assert hex_to_rgb("#FF8000") == (255, 128, 0)
        assert hex_to_rgb("ff8000") == (255, 128, 0)

    def test_invalid_hex(self):
        assert hex_to_rgb("#FFF") is None
        assert hex_to_rgb("red") is None
        assert not is_valid_hex("#GGGGGG")

    def test_lighten_and_darken(self):
        assert lighten_color("#000000", 0.5) == "#808080"
        assert lighten_color("#3B82F6", 0.0) == "#3B82F6"
        assert lighten_color("#3B82F6", 1.0) == "#FFFFFF"
        assert darken_color("#FFFFFF", 0.2) == "#CCCCCC"

    def test_invalid_colors_pass_through(self):
        """Ungültige Farben werden unverändert zurückgegeben."""
        assert lighten_color("red", 0.5) == "red"
        assert darken_color("nope", 0.5) == "nope"
        assert with_alpha("nope", 0.5) == "nope"

    def test_with_alpha(self):
        assert with_alpha("#ff0000", 0.5) == "#FF000080"
        assert with_alpha("#ff0000", 1.0) == "#FF0000FF"
        assert with_alpha("#ff0000", 2.0) == "#FF0000FF"

    def test_relative_luminance_bounds(self):
        assert relative_luminance("#000000") == pytest.approx(0.0)
        assert relative_luminance("#FFFFFF") == pytest.approx(1.0)
        assert relative_luminance("not-a-color") == 0.5

    def test_is_color_dark_threshold(self):
        """Schwelle 0.8: fast alles gilt als dunkel, Gelb nicht."""
        assert is_color_dark("#3B82F6")
        assert not is_color_dark("#FCD34D")
        assert not is_color_dark("invalid")
        assert perceived_brightness("#FFFFFF") == pytest.approx(1.0)


# ─── KONTRAST ─────────────────────────────────────────────────────────────────

class TestContrast:
    def test_black_on_white(self):
        assert contrast_ratio("#FFFFFF", "#000000") == pytest.approx(21.0)
        assert contrast_ratio("#000000", "#FFFFFF") == pytest.approx(21.0)

    def test_yellow_gets_dark_text(self):
        choice = choose_text_color("#FCD34D")
        assert choice.text_color == TEXT_DARK
        assert choice.ratio >= 4.5
        assert choice.meets_aa
        assert choice.light_ratio < 4.5

    def test_dark_blue_gets_light_text(self):
        assert contrast_text_color("#1E3A8A") == TEXT_LIGHT

    def test_neither_passes_picks_higher(self):
        """#777777: weiß ~4.48, dunkel ~3.3 → weiß, aber ohne AA."""
        choice = choose_text_color("#777777")
        assert choice.text_color == TEXT_LIGHT
        assert not choice.meets_aa
        assert choice.light_ratio > choice.dark_ratio

    def test_invalid_background_does_not_raise(self):
        assert contrast_text_color("nope") == TEXT_DARK

    @pytest.mark.parametrize("bg", [
        "#EF4444", "#10B981", "#8B5CF6", "#F97316", "#F59E0B", "#3B82F6",
        "#FFFFFF", "#000000", "#FEF2CA", "#6B7280",
    ])
    def test_choice_is_best_available(self, bg):
        choice = choose_text_color(bg)
        assert choice.text_color in (TEXT_LIGHT, TEXT_DARK)
        assert choice.ratio == pytest.approx(max(choice.light_ratio, choice.dark_ratio))

    def test_custom_threshold(self):
        choice = choose_text_color("#777777", threshold=3.0)
        assert choice.meets_aa


# ─── KARTENSTILE ──────────────────────────────────────────────────────────────

class TestCardStyles:
    def test_unknown_style_falls_back_to_classic(self):
        assert card_style("does-not-exist") == card_style("classic")

    def test_placeholder_is_dashed_and_pale(self):
        unit = _make_lesson(color="#FCD34D", id="unfinished-lesson-2025-02-03-1",
                            source_id="entry-1", lesson_ids=[], is_unfinished=True)
        style = block_style(unit)
        assert style.background == "#FEF2CA"
        assert style.border_style == "dashed"
        assert style.opacity == 0.6
        assert style.text_color == "#1F2937"

    def test_regular_lesson_classic(self):
        style = block_style(_make_lesson(color="#000000"))
        # classic: Hintergrund-Deckkraft 0.40 + 0.35 → 75 % Weiß
        assert style.background == "#BFBFBF"
        assert style.text_color == TEXT_DARK
        assert style.border_color.startswith("#000000")
        assert len(style.border_color) == 9
        assert style.border_style == "solid"

    def test_completed_lesson_is_stronger(self):
        open_style = block_style(_make_lesson(color="#3B82F6"))
        done_style = block_style(_make_lesson(color="#3B82F6", plan_completed=True))
        assert relative_luminance(done_style.background) < relative_luminance(open_style.background)

    def test_flat_style_uses_neutral_border(self):
        config = CalendarConfig(card_style="flat")
        style = block_style(_make_lesson(), config)
        assert style.border_color == config.colors.neutral_border

    def test_text_color_follows_config(self):
        config = CalendarConfig()
        config.colors.text_dark = "#000000"
        event = EventUnit(
            id="event-1", source_id="event-1", title="Parents' Evening",
            start=datetime(2025, 2, 3, 15, 0), end=datetime(2025, 2, 3, 18, 0),
            color="#FCD34D",
        )
        assert block_style(event, config).text_color == "#000000"
