"""Konfigurationsmanager: Laden, Speichern, Validieren und interaktives Bearbeiten.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt
from rich.table import Table
from rich import box
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.defaults import CARD_STYLES
from config.schema import (
    CalendarConfig,
    ColorConfig,
    ColorPreference,
    GridConfig,
    MonthViewConfig,
)

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML-KOMMENTAR-AUFBAU ───

_YAML_HEADER = f"""\
# ============================================
# Unterrichtskalender — Anzeige-Konfiguration
# Version: 1.0
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "color_preference": (
        "Platzhalter",
        "subject = \"Fach - Klasse\" und Fachfarbe, class = \"Klasse - Fach\" und Klassenfarbe.",
    ),
    "grid": (
        "Raster",
        "5-Minuten-Zeilen; header_offset = Kopfzeilen vor 00:00.",
    ),
    "month": (
        "Monatsansicht",
        None,
    ),
    "colors": (
        "Farben",
        "Schriftfarben, WCAG-Schwelle und Ersatzfarben pro Eintragsart (#RRGGBB).",
    ),
    "card_style": (
        "Kartenstil",
        "Verfügbar: " + ", ".join(CARD_STYLES),
    ),
    "lesson_defaults": (
        "Ersatz-Uhrzeiten",
        "Für Stunden, deren Zeitslot nicht existiert.",
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "calendar_config.yaml"

    def __init__(self, path: Optional[Path] = None):
        if path is not None:
            self.DEFAULT_CONFIG = Path(path)

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Config existiert (Erstaufruf)."""
        return not self.DEFAULT_CONFIG.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> CalendarConfig:
        """Lade Config aus YAML. Validiert automatisch via Pydantic."""
        target = Path(path) if path else self.DEFAULT_CONFIG
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'python main.py config init' aus."
            )
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            return CalendarConfig.model_validate(dict(raw or {}))
        except ValidationError as e:
            raise ValueError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    def load_or_default(self, path: Optional[Path] = None) -> CalendarConfig:
        """Wie load(), aber ohne Datei gilt die Default-Konfiguration."""
        target = Path(path) if path else self.DEFAULT_CONFIG
        if not target.exists():
            return CalendarConfig()
        return self.load(target)

    # ─── Speichern ───

    def save(self, config: CalendarConfig, path: Optional[Path] = None) -> Path:
        """Speichere Config als YAML mit deutschen Kommentaren."""
        target = Path(path) if path else self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        console.print(f"[green]✓[/green] Konfiguration gespeichert: {target}")
        return target

    def _build_commented_yaml(self, config: CalendarConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )

        colors = CommentedMap(cm["colors"])
        colors.yaml_add_eol_comment("Schwelle für normalen Text", "wcag_aa")
        cm["colors"] = colors
        return cm

    # ─── Anzeige ───

    def show(self, config: CalendarConfig) -> None:
        """Tabellarische Übersicht der aktuellen Konfiguration."""
        table = Table(title="Kalender-Konfiguration", box=box.SIMPLE)
        table.add_column("Bereich", style="bold")
        table.add_column("Parameter")
        table.add_column("Wert")
        for section, value in config.model_dump(mode="json").items():
            if isinstance(value, dict):
                for k, v in value.items():
                    table.add_row(section, k, str(v))
            else:
                table.add_row(section, "", str(value))
        console.print(table)

    # ─── Interaktives Bearbeiten ───

    def edit_interactive(self, config: CalendarConfig) -> CalendarConfig:
        """Interaktives Bearbeitungsmenü für die Konfiguration."""
        while True:
            console.print()
            console.print(Panel(
                "[bold]Konfiguration bearbeiten[/bold]",
                border_style="cyan",
            ))
            console.print(f"  [bold]1.[/bold] Platzhalter-Reihenfolge ({config.color_preference.value})")
            console.print(f"  [bold]2.[/bold] Kartenstil ({config.card_style})")
            console.print("  [bold]3.[/bold] Raster")
            console.print("  [bold]4.[/bold] Monatsansicht")
            console.print("  [bold]5.[/bold] Farben")
            console.print("  [bold]0.[/bold] Speichern & Zurück")

            choice = Prompt.ask("\nAuswahl", default="0")

            if choice == "1":
                pref = Prompt.ask(
                    "Titel/Farbe nach", choices=[p.value for p in ColorPreference],
                    default=config.color_preference.value)
                config = config.model_copy(update={"color_preference": ColorPreference(pref)})
            elif choice == "2":
                style = Prompt.ask(
                    "Kartenstil", choices=list(CARD_STYLES), default=config.card_style)
                config = config.model_copy(update={"card_style": style})
            elif choice == "3":
                config = config.model_copy(update={"grid": self._edit_grid(config.grid)})
            elif choice == "4":
                n = IntPrompt.ask("Sichtbare Einträge pro Tag",
                                  default=config.month.max_events_per_cell)
                config = config.model_copy(
                    update={"month": MonthViewConfig(max_events_per_cell=n)})
            elif choice == "5":
                config = config.model_copy(update={"colors": self._edit_colors(config.colors)})
            elif choice == "0":
                self.save(config)
                break
            else:
                console.print("[yellow]Ungültige Auswahl.[/yellow]")

        return config

    def _edit_grid(self, gc: GridConfig) -> GridConfig:
        """Raster interaktiv anpassen; ungültige Eingaben lassen es unverändert."""
        offset = IntPrompt.ask("Kopfzeilen vor 00:00", default=gc.header_offset)
        start = IntPrompt.ask("Erste angezeigte Stunde", default=gc.day_start_hour)
        end = IntPrompt.ask("Letzte angezeigte Stunde (exklusiv)", default=gc.day_end_hour)
        try:
            return GridConfig(header_offset=offset, day_start_hour=start, day_end_hour=end)
        except ValidationError as e:
            console.print(f"[red]Ungültig:[/red] {e}")
            return gc

    def _edit_colors(self, cc: ColorConfig) -> ColorConfig:
        """Farben interaktiv anpassen."""
        table = Table(box=box.SIMPLE)
        table.add_column("Parameter", style="bold")
        table.add_column("Aktuell")
        for k, v in cc.model_dump().items():
            table.add_row(k, str(v))
        console.print(table)

        if not Confirm.ask("Änderungen vornehmen?", default=False):
            return cc

        values = {}
        for k, v in cc.model_dump().items():
            if isinstance(v, float):
                values[k] = FloatPrompt.ask(k, default=v)
            else:
                values[k] = Prompt.ask(k, default=v)
        try:
            return ColorConfig(**values)
        except ValidationError as e:
            console.print(f"[red]Ungültig:[/red] {e}")
            return cc
