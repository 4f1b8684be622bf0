"""Unterrichtskalender — Haupt-CLI.

Verwendung:
  python main.py config init                       Default-Konfiguration anlegen
  python main.py config show                       Konfiguration anzeigen
  python main.py config edit                       Konfiguration bearbeiten
  python main.py generate                          Demo-Snapshot erzeugen
  python main.py check <snapshot.json>             Referenz-Check
  python main.py week-number <snapshot> --date D   Zyklus-Woche eines Datums
  python main.py show day <snapshot> --date D      Tagesansicht
  python main.py show week <snapshot> --date D     Wochenansicht
  python main.py show month <snapshot> --date D    Monatsansicht
  python main.py export <snapshot> --date D        Woche als Excel exportieren
"""

import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()
logger = logging.getLogger(__name__)

# Standard-Pfad für gespeicherte Snapshots
DEFAULT_SNAPSHOT_JSON = Path("output/calendar_snapshot.json")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_config(ctx: click.Context):
    """Lädt die Konfiguration (ohne Datei: Defaults) oder bricht ab."""
    from config.manager import ConfigManager
    mgr = ConfigManager(ctx.obj.get("config_path"))
    try:
        return mgr, mgr.load_or_default()
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)


def _load_snapshot_or_abort(path: Path):
    """Lädt einen Snapshot oder bricht mit Fehlermeldung ab."""
    from models.snapshot import CalendarSnapshot, SnapshotLoadError
    logger.debug(f"Lade Snapshot: {path}")
    try:
        return CalendarSnapshot.load_json(path)
    except SnapshotLoadError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)


def _parse_date_option(ctx, param, value: Optional[str]) -> date:
    from engine.dates import parse_date
    if value is None:
        return date.today()
    parsed = parse_date(value)
    if parsed is None:
        raise click.BadParameter(f"'{value}' ist kein Datum im Format YYYY-MM-DD")
    return parsed


date_option = click.option(
    "--date", "-d", "day", default=None, callback=_parse_date_option,
    help="Datum (YYYY-MM-DD), Standard: heute.")
snapshot_argument = click.argument(
    "snapshot", type=click.Path(path_type=Path), default=str(DEFAULT_SNAPSHOT_JSON))


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen, anlegen oder bearbeiten."""


@cmd_config.command("show")
@click.pass_context
def config_show(ctx):
    """Zeigt die aktuelle Konfiguration an."""
    mgr, config = _load_config(ctx)
    source = mgr.DEFAULT_CONFIG if mgr.DEFAULT_CONFIG.exists() else "Defaults"
    console.print(Panel(
        f"[bold]Kartenstil:[/bold] {config.card_style}  |  "
        f"[bold]Platzhalter:[/bold] {config.color_preference.value}  |  "
        f"[bold]Quelle:[/bold] {source}",
        title="Kalender-Konfiguration",
        border_style="cyan",
    ))
    mgr.show(config)


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False, help="Bestehende Datei überschreiben.")
@click.pass_context
def config_init(ctx, force: bool):
    """Schreibt die Default-Konfiguration als YAML."""
    from config.defaults import default_calendar_config
    from config.manager import ConfigManager
    mgr = ConfigManager(ctx.obj.get("config_path"))
    if not mgr.first_run_check() and not force:
        console.print(
            f"[yellow]{mgr.DEFAULT_CONFIG} existiert bereits.[/yellow] "
            "Mit [bold]--force[/bold] überschreiben.")
        sys.exit(1)
    mgr.save(default_calendar_config())


@cmd_config.command("edit")
@click.pass_context
def config_edit(ctx):
    """Bearbeitet die Konfiguration interaktiv."""
    mgr, config = _load_config(ctx)
    mgr.edit_interactive(config)


# ─── GENERATE ─────────────────────────────────────────────────────────────────

@click.command("generate")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--output", "-o", default=str(DEFAULT_SNAPSHOT_JSON),
              help="Pfad für den JSON-Snapshot.")
@click.option("--start", "start", default=None, callback=_parse_date_option,
              help="Schuljahresbeginn (YYYY-MM-DD), Standard: heute.")
@click.pass_context
def cmd_generate(ctx, seed: int, output: str, start: date):
    """Erzeugt einen Demo-Snapshot (Stundenplan, Stunden, Termine, Ferien)."""
    mgr, config = _load_config(ctx)
    from data.demo_data import DemoDataGenerator

    console.print("[bold]Demo-Daten werden generiert...[/bold]")
    gen = DemoDataGenerator(config, seed=seed, start_date=start)
    data = gen.generate()
    gen.print_summary(data)

    console.print(f"\n[dim]{escape(data.summary())}[/dim]")

    out_path = Path(output)
    data.save_json(out_path)
    console.print(f"[green]✓[/green] JSON gespeichert: {out_path}")


# ─── CHECK ────────────────────────────────────────────────────────────────────

@click.command("check")
@snapshot_argument
def cmd_check(snapshot: Path):
    """Prüft Verweise und Datumsangaben eines Snapshots."""
    data = _load_snapshot_or_abort(snapshot)
    console.print(f"\n{escape(data.summary())}\n")
    report = data.check_references()
    report.print_rich()
    sys.exit(0 if report.is_clean else 1)


# ─── WEEK-NUMBER ──────────────────────────────────────────────────────────────

@click.command("week-number")
@snapshot_argument
@date_option
def cmd_week_number(snapshot: Path, day: date):
    """Zeigt die Zyklus-Woche (1/2) eines Datums."""
    from engine.week_cycle import WeekCycleResolver
    data = _load_snapshot_or_abort(snapshot)
    resolver = WeekCycleResolver(data.academic_year, data.holidays)
    week = resolver.resolve(day)
    if week is None:
        reason = "Ferienwoche" if resolver.is_week_fully_covered(day) else "außerhalb des Zyklus"
        console.print(f"{day.isoformat()}: [yellow]keine Woche[/yellow] ({reason})")
    else:
        console.print(f"{day.isoformat()}: [bold]Woche {week}[/bold]")


# ─── SHOW ─────────────────────────────────────────────────────────────────────

@click.group("show")
def cmd_show():
    """Kalenderansichten im Terminal."""


def _layout(ctx, snapshot: Path):
    from engine.layout import CalendarLayout
    _, config = _load_config(ctx)
    data = _load_snapshot_or_abort(snapshot)
    return CalendarLayout(data, config), config


@cmd_show.command("day")
@snapshot_argument
@date_option
@click.pass_context
def show_day(ctx, snapshot: Path, day: date):
    """Tagesansicht."""
    from config.defaults import DAY_NAMES
    from export.tui_renderer import render_day_rows
    layout, config = _layout(ctx, snapshot)
    view = layout.day_view(day)
    week = f" · Woche {view.week_number}" if view.week_number else ""
    table = Table(title=f"{DAY_NAMES[day.weekday()]}, {day:%d.%m.%Y}{week}", box=box.ROUNDED)
    table.add_column("Zeit", style="bold")
    table.add_column("Art")
    table.add_column("Titel")
    table.add_column("Ort")
    table.add_column("Spalte", justify="right")
    rows = render_day_rows(view, config)
    for row in rows:
        table.add_row(*row)
    console.print(table)
    if not rows:
        console.print("[dim]Keine Einträge.[/dim]")


@cmd_show.command("week")
@snapshot_argument
@date_option
@click.pass_context
def show_week(ctx, snapshot: Path, day: date):
    """Wochenansicht (Montag bis Sonntag)."""
    from config.defaults import DAY_SHORT
    from export.tui_renderer import render_week_all_day, render_week_rows
    layout, config = _layout(ctx, snapshot)
    view = layout.week_view(day)
    week = f" · Woche {view.week_number}" if view.week_number else ""
    table = Table(title=f"Woche ab {view.week_start:%d.%m.%Y}{week}",
                  box=box.ROUNDED, show_lines=True)
    table.add_column("Zeit", style="bold")
    for i, d in enumerate(view.days):
        table.add_column(f"{DAY_SHORT[i]} {d:%d.%m.}")
    all_day = render_week_all_day(view)
    if any(all_day):
        table.add_row("ganztägig", *all_day, style="italic")
    for row in render_week_rows(view, config):
        table.add_row(*row)
    console.print(table)


@cmd_show.command("month")
@snapshot_argument
@date_option
@click.pass_context
def show_month(ctx, snapshot: Path, day: date):
    """Monatsansicht mit '+N more' pro Tag."""
    from config.defaults import DAY_SHORT
    from export.tui_renderer import render_month_rows
    layout, _ = _layout(ctx, snapshot)
    view = layout.month_view(day.year, day.month)
    table = Table(title=f"{day:%m/%Y}", box=box.ROUNDED, show_lines=True)
    table.add_column("W", style="dim")
    for name in DAY_SHORT:
        table.add_column(name)
    for row in render_month_rows(view):
        table.add_row(*row)
    console.print(table)


# ─── EXPORT ───────────────────────────────────────────────────────────────────

@click.command("export")
@snapshot_argument
@date_option
@click.option("--output", "-o", default=None,
              help="Zieldatei (.xlsx), Standard: output/woche_<Datum>.xlsx")
@click.pass_context
def cmd_export(ctx, snapshot: Path, day: date, output: Optional[str]):
    """Exportiert die Woche eines Datums als Excel-Datei."""
    from export.excel_export import ExcelExporter
    layout, config = _layout(ctx, snapshot)
    out_path = Path(output) if output else Path(f"output/woche_{day.isoformat()}.xlsx")
    ExcelExporter(layout, config).export(day, out_path)
    console.print(f"[green]✓[/green] Excel gespeichert: {out_path}")


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug-Logging aktivieren.")
@click.option("--config", "config_path", default=None, type=click.Path(path_type=Path),
              help="Pfad zur YAML-Konfiguration.")
@click.pass_context
def cli(ctx, verbose: bool, config_path: Optional[Path]):
    """Unterrichtskalender: Stundenplan-Vorlage, Stunden und Termine als Kalender.

    Starten Sie mit: python main.py generate
    """
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def main():
    """Einstiegspunkt."""
    cli(obj={})


# Befehle registrieren
cli.add_command(cmd_config)
cli.add_command(cmd_generate)
cli.add_command(cmd_check)
cli.add_command(cmd_week_number)
cli.add_command(cmd_show)
cli.add_command(cmd_export)


if __name__ == "__main__":
    main()
