"""Vorlesungsplan — Haupt-CLI.

Verwendung:
  python main.py setup                         Standard-Konfiguration anlegen
  python main.py config show                   Konfiguration anzeigen
  python main.py status                        API-Version / Erreichbarkeit
  python main.py generate                      Demo-Daten erzeugen
  python main.py lectures                      Alle Vorlesungen
  python main.py lectures --upcoming           Kommende Vorlesungen
  python main.py lectures -g MKI1 -g WIB1      Vorlesungen für Gruppen
  python main.py lecture <id>                  Eine Vorlesung
  python main.py rooms [--free] [--at ZEIT]    Alle bzw. freie Räume
  python main.py groups [--lectures]           Gruppen (mit Vorlesungen)
  python main.py deadlines list                Aktive Abgabetermine
  python main.py deadlines show <id>           Ein Abgabetermin
  python main.py deadlines add ...             Abgabetermin anlegen
  python main.py deadlines update <id> ...     Abgabetermin ändern
  python main.py deadlines delete <id>         Abgabetermin löschen

Globale Optionen: --config PFAD, --data-dir PFAD, --json, -v/--verbose
"""

import functools
import logging
import sys
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box

from config.manager import ConfigManager
from config.schema import AppConfig
from engine import ScheduleError, ScheduleQueries
from export import (
    dumps,
    render_deadlines,
    render_group_lectures,
    render_lectures,
    render_names,
)
from storage import JsonStore

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)

# Exit-Codes je Fehlerart
_EXIT_CODES = {"validation": 1, "not_found": 1, "repository": 2}


class AppContext:
    """Hält Konfiguration und (lazy) geöffneten Datenspeicher für einen Aufruf."""

    def __init__(self, config: AppConfig, config_manager: ConfigManager,
                 as_json: bool) -> None:
        self.config = config
        self.config_manager = config_manager
        self.as_json = as_json
        self._store: Optional[JsonStore] = None
        self._queries: Optional[ScheduleQueries] = None

    @property
    def store(self) -> JsonStore:
        if self._store is None:
            sc = self.config.storage
            store = JsonStore(Path(sc.data_dir), sc.lectures_file, sc.deadlines_file)
            # Schließen übernimmt click beim Abbau des Kontexts
            self._store = click.get_current_context().with_resource(store)
        return self._store

    @property
    def queries(self) -> ScheduleQueries:
        if self._queries is None:
            grace = timedelta(days=self.config.deadlines.grace_days)
            self._queries = ScheduleQueries(
                self.store.lectures, self.store.deadlines, grace=grace
            )
        return self._queries

    def localize(self, text: Optional[str]):
        """Naive Zeitangaben der Kommandozeile gelten in der Anzeige-Zeitzone.

        Nicht parsebare Werte werden unverändert durchgereicht, damit die
        Engine einen ValidationError mit Feldnamen liefert.
        """
        if text is None:
            return None
        try:
            value = datetime.fromisoformat(text.strip())
        except ValueError:
            return text
        if value.tzinfo is None:
            value = value.replace(tzinfo=ZoneInfo(self.config.display.timezone))
        return value

    def now(self, at: Optional[str]) -> datetime:
        if at is None:
            return datetime.now(timezone.utc)
        value = self.localize(at)
        if not isinstance(value, datetime):
            raise click.BadParameter(f"Kein gültiger Zeitpunkt: {at}", param_hint="--at")
        return value

    def emit(self, value, renderable=None) -> None:
        """JSON oder Rich-Darstellung, je nach --json."""
        if self.as_json or renderable is None:
            click.echo(dumps(value))
        else:
            console.print(renderable)


pass_app = click.make_pass_decorator(AppContext)


def handle_errors(func):
    """Übersetzt Engine-Fehler in eine rote Meldung und einen Exit-Code."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ScheduleError as e:
            app = click.get_current_context().find_object(AppContext)
            if app is not None and app.as_json:
                click.echo(dumps(e.to_dict()))
            else:
                err_console.print(f"[red bold]Fehler:[/red bold] {e}")
            sys.exit(_EXIT_CODES.get(e.kind, 1))
    return wrapper


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


# ─── SETUP ────────────────────────────────────────────────────────────────────

@click.command("setup")
@click.pass_context
def cmd_setup(ctx: click.Context):
    """Legt die Standard-Konfiguration als YAML an."""
    from config.defaults import default_app_config

    app: AppContext = ctx.obj
    mgr = app.config_manager
    if not mgr.first_run_check():
        console.print(f"[yellow]Eine Konfiguration existiert bereits:[/yellow] {mgr.path}")
        if not click.confirm("Mit Standardwerten überschreiben?", default=False):
            return
    path = mgr.save(default_app_config())
    console.print(f"[green]✓[/green] Konfiguration gespeichert: {path}")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen."""


@cmd_config.command("show")
@pass_app
def config_show(app: AppContext):
    """Zeigt die aktive Konfiguration an."""
    config = app.config
    if app.as_json:
        click.echo(dumps(config))
        return
    table = Table(title="Konfiguration", box=box.ROUNDED)
    table.add_column("Parameter", style="bold")
    table.add_column("Wert")
    table.add_row("Datenverzeichnis", config.storage.data_dir)
    table.add_row("Vorlesungen", config.storage.lectures_file)
    table.add_row("Abgabetermine", config.storage.deadlines_file)
    table.add_row("Karenz (Tage)", str(config.deadlines.grace_days))
    table.add_row("Zeitzone", config.display.timezone)
    table.add_row("Log-Level", config.log_level)
    console.print(table)


# ─── STATUS ───────────────────────────────────────────────────────────────────

@click.command("status")
@pass_app
@handle_errors
def cmd_status(app: AppContext):
    """Meldet API-Version und Umfang des Datenbestands."""
    status = app.queries.status()
    if app.as_json:
        click.echo(dumps(status))
        return
    console.print(Panel(
        f"[bold]{status['message']}[/bold]\n"
        f"Daten: {app.store.data_dir}\n"
        f"Vorlesungen: {len(app.queries.list_lectures())} | "
        f"Räume: {len(app.queries.list_rooms())} | "
        f"Gruppen: {len(app.queries.list_groups())}",
        title="Vorlesungsplan",
        border_style="cyan",
    ))


# ─── GENERATE ─────────────────────────────────────────────────────────────────

@click.command("generate")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--weeks", default=14, help="Anzahl Vorlesungswochen.")
@click.option("--reference", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Referenzdatum (Standard: heute).")
@click.option("--deadlines", "num_deadlines", default=8, help="Anzahl Abgabetermine.")
@pass_app
@handle_errors
def cmd_generate(app: AppContext, seed: int, weeks: int,
                 reference: Optional[datetime], num_deadlines: int):
    """Erzeugt Demo-Daten und ersetzt den Vorlesungsbestand."""
    from data.fake_data import FakeDataGenerator

    ref = reference.date() if reference else date.today()
    gen = FakeDataGenerator(seed=seed, timezone=app.config.display.timezone)
    data = gen.generate(ref, weeks=weeks, num_deadlines=num_deadlines)

    app.store.lectures.replace_all(data.lectures)
    for d in data.deadlines:
        app.store.deadlines.save(d)
    logger.info(f"Demo-Daten erzeugt (Seed {seed}, Referenz {ref.isoformat()})")

    console.print(f"[dim]{data.summary()}[/dim]")
    console.print(f"[green]✓[/green] Demo-Daten gespeichert: {app.store.data_dir}")


# ─── LECTURES ─────────────────────────────────────────────────────────────────

@click.command("lectures")
@click.option("--upcoming", is_flag=True, default=False,
              help="Nur Vorlesungen, die noch nicht vorbei sind.")
@click.option("--group", "-g", "groups", multiple=True,
              help="Nur Vorlesungen dieser Gruppe(n).")
@click.option("--at", default=None, help="Bezugszeitpunkt für --upcoming (ISO-8601).")
@pass_app
@handle_errors
def cmd_lectures(app: AppContext, upcoming: bool, groups: tuple[str, ...],
                 at: Optional[str]):
    """Listet Vorlesungen nach Beginn sortiert."""
    if groups:
        lectures = app.queries.lectures_for_groups(groups)
        title = f"Vorlesungen für {', '.join(groups)}"
    elif upcoming:
        lectures = app.queries.list_upcoming_lectures(app.now(at))
        title = "Kommende Vorlesungen"
    else:
        lectures = app.queries.list_lectures()
        title = "Vorlesungen"
    app.emit(lectures, render_lectures(lectures, app.config.display, title=title))


@click.command("lecture")
@click.argument("lecture_id")
@pass_app
@handle_errors
def cmd_lecture(app: AppContext, lecture_id: str):
    """Zeigt eine Vorlesung."""
    lecture = app.queries.get_lecture(lecture_id)
    app.emit(lecture, render_lectures([lecture], app.config.display, title=lecture.lecture_name))


# ─── ROOMS & GROUPS ───────────────────────────────────────────────────────────

@click.command("rooms")
@click.option("--free", "mode", flag_value="free", help="Nur aktuell freie Räume.")
@click.option("--busy", "mode", flag_value="busy", help="Nur aktuell belegte Räume.")
@click.option("--at", default=None, help="Bezugszeitpunkt (ISO-8601, Standard: jetzt).")
@pass_app
@handle_errors
def cmd_rooms(app: AppContext, mode: Optional[str], at: Optional[str]):
    """Listet alle, freie oder belegte Räume."""
    if mode == "free":
        rooms = app.queries.list_free_rooms(app.now(at))
        title = "Freie Räume"
    elif mode == "busy":
        rooms = app.queries.list_busy_rooms(app.now(at))
        title = "Belegte Räume"
    else:
        rooms = app.queries.list_rooms()
        title = "Räume"
    app.emit(rooms, render_names(rooms, title=title, column="Raum"))


@click.command("groups")
@click.option("--lectures", "with_lectures", is_flag=True, default=False,
              help="Vorlesungen je Gruppe anzeigen.")
@pass_app
@handle_errors
def cmd_groups(app: AppContext, with_lectures: bool):
    """Listet alle Studiengruppen."""
    if with_lectures:
        mapping = app.queries.group_lectures()
        app.emit(mapping, render_group_lectures(mapping))
        return
    groups = app.queries.list_groups()
    app.emit(groups, render_names(groups, title="Gruppen", column="Gruppe"))


# ─── DEADLINES ────────────────────────────────────────────────────────────────

@click.group("deadlines")
def cmd_deadlines():
    """Abgabetermine anzeigen und verwalten."""


@cmd_deadlines.command("list")
@click.option("--at", default=None, help="Bezugszeitpunkt (ISO-8601, Standard: jetzt).")
@pass_app
@handle_errors
def deadlines_list(app: AppContext, at: Optional[str]):
    """Aktive Abgabetermine, nach Termin sortiert."""
    deadlines = app.queries.list_active_deadlines(app.now(at))
    app.emit(deadlines, render_deadlines(deadlines, app.config.display))


@cmd_deadlines.command("show")
@click.argument("deadline_id")
@pass_app
@handle_errors
def deadlines_show(app: AppContext, deadline_id: str):
    """Zeigt einen Abgabetermin."""
    deadline = app.queries.get_deadline(deadline_id)
    app.emit(deadline, render_deadlines([deadline], app.config.display, title="Abgabetermin"))


@cmd_deadlines.command("add")
@click.option("--deadline", "due", default=None, help="Termin (ISO-8601).")
@click.option("--info", default=None, help="Beschreibung.")
@click.option("--lecture", "short_lecture_name", default=None, help="Vorlesungskürzel.")
@click.option("--group", default=None, help="Studiengruppe.")
@click.option("--created-by", default=None, help="Kennung des Erstellers.")
@pass_app
@handle_errors
def deadlines_add(app: AppContext, due: Optional[str], info: Optional[str],
                  short_lecture_name: Optional[str], group: Optional[str],
                  created_by: Optional[str]):
    """Legt einen Abgabetermin an."""
    created = app.queries.create_deadline({
        "deadline": app.localize(due),
        "info": info,
        "shortLectureName": short_lecture_name,
        "group": group,
        "createdBy": created_by,
    })
    if app.as_json:
        click.echo(dumps(created))
        return
    console.print(f"[green]✓[/green] Deadline created! id: [bold]{created.id}[/bold]")


@cmd_deadlines.command("update")
@click.argument("deadline_id")
@click.option("--deadline", "due", default=None, help="Neuer Termin (ISO-8601).")
@click.option("--lecture", "short_lecture_name", default=None, help="Vorlesungskürzel.")
@click.option("--group", default=None, help="Studiengruppe.")
@pass_app
@handle_errors
def deadlines_update(app: AppContext, deadline_id: str, due: Optional[str],
                     short_lecture_name: Optional[str], group: Optional[str]):
    """Ändert Termin, Vorlesung und Gruppe (fehlende Werte werden geleert)."""
    updated = app.queries.update_deadline(deadline_id, {
        "deadline": app.localize(due),
        "shortLectureName": short_lecture_name,
        "group": group,
    })
    if app.as_json:
        click.echo(dumps(updated))
        return
    console.print(f"[green]✓[/green] Deadline updated! id: [bold]{updated.id}[/bold]")


@cmd_deadlines.command("delete")
@click.argument("deadline_id")
@pass_app
@handle_errors
def deadlines_delete(app: AppContext, deadline_id: str):
    """Löscht einen Abgabetermin (auch wenn er nicht existiert)."""
    ack = app.queries.delete_deadline(deadline_id)
    if app.as_json:
        click.echo(dumps(ack))
        return
    console.print(f"[green]✓[/green] {ack.message}")


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None,
              help="Pfad zur YAML-Konfiguration.")
@click.option("--data-dir", type=click.Path(path_type=Path), default=None,
              help="Datenverzeichnis (überschreibt die Konfiguration).")
@click.option("--json", "as_json", is_flag=True, default=False,
              help="Ausgabe als JSON statt Tabelle.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug-Logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], data_dir: Optional[Path],
        as_json: bool, verbose: bool):
    """Vorlesungsplan: Vorlesungen, freie Räume und Abgabetermine.

    Starten Sie mit: python main.py generate
    """
    mgr = ConfigManager(config_path)
    try:
        config = mgr.load_or_default()
    except ValueError as e:
        err_console.print(f"[red bold]{e}[/red bold]")
        sys.exit(1)
    if data_dir is not None:
        config = config.model_copy(update={
            "storage": config.storage.model_copy(update={"data_dir": str(data_dir)})
        })
    _configure_logging("DEBUG" if verbose else config.log_level)
    ctx.obj = AppContext(config, mgr, as_json)


def main():
    """Einstiegspunkt."""
    cli()


# Befehle registrieren
cli.add_command(cmd_setup)
cli.add_command(cmd_config)
cli.add_command(cmd_status)
cli.add_command(cmd_generate)
cli.add_command(cmd_lectures)
cli.add_command(cmd_lecture)
cli.add_command(cmd_rooms)
cli.add_command(cmd_groups)
cli.add_command(cmd_deadlines)


if __name__ == "__main__":
    main()
