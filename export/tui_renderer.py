"""Renderer für die Terminal-Ausgabe (Rich-Tabellen).

Wird von den Befehlen in main.py verwendet.
"""

from typing import TYPE_CHECKING

from rich import box
from rich.table import Table

from export.helpers import format_timestamp, format_window, join_names

if TYPE_CHECKING:
    from config.schema import DisplayConfig
    from models.deadline import DeadlineView
    from models.lecture import Lecture


def render_lectures(lectures: list["Lecture"], display: "DisplayConfig",
                    title: str = "Vorlesungen") -> Table:
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Zeit", no_wrap=True)
    table.add_column("Vorlesung", style="bold")
    table.add_column("Räume")
    table.add_column("Gruppen")
    table.add_column("ID", style="dim")
    for l in lectures:
        table.add_row(
            format_window(l.start_time, l.end_time, display),
            l.lecture_name,
            join_names(l.rooms),
            join_names(l.groups),
            l.id,
        )
    return table


def render_names(names: list[str], title: str, column: str) -> Table:
    table = Table(title=title, box=box.ROUNDED)
    table.add_column(column, style="bold")
    for n in names:
        table.add_row(n)
    return table


def render_group_lectures(mapping: dict[str, list[str]]) -> Table:
    table = Table(title="Vorlesungen je Gruppe", box=box.ROUNDED, show_lines=True)
    table.add_column("Gruppe", style="bold")
    table.add_column("Vorlesungen")
    for group, names in mapping.items():
        table.add_row(group, "\n".join(names))
    return table


def render_deadlines(deadlines: list["DeadlineView"], display: "DisplayConfig",
                     title: str = "Aktive Abgabetermine") -> Table:
    """Jede Zeile trägt die abgeleitete Gruppenfarbe als Markierung."""
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("", width=2)
    table.add_column("Termin", no_wrap=True)
    table.add_column("Info", style="bold")
    table.add_column("Vorlesung")
    table.add_column("Gruppe")
    table.add_column("ID", style="dim")
    for d in deadlines:
        table.add_row(
            f"[{d.color}]■[/]",
            format_timestamp(d.deadline, display),
            d.info,
            d.short_lecture_name or "—",
            d.group or "—",
            d.id,
        )
    return table
