"""Ausgabe-Modul: Rich-Tabellen und JSON für die Kommandozeile."""

from export.helpers import dumps, format_timestamp, format_window, to_jsonable
from export.tui_renderer import (
    render_deadlines,
    render_group_lectures,
    render_lectures,
    render_names,
)

__all__ = [
    "dumps",
    "format_timestamp",
    "format_window",
    "to_jsonable",
    "render_lectures",
    "render_names",
    "render_group_lectures",
    "render_deadlines",
]
