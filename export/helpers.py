"""Gemeinsame Hilfsfunktionen für Tabellen- und JSON-Ausgabe."""

import json
from datetime import datetime
from typing import Any, Iterable
from zoneinfo import ZoneInfo

from pydantic import BaseModel

from config.schema import DisplayConfig


def format_timestamp(value: datetime, display: DisplayConfig) -> str:
    """Zeitstempel in der Anzeige-Zeitzone, z.B. "10.01.2024 09:00"."""
    return value.astimezone(ZoneInfo(display.timezone)).strftime(display.time_format)


def format_window(start: datetime, end: datetime, display: DisplayConfig) -> str:
    """Zeitfenster; am selben Tag wird das Datum nur einmal angezeigt."""
    tz = ZoneInfo(display.timezone)
    s, e = start.astimezone(tz), end.astimezone(tz)
    if s.date() == e.date():
        return f"{format_timestamp(s, display)}–{e.strftime('%H:%M')}"
    return f"{format_timestamp(s, display)} – {format_timestamp(e, display)}"


def to_jsonable(value: Any) -> Any:
    """Modelle, Mengen und Dicts in JSON-taugliche Werte (camelCase-Felder)."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted(to_jsonable(v) for v in value)
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def dumps(value: Any, indent: int = 2) -> str:
    return json.dumps(to_jsonable(value), indent=indent, ensure_ascii=False)


def join_names(names: Iterable[str]) -> str:
    return ", ".join(names) or "—"
