"""Zeitstempel-Normalisierung für Vorlesungen und Abgabetermine."""

from datetime import date, datetime, time, timezone
from typing import Optional, Union


def to_utc(value: datetime) -> datetime:
    """Macht einen Zeitstempel zeitzonenbewusst (UTC).

    Naive Zeitstempel werden als UTC interpretiert, bewusste umgerechnet.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: Optional[Union[str, date, datetime]]) -> datetime:
    """Parst ISO-8601-Strings, ``date`` und ``datetime`` zu einem UTC-Zeitstempel.

    Ein reines Datum ("2024-01-10") wird zu Mitternacht des Tages.
    Wirft ValueError bei leeren oder ungültigen Eingaben.
    """
    if value is None:
        raise ValueError("Datum darf nicht leer sein")
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if not isinstance(value, str):
        raise ValueError(f"Kein gültiges Datum: {value!r}")
    text = value.strip()
    if not text:
        raise ValueError("Datum darf nicht leer sein")
    try:
        return to_utc(datetime.fromisoformat(text))
    except ValueError as e:
        raise ValueError(f"Kein gültiges Datum: {value!r}") from e
