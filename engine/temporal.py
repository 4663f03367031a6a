"""Zeitfilter: klassifiziert Vorlesungen und Abgabetermine relativ zu "jetzt".

Reine Funktionen ohne Seiteneffekte. Alle Listen-Helfer sortieren aufsteigend
nach dem jeweils relevanten Zeitstempel.
"""

from datetime import datetime, timedelta
from typing import Iterable

from models.deadline import Deadline
from models.lecture import Lecture
from models.timestamps import to_utc

# Abgabetermine bleiben bis einen Tag nach Fälligkeit sichtbar
DEFAULT_GRACE = timedelta(days=1)


def active_cutoff(now: datetime, grace: timedelta = DEFAULT_GRACE) -> datetime:
    """Frühester Abgabetermin, der zum Zeitpunkt now noch aktiv ist."""
    return to_utc(now) - grace


def is_active(deadline: Deadline, now: datetime, grace: timedelta = DEFAULT_GRACE) -> bool:
    """deadline >= now - grace (Grenze inklusive)."""
    return deadline.deadline >= active_cutoff(now, grace)


def is_upcoming(lecture: Lecture, now: datetime) -> bool:
    """Vorlesung ist noch nicht vorbei (end_time >= now)."""
    return lecture.end_time >= to_utc(now)


def is_current(lecture: Lecture, now: datetime) -> bool:
    """now liegt im Zeitfenster der Vorlesung (beide Grenzen inklusive)."""
    now = to_utc(now)
    return lecture.start_time <= now <= lecture.end_time


def is_past(lecture: Lecture, now: datetime) -> bool:
    return not is_upcoming(lecture, now)


def current_lectures(lectures: Iterable[Lecture], now: datetime) -> list[Lecture]:
    return sorted((l for l in lectures if is_current(l, now)), key=lambda l: l.start_time)


def upcoming_lectures(lectures: Iterable[Lecture], now: datetime) -> list[Lecture]:
    return sorted((l for l in lectures if is_upcoming(l, now)), key=lambda l: l.start_time)


def active_deadlines(
    deadlines: Iterable[Deadline], now: datetime, grace: timedelta = DEFAULT_GRACE
) -> list[Deadline]:
    return sorted(
        (d for d in deadlines if is_active(d, now, grace)), key=lambda d: d.deadline
    )
