"""Raumverfügbarkeit: freie Räume = alle Räume − aktuell belegte Räume.

Belegung ergibt sich allein aus dem Vergehen der Zeit. Deshalb wird sie bei
jeder Abfrage aus dem aktuellen Vorlesungsbestand neu berechnet.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Iterable

from engine.aggregation import distinct_rooms
from engine.temporal import current_lectures
from models.lecture import Lecture

if TYPE_CHECKING:
    from storage.base import LectureRepository

logger = logging.getLogger(__name__)


def free_rooms_at(lectures: Iterable[Lecture], now: datetime) -> set[str]:
    """Reine Mengendifferenz über einer gegebenen Vorlesungsmenge."""
    lectures = list(lectures)
    all_rooms = distinct_rooms(lectures)
    busy = distinct_rooms(current_lectures(lectures, now))
    return all_rooms - busy


class AvailabilityEngine:
    """Berechnet freie und belegte Räume aus einem LectureRepository."""

    def __init__(self, lectures: LectureRepository) -> None:
        self._lectures = lectures

    def busy_rooms(self, now: datetime) -> set[str]:
        return distinct_rooms(current_lectures(self._lectures.all(), now))

    def free_rooms(self, now: datetime) -> set[str]:
        lectures = self._lectures.all()
        free = free_rooms_at(lectures, now)
        logger.debug(
            f"Freie Räume um {now.isoformat()}: {len(free)} von "
            f"{len(distinct_rooms(lectures))}"
        )
        return free
