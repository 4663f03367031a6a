"""ScheduleQueries: einziger Einstiegspunkt für Hosts (CLI, Web, Tests).

Zustandslos bis auf die beim Erzeugen übergebenen Repositories. Jede
zeitabhängige Abfrage bekommt "now" explizit übergeben. Ergebnisse sind
einfache Werte (Listen, Mengen, Modelle); Fehler werden als ScheduleError
geworfen (ValidationError, NotFoundError, RepositoryError).
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Iterable, Optional

from engine.aggregation import distinct_groups, distinct_rooms, lectures_by_group
from engine.availability import AvailabilityEngine
from engine.deadlines import DeadlineService, Payload
from engine.errors import NotFoundError, ValidationError
from engine.temporal import DEFAULT_GRACE, upcoming_lectures
from models.deadline import Ack, DeadlineView
from models.lecture import Lecture

if TYPE_CHECKING:
    from storage.base import DeadlineRepository, LectureRepository

logger = logging.getLogger(__name__)

API_VERSION = 0


def _by_start(lectures: Iterable[Lecture]) -> list[Lecture]:
    return sorted(lectures, key=lambda l: (l.start_time, l.id))


class ScheduleQueries:
    """Fassade über Zeitfilter, Aggregation, Verfügbarkeit und Abgabetermine."""

    def __init__(self, lectures: LectureRepository, deadlines: DeadlineRepository,
                 grace: timedelta = DEFAULT_GRACE) -> None:
        self._lectures = lectures
        self._availability = AvailabilityEngine(lectures)
        self._deadline_service = DeadlineService(deadlines, grace=grace)

    # ─── Status ───

    def status(self) -> dict:
        return {"message": f"welcome to the wuw api v{API_VERSION}", "apiVersion": API_VERSION}

    # ─── Vorlesungen ───

    def list_lectures(self) -> list[Lecture]:
        return _by_start(self._lectures.all())

    def get_lecture(self, lecture_id: str) -> Lecture:
        lecture = self._lectures.get(lecture_id)
        if lecture is None:
            raise NotFoundError("Lecture", lecture_id)
        return lecture

    def list_upcoming_lectures(self, now: datetime) -> list[Lecture]:
        """Vorlesungen mit end_time >= now, nach Beginn sortiert."""
        return upcoming_lectures(self._lectures.ending_after(now), now)

    def lectures_for_groups(self, groups: Optional[Iterable[str]]) -> list[Lecture]:
        """Vorlesungen, die mindestens eine der Gruppen bedienen.

        Ein einzelner String gilt als eine Gruppe. None oder eine leere
        Auswahl ist ein Eingabefehler, kein leeres Ergebnis.
        """
        if isinstance(groups, str):
            groups = [groups]
        wanted = [g for g in (groups or []) if g]
        if not wanted:
            raise ValidationError.for_field(
                "groups", "Mindestens eine Gruppe angeben"
            )
        return _by_start(self._lectures.with_any_group(wanted))

    # ─── Räume & Gruppen ───

    def list_rooms(self) -> list[str]:
        return sorted(distinct_rooms(self._lectures.all()))

    def list_free_rooms(self, now: datetime) -> list[str]:
        return sorted(self._availability.free_rooms(now))

    def list_busy_rooms(self, now: datetime) -> list[str]:
        return sorted(self._availability.busy_rooms(now))

    def list_groups(self) -> list[str]:
        return sorted(distinct_groups(self._lectures.all()))

    def group_lectures(self) -> dict[str, list[str]]:
        """Gruppe → sortierte Vorlesungsnamen, Gruppen aufsteigend."""
        return {
            group: sorted(names)
            for group, names in lectures_by_group(self._lectures.all()).items()
        }

    # ─── Abgabetermine ───

    def list_active_deadlines(self, now: datetime) -> list[DeadlineView]:
        return self._deadline_service.list_active(now)

    def get_deadline(self, deadline_id: str) -> DeadlineView:
        return self._deadline_service.get(deadline_id)

    def create_deadline(self, payload: Optional[Payload]) -> DeadlineView:
        return self._deadline_service.create(payload)

    def update_deadline(self, deadline_id: str, payload: Optional[Payload]) -> DeadlineView:
        return self._deadline_service.update(deadline_id, payload)

    def delete_deadline(self, deadline_id: str) -> Ack:
        return self._deadline_service.delete(deadline_id)
