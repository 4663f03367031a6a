"""Mengen-Aggregation über den Vorlesungsbestand.

Entspricht einem "unwind + group + addToSet" einer Dokumentdatenbank, hier als
expliziter Fold im Prozess. Leere Eingabe ergibt leere Ergebnisse.
"""

from collections import defaultdict
from typing import Iterable

from models.lecture import Lecture


def distinct_rooms(lectures: Iterable[Lecture]) -> set[str]:
    """Vereinigung aller Räume."""
    return {room for lecture in lectures for room in lecture.rooms}


def distinct_groups(lectures: Iterable[Lecture]) -> set[str]:
    """Vereinigung aller Studiengruppen."""
    return {group for lecture in lectures for group in lecture.groups}


def lectures_by_group(lectures: Iterable[Lecture]) -> dict[str, set[str]]:
    """Gruppe → Menge der Vorlesungsnamen, Schlüssel aufsteigend sortiert."""
    by_group: dict[str, set[str]] = defaultdict(set)
    for lecture in lectures:
        for group in lecture.groups:
            by_group[group].add(lecture.lecture_name)
    return {group: by_group[group] for group in sorted(by_group)}
