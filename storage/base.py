"""Abstrakte Repository-Schnittstellen.

Die Engine kennt nur diese Verträge. Wie ein Repository speichert (Speicher,
JSON-Datei, Dokumentdatenbank), bleibt ihr verborgen. Lesezugriffe liefern
immer eine frische Momentaufnahme, es gibt keinen Cache.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, Optional

from models.deadline import Deadline
from models.lecture import Lecture


class LectureRepository(ABC):
    """Lesender Zugriff auf Vorlesungen. Ergebnisse nach start_time aufsteigend."""

    @abstractmethod
    def get(self, lecture_id: str) -> Optional[Lecture]:
        """Punkt-Lookup per id. None wenn unbekannt."""

    @abstractmethod
    def all(self) -> list[Lecture]:
        """Alle Vorlesungen."""

    @abstractmethod
    def ending_after(self, moment: datetime) -> list[Lecture]:
        """Bereichsabfrage: alle Vorlesungen mit end_time >= moment."""

    @abstractmethod
    def with_any_group(self, groups: Iterable[str]) -> list[Lecture]:
        """Mengenabfrage: Vorlesungen, deren groups die Eingabe schneiden."""


class DeadlineRepository(ABC):
    """Lese- und Schreibzugriff auf Abgabetermine. Ergebnisse nach deadline aufsteigend."""

    @abstractmethod
    def get(self, deadline_id: str) -> Optional[Deadline]:
        """Punkt-Lookup per id. None wenn unbekannt."""

    @abstractmethod
    def all(self) -> list[Deadline]:
        """Alle gespeicherten Abgabetermine (auch abgelaufene)."""

    @abstractmethod
    def due_since(self, cutoff: datetime) -> list[Deadline]:
        """Bereichsabfrage: alle Abgabetermine mit deadline >= cutoff."""

    @abstractmethod
    def save(self, deadline: Deadline) -> Deadline:
        """Legt an oder überschreibt (last write wins)."""

    @abstractmethod
    def delete(self, deadline_id: str) -> bool:
        """Entfernt per id. True wenn ein Datensatz entfernt wurde."""


def sort_lectures(lectures: Iterable[Lecture]) -> list[Lecture]:
    """Stabile Sortierung nach Beginn (bei Gleichstand nach id)."""
    return sorted(lectures, key=lambda l: (l.start_time, l.id))


def sort_deadlines(deadlines: Iterable[Deadline]) -> list[Deadline]:
    """Stabile Sortierung nach Abgabetermin (bei Gleichstand nach id)."""
    return sorted(deadlines, key=lambda d: (d.deadline, d.id))
