"""Repositories für Vorlesungen und Abgabetermine (In-Memory und JSON-Dateien)."""

from storage.base import DeadlineRepository, LectureRepository
from storage.memory import InMemoryDeadlineRepository, InMemoryLectureRepository
from storage.json_store import JsonStore

__all__ = [
    "LectureRepository",
    "DeadlineRepository",
    "InMemoryLectureRepository",
    "InMemoryDeadlineRepository",
    "JsonStore",
]
