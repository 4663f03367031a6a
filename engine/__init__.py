"""Abfrage- und Verfügbarkeits-Engine für Vorlesungen und Abgabetermine."""

from engine.errors import (
    FieldError,
    NotFoundError,
    RepositoryError,
    ScheduleError,
    ValidationError,
)
from engine.colors import color_of
from engine.availability import AvailabilityEngine
from engine.deadlines import DeadlineService
from engine.queries import API_VERSION, ScheduleQueries

__all__ = [
    "ScheduleError",
    "ValidationError",
    "NotFoundError",
    "RepositoryError",
    "FieldError",
    "color_of",
    "AvailabilityEngine",
    "DeadlineService",
    "ScheduleQueries",
    "API_VERSION",
]
