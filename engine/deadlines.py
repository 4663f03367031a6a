"""Abgabetermin-Service: Anlegen, Ändern, Löschen und aktive Liste.

Eingaben werden über Pydantic validiert. Pydantic sammelt alle fehlerhaften
Felder, daher enthält ein ValidationError immer die vollständige Liste und
nicht nur den ersten Fehler.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

import pydantic

from engine.colors import color_of
from engine.errors import NotFoundError, ValidationError
from engine.temporal import DEFAULT_GRACE, active_cutoff, active_deadlines
from models.deadline import Ack, Deadline, DeadlineInput, DeadlineUpdate, DeadlineView

if TYPE_CHECKING:
    from storage.base import DeadlineRepository

logger = logging.getLogger(__name__)

Payload = Union[Mapping[str, Any], DeadlineInput, DeadlineUpdate]


def _validate(model: type[pydantic.BaseModel], payload: Optional[Payload]):
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(dict(payload or {}))
    except pydantic.ValidationError as e:
        raise ValidationError.from_pydantic(e) from e


def to_view(deadline: Deadline) -> DeadlineView:
    """Ergänzt die abgeleitete Anzeigefarbe."""
    return DeadlineView(**deadline.model_dump(), color=color_of(deadline.group))


class DeadlineService:
    """Schreib- und Lesezugriff auf Abgabetermine über ein DeadlineRepository."""

    def __init__(self, deadlines: DeadlineRepository,
                 grace: timedelta = DEFAULT_GRACE) -> None:
        self._deadlines = deadlines
        self.grace = grace

    @staticmethod
    def color_of(group: Optional[str]) -> str:
        return color_of(group)

    def create(self, payload: Optional[Payload]) -> DeadlineView:
        """Validiert deadline + info und speichert mit neuer id."""
        data = _validate(DeadlineInput, payload)
        deadline = Deadline(
            id=uuid.uuid4().hex,
            info=data.info,
            deadline=data.deadline,
            short_lecture_name=data.short_lecture_name,
            group=data.group,
            created_by=data.created_by,
        )
        saved = self._deadlines.save(deadline)
        logger.info(f"Abgabetermin angelegt: {saved.id} ({saved.group or '-'})")
        return to_view(saved)

    def get(self, deadline_id: str) -> DeadlineView:
        deadline = self._deadlines.get(deadline_id)
        if deadline is None:
            raise NotFoundError("Deadline", deadline_id)
        return to_view(deadline)

    def update(self, deadline_id: str, payload: Optional[Payload]) -> DeadlineView:
        """Überschreibt deadline, short_lecture_name und group.

        Die Eingabe wird vor dem Lookup validiert; ein ungültiges Datum wird
        nie gespeichert. info und created_by bleiben unverändert.
        """
        data = _validate(DeadlineUpdate, payload)
        current = self._deadlines.get(deadline_id)
        if current is None:
            raise NotFoundError("Deadline", deadline_id)
        updated = current.model_copy(update={
            "deadline": data.deadline,
            "short_lecture_name": data.short_lecture_name,
            "group": data.group,
        })
        saved = self._deadlines.save(updated)
        logger.info(f"Abgabetermin geändert: {saved.id}")
        return to_view(saved)

    def delete(self, deadline_id: str) -> Ack:
        """Idempotent: eine unbekannte id gilt ebenfalls als gelöscht."""
        removed = self._deadlines.delete(deadline_id)
        if removed:
            logger.info(f"Abgabetermin gelöscht: {deadline_id}")
        else:
            logger.debug(f"Abgabetermin {deadline_id} war bereits entfernt")
        return Ack(message="Deadline successfully deleted", id=deadline_id)

    def list_active(self, now: datetime) -> list[DeadlineView]:
        """Aktive Abgabetermine (deadline >= now - grace), aufsteigend."""
        candidates = self._deadlines.due_since(active_cutoff(now, self.grace))
        return [to_view(d) for d in active_deadlines(candidates, now, self.grace)]
