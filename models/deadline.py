"""Datenmodelle für Abgabetermine (Pydantic v2).

Deadline       – gespeicherter Datensatz
DeadlineView   – Antwort-Form inkl. abgeleiteter Anzeigefarbe
DeadlineInput  – Eingabe beim Anlegen
DeadlineUpdate – Eingabe beim Ändern (nur deadline, shortLectureName, group)
"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from models.timestamps import parse_timestamp

_MODEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


def _require_text(v, label: str) -> str:
    if v is None or not str(v).strip():
        raise ValueError(f"{label} darf nicht leer sein")
    return str(v).strip()


class Deadline(BaseModel):
    """Ein gespeicherter Abgabetermin."""

    model_config = _MODEL_CONFIG

    id: str
    info: str                                  # Beschreibung, Pflichtfeld
    deadline: datetime                         # Abgabetermin
    short_lecture_name: Optional[str] = None   # Querverweis, kein Fremdschlüssel
    group: Optional[str] = None                # Studiengruppe, bestimmt die Farbe
    created_by: Optional[str] = None           # Ersteller, nach Anlage unveränderlich

    @field_validator("deadline", mode="before")
    @classmethod
    def _parse_deadline(cls, v):
        return parse_timestamp(v)


class DeadlineView(Deadline):
    """Abgabetermin wie er an Aufrufer zurückgegeben wird (mit Farbe)."""

    color: str  # "#rrggbb", abgeleitet aus group, nie gespeichert


class DeadlineInput(BaseModel):
    """Eingabe für das Anlegen eines Abgabetermins."""

    model_config = _MODEL_CONFIG

    deadline: datetime
    info: str
    short_lecture_name: Optional[str] = None
    group: Optional[str] = None
    # "uuid" ist der historische Feldname des Erstellers
    created_by: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("createdBy", "created_by", "uuid"),
    )

    @field_validator("deadline", mode="before")
    @classmethod
    def _parse_deadline(cls, v):
        return parse_timestamp(v)

    @field_validator("info", mode="before")
    @classmethod
    def _info_not_empty(cls, v):
        return _require_text(v, "info")


class DeadlineUpdate(BaseModel):
    """Eingabe für das Ändern eines Abgabetermins.

    info und createdBy werden ignoriert, auch wenn sie im Payload
    stehen (extra="ignore").
    """

    model_config = _MODEL_CONFIG

    deadline: datetime
    short_lecture_name: Optional[str] = None
    group: Optional[str] = None

    @field_validator("deadline", mode="before")
    @classmethod
    def _parse_deadline(cls, v):
        return parse_timestamp(v)


class Ack(BaseModel):
    """Bestätigung für Schreiboperationen ohne Rückgabedatensatz."""

    message: str
    id: str
