"""Fehler-Taxonomie der Abfrage-Engine.

Jeder Fehlerpfad endet in genau einer von drei Arten:
  ValidationError  – fehlende/ungültige Pflichtfelder (alle Felder gesammelt)
  NotFoundError    – Lookup per id ohne Treffer
  RepositoryError  – Datenspeicher nicht erreichbar oder lehnt ab
"""

from typing import Optional

import pydantic
from pydantic import BaseModel


class FieldError(BaseModel):
    """Ein einzelnes fehlerhaftes Eingabefeld."""

    field: str
    message: str


class ScheduleError(Exception):
    """Basisklasse aller Engine-Fehler."""

    kind = "error"

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": str(self)}


class ValidationError(ScheduleError):
    """Eingabe ungültig. Enthält einen Eintrag pro fehlerhaftem Feld."""

    kind = "validation"

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = list(errors)
        details = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"Validierungsfehler: {details}")

    @property
    def fields(self) -> list[str]:
        """Namen der fehlerhaften Felder in Meldungsreihenfolge (ohne Duplikate)."""
        return list(dict.fromkeys(e.field for e in self.errors))

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls([FieldError(field=field, message=message)])

    @classmethod
    def from_pydantic(cls, exc: pydantic.ValidationError) -> "ValidationError":
        """Übersetzt einen Pydantic-Fehler (der bereits alle Felder sammelt)."""
        errors = []
        for err in exc.errors():
            field = ".".join(str(part) for part in err["loc"]) or "__root__"
            if err["type"] == "missing":
                message = "Pflichtfeld fehlt"
            else:
                # ValueError aus eigenen Validatoren ohne "Value error, "-Präfix
                message = str(err.get("ctx", {}).get("error", err["msg"]))
            errors.append(FieldError(field=field, message=message))
        return cls(errors)

    def to_dict(self) -> dict:
        return {
            "error": self.kind,
            "message": str(self),
            "fields": [e.model_dump() for e in self.errors],
        }


class NotFoundError(ScheduleError):
    """Kein Datensatz mit dieser id."""

    kind = "not_found"

    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} '{entity_id}' nicht gefunden")


class RepositoryError(ScheduleError):
    """Fehler des Datenspeichers. Wird durchgereicht, nicht wiederholt."""

    kind = "repository"

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        super().__init__(message)
