"""Datenmodell für eine Vorlesung (Pydantic v2)."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

from models.timestamps import parse_timestamp


class Lecture(BaseModel):
    """Ein Vorlesungstermin mit Zeitfenster, Räumen und Studiengruppen.

    Vorlesungen werden von einem externen Import geschrieben und sind aus
    Sicht der Abfrage-Engine unveränderlich (frozen=True).
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str
    lecture_name: str            # "Mathematik 1"
    start_time: datetime
    end_time: datetime
    rooms: list[str] = []        # ["9-013", "9-014"]
    groups: list[str] = []       # ["MKI1", "WIB1"]

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _parse_time(cls, v):
        return parse_timestamp(v)

    @field_validator("rooms", "groups")
    @classmethod
    def _dedupe(cls, v: list[str]) -> list[str]:
        # Mengen-Semantik, Reihenfolge des ersten Auftretens bleibt erhalten
        return list(dict.fromkeys(v))

    @model_validator(mode="after")
    def _check_window(self):
        if self.start_time > self.end_time:
            raise ValueError(
                f"Vorlesung {self.id}: startTime ({self.start_time.isoformat()}) "
                f"liegt nach endTime ({self.end_time.isoformat()})"
            )
        return self
