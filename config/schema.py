from pydantic import BaseModel, Field, field_validator
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


# ─── SPEICHER ───

class StorageConfig(BaseModel):
    """Ablage der JSON-Dokumente."""
    # Verzeichnis für lectures.json und deadlines.json
    data_dir: str = Field("data/store",
        description="Datenverzeichnis für die JSON-Dokumente")
    # Dateiname der Vorlesungs-Sammlung
    lectures_file: str = Field("lectures.json",
        description="Dateiname der Vorlesungen")
    # Dateiname der Abgabetermin-Sammlung
    deadlines_file: str = Field("deadlines.json",
        description="Dateiname der Abgabetermine")


# ─── ABGABETERMINE ───

class DeadlineConfig(BaseModel):
    """Regeln für die Liste aktiver Abgabetermine."""
    # Wie viele Tage nach Fälligkeit ein Termin noch als aktiv gilt
    grace_days: int = Field(1, ge=0, le=30,
        description="Tage, die ein fälliger Termin aktiv bleibt")


# ─── ANZEIGE ───

class DisplayConfig(BaseModel):
    """Darstellung in der Kommandozeile."""
    # Zeitzone für die Ausgabe (Speicherung immer UTC)
    timezone: str = Field("Europe/Berlin",
        description="IANA-Zeitzone für die Ausgabe")
    # strftime-Format für Zeitstempel
    time_format: str = Field("%d.%m.%Y %H:%M",
        description="Format für Zeitstempel")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unbekannte Zeitzone: {v}") from e
        return v


# ─── GESAMT ───

class AppConfig(BaseModel):
    """Gesamtkonfiguration des Vorlesungsplan-Dienstes."""
    # Speicherort der Daten
    storage: StorageConfig = Field(default_factory=StorageConfig)
    # Aktiv-Regel für Abgabetermine
    deadlines: DeadlineConfig = Field(default_factory=DeadlineConfig)
    # Ausgabe-Einstellungen
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    # Log-Level für den Host
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field("WARNING",
        description="Log-Level")
