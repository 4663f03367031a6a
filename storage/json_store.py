"""Dateibasierter Datenspeicher: Vorlesungen und Abgabetermine als JSON-Dokumente.

Jede Sammlung liegt in einer eigenen Datei (Liste von Dokumenten mit
camelCase-Feldnamen). Jeder Zugriff liest die Datei neu ein, damit Abfragen
immer den aktuellen Stand sehen. Lebenszyklus (open/close) steuert der Host.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

import pydantic
from pydantic import BaseModel

from engine.errors import RepositoryError
from models.deadline import Deadline
from models.lecture import Lecture
from models.timestamps import to_utc
from storage.base import (
    DeadlineRepository,
    LectureRepository,
    sort_deadlines,
    sort_lectures,
)

logger = logging.getLogger(__name__)


class _JsonCollection:
    """Eine JSON-Datei mit einer Liste gleichartiger Dokumente."""

    def __init__(self, store: "JsonStore", path: Path, model: type[BaseModel]) -> None:
        self._store = store
        self.path = path
        self._model = model

    def load(self) -> list:
        self._store.ensure_open()
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error(f"Lesen fehlgeschlagen: {self.path}: {e}")
            raise RepositoryError(f"Datei nicht lesbar: {self.path}", e) from e
        if not isinstance(raw, list):
            raise RepositoryError(f"Datei enthält keine Dokumentliste: {self.path}")
        try:
            docs = [self._model.model_validate(item) for item in raw]
        except pydantic.ValidationError as e:
            logger.error(f"Ungültiges Dokument in {self.path}: {e}")
            raise RepositoryError(f"Ungültiges Dokument in {self.path}", e) from e
        logger.debug(f"{len(docs)} Dokumente geladen: {self.path}")
        return docs

    def write(self, docs: Iterable[BaseModel]) -> None:
        self._store.ensure_open()
        payload = [d.model_dump(mode="json", by_alias=True) for d in docs]
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            tmp.replace(self.path)
        except OSError as e:
            logger.error(f"Schreiben fehlgeschlagen: {self.path}: {e}")
            raise RepositoryError(f"Datei nicht schreibbar: {self.path}", e) from e
        logger.debug(f"{len(payload)} Dokumente gespeichert: {self.path}")


class JsonLectureRepository(LectureRepository):
    """Vorlesungen aus einer JSON-Datei."""

    def __init__(self, collection: _JsonCollection) -> None:
        self._collection = collection

    def get(self, lecture_id: str) -> Optional[Lecture]:
        return next((l for l in self._collection.load() if l.id == lecture_id), None)

    def all(self) -> list[Lecture]:
        return sort_lectures(self._collection.load())

    def ending_after(self, moment: datetime) -> list[Lecture]:
        moment = to_utc(moment)
        return sort_lectures(l for l in self._collection.load() if l.end_time >= moment)

    def with_any_group(self, groups: Iterable[str]) -> list[Lecture]:
        wanted = set(groups)
        return sort_lectures(
            l for l in self._collection.load() if wanted.intersection(l.groups)
        )

    def replace_all(self, lectures: Iterable[Lecture]) -> int:
        """Ersetzt den kompletten Vorlesungsbestand (Import-Feed)."""
        docs = sort_lectures(lectures)
        self._collection.write(docs)
        return len(docs)


class JsonDeadlineRepository(DeadlineRepository):
    """Abgabetermine in einer JSON-Datei (Lesen-Ändern-Schreiben je Operation)."""

    def __init__(self, collection: _JsonCollection) -> None:
        self._collection = collection

    def get(self, deadline_id: str) -> Optional[Deadline]:
        return next((d for d in self._collection.load() if d.id == deadline_id), None)

    def all(self) -> list[Deadline]:
        return sort_deadlines(self._collection.load())

    def due_since(self, cutoff: datetime) -> list[Deadline]:
        cutoff = to_utc(cutoff)
        return sort_deadlines(d for d in self._collection.load() if d.deadline >= cutoff)

    def save(self, deadline: Deadline) -> Deadline:
        docs = [d for d in self._collection.load() if d.id != deadline.id]
        docs.append(deadline)
        self._collection.write(sort_deadlines(docs))
        return deadline

    def delete(self, deadline_id: str) -> bool:
        docs = self._collection.load()
        remaining = [d for d in docs if d.id != deadline_id]
        if len(remaining) == len(docs):
            return False
        self._collection.write(remaining)
        return True


class JsonStore:
    """Bündelt beide Repositories über einem Datenverzeichnis.

    Verwendung:
        with JsonStore(Path("data/store")) as store:
            queries = ScheduleQueries(store.lectures, store.deadlines)
    """

    def __init__(self, data_dir: Path, lectures_file: str = "lectures.json",
                 deadlines_file: str = "deadlines.json") -> None:
        self.data_dir = Path(data_dir)
        self._is_open = False
        self.lectures = JsonLectureRepository(
            _JsonCollection(self, self.data_dir / lectures_file, Lecture)
        )
        self.deadlines = JsonDeadlineRepository(
            _JsonCollection(self, self.data_dir / deadlines_file, Deadline)
        )

    @property
    def is_open(self) -> bool:
        return self._is_open

    def open(self) -> "JsonStore":
        """Legt das Datenverzeichnis an und gibt den Speicher frei."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise RepositoryError(f"Datenverzeichnis nicht anlegbar: {self.data_dir}", e) from e
        self._is_open = True
        logger.debug(f"JsonStore geöffnet: {self.data_dir}")
        return self

    def close(self) -> None:
        self._is_open = False
        logger.debug(f"JsonStore geschlossen: {self.data_dir}")

    def ensure_open(self) -> None:
        if not self._is_open:
            raise RepositoryError(f"JsonStore ist nicht geöffnet: {self.data_dir}")

    def __enter__(self) -> "JsonStore":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "open" if self._is_open else "closed"
        return f"JsonStore({self.data_dir}, {state})"
