"""In-Memory-Repositories (Tests, Demo-Daten, eingebettete Nutzung)."""

from datetime import datetime
from typing import Iterable, Optional

from models.deadline import Deadline
from models.lecture import Lecture
from models.timestamps import to_utc
from storage.base import (
    DeadlineRepository,
    LectureRepository,
    sort_deadlines,
    sort_lectures,
)


class InMemoryLectureRepository(LectureRepository):
    """Hält Vorlesungen in einem Dict (id → Lecture)."""

    def __init__(self, lectures: Iterable[Lecture] = ()) -> None:
        self._lectures: dict[str, Lecture] = {l.id: l for l in lectures}

    def add(self, lecture: Lecture) -> None:
        """Fügt eine Vorlesung hinzu oder ersetzt sie (nur für Import/Tests)."""
        self._lectures[lecture.id] = lecture

    def get(self, lecture_id: str) -> Optional[Lecture]:
        return self._lectures.get(lecture_id)

    def all(self) -> list[Lecture]:
        return sort_lectures(self._lectures.values())

    def ending_after(self, moment: datetime) -> list[Lecture]:
        moment = to_utc(moment)
        return sort_lectures(l for l in self._lectures.values() if l.end_time >= moment)

    def with_any_group(self, groups: Iterable[str]) -> list[Lecture]:
        wanted = set(groups)
        return sort_lectures(
            l for l in self._lectures.values() if wanted.intersection(l.groups)
        )

    def __len__(self) -> int:
        return len(self._lectures)

    def __repr__(self) -> str:
        return f"InMemoryLectureRepository({len(self._lectures)} lectures)"


class InMemoryDeadlineRepository(DeadlineRepository):
    """Hält Abgabetermine in einem Dict (id → Deadline)."""

    def __init__(self, deadlines: Iterable[Deadline] = ()) -> None:
        self._deadlines: dict[str, Deadline] = {d.id: d for d in deadlines}

    def get(self, deadline_id: str) -> Optional[Deadline]:
        return self._deadlines.get(deadline_id)

    def all(self) -> list[Deadline]:
        return sort_deadlines(self._deadlines.values())

    def due_since(self, cutoff: datetime) -> list[Deadline]:
        cutoff = to_utc(cutoff)
        return sort_deadlines(d for d in self._deadlines.values() if d.deadline >= cutoff)

    def save(self, deadline: Deadline) -> Deadline:
        self._deadlines[deadline.id] = deadline
        return deadline

    def delete(self, deadline_id: str) -> bool:
        return self._deadlines.pop(deadline_id, None) is not None

    def __len__(self) -> int:
        return len(self._deadlines)

    def __repr__(self) -> str:
        return f"InMemoryDeadlineRepository({len(self._deadlines)} deadlines)"
