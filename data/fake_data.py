"""Testdaten-Generator für den Vorlesungsplan.

Erzeugt ein reproduzierbares Semester (Seed) mit wöchentlichen Vorlesungsreihen
und einigen Abgabeterminen rund um ein Referenzdatum.

Absichtlich enthalten:
  1. Vorlesungen in mehreren Räumen gleichzeitig (Großveranstaltungen)
  2. Vorlesungen für mehrere Gruppen (gemeinsame Grundlagenfächer)
  3. Räume, die nur selten belegt sind (→ fast immer frei)
  4. Bereits abgelaufene Abgabetermine (→ nicht in der aktiven Liste)
"""

import random
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from models.deadline import Deadline
from models.lecture import Lecture

# ─── Zeitraster (Blöcke à 90 Minuten) ─────────────────────────────────────────

_TIME_BLOCKS: list[tuple[time, time]] = [
    (time(8, 0), time(9, 30)),
    (time(9, 45), time(11, 15)),
    (time(11, 30), time(13, 0)),
    (time(14, 0), time(15, 30)),
    (time(15, 45), time(17, 15)),
]

# ─── Vorlesungsreihen ─────────────────────────────────────────────────────────
# (Name, Kürzel, Gruppen, Räume)

_COURSES: list[tuple[str, str, list[str], list[str]]] = [
    ("Mathematik 1", "MA1", ["MKI1", "WIB1"], ["9-013", "9-014"]),
    ("Programmieren 1", "PR1", ["MKI1"], ["9-101"]),
    ("Grundlagen der Informatik", "GDI", ["MKI1", "WIB1"], ["9-013"]),
    ("Mathematik 2", "MA2", ["MKI2"], ["9-014"]),
    ("Datenbanken", "DBS", ["MKI3", "WIB3"], ["9-105"]),
    ("Rechnernetze", "RN", ["MKI3"], ["9-106"]),
    ("Betriebswirtschaft", "BWL", ["WIB1", "WIB3"], ["4-021", "4-022"]),
    ("Software Engineering", "SE", ["MKI4"], ["9-101"]),
    ("Mediengestaltung", "MG", ["MKI2", "MKI4"], ["17-105"]),
    ("Projektmanagement", "PM", ["WIB3"], ["4-021"]),
]

_DEADLINE_INFOS = [
    "Übungsblatt abgeben",
    "Projektbericht hochladen",
    "Laborprotokoll einreichen",
    "Präsentation vorbereiten",
    "Hausarbeit abgeben",
]


@dataclass
class DemoData:
    """Ergebnis des Generators."""

    lectures: list[Lecture]
    deadlines: list[Deadline]

    def summary(self) -> str:
        rooms = {r for l in self.lectures for r in l.rooms}
        groups = {g for l in self.lectures for g in l.groups}
        return "\n".join([
            f"Vorlesungstermine: {len(self.lectures)}",
            f"Räume: {len(rooms)}",
            f"Gruppen: {len(groups)}",
            f"Abgabetermine: {len(self.deadlines)}",
        ])


class FakeDataGenerator:
    """Generiert Vorlesungen und Abgabetermine für Demo und Tests."""

    def __init__(self, seed: Optional[int] = None, timezone: str = "Europe/Berlin") -> None:
        self.rng = random.Random(seed)
        self.tz = ZoneInfo(timezone)

    def _new_id(self) -> str:
        return f"{self.rng.getrandbits(128):032x}"

    def _monday_of(self, day: date) -> date:
        return day - timedelta(days=day.weekday())

    def generate(self, reference: date, weeks: int = 14,
                 num_deadlines: int = 8) -> DemoData:
        """Erzeugt `weeks` Wochen ab dem Montag der Woche von `reference`."""
        lectures = self.generate_lectures(self._monday_of(reference), weeks)
        deadlines = self.generate_deadlines(reference, num_deadlines)
        return DemoData(lectures=lectures, deadlines=deadlines)

    def generate_lectures(self, first_monday: date, weeks: int) -> list[Lecture]:
        # Jede Reihe bekommt einen festen Wochentag + Block
        used_slots: set[tuple[int, int]] = set()
        series: list[tuple[tuple[str, str, list[str], list[str]], int, int]] = []
        for course in _COURSES:
            while True:
                slot = (self.rng.randrange(5), self.rng.randrange(len(_TIME_BLOCKS)))
                if slot not in used_slots:
                    used_slots.add(slot)
                    break
            series.append((course, slot[0], slot[1]))

        lectures: list[Lecture] = []
        for week in range(weeks):
            monday = first_monday + timedelta(weeks=week)
            for (name, _short, groups, rooms), weekday, block in series:
                day = monday + timedelta(days=weekday)
                start, end = _TIME_BLOCKS[block]
                lectures.append(Lecture(
                    id=self._new_id(),
                    lecture_name=name,
                    start_time=datetime.combine(day, start, tzinfo=self.tz),
                    end_time=datetime.combine(day, end, tzinfo=self.tz),
                    rooms=list(rooms),
                    groups=list(groups),
                ))
        return lectures

    def generate_deadlines(self, reference: date, count: int) -> list[Deadline]:
        deadlines: list[Deadline] = []
        for _ in range(count):
            name, short, groups, _rooms = self.rng.choice(_COURSES)
            # Zwischen 10 Tagen vorher und 30 Tagen nachher
            offset = self.rng.randint(-10, 30)
            due = datetime.combine(reference + timedelta(days=offset), time(23, 59),
                                   tzinfo=self.tz)
            deadlines.append(Deadline(
                id=self._new_id(),
                info=f"{self.rng.choice(_DEADLINE_INFOS)} ({name})",
                deadline=due,
                short_lecture_name=short,
                group=self.rng.choice(groups),
                created_by=f"demo-{self.rng.randrange(1000):03d}",
            ))
        return deadlines
