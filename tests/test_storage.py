"""Tests für den JSON-Datenspeicher und den Testdaten-Generator."""

import json
from datetime import date, datetime, timezone

import pytest

from data.fake_data import FakeDataGenerator
from engine.errors import RepositoryError
from engine.queries import ScheduleQueries
from models.deadline import Deadline
from models.lecture import Lecture
from storage import JsonStore


UTC = timezone.utc


def _lecture(lecture_id: str, hour: int, rooms: list[str], groups: list[str]) -> Lecture:
    return Lecture(
        id=lecture_id,
        lecture_name=f"Vorlesung {lecture_id}",
        start_time=datetime(2024, 1, 15, hour, tzinfo=UTC),
        end_time=datetime(2024, 1, 15, hour + 1, tzinfo=UTC),
        rooms=rooms,
        groups=groups,
    )


@pytest.fixture
def store(tmp_path):
    with JsonStore(tmp_path / "store") as s:
        yield s


# ─── JSON-STORE ───────────────────────────────────────────────────────────────

class TestJsonStore:
    def test_missing_files_are_empty(self, store):
        assert store.lectures.all() == []
        assert store.deadlines.all() == []

    def test_roundtrip_via_new_instance(self, tmp_path):
        """Gespeicherte Daten sind über eine neue Instanz wieder lesbar."""
        with JsonStore(tmp_path) as first:
            first.lectures.replace_all([_lecture("L1", 9, ["A"], ["MKI1"])])
            first.deadlines.save(Deadline(id="d1", info="Abgabe", deadline="2024-01-10"))

        with JsonStore(tmp_path) as second:
            assert [l.id for l in second.lectures.all()] == ["L1"]
            loaded = second.deadlines.get("d1")
            assert loaded.deadline == datetime(2024, 1, 10, tzinfo=UTC)

    def test_file_uses_camel_case(self, store):
        store.deadlines.save(Deadline(id="d1", info="Abgabe", deadline="2024-01-10",
                                      short_lecture_name="MA1", created_by="u1"))
        raw = json.loads((store.data_dir / "deadlines.json").read_text(encoding="utf-8"))
        assert raw[0]["shortLectureName"] == "MA1"
        assert raw[0]["createdBy"] == "u1"
        assert "color" not in raw[0]

    def test_save_replaces_existing(self, store):
        store.deadlines.save(Deadline(id="d1", info="alt", deadline="2024-01-10"))
        store.deadlines.save(Deadline(id="d1", info="neu", deadline="2024-01-12"))
        assert [d.info for d in store.deadlines.all()] == ["neu"]

    def test_delete(self, store):
        store.deadlines.save(Deadline(id="d1", info="x", deadline="2024-01-10"))
        assert store.deadlines.delete("d1") is True
        assert store.deadlines.delete("d1") is False
        assert store.deadlines.all() == []

    def test_range_queries(self, store):
        store.lectures.replace_all([
            _lecture("L2", 11, ["B"], ["WIB1"]),
            _lecture("L1", 9, ["A"], ["MKI1"]),
        ])
        assert [l.id for l in store.lectures.all()] == ["L1", "L2"]
        after = store.lectures.ending_after(datetime(2024, 1, 15, 10, 30, tzinfo=UTC))
        assert [l.id for l in after] == ["L2"]
        assert [l.id for l in store.lectures.with_any_group(["MKI1"])] == ["L1"]

    def test_external_changes_visible(self, store):
        """Jeder Zugriff liest die Datei neu."""
        store.lectures.replace_all([_lecture("L1", 9, ["A"], ["MKI1"])])
        path = store.data_dir / "lectures.json"
        raw = json.loads(path.read_text(encoding="utf-8"))
        raw[0]["rooms"] = ["Z"]
        path.write_text(json.dumps(raw), encoding="utf-8")
        assert store.lectures.get("L1").rooms == ["Z"]

    def test_closed_store_raises(self, tmp_path):
        closed = JsonStore(tmp_path)
        assert not closed.is_open
        with pytest.raises(RepositoryError):
            closed.lectures.all()

    def test_corrupt_file_raises(self, store):
        (store.data_dir / "lectures.json").write_text("{kein json", encoding="utf-8")
        with pytest.raises(RepositoryError) as exc_info:
            store.lectures.all()
        assert exc_info.value.kind == "repository"

    def test_invalid_encoding_raises(self, store):
        """Ungültiges UTF-8 in der Datei wird zum Speicherfehler."""
        (store.data_dir / "lectures.json").write_bytes(b"\xff\xfe[]")
        with pytest.raises(RepositoryError):
            store.lectures.all()

    def test_non_list_document_raises(self, store):
        (store.data_dir / "deadlines.json").write_text('{"id": "d1"}', encoding="utf-8")
        with pytest.raises(RepositoryError):
            store.deadlines.all()

    def test_invalid_document_raises(self, store):
        (store.data_dir / "lectures.json").write_text(
            '[{"id": "L1", "lectureName": "x"}]', encoding="utf-8"
        )
        with pytest.raises(RepositoryError):
            store.lectures.all()

    def test_repository_error_reaches_facade(self, store):
        """Speicherfehler werden unverändert durchgereicht."""
        (store.data_dir / "lectures.json").write_text("[", encoding="utf-8")
        queries = ScheduleQueries(store.lectures, store.deadlines)
        with pytest.raises(RepositoryError):
            queries.list_free_rooms(datetime(2024, 1, 15, 9, tzinfo=UTC))


# ─── TESTDATEN-GENERATOR ──────────────────────────────────────────────────────

class TestFakeData:
    def test_reproducible(self):
        a = FakeDataGenerator(seed=42).generate(date(2024, 4, 10), weeks=2)
        b = FakeDataGenerator(seed=42).generate(date(2024, 4, 10), weeks=2)
        assert [l.model_dump() for l in a.lectures] == [l.model_dump() for l in b.lectures]
        assert [d.model_dump() for d in a.deadlines] == [d.model_dump() for d in b.deadlines]

    def test_counts(self):
        demo = FakeDataGenerator(seed=1).generate(date(2024, 4, 10), weeks=3, num_deadlines=5)
        assert len(demo.lectures) == 30
        assert len(demo.deadlines) == 5
        assert "Vorlesungstermine: 30" in demo.summary()

    def test_lectures_valid(self):
        demo = FakeDataGenerator(seed=7).generate(date(2024, 4, 10), weeks=1)
        for lecture in demo.lectures:
            assert lecture.start_time <= lecture.end_time
            assert lecture.rooms and lecture.groups
            assert lecture.start_time.tzinfo is not None

    def test_starts_on_monday(self):
        demo = FakeDataGenerator(seed=3).generate(date(2024, 4, 10), weeks=1)
        days = {l.start_time.astimezone(UTC).date() for l in demo.lectures}
        assert min(days) >= date(2024, 4, 8)
        assert max(days) <= date(2024, 4, 12)

    def test_ids_unique(self):
        demo = FakeDataGenerator(seed=5).generate(date(2024, 4, 10), weeks=4)
        ids = [l.id for l in demo.lectures] + [d.id for d in demo.deadlines]
        assert len(ids) == len(set(ids))
