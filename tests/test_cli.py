"""Tests für die Kommandozeile (click CliRunner, JSON-Ausgabe)."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from config.manager import ConfigManager
from config.schema import AppConfig, DisplayConfig
from engine.colors import color_of
from main import cli


@pytest.fixture
def run(tmp_path: Path):
    """Führt die CLI mit eigener Config (UTC) und eigenem Datenverzeichnis aus."""
    cfg_path = tmp_path / "app_config.yaml"
    ConfigManager(cfg_path).save(AppConfig(display=DisplayConfig(timezone="UTC")))
    runner = CliRunner()

    def _run(*args: str):
        return runner.invoke(cli, [
            "--config", str(cfg_path),
            "--data-dir", str(tmp_path / "store"),
            "--json",
            *args,
        ])
    return _run


def _json(result):
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestStatusAndConfig:
    def test_status(self, run):
        data = _json(run("status"))
        assert data["apiVersion"] == 0
        assert data["message"] == "welcome to the wuw api v0"

    def test_config_show(self, run, tmp_path: Path):
        data = _json(run("config", "show"))
        assert data["display"]["timezone"] == "UTC"
        assert data["storage"]["data_dir"] == str(tmp_path / "store")


class TestDeadlineCommands:
    def test_add_and_list(self, run):
        added = _json(run("deadlines", "add", "--deadline", "2024-01-10T12:00",
                          "--info", "Übungsblatt", "--group", "MKI1",
                          "--lecture", "MA1", "--created-by", "u1"))
        assert added["color"] == color_of("MKI1")
        assert added["shortLectureName"] == "MA1"
        assert added["createdBy"] == "u1"

        active = _json(run("deadlines", "list", "--at", "2024-01-11T00:00"))
        assert [d["id"] for d in active] == [added["id"]]

        expired = _json(run("deadlines", "list", "--at", "2024-01-12T00:00"))
        assert expired == []

    def test_add_missing_fields(self, run):
        """Fehlende Pflichtfelder → Exit-Code 1 und alle Felder im Fehler."""
        result = run("deadlines", "add", "--group", "MKI1")
        assert result.exit_code == 1
        error = json.loads(result.output)
        assert error["error"] == "validation"
        assert {f["field"] for f in error["fields"]} == {"deadline", "info"}

    def test_update_keeps_info(self, run):
        added = _json(run("deadlines", "add", "--deadline", "2024-01-10",
                          "--info", "Bericht", "--group", "MKI1"))
        updated = _json(run("deadlines", "update", added["id"],
                            "--deadline", "2024-01-20", "--group", "WIB3"))
        assert updated["info"] == "Bericht"
        assert updated["group"] == "WIB3"
        assert updated["deadline"].startswith("2024-01-20T00:00:00")

    def test_update_unknown(self, run):
        result = run("deadlines", "update", "fehlt", "--deadline", "2024-01-20")
        assert result.exit_code == 1
        assert json.loads(result.output)["error"] == "not_found"

    def test_delete_twice(self, run):
        added = _json(run("deadlines", "add", "--deadline", "2024-01-10", "--info", "x"))
        first = _json(run("deadlines", "delete", added["id"]))
        second = _json(run("deadlines", "delete", added["id"]))
        assert first == second == {
            "message": "Deadline successfully deleted", "id": added["id"],
        }

    def test_show_unknown(self, run):
        result = run("deadlines", "show", "gibt-es-nicht")
        assert result.exit_code == 1
        assert json.loads(result.output)["error"] == "not_found"

    def test_invalid_at(self, run):
        result = run("deadlines", "list", "--at", "gestern")
        assert result.exit_code == 2


class TestScheduleCommands:
    @pytest.fixture
    def generated(self, run):
        result = run("generate", "--seed", "1", "--weeks", "1", "--reference", "2024-04-10")
        assert result.exit_code == 0, result.output
        return run

    def test_generate_fills_store(self, generated):
        lectures = _json(generated("lectures"))
        assert len(lectures) == 10
        starts = [l["startTime"] for l in lectures]
        assert starts == sorted(starts)

    def test_free_rooms_on_weekend(self, generated):
        """Samstags läuft keine Vorlesung, alle Räume sind frei."""
        rooms = _json(generated("rooms"))
        free = _json(generated("rooms", "--free", "--at", "2024-04-13T12:00"))
        busy = _json(generated("rooms", "--busy", "--at", "2024-04-13T12:00"))
        assert free == rooms
        assert busy == []

    def test_free_and_busy_partition_rooms(self, generated):
        rooms = set(_json(generated("rooms")))
        free = set(_json(generated("rooms", "--free", "--at", "2024-04-10T09:00")))
        busy = set(_json(generated("rooms", "--busy", "--at", "2024-04-10T09:00")))
        assert free | busy == rooms
        assert not free & busy

    def test_lectures_for_group(self, generated):
        lectures = _json(generated("lectures", "-g", "MKI1"))
        assert lectures
        assert all("MKI1" in l["groups"] for l in lectures)

    def test_groups_with_lectures(self, generated):
        groups = _json(generated("groups"))
        mapping = _json(generated("groups", "--lectures"))
        assert list(mapping) == groups

    def test_lecture_unknown(self, generated):
        result = generated("lecture", "L404")
        assert result.exit_code == 1


class TestRepositoryErrors:
    def test_corrupt_store_exit_code(self, run, tmp_path: Path):
        store = tmp_path / "store"
        store.mkdir()
        (store / "lectures.json").write_text("[", encoding="utf-8")
        result = run("rooms")
        assert result.exit_code == 2
        assert '"error": "repository"' in result.output

    def test_invalid_encoding_exit_code(self, run, tmp_path: Path):
        store = tmp_path / "store"
        store.mkdir()
        (store / "lectures.json").write_bytes(b"\xff\xfe[]")
        result = run("rooms")
        assert result.exit_code == 2
        assert '"error": "repository"' in result.output
