"""
test_journal_export.py
----------------------
Unit tests for ExportManager JSON, CSV and text exports.
"""
import csv
import json
from datetime import datetime

import pytest

from almanac.core.exceptions import ExportError
from almanac.database import ExportManager
from almanac.database.export_manager import CSV_FIELDS
from almanac.dataclasses import (
    Category,
    EmotionPayload,
    EmotionType,
    Entry,
    MatchPayload,
    VictoryPayload,
    WordPayload,
)


@pytest.fixture
def exporter(mock_logger):
    return ExportManager(mock_logger)


@pytest.fixture
def entries():
    return [
        Entry(
            payload=VictoryPayload("Ran 5k"),
            date=datetime(2024, 1, 9, 7, 0),
            category="Health",
            note="Felt strong",
            id="v1",
        ),
        Entry(
            payload=EmotionPayload(EmotionType.JOY, "Sunshine"),
            date=datetime(2024, 1, 10, 8, 0),
            id="e1",
        ),
        Entry(
            payload=WordPayload("petrichor", "Smell of rain"),
            date=datetime(2024, 1, 5, 12, 0),
            id="w1",
        ),
        Entry(
            payload=MatchPayload("Lions", "Tigers", 1, 1, mvp="Rivera"),
            date=datetime(2024, 1, 6, 20, 0),
            id="m1",
        ),
    ]


class TestExportToJson:
    """Test ExportManager.export_to_json() method."""

    def test_document(self, exporter, entries, tmp_dir):
        archived = Entry(payload=VictoryPayload("Old"), date=datetime(2023, 1, 1), id="a1")
        output = tmp_dir / "out" / "journal.json"

        stats = exporter.export_to_json(
            entries, output, categories=[Category("Health", 0, "c1")], archive=[archived]
        )

        assert stats["total_entries"] == 4
        assert stats["format"] == "json"
        assert stats["output_path"] == str(output)

        document = json.loads(output.read_text(encoding="utf-8"))
        assert [e["id"] for e in document["entries"]] == ["v1", "e1", "w1", "m1"]
        assert document["archive"][0]["id"] == "a1"
        assert document["categories"] == [{"id": "c1", "name": "Health", "color_index": 0}]
        assert Entry.from_dict(document["entries"][1]) == entries[1]

    def test_logs_completion(self, exporter, mock_logger, entries, tmp_dir):
        exporter.export_to_json(entries, tmp_dir / "journal.json")
        assert mock_logger.log_operation.call_args[0][0] == "export_json_completed"


class TestExportToCsv:
    """Test ExportManager.export_to_csv() method."""

    def test_rows(self, exporter, entries, tmp_dir):
        output = tmp_dir / "journal.csv"
        exporter.export_to_csv(entries, output)

        with open(output, newline="", encoding="utf-8") as handle:
            reader = csv.DictReader(handle)
            rows = list(reader)

        assert reader.fieldnames == CSV_FIELDS
        assert len(rows) == 4
        assert rows[0]["title"] == "Ran 5k"
        assert rows[0]["category"] == "Health"
        assert rows[1]["emotion"] == "joy"
        assert rows[1]["reason"] == "Sunshine"
        assert rows[2]["definition"] == "Smell of rain"
        assert rows[3]["home_score"] == "1"
        assert rows[3]["mvp"] == "Rivera"
        assert rows[0]["mvp"] == ""
        assert rows[3]["word"] == ""


class TestExportToText:
    """Test ExportManager.export_to_text() and render_text()."""

    def test_render_newest_first(self, entries):
        text = ExportManager.render_text(entries, generated=datetime(2024, 1, 11))
        lines = text.splitlines()

        assert lines[0] == "Almanac Journal Export"
        assert lines[1] == "Generated on: Jan 11, 2024"
        assert lines[3] == "Date: Jan 10, 2024 08:00"
        assert lines[4] == "Emotion: joy"
        assert lines[5] == "Reason: Sunshine"
        assert "Winner: Draw" in lines
        assert "MVP: Rivera" in lines
        assert "Definition: Smell of rain" in lines
        assert "Category: Health" in lines
        assert "Note: Felt strong" in lines

    def test_export_writes_file(self, exporter, entries, tmp_dir):
        output = tmp_dir / "journal.txt"
        stats = exporter.export_to_text(entries, output, title="My Wins")

        assert stats["format"] == "text"
        assert output.read_text(encoding="utf-8").startswith("My Wins\n")


class TestExportErrors:
    """Test export failure handling."""

    def test_unwritable_target(self, exporter, entries, tmp_dir):
        blocker = tmp_dir / "file"
        blocker.write_text("not a directory")

        with pytest.raises(ExportError, match="JSON"):
            exporter.export_to_json(entries, blocker / "journal.json")

