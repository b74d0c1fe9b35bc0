#!/usr/bin/env python3
"""
export_manager.py
-----------------
Data export for the Almanac journal.

Export Formats:
    1. **JSON**: Full journal document (entries, archive, categories)
       - Same record layout the YAML backend stores
       - Suitable for programmatic processing and re-import
    2. **CSV**: One row per entry, payload fields flattened into columns
       - Suitable for spreadsheet analysis
    3. **Text**: Human-readable listing, newest first
       - One block per entry: date, kind line, details, category, note

Every export writes to a temporary file next to the target and moves it into
place, so an interrupted export never leaves a truncated file behind.

Export Statistics:
    All export methods return a dictionary with:
    {
        "total_entries": 42,
        "duration": 0.01,  # seconds
        "output_path": "/path/to/export.json",
        "format": "json" | "csv" | "text"
    }

Usage:
    exporter = ExportManager(logger=logger)
    stats = exporter.export_to_csv(store.entries.get_all(), Path("wins.csv"))
"""
import csv
import json
import os
import tempfile
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, TextIO, Union

from almanac.core.exceptions import ExportError
from almanac.core.logging_manager import AlmanacLogger
from almanac.dataclasses import (
    Category,
    EmotionPayload,
    Entry,
    MatchPayload,
    WordPayload,
)

from .decorators import log_store_operation

CSV_FIELDS = [
    "id",
    "date",
    "kind",
    "title",
    "category",
    "note",
    "emotion",
    "reason",
    "word",
    "definition",
    "home_team",
    "away_team",
    "home_score",
    "away_score",
    "mvp",
]


class ExportManager:
    """
    Handles export of journal entries to disk.

    Attributes:
        logger: Optional logger for export operations
    """

    def __init__(self, logger: Optional[AlmanacLogger] = None) -> None:
        self.logger = logger

    # ---- Helpers ----
    @contextmanager
    def _atomic_writer(self, output_path: Path, newline: Optional[str] = None) -> Iterator[TextIO]:
        """Open a temp file beside `output_path` and move it into place on success."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=output_path.parent, prefix=f".{output_path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline=newline) as handle:
                yield handle
            os.replace(tmp_name, output_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _run_export(
        self, fmt: str, output_path: Union[str, Path], entries: Sequence[Entry], write
    ) -> Dict[str, Any]:
        start_time = datetime.now()
        output_path = Path(output_path)
        try:
            with self._atomic_writer(output_path, newline="" if fmt == "csv" else None) as handle:
                write(handle)
        except (OSError, TypeError, ValueError, csv.Error) as e:
            raise ExportError(f"Failed to export entries to {fmt.upper()}: {e}")

        return {
            "total_entries": len(entries),
            "duration": (datetime.now() - start_time).total_seconds(),
            "output_path": str(output_path),
            "format": fmt,
        }

    @staticmethod
    def entry_to_row(entry: Entry) -> Dict[str, Any]:
        """Flatten an entry into a CSV row keyed by CSV_FIELDS."""
        row: Dict[str, Any] = {name: "" for name in CSV_FIELDS}
        row.update(
            id=entry.id,
            date=entry.date.isoformat(),
            kind=entry.kind.value,
            title=entry.title,
            category=entry.category or "",
            note=entry.note or "",
        )
        for key, value in entry.payload.to_dict().items():
            if key in row:
                row[key] = value
        return row

    # ---- Exports ----
    @log_store_operation("export_json")
    def export_to_json(
        self,
        entries: Sequence[Entry],
        output_file: Union[str, Path],
        categories: Sequence[Category] = (),
        archive: Sequence[Entry] = (),
    ) -> Dict[str, Any]:
        """
        Export the journal to a JSON document.

        Args:
            entries: Active entries
            output_file: Target file
            categories: Registry categories to include
            archive: Archived entries to include

        Returns:
            Export statistics dictionary

        Raises:
            ExportError: If the file cannot be written
        """
        document = {
            "exported_at": datetime.now().isoformat(timespec="seconds"),
            "entries": [entry.to_dict() for entry in entries],
            "archive": [entry.to_dict() for entry in archive],
            "categories": [category.to_dict() for category in categories],
        }

        def write(handle: TextIO) -> None:
            json.dump(document, handle, indent=2, ensure_ascii=False)

        return self._run_export("json", output_file, entries, write)

    @log_store_operation("export_csv")
    def export_to_csv(
        self, entries: Sequence[Entry], output_file: Union[str, Path]
    ) -> Dict[str, Any]:
        """
        Export entries to a CSV file, one row per entry.

        Raises:
            ExportError: If the file cannot be written
        """

        def write(handle: TextIO) -> None:
            writer = csv.DictWriter(handle, fieldnames=CSV_FIELDS)
            writer.writeheader()
            for entry in entries:
                writer.writerow(self.entry_to_row(entry))

        return self._run_export("csv", output_file, entries, write)

    @log_store_operation("export_text")
    def export_to_text(
        self,
        entries: Sequence[Entry],
        output_file: Union[str, Path],
        title: str = "Almanac Journal Export",
    ) -> Dict[str, Any]:
        """
        Export entries as a plain-text listing, newest first.

        Raises:
            ExportError: If the file cannot be written
        """
        text = self.render_text(entries, title=title)

        def write(handle: TextIO) -> None:
            handle.write(text)

        return self._run_export("text", output_file, entries, write)

    @staticmethod
    def render_text(
        entries: Sequence[Entry],
        title: str = "Almanac Journal Export",
        generated: Optional[datetime] = None,
    ) -> str:
        generated = generated or datetime.now()
        lines: List[str] = [title, f"Generated on: {generated:%b %d, %Y}", ""]

        for entry in sorted(entries, key=lambda e: e.date, reverse=True):
            lines.append(f"Date: {entry.date:%b %d, %Y %H:%M}")
            lines.append(f"{entry.kind.display_name}: {entry.title}")
            payload = entry.payload
            if isinstance(payload, EmotionPayload):
                lines.append(f"Reason: {payload.reason}")
            elif isinstance(payload, WordPayload):
                lines.append(f"Definition: {payload.definition}")
            elif isinstance(payload, MatchPayload):
                lines.append(f"Winner: {payload.winner or 'Draw'}")
                if payload.mvp:
                    lines.append(f"MVP: {payload.mvp}")
            if entry.category:
                lines.append(f"Category: {entry.category}")
            if entry.note:
                lines.append(f"Note: {entry.note}")
            lines.append("")

        return "\n".join(lines)
