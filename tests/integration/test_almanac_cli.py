#!/usr/bin/env python3
"""
Integration tests for the almanac CLI.

Runs every command group against a temporary YAML journal, so state
persists between invocations exactly as it does for a user.
"""
import json
import re

import pytest
from click.testing import CliRunner

from almanac.cli import cli


class TestAlmanacCLI:
    """Test CLI commands with a temporary journal."""

    @pytest.fixture
    def runner(self):
        """Create Click test runner."""
        return CliRunner()

    @pytest.fixture
    def test_dirs(self, tmp_path):
        """Create temporary paths for testing."""
        dirs = {
            "data_path": tmp_path / "journal.yaml",
            "config": tmp_path / "config.yaml",
            "log_dir": tmp_path / "logs",
            "export_dir": tmp_path / "exports",
        }
        dirs["log_dir"].mkdir()
        return dirs

    def invoke_cli(self, runner, test_dirs, args, **kwargs):
        """Helper to invoke CLI with test configuration."""
        base_args = [
            "--backend", "yaml",
            "--data-path", str(test_dirs["data_path"]),
            "--config", str(test_dirs["config"]),
            "--log-dir", str(test_dirs["log_dir"]),
        ]
        return runner.invoke(cli, base_args + args, **kwargs)

    def add_entry(self, runner, test_dirs, args):
        """Add an entry and return its short id."""
        result = self.invoke_cli(runner, test_dirs, ["entry", "add"] + args)
        assert result.exit_code == 0, result.output
        return re.search(r"entry ([0-9a-f]{8})", result.output).group(1)

    def test_cli_help(self, runner):
        """Test that CLI help message works."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for group in ("entry", "category", "stats", "export"):
            assert group in result.output

    def test_add_and_list(self, runner, test_dirs):
        """Test recording entries of several kinds and listing them."""
        self.add_entry(runner, test_dirs, ["victory", "--title", "Ran 5k", "--date", "2024-01-09T07:00"])
        self.add_entry(
            runner, test_dirs,
            ["emotion", "--emotion", "joy", "--reason", "Sunshine", "--date", "2024-01-10T08:00"],
        )
        self.add_entry(
            runner, test_dirs,
            ["match", "--home", "Lions", "--away", "Tigers", "--home-score", "2", "--date", "2024-01-08"],
        )

        result = self.invoke_cli(runner, test_dirs, ["entry", "list"])

        assert result.exit_code == 0
        lines = [line for line in result.output.splitlines() if line.strip()]
        assert "[emotion] joy" in lines[0]
        assert "[match] Lions 2 - 0 Tigers" in lines[2]
        assert "Total: 3 entries" in result.output
        assert test_dirs["data_path"].exists()

    def test_list_filters(self, runner, test_dirs):
        """Test filter options of entry list."""
        self.add_entry(runner, test_dirs, ["victory", "--title", "Ran 5k", "--date", "2024-01-09"])
        self.add_entry(runner, test_dirs, ["word", "--word", "petrichor", "--definition", "Rain smell", "--date", "2024-01-05"])

        result = self.invoke_cli(runner, test_dirs, ["entry", "list", "--kind", "word"])
        assert "petrichor" in result.output
        assert "Ran 5k" not in result.output

        result = self.invoke_cli(runner, test_dirs, ["entry", "list", "--from", "2024-01-06", "--to", "2024-01-31"])
        assert "Ran 5k" in result.output
        assert "Total: 1 entries" in result.output

        result = self.invoke_cli(runner, test_dirs, ["entry", "list", "--search", "nothing-matches"])
        assert "No entries found" in result.output

    def test_validation_error_exits(self, runner, test_dirs):
        """Test that invalid entries fail with a readable message."""
        result = self.invoke_cli(runner, test_dirs, ["entry", "add", "victory", "--title", "   "])
        assert result.exit_code == 1
        assert "ValidationError" in result.output

        result = self.invoke_cli(runner, test_dirs, ["entry", "add", "emotion", "--reason", "why"])
        assert result.exit_code == 1
        assert "--emotion is required" in result.output

    def test_archive_restore_purge(self, runner, test_dirs):
        """Test the archive lifecycle with id prefixes."""
        short_id = self.add_entry(runner, test_dirs, ["victory", "--title", "Ran 5k"])

        result = self.invoke_cli(runner, test_dirs, ["entry", "archive", short_id])
        assert result.exit_code == 0
        assert "Archived" in result.output
        assert "No entries found" in self.invoke_cli(runner, test_dirs, ["entry", "list"]).output
        assert "Ran 5k" in self.invoke_cli(runner, test_dirs, ["entry", "archived"]).output

        result = self.invoke_cli(runner, test_dirs, ["entry", "restore", short_id])
        assert result.exit_code == 0
        assert "Archive is empty" in self.invoke_cli(runner, test_dirs, ["entry", "archived"]).output

        self.invoke_cli(runner, test_dirs, ["entry", "archive", short_id])
        result = self.invoke_cli(runner, test_dirs, ["entry", "purge", short_id, "--yes"])
        assert result.exit_code == 0
        assert "Archive is empty" in self.invoke_cli(runner, test_dirs, ["entry", "archived"]).output

    def test_unknown_entry(self, runner, test_dirs):
        result = self.invoke_cli(runner, test_dirs, ["entry", "delete", "deadbeef"])
        assert result.exit_code == 1
        assert "NotFoundError" in result.output

    def test_show_and_update_note(self, runner, test_dirs):
        short_id = self.add_entry(
            runner, test_dirs, ["word", "--word", "petrichor", "--definition", "Rain smell"]
        )

        result = self.invoke_cli(runner, test_dirs, ["entry", "update-note", short_id, "Learned today"])
        assert result.exit_code == 0

        result = self.invoke_cli(runner, test_dirs, ["entry", "show", short_id])
        assert result.exit_code == 0
        assert "Word: petrichor" in result.output
        assert "Definition: Rain smell" in result.output
        assert "Learned today" in result.output

    def test_category_lifecycle(self, runner, test_dirs):
        """Test category add, usage counts, rename and delete rules."""
        result = self.invoke_cli(runner, test_dirs, ["category", "add", "Health"])
        assert result.exit_code == 0
        assert "Created category 'Health' (color 0)" in result.output

        result = self.invoke_cli(runner, test_dirs, ["category", "add", "health"])
        assert result.exit_code == 1
        assert "DuplicateNameError" in result.output

        self.add_entry(runner, test_dirs, ["victory", "--title", "Ran 5k", "--category", "HEALTH"])

        result = self.invoke_cli(runner, test_dirs, ["category", "list"])
        assert "Health (1 entries, color 0)" in result.output

        result = self.invoke_cli(runner, test_dirs, ["category", "delete", "Health"])
        assert result.exit_code == 1
        assert "CategoryInUseError" in result.output

        result = self.invoke_cli(runner, test_dirs, ["category", "rename", "Health", "Fitness", "--migrate"])
        assert result.exit_code == 0
        result = self.invoke_cli(runner, test_dirs, ["entry", "list", "--category", "Fitness"])
        assert "Ran 5k" in result.output

    def test_rename_without_migration_warns(self, runner, test_dirs):
        self.invoke_cli(runner, test_dirs, ["category", "add", "Health"])
        self.add_entry(runner, test_dirs, ["victory", "--title", "Ran 5k", "--category", "Health"])

        result = self.invoke_cli(runner, test_dirs, ["category", "rename", "Health", "Fitness"])

        assert result.exit_code == 0
        assert "1 entries still use 'Health'" in result.output

    def test_unknown_category_on_add(self, runner, test_dirs):
        result = self.invoke_cli(runner, test_dirs, ["entry", "add", "victory", "--title", "x", "--category", "Nope"])
        assert result.exit_code == 1
        assert "Unknown category" in result.output

    def test_stats_commands(self, runner, test_dirs):
        """Test stats commands over entries recorded now."""
        self.invoke_cli(runner, test_dirs, ["category", "add", "Health"])
        self.add_entry(runner, test_dirs, ["victory", "--title", "Ran 5k", "--category", "Health"])
        self.add_entry(runner, test_dirs, ["emotion", "--emotion", "calm", "--reason", "Tea"])

        result = self.invoke_cli(runner, test_dirs, ["stats", "summary", "--period", "week"])
        assert result.exit_code == 0, result.output
        assert "Summary (Week)" in result.output
        assert "Top category:     Health" in result.output

        result = self.invoke_cli(runner, test_dirs, ["stats", "streak"])
        assert "Current streak: 1 days (anchored)" in result.output

        result = self.invoke_cli(runner, test_dirs, ["stats", "patterns", "--json"])
        report = json.loads(result.output)
        assert sum(b["count"] for b in report["day_of_week"]) == 2

        result = self.invoke_cli(runner, test_dirs, ["stats", "trends"])
        assert result.exit_code == 0
        assert "Mood score: 0.70" in result.output

        result = self.invoke_cli(runner, test_dirs, ["stats", "achievements"])
        assert "Achievements: 1/9 unlocked" in result.output
        assert "First Steps" in result.output

    def test_match_mvp_and_results(self, runner, test_dirs):
        """Test recording match MVPs and the match statistics."""
        short_id = self.add_entry(
            runner, test_dirs,
            ["match", "--home", "Lions", "--away", "Tigers", "--home-score", "2", "--mvp", "Rivera"],
        )
        self.add_entry(
            runner, test_dirs,
            ["match", "--home", "Lions", "--away", "Bears", "--away-score", "1", "--mvp", "Rivera"],
        )

        result = self.invoke_cli(runner, test_dirs, ["entry", "show", short_id])
        assert result.exit_code == 0
        assert re.search(r"MVP:\s+Rivera", result.output)

        result = self.invoke_cli(runner, test_dirs, ["stats", "patterns"])
        assert result.exit_code == 0, result.output
        assert "Match results:" in result.output
        assert re.search(r"Home wins\s+1\s+50\.0%", result.output)
        assert "1. Rivera" in result.output
        assert "2 MVPs" in result.output

    def test_exports(self, runner, test_dirs):
        """Test JSON, CSV and text exports."""
        self.add_entry(runner, test_dirs, ["victory", "--title", "Ran 5k"])
        out = test_dirs["export_dir"]

        for fmt, name in (("json", "journal.json"), ("csv", "journal.csv"), ("text", "journal.txt")):
            result = self.invoke_cli(runner, test_dirs, ["export", fmt, str(out / name)])
            assert result.exit_code == 0, result.output
            assert "Export complete: 1 entries" in result.output
            assert (out / name).exists()

        document = json.loads((out / "journal.json").read_text(encoding="utf-8"))
        assert document["entries"][0]["payload"] == {"title": "Ran 5k"}

    def test_sqlite_backend(self, runner, tmp_path):
        """Test the default SQLite backend persists between invocations."""
        base = [
            "--backend", "sqlite",
            "--data-path", str(tmp_path / "journal.db"),
            "--config", str(tmp_path / "config.yaml"),
            "--log-dir", str(tmp_path / "logs"),
        ]
        result = runner.invoke(cli, base + ["entry", "add", "victory", "--title", "Ran 5k"])
        assert result.exit_code == 0, result.output

        result = runner.invoke(cli, base + ["entry", "list"])
        assert "Ran 5k" in result.output

    def test_bad_config_file(self, runner, test_dirs):
        test_dirs["config"].write_text("streak_policy: weekly\n")
        result = self.invoke_cli(runner, test_dirs, ["entry", "list"])
        assert result.exit_code == 1
        assert "ConfigError" in result.output
