"""
Integration tests for CLI commands.

Tests the basic functionality of CLI commands and error handling.
"""

import json

from typer.testing import CliRunner

from markerscan.cli import app

runner = CliRunner()


class TestCLIHelp:
    """Test CLI help and usage information."""

    def test_main_help(self):
        """Main help should display available commands."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "scan" in result.stdout
        assert "languages" in result.stdout

    def test_scan_help(self):
        """Scan command help should display options."""
        result = runner.invoke(app, ["scan", "--help"])

        assert result.exit_code == 0
        assert "--exclude" in result.stdout
        assert "--include" in result.stdout
        assert "--format" in result.stdout


class TestScanCommand:
    """Test the scan command against temporary trees."""

    def test_scan_json_output(self, tmp_path):
        (tmp_path / "main.go").write_text("package main\n// TODO(ann): wire config\n", encoding="utf-8")
        (tmp_path / ".git").mkdir()
        (tmp_path / ".git" / "hook.sh").write_text("# TODO: never seen\n", encoding="utf-8")

        result = runner.invoke(app, ["scan", str(tmp_path), "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert len(data) == 1
        assert data[0]["relative_path"] == "main.go"
        assert data[0]["line_number"] == 2
        assert data[0]["marker_type"] == "TODO"
        assert data[0]["tag"] == "ann"
        assert data[0]["content"] == "wire config"
        assert len(data[0]["fingerprint"]) == 64

    def test_scan_table_output(self, tmp_path):
        (tmp_path / "app.py").write_text("# FIXME: broken\n", encoding="utf-8")

        result = runner.invoke(app, ["scan", str(tmp_path)])

        assert result.exit_code == 0
        assert "FIXME" in result.stdout
        assert "Scan Complete" in result.stdout

    def test_scan_empty_directory(self, tmp_path):
        result = runner.invoke(app, ["scan", str(tmp_path)])

        assert result.exit_code == 0
        assert "No markers found" in result.stdout

    def test_exclude_and_type_options(self, tmp_path):
        (tmp_path / "keep.go").write_text("// TODO: keep\n// NOTE: filtered\n", encoding="utf-8")
        (tmp_path / "skip.go").write_text("// TODO: skip\n", encoding="utf-8")

        result = runner.invoke(
            app,
            ["scan", str(tmp_path), "-e", "skip.go", "-t", "TODO", "-f", "json", "-w", "1"],
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [(m["relative_path"], m["content"]) for m in data] == [("keep.go", "keep")]

    def test_config_file(self, tmp_path):
        project = tmp_path / "project"
        project.mkdir()
        (project / "a.go").write_text("// TODO: a\n", encoding="utf-8")
        (project / "b.py").write_text("# TODO: b\n", encoding="utf-8")
        config = tmp_path / "markerscan.yaml"
        config.write_text("scan:\n  include_patterns: ['*.py']\n", encoding="utf-8")

        result = runner.invoke(app, ["scan", str(project), "-c", str(config), "-f", "json"])

        assert result.exit_code == 0
        assert [m["relative_path"] for m in json.loads(result.stdout)] == ["b.py"]


class TestCLIErrorHandling:
    """Test CLI error handling for invalid inputs."""

    def test_scan_missing_directory(self, tmp_path):
        result = runner.invoke(app, ["scan", str(tmp_path / "missing")])

        assert result.exit_code == 1

    def test_scan_invalid_format(self, tmp_path):
        result = runner.invoke(app, ["scan", str(tmp_path), "--format", "xml"])

        assert result.exit_code == 1

    def test_scan_invalid_glob(self, tmp_path):
        result = runner.invoke(app, ["scan", str(tmp_path), "--exclude", "[broken"])

        assert result.exit_code == 1

    def test_scan_reversed_class_range(self, tmp_path):
        result = runner.invoke(app, ["scan", str(tmp_path), "--exclude", "[z-a]"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)

    def test_scan_missing_config(self, tmp_path):
        result = runner.invoke(app, ["scan", str(tmp_path), "--config", str(tmp_path / "none.yaml")])

        assert result.exit_code == 1


def test_languages_command():
    result = runner.invoke(app, ["languages"])

    assert result.exit_code == 0
    assert "Python" in result.stdout
    assert "HTML" in result.stdout
