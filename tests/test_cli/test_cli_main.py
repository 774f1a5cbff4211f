"""Tests for the CLI module."""

from __future__ import annotations

from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console
from typer.testing import CliRunner
from aqdef import __version__
from aqdef.cli import exception_handler
from aqdef.cli_main import app

runner = CliRunner()


@pytest.fixture
def error_output(monkeypatch: pytest.MonkeyPatch) -> StringIO:
    """Capture what the exception handler prints."""
    output = StringIO()
    monkeypatch.setattr(exception_handler, "console", Console(file=output, width=200))
    return output


@pytest.fixture
def dfq_with_issues(tmp_path: Path) -> Path:
    """DFQ file with an unknown K-key and a value that can't be converted."""
    path = tmp_path / "issues.dfq"
    path.write_text("K1001/1 P1\nK1999/1 x\nK2001/1 C1\nK2004/1 abc\nK0001/1 1.5\n")
    return path


@pytest.fixture
def broken_dfq(tmp_path: Path) -> Path:
    """DFQ file with a value of a characteristic that doesn't exist."""
    path = tmp_path / "broken.dfq"
    path.write_text("K1001/1 P1\nK2001/1 C1\nK0001/2 1.5\n")
    return path


class TestVersion:
    """Tests for version option."""

    def test_version_long(self) -> None:
        """Test --version flag."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_version_short(self) -> None:
        """Test -v flag."""
        result = runner.invoke(app, ["-v"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestNoArgs:
    """Tests for no arguments behavior."""

    def test_no_args_shows_help(self) -> None:
        """Test that no arguments shows help."""
        result = runner.invoke(app)
        assert "info" in result.output
        assert "check" in result.output
        assert "normalize" in result.output


class TestInfoCommand:
    """Tests for the info command."""

    def test_info(self, minimal_dfq_file: Path) -> None:
        """Test summary of a valid file."""
        result = runner.invoke(app, ["info", str(minimal_dfq_file)])
        assert result.exit_code == 0
        assert "Content Summary" in result.stdout
        assert "Characteristics" in result.stdout
        assert "P1" in result.stdout

    def test_info_nonexistent_file(self, tmp_path: Path) -> None:
        """Test info of a missing file."""
        result = runner.invoke(app, ["info", str(tmp_path / "missing.dfq")])
        assert result.exit_code != 0

    def test_info_broken_file(self, broken_dfq: Path) -> None:
        """Test info of a structurally invalid file."""
        result = runner.invoke(app, ["info", str(broken_dfq)])
        assert result.exit_code == 1


class TestCheckCommand:
    """Tests for the check command."""

    def test_check_clean_file(self, minimal_dfq_file: Path) -> None:
        """Test checking a file without dropped fields."""
        result = runner.invoke(app, ["check", str(minimal_dfq_file)])
        assert result.exit_code == 0
        assert "is valid" in result.stdout

    def test_check_clean_file_quiet(self, minimal_dfq_file: Path) -> None:
        """Test quiet mode prints nothing for a clean file."""
        result = runner.invoke(app, ["check", "--quiet", str(minimal_dfq_file)])
        assert result.exit_code == 0
        assert "is valid" not in result.stdout

    def test_check_lists_dropped_fields(self, dfq_with_issues: Path) -> None:
        """Test that dropped fields are listed."""
        result = runner.invoke(app, ["check", str(dfq_with_issues)])
        assert result.exit_code == 0
        assert "W001" in result.stdout
        assert "W002" in result.stdout
        assert "2 dropped item(s)" in result.stdout

    def test_check_with_options(self, dfq_with_issues: Path, tmp_path: Path) -> None:
        """Test that suppression options don't hide reported issues."""
        options = tmp_path / "options.yaml"
        options.write_text("suppress_invalid_kkey_logging: true\n")

        result = runner.invoke(
            app, ["check", str(dfq_with_issues), "--options", str(options)]
        )

        assert result.exit_code == 0
        assert "2 dropped item(s)" in result.stdout

    def test_check_invalid_options(self, minimal_dfq_file: Path, tmp_path: Path) -> None:
        """Test that invalid options fail."""
        options = tmp_path / "options.yaml"
        options.write_text("unknown: 1\n")

        result = runner.invoke(
            app, ["check", str(minimal_dfq_file), "--options", str(options)]
        )

        assert result.exit_code == 1

    def test_check_invalid_options_details(
        self, minimal_dfq_file: Path, tmp_path: Path, error_output: StringIO
    ) -> None:
        """Test that invalid options list every failing field."""
        options = tmp_path / "options.yaml"
        options.write_text("unknown: 1\n")

        result = runner.invoke(
            app, ["check", str(minimal_dfq_file), "--options", str(options)]
        )

        assert result.exit_code == 1
        assert "Configuration Validation Failed" in error_output.getvalue()
        assert "unknown" in error_output.getvalue()
        assert "extra_forbidden" in error_output.getvalue()

    def test_check_broken_options_yaml(
        self, minimal_dfq_file: Path, tmp_path: Path, error_output: StringIO
    ) -> None:
        """Test that unreadable options are shown as a configuration error."""
        options = tmp_path / "options.yaml"
        options.write_text("- [unclosed\n")

        result = runner.invoke(
            app, ["check", str(minimal_dfq_file), "--options", str(options)]
        )

        assert result.exit_code == 1
        assert "Configuration Error" in error_output.getvalue()
        assert "Configuration Validation Failed" not in error_output.getvalue()

    def test_check_broken_file(self, broken_dfq: Path) -> None:
        """Test that structural errors fail."""
        result = runner.invoke(app, ["check", str(broken_dfq)])
        assert result.exit_code == 1

    def test_check_with_keys_file(self, dfq_with_issues: Path, tmp_path: Path) -> None:
        """Test that additional K-keys are known to the parser."""
        keys_file = tmp_path / "keys.yaml"
        keys_file.write_text("keys:\n  K1999:\n    column_name: EXTRA\n    data_type: string\n")

        result = runner.invoke(
            app, ["check", str(dfq_with_issues), "--keys", str(keys_file)]
        )

        assert result.exit_code == 0
        assert "1 dropped item(s)" in result.stdout


class TestNormalizeCommand:
    """Tests for the normalize command."""

    def test_normalize(self, tmp_path: Path) -> None:
        """Test writing a normalized copy."""
        input_file = tmp_path / "input.dfq"
        input_file.write_text("K1001/1 P1\nK2001/0 X\nK2002/1 A\nK2002/2 B\n")
        output = tmp_path / "out" / "output.dfq"

        result = runner.invoke(app, ["normalize", str(input_file), "-o", str(output)])

        assert result.exit_code == 0
        assert output.read_bytes() == (
            b"K0100 2\r\nK1001/1 P1\r\n"
            b"K2001/1 X\r\nK2002/1 A\r\n"
            b"K2001/2 X\r\nK2002/2 B\r\n"
        )

    def test_normalize_default_output(self, minimal_dfq_file: Path) -> None:
        """Test the default output path."""
        result = runner.invoke(app, ["normalize", str(minimal_dfq_file)])

        assert result.exit_code == 0
        assert minimal_dfq_file.with_suffix(".normalized.dfq").exists()

    def test_normalize_existing_output(self, minimal_dfq_file: Path, tmp_path: Path) -> None:
        """Test that an existing output requires --force."""
        output = tmp_path / "existing.dfq"
        output.write_text("old")

        result = runner.invoke(app, ["normalize", str(minimal_dfq_file), "-o", str(output)])
        assert result.exit_code == 1
        assert output.read_text() == "old"

        result = runner.invoke(
            app, ["normalize", str(minimal_dfq_file), "-o", str(output), "--force"]
        )
        assert result.exit_code == 0
        assert output.read_bytes().startswith(b"K0100 1\r\n")


class TestKeysCommand:
    """Tests for the keys command."""

    def test_keys_of_level(self) -> None:
        """Test listing part K-keys."""
        result = runner.invoke(app, ["keys", "--level", "part"])
        assert result.exit_code == 0
        assert "K1001" in result.stdout
        assert "K2001" not in result.stdout

    def test_invalid_level(self) -> None:
        """Test that an unknown level fails."""
        result = runner.invoke(app, ["keys", "--level", "nonsense"])
        assert result.exit_code == 1
