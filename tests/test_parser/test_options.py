"""Tests for parser options."""

from pathlib import Path

import pytest
from aqdef.errors import ConfigurationError
from aqdef.parser import ParserOptions, load_parser_options
from pydantic import ValidationError


class TestParserOptions:
    """Tests for ParserOptions."""

    def test_defaults(self) -> None:
        """Should log everything by default."""
        options = ParserOptions()
        assert not options.suppress_invalid_kkey_logging
        assert not options.is_logging_suppressed_for("K1001")

    def test_suppressed_keys(self) -> None:
        """Should suppress only the listed keys."""
        options = ParserOptions(suppress_invalid_kkey_logging_for=["K0011", " K2099 "])
        assert options.suppress_invalid_kkey_logging_for == frozenset({"K0011", "K2099"})
        assert options.is_logging_suppressed_for("K2099")
        assert not options.is_logging_suppressed_for("K1001")

    def test_single_key(self) -> None:
        """Should accept a single key as string."""
        options = ParserOptions(suppress_invalid_kkey_logging_for="K0011")
        assert options.suppress_invalid_kkey_logging_for == frozenset({"K0011"})

    def test_invalid_key(self) -> None:
        """Should reject strings that are not K-keys."""
        with pytest.raises(ValidationError):
            ParserOptions(suppress_invalid_kkey_logging_for=["1001"])

    def test_unknown_option(self) -> None:
        """Should reject unknown options."""
        with pytest.raises(ValidationError):
            ParserOptions(verbose=True)


class TestLoadParserOptions:
    """Tests for load_parser_options()."""

    def test_load(self, tmp_path: Path) -> None:
        """Should load options from YAML."""
        path = tmp_path / "options.yaml"
        path.write_text(
            "suppress_invalid_kkey_logging: true\n"
            "suppress_invalid_kkey_logging_for:\n"
            "  - K0011\n"
        )

        options = load_parser_options(path)

        assert options.suppress_invalid_kkey_logging
        assert options.suppress_invalid_kkey_logging_for == frozenset({"K0011"})

    def test_empty_file(self, tmp_path: Path) -> None:
        """Should return the defaults for an empty file."""
        path = tmp_path / "options.yaml"
        path.write_text("")
        assert load_parser_options(path) == ParserOptions()

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Should wrap YAML syntax errors."""
        path = tmp_path / "options.yaml"
        path.write_text("suppress_invalid_kkey_logging: [unclosed\n")

        with pytest.raises(ConfigurationError, match="YAML parsing error"):
            load_parser_options(path)

    def test_invalid_option(self, tmp_path: Path) -> None:
        """Should wrap validation errors."""
        path = tmp_path / "options.yaml"
        path.write_text("unknown_option: 1\n")

        with pytest.raises(ConfigurationError, match="Invalid parser options") as exc_info:
            load_parser_options(path)
        assert exc_info.value.path == path

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        """Should reject files whose root is not a mapping."""
        path = tmp_path / "options.yaml"
        path.write_text("- K0011\n")

        with pytest.raises(ConfigurationError, match="Expected dictionary"):
            load_parser_options(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Should wrap read errors."""
        with pytest.raises(ConfigurationError, match="File read error"):
            load_parser_options(tmp_path / "missing.yaml")
