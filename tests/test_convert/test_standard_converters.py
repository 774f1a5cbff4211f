"""Tests for the generic value converters."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

import pytest
from aqdef.convert import (
    BooleanConverter,
    DateConverter,
    DecimalConverter,
    IntegerConverter,
    StringConverter,
    UuidConverter,
)
from aqdef.convert.standard import DATE_INPUT_PATTERNS
from aqdef.errors import KKeyValueConversionError


class TestBlankHandling:
    """Tests for blank text and null values shared by all converters."""

    @pytest.mark.parametrize(
        "converter",
        [StringConverter(), IntegerConverter(), DecimalConverter(), DateConverter()],
    )
    def test_blank_text_parses_to_none(self, converter: object) -> None:
        """Should parse empty and whitespace-only text to None."""
        assert converter.parse("") is None  # type: ignore[attr-defined]
        assert converter.parse("   ") is None  # type: ignore[attr-defined]
        assert converter.parse(None) is None  # type: ignore[attr-defined]

    def test_none_formats_to_none(self) -> None:
        """Should format None to None."""
        assert IntegerConverter().format(None) is None
        assert DecimalConverter().format(None) is None


class TestIntegerConverter:
    """Tests for IntegerConverter."""

    def test_parse_signed(self) -> None:
        """Should accept an optional sign."""
        converter = IntegerConverter()
        assert converter.parse("42") == 42
        assert converter.parse("-7") == -7
        assert converter.parse("+3") == 3

    @pytest.mark.parametrize("text", ["1.5", "abc", "1e3", "0x10"])
    def test_parse_invalid(self, text: str) -> None:
        """Should reject anything but digits."""
        with pytest.raises(KKeyValueConversionError, match="Integer"):
            IntegerConverter().parse(text)


class TestDecimalConverter:
    """Tests for DecimalConverter."""

    def test_parse_decimal_comma(self) -> None:
        """Should read a decimal comma as a decimal point."""
        assert DecimalConverter().parse("3,14") == Decimal("3.14")

    def test_format_plain_notation(self) -> None:
        """Should never use scientific notation."""
        converter = DecimalConverter()
        assert converter.format(Decimal("3.14")) == "3.14"
        assert converter.format(Decimal("1E+3")) == "1000"
        assert converter.format(Decimal("0.00001")) == "0.00001"

    def test_parse_invalid(self) -> None:
        """Should reject text that is not a number."""
        with pytest.raises(KKeyValueConversionError) as exc_info:
            DecimalConverter().parse("1.2.3")
        assert exc_info.value.value == "1.2.3"
        assert exc_info.value.data_type == "BigDecimal"


class TestBooleanConverter:
    """Tests for BooleanConverter."""

    def test_parse(self) -> None:
        """Should map 1 to True and 0 to False."""
        converter = BooleanConverter()
        assert converter.parse("1") is True
        assert converter.parse("0") is False

    def test_parse_other_numbers(self) -> None:
        """Should reject numbers other than 0 and 1."""
        with pytest.raises(KKeyValueConversionError):
            BooleanConverter().parse("2")

    def test_format(self) -> None:
        """Should format as 1 and 0."""
        converter = BooleanConverter()
        assert converter.format(True) == "1"
        assert converter.format(False) == "0"


class TestUuidConverter:
    """Tests for UuidConverter."""

    def test_parse(self) -> None:
        """Should parse the hyphenated form."""
        value = "12345678-1234-5678-1234-567812345678"
        assert UuidConverter().parse(value) == uuid.UUID(value)

    def test_parse_invalid(self) -> None:
        """Should reject malformed UUIDs."""
        with pytest.raises(KKeyValueConversionError):
            UuidConverter().parse("not-a-uuid")


class TestDateConverter:
    """Tests for DateConverter."""

    def test_pattern_count_and_order(self) -> None:
        """Should try the day-first patterns with '/' separator first."""
        assert len(DATE_INPUT_PATTERNS) == 36
        assert DATE_INPUT_PATTERNS[0] == "d.M.yy/H:m:s"
        assert DATE_INPUT_PATTERNS[1] == "d.M.yy/H:m"
        assert DATE_INPUT_PATTERNS[-1] == "yyyy-M-d.H:m"

    def test_formats_are_equivalent(self) -> None:
        """Should read different layouts of the same instant identically."""
        converter = DateConverter()
        first = converter.parse("04.07.2023/12:30:00")
        second = converter.parse("2023-07-04/12:30")
        third = converter.parse("7/4/2023 12:30:00")
        assert first == second == third

    def test_parse_returns_aware_local_time(self) -> None:
        """Should attach the local time zone."""
        value = DateConverter().parse("04.07.2023/12:30:00")
        assert value is not None
        assert value.tzinfo is not None
        assert value.replace(tzinfo=None) == datetime(2023, 7, 4, 12, 30)

    def test_two_digit_year(self) -> None:
        """Should place two-digit years in the 21st century."""
        value = DateConverter().parse("4.7.23/8:05")
        assert value is not None
        assert (value.year, value.month, value.day, value.hour, value.minute) == (
            2023, 7, 4, 8, 5,
        )

    def test_day_past_end_of_month(self) -> None:
        """Should resolve days past the end of the month to its last day."""
        value = DateConverter().parse("31.04.2023/10:00:00")
        assert value is not None
        assert (value.month, value.day) == (4, 30)

    def test_iso_format(self) -> None:
        """Should also accept ISO local date-times."""
        converter = DateConverter()
        assert converter.parse("2023-07-04T12:30:00") == converter.parse("04.07.2023/12:30:00")

    def test_format(self) -> None:
        """Should always format day first with seconds."""
        converter = DateConverter()
        value = converter.parse("2023-07-04/12:30")
        assert converter.format(value) == "04.07.2023/12:30:00"

    @pytest.mark.parametrize("text", ["yesterday", "2023-13-45/10:00", "04.07.2023"])
    def test_parse_invalid(self, text: str) -> None:
        """Should reject text matching no pattern."""
        with pytest.raises(KKeyValueConversionError, match="Date"):
            DateConverter().parse(text)
