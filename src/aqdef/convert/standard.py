"""Converters for the generic K-key data types."""

from __future__ import annotations

import calendar
import re
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation

from aqdef.convert.base import KKeyValueConverter
from aqdef.errors import KKeyValueConversionError

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")
_DECIMAL_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


class StringConverter(KKeyValueConverter[str]):
    """Identity conversion. Text is kept as is."""

    type_name = "String"

    def _parse(self, text: str) -> str:
        return text

    def _format(self, value: str) -> str:
        return str(value)


class IntegerConverter(KKeyValueConverter[int]):
    """Signed decimal integers."""

    type_name = "Integer"

    def _parse(self, text: str) -> int:
        if not _INTEGER_PATTERN.fullmatch(text):
            raise KKeyValueConversionError(text, self.type_name)
        return int(text)

    def _format(self, value: int) -> str:
        return str(value)


class DecimalConverter(KKeyValueConverter[Decimal]):
    """Arbitrary precision decimals.

    A decimal comma is accepted on input. Output never uses scientific
    notation.
    """

    type_name = "BigDecimal"

    def _parse(self, text: str) -> Decimal:
        normalized = text.replace(",", ".")
        if not _DECIMAL_PATTERN.fullmatch(normalized):
            raise KKeyValueConversionError(text, self.type_name)
        try:
            return Decimal(normalized)
        except InvalidOperation as e:
            raise KKeyValueConversionError(text, self.type_name, e) from e

    def _format(self, value: Decimal) -> str:
        return format(Decimal(value), "f")


class BooleanConverter(KKeyValueConverter[bool]):
    """``1`` is true and ``0`` is false, nothing else is accepted."""

    type_name = "Boolean"

    def __init__(self) -> None:
        self._integer_converter = IntegerConverter()

    def _parse(self, text: str) -> bool:
        try:
            number = self._integer_converter.parse(text)
        except KKeyValueConversionError as e:
            raise KKeyValueConversionError(text, self.type_name) from e

        if number == 1:
            return True
        if number == 0:
            return False
        raise KKeyValueConversionError(text, self.type_name)

    def _format(self, value: bool) -> str:
        return "1" if value else "0"


class UuidConverter(KKeyValueConverter[uuid.UUID]):
    """UUIDs in their hyphenated form."""

    type_name = "UUID"

    def _parse(self, text: str) -> uuid.UUID:
        try:
            return uuid.UUID(text)
        except ValueError as e:
            raise KKeyValueConversionError(text, self.type_name, e) from e

    def _format(self, value: uuid.UUID) -> str:
        return str(value)


def _compile_date_pattern(pattern: str) -> re.Pattern[str]:
    """Turn a pattern such as ``d.M.yy/H:m:s`` into a regular expression."""
    tokens = {
        "yyyy": r"(?P<year>\d{4})",
        "yy": r"(?P<short_year>\d{2})",
        "M": r"(?P<month>\d{1,2})",
        "d": r"(?P<day>\d{1,2})",
        "H": r"(?P<hour>\d{1,2})",
        "m": r"(?P<minute>\d{1,2})",
        "s": r"(?P<second>\d{1,2})",
    }
    regex = ""
    position = 0
    while position < len(pattern):
        for token, token_regex in tokens.items():
            if pattern.startswith(token, position):
                regex += token_regex
                position += len(token)
                break
        else:
            regex += re.escape(pattern[position])
            position += 1
    return re.compile(regex)


def _date_patterns() -> tuple[str, ...]:
    patterns = []
    for date_time_separator in ("/", " ", "."):
        for date_pattern in ("d.M.yy", "d.M.yyyy", "M/d/yy", "M/d/yyyy", "yy-M-d", "yyyy-M-d"):
            for time_pattern in ("H:m:s", "H:m"):
                patterns.append(f"{date_pattern}{date_time_separator}{time_pattern}")
    return tuple(patterns)


DATE_INPUT_PATTERNS = _date_patterns()
"""Accepted input patterns, tried in this order."""

DATE_OUTPUT_FORMAT = "%d.%m.%Y/%H:%M:%S"

_DATE_INPUT_REGEXES = tuple(_compile_date_pattern(p) for p in DATE_INPUT_PATTERNS)

_ISO_DATE_TIME = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"T(?P<hour>\d{2}):(?P<minute>\d{2})"
    r"(?::(?P<second>\d{2})(?:\.(?P<fraction>\d{1,9}))?)?"
    r"(?P<offset>Z|[+-]\d{2}:\d{2})?"
)


class DateConverter(KKeyValueConverter[datetime]):
    """Date and time values.

    Parsed values are timezone aware and expressed in the local zone of the
    host. Inputs without an offset are read as local time.
    """

    type_name = "Date"

    def _parse(self, text: str) -> datetime:
        for regex in _DATE_INPUT_REGEXES:
            match = regex.fullmatch(text)
            if match is None:
                continue
            value = self._from_pattern_match(match)
            if value is not None:
                return value.astimezone()

        iso_value = self._parse_iso(text)
        if iso_value is not None:
            return iso_value.astimezone()

        raise KKeyValueConversionError(text, self.type_name)

    def _format(self, value: datetime) -> str:
        return value.astimezone().strftime(DATE_OUTPUT_FORMAT)

    @staticmethod
    def _from_pattern_match(match: re.Match[str]) -> datetime | None:
        parts = match.groupdict()
        if parts.get("year") is not None:
            year = int(parts["year"])
        else:
            year = 2000 + int(parts["short_year"])
        month = int(parts["month"])
        day = int(parts["day"])
        second = int(parts["second"]) if parts.get("second") is not None else 0

        # Days past the end of the month resolve to its last day.
        if 1 <= month <= 12 and 29 <= day <= 31:
            day = min(day, calendar.monthrange(year, month)[1])

        try:
            return datetime(year, month, day, int(parts["hour"]), int(parts["minute"]), second)
        except ValueError:
            return None

    @staticmethod
    def _parse_iso(text: str) -> datetime | None:
        match = _ISO_DATE_TIME.fullmatch(text)
        if match is None:
            return None

        parts = match.groupdict()
        fraction = (parts["fraction"] or "").ljust(6, "0")[:6]
        offset = parts["offset"]

        try:
            tzinfo = None
            if offset == "Z":
                tzinfo = timezone.utc
            elif offset:
                sign = -1 if offset[0] == "-" else 1
                hours, minutes = offset[1:].split(":")
                tzinfo = timezone(sign * timedelta(hours=int(hours), minutes=int(minutes)))

            return datetime(
                int(parts["year"]),
                int(parts["month"]),
                int(parts["day"]),
                int(parts["hour"]),
                int(parts["minute"]),
                int(parts["second"] or 0),
                int(fraction),
                tzinfo=tzinfo,
            )
        except ValueError:
            return None
