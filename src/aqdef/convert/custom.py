"""Converters for K-keys with a special textual encoding."""

from __future__ import annotations

from aqdef.convert.base import KKeyValueConverter
from aqdef.convert.standard import IntegerConverter
from aqdef.errors import KKeyValueConversionError

_SUBGROUP_SIZE_SCALE = 1000


class EventIdListConverter(KKeyValueConverter[list[int]]):
    """K0005 holds a comma separated list of event ids."""

    type_name = "List<Integer>"

    def _parse(self, text: str) -> list[int]:
        integer_converter = IntegerConverter()
        event_ids = []
        for token in text.split(","):
            token = token.strip()
            if not token:
                continue
            try:
                event_ids.append(integer_converter.parse(token))
            except KKeyValueConversionError as e:
                raise KKeyValueConversionError(text, self.type_name) from e
        return event_ids

    def format(self, value: list[int] | None) -> str | None:
        if not value:
            return None
        return self._format(value)

    def _format(self, value: list[int]) -> str:
        return ",".join(str(event_id) for event_id in value)


class ChargeConverter(KKeyValueConverter[str]):
    """K0006 values are written with a leading ``#``."""

    type_name = "String"

    def _parse(self, text: str) -> str:
        return text[1:] if text.startswith("#") else text

    def _format(self, value: str) -> str:
        return f"#{value}"


class SubgroupSizeConverter(KKeyValueConverter[int]):
    """K0020 is stored multiplied by 1000."""

    type_name = "Integer"

    def __init__(self) -> None:
        self._integer_converter = IntegerConverter()

    def _parse(self, text: str) -> int:
        number = self._integer_converter.parse(text)
        # Truncate toward zero.
        if number < 0:
            return -(-number // _SUBGROUP_SIZE_SCALE)
        return number // _SUBGROUP_SIZE_SCALE

    def _format(self, value: int) -> str:
        return str(value * _SUBGROUP_SIZE_SCALE)
