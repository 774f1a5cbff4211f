"""Converters between DFQ text and typed K-key values."""

from aqdef.convert.base import KKeyValueConverter
from aqdef.convert.custom import ChargeConverter, EventIdListConverter, SubgroupSizeConverter
from aqdef.convert.standard import (
    DATE_INPUT_PATTERNS,
    DATE_OUTPUT_FORMAT,
    BooleanConverter,
    DateConverter,
    DecimalConverter,
    IntegerConverter,
    StringConverter,
    UuidConverter,
)

__all__ = [
    "DATE_INPUT_PATTERNS",
    "DATE_OUTPUT_FORMAT",
    "BooleanConverter",
    "ChargeConverter",
    "DateConverter",
    "DecimalConverter",
    "EventIdListConverter",
    "IntegerConverter",
    "KKeyValueConverter",
    "StringConverter",
    "SubgroupSizeConverter",
    "UuidConverter",
]
