"""Metadata describing a K-key."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from aqdef.convert import (
    BooleanConverter,
    DateConverter,
    DecimalConverter,
    IntegerConverter,
    KKeyValueConverter,
    StringConverter,
    UuidConverter,
)


class KKeyDataType(Enum):
    """Data type of the value stored under a K-key."""

    STRING = "string"
    INTEGER = "integer"
    DECIMAL = "decimal"
    DATE = "date"
    BOOLEAN = "boolean"
    UUID = "uuid"
    INTEGER_LIST = "integer_list"

    def default_converter(self) -> KKeyValueConverter[Any] | None:
        """Return the converter used for this type when none is given.

        ``INTEGER_LIST`` has no generic converter; keys of this type must
        provide their own.
        """
        return _DEFAULT_CONVERTERS.get(self)


_DEFAULT_CONVERTERS: dict[KKeyDataType, KKeyValueConverter[Any]] = {
    KKeyDataType.STRING: StringConverter(),
    KKeyDataType.INTEGER: IntegerConverter(),
    KKeyDataType.DECIMAL: DecimalConverter(),
    KKeyDataType.DATE: DateConverter(),
    KKeyDataType.BOOLEAN: BooleanConverter(),
    KKeyDataType.UUID: UuidConverter(),
}


@dataclass(frozen=True)
class KKeyMetadata:
    """Immutable description of a K-key.

    Attributes
    ----------
        column_name: Label used when the value is mapped to storage.
        data_type: Type of the parsed value.
        length: Maximum textual length, documentation only.
        converter: Text <-> value converter. Derived from ``data_type`` when omitted.
        save_to_db: Advisory persistence flag.
        respects_characteristic_decimal_settings: Advisory formatting flag.

    """

    column_name: str
    data_type: KKeyDataType
    length: int | None = None
    converter: KKeyValueConverter[Any] = field(default=None, compare=False)  # type: ignore[assignment]
    save_to_db: bool = True
    respects_characteristic_decimal_settings: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        if self.converter is None:
            converter = self.data_type.default_converter()
            if converter is None:
                raise ValueError(
                    f"Data type {self.data_type.name} of column {self.column_name} "
                    "requires an explicit converter"
                )
            object.__setattr__(self, "converter", converter)

    @classmethod
    def of(
        cls,
        column_name: str,
        data_type: KKeyDataType,
        length: int | None = None,
        converter: KKeyValueConverter[Any] | None = None,
        *,
        save_to_db: bool = True,
        respects_characteristic_decimal_settings: bool = False,
    ) -> KKeyMetadata:
        """Create metadata, deriving the converter from the data type if needed."""
        return cls(
            column_name=column_name,
            data_type=data_type,
            length=length,
            converter=converter,  # type: ignore[arg-type]
            save_to_db=save_to_db,
            respects_characteristic_decimal_settings=respects_characteristic_decimal_settings,
        )
