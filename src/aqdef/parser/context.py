"""State carried through the parse of a single file."""

from __future__ import annotations

from dataclasses import dataclass, field

from aqdef.kkey import KKey
from aqdef.model.indices import CharacteristicIndex, PartIndex, ValueIndex
from aqdef.parser.report import ParseReport


class ValueIndexCounter:
    """Assigns value indexes to measured value fields.

    A value row of a characteristic ends as soon as one of its K-keys
    repeats. The repeated key then starts the next row.
    """

    def __init__(self) -> None:
        self._keys: dict[CharacteristicIndex, set[KKey]] = {}
        self._indexes: dict[CharacteristicIndex, int] = {}

    def get_index(self, characteristic_index: CharacteristicIndex, kkey: KKey) -> ValueIndex:
        keys_of_current_value = self._keys.setdefault(characteristic_index, set())
        current_index = self._indexes.get(characteristic_index, 1)

        if kkey in keys_of_current_value:
            keys_of_current_value.clear()
            current_index += 1
            self._indexes[characteristic_index] = current_index

        keys_of_current_value.add(kkey)
        return ValueIndex.of(characteristic_index, current_index)


@dataclass
class ParserContext:
    """Line number, current part and value counter of a running parse."""

    current_line: int = 0
    current_part_index: PartIndex | None = None
    value_index_counter: ValueIndexCounter = field(default_factory=ValueIndexCounter)
    report: ParseReport = field(default_factory=ParseReport)

    @property
    def log_prefix(self) -> str:
        return f"Line {self.current_line}:"
