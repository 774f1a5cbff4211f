"""Read K-key values across the levels of the object model."""

from __future__ import annotations

import logging
from typing import Any

from aqdef.kkey import KKey
from aqdef.model.entries import HasKKeyValues, ValueEntries
from aqdef.model.indices import CharacteristicIndex

logger = logging.getLogger(__name__)


class CharacteristicEntriesAggregator:
    """Entries of a characteristic together with the entries of its part.

    ``get_value`` picks the entries matching the level of the requested key,
    so part and characteristic keys can be read through a single object.
    """

    def __init__(self, part_entries: HasKKeyValues, characteristic_entries: HasKKeyValues) -> None:
        self.part_entries = part_entries
        self.characteristic_entries = characteristic_entries

    def get_value(self, kkey: KKey | str, default: Any = None) -> Any:
        kkey = KKey.of(kkey)
        if kkey.is_any_part_level:
            return self.part_entries.get_value(kkey, default)
        if kkey.is_any_characteristic_level:
            return self.characteristic_entries.get_value(kkey, default)

        logger.warning("Unknown k-key level: %s", kkey)
        return default


class ValueEntriesAggregator(CharacteristicEntriesAggregator):
    """Entries of a value row together with its characteristic and part."""

    def __init__(
        self,
        part_entries: HasKKeyValues,
        characteristic_entries: HasKKeyValues,
        value_entries: HasKKeyValues,
    ) -> None:
        super().__init__(part_entries, characteristic_entries)
        self.value_entries = value_entries

    def get_value(self, kkey: KKey | str, default: Any = None) -> Any:
        kkey = KKey.of(kkey)
        if kkey.is_any_value_level:
            return self.value_entries.get_value(kkey, default)
        return super().get_value(kkey, default)


class ValueSet:
    """One value row of every characteristic of a part."""

    def __init__(self) -> None:
        self._values: dict[CharacteristicIndex, ValueEntries] = {}

    def add_value(self, characteristic_index: CharacteristicIndex, value: ValueEntries) -> None:
        self._values[characteristic_index] = value

    def get_characteristic_indexes(self) -> list[CharacteristicIndex]:
        return sorted(self._values)

    def get_values_of_characteristic(
        self, characteristic_index: CharacteristicIndex
    ) -> ValueEntries | None:
        return self._values.get(characteristic_index)

    def get_values(self) -> list[ValueEntries]:
        return [self._values[index] for index in sorted(self._values)]

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ValueSet({', '.join(str(i) for i in self.get_characteristic_indexes())})"
