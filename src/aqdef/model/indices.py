"""Composite indices addressing entries in the object model.

All indices are immutable and ordered component by component, with ``None``
sorting before any number.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import total_ordering
from typing import Any


def _null_first(value: Any) -> tuple[bool, Any]:
    return (value is not None, value)


@total_ordering
class _OrderedIndex(ABC):
    __slots__ = ()

    @abstractmethod
    def _sort_key(self) -> tuple[Any, ...]: ...

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._sort_key() < other._sort_key()  # type: ignore[attr-defined]


@dataclass(frozen=True)
class PartIndex(_OrderedIndex):
    """Index of a part. ``0`` addresses all parts."""

    index: int | None

    @classmethod
    def of(cls, index: int | None) -> PartIndex:
        return cls(index)

    @property
    def applies_to_all_parts(self) -> bool:
        return self.index == 0

    def _sort_key(self) -> tuple[Any, ...]:
        return (_null_first(self.index),)

    def __str__(self) -> str:
        return str(self.index)


@dataclass(frozen=True)
class CharacteristicIndex(_OrderedIndex):
    """Index of a characteristic within a part. ``0`` addresses all characteristics."""

    part_index: PartIndex | None
    characteristic_index: int | None

    @classmethod
    def of(
        cls, part_index: PartIndex | int | None, characteristic_index: int | None
    ) -> CharacteristicIndex:
        if isinstance(part_index, int):
            part_index = PartIndex(part_index)
        return cls(part_index, characteristic_index)

    @property
    def applies_to_all_characteristics(self) -> bool:
        return self.characteristic_index == 0

    def _sort_key(self) -> tuple[Any, ...]:
        part_key = self.part_index._sort_key() if self.part_index is not None else None
        return (_null_first(part_key), _null_first(self.characteristic_index))

    def __str__(self) -> str:
        return f"{self.part_index}/{self.characteristic_index}"


@dataclass(frozen=True)
class GroupIndex(_OrderedIndex):
    """Index of a logical group within a part."""

    part_index: PartIndex | None
    group_index: int | None

    @classmethod
    def of(cls, part_index: PartIndex | int | None, group_index: int | None) -> GroupIndex:
        if isinstance(part_index, int):
            part_index = PartIndex(part_index)
        return cls(part_index, group_index)

    def _sort_key(self) -> tuple[Any, ...]:
        part_key = self.part_index._sort_key() if self.part_index is not None else None
        return (_null_first(part_key), _null_first(self.group_index))

    def __str__(self) -> str:
        return f"{self.part_index}/{self.group_index}"


@dataclass(frozen=True)
class ValueIndex(_OrderedIndex):
    """Index of a value row of a characteristic."""

    part_index: PartIndex | None
    characteristic_index: CharacteristicIndex | None
    value_index: int | None

    @classmethod
    def of(
        cls,
        characteristic_index: CharacteristicIndex,
        value_index: int | None,
    ) -> ValueIndex:
        return cls(characteristic_index.part_index, characteristic_index, value_index)

    @property
    def applies_to_all_values_of_part(self) -> bool:
        characteristic_index = self.characteristic_index
        return characteristic_index is not None and characteristic_index.characteristic_index == 0

    def _sort_key(self) -> tuple[Any, ...]:
        part_key = self.part_index._sort_key() if self.part_index is not None else None
        characteristic_key = (
            self.characteristic_index._sort_key() if self.characteristic_index is not None else None
        )
        return (
            _null_first(part_key),
            _null_first(characteristic_key),
            _null_first(self.value_index),
        )

    def __str__(self) -> str:
        return f"{self.characteristic_index}/{self.value_index}"


@dataclass(frozen=True)
class NodeIndex(_OrderedIndex):
    """Index of a hierarchy node."""

    index: int | None

    @classmethod
    def of(cls, index: int | None) -> NodeIndex:
        return cls(index)

    def _sort_key(self) -> tuple[Any, ...]:
        return (_null_first(self.index),)

    def __str__(self) -> str:
        return str(self.index)


@dataclass(frozen=True)
class CatalogRecordIndex(_OrderedIndex):
    """Index of a catalog record."""

    index: int | None

    @classmethod
    def of(cls, index: int | None) -> CatalogRecordIndex:
        return cls(index)

    def _sort_key(self) -> tuple[Any, ...]:
        return (_null_first(self.index),)

    def __str__(self) -> str:
        return str(self.index)
