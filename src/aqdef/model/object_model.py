"""In-memory representation of an AQDEF file.

The model is a tree of parts, their characteristics and the measured values
of each characteristic. Parts may also hold logical groups, and a separate
:class:`~aqdef.model.hierarchy.AqdefHierarchy` relates characteristics and
groups to each other.

Every level is kept in maps keyed by composite indices. Iteration always
follows index order, so a model is written the same way every time.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, TypeVar

from aqdef.kkey import KKey
from aqdef.model.aggregators import ValueSet
from aqdef.model.entries import (
    CharacteristicEntries,
    GroupEntries,
    PartEntries,
    ValueEntries,
)
from aqdef.model.hierarchy import AqdefHierarchy
from aqdef.model.indices import CharacteristicIndex, GroupIndex, PartIndex, ValueIndex

K = TypeVar("K")
V = TypeVar("V")

ALL_PARTS = PartIndex(0)


def _ordered(mapping: dict[K, V]) -> list[V]:
    return [mapping[key] for key in sorted(mapping)]  # type: ignore[type-var]


def _as_part_index(part_index: PartIndex | int) -> PartIndex:
    return part_index if isinstance(part_index, PartIndex) else PartIndex(part_index)


class AqdefObjectModel:
    """Parts, characteristics, groups, values and hierarchy of an AQDEF file.

    The model is filled by :class:`~aqdef.parser.AqdefParser` or by
    :class:`~aqdef.model.builder.AqdefObjectModelBuilder`, normalized once and
    then treated as read only. It is not safe for concurrent modification.

    Example:
    -------
        >>> model = AqdefObjectModel()
        >>> model.put_part_entry("K1001", PartIndex(1), "part")
        >>> model.get_part_entries(1).get_value("K1001")
        'part'

    """

    def __init__(self) -> None:
        self._part_entries: dict[PartIndex, PartEntries] = {}
        self._characteristic_entries: dict[
            PartIndex, dict[CharacteristicIndex, CharacteristicEntries]
        ] = {}
        self._group_entries: dict[PartIndex, dict[GroupIndex, GroupEntries]] = {}
        self._value_entries: dict[
            PartIndex, dict[CharacteristicIndex, dict[ValueIndex, ValueEntries]]
        ] = {}
        self._hierarchy = AqdefHierarchy()

    # -- insertion --------------------------------------------------------

    def put_part_entry(self, key: KKey | str, index: PartIndex, value: Any) -> None:
        """Store a part value. ``None`` values are ignored."""
        if value is None:
            return
        entries = self._part_entries.get(index)
        if entries is None:
            entries = self._part_entries[index] = PartEntries(index)
        entries.put(key, value)

    def put_part_entries(self, part_entries: PartEntries) -> None:
        """Merge all entries into the part, overwriting existing values."""
        index = part_entries.index
        entries = self._part_entries.get(index)
        if entries is None:
            entries = self._part_entries[index] = PartEntries(index)
        entries.put_all(part_entries, overwrite_existing=True)

    def put_characteristic_entry(
        self, key: KKey | str, index: CharacteristicIndex, value: Any
    ) -> None:
        """Store a characteristic value. ``None`` values are ignored."""
        if value is None:
            return
        self._characteristic_entries_for(index).put(key, value)

    def put_characteristic_entries(self, characteristic_entries: CharacteristicEntries) -> None:
        """Merge all entries into the characteristic, overwriting existing values."""
        entries = self._characteristic_entries_for(characteristic_entries.index)
        entries.put_all(characteristic_entries, overwrite_existing=True)

    def _characteristic_entries_for(self, index: CharacteristicIndex) -> CharacteristicEntries:
        characteristics = self._characteristic_entries.setdefault(index.part_index, {})  # type: ignore[arg-type]
        entries = characteristics.get(index)
        if entries is None:
            entries = characteristics[index] = CharacteristicEntries(index)
        return entries

    def put_group_entry(self, key: KKey | str, index: GroupIndex, value: Any) -> None:
        """Store a group value. ``None`` values are ignored."""
        if value is None:
            return
        self._group_entries_for(index).put(key, value)

    def put_group_entries(self, group_entries: GroupEntries) -> None:
        """Merge all entries into the group, overwriting existing values."""
        self._group_entries_for(group_entries.index).put_all(group_entries, overwrite_existing=True)

    def _group_entries_for(self, index: GroupIndex) -> GroupEntries:
        groups = self._group_entries.setdefault(index.part_index, {})  # type: ignore[arg-type]
        entries = groups.get(index)
        if entries is None:
            entries = groups[index] = GroupEntries(index)
        return entries

    def put_value_entry(self, key: KKey | str, index: ValueIndex, value: Any) -> None:
        """Store a measured value field. ``None`` values are ignored."""
        if value is None:
            return
        self._value_entries_for(index).put(key, value)

    def put_value_entries(self, value_entries: ValueEntries) -> None:
        """Merge all entries into the value row, overwriting existing values."""
        self._value_entries_for(value_entries.index).put_all(value_entries, overwrite_existing=True)

    def _value_entries_for(self, index: ValueIndex) -> ValueEntries:
        characteristics = self._value_entries.setdefault(index.part_index, {})  # type: ignore[arg-type]
        values = characteristics.setdefault(index.characteristic_index, {})  # type: ignore[arg-type]
        entries = values.get(index)
        if entries is None:
            entries = values[index] = ValueEntries(index)
        return entries

    def put_hierarchy_entry(self, key: KKey | str, index: int | None, value: Any) -> None:
        """Forward a hierarchy value to :attr:`hierarchy`."""
        self._hierarchy.put_entry(key, index, value)

    # -- parts ------------------------------------------------------------

    def get_part_indexes(self) -> list[PartIndex]:
        return sorted(self._part_entries)

    def get_part_entries(self, index: PartIndex | int) -> PartEntries | None:
        return self._part_entries.get(_as_part_index(index))

    def get_parts(self) -> list[PartEntries]:
        return _ordered(self._part_entries)

    def contains_part(self, index: PartIndex | int) -> bool:
        return _as_part_index(index) in self._part_entries

    # -- characteristics --------------------------------------------------

    def get_characteristic_indexes(
        self, part_index: PartIndex | int | None = None
    ) -> list[CharacteristicIndex]:
        """Characteristic indexes of one part, or of all parts."""
        return [c.index for c in self.get_characteristics(part_index)]

    def get_characteristic_entries(
        self, index: CharacteristicIndex
    ) -> CharacteristicEntries | None:
        return self._characteristic_entries.get(index.part_index, {}).get(index)  # type: ignore[arg-type]

    def get_characteristics(
        self, part_index: PartIndex | int | None = None
    ) -> list[CharacteristicEntries]:
        """Characteristics of one part, or of all parts, in index order."""
        if part_index is None:
            return [
                characteristic
                for part in sorted(self._characteristic_entries)
                for characteristic in _ordered(self._characteristic_entries[part])
            ]
        return _ordered(self._characteristic_entries.get(_as_part_index(part_index), {}))

    def contains_characteristic(self, index: CharacteristicIndex) -> bool:
        return self.get_characteristic_entries(index) is not None

    def find_part_index_for_characteristic(self, characteristic_index: int) -> PartIndex | None:
        """Find the part that holds the characteristic with the given number."""
        for part_index in sorted(self._characteristic_entries):
            index = CharacteristicIndex(part_index, characteristic_index)
            if index in self._characteristic_entries[part_index]:
                return part_index
        return None

    def find_characteristic_indexes_for_part(
        self,
        part_index: PartIndex | int,
        predicate: Callable[[CharacteristicEntries], bool],
    ) -> list[CharacteristicIndex]:
        """Return indexes of the part's characteristics matching ``predicate``."""
        return [c.index for c in self.get_characteristics(part_index) if predicate(c)]

    # -- groups -----------------------------------------------------------

    def get_group_indexes(self, part_index: PartIndex | int | None = None) -> list[GroupIndex]:
        return [g.index for g in self.get_groups(part_index)]

    def get_group_entries(self, index: GroupIndex) -> GroupEntries | None:
        return self._group_entries.get(index.part_index, {}).get(index)  # type: ignore[arg-type]

    def get_groups(self, part_index: PartIndex | int | None = None) -> list[GroupEntries]:
        """Groups of one part, or of all parts, in index order."""
        if part_index is None:
            return [
                group
                for part in sorted(self._group_entries)
                for group in _ordered(self._group_entries[part])
            ]
        return _ordered(self._group_entries.get(_as_part_index(part_index), {}))

    # -- values -----------------------------------------------------------

    def get_value_indexes(
        self, characteristic_index: CharacteristicIndex | None = None
    ) -> list[ValueIndex]:
        return [v.index for v in self.get_values(characteristic_index)]

    def get_value_entries(self, index: ValueIndex) -> ValueEntries | None:
        characteristics = self._value_entries.get(index.part_index, {})  # type: ignore[arg-type]
        return characteristics.get(index.characteristic_index, {}).get(index)  # type: ignore[arg-type]

    def get_values(
        self, characteristic_index: CharacteristicIndex | None = None
    ) -> list[ValueEntries]:
        """Values of one characteristic, or all values, in index order."""
        if characteristic_index is None:
            return [
                value
                for part in sorted(self._value_entries)
                for characteristic in sorted(self._value_entries[part])
                for value in _ordered(self._value_entries[part][characteristic])
            ]
        characteristics = self._value_entries.get(characteristic_index.part_index, {})  # type: ignore[arg-type]
        return _ordered(characteristics.get(characteristic_index, {}))

    def contains_value(self, index: ValueIndex) -> bool:
        return self.get_value_entries(index) is not None

    def get_value_sets(self, part_index: PartIndex | int) -> list[ValueSet]:
        """Return the values of a part as rows.

        The k-th set holds the k-th value of every characteristic of the
        part. Characteristics with fewer values are missing from later sets.
        """
        value_sets: list[ValueSet] = []
        for characteristic in self.get_characteristics(part_index):
            for position, value in enumerate(self.get_values(characteristic.index)):
                if position == len(value_sets):
                    value_sets.append(ValueSet())
                value_sets[position].add_value(characteristic.index, value)
        return value_sets

    # -- iteration --------------------------------------------------------

    def iter_parts(self) -> Iterator[PartEntries]:
        yield from self.get_parts()

    def iter_characteristics(
        self, part_index: PartIndex | int | None = None
    ) -> Iterator[tuple[PartEntries, CharacteristicEntries]]:
        """Yield (part, characteristic) pairs of parts that have part entries."""
        for part in self._scoped_parts(part_index):
            for characteristic in self.get_characteristics(part.index):
                yield part, characteristic

    def iter_groups(
        self, part_index: PartIndex | int | None = None
    ) -> Iterator[tuple[PartEntries, GroupEntries]]:
        for part in self._scoped_parts(part_index):
            for group in self.get_groups(part.index):
                yield part, group

    def iter_values(
        self,
        part_index: PartIndex | int | None = None,
        characteristic_index: CharacteristicIndex | None = None,
    ) -> Iterator[tuple[PartEntries, CharacteristicEntries, ValueEntries]]:
        """Yield (part, characteristic, value) triples.

        Args:
        ----
            part_index: Restrict to one part.
            characteristic_index: Restrict to one characteristic.

        """
        if characteristic_index is not None:
            part_index = characteristic_index.part_index

        for part, characteristic in self.iter_characteristics(part_index):
            if characteristic_index is not None and characteristic.index != characteristic_index:
                continue
            for value in self.get_values(characteristic.index):
                yield part, characteristic, value

    def _scoped_parts(self, part_index: PartIndex | int | None) -> list[PartEntries]:
        if part_index is None:
            return self.get_parts()
        part = self.get_part_entries(part_index)
        return [part] if part is not None else []

    def for_each_part(self, visitor: Callable[[PartEntries], None]) -> None:
        for part in self.iter_parts():
            visitor(part)

    def for_each_characteristic(
        self,
        visitor: Callable[[PartEntries, CharacteristicEntries], None],
        part_index: PartIndex | int | None = None,
    ) -> None:
        for part, characteristic in self.iter_characteristics(part_index):
            visitor(part, characteristic)

    def for_each_group(
        self,
        visitor: Callable[[PartEntries, GroupEntries], None],
        part_index: PartIndex | int | None = None,
    ) -> None:
        for part, group in self.iter_groups(part_index):
            visitor(part, group)

    def for_each_value(
        self,
        visitor: Callable[[PartEntries, CharacteristicEntries, ValueEntries], None],
        part_index: PartIndex | int | None = None,
        characteristic_index: CharacteristicIndex | None = None,
    ) -> None:
        for part, characteristic, value in self.iter_values(part_index, characteristic_index):
            visitor(part, characteristic, value)

    # -- filtering --------------------------------------------------------

    def filter_parts(self, predicate: Callable[[PartEntries], bool]) -> None:
        """Remove parts not matching ``predicate`` with everything they hold."""
        for part in self.get_parts():
            if not predicate(part):
                self.remove_part(part.index)

    def filter_characteristics(
        self,
        predicate: Callable[[PartEntries, CharacteristicEntries], bool],
        part_index: PartIndex | int | None = None,
    ) -> None:
        """Remove characteristics not matching ``predicate`` with their values."""
        for part, characteristic in list(self.iter_characteristics(part_index)):
            if not predicate(part, characteristic):
                self.remove_characteristic(characteristic.index)

    def filter_groups(
        self,
        predicate: Callable[[PartEntries, GroupEntries], bool],
        part_index: PartIndex | int | None = None,
    ) -> None:
        for part, group in list(self.iter_groups(part_index)):
            if not predicate(part, group):
                self.remove_group(group.index)

    def filter_values(
        self,
        predicate: Callable[[PartEntries, CharacteristicEntries, ValueEntries], bool],
        part_index: PartIndex | int | None = None,
        characteristic_index: CharacteristicIndex | None = None,
    ) -> None:
        for part, characteristic, value in list(
            self.iter_values(part_index, characteristic_index)
        ):
            if not predicate(part, characteristic, value):
                self.remove_value(value.index)

    def remove_part(self, index: PartIndex | int) -> None:
        index = _as_part_index(index)
        self._part_entries.pop(index, None)
        self._characteristic_entries.pop(index, None)
        self._group_entries.pop(index, None)
        self._value_entries.pop(index, None)

    def remove_characteristic(self, index: CharacteristicIndex) -> None:
        part_index = index.part_index
        characteristics = self._characteristic_entries.get(part_index)  # type: ignore[arg-type]
        if characteristics is not None:
            characteristics.pop(index, None)
            if not characteristics:
                del self._characteristic_entries[part_index]  # type: ignore[arg-type]

        values = self._value_entries.get(part_index)  # type: ignore[arg-type]
        if values is not None:
            values.pop(index, None)
            if not values:
                del self._value_entries[part_index]  # type: ignore[arg-type]

    def remove_group(self, index: GroupIndex) -> None:
        groups = self._group_entries.get(index.part_index)  # type: ignore[arg-type]
        if groups is not None:
            groups.pop(index, None)
            if not groups:
                del self._group_entries[index.part_index]  # type: ignore[arg-type]

    def remove_value(self, index: ValueIndex) -> None:
        characteristics = self._value_entries.get(index.part_index)  # type: ignore[arg-type]
        if characteristics is None:
            return
        values = characteristics.get(index.characteristic_index)  # type: ignore[arg-type]
        if values is None:
            return
        values.pop(index, None)
        if not values:
            del characteristics[index.characteristic_index]  # type: ignore[arg-type]
        if not characteristics:
            del self._value_entries[index.part_index]  # type: ignore[arg-type]

    # -- aggregate queries ------------------------------------------------

    def get_any_value_of(self, key: KKey | str) -> Any:
        """Return a value of ``key`` from any entry of its level.

        Raises
        ------
            ValueError: If the key is not a part, characteristic, group or
                value key.

        """
        key = KKey.of(key)
        if key.is_any_part_level:
            candidates: list[Any] = self.get_parts()
        elif key.is_any_characteristic_level:
            candidates = self.get_characteristics()
        elif key.is_group_level:
            candidates = self.get_groups()
        elif key.is_any_value_level:
            candidates = self.get_values()
        else:
            raise ValueError(f"Unsupported level of k-key {key}: {key.level.value}")

        for entries in candidates:
            value = entries.get_value(key)
            if value is not None:
                return value
        return None

    def get_characteristic_count(self) -> int:
        return sum(len(c) for c in self._characteristic_entries.values())

    def get_value_count(self) -> int:
        return sum(
            len(values)
            for characteristics in self._value_entries.values()
            for values in characteristics.values()
        )

    @property
    def hierarchy(self) -> AqdefHierarchy:
        return self._hierarchy

    @hierarchy.setter
    def hierarchy(self, hierarchy: AqdefHierarchy) -> None:
        self._hierarchy = hierarchy

    # -- normalization ----------------------------------------------------

    def normalize(self) -> None:
        """Expand records that apply to all parts, characteristics or values.

        * Part entries with index 0 become part 1 when there is no other
          part, otherwise they fill in missing values of every part.
        * Characteristic entries with index 0/0 fill in missing values of
          every characteristic, value rows under 0/0 fill in the value row
          with the same number of every characteristic.
        * Characteristic entries with index p/0 fill in missing values of
          every characteristic of part p.
        * Group entries with index 0/0 fill in missing values of every group,
          group entries with index p/0 those of every group of part p.
        * Every part holding characteristics, groups or values gets part
          entries, possibly empty.
        * A simple hierarchy is converted to the full form.

        Normalizing twice has no further effect.
        """
        self._normalize_part_entries()
        self._normalize_characteristic_entries()
        self._normalize_group_entries()
        self._ensure_part_entries()
        self._hierarchy = self._hierarchy.normalize(self)

    def _normalize_part_entries(self) -> None:
        entries_for_all_parts = self._part_entries.pop(ALL_PARTS, None)
        if entries_for_all_parts is None:
            return

        if not self._part_entries:
            first_part = PartIndex(1)
            self._part_entries[first_part] = entries_for_all_parts.with_index(first_part)  # type: ignore[assignment]
            return

        for part in self._part_entries.values():
            part.put_all(entries_for_all_parts.with_index(part.index), overwrite_existing=False)

    def _normalize_characteristic_entries(self) -> None:
        all_characteristics_index = CharacteristicIndex(ALL_PARTS, 0)

        values_for_all: dict[int | None, ValueEntries] = {}
        for value in self._pop_values(all_characteristics_index):
            values_for_all[value.index.value_index] = value
        entries_for_all = self._pop_characteristic(all_characteristics_index)

        entries_for_part: dict[PartIndex, CharacteristicEntries] = {}
        for part_index in list(self._characteristic_entries):
            if part_index == ALL_PARTS:
                continue
            part_entries = self._pop_characteristic(CharacteristicIndex(part_index, 0))
            if part_entries is not None:
                entries_for_part[part_index] = part_entries

        if entries_for_all is None and not values_for_all and not entries_for_part:
            return

        for characteristic in self.get_characteristics():
            index = characteristic.index
            if entries_for_all is not None:
                characteristic.put_all(entries_for_all.with_index(index), overwrite_existing=False)

            part_entries = entries_for_part.get(index.part_index)  # type: ignore[arg-type]
            if part_entries is not None:
                characteristic.put_all(part_entries.with_index(index), overwrite_existing=False)

            for value in self.get_values(index):
                value_for_all = values_for_all.get(value.index.value_index)
                if value_for_all is not None:
                    value.put_all(value_for_all.with_index(value.index), overwrite_existing=False)

    def _normalize_group_entries(self) -> None:
        groups_for_all_parts = self._group_entries.pop(ALL_PARTS, {})
        entries_for_all = groups_for_all_parts.get(GroupIndex(ALL_PARTS, 0))

        entries_for_part: dict[PartIndex, GroupEntries] = {}
        for part_index, groups in list(self._group_entries.items()):
            part_entries = groups.pop(GroupIndex(part_index, 0), None)
            if part_entries is not None:
                entries_for_part[part_index] = part_entries
            if not groups:
                del self._group_entries[part_index]

        if entries_for_all is None and not entries_for_part:
            return

        for group in self.get_groups():
            index = group.index
            if entries_for_all is not None:
                group.put_all(entries_for_all.with_index(index), overwrite_existing=False)

            part_entries = entries_for_part.get(index.part_index)  # type: ignore[arg-type]
            if part_entries is not None:
                group.put_all(part_entries.with_index(index), overwrite_existing=False)

    def _ensure_part_entries(self) -> None:
        part_indexes = (
            set(self._characteristic_entries) | set(self._group_entries) | set(self._value_entries)
        )
        for part_index in part_indexes:
            if part_index != ALL_PARTS and part_index not in self._part_entries:
                self._part_entries[part_index] = PartEntries(part_index)

    def _pop_characteristic(self, index: CharacteristicIndex) -> CharacteristicEntries | None:
        entries = self.get_characteristic_entries(index)
        if entries is not None:
            self.remove_characteristic(index)
            return entries
        return None

    def _pop_values(self, index: CharacteristicIndex) -> list[ValueEntries]:
        values = self.get_values(index)
        characteristics = self._value_entries.get(index.part_index)  # type: ignore[arg-type]
        if characteristics is not None:
            characteristics.pop(index, None)
            if not characteristics:
                del self._value_entries[index.part_index]  # type: ignore[arg-type]
        return values

    # -- comparison -------------------------------------------------------

    def _snapshot(self) -> tuple[Any, ...]:
        def prune(mapping: dict[Any, Any]) -> dict[Any, Any]:
            pruned = {}
            for key, value in mapping.items():
                if isinstance(value, dict):
                    value = prune(value)
                    if not value:
                        continue
                pruned[key] = value
            return pruned

        return (
            self._part_entries,
            prune(self._characteristic_entries),
            prune(self._group_entries),
            prune(self._value_entries),
            self._hierarchy,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AqdefObjectModel):
            return NotImplemented
        return self._snapshot() == other._snapshot()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"AqdefObjectModel(parts={len(self._part_entries)}, "
            f"characteristics={self.get_characteristic_count()}, "
            f"values={self.get_value_count()})"
        )
