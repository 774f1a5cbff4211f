"""Entries (K-key / value pairs) of parts, characteristics, groups, values and hierarchy."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, Protocol, TypeVar

from aqdef.kkey import KKey
from aqdef.model.indices import CharacteristicIndex, GroupIndex, NodeIndex, PartIndex, ValueIndex

I = TypeVar("I")
E = TypeVar("E", bound="Entry[Any]")


class HasKKeyValues(Protocol):
    """Gives access to values by K-key."""

    def get_value(self, kkey: KKey | str, default: Any = None) -> Any: ...


@dataclass(frozen=True)
class Entry(ABC, Generic[I]):
    """A single K-key value stored under an index.

    Subclasses restrict which K-key levels they accept. A mismatching key
    raises :class:`ValueError` on construction.
    """

    key: KKey
    index: I
    value: Any

    def __post_init__(self) -> None:
        key = KKey.of(self.key)
        object.__setattr__(self, "key", key)
        if not self.accepts(key):
            raise ValueError(
                f"K-key {key} of level {key.level.value} can't be used in {type(self).__name__}"
            )

    @classmethod
    @abstractmethod
    def accepts(cls, key: KKey) -> bool:
        """Whether ``key`` has a level this entry kind can hold."""

    def with_index(self: E, index: Any) -> E:
        """Return a copy of this entry stored under ``index``."""
        return type(self)(self.key, index, self.value)


@dataclass(frozen=True)
class PartEntry(Entry[PartIndex]):
    @classmethod
    def accepts(cls, key: KKey) -> bool:
        return key.is_any_part_level


@dataclass(frozen=True)
class CharacteristicEntry(Entry[CharacteristicIndex]):
    @classmethod
    def accepts(cls, key: KKey) -> bool:
        return key.is_any_characteristic_level


@dataclass(frozen=True)
class GroupEntry(Entry[GroupIndex]):
    @classmethod
    def accepts(cls, key: KKey) -> bool:
        return key.is_group_level


@dataclass(frozen=True)
class ValueEntry(Entry[ValueIndex]):
    @classmethod
    def accepts(cls, key: KKey) -> bool:
        return key.is_any_value_level


@dataclass(frozen=True)
class HierarchyEntry(Entry[NodeIndex]):
    """Node definition or binding. The value is an integer index."""

    @classmethod
    def accepts(cls, key: KKey) -> bool:
        return key.is_hierarchy_level


class Entries(Generic[E, I]):
    """All entries stored under one index.

    Behaves like a mapping of K-key to value, but keeps the entry objects
    and checks that each entry belongs to :attr:`index`. Iteration yields
    entries ordered by K-key.
    """

    entry_type: ClassVar[type[Entry[Any]]]

    def __init__(self, index: I, entries: Iterable[E] = ()) -> None:
        self._index = index
        self._entries: dict[KKey, E] = {}
        for entry in entries:
            self.put_entry(entry)

    @property
    def index(self) -> I:
        return self._index

    def put(self, key: KKey | str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value.

        ``None`` values are ignored.
        """
        if value is None:
            return
        self.put_entry(self.entry_type(KKey.of(key), self._index, value))  # type: ignore[arg-type]

    def put_if_absent(self, key: KKey | str, value: Any) -> None:
        """Store ``value`` unless ``key`` already has a value."""
        if KKey.of(key) not in self._entries:
            self.put(key, value)

    def put_entry(self, entry: E) -> None:
        """Store an entry. Its index must equal the index of this container."""
        if not isinstance(entry, self.entry_type):
            raise ValueError(f"{type(self).__name__} can't hold {type(entry).__name__}")
        if entry.index != self._index:
            raise ValueError(
                f"Index of entry {entry.index} does not match index {self._index} "
                f"of {type(self).__name__}"
            )
        self._entries[entry.key] = entry

    def put_all(self, entries: Entries[E, I], overwrite_existing: bool) -> None:
        """Copy all entries of ``entries`` into this container.

        Args:
        ----
            entries: Entries with the same index as this container.
            overwrite_existing: Whether values already present are replaced.

        """
        for entry in entries:
            if overwrite_existing or entry.key not in self._entries:
                self.put_entry(entry)

    def get(self, key: KKey | str) -> E | None:
        """Return the entry of ``key``."""
        return self._entries.get(KKey.of(key))

    def get_value(self, key: KKey | str, default: Any = None) -> Any:
        """Return the value of ``key`` or ``default``."""
        entry = self._entries.get(KKey.of(key))
        return default if entry is None else entry.value

    def remove(self, key: KKey | str) -> E | None:
        """Remove and return the entry of ``key``."""
        return self._entries.pop(KKey.of(key), None)

    def keys(self) -> list[KKey]:
        """K-keys in sort order."""
        return sorted(self._entries)

    def items(self) -> list[tuple[KKey, Any]]:
        """(K-key, value) pairs in K-key order."""
        return [(entry.key, entry.value) for entry in self]

    def with_index(self, index: I) -> Entries[E, I]:
        """Return a copy with every entry moved to ``index``."""
        return type(self)(index, (entry.with_index(index) for entry in self._entries.values()))

    def is_empty(self) -> bool:
        return not self._entries

    def __iter__(self) -> Iterator[E]:
        for key in sorted(self._entries):
            yield self._entries[key]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, str):
            key = KKey.of(key)
        return key in self._entries

    def __getitem__(self, key: KKey | str) -> Any:
        return self._entries[KKey.of(key)].value

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._index == other._index and self._entries == other._entries  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        values = ", ".join(f"{key}={value!r}" for key, value in self.items())
        return f"{type(self).__name__}({self._index}: {values})"


class PartEntries(Entries[PartEntry, PartIndex]):
    entry_type = PartEntry


class CharacteristicEntries(Entries[CharacteristicEntry, CharacteristicIndex]):
    entry_type = CharacteristicEntry


class GroupEntries(Entries[GroupEntry, GroupIndex]):
    entry_type = GroupEntry


class ValueEntries(Entries[ValueEntry, ValueIndex]):
    entry_type = ValueEntry
