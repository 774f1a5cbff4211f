"""Tests for indices and entries."""

import pytest
from aqdef.kkey import KKey
from aqdef.model import (
    CharacteristicEntries,
    CharacteristicEntry,
    CharacteristicIndex,
    Entry,
    PartEntries,
    PartEntry,
    PartIndex,
    ValueEntries,
    ValueIndex,
)


class TestIndices:
    """Tests for composite index ordering."""

    def test_part_index_order(self) -> None:
        """Should order part indexes with None first."""
        indexes = [PartIndex(2), PartIndex(None), PartIndex(1)]
        assert sorted(indexes) == [PartIndex(None), PartIndex(1), PartIndex(2)]

    def test_characteristic_index_order(self) -> None:
        """Should order by part first, then characteristic."""
        indexes = [
            CharacteristicIndex.of(2, 1),
            CharacteristicIndex.of(1, 10),
            CharacteristicIndex.of(1, 2),
        ]
        assert sorted(indexes) == [
            CharacteristicIndex.of(1, 2),
            CharacteristicIndex.of(1, 10),
            CharacteristicIndex.of(2, 1),
        ]

    def test_value_index_of(self) -> None:
        """Should take the part from the characteristic index."""
        characteristic = CharacteristicIndex.of(3, 4)
        value = ValueIndex.of(characteristic, 5)
        assert value.part_index == PartIndex(3)
        assert str(value) == "3/4/5"

    def test_wildcards(self) -> None:
        """Should flag indexes addressing every part or characteristic."""
        assert PartIndex(0).applies_to_all_parts
        assert CharacteristicIndex.of(1, 0).applies_to_all_characteristics
        assert ValueIndex.of(CharacteristicIndex.of(1, 0), 1).applies_to_all_values_of_part
        assert not ValueIndex.of(CharacteristicIndex.of(1, 1), 1).applies_to_all_values_of_part

    def test_equal_indexes_hash_equal(self) -> None:
        """Should be usable as dictionary keys."""
        assert {CharacteristicIndex.of(1, 1): "x"}[CharacteristicIndex(PartIndex(1), 1)] == "x"


class TestEntry:
    """Tests for single entries."""

    def test_base_entry_is_abstract(self) -> None:
        """Should only build entries of a concrete level."""
        with pytest.raises(TypeError):
            Entry(KKey.of("K1001"), PartIndex(1), "P1")  # type: ignore[abstract]

    def test_rejects_foreign_level(self) -> None:
        """Should reject keys of another level."""
        with pytest.raises(ValueError):
            PartEntry(KKey.of("K2001"), PartIndex(1), "x")

    def test_accepts_custom_keys(self) -> None:
        """Should accept custom keys of the same level."""
        entry = CharacteristicEntry(KKey.of("KX201"), CharacteristicIndex.of(1, 1), 5)
        assert entry.key == KKey.of("KX201")


class TestEntries:
    """Tests for the entries container."""

    def test_put_and_get(self) -> None:
        """Should store values by K-key and ignore None."""
        entries = PartEntries(PartIndex(1))
        entries.put("K1001", "P1")
        entries.put("K1002", None)

        assert entries.get_value("K1001") == "P1"
        assert entries["K1001"] == "P1"
        assert "K1002" not in entries
        assert entries.get_value("K1002", "fallback") == "fallback"
        assert len(entries) == 1

    def test_rejects_mismatching_index(self) -> None:
        """Should reject entries of another index."""
        entries = PartEntries(PartIndex(1))
        with pytest.raises(ValueError):
            entries.put_entry(PartEntry(KKey.of("K1001"), PartIndex(2), "P"))

    def test_put_all_without_overwrite(self) -> None:
        """Should only fill missing values when not overwriting."""
        index = CharacteristicIndex.of(1, 1)
        target = CharacteristicEntries(index)
        target.put("K2001", "own")
        source = CharacteristicEntries(index)
        source.put("K2001", "other")
        source.put("K2002", "description")

        target.put_all(source, overwrite_existing=False)

        assert target.get_value("K2001") == "own"
        assert target.get_value("K2002") == "description"

    def test_put_all_with_overwrite(self) -> None:
        """Should replace values when overwriting."""
        index = PartIndex(1)
        target = PartEntries(index)
        target.put("K1001", "own")
        source = PartEntries(index)
        source.put("K1001", "other")

        target.put_all(source, overwrite_existing=True)

        assert target.get_value("K1001") == "other"

    def test_iterates_in_key_order(self) -> None:
        """Should iterate entries in K-key order."""
        index = ValueIndex.of(CharacteristicIndex.of(1, 1), 1)
        entries = ValueEntries(index)
        for key in ("K0004", "K0020", "K0002", "K0001"):
            entries.put(key, 1)

        assert [str(key) for key in entries.keys()] == ["K0001", "K0020", "K0002", "K0004"]

    def test_with_index(self) -> None:
        """Should copy every entry under a new index."""
        entries = PartEntries(PartIndex(0))
        entries.put("K1001", "P")

        moved = entries.with_index(PartIndex(3))

        assert moved.index == PartIndex(3)
        assert moved.get("K1001").index == PartIndex(3)
        assert entries.index == PartIndex(0)

    def test_equality(self) -> None:
        """Should compare by index and content."""
        first = PartEntries(PartIndex(1))
        second = PartEntries(PartIndex(1))
        first.put("K1001", "P")
        second.put("K1001", "P")
        assert first == second

        second.put("K1002", "Q")
        assert first != second
