"""Tests for AqdefObjectModel."""

from decimal import Decimal

import pytest
from aqdef.model import (
    AqdefObjectModel,
    CharacteristicIndex,
    GroupIndex,
    PartIndex,
    ValueIndex,
)


def _characteristic(part: int, characteristic: int) -> CharacteristicIndex:
    return CharacteristicIndex.of(part, characteristic)


def _value(part: int, characteristic: int, value: int) -> ValueIndex:
    return ValueIndex.of(_characteristic(part, characteristic), value)


@pytest.fixture
def model() -> AqdefObjectModel:
    """Two parts, three characteristics and a few values."""
    model = AqdefObjectModel()
    model.put_part_entry("K1001", PartIndex(1), "P1")
    model.put_part_entry("K1001", PartIndex(2), "P2")
    model.put_characteristic_entry("K2001", _characteristic(1, 1), "C1")
    model.put_characteristic_entry("K2001", _characteristic(1, 2), "C2")
    model.put_characteristic_entry("K2001", _characteristic(2, 1), "D1")
    model.put_value_entry("K0001", _value(1, 1, 1), Decimal("1.0"))
    model.put_value_entry("K0001", _value(1, 1, 2), Decimal("2.0"))
    model.put_value_entry("K0001", _value(1, 2, 1), Decimal("3.0"))
    model.put_value_entry("K0001", _value(2, 1, 1), Decimal("4.0"))
    model.put_group_entry("K5001", GroupIndex.of(1, 1), "G1")
    return model


class TestQueries:
    """Tests for lookups and counts."""

    def test_parts(self, model: AqdefObjectModel) -> None:
        """Should return parts in index order."""
        assert model.get_part_indexes() == [PartIndex(1), PartIndex(2)]
        assert model.get_part_entries(2).get_value("K1001") == "P2"
        assert model.contains_part(1)
        assert not model.contains_part(3)

    def test_characteristics(self, model: AqdefObjectModel) -> None:
        """Should return characteristics of one or all parts."""
        assert model.get_characteristic_indexes(1) == [_characteristic(1, 1), _characteristic(1, 2)]
        assert len(model.get_characteristics()) == 3
        assert model.get_characteristic_count() == 3
        assert model.contains_characteristic(_characteristic(2, 1))

    def test_values(self, model: AqdefObjectModel) -> None:
        """Should return values of one or all characteristics."""
        assert model.get_value_indexes(_characteristic(1, 1)) == [_value(1, 1, 1), _value(1, 1, 2)]
        assert model.get_value_count() == 4
        assert model.get_value_entries(_value(2, 1, 1)).get_value("K0001") == Decimal("4.0")

    def test_none_values_are_ignored(self) -> None:
        """Should not create entries for None values."""
        model = AqdefObjectModel()
        model.put_part_entry("K1001", PartIndex(1), None)
        model.put_value_entry("K0001", _value(1, 1, 1), None)
        assert model.get_parts() == []
        assert model.get_value_count() == 0

    def test_find_part_for_characteristic(self, model: AqdefObjectModel) -> None:
        """Should find the first part holding the characteristic number."""
        assert model.find_part_index_for_characteristic(2) == PartIndex(1)
        assert model.find_part_index_for_characteristic(5) is None

    def test_find_characteristics_by_predicate(self, model: AqdefObjectModel) -> None:
        """Should return indexes of matching characteristics."""
        found = model.find_characteristic_indexes_for_part(
            1, lambda c: c.get_value("K2001") == "C2"
        )
        assert found == [_characteristic(1, 2)]

    def test_any_value_of(self, model: AqdefObjectModel) -> None:
        """Should return the first value found on the key's level."""
        assert model.get_any_value_of("K1001") == "P1"
        assert model.get_any_value_of("K0001") == Decimal("1.0")
        assert model.get_any_value_of("K2002") is None

    def test_any_value_of_unsupported_level(self, model: AqdefObjectModel) -> None:
        """Should reject keys outside the entry levels."""
        with pytest.raises(ValueError):
            model.get_any_value_of("K5111")

    def test_value_sets(self, model: AqdefObjectModel) -> None:
        """Should group the k-th value of every characteristic."""
        value_sets = model.get_value_sets(1)

        assert len(value_sets) == 2
        assert value_sets[0].get_characteristic_indexes() == [
            _characteristic(1, 1),
            _characteristic(1, 2),
        ]
        assert len(value_sets[1]) == 1
        assert value_sets[1].get_values_of_characteristic(_characteristic(1, 1)).index == (
            _value(1, 1, 2)
        )


class TestIteration:
    """Tests for ordered iteration and visitors."""

    def test_iter_values(self, model: AqdefObjectModel) -> None:
        """Should yield values with their part and characteristic."""
        triples = list(model.iter_values())

        assert [value.index for _, _, value in triples] == [
            _value(1, 1, 1),
            _value(1, 1, 2),
            _value(1, 2, 1),
            _value(2, 1, 1),
        ]
        part, characteristic, _ = triples[3]
        assert part.get_value("K1001") == "P2"
        assert characteristic.get_value("K2001") == "D1"

    def test_iter_values_of_characteristic(self, model: AqdefObjectModel) -> None:
        """Should restrict iteration to one characteristic."""
        values = [v.index for _, _, v in model.iter_values(characteristic_index=_characteristic(1, 2))]
        assert values == [_value(1, 2, 1)]

    def test_for_each_characteristic(self, model: AqdefObjectModel) -> None:
        """Should visit characteristics of one part."""
        visited: list[str] = []
        model.for_each_characteristic(lambda p, c: visited.append(c.get_value("K2001")), 1)
        assert visited == ["C1", "C2"]

    def test_for_each_group(self, model: AqdefObjectModel) -> None:
        """Should visit groups with their part."""
        visited: list[tuple[str, str]] = []
        model.for_each_group(lambda p, g: visited.append((p["K1001"], g["K5001"])))
        assert visited == [("P1", "G1")]


class TestFiltering:
    """Tests for filters and removal."""

    def test_filter_parts_cascades(self, model: AqdefObjectModel) -> None:
        """Should remove characteristics, groups and values of dropped parts."""
        model.filter_parts(lambda p: p.get_value("K1001") == "P2")

        assert model.get_part_indexes() == [PartIndex(2)]
        assert model.get_characteristic_indexes() == [_characteristic(2, 1)]
        assert model.get_groups() == []
        assert model.get_value_count() == 1

    def test_filter_characteristics_cascades(self, model: AqdefObjectModel) -> None:
        """Should remove the values of dropped characteristics."""
        model.filter_characteristics(lambda p, c: c.get_value("K2001") != "C1")

        assert model.get_characteristic_indexes(1) == [_characteristic(1, 2)]
        assert model.get_values(_characteristic(1, 1)) == []
        assert model.get_value_count() == 2

    def test_filter_values(self, model: AqdefObjectModel) -> None:
        """Should remove values not matching the predicate."""
        model.filter_values(lambda p, c, v: v.get_value("K0001") > Decimal("2.5"))

        assert model.get_value_indexes() == [_value(1, 2, 1), _value(2, 1, 1)]

    def test_filter_groups(self, model: AqdefObjectModel) -> None:
        """Should remove groups not matching the predicate."""
        model.filter_groups(lambda p, g: False)
        assert model.get_groups() == []

    def test_removal_keeps_equality(self, model: AqdefObjectModel) -> None:
        """Should compare equal to a model that never held the removed data."""
        model.remove_part(1)

        expected = AqdefObjectModel()
        expected.put_part_entry("K1001", PartIndex(2), "P2")
        expected.put_characteristic_entry("K2001", _characteristic(2, 1), "D1")
        expected.put_value_entry("K0001", _value(2, 1, 1), Decimal("4.0"))
        assert model == expected


class TestNormalize:
    """Tests for normalization of records addressing several objects."""

    def test_part_zero_becomes_part_one(self) -> None:
        """Should relabel part 0 when no other part exists."""
        model = AqdefObjectModel()
        model.put_part_entry("K1001", PartIndex(0), "shared")

        model.normalize()

        assert model.get_part_indexes() == [PartIndex(1)]
        assert model.get_part_entries(1).get_value("K1001") == "shared"

    def test_part_zero_fills_other_parts(self) -> None:
        """Should only fill missing part values."""
        model = AqdefObjectModel()
        model.put_part_entry("K1001", PartIndex(0), "shared")
        model.put_part_entry("K1002", PartIndex(0), "title")
        model.put_part_entry("K1001", PartIndex(1), "P1")
        model.put_part_entry("K1001", PartIndex(2), "P2")

        model.normalize()

        assert model.get_part_indexes() == [PartIndex(1), PartIndex(2)]
        assert model.get_part_entries(1).get_value("K1001") == "P1"
        assert model.get_part_entries(2).get_value("K1002") == "title"

    def test_characteristics_of_part(self) -> None:
        """Should fill every characteristic of the part from index p/0."""
        model = AqdefObjectModel()
        model.put_part_entry("K1001", PartIndex(1), "P1")
        model.put_characteristic_entry("K2142", _characteristic(1, 0), "mm")
        model.put_characteristic_entry("K2001", _characteristic(1, 1), "C1")
        model.put_characteristic_entry("K2001", _characteristic(1, 2), "C2")
        model.put_characteristic_entry("K2142", _characteristic(1, 2), "in")

        model.normalize()

        assert model.get_characteristic_indexes() == [_characteristic(1, 1), _characteristic(1, 2)]
        assert model.get_characteristic_entries(_characteristic(1, 1))["K2142"] == "mm"
        assert model.get_characteristic_entries(_characteristic(1, 2))["K2142"] == "in"

    def test_values_for_all_characteristics(self) -> None:
        """Should fill value rows with the same number from index 0/0."""
        model = AqdefObjectModel()
        model.put_part_entry("K1001", PartIndex(1), "P1")
        model.put_characteristic_entry("K2001", _characteristic(1, 1), "C1")
        model.put_characteristic_entry("K2001", _characteristic(1, 2), "C2")
        model.put_value_entry("K0001", _value(1, 1, 1), Decimal("1"))
        model.put_value_entry("K0001", _value(1, 2, 1), Decimal("2"))
        model.put_value_entry("K0006", _value(0, 0, 1), "batch")
        model.put_characteristic_entry("K2002", _characteristic(0, 0), "shared")

        model.normalize()

        assert model.get_value_entries(_value(1, 1, 1))["K0006"] == "batch"
        assert model.get_value_entries(_value(1, 2, 1))["K0006"] == "batch"
        assert model.get_characteristic_entries(_characteristic(1, 2))["K2002"] == "shared"
        assert model.get_characteristic_count() == 2
        assert model.get_value_count() == 2

    def test_groups_for_all_parts(self) -> None:
        """Should fill every group from index 0/0 and drop the record."""
        model = AqdefObjectModel()
        model.put_part_entry("K1001", PartIndex(1), "P1")
        model.put_part_entry("K1001", PartIndex(2), "P2")
        model.put_group_entry("K5002", GroupIndex.of(0, 0), "shared")
        model.put_group_entry("K5001", GroupIndex.of(1, 1), "G1")
        model.put_group_entry("K5001", GroupIndex.of(2, 1), "G2")
        model.put_group_entry("K5002", GroupIndex.of(2, 1), "own")

        model.normalize()

        assert [group.index for group in model.get_groups()] == [
            GroupIndex.of(1, 1),
            GroupIndex.of(2, 1),
        ]
        assert model.get_group_entries(GroupIndex.of(1, 1))["K5002"] == "shared"
        assert model.get_group_entries(GroupIndex.of(2, 1))["K5002"] == "own"

    def test_groups_of_part(self) -> None:
        """Should fill every group of the part from index p/0."""
        model = AqdefObjectModel()
        model.put_part_entry("K1001", PartIndex(1), "P1")
        model.put_group_entry("K5003", GroupIndex.of(1, 0), "short")
        model.put_group_entry("K5001", GroupIndex.of(1, 1), "G1")
        model.put_group_entry("K5001", GroupIndex.of(1, 2), "G2")

        model.normalize()

        assert [group.index for group in model.get_groups(1)] == [
            GroupIndex.of(1, 1),
            GroupIndex.of(1, 2),
        ]
        assert model.get_group_entries(GroupIndex.of(1, 2))["K5003"] == "short"

    def test_creates_missing_part_entries(self) -> None:
        """Should add empty part entries for parts with only characteristics."""
        model = AqdefObjectModel()
        model.put_characteristic_entry("K2001", _characteristic(1, 1), "C1")

        model.normalize()

        assert model.get_part_indexes() == [PartIndex(1)]
        assert model.get_part_entries(1).is_empty()

    def test_idempotent(self, model: AqdefObjectModel) -> None:
        """Should not change a normalized model."""
        model.put_part_entry("K1002", PartIndex(0), "title")
        model.normalize()
        snapshot_before = repr(model), model.get_part_entries(1).items()

        model.normalize()

        assert (repr(model), model.get_part_entries(1).items()) == snapshot_before
