"""Tests for the object model and hierarchy builders."""

import logging
from decimal import Decimal

import pytest
from aqdef.model import (
    AqdefHierarchyBuilder,
    AqdefObjectModelBuilder,
    CharacteristicEntriesAggregator,
    CharacteristicIndex,
    GroupIndex,
    HierarchyEntry,
    NodeIndex,
    PartIndex,
    ValueEntriesAggregator,
    ValueIndex,
)
from aqdef.model.hierarchy import (
    KEY_CHARACTERISTIC_BINDING,
    KEY_CHARACTERISTIC_NODE,
    KEY_GROUP_NODE,
    KEY_NODE_BINDING,
    KEY_PART_NODE,
)


class TestAqdefObjectModelBuilder:
    """Tests for AqdefObjectModelBuilder."""

    def test_counters(self) -> None:
        """Should advance indexes and restart values per characteristic."""
        builder = AqdefObjectModelBuilder()
        builder.create_part_entry("K1001", "P1")
        for i in range(2):
            builder.create_characteristic_entry("K2001", f"C{i + 1}")
            for j in range(3):
                builder.create_value_entry("K0001", Decimal(j))
                builder.next_value()
            builder.next_characteristic()

        model = builder.build()

        assert model.get_characteristic_indexes(1) == [
            CharacteristicIndex.of(1, 1),
            CharacteristicIndex.of(1, 2),
        ]
        assert model.get_value_indexes(CharacteristicIndex.of(1, 2)) == [
            ValueIndex.of(CharacteristicIndex.of(1, 2), n) for n in (1, 2, 3)
        ]
        assert model.hierarchy.is_empty()

    def test_parts_and_groups(self) -> None:
        """Should place entries under the current part and group."""
        builder = AqdefObjectModelBuilder()
        builder.create_part_entry("K1001", "P1")
        builder.create_group_entry("K5001", "G1")
        builder.next_group()
        builder.create_group_entry("K5001", "G2")
        builder.next_part()
        builder.create_part_entry("K1001", "P2")

        model = builder.build()

        assert model.get_part_indexes() == [PartIndex(1), PartIndex(2)]
        assert model.get_group_indexes(1) == [GroupIndex.of(1, 1), GroupIndex.of(1, 2)]

    def test_replace_part_entry_of_all_parts(self) -> None:
        """Should set the value of every part for index 0."""
        builder = AqdefObjectModelBuilder()
        builder.create_part_entry("K1001", "P1")
        builder.next_part()
        builder.create_part_entry("K1001", "P2")

        builder.replace_part_entry("K1002", 0, "title")
        builder.replace_part_entry("K1001", 2, "renamed")

        model = builder.build()
        assert [p.get_value("K1002") for p in model.get_parts()] == ["title", "title"]
        assert model.get_part_entries(2).get_value("K1001") == "renamed"

    def test_replace_characteristic_entry(self) -> None:
        """Should set the value of every characteristic for index 0."""
        builder = AqdefObjectModelBuilder()
        builder.create_part_entry("K1001", "P1")
        builder.create_characteristic_entry("K2001", "C1")
        builder.next_characteristic()
        builder.create_characteristic_entry("K2001", "C2")

        builder.replace_characteristic_entry("K2142", 0, 0, "mm")
        builder.replace_characteristic_entry("K2001", 1, 2, "changed")

        model = builder.build()
        assert [c.get_value("K2142") for c in model.get_characteristics()] == ["mm", "mm"]
        assert model.get_characteristic_entries(CharacteristicIndex.of(1, 2))["K2001"] == "changed"

    def test_hierarchy(self) -> None:
        """Should build nodes and bindings from parent ids."""
        builder = AqdefObjectModelBuilder()
        builder.create_part_entry("K1001", "P1")
        builder.create_hierarchy_node_of_part()
        builder.create_characteristic_entry("K2001", "C1")
        builder.create_hierarchy_node_of_characteristic(100, None)
        builder.next_characteristic()
        builder.create_characteristic_entry("K2001", "C2")
        builder.create_hierarchy_node_of_characteristic(200, 100)

        hierarchy = builder.build().hierarchy

        assert hierarchy.node_definitions() == [
            HierarchyEntry(KEY_PART_NODE, NodeIndex(1), 1),
            HierarchyEntry(KEY_CHARACTERISTIC_NODE, NodeIndex(2), 1),
            HierarchyEntry(KEY_CHARACTERISTIC_NODE, NodeIndex(3), 2),
        ]
        assert hierarchy.node_bindings() == [
            HierarchyEntry(KEY_NODE_BINDING, NodeIndex(1), 2),
            HierarchyEntry(KEY_CHARACTERISTIC_BINDING, NodeIndex(2), 2),
        ]
        assert hierarchy.get_parent_index(CharacteristicIndex.of(1, 2)) == (
            CharacteristicIndex.of(1, 1)
        )


class TestAqdefHierarchyBuilder:
    """Tests for AqdefHierarchyBuilder."""

    def test_without_parents(self) -> None:
        """Should return an empty hierarchy if nothing has a parent."""
        builder = AqdefHierarchyBuilder()
        builder.create_hierarchy_node_of_part(1, 1)
        builder.create_hierarchy_node_of_characteristic(2, 1, 1, 100, None)

        assert builder.get_hierarchy().is_empty()

    def test_group(self) -> None:
        """Should bind groups as nodes."""
        builder = AqdefHierarchyBuilder()
        builder.create_hierarchy_node_of_part(1, 1)
        builder.create_hierarchy_node_of_group(2, 1, 1, 10, None)
        builder.create_hierarchy_node_of_characteristic(3, 1, 1, 100, 10)

        hierarchy = builder.get_hierarchy()

        assert HierarchyEntry(KEY_GROUP_NODE, NodeIndex(2), 1) in hierarchy.node_definitions()
        assert hierarchy.node_bindings() == [
            HierarchyEntry(KEY_NODE_BINDING, NodeIndex(1), 2),
            HierarchyEntry(KEY_CHARACTERISTIC_BINDING, NodeIndex(2), 1),
        ]
        assert hierarchy.get_parent_index(CharacteristicIndex.of(1, 1)) == GroupIndex.of(1, 1)

    def test_missing_parent(self, caplog: pytest.LogCaptureFixture) -> None:
        """Should log a warning and return an empty hierarchy."""
        builder = AqdefHierarchyBuilder()
        builder.create_hierarchy_node_of_part(1, 1)
        builder.create_hierarchy_node_of_characteristic(2, 1, 1, 100, 999)

        with caplog.at_level(logging.WARNING, logger="aqdef.model.builder"):
            hierarchy = builder.get_hierarchy()

        assert hierarchy.is_empty()
        assert "AQDEF hierarchy was not created" in caplog.text


class TestAggregators:
    """Tests for reading values across levels."""

    def test_value_aggregator(self) -> None:
        """Should dispatch by the level of the requested key."""
        builder = AqdefObjectModelBuilder()
        builder.create_part_entry("K1001", "P1")
        builder.create_characteristic_entry("K2001", "C1")
        builder.create_value_entry("K0001", Decimal("1.5"))
        model = builder.build()
        part, characteristic, value = next(model.iter_values())

        aggregator = ValueEntriesAggregator(part, characteristic, value)

        assert aggregator.get_value("K1001") == "P1"
        assert aggregator.get_value("K2001") == "C1"
        assert aggregator.get_value("K0001") == Decimal("1.5")
        assert aggregator.get_value("K0002", 0) == 0

    def test_unknown_level(self, caplog: pytest.LogCaptureFixture) -> None:
        """Should warn about keys of other levels."""
        builder = AqdefObjectModelBuilder()
        builder.create_part_entry("K1001", "P1")
        builder.create_characteristic_entry("K2001", "C1")
        part, characteristic = next(builder.build().iter_characteristics())

        aggregator = CharacteristicEntriesAggregator(part, characteristic)

        with caplog.at_level(logging.WARNING, logger="aqdef.model.aggregators"):
            assert aggregator.get_value("K0001", "none") == "none"
        assert "Unknown k-key level" in caplog.text
