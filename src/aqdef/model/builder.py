"""Builders for creating object models in code.

Example:
-------
    >>> builder = AqdefObjectModelBuilder()
    >>> builder.create_part_entry("K1001", "part number")
    >>> for i in range(3):
    ...     builder.create_characteristic_entry("K2001", f"characteristic {i}")
    ...     for j in range(3):
    ...         builder.create_value_entry("K0001", Decimal(j))
    ...         builder.next_value()
    ...     builder.next_characteristic()
    >>> model = builder.build()

Call :meth:`~AqdefObjectModelBuilder.next_part`,
:meth:`~AqdefObjectModelBuilder.next_characteristic` and
:meth:`~AqdefObjectModelBuilder.next_value` once a record is complete.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from aqdef.kkey import KKey
from aqdef.model.entries import HierarchyEntry
from aqdef.model.hierarchy import (
    KEY_CHARACTERISTIC_BINDING,
    KEY_CHARACTERISTIC_NODE,
    KEY_GROUP_NODE,
    KEY_NODE_BINDING,
    KEY_PART_NODE,
    AqdefHierarchy,
)
from aqdef.model.indices import (
    CharacteristicIndex,
    GroupIndex,
    NodeIndex,
    PartIndex,
    ValueIndex,
)
from aqdef.model.object_model import AqdefObjectModel

logger = logging.getLogger(__name__)


class AqdefObjectModelBuilder:
    """Fill an :class:`AqdefObjectModel` record by record.

    Part, characteristic, group and value indexes are running counters
    starting at 1. Moving to the next characteristic restarts the value
    counter.
    """

    def __init__(self) -> None:
        self._model = AqdefObjectModel()
        self._hierarchy_builder = AqdefHierarchyBuilder()
        self._part_index = 1
        self._characteristic_index = 1
        self._value_index = 1
        self._group_index = 1
        self._hierarchy_node_index = 1

    def build(self) -> AqdefObjectModel:
        """Return the model with the hierarchy built so far."""
        self._model.hierarchy = self._hierarchy_builder.get_hierarchy()
        return self._model

    # -- entries ----------------------------------------------------------

    def create_part_entry(self, key: KKey | str, value: Any) -> None:
        self._model.put_part_entry(KKey.of(key), self._current_part_index(), value)

    def replace_part_entry(self, key: KKey | str, index: int, value: Any) -> None:
        """Set ``key`` of the part ``index``, or of every part if ``index`` is 0."""
        kkey = KKey.of(key)
        if index == 0:
            affected = self._model.get_part_indexes()
        else:
            affected = [PartIndex(index)]

        for part_index in affected:
            self._model.put_part_entry(kkey, part_index, value)

    def create_characteristic_entry(self, key: KKey | str, value: Any) -> None:
        self._model.put_characteristic_entry(
            KKey.of(key), self._current_characteristic_index(), value
        )

    def replace_characteristic_entry(
        self, key: KKey | str, part_index: int, characteristic_index: int, value: Any
    ) -> None:
        """Set ``key`` of one or more characteristics.

        Args:
        ----
            key: K-key to set.
            part_index: Part of the characteristics, 0 for every part.
            characteristic_index: Characteristic to change, 0 for every
                characteristic of the affected parts.
            value: New value.

        """
        kkey = KKey.of(key)
        if part_index == 0:
            affected_parts = self._model.get_part_indexes()
        else:
            affected_parts = [PartIndex(part_index)]

        for affected_part in affected_parts:
            if characteristic_index == 0:
                affected = self._model.get_characteristic_indexes(affected_part)
            else:
                affected = [CharacteristicIndex(affected_part, characteristic_index)]

            for index in affected:
                self._model.put_characteristic_entry(kkey, index, value)

    def create_group_entry(self, key: KKey | str, value: Any) -> None:
        self._model.put_group_entry(KKey.of(key), self._current_group_index(), value)

    def create_value_entry(self, key: KKey | str, value: Any) -> None:
        self._model.put_value_entry(KKey.of(key), self._current_value_index(), value)

    # -- hierarchy --------------------------------------------------------

    def create_hierarchy_node_of_part(self) -> None:
        self._hierarchy_builder.create_hierarchy_node_of_part(
            self._next_hierarchy_node_index(), self._part_index
        )

    def create_hierarchy_node_of_characteristic(
        self, characteristic_id: int, parent_characteristic_id: int | None
    ) -> None:
        """Add the current characteristic to the hierarchy.

        Args:
        ----
            characteristic_id: Caller's identifier of the characteristic.
            parent_characteristic_id: Identifier of the parent characteristic
                or group. ``None`` or 0 binds it directly to the part.

        """
        self._hierarchy_builder.create_hierarchy_node_of_characteristic(
            self._next_hierarchy_node_index(),
            self._part_index,
            self._characteristic_index,
            characteristic_id,
            parent_characteristic_id,
        )

    def create_hierarchy_node_of_group(
        self, characteristic_id: int, parent_characteristic_id: int | None
    ) -> None:
        self._hierarchy_builder.create_hierarchy_node_of_group(
            self._next_hierarchy_node_index(),
            self._part_index,
            self._group_index,
            characteristic_id,
            parent_characteristic_id,
        )

    # -- counters ---------------------------------------------------------

    def next_part(self) -> None:
        """Call after all data of the current part are written."""
        self._part_index += 1

    def next_characteristic(self) -> None:
        """Call after all data of the current characteristic are written."""
        self._characteristic_index += 1
        self._value_index = 1

    def next_value(self) -> None:
        """Call after all data of the current value are written."""
        self._value_index += 1

    def next_group(self) -> None:
        """Call after all data of the current group are written."""
        self._group_index += 1

    def _next_hierarchy_node_index(self) -> int:
        index = self._hierarchy_node_index
        self._hierarchy_node_index += 1
        return index

    def _current_part_index(self) -> PartIndex:
        return PartIndex(self._part_index)

    def _current_characteristic_index(self) -> CharacteristicIndex:
        return CharacteristicIndex(self._current_part_index(), self._characteristic_index)

    def _current_group_index(self) -> GroupIndex:
        return GroupIndex(self._current_part_index(), self._group_index)

    def _current_value_index(self) -> ValueIndex:
        return ValueIndex.of(self._current_characteristic_index(), self._value_index)


class _InvalidHierarchyError(Exception):
    pass


@dataclass(frozen=True)
class _CharacteristicId:
    part_index: int
    characteristic_id: int | None


@dataclass(frozen=True)
class _BindingToParent:
    node_index: int
    parent: _CharacteristicId
    # Set for characteristics, None for groups.
    characteristic_index: int | None = None


class AqdefHierarchyBuilder:
    """Build a full-form hierarchy from parent links.

    Characteristics and groups are identified by caller supplied ids and
    name the id of their parent. The links are resolved to ``K51xx``
    entries when :meth:`get_hierarchy` is called.
    """

    def __init__(self) -> None:
        self._contains_hierarchy = False
        self._nodes: list[HierarchyEntry] = []
        self._bindings: list[_BindingToParent] = []
        self._part_nodes: dict[int, int] = {}
        self._characteristic_nodes: dict[_CharacteristicId, int] = {}

    def get_hierarchy(self) -> AqdefHierarchy:
        """Return the hierarchy, or an empty one if the links are invalid."""
        hierarchy = AqdefHierarchy()
        if not self._contains_hierarchy:
            return hierarchy

        try:
            for node in self._nodes:
                hierarchy.put(node)
            self._write_bindings(hierarchy)
        except _InvalidHierarchyError as e:
            logger.warning("AQDEF hierarchy was not created. Reason: %s", e)
            hierarchy = AqdefHierarchy()

        return hierarchy

    def _write_bindings(self, hierarchy: AqdefHierarchy) -> None:
        for binding in self._bindings:
            parent = binding.parent
            if parent.characteristic_id is None:
                parent_node_index = self._part_nodes.get(parent.part_index)
                if parent_node_index is None:
                    raise _InvalidHierarchyError(
                        f"Part with index ({parent.part_index}) was not found in given data."
                    )
            else:
                parent_node_index = self._characteristic_nodes.get(parent)
                if parent_node_index is None:
                    raise _InvalidHierarchyError(
                        f"Characteristic with part index {parent.part_index} and "
                        f"characteristic id {parent.characteristic_id} was not found in given data."
                    )

            if self._is_node(binding):
                entry = HierarchyEntry(
                    KEY_NODE_BINDING, NodeIndex(parent_node_index), binding.node_index
                )
            else:
                entry = HierarchyEntry(
                    KEY_CHARACTERISTIC_BINDING,
                    NodeIndex(parent_node_index),
                    binding.characteristic_index,
                )
            hierarchy.put(entry)

    def _is_node(self, binding: _BindingToParent) -> bool:
        """Whether the child is a group or a characteristic with children."""
        if binding.characteristic_index is None:
            return True

        child = next(
            (
                identifier
                for identifier, node_index in self._characteristic_nodes.items()
                if node_index == binding.node_index
            ),
            None,
        )
        return any(other.parent == child for other in self._bindings)

    def create_hierarchy_node_of_part(self, node_index: int, part_index: int) -> None:
        self._nodes.append(HierarchyEntry(KEY_PART_NODE, NodeIndex(node_index), part_index))
        self._part_nodes[part_index] = node_index

    def create_hierarchy_node_of_characteristic(
        self,
        node_index: int,
        part_index: int,
        characteristic_index: int,
        characteristic_id: int,
        parent_characteristic_id: int | None,
    ) -> None:
        parent_characteristic_id = parent_characteristic_id or None
        self._nodes.append(
            HierarchyEntry(KEY_CHARACTERISTIC_NODE, NodeIndex(node_index), characteristic_index)
        )
        self._characteristic_nodes[_CharacteristicId(part_index, characteristic_id)] = node_index
        self._bindings.append(
            _BindingToParent(
                node_index,
                _CharacteristicId(part_index, parent_characteristic_id),
                characteristic_index,
            )
        )
        if parent_characteristic_id is not None:
            self._contains_hierarchy = True

    def create_hierarchy_node_of_group(
        self,
        node_index: int,
        part_index: int,
        group_index: int,
        characteristic_id: int,
        parent_characteristic_id: int | None,
    ) -> None:
        parent_characteristic_id = parent_characteristic_id or None
        self._nodes.append(HierarchyEntry(KEY_GROUP_NODE, NodeIndex(node_index), group_index))
        self._characteristic_nodes[_CharacteristicId(part_index, characteristic_id)] = node_index
        self._bindings.append(
            _BindingToParent(node_index, _CharacteristicId(part_index, parent_characteristic_id))
        )
        self._contains_hierarchy = True
