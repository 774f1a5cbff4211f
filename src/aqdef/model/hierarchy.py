"""Hierarchy of characteristics and groups.

A hierarchy is a set of node definitions and bindings between nodes:

* ``K5111`` part node, value is the part index
* ``K5112`` characteristic node, value is the characteristic index
* ``K5113`` group node, value is the group index
* ``K5103`` binding of a child node, stored under the parent node, value is
  the child node index
* ``K5102`` binding of a characteristic without its own node, stored under
  the parent node, value is the characteristic index

Files may use the simple form instead, where a characteristic declares
itself a parent node (``K2030``) or names its parent node (``K2031``). The
two forms can't be combined. The simple form is converted to the full form
by :meth:`AqdefHierarchy.normalize`.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from aqdef.errors import AqdefValidityError, HierarchyMixingError
from aqdef.kkey import KKey
from aqdef.model.entries import HierarchyEntry
from aqdef.model.indices import CharacteristicIndex, GroupIndex, NodeIndex, PartIndex

if TYPE_CHECKING:
    from aqdef.model.object_model import AqdefObjectModel

logger = logging.getLogger(__name__)

KEY_PART_NODE = KKey.of("K5111")
KEY_CHARACTERISTIC_NODE = KKey.of("K5112")
KEY_GROUP_NODE = KKey.of("K5113")
KEY_NODE_BINDING = KKey.of("K5103")
KEY_CHARACTERISTIC_BINDING = KKey.of("K5102")

KEY_SIMPLE_PARENT = KKey.of("K2030")
KEY_SIMPLE_CHILD = KKey.of("K2031")

NODE_DEFINITION_KEYS = frozenset({KEY_PART_NODE, KEY_CHARACTERISTIC_NODE, KEY_GROUP_NODE})
BINDING_KEYS = frozenset({KEY_NODE_BINDING, KEY_CHARACTERISTIC_BINDING})

_MIXING_MESSAGE = (
    "Combination of hierarchy (K51xx) and simple hierarchy (K2030/2031) is not supported."
)


def is_supported_hierarchy_key(kkey: KKey) -> bool:
    """Whether ``kkey`` defines a node or a binding."""
    return kkey in NODE_DEFINITION_KEYS or kkey in BINDING_KEYS


class AqdefHierarchy:
    """Node definitions and bindings of one object model."""

    def __init__(self) -> None:
        self._node_definitions: dict[NodeIndex, HierarchyEntry] = {}
        self._node_bindings: dict[NodeIndex, list[HierarchyEntry]] = {}
        self._contains_hierarchy_information = False
        self._contains_simple_hierarchy_information = False

    # -- building ---------------------------------------------------------

    def put_entry(self, kkey: KKey | str, index: int | None, value: Any) -> None:
        """Store a hierarchy value read from a K-key line.

        For ``K2030``/``K2031`` the index is the characteristic declaring the
        relation and the value is a node index. For ``K51xx`` keys the index
        is the node index.

        Raises
        ------
            HierarchyMixingError: If simple and full hierarchy data are mixed.
            ValueError: If ``kkey`` is not a supported hierarchy key.

        """
        kkey = KKey.of(kkey)
        if kkey.is_simple_hierarchy_level:
            self._put_simple_entry(kkey, index, value)
            return

        if not is_supported_hierarchy_key(kkey):
            raise ValueError(f"Unknown hierarchy entry. Key: {kkey} Value: {value}")
        if value is None:
            return
        self.put(HierarchyEntry(kkey, NodeIndex(index), value))

    def put(self, entry: HierarchyEntry) -> None:
        """Store a node definition or binding.

        Raises
        ------
            HierarchyMixingError: If the hierarchy already holds simple data.
            ValueError: If the entry is neither a node definition nor a binding.

        """
        if self._contains_simple_hierarchy_information:
            raise HierarchyMixingError(_MIXING_MESSAGE)

        self._put_internal(entry)
        self._contains_hierarchy_information = True

    def _put_simple_entry(self, kkey: KKey, characteristic_index: int | None, value: Any) -> None:
        # A zero carries no information, same as a missing record.
        if value is None or value == 0:
            return

        if self._contains_hierarchy_information:
            raise HierarchyMixingError(_MIXING_MESSAGE)

        node_index = NodeIndex(value)
        if kkey == KEY_SIMPLE_PARENT:
            self._put_internal(HierarchyEntry(KEY_CHARACTERISTIC_NODE, node_index, characteristic_index))
        elif kkey == KEY_SIMPLE_CHILD:
            self._put_internal(
                HierarchyEntry(KEY_CHARACTERISTIC_BINDING, node_index, characteristic_index)
            )
        else:
            raise ValueError(f"Unknown simple hierarchy entry. Key: {kkey} Value: {value}")

        self._contains_simple_hierarchy_information = True

    def _put_internal(self, entry: HierarchyEntry) -> None:
        if entry.key in NODE_DEFINITION_KEYS:
            self._node_definitions[entry.index] = entry
        elif entry.key in BINDING_KEYS:
            self._node_bindings.setdefault(entry.index, []).append(entry)
        else:
            raise ValueError(f"Unknown hierarchy entry. Key: {entry.key} Value: {entry.value}")

    # -- normalization ----------------------------------------------------

    def normalize(self, model: AqdefObjectModel) -> AqdefHierarchy:
        """Return the full-form equivalent of this hierarchy.

        Hierarchies in the full form are returned unchanged. A simple
        hierarchy is expanded for each part of ``model``: a part node is
        created, characteristic nodes and bindings are copied under new node
        indexes, root nodes are bound to the part node and characteristics
        that are not part of the tree are bound directly to the part node.
        This hierarchy is not modified.

        Args:
        ----
            model: The model that owns this hierarchy.

        Returns:
        -------
            The normalized hierarchy.

        Raises:
        ------
            ValueError: If ``model`` does not own this hierarchy.
            AqdefValidityError: If a simple hierarchy contains part or group nodes.

        """
        if model.hierarchy is not self:
            raise ValueError("The provided aqdef model does not contain this hierarchy.")

        if not self._contains_simple_hierarchy_information:
            return self

        return self._normalize_simple_hierarchy(model)

    def _normalize_simple_hierarchy(self, model: AqdefObjectModel) -> AqdefHierarchy:
        for entry in self.node_definitions():
            if entry.key == KEY_PART_NODE:
                raise AqdefValidityError(
                    "Hierarchy was created from a simple characteristics grouping. "
                    "It should not contain any part node element, but it does."
                )
            if entry.key == KEY_GROUP_NODE:
                raise AqdefValidityError(
                    "Hierarchy was created from a simple characteristics grouping. "
                    "It should not contain any logical group node element, but it does."
                )

        normalized = AqdefHierarchy()
        node_counter = itertools.count(1)

        for part in model.get_parts():
            part_node_index = NodeIndex(next(node_counter))
            normalized.put(HierarchyEntry(KEY_PART_NODE, part_node_index, part.index.index))

            new_node_indexes: dict[NodeIndex, NodeIndex] = {}
            covered_characteristics: set[int] = set()

            for entry in self.node_definitions():
                new_index = NodeIndex(next(node_counter))
                normalized.put(HierarchyEntry(entry.key, new_index, entry.value))
                new_node_indexes[entry.index] = new_index
                covered_characteristics.add(entry.value)

            for entry in self.node_definitions():
                if self._parent_node_index_of_node(entry.index) is None:
                    normalized.put(
                        HierarchyEntry(
                            KEY_NODE_BINDING, part_node_index, new_node_indexes[entry.index].index
                        )
                    )

            for entry in self.node_bindings():
                source = new_node_indexes.get(entry.index)
                if source is None:
                    logger.warning(
                        "Characteristic %s is bound to undefined hierarchy node %s",
                        entry.value,
                        entry.index,
                    )
                    continue

                target = entry.value
                if entry.key == KEY_NODE_BINDING:
                    target_node = new_node_indexes.get(NodeIndex(target))
                    if target_node is None:
                        continue
                    target = target_node.index
                else:
                    covered_characteristics.add(target)

                normalized.put(HierarchyEntry(entry.key, source, target))

            for characteristic in model.get_characteristics(part.index):
                characteristic_int = characteristic.index.characteristic_index
                if characteristic_int in covered_characteristics:
                    continue
                normalized.put(
                    HierarchyEntry(KEY_CHARACTERISTIC_BINDING, part_node_index, characteristic_int)
                )

        return normalized

    # -- queries ----------------------------------------------------------

    @property
    def contains_hierarchy_information(self) -> bool:
        """Whether full form (``K51xx``) data was stored."""
        return self._contains_hierarchy_information

    @property
    def contains_simple_hierarchy_information(self) -> bool:
        """Whether simple form (``K2030``/``K2031``) data was stored."""
        return self._contains_simple_hierarchy_information

    def node_definitions(self) -> list[HierarchyEntry]:
        """Node definitions ordered by node index."""
        return [self._node_definitions[index] for index in sorted(self._node_definitions)]

    def node_bindings(self) -> list[HierarchyEntry]:
        """Bindings ordered by their parent node index."""
        return [
            entry
            for index in sorted(self._node_bindings)
            for entry in self._node_bindings[index]
        ]

    def for_each_node_definition(self, action: Callable[[HierarchyEntry], None]) -> None:
        for entry in self.node_definitions():
            action(entry)

    def for_each_node_binding(self, action: Callable[[HierarchyEntry], None]) -> None:
        for entry in self.node_bindings():
            action(entry)

    def is_empty(self) -> bool:
        return not self._node_definitions and not self._node_bindings

    def has_children(self, characteristic_index: CharacteristicIndex) -> bool:
        """Whether the characteristic is a node with at least one binding."""
        node_index = self._node_index_of_characteristic(characteristic_index)
        if node_index is None:
            return False
        return bool(self._node_bindings.get(node_index))

    def get_parent_index(
        self, index: CharacteristicIndex | GroupIndex
    ) -> CharacteristicIndex | GroupIndex | None:
        """Return the characteristic or group that is the parent of ``index``."""
        if isinstance(index, CharacteristicIndex):
            parent_node_index = self._parent_node_index_of_characteristic(index)
            if parent_node_index is not None:
                return self._characteristic_or_group_index_of_node(
                    parent_node_index, index.part_index
                )
            node_index = self._node_index_of_characteristic(index)
        else:
            node_index = self._node_index_of_group(index)

        if node_index is None:
            return None
        parent_node_index = self._parent_node_index_of_node(node_index)
        if parent_node_index is None:
            return None
        return self._characteristic_or_group_index_of_node(parent_node_index, index.part_index)

    def get_child_indexes(
        self, index: CharacteristicIndex | GroupIndex
    ) -> list[CharacteristicIndex | GroupIndex]:
        """Return the children of a characteristic or group.

        Characteristics come first, then groups, each in index order.
        """
        if isinstance(index, CharacteristicIndex):
            node_index = self._node_index_of_characteristic(index)
        else:
            node_index = self._node_index_of_group(index)
        if node_index is None:
            return []

        characteristics: list[CharacteristicIndex] = []
        groups: list[GroupIndex] = []
        for binding in self._node_bindings.get(node_index, []):
            if binding.key == KEY_CHARACTERISTIC_BINDING:
                characteristics.append(CharacteristicIndex(index.part_index, binding.value))
                continue

            child = self._characteristic_or_group_index_of_node(
                NodeIndex(binding.value), index.part_index
            )
            if isinstance(child, CharacteristicIndex):
                characteristics.append(child)
            elif isinstance(child, GroupIndex):
                groups.append(child)

        return [*sorted(characteristics), *sorted(groups)]

    # -- removal ----------------------------------------------------------

    def remove_hierarchy_for_part(self, part_index: PartIndex) -> None:
        """Remove the part node and everything below it."""
        for node_index in self._node_indexes_of(KEY_PART_NODE, part_index.index):
            self._remove_node(node_index, remove_parent_binding=True)

    def remove_hierarchy_for_characteristic(
        self, characteristic_index: CharacteristicIndex, remove_parent_binding: bool = True
    ) -> None:
        """Remove the characteristic's node and its subtree.

        Args:
        ----
            characteristic_index: The characteristic to remove.
            remove_parent_binding: Also remove the binding pointing at it.

        """
        characteristic_int = characteristic_index.characteristic_index
        for node_index in self._node_indexes_of(KEY_CHARACTERISTIC_NODE, characteristic_int):
            self._remove_node(node_index, remove_parent_binding)

        if remove_parent_binding:
            self._remove_bindings(
                lambda b: b.key == KEY_CHARACTERISTIC_BINDING and b.value == characteristic_int
            )

    def remove_hierarchy_for_group(
        self, group_index: GroupIndex, remove_parent_binding: bool = True
    ) -> None:
        """Remove the group's node and its subtree."""
        for node_index in self._node_indexes_of(KEY_GROUP_NODE, group_index.group_index):
            self._remove_node(node_index, remove_parent_binding)

    def _remove_node(self, node_index: NodeIndex, remove_parent_binding: bool) -> None:
        definition = self._node_definitions.pop(node_index, None)
        if definition is None:
            return

        if remove_parent_binding:
            self._remove_bindings(
                lambda b: b.key == KEY_NODE_BINDING and b.value == node_index.index
            )

        for binding in self._node_bindings.pop(node_index, []):
            if binding.key != KEY_NODE_BINDING:
                continue
            child = self._node_definitions.get(NodeIndex(binding.value))
            if child is None or child.key not in NODE_DEFINITION_KEYS:
                continue
            self._remove_node(child.index, remove_parent_binding=False)

    def _remove_bindings(self, predicate: Callable[[HierarchyEntry], bool]) -> None:
        for node_index in list(self._node_bindings):
            remaining = [b for b in self._node_bindings[node_index] if not predicate(b)]
            if remaining:
                self._node_bindings[node_index] = remaining
            else:
                del self._node_bindings[node_index]

    # -- lookups ----------------------------------------------------------

    def _node_indexes_of(self, kkey: KKey, value: int | None) -> list[NodeIndex]:
        return [
            entry.index
            for entry in self.node_definitions()
            if entry.key == kkey and entry.value == value
        ]

    def _node_index_of_characteristic(self, index: CharacteristicIndex) -> NodeIndex | None:
        return next(
            iter(self._node_indexes_of(KEY_CHARACTERISTIC_NODE, index.characteristic_index)), None
        )

    def _node_index_of_group(self, index: GroupIndex) -> NodeIndex | None:
        return next(iter(self._node_indexes_of(KEY_GROUP_NODE, index.group_index)), None)

    def _parent_node_index_of_node(self, node_index: NodeIndex) -> NodeIndex | None:
        for binding in self.node_bindings():
            if binding.key == KEY_NODE_BINDING and binding.value == node_index.index:
                return binding.index
        return None

    def _parent_node_index_of_characteristic(self, index: CharacteristicIndex) -> NodeIndex | None:
        for binding in self.node_bindings():
            if (
                binding.key == KEY_CHARACTERISTIC_BINDING
                and binding.value == index.characteristic_index
            ):
                return binding.index
        return None

    def _characteristic_or_group_index_of_node(
        self, node_index: NodeIndex, part_index: PartIndex | None
    ) -> CharacteristicIndex | GroupIndex | None:
        definition = self._node_definitions.get(node_index)
        if definition is None:
            return None
        if definition.key == KEY_CHARACTERISTIC_NODE:
            return CharacteristicIndex(part_index, definition.value)
        if definition.key == KEY_GROUP_NODE:
            return GroupIndex(part_index, definition.value)
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AqdefHierarchy):
            return NotImplemented
        return (
            self._node_definitions == other._node_definitions
            and self._node_bindings == other._node_bindings
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"AqdefHierarchy(nodes={len(self._node_definitions)}, "
            f"bindings={sum(len(b) for b in self._node_bindings.values())})"
        )
