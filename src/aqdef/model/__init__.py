"""Object model of AQDEF content: indices, entries, hierarchy and builders."""

from aqdef.model.aggregators import (
    CharacteristicEntriesAggregator,
    ValueEntriesAggregator,
    ValueSet,
)
from aqdef.model.builder import AqdefHierarchyBuilder, AqdefObjectModelBuilder
from aqdef.model.entries import (
    CharacteristicEntries,
    CharacteristicEntry,
    Entries,
    Entry,
    GroupEntries,
    GroupEntry,
    HasKKeyValues,
    HierarchyEntry,
    PartEntries,
    PartEntry,
    ValueEntries,
    ValueEntry,
)
from aqdef.model.hierarchy import AqdefHierarchy
from aqdef.model.indices import (
    CatalogRecordIndex,
    CharacteristicIndex,
    GroupIndex,
    NodeIndex,
    PartIndex,
    ValueIndex,
)
from aqdef.model.object_model import AqdefObjectModel

__all__ = [
    "AqdefHierarchy",
    "AqdefHierarchyBuilder",
    "AqdefObjectModel",
    "AqdefObjectModelBuilder",
    "CatalogRecordIndex",
    "CharacteristicEntries",
    "CharacteristicEntriesAggregator",
    "CharacteristicEntry",
    "CharacteristicIndex",
    "Entries",
    "Entry",
    "GroupEntries",
    "GroupEntry",
    "GroupIndex",
    "HasKKeyValues",
    "HierarchyEntry",
    "NodeIndex",
    "PartEntries",
    "PartEntry",
    "PartIndex",
    "ValueEntries",
    "ValueEntriesAggregator",
    "ValueEntry",
    "ValueIndex",
    "ValueSet",
]
