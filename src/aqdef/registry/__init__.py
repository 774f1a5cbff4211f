"""K-key metadata registry."""

from aqdef.registry.corrections import CorrectionsKKeyProvider
from aqdef.registry.default_keys import DefaultKKeyProvider
from aqdef.registry.providers import (
    ENTRY_POINT_GROUP,
    KKeyDefinition,
    KKeyProvider,
    KKeyProviderFile,
    YamlKKeyProvider,
    discover_entry_point_providers,
)
from aqdef.registry.repository import KKeyRepository, lookup_metadata

__all__ = [
    "ENTRY_POINT_GROUP",
    "CorrectionsKKeyProvider",
    "DefaultKKeyProvider",
    "KKeyDefinition",
    "KKeyProvider",
    "KKeyProviderFile",
    "KKeyRepository",
    "YamlKKeyProvider",
    "discover_entry_point_providers",
    "lookup_metadata",
]
