"""K-key identifiers.

A K-key is the five character identifier (``K1001``, ``K2110``, ``K0004`` ...)
that addresses a typed field in an AQDEF file. Its prefix determines the level
of the field (part, characteristic, value ...).

Example:
-------
    >>> key = KKey.of("K2001")
    >>> key.level
    <KKeyLevel.CHARACTERISTIC: 'characteristic'>
    >>> KKey.of("K2001") is key
    True

"""

from __future__ import annotations

import logging
import threading
import weakref
from enum import Enum
from functools import total_ordering
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from aqdef.convert.base import KKeyValueConverter
    from aqdef.metadata import KKeyDataType, KKeyMetadata

logger = logging.getLogger(__name__)


class KKeyLevel(Enum):
    """Level of the object model a K-key belongs to."""

    PART = "part"
    CHARACTERISTIC = "characteristic"
    VALUE = "value"
    GROUP = "group"
    CATALOG = "catalog"
    HIERARCHY = "hierarchy"
    SIMPLE_HIERARCHY = "simple_hierarchy"
    CUSTOM_PART = "custom_part"
    CUSTOM_CHARACTERISTIC = "custom_characteristic"
    CUSTOM_VALUE = "custom_value"
    CUSTOM_CATALOG = "custom_catalog"
    UNKNOWN = "unknown"


# Checked in order, first matching prefix wins.
_LEVEL_PREFIXES: tuple[tuple[str, KKeyLevel], ...] = (
    ("K1", KKeyLevel.PART),
    ("K2", KKeyLevel.CHARACTERISTIC),
    ("K8", KKeyLevel.CHARACTERISTIC),
    ("K0", KKeyLevel.VALUE),
    ("K4", KKeyLevel.CATALOG),
    ("K50", KKeyLevel.GROUP),
    ("K51", KKeyLevel.HIERARCHY),
    ("KX0", KKeyLevel.CUSTOM_VALUE),
    ("KX1", KKeyLevel.CUSTOM_PART),
    ("KX2", KKeyLevel.CUSTOM_CHARACTERISTIC),
    ("KX4", KKeyLevel.CUSTOM_CATALOG),
)

_SIMPLE_HIERARCHY_KEYS = frozenset({"K2030", "K2031"})

# Attribute keys of attributive characteristics are sorted right after K0001.
_SORT_KEY_REWRITES = {
    "K0020": "K0001.20",
    "K0021": "K0001.21",
}


def _determine_level(key: str) -> KKeyLevel:
    if key.upper() in _SIMPLE_HIERARCHY_KEYS:
        return KKeyLevel.SIMPLE_HIERARCHY

    for prefix, level in _LEVEL_PREFIXES:
        if key.startswith(prefix):
            return level

    logger.error("Unknown level of k-key: %s", key)
    return KKeyLevel.UNKNOWN


@total_ordering
class KKey:
    """Interned, immutable K-key.

    Instances are cached weakly, so asking twice for the same string usually
    returns the same object. Equality and hashing only use the key string,
    never rely on identity.
    """

    __slots__ = ("_key", "_level", "__weakref__")

    _cache: weakref.WeakValueDictionary[str, KKey] = weakref.WeakValueDictionary()
    _cache_lock = threading.Lock()

    _key: str
    _level: KKeyLevel

    def __new__(cls, key: str) -> KKey:
        """Return the cached instance for ``key`` or create a new one."""
        if not isinstance(key, str) or not key:
            raise ValueError(f"K-key must be a non-empty string, got {key!r}")

        with cls._cache_lock:
            instance = cls._cache.get(key)
            if instance is None:
                instance = super().__new__(cls)
                instance._key = key
                instance._level = _determine_level(key)
                cls._cache[key] = instance
            return instance

    @classmethod
    def of(cls, key: str | KKey) -> KKey:
        """Return the K-key for a string (or the K-key itself)."""
        if isinstance(key, KKey):
            return key
        return cls(key)

    def __reduce__(self) -> tuple[Any, ...]:
        return (KKey, (self._key,))

    # -- identity ---------------------------------------------------------

    @property
    def key(self) -> str:
        """The raw key string."""
        return self._key

    @property
    def level(self) -> KKeyLevel:
        """Level derived from the key prefix."""
        return self._level

    @property
    def sort_key(self) -> str:
        """String used to order K-keys."""
        return _SORT_KEY_REWRITES.get(self._key, self._key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KKey):
            return NotImplemented
        return self._key == other._key

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, KKey):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __hash__(self) -> int:
        return hash(self._key)

    def __str__(self) -> str:
        return self._key

    def __repr__(self) -> str:
        return f"KKey({self._key!r})"

    # -- levels -----------------------------------------------------------

    @property
    def is_part_level(self) -> bool:
        return self._level is KKeyLevel.PART

    @property
    def is_custom_part_level(self) -> bool:
        return self._level is KKeyLevel.CUSTOM_PART

    @property
    def is_any_part_level(self) -> bool:
        return self.is_part_level or self.is_custom_part_level

    @property
    def is_characteristic_level(self) -> bool:
        return self._level is KKeyLevel.CHARACTERISTIC

    @property
    def is_custom_characteristic_level(self) -> bool:
        return self._level is KKeyLevel.CUSTOM_CHARACTERISTIC

    @property
    def is_any_characteristic_level(self) -> bool:
        return self.is_characteristic_level or self.is_custom_characteristic_level

    @property
    def is_value_level(self) -> bool:
        return self._level is KKeyLevel.VALUE

    @property
    def is_custom_value_level(self) -> bool:
        return self._level is KKeyLevel.CUSTOM_VALUE

    @property
    def is_any_value_level(self) -> bool:
        return self.is_value_level or self.is_custom_value_level

    @property
    def is_group_level(self) -> bool:
        return self._level is KKeyLevel.GROUP

    @property
    def is_hierarchy_level(self) -> bool:
        return self._level is KKeyLevel.HIERARCHY

    @property
    def is_simple_hierarchy_level(self) -> bool:
        return self._level is KKeyLevel.SIMPLE_HIERARCHY

    @property
    def is_catalog_level(self) -> bool:
        return self._level is KKeyLevel.CATALOG

    @property
    def is_custom(self) -> bool:
        """Whether this is a proprietary ``KX`` key."""
        return self._level in (
            KKeyLevel.CUSTOM_PART,
            KKeyLevel.CUSTOM_CHARACTERISTIC,
            KKeyLevel.CUSTOM_VALUE,
            KKeyLevel.CUSTOM_CATALOG,
        )

    @property
    def should_be_written_to_dfq(self) -> bool:
        """Custom keys are never written to DFQ files."""
        return not self.is_custom

    # -- metadata ---------------------------------------------------------

    @property
    def metadata(self) -> KKeyMetadata | None:
        """Metadata of this key from the catalog table or the registry."""
        from aqdef.registry import lookup_metadata

        return lookup_metadata(self)

    def _require_metadata(self, attribute: str) -> KKeyMetadata | None:
        metadata = self.metadata
        if metadata is None:
            logger.error("Can't get %s of unknown k-key: %s", attribute, self._key)
        return metadata

    @property
    def converter(self) -> KKeyValueConverter[Any] | None:
        metadata = self._require_metadata("converter")
        return metadata.converter if metadata else None

    @property
    def db_column_name(self) -> str | None:
        metadata = self._require_metadata("column name")
        return metadata.column_name if metadata else None

    @property
    def data_type(self) -> KKeyDataType | None:
        metadata = self._require_metadata("data type")
        return metadata.data_type if metadata else None

    @property
    def respects_characteristic_decimal_settings(self) -> bool:
        metadata = self._require_metadata("decimal settings")
        return metadata.respects_characteristic_decimal_settings if metadata else False
