"""Registry of all known K-keys and their metadata."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from aqdef.kkey import KKey
from aqdef.metadata import KKeyMetadata
from aqdef.registry.corrections import CorrectionsKKeyProvider
from aqdef.registry.default_keys import DefaultKKeyProvider
from aqdef.registry.providers import KKeyProvider, discover_entry_point_providers

logger = logging.getLogger(__name__)


class KKeyRepository:
    """Immutable lookup table of K-key metadata.

    Providers are applied in order, later providers override earlier ones.
    The process wide instance returned by :meth:`get_instance` merges the
    default table, its corrections and every provider registered under the
    ``aqdef.kkey_providers`` entry point group.

    Example:
    -------
        >>> repository = KKeyRepository.get_instance()
        >>> repository.metadata_for(KKey.of("K1001")).column_name
        'TETEILNR'

    """

    def __init__(self, providers: Iterable[KKeyProvider] | None = None) -> None:
        """Initialize the repository.

        Args:
        ----
            providers: Providers to merge. Defaults to the built-in default
                and corrections tables.

        """
        if providers is None:
            providers = self.builtin_providers()

        merged: dict[KKey, KKeyMetadata] = {}
        for provider in providers:
            contributed = provider.create_kkeys_with_metadata()
            logger.debug(
                "Merging %d k-keys from %s", len(contributed), type(provider).__name__
            )
            merged.update(contributed)

        self._metadata: Mapping[KKey, KKeyMetadata] = merged
        self._all_kkeys = tuple(sorted(merged))
        self._part_kkeys = tuple(k for k in self._all_kkeys if k.is_part_level)
        self._characteristic_kkeys = tuple(
            k for k in self._all_kkeys if k.is_characteristic_level
        )
        self._value_kkeys = tuple(k for k in self._all_kkeys if k.is_value_level)

    @staticmethod
    def builtin_providers() -> list[KKeyProvider]:
        """Return the default table followed by its corrections."""
        return [DefaultKKeyProvider(), CorrectionsKKeyProvider()]

    @classmethod
    def with_additional_providers(cls, *providers: KKeyProvider) -> KKeyRepository:
        """Create a repository of the built-in tables extended by ``providers``."""
        return cls([*cls.builtin_providers(), *discover_entry_point_providers(), *providers])

    @classmethod
    def get_instance(cls) -> KKeyRepository:
        """Return the shared repository built when this module is imported."""
        return _shared_repository

    def metadata_for(self, kkey: KKey | str) -> KKeyMetadata | None:
        """Return the metadata of ``kkey`` or ``None`` if it is unknown."""
        return self._metadata.get(KKey.of(kkey))

    def __contains__(self, kkey: object) -> bool:
        if isinstance(kkey, str):
            kkey = KKey.of(kkey)
        return kkey in self._metadata

    def __len__(self) -> int:
        return len(self._metadata)

    @property
    def all_kkeys(self) -> tuple[KKey, ...]:
        """All K-keys, sorted."""
        return self._all_kkeys

    @property
    def part_kkeys(self) -> tuple[KKey, ...]:
        """Sorted K-keys of the part level."""
        return self._part_kkeys

    @property
    def characteristic_kkeys(self) -> tuple[KKey, ...]:
        """Sorted K-keys of the characteristic level."""
        return self._characteristic_kkeys

    @property
    def value_kkeys(self) -> tuple[KKey, ...]:
        """Sorted K-keys of the value level."""
        return self._value_kkeys


def lookup_metadata(
    kkey: KKey | str, repository: KKeyRepository | None = None
) -> KKeyMetadata | None:
    """Find metadata of any K-key.

    Catalog keys (``K4xxx``) are looked up in the catalog-field table, all
    others in ``repository`` (the shared instance by default).
    """
    kkey = KKey.of(kkey)
    if kkey.is_catalog_level:
        from aqdef import catalog

        return catalog.metadata_for(kkey)

    if repository is None:
        repository = KKeyRepository.get_instance()
    return repository.metadata_for(kkey)


_shared_repository = KKeyRepository.with_additional_providers()
