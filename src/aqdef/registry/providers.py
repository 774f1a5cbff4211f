"""Additional K-key providers.

Besides the built-in tables, K-keys can be contributed by other packages
through the ``aqdef.kkey_providers`` entry point group, or declared in a YAML
file::

    keys:
      KX201:
        column_name: CUSTOM_FLAG
        data_type: integer
        length: 3
        save_to_db: false

"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from importlib.metadata import entry_points
from pathlib import Path
from typing import Annotated, Any, Protocol, runtime_checkable

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from aqdef.convert import EventIdListConverter
from aqdef.errors import KKeyProviderError
from aqdef.kkey import KKey, KKeyLevel
from aqdef.metadata import KKeyDataType, KKeyMetadata

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "aqdef.kkey_providers"


@runtime_checkable
class KKeyProvider(Protocol):
    """Anything that can contribute K-keys with their metadata."""

    def create_kkeys_with_metadata(self) -> Mapping[KKey, KKeyMetadata]: ...


class KKeyDefinition(BaseModel):
    """Metadata of one K-key declared in a provider file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    column_name: Annotated[str, Field(min_length=1, description="Storage column label")]
    data_type: Annotated[KKeyDataType, Field(description="Value data type")]
    length: Annotated[int | None, Field(default=None, ge=1, description="Maximum text length")]
    save_to_db: bool = True
    respects_characteristic_decimal_settings: bool = False

    def to_metadata(self) -> KKeyMetadata:
        """Build the registry metadata for this definition."""
        converter = EventIdListConverter() if self.data_type is KKeyDataType.INTEGER_LIST else None
        return KKeyMetadata.of(
            self.column_name,
            self.data_type,
            self.length,
            converter,
            save_to_db=self.save_to_db,
            respects_characteristic_decimal_settings=self.respects_characteristic_decimal_settings,
        )


class KKeyProviderFile(BaseModel):
    """Root of a YAML provider file."""

    model_config = ConfigDict(extra="forbid")

    keys: Annotated[
        dict[str, KKeyDefinition],
        Field(description="K-key to metadata mapping"),
    ]

    @field_validator("keys")
    @classmethod
    def validate_keys(cls, v: dict[str, KKeyDefinition]) -> dict[str, KKeyDefinition]:
        """Reject identifiers that do not map to a known level."""
        for key in v:
            if not key.startswith("K") or KKey.of(key).level is KKeyLevel.UNKNOWN:
                raise ValueError(f"Not a valid K-key: {key!r}")
        return v


class YamlKKeyProvider:
    """Provides K-keys declared in a YAML file."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def create_kkeys_with_metadata(self) -> dict[KKey, KKeyMetadata]:
        """Load and validate the file.

        Raises
        ------
            KKeyProviderError: If the file cannot be read or is invalid.

        """
        data = _load_yaml_mapping(self._path)
        try:
            provider_file = KKeyProviderFile.model_validate(data)
        except ValidationError as e:
            raise KKeyProviderError(f"Invalid provider file: {e}", str(self._path)) from e

        return {KKey.of(key): d.to_metadata() for key, d in provider_file.keys.items()}


def _load_yaml_mapping(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise KKeyProviderError(f"YAML parsing error: {e}", str(path)) from e
    except OSError as e:
        raise KKeyProviderError(f"File read error: {e}", str(path)) from e

    if not isinstance(data, dict):
        raise KKeyProviderError(
            f"Expected dictionary at root level, got {type(data).__name__}", str(path)
        )
    return data


def discover_entry_point_providers(group: str = ENTRY_POINT_GROUP) -> list[KKeyProvider]:
    """Instantiate the providers registered under an entry point group.

    Each entry point must load a class or factory that returns a
    :class:`KKeyProvider` when called without arguments.

    Raises
    ------
        KKeyProviderError: If an entry point cannot be loaded.

    """
    providers: list[KKeyProvider] = []
    for entry_point in sorted(entry_points(group=group), key=lambda ep: ep.name):
        try:
            provider = entry_point.load()()
        except Exception as e:
            raise KKeyProviderError(f"Failed to load provider: {e}", entry_point.name) from e

        if not isinstance(provider, KKeyProvider):
            raise KKeyProviderError(
                "Entry point does not provide create_kkeys_with_metadata()", entry_point.name
            )
        logger.debug("Loaded k-key provider %s", entry_point.name)
        providers.append(provider)
    return providers
