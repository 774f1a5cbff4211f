"""Tests for catalog fields."""

from __future__ import annotations

import pytest
from aqdef import catalog
from aqdef.catalog import Catalog, CatalogFieldType
from aqdef.kkey import KKey
from aqdef.metadata import KKeyDataType


class TestCatalog:
    """Tests for catalog lookups."""

    def test_table_names(self) -> None:
        """Should map catalogs to their table names."""
        assert Catalog.OPERATOR.table_name == "PRUEFER"
        assert Catalog.MACHINE.table_name == "MASCHINE"
        assert Catalog.EVENT.table_name == Catalog.CAUSE.table_name

    def test_id_field(self) -> None:
        """Should find the identifying field of a catalog."""
        field = catalog.id_field_of_catalog(Catalog.OPERATOR)
        assert field.kkey == KKey.of("K4090_ID")
        assert field.is_id_field
        assert field.metadata.data_type is KKeyDataType.INTEGER

    def test_for_kkey(self) -> None:
        """Should find the field of a catalog key."""
        field = catalog.for_kkey("K4092")
        assert field.catalog is Catalog.OPERATOR
        assert field.metadata.column_name == "PRNAME"
        assert field.is_data_field
        assert catalog.for_kkey("K1001") is None

    def test_kkeys_of_catalog_are_sorted(self) -> None:
        """Should return sorted keys, optionally filtered."""
        keys = catalog.get_kkeys_of_catalog(Catalog.OPERATOR)
        assert keys == sorted(keys)
        assert KKey.of("K4092") in keys

        state_keys = catalog.get_kkeys_of_catalog(
            Catalog.OPERATOR, lambda f: f.type is CatalogFieldType.STATE
        )
        assert state_keys == [KKey.of("K4591")]

    def test_catalog_without_fields(self) -> None:
        """Should reject catalogs without field definitions."""
        assert Catalog.EVENT not in catalog.catalogs_with_defined_fields()
        with pytest.raises(ValueError):
            catalog.fields_of_catalog(Catalog.EVENT)
        with pytest.raises(ValueError):
            catalog.id_field_of_catalog(Catalog.EVENT)
