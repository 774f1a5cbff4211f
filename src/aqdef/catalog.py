"""Catalog fields (``K4xxx`` keys).

Catalogs hold shared domain records such as operators, machines or gages.
Their fields form a separate K-key namespace that is not part of the main
registry: :func:`metadata_for` answers for ``K4xxx`` keys.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from aqdef.kkey import KKey
from aqdef.metadata import KKeyDataType, KKeyMetadata

STRING = KKeyDataType.STRING
INTEGER = KKeyDataType.INTEGER
DATE = KKeyDataType.DATE


class Catalog(Enum):
    """Kinds of catalogs."""

    SUPPLIER = "supplier"
    CUSTOMER = "customer"
    EMPLOYEE = "employee"
    OPERATOR = "operator"
    MACHINE = "machine"
    TOOL = "tool"
    MANUFACTURER = "manufacturer"
    MATERIAL = "material"
    UNIT = "unit"
    DRAWING = "drawing"
    PRODUCT = "product"
    PURCHASE_ORDER = "purchase_order"
    EVENT = "event"
    CAUSE = "cause"
    MEASURE = "measure"
    ORDINAL_CLASS = "ordinal_class"
    CONTRACTOR = "contractor"
    GAGE = "gage"
    PROCESS_PARAMETER = "process_parameter"
    K0061 = "k0061"
    K0062 = "k0062"
    K0063 = "k0063"

    @property
    def table_name(self) -> str:
        """Name of the table holding the catalog.

        Events, causes and measures share one table and are told apart by
        id ranges.
        """
        return _TABLE_NAMES[self]


_TABLE_NAMES = {
    Catalog.SUPPLIER: "LIEFERAN",
    Catalog.CUSTOMER: "KUNDE",
    Catalog.EMPLOYEE: "MITARB",
    Catalog.OPERATOR: "PRUEFER",
    Catalog.MACHINE: "MASCHINE",
    Catalog.TOOL: "NEST",
    Catalog.MANUFACTURER: "HERSTELL",
    Catalog.MATERIAL: "WERKSTOF",
    Catalog.UNIT: "EINHEIT",
    Catalog.DRAWING: "ZEICHN",
    Catalog.PRODUCT: "ERZEUGNIS",
    Catalog.PURCHASE_ORDER: "PAUFTRAG",
    Catalog.EVENT: "EREIGTXT",
    Catalog.CAUSE: "EREIGTXT",
    Catalog.MEASURE: "EREIGTXT",
    Catalog.ORDINAL_CLASS: "ORDKLASS",
    Catalog.CONTRACTOR: "AUFTRGEB",
    Catalog.GAGE: "PRUEFMIT",
    Catalog.PROCESS_PARAMETER: "PROZPARAMTXT",
    Catalog.K0061: "KAT_4270",
    Catalog.K0062: "KAT_4280",
    Catalog.K0063: "KAT_4290",
}


class CatalogFieldType(Enum):
    """Role of a field within its catalog."""

    ID = "id"
    DATA = "data"
    STATE = "state"


ID = CatalogFieldType.ID
DATA = CatalogFieldType.DATA
STATE = CatalogFieldType.STATE


@dataclass(frozen=True)
class CatalogField:
    """A single field of a catalog."""

    catalog: Catalog
    kkey: KKey
    metadata: KKeyMetadata
    type: CatalogFieldType = CatalogFieldType.DATA

    @property
    def is_data_field(self) -> bool:
        return self.type is CatalogFieldType.DATA

    @property
    def is_id_field(self) -> bool:
        return self.type is CatalogFieldType.ID


# (key, catalog, column name, data type, length, field type)
_CATALOG_FIELD_ROWS: tuple[
    tuple[str, Catalog, str, KKeyDataType, int | None, CatalogFieldType], ...
] = (
    ("K4020_ID", Catalog.SUPPLIER, "LILFDNR", INTEGER, None, ID),
    ("K4022", Catalog.SUPPLIER, "LINR", STRING, 20, DATA),
    ("K4023", Catalog.SUPPLIER, "LINAME1", STRING, 80, DATA),
    ("K4024", Catalog.SUPPLIER, "LINAME2", STRING, 80, DATA),
    ("K4025", Catalog.SUPPLIER, "LIWERKSSCHL", STRING, 50, DATA),
    ("K4026", Catalog.SUPPLIER, "LIWERK", STRING, 50, DATA),
    ("K4027", Catalog.SUPPLIER, "LISTRASSE", STRING, 50, DATA),
    ("K4028", Catalog.SUPPLIER, "LIORT", STRING, 50, DATA),
    ("K4029", Catalog.SUPPLIER, "LILAND", STRING, 50, DATA),
    ("K4521", Catalog.SUPPLIER, "LISTATE", INTEGER, None, STATE),
    ("K4522", Catalog.SUPPLIER, "LIMEMO", STRING, 255, DATA),
    ("K4000_ID", Catalog.CUSTOMER, "KULFDNR", INTEGER, None, ID),
    ("K4002", Catalog.CUSTOMER, "KUNR", STRING, 20, DATA),
    ("K4003", Catalog.CUSTOMER, "KUNAME1", STRING, 80, DATA),
    ("K4004", Catalog.CUSTOMER, "KUNAME2", STRING, 80, DATA),
    ("K4005", Catalog.CUSTOMER, "KUWERKSSCHL", STRING, 50, DATA),
    ("K4006", Catalog.CUSTOMER, "KUWERK", STRING, 50, DATA),
    ("K4007", Catalog.CUSTOMER, "KUSTRASSE", STRING, 50, DATA),
    ("K4008", Catalog.CUSTOMER, "KUORT", STRING, 50, DATA),
    ("K4009", Catalog.CUSTOMER, "KULAND", STRING, 50, DATA),
    ("K4501", Catalog.CUSTOMER, "KUSTATE", INTEGER, None, STATE),
    ("K4502", Catalog.CUSTOMER, "KUMEMO", STRING, 255, DATA),
    ("K4120_ID", Catalog.EMPLOYEE, "MIMITARB", INTEGER, None, ID),
    ("K4122", Catalog.EMPLOYEE, "MINAME1", STRING, 50, DATA),
    ("K4123", Catalog.EMPLOYEE, "MINAME2", STRING, 50, DATA),
    ("K4124", Catalog.EMPLOYEE, "MIABT", STRING, 50, DATA),
    ("K4125", Catalog.EMPLOYEE, "MITELEFON", STRING, 50, DATA),
    ("K4126", Catalog.EMPLOYEE, "MIFAX", STRING, 50, DATA),
    ("K4127", Catalog.EMPLOYEE, "MIEMAIL", STRING, 50, DATA),
    ("K4128", Catalog.EMPLOYEE, "MIPOS", STRING, 30, DATA),
    ("K4129", Catalog.EMPLOYEE, "MIANREDE", STRING, 15, DATA),
    ("K4621", Catalog.EMPLOYEE, "MISTATE", INTEGER, None, STATE),
    ("K4622", Catalog.EMPLOYEE, "MIBEMERK", STRING, 200, DATA),
    ("K4090_ID", Catalog.OPERATOR, "PRPRUEFER", INTEGER, None, ID),
    ("K4092", Catalog.OPERATOR, "PRNAME", STRING, 50, DATA),
    ("K4093", Catalog.OPERATOR, "PRVORNAME", STRING, 50, DATA),
    ("K4094", Catalog.OPERATOR, "PRABT", STRING, 50, DATA),
    ("K4095", Catalog.OPERATOR, "PRTELEFON", STRING, 50, DATA),
    ("K4096", Catalog.OPERATOR, "PRFAX", STRING, 50, DATA),
    ("K4097", Catalog.OPERATOR, "PREMAIL", STRING, 50, DATA),
    ("K4098", Catalog.OPERATOR, "PRPOS", STRING, 30, DATA),
    ("K4099", Catalog.OPERATOR, "PRANREDE", STRING, 15, DATA),
    ("K4591", Catalog.OPERATOR, "PRSTATE", INTEGER, None, STATE),
    ("K4592", Catalog.OPERATOR, "PRBEMERK", STRING, 200, DATA),
    ("K4060_ID", Catalog.MACHINE, "MAMASCHINE", INTEGER, None, ID),
    ("K4062", Catalog.MACHINE, "MANR", STRING, 40, DATA),
    ("K4063", Catalog.MACHINE, "MABEZ", STRING, 100, DATA),
    ("K4064", Catalog.MACHINE, "MABEREICH", STRING, 50, DATA),
    ("K4065", Catalog.MACHINE, "MAABT", STRING, 50, DATA),
    ("K4066", Catalog.MACHINE, "MAOPNR", STRING, 50, DATA),
    ("K4067", Catalog.MACHINE, "MAEXTREFNR", STRING, 50, DATA),
    ("K4561", Catalog.MACHINE, "MASTATE", INTEGER, None, STATE),
    ("K4562", Catalog.MACHINE, "MABESCH", STRING, 200, DATA),
    ("K4250_ID", Catalog.TOOL, "NENEST", INTEGER, None, ID),
    ("K4252", Catalog.TOOL, "NEBESCH", STRING, 80, DATA),
    ("K4253", Catalog.TOOL, "SMART_NENR", STRING, 100, DATA),
    ("K4751", Catalog.TOOL, "NESTATE", INTEGER, None, STATE),
    ("K4752", Catalog.TOOL, "NEBEMERK", STRING, 200, DATA),
    ("K4010_ID", Catalog.MANUFACTURER, "HELFDNR", INTEGER, None, ID),
    ("K4012", Catalog.MANUFACTURER, "HENR", STRING, 50, DATA),
    ("K4013", Catalog.MANUFACTURER, "HENAME1", STRING, 80, DATA),
    ("K4014", Catalog.MANUFACTURER, "HENAME2", STRING, 80, DATA),
    ("K4015", Catalog.MANUFACTURER, "HEWERKSSCHL", STRING, 50, DATA),
    ("K4016", Catalog.MANUFACTURER, "HEWERK", STRING, 50, DATA),
    ("K4017", Catalog.MANUFACTURER, "HESTRASSE", STRING, 50, DATA),
    ("K4018", Catalog.MANUFACTURER, "HEORT", STRING, 50, DATA),
    ("K4019", Catalog.MANUFACTURER, "HELAND", STRING, 50, DATA),
    ("K4512", Catalog.MANUFACTURER, "HEMEMO", STRING, None, DATA),
    ("K4511", Catalog.MANUFACTURER, "HESTATE", INTEGER, None, STATE),
    ("K4040_ID", Catalog.MATERIAL, "WSLFDNR", INTEGER, None, ID),
    ("K4042", Catalog.MATERIAL, "WSNR", STRING, 50, DATA),
    ("K4043", Catalog.MATERIAL, "WSBEZEICH", STRING, 100, DATA),
    ("K4541", Catalog.MATERIAL, "WSSTATE", INTEGER, None, STATE),
    ("K4542", Catalog.MATERIAL, "WSBEMERK", STRING, 200, DATA),
    ("K4080_ID", Catalog.UNIT, "EIEINHEIT", INTEGER, None, ID),
    ("K4082", Catalog.UNIT, "EIEINHTEXT", STRING, 100, DATA),
    ("K4581", Catalog.UNIT, "EISTATE", INTEGER, None, STATE),
    ("K4582", Catalog.UNIT, "EIBEMERK", STRING, 200, DATA),
    ("K4050_ID", Catalog.DRAWING, "ZNTEIL", INTEGER, None, ID),
    ("K4052", Catalog.DRAWING, "ZNZNR", STRING, 40, DATA),
    ("K4053", Catalog.DRAWING, "ZNZNRINDEX", STRING, 100, DATA),
    ("K4551", Catalog.DRAWING, "ZNSTATE", INTEGER, None, STATE),
    ("K4552", Catalog.DRAWING, "ZNBEMERK", STRING, 200, DATA),
    ("K4110_ID", Catalog.PRODUCT, "EZERZEUGNIS", INTEGER, None, ID),
    ("K4112", Catalog.PRODUCT, "EZNUMMER", STRING, 20, DATA),
    ("K4113", Catalog.PRODUCT, "EZBEZ", STRING, 80, DATA),
    ("K4114", Catalog.PRODUCT, "EZKUNDE", INTEGER, None, DATA),
    ("K4611", Catalog.PRODUCT, "EZSTATE", INTEGER, None, STATE),
    ("K4612", Catalog.PRODUCT, "EZBEMERK", STRING, 200, DATA),
    ("K4030_ID", Catalog.PURCHASE_ORDER, "PAAUFTRAG", INTEGER, None, ID),
    ("K4032", Catalog.PURCHASE_ORDER, "PAAUFTRAGNR", STRING, 40, DATA),
    ("K4033", Catalog.PURCHASE_ORDER, "PABEZEICH", STRING, 100, DATA),
    ("K4531", Catalog.PURCHASE_ORDER, "PASTATE", INTEGER, None, STATE),
    ("K4532", Catalog.PURCHASE_ORDER, "PABEMERK", STRING, 200, DATA),
    ("K4230_ID", Catalog.ORDINAL_CLASS, "OKKEY", INTEGER, None, ID),
    ("K4232", Catalog.ORDINAL_CLASS, "OKNR", STRING, 40, DATA),
    ("K4233", Catalog.ORDINAL_CLASS, "OKBEZ", STRING, 100, DATA),
    ("K4234", Catalog.ORDINAL_CLASS, "OKKURZBEZ", STRING, 20, DATA),
    ("K4235", Catalog.ORDINAL_CLASS, "OKBEWERT", INTEGER, None, DATA),
    ("K4236", Catalog.ORDINAL_CLASS, "OKSTATE", INTEGER, None, STATE),
    ("K4731", Catalog.ORDINAL_CLASS, "OKRANG", INTEGER, None, DATA),
    ("K4732", Catalog.ORDINAL_CLASS, "OKBEMERK", STRING, 200, DATA),
    ("K4100_ID", Catalog.CONTRACTOR, "AULFDNR", INTEGER, None, ID),
    ("K4102", Catalog.CONTRACTOR, "AUNR", STRING, 50, DATA),
    ("K4103", Catalog.CONTRACTOR, "AUNAME1", STRING, 100, DATA),
    ("K4601", Catalog.CONTRACTOR, "AUGSTATE", INTEGER, None, STATE),
    ("K4602", Catalog.CONTRACTOR, "AUMEMO", STRING, None, DATA),
    ("K4070", Catalog.GAGE, "PMPRUEFMIT", INTEGER, None, ID),
    ("K4072", Catalog.GAGE, "PMNR", STRING, 40, DATA),
    ("K4073", Catalog.GAGE, "PMBEZ", STRING, 80, DATA),
    ("K4074", Catalog.GAGE, "SMART_PGBEZ", STRING, 80, DATA),
    ("K4075", Catalog.GAGE, "PMLETZTDAT", DATE, None, DATA),
    ("K4076", Catalog.GAGE, "PMNAECHDAT", DATE, None, DATA),
    ("K4077", Catalog.GAGE, "PMIPADDR", STRING, 30, DATA),
    ("K4078", Catalog.GAGE, "PMEINSORT", STRING, 50, DATA),
    ("K4079", Catalog.GAGE, "PMCOMP", STRING, 50, DATA),
    ("K4571", Catalog.GAGE, "PMSTATE", INTEGER, None, STATE),
    ("K4572", Catalog.GAGE, "PM_BESCH", STRING, 200, DATA),
    ("K4575", Catalog.GAGE, "PMQVERS", STRING, 30, DATA),
    ("K4576", Catalog.GAGE, "PMSOFTW", STRING, 50, DATA),
    ("K4240_ID", Catalog.PROCESS_PARAMETER, "PPNR", INTEGER, None, ID),
    ("K4242", Catalog.PROCESS_PARAMETER, "PPNRTEXT", STRING, 40, DATA),
    ("K4244", Catalog.PROCESS_PARAMETER, "PPKURZTEXT", STRING, 20, DATA),
    ("K4243", Catalog.PROCESS_PARAMETER, "PPLANGTEXT", STRING, 100, DATA),
    ("K4741", Catalog.PROCESS_PARAMETER, "PPSTATE", INTEGER, None, STATE),
    ("K4742", Catalog.PROCESS_PARAMETER, "PPBEMERK", STRING, 200, DATA),
    ("K4270_ID", Catalog.K0061, "KATKEY", INTEGER, None, ID),
    ("K4272", Catalog.K0061, "NR", STRING, 20, DATA),
    ("K4273", Catalog.K0061, "BEZ", STRING, 100, DATA),
    ("K4771", Catalog.K0061, "STATE", INTEGER, None, STATE),
    ("K4772", Catalog.K0061, "BEMERK", STRING, 200, DATA),
    ("K4280_ID", Catalog.K0062, "KATKEY", INTEGER, None, ID),
    ("K4282", Catalog.K0062, "NR", STRING, 20, DATA),
    ("K4283", Catalog.K0062, "BEZ", STRING, 100, DATA),
    ("K4781", Catalog.K0062, "STATE", INTEGER, None, STATE),
    ("K4782", Catalog.K0062, "BEMERK", STRING, 200, DATA),
    ("K4290", Catalog.K0063, "KATKEY", INTEGER, None, ID),
    ("K4292", Catalog.K0063, "NR", STRING, 20, DATA),
    ("K4293", Catalog.K0063, "BEZ", STRING, 100, DATA),
    ("K4791", Catalog.K0063, "STATE", INTEGER, None, STATE),
    ("K4792", Catalog.K0063, "BEMERK", STRING, 200, DATA),
)

CATALOG_FIELDS: tuple[CatalogField, ...] = tuple(
    CatalogField(catalog, KKey.of(key), KKeyMetadata.of(column_name, data_type, length), field_type)
    for key, catalog, column_name, data_type, length, field_type in _CATALOG_FIELD_ROWS
)

_FIELDS_BY_CATALOG: dict[Catalog, tuple[CatalogField, ...]] = {
    catalog: tuple(f for f in CATALOG_FIELDS if f.catalog is catalog)
    for catalog in Catalog
    if any(f.catalog is catalog for f in CATALOG_FIELDS)
}

_FIELDS_BY_KEY: dict[KKey, CatalogField] = {f.kkey: f for f in CATALOG_FIELDS}


def catalogs_with_defined_fields() -> set[Catalog]:
    """Return the catalogs that have at least one field."""
    return set(_FIELDS_BY_CATALOG)


def fields_of_catalog(catalog: Catalog) -> tuple[CatalogField, ...]:
    """Return the fields of ``catalog`` in declaration order.

    Raises
    ------
        ValueError: If the catalog has no fields defined.

    """
    fields = _FIELDS_BY_CATALOG.get(catalog)
    if fields is None:
        raise ValueError(f"Unknown catalog {catalog.name}")
    return fields


def id_field_of_catalog(catalog: Catalog) -> CatalogField:
    """Return the identifying field of ``catalog``.

    Raises
    ------
        ValueError: If the catalog is unknown or has no ID field.

    """
    for field in fields_of_catalog(catalog):
        if field.is_id_field:
            return field
    raise ValueError(f"Catalog {catalog.name} does not have ID column defined.")


def get_kkeys_of_catalog(
    catalog: Catalog,
    predicate: Callable[[CatalogField], bool] | None = None,
) -> list[KKey]:
    """Return the sorted K-keys of the catalog fields matching ``predicate``."""
    return sorted(
        field.kkey
        for field in fields_of_catalog(catalog)
        if predicate is None or predicate(field)
    )


def for_kkey(kkey: KKey | str) -> CatalogField | None:
    """Return the catalog field addressed by ``kkey``, if any."""
    return _FIELDS_BY_KEY.get(KKey.of(kkey))


def metadata_for(kkey: KKey | str) -> KKeyMetadata | None:
    """Return the metadata of a catalog K-key, if any."""
    field = for_kkey(kkey)
    return field.metadata if field else None
