"""Corrections of the default K-key table.

Overrides keys that were generated wrongly and adds keys the generated table
does not know (attribute values, user fields, hierarchy keys ...).
"""

from __future__ import annotations

from aqdef.convert import (
    BooleanConverter,
    ChargeConverter,
    EventIdListConverter,
    SubgroupSizeConverter,
)
from aqdef.kkey import KKey
from aqdef.metadata import KKeyDataType, KKeyMetadata

STRING = KKeyDataType.STRING
INTEGER = KKeyDataType.INTEGER
DECIMAL = KKeyDataType.DECIMAL
DATE = KKeyDataType.DATE

# Target, nominal and limit keys that follow the characteristic's decimal places.
_DECIMAL_SETTING_KEYS = {
    "K0001": "WVWERT",
    "K2100": "MEZIELWERT",
    "K2101": "MENENNMAS",
    "K2110": "MEUGW",
    "K2111": "MEOGW",
    "K2114": "MEUGSCHROTT",
    "K2115": "MEOGSCHROTT",
    "K2116": "MENORMISTUN",
    "K2117": "MENORMISTOB",
    "K2130": "MEPLAUSIUN",
    "K2131": "MEPLAUSIOB",
}

# (key, column name, data type, length, save to db)
_MISSING_KEYS: tuple[tuple[str, str, KKeyDataType, int | None, bool], ...] = (
    ("K0011", "WV0011", STRING, None, True),
    ("K1000", "TETEIL", INTEGER, None, False),
    ("K2000", "MEMERKMAL", INTEGER, None, False),
    ("K0021", "?K0021?", INTEGER, None, False),
    ("K1040", "?K1040?", INTEGER, 5, False),
    ("K2008", "MEPRUEFORT", INTEGER, None, True),
    ("K2015", "MEGLMITT", INTEGER, 3, True),
    ("K2023", "?K2023?", INTEGER, 3, False),
    ("K2031", "MEUPPERMERKMAL", INTEGER, 5, True),
    ("K2076", "MEPRUEFBEGINND", DATE, None, True),
    ("K2080", "MEMASSN", INTEGER, 5, True),
    ("K2143", "MEEINHREL", STRING, 20, True),
    ("K2144", "MEADDFAKREL", DECIMAL, None, True),
    ("K2145", "MEMULFAKREL", DECIMAL, None, True),
    ("K2437", "MEPRUEFENDED", DATE, None, True),
    ("K0054", "WV0054", STRING, 32, True),
    ("K0055", "WV0055", STRING, 32, True),
    ("K0056", "WV0056", STRING, 32, True),
    ("K0057", "WV0057", STRING, 32, True),
    ("K0058", "WV0058", STRING, 32, True),
    ("K0059", "WV0059", STRING, 32, True),
    ("K0060", "WV0060", STRING, 32, True),
    ("K0061", "WV0061", INTEGER, 10, True),
    ("K0062", "WV0062", INTEGER, 10, True),
    ("K0063", "WV0063", INTEGER, 10, True),
    ("K0080", "WV0080", STRING, 64, True),
    ("K0081", "WV0081", INTEGER, 5, True),
    # logical groups, stored like K200x characteristic keys
    ("K5001", "MEMERKNR", STRING, 20, True),
    ("K5002", "MEMERKBEZ", STRING, 80, True),
    ("K5003", "MEKURZBEZ", STRING, 20, True),
    ("K5007", "?K5007?", STRING, 20, False),
    ("K5045", "?K5045?", STRING, 80, False),
    ("K5090", "?K5090?", STRING, 255, False),
    # hierarchy
    ("K5101", "?K5101?", INTEGER, None, False),
    ("K5102", "?K5102?", INTEGER, None, False),
    ("K5103", "?K5103?", INTEGER, None, False),
    ("K5111", "?K5111?", INTEGER, None, False),
    ("K5112", "?K5112?", INTEGER, None, False),
    ("K5113", "?K5113?", INTEGER, None, False),
    ("K8006", "?K8006?", DECIMAL, None, False),
    ("K8007", "?K8007?", DECIMAL, None, False),
    ("K8010", "?K8010?", STRING, None, False),
    ("K8011", "?K8011?", DECIMAL, None, False),
    ("K8012", "?K8012?", DECIMAL, None, False),
    ("K8013", "?K8013?", DECIMAL, None, False),
    ("K8014", "?K8014?", DECIMAL, None, False),
    ("K8015", "?K8015?", DECIMAL, None, False),
    ("K8106", "?K8106?", DECIMAL, None, False),
    ("K8107", "?K8107?", DECIMAL, None, False),
    ("K8110", "?K8110?", STRING, None, False),
    ("K8111", "?K8111?", DECIMAL, None, False),
    ("K8112", "?K8112?", DECIMAL, None, False),
    ("K8113", "?K8113?", DECIMAL, None, False),
    ("K8114", "?K8114?", DECIMAL, None, False),
    ("K8115", "?K8115?", DECIMAL, None, False),
    ("K8503", "METRANSART", INTEGER, 3, False),
    ("K8505", "?K8505?", INTEGER, 5, False),
    ("K8524", "?K8524?", DECIMAL, None, False),
    ("K8525", "?K8525?", DECIMAL, None, False),
)

# User fields K1800-K1892 (part) and K2800-K2892 (characteristic), ten blocks
# of (name, flag, text).
_USER_FIELD_LENGTHS = (50, 1, 255)


def _user_field_keys(prefix: str) -> dict[KKey, KKeyMetadata]:
    keys = {}
    for block in range(10):
        for offset, length in enumerate(_USER_FIELD_LENGTHS):
            key = f"{prefix}8{block}{offset}"
            keys[KKey.of(key)] = KKeyMetadata.of(f"?{key}?", STRING, length, save_to_db=False)
    return keys


class CorrectionsKKeyProvider:
    """Fills in missing K-keys and overrides incorrect defaults."""

    def create_kkeys_with_metadata(self) -> dict[KKey, KKeyMetadata]:
        keys: dict[KKey, KKeyMetadata] = {}

        for key, column_name in _DECIMAL_SETTING_KEYS.items():
            keys[KKey.of(key)] = KKeyMetadata.of(
                column_name, DECIMAL, respects_characteristic_decimal_settings=True
            )

        keys[KKey.of("K0005")] = KKeyMetadata.of(
            "WV0005", KKeyDataType.INTEGER_LIST, converter=EventIdListConverter()
        )
        keys[KKey.of("K0006")] = KKeyMetadata.of("WVCHARGE", STRING, converter=ChargeConverter())
        keys[KKey.of("K1017")] = KKeyMetadata.of(
            "TE_1017", KKeyDataType.BOOLEAN, converter=BooleanConverter()
        )

        # relative allowances, absolute limits K2110/K2111 are derived from them
        for key in ("K2112", "K2113"):
            keys[KKey.of(key)] = KKeyMetadata.of(
                f"?{key}?",
                DECIMAL,
                save_to_db=False,
                respects_characteristic_decimal_settings=True,
            )

        keys[KKey.of("K0020")] = KKeyMetadata.of(
            "?K0020?", INTEGER, converter=SubgroupSizeConverter(), save_to_db=False
        )

        for key, column_name, data_type, length, save_to_db in _MISSING_KEYS:
            keys[KKey.of(key)] = KKeyMetadata.of(
                column_name, data_type, length, save_to_db=save_to_db
            )

        keys.update(_user_field_keys("K1"))
        keys.update(_user_field_keys("K2"))
        return keys
