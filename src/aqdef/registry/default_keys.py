"""Default K-key table.

Column names and lengths mirror the Q-DAS database the table was generated
from. Known mistakes are fixed by :mod:`aqdef.registry.corrections`.
"""

from __future__ import annotations

from aqdef.kkey import KKey
from aqdef.metadata import KKeyDataType, KKeyMetadata

STRING = KKeyDataType.STRING
INTEGER = KKeyDataType.INTEGER
DECIMAL = KKeyDataType.DECIMAL
DATE = KKeyDataType.DATE
UUID = KKeyDataType.UUID

# (key, column name, data type, length). Later rows win for duplicate keys.
DEFAULT_KKEY_ROWS: tuple[tuple[str, str, KKeyDataType, int | None], ...] = (
    ("K1001", "TETEILNR", STRING, 30),
    ("K1002", "TEBEZEICH", STRING, 80),
    ("K1010", "TEDPFLICHT", INTEGER, 3),
    ("K1900", "TEBEM", STRING, 255),
    ("K1021", "TEHERSTELLERNR", STRING, 20),
    ("K1022", "TEHERSTELLERBEZ", STRING, 80),
    ("K1031", "TEWERKSTOFFNR", STRING, 20),
    ("K1032", "TEWERKSTOFFBEZ", STRING, 40),
    ("K1041", "TEZEICHNUNGNR", STRING, 30),
    ("K1042", "TEZEICHNUNGAEND", STRING, 20),
    ("K1043", "TEZEICHNUNGINDEX", STRING, 40),
    ("K1053", "TEAUFTRAGSTR", STRING, 40),
    ("K1051", "TEAUFTRAGGBNR", STRING, 20),
    ("K1052", "TEAUFTRAGGBBEZ", STRING, 40),
    ("K1061", "TEKUNDENR", STRING, 20),
    ("K1062", "TEKUNDEBEZ", STRING, 40),
    ("K1071", "TELIEFERANTNR", STRING, 20),
    ("K1072", "TELIEFERANTBEZ", STRING, 40),
    ("K1201", "TEPREINRNR", STRING, 24),
    ("K1202", "TEPREINRBEZ", STRING, 40),
    ("K1203", "TEPRGRUNDBEZ", STRING, 80),
    ("K1204", "TEPRBEGINNSTR", STRING, 40),
    ("K1205", "TEPRENDESTR", STRING, 40),
    ("K1003", "TEKURZBEZEICH", STRING, 20),
    ("K1004", "TEAENDSTAND", STRING, 20),
    ("K1005", "TEERZEUGNIS", STRING, 40),
    ("K1081", "TEMASCHINENR", STRING, 24),
    ("K1082", "TEMASCHINEBEZ", STRING, 40),
    ("K1085", "TEMASCHINEORT", STRING, 40),
    ("K1086", "TEARBEITSGANG", STRING, 40),
    ("K1100", "TEBEREICH", STRING, 40),
    ("K1101", "TEABT", STRING, 40),
    ("K1206", "TEPRPLATZ", STRING, 40),
    ("K1207", "TEPPLANERST", STRING, None),
    ("K1023", "TEHERSTELLERKEY", INTEGER, 5),
    ("K1033", "TEWERKSTOFFKEY", INTEGER, 5),
    ("K1044", "TEZEICHNUNGKEY", INTEGER, 5),
    ("K1054", "TEAUFTRAGGBKEY", INTEGER, 5),
    ("K1063", "TEKUNDEKEY", INTEGER, 5),
    ("K1073", "TELIEFERANTKEY", INTEGER, 5),
    ("K1083", "TEMASCHINEKEY", INTEGER, 5),
    ("K1208", "TEPREINRKEY", INTEGER, 5),
    ("K1007", "TENRKURZ", STRING, 20),
    ("K1102", "TEWERKSTATT", STRING, 40),
    ("K1211", "TENORMNR", STRING, 20),
    ("K1212", "TENORMBEZ", STRING, 40),
    ("K1215", "TENORMAL", INTEGER, 5),
    ("K1008", "TETYP", STRING, 20),
    ("K1009", "TECODE", STRING, 20),
    ("K1011", "TEVARIANTE", STRING, 20),
    ("K1012", "TESACHNRZUS", STRING, 20),
    ("K1013", "TESACHNRIDX", STRING, 20),
    ("K1014", "TETEILIDENT", STRING, 20),
    ("K1103", "TEKOSTST", STRING, 40),
    ("K1104", "TESCHICHT", STRING, 20),
    ("K1110", "TEBESTNR", STRING, 20),
    ("K1111", "TEWARENEINNR", STRING, 20),
    ("K1112", "TEWUERFEL", STRING, None),
    ("K1113", "TEPOSITION", STRING, None),
    ("K1114", "TEVORRICHT", STRING, None),
    ("K1115", "TEFERTDAT", STRING, None),
    ("K1209", "TEPRUEFART", STRING, 20),
    ("K1230", "TEMESSRAUM", STRING, 40),
    ("K1231", "TEMESSPROGNR", STRING, 20),
    ("K1232", "TEMESSPROGVER", STRING, 20),
    ("K1223", "TEPRUEFERKEY", INTEGER, 5),
    ("K1221", "TEPRUEFERNR", STRING, 20),
    ("K1222", "TEPRUEFERNAME", STRING, 40),
    ("K1016", "TEZSB_1016", STRING, 30),
    ("K1350", "TEREPORTFILE_1350", STRING, 50),
    ("K1045", "TE_1045", STRING, 20),
    ("K1046", "TE_1046", STRING, 60),
    ("K1047", "TE_1047", STRING, 20),
    ("K1300", "TE_1300", INTEGER, None),
    ("K1301", "TE_1301", INTEGER, 5),
    ("K1302", "TE_1302", STRING, 40),
    ("K1311", "TE_1311", STRING, 40),
    ("K1341", "TE_1341", STRING, 20),
    ("K1342", "TE_1342", STRING, 40),
    ("K1343", "TE_1343", STRING, 20),
    ("K1303", "TEWERK", STRING, 40),
    ("K1210", "TEMESSTYP", INTEGER, 5),
    ("K1344", "TE_1344", STRING, 40),
    ("K1015", "TE_1015", INTEGER, 3),
    ("K1017", "TE_1017", INTEGER, 3),
    ("K1087", "TE_1087", STRING, None),
    ("K1018", "TE_1018", INTEGER, None),
    ("K1401", "TE_1401", INTEGER, None),
    ("K1402", "TE_1402", INTEGER, None),
    ("K1403", "TE_1403", INTEGER, None),
    ("K1404", "TE_1404", INTEGER, None),
    ("K1405", "TE_1405", INTEGER, None),
    ("K1407", "TE_1407", INTEGER, None),
    ("K1408", "TE_1408", INTEGER, None),
    ("K1410", "TE_1410", STRING, None),
    ("K1411", "TE_1411", INTEGER, None),
    ("K1091", "TE_1091", STRING, None),
    ("K1092", "TE_1092", STRING, None),
    ("K1105", "TE_1105", STRING, None),
    ("K1106", "TE_1106", STRING, None),
    ("K1107", "TE_1107", STRING, None),
    ("K1108", "TE_1108", STRING, None),
    ("K1304", "TE_1304", STRING, None),
    ("K1048", "TE_1048", STRING, None),
    ("K0001", "WVWERTNR", DECIMAL, 22),
    ("K0002", "WVATTRIBUT", INTEGER, 5),
    ("K0008", "WVPRUEFER", INTEGER, 10),
    ("K0012", "WVPRUEFMIT", INTEGER, 10),
    ("K0010", "WVMASCHINE", INTEGER, 10),
    ("K0007", "WVNEST", INTEGER, 10),
    ("K0004", "WVDATZEIT", DATE, None),
    ("K0006", "WVCHARGE", STRING, 14),
    ("K0053", "WVAUFTRAG", STRING, 20),
    ("K0031", "WV0031", INTEGER, None),
    ("K0034", "WV0034", INTEGER, None),
    ("K0009", "WV0009", STRING, 255),
    ("K0014", "WV0014", STRING, 40),
    ("K0015", "WV0015", INTEGER, 5),
    ("K0016", "WV0016", STRING, None),
    ("K0017", "WV0017", STRING, None),
    ("K0097", "WV0097", UUID, None),
    ("K2001", "MEMERKNR", STRING, 20),
    ("K2002", "MEMERKBEZ", STRING, 80),
    ("K2101", "MENENNMAS", DECIMAL, 22),
    ("K2120", "MEARTUGW", INTEGER, 3),
    ("K2121", "MEARTOGW", INTEGER, 3),
    ("K2240", "MEARTPLAUSIUNT", INTEGER, None),
    ("K2241", "MEARTPLAUSIOB", INTEGER, None),
    ("K2110", "MEUGW", DECIMAL, 22),
    ("K2111", "MEOGW", DECIMAL, 22),
    ("K2504", "MEFSK", INTEGER, 3),
    ("K2163", "MEFEHLKOST", DECIMAL, 22),
    ("K2006", "MEDPFLICHT", INTEGER, 5),
    ("K2141", "MEEINHEIT", INTEGER, 5),
    ("K2022", "MEAUFLOES", INTEGER, 5),
    ("K2013", "MEKLASSENW", DECIMAL, 22),
    ("K2311", "MEFERTARTNR", STRING, 20),
    ("K2312", "MEFERTART", STRING, 40),
    ("K2405", "MEPRUEFMIT", INTEGER, 5),
    ("K2403", "MEPMGRUPPET", STRING, 80),
    ("K2402", "MEPRUEFMITT", STRING, 80),
    ("K2401", "MEPRUEFMITNRT", STRING, 40),
    ("K2041", "MEERFART", INTEGER, 3),
    ("K2305", "MEMASCHINE", INTEGER, 5),
    ("K2900", "MEBEMERK", STRING, 255),
    ("K2205", "MEUMFSTICH", INTEGER, 5),
    ("K2220", "MEANZPRUEF", INTEGER, 5),
    ("K2221", "MEANZWIED", INTEGER, 5),
    ("K2205", "MEANZTEILE", INTEGER, 5),
    ("K2021", "MEFORMEL", STRING, 255),
    ("K2024", "METRANSPA", DECIMAL, 22),
    ("K2025", "METRANSPB", DECIMAL, 22),
    ("K2026", "METRANSPC", DECIMAL, 22),
    ("K2027", "METRANSPD", DECIMAL, 22),
    ("K2502", "MEAUSWART", INTEGER, 3),
    ("K2202", "MEAUSWTYP", INTEGER, 3),
    ("K2004", "MEMERKART", INTEGER, 5),
    ("K2011", "MEVERTFORM", INTEGER, 5),
    ("K2130", "MEPLAUSIUN", DECIMAL, 22),
    ("K2131", "MEPLAUSIOB", DECIMAL, 22),
    ("K2201", "MEPROSTREU", DECIMAL, 22),
    ("K2217", "MENORMISTSTR", STRING, 80),
    ("K2213", "MENORMIST", DECIMAL, 22),
    ("K2211", "MENORMNR", STRING, 40),
    ("K2212", "MENORMBEZ", STRING, 40),
    ("K2007", "MESTEUERB", INTEGER, 5),
    ("K2060", "MEEREIGKAT", STRING, 50),
    ("K2005", "MEMERKKLASSE", INTEGER, 5),
    ("K2009", "MEUNTERSART", INTEGER, None),
    ("K2234", "MEANZORDKLASSE", INTEGER, None),
    ("K2503", "MEAUTOERKENNUNG", INTEGER, 3),
    ("K2501", "MEATTR", INTEGER, 3),
    ("K2072", "METRANSFEINGA", DECIMAL, 22),
    ("K2071", "METRANSFEINGB", DECIMAL, 22),
    ("K2045", "MEERFKANAL", STRING, 20),
    ("K2046", "MEERFSUBKANAL", STRING, 20),
    ("K2012", "MENACHARBEIT", INTEGER, None),
    ("K2100", "MEZIELWERT", DECIMAL, 22),
    ("K2102", "MEPMAX", DECIMAL, 22),
    ("K2142", "MEEINHEITTEXT", STRING, 20),
    ("K2160", "MELOSUMFANG", INTEGER, 5),
    ("K2161", "MEKOSTENNACHARBEIT", DECIMAL, 22),
    ("K2162", "MEKOSTENAUSSCHUSS", DECIMAL, 22),
    ("K2301", "MEMASCHNR", STRING, 20),
    ("K2302", "MEMASCHBEZ", STRING, 40),
    ("K2303", "MEABT", STRING, 40),
    ("K2304", "MESTANDORT", STRING, 40),
    ("K2320", "MEAUFTRNR", STRING, 20),
    ("K2323", "MEAUFTRAGGEBNR", INTEGER, 5),
    ("K2321", "MEAUFTRAGGEBNRT", STRING, 20),
    ("K2322", "MEAUFTRAGGEB", STRING, 40),
    ("K2410", "MEPRUEFORTT", STRING, 40),
    ("K2411", "MEPRUEFBEGINN", STRING, 80),
    ("K2412", "MEPRUEFENDE", STRING, 80),
    ("K2423", "MEPRUEFER", INTEGER, 5),
    ("K2421", "MEPRUEFERNR", STRING, 20),
    ("K2422", "MEPRUEFERNAME", STRING, 40),
    ("K2901", "MEPRUEFBEDING", STRING, 80),
    ("K2019", "MEPRUEFMITNR", INTEGER, None),
    ("K2030", "MEAUGROUP", INTEGER, 5),
    ("K2151", "METOLERANZTEXT", STRING, 20),
    ("K2333", "MEWERKSTCK", INTEGER, 5),
    ("K2332", "MEWERKSTCKTEXT", STRING, 40),
    ("K2404", "MEPMAUFLOES", DECIMAL, 22),
    ("K2215", "MENORMAL", INTEGER, 5),
    ("K2214", "MENORMALTEMP", DECIMAL, 22),
    ("K2331", "MEWERKSTCKNR", STRING, 20),
    ("K2003", "MEKURZBEZ", STRING, 20),
    ("K2114", "MEUGSCHROTT", DECIMAL, 22),
    ("K2115", "MEOGSCHROTT", DECIMAL, 22),
    ("K2225", "MECG", DECIMAL, 22),
    ("K2226", "MECGK", DECIMAL, 22),
    ("K2227", "MEABWGC", DECIMAL, 22),
    ("K2243", "MEZEICHN", STRING, 80),
    ("K2313", "MEFERTARTKEY", INTEGER, 5),
    ("K2406", "MEPMHERST", STRING, 40),
    ("K2042", "MEERFNR", INTEGER, 5),
    ("K2043", "MEERFNAME", STRING, 40),
    ("K2044", "MEERFINDEX", INTEGER, 5),
    ("K2047", "MEANFINDEX", INTEGER, 3),
    ("K2051", "MEINTERFACE", INTEGER, 3),
    ("K2052", "MEBAUD", INTEGER, 5),
    ("K2053", "MEIRQ", INTEGER, 3),
    ("K2054", "MEPARITY", INTEGER, 3),
    ("K2055", "MEDATA", INTEGER, 3),
    ("K2056", "MESTOP", INTEGER, 3),
    ("K2061", "MEPZPKAT", INTEGER, 5),
    ("K2152", "METOLERANZCALC", DECIMAL, 22),
    ("K2306", "MEBEREICH", STRING, 40),
    ("K2307", "MEPTM", STRING, 40),
    ("K2341", "MEPPLANNRT", STRING, 20),
    ("K2342", "MEPPLAN", STRING, 40),
    ("K2343", "MEPPLANDAT", STRING, 20),
    ("K2344", "MEPPLANERST", STRING, 40),
    ("K2407", "MESPCNR", STRING, 20),
    ("K2408", "MESPCHERST", STRING, 20),
    ("K2409", "MESPCTYP", STRING, 20),
    ("K2116", "MENORMISTUN", DECIMAL, None),
    ("K2117", "MENORMISTOB", DECIMAL, None),
    ("K2216", "MENORMALSERNR", STRING, 20),
    ("K2415", "MEPRUEFMITSERNR", STRING, 20),
    ("K2416", "MEANZGERAET", STRING, 40),
    ("K2261", "MEREFTEILNRSTR", STRING, 40),
    ("K2262", "MEREFTEILBEZ", STRING, 40),
    ("K2263", "MEREFTEILIST", DECIMAL, 22),
    ("K2264", "MEREFTEILTEMP", DECIMAL, 22),
    ("K2265", "MEREFTEILNR", INTEGER, 3),
    ("K2266", "MEREFTEILSERNR", STRING, 40),
    ("K2271", "MEKALTEILUNRSTR", STRING, None),
    ("K2272", "MEKALTEILUBEZ", STRING, None),
    ("K2273", "MEKALTEILUIST", DECIMAL, None),
    ("K2274", "MEKALTEILUTEMP", DECIMAL, None),
    ("K2275", "MEKALTEILUNR", INTEGER, None),
    ("K2276", "MEKALTEILUSERNR", STRING, None),
    ("K2281", "MEKALTEILMNRSTR", STRING, 40),
    ("K2282", "MEKALTEILMBEZ", STRING, 40),
    ("K2283", "MEKALTEILMIST", DECIMAL, 22),
    ("K2284", "MEKALTEILMTEMP", DECIMAL, 22),
    ("K2285", "MEKALTEILMNR", INTEGER, 3),
    ("K2286", "MEKALTEILMSERNR", STRING, 40),
    ("K2291", "MEKALTEILONRSTR", STRING, None),
    ("K2292", "MEKALTEILOBEZ", STRING, None),
    ("K2293", "MEKALTEILOIST", DECIMAL, None),
    ("K2294", "MEKALTEILOTEMP", DECIMAL, None),
    ("K2295", "MEKALTEILONR", INTEGER, None),
    ("K2296", "MEKALTEILOSERNR", STRING, None),
    ("K2048", "MEUEBERKAN", INTEGER, 3),
    ("K2090", "MEMERKCODE", STRING, 40),
    ("K2091", "MEMERKINDEX", STRING, 20),
    ("K2092", "MEMERKTEXT", STRING, 50),
    ("K2093", "MEBEARBZUST", STRING, 80),
    ("K2095", "MEELEMCODE", STRING, 40),
    ("K2096", "MEELEMINDEX", STRING, 20),
    ("K2097", "MEELEMTEXT", STRING, 50),
    ("K2098", "MEELEMADR", STRING, 20),
    ("K2074", "MECALIBADD", DECIMAL, 22),
    ("K2075", "MECALIBMULT", DECIMAL, 22),
    ("K2105", "MEANZNIAUSGEF", INTEGER, 5),
    ("K2203", "MEGCKONVART", INTEGER, None),
    ("K2222", "MEANZREF", INTEGER, 5),
    ("K2244", "MEREFPKTX", INTEGER, 5),
    ("K2245", "MEREFPKTY", INTEGER, 5),
    ("K2246", "MEREFPKTZ", INTEGER, 5),
    ("K2430", "ME_2430", INTEGER, 5),
    ("K2432", "ME_2432", INTEGER, 5),
    ("K2434", "ME_2434", INTEGER, 5),
    ("K2436", "ME_2436", STRING, 10),
    ("K2438", "ME_2438", STRING, 10),
    ("K2440", "ME_2440", STRING, 40),
    ("K2442", "ME_2442", STRING, 12),
    ("K2444", "ME_2444", STRING, 40),
    ("K2448", "ME_2446", STRING, 40),
    ("K2448", "ME_2448", STRING, 40),
    ("K2073", "ME_2073", DECIMAL, 22),
    ("K2107", "ME_2107", DECIMAL, None),
    ("K2170", "ME_2170", DECIMAL, 22),
    ("K2171", "ME_2171", DECIMAL, 22),
    ("K2172", "ME_2172", DECIMAL, 22),
    ("K2173", "ME_2173", DECIMAL, 22),
    ("K2228", "ME_2228", DECIMAL, 22),
    ("K2229", "ME_2229", DECIMAL, None),
    ("K2230", "ME_2230", DECIMAL, None),
    ("K2231", "ME_2231", DECIMAL, None),
    ("K2232", "ME_2232", DECIMAL, None),
    ("K2233", "ME_2233", DECIMAL, 22),
    ("K2235", "ME_2235", DECIMAL, 22),
    ("K2236", "ME_2236", DECIMAL, 22),
    ("K2016", "ME_2016", INTEGER, 3),
    ("K8500", "MEUMFPROZ", INTEGER, 5),
    ("K8501", "MEGLEITSTUMF", INTEGER, 3),
    ("K8502", "MESTIFREQT", STRING, 40),
    ("K8504", "MESTIFREQ", INTEGER, 5),
    ("K8510", "MECP", DECIMAL, 22),
    ("K8511", "MECPK", DECIMAL, 22),
    ("K8520", "MEVORGCP", DECIMAL, 22),
    ("K8521", "MEVORGCPK", DECIMAL, 22),
    ("K8522", "MECPFIX", DECIMAL, 22),
    ("K8523", "MECPKFIX", DECIMAL, 22),
    ("K8530", "ME_8530", INTEGER, 5),
    ("K8531", "ME_8531", DECIMAL, 22),
    ("K8532", "ME_8532", DECIMAL, 22),
    ("K8540", "ME_8540", INTEGER, 5),
    ("K8600", "MEKORRSTRAT", INTEGER, 3),
    ("K8610", "MEUKG", DECIMAL, 22),
    ("K8611", "MEOKG", DECIMAL, 22),
    ("K8612", "MEPUFFERSIZE", INTEGER, 3),
    ("K8613", "MEKORRZIEL", DECIMAL, 22),
)


class DefaultKKeyProvider:
    """Provides the generated default K-key table."""

    def create_kkeys_with_metadata(self) -> dict[KKey, KKeyMetadata]:
        keys: dict[KKey, KKeyMetadata] = {}
        for key, column_name, data_type, length in DEFAULT_KKEY_ROWS:
            keys[KKey.of(key)] = KKeyMetadata.of(column_name, data_type, length)
        return keys
