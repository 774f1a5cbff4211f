"""aqdef: Reader and writer of AQDEF (DFQ) quality data files.

This package provides tools for:
- Parsing DFQ files into an object model of parts, characteristics and values
- Building and normalizing object models in code
- Writing object models back as DFQ

Quick Start:
    >>> from aqdef.parser import AqdefParser
    >>> from aqdef.writer import AqdefWriter
    >>>
    >>> model = AqdefParser().parse_file("measurements.dfq")
    >>> for part, characteristic, value in model.iter_values():
    ...     print(characteristic.get_value("K2001"), value.get_value("K0001"))
    >>> AqdefWriter().write(model, "normalized.dfq")

Modules:
    kkey: K-key identifiers and their levels
    registry: K-key metadata and additional providers
    catalog: Catalog field table
    convert: Value converters between DFQ text and Python values
    model: Object model, hierarchy and builders
    parser: DFQ parser
    writer: DFQ writer
    cli: Command-line interface
"""

__version__ = "0.1.0"
