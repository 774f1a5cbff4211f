"""DFQ parsing: line parsers, parser options and parse reports."""

from aqdef.parser.context import ParserContext, ValueIndexCounter
from aqdef.parser.lines import AbstractLineParser, BinaryLineParser, KKeyLineParser
from aqdef.parser.options import ParserOptions, load_parser_options
from aqdef.parser.parser import AqdefParser
from aqdef.parser.report import IssueCodes, IssueSeverity, ParseIssue, ParseReport

__all__ = [
    "AbstractLineParser",
    "AqdefParser",
    "BinaryLineParser",
    "IssueCodes",
    "IssueSeverity",
    "KKeyLineParser",
    "ParseIssue",
    "ParseReport",
    "ParserContext",
    "ParserOptions",
    "ValueIndexCounter",
    "load_parser_options",
]
