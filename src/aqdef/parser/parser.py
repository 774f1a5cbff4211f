"""DFQ parser producing :class:`~aqdef.model.AqdefObjectModel` instances."""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from aqdef.errors import DfqParserError
from aqdef.model.object_model import AqdefObjectModel
from aqdef.parser.context import ParserContext
from aqdef.parser.lines import BinaryLineParser, KKeyLineParser
from aqdef.parser.options import ParserOptions
from aqdef.parser.report import IssueCodes, ParseReport
from aqdef.registry import KKeyRepository

logger = logging.getLogger(__name__)


class AqdefParser:
    """Reads DFQ content into a normalized object model.

    Unknown K-keys and values that can't be converted are dropped and the
    parse continues. Structural problems abort the parse with a
    :class:`~aqdef.errors.DfqParserError` naming the offending line.

    Example:
    -------
        >>> model = AqdefParser().parse("K1001/1 P1\\nK2001/1 C1\\nK0001/1 1.5\\n")
        >>> model.get_value_count()
        1

    """

    def __init__(
        self,
        options: ParserOptions | None = None,
        repository: KKeyRepository | None = None,
    ) -> None:
        """Initialize the parser.

        Args:
        ----
            options: Diagnostic options. Defaults to logging everything.
            repository: K-key registry. Defaults to the shared instance.

        """
        self.options = options or ParserOptions()
        self.repository = repository
        self._kkey_line_parser = KKeyLineParser(repository, self.options)
        self._binary_line_parser = BinaryLineParser(repository, self.options)

    def parse(self, content: str) -> AqdefObjectModel:
        """Parse DFQ content held in a string."""
        return self.parse_with_report(content)[0]

    def parse_stream(self, stream: TextIO) -> AqdefObjectModel:
        """Parse DFQ content from an open text stream.

        The stream is consumed but not closed.
        """
        return self._parse_lines(stream)[0]

    def parse_file(self, path: Path, encoding: str = "utf-8") -> AqdefObjectModel:
        """Parse a DFQ file.

        Args:
        ----
            path: Path to the file.
            encoding: Text encoding. A byte order mark is skipped for UTF-8.

        Returns:
        -------
            The normalized object model.

        Raises:
        ------
            DfqParserError: If the content is structurally invalid.
            OSError: If the file cannot be read.

        """
        return self.parse_file_with_report(path, encoding)[0]

    def parse_file_with_report(
        self, path: Path, encoding: str = "utf-8"
    ) -> tuple[AqdefObjectModel, ParseReport]:
        """Parse a DFQ file and return the model with the issues found."""
        if encoding.lower().replace("_", "-") in {"utf-8", "utf8"}:
            encoding = "utf-8-sig"

        with Path(path).open("r", encoding=encoding, newline=None) as f:
            return self._parse_lines(f)

    def parse_with_report(self, content: str) -> tuple[AqdefObjectModel, ParseReport]:
        """Parse DFQ content and return the model with the issues found.

        Returns:
        -------
            Tuple of the normalized model and the report of dropped fields
            and lines.

        """
        return self._parse_lines(io.StringIO(content, newline=None))

    def _parse_lines(self, lines: Iterable[str]) -> tuple[AqdefObjectModel, ParseReport]:
        model = AqdefObjectModel()
        context = ParserContext()

        for line_number, line in enumerate(lines, start=1):
            context.current_line = line_number
            try:
                line = line.strip()
                if line:
                    self._parse_line(line, model, context)
            except Exception as e:
                raise DfqParserError(str(e), line_number) from e

        model.normalize()
        logger.debug(
            "Parsed %d lines: %d parts, %d characteristics, %d values",
            context.current_line,
            len(model.get_part_indexes()),
            model.get_characteristic_count(),
            model.get_value_count(),
        )
        return model, context.report

    def _parse_line(self, line: str, model: AqdefObjectModel, context: ParserContext) -> None:
        if self._kkey_line_parser.is_line_supported(line):
            self._kkey_line_parser.parse_line(line, model, context)
        elif self._binary_line_parser.is_line_supported(line):
            self._binary_line_parser.parse_line(line, model, context)
        else:
            message = f"Invalid line format. This line will be discarded. Line content: {line}"
            context.report.add_warning(
                IssueCodes.W003_INVALID_LINE, message, context.current_line
            )
            logger.warning("%s %s", context.log_prefix, message)
