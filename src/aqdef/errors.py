"""Exceptions raised while reading, building and writing AQDEF data."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class AqdefError(Exception):
    """Base class of all AQDEF errors."""


class AqdefValidityError(AqdefError):
    """The AQDEF structure is broken and cannot be processed further."""

    def __init__(self, message: str) -> None:
        """Initialize AqdefValidityError.

        Args:
        ----
            message: Description of the structural problem.

        """
        self.reason = message
        super().__init__(f"Invalid AQDEF structure: {message}")


class HierarchyMixingError(AqdefValidityError):
    """Simple (K2030/K2031) and full (K51xx) hierarchy data were combined."""


class KKeyValueConversionError(AqdefError):
    """A textual value could not be converted to the K-key's data type."""

    def __init__(self, value: Any, data_type: str, cause: Exception | None = None) -> None:
        """Initialize KKeyValueConversionError.

        Args:
        ----
            value: The value that failed to convert.
            data_type: Name of the target data type.
            cause: Optional underlying error.

        """
        self.value = value
        self.data_type = data_type
        message = f"Failed to convert value: {value} to data type: {data_type}"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(message)


class DfqParserError(AqdefError):
    """Parsing of a DFQ file failed at a specific line."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        """Initialize DfqParserError.

        Args:
        ----
            message: Description of the cause.
            line_number: 1-based number of the offending line, if known.

        """
        self.line_number = line_number
        if line_number is not None:
            super().__init__(
                f"Failed to parse DFQ file. Error at line: {line_number} Cause: {message}"
            )
        else:
            super().__init__(f"Failed to parse DFQ file. Cause: {message}")


class DfqWriterError(AqdefError):
    """The object model could not be written as DFQ."""


class KKeyProviderError(AqdefError):
    """An additional K-key provider could not be loaded."""

    def __init__(self, message: str, source: str | None = None) -> None:
        """Initialize KKeyProviderError.

        Args:
        ----
            message: Error message describing what went wrong.
            source: Optional file path or entry point name of the provider.

        """
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)


class ConfigurationError(AqdefError):
    """A configuration file cannot be loaded."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        """Initialize ConfigurationError.

        Args:
        ----
            message: Error message describing what went wrong.
            path: Optional path to the file that caused the error.

        """
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)
