"""Converter interface shared by all K-key value converters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class KKeyValueConverter(ABC, Generic[T]):
    """Convert K-key values between their DFQ text and a Python value.

    Blank text parses to ``None`` and ``None`` formats to ``None``.
    Subclasses implement :meth:`_parse` and :meth:`_format` for the
    non-empty cases.
    """

    type_name: str = "value"
    """Name of the target type used in error messages."""

    def parse(self, text: str | None) -> T | None:
        """Parse DFQ text into a value.

        Raises
        ------
            KKeyValueConversionError: If the text is not valid for this type.

        """
        if text is None or not text.strip():
            return None
        return self._parse(text)

    def format(self, value: T | None) -> str | None:
        """Format a value as DFQ text."""
        if value is None:
            return None
        return self._format(value)

    @abstractmethod
    def _parse(self, text: str) -> T:
        """Parse non-blank text."""

    @abstractmethod
    def _format(self, value: T) -> str:
        """Format a non-null value."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
