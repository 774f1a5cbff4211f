"""Parsers of single DFQ lines."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Any

from aqdef.constants import CHARACTERISTIC_SEPARATOR, DATA_SEPARATOR, INDEX_SEPARATOR
from aqdef.convert import DecimalConverter
from aqdef.errors import AqdefValidityError, KKeyValueConversionError
from aqdef.kkey import KKey, KKeyLevel
from aqdef.model.hierarchy import is_supported_hierarchy_key
from aqdef.model.indices import CharacteristicIndex, GroupIndex, PartIndex, ValueIndex
from aqdef.model.object_model import AqdefObjectModel
from aqdef.parser.context import ParserContext
from aqdef.parser.options import ParserOptions
from aqdef.parser.report import IssueCodes
from aqdef.registry import KKeyRepository, lookup_metadata

logger = logging.getLogger(__name__)

_IGNORED_LINE_PREFIXES = ("K0100", "K100", "K0101", "K101")
_IGNORED_KKEY_PREFIXES = ("K1998", "K2998", "K2999", "K5098", "K5080")
_INDEX_PATTERN = re.compile(r"[+-]?\d+")

IGNORED_BINARY_KEY = "ignore"

VARIABLE_VALUE_FIELDS = (
    "K0001", "K0002", "K0004", "K0005", "K0006", "K0007", "K0008", "K0010", "K0011", "K0012",
)
"""Binary fields of a variable characteristic, in order."""

ATTRIBUTIVE_VALUE_FIELDS = (
    "K0020", "K0021", IGNORED_BINARY_KEY,
    "K0002", "K0004", "K0005", "K0006", "K0007", "K0008", "K0010", "K0011", "K0012",
)
"""Binary fields of an attributive characteristic, in order."""

_ATTRIBUTIVE_CHARACTERISTIC_TYPES = frozenset({1, 5, 6})


def split_dropping_trailing_empty(text: str, separator: str) -> list[str]:
    """Split ``text`` and drop empty trailing fields.

    A line such as ``1.5<DS><DS>`` holds one field, not three.
    """
    parts = text.split(separator)
    while parts and not parts[-1]:
        parts.pop()
    return parts


class AbstractLineParser(ABC):
    """Base of the line parsers. Converts values and reports dropped fields."""

    def __init__(
        self,
        repository: KKeyRepository | None = None,
        options: ParserOptions | None = None,
    ) -> None:
        self.repository = repository
        self.options = options or ParserOptions()

    @abstractmethod
    def is_line_supported(self, line: str) -> bool:
        """Whether this parser understands ``line``."""

    @abstractmethod
    def parse_line(self, line: str, model: AqdefObjectModel, context: ParserContext) -> None:
        """Parse ``line`` into ``model``."""

    def _convert_value(self, kkey: KKey, text: str, context: ParserContext) -> Any:
        """Convert ``text`` with the converter of ``kkey``.

        Returns ``None`` for blank text, unknown keys and values the
        converter rejects. Dropped values are logged and reported.
        """
        if not text or not text.strip():
            return None

        metadata = lookup_metadata(kkey, self.repository)
        if metadata is None:
            message = f"Unknown k-key: {kkey}. Value will be discarded."
            self._warn_invalid_kkey(kkey, IssueCodes.W001_UNKNOWN_KKEY, message, context)
            return None

        converter = metadata.converter
        try:
            return converter.parse(text)
        except (KKeyValueConversionError, ValueError) as e:
            message = (
                f"Failed to convert value: {text} of K-key: {kkey} using converter: "
                f"{converter!r}. The value will be discarded. ({e})"
            )
            self._warn_invalid_kkey(kkey, IssueCodes.W002_CONVERSION_FAILED, message, context)
            return None

    def _warn_invalid_kkey(
        self, kkey: KKey, code: str, message: str, context: ParserContext
    ) -> None:
        context.report.add_warning(code, message, context.current_line, kkey)
        if not self.options.is_logging_suppressed_for(kkey):
            logger.warning("%s %s", context.log_prefix, message)


class KKeyLineParser(AbstractLineParser):
    """Parses lines of the form ``K0001/1 value``."""

    def is_line_supported(self, line: str) -> bool:
        return line.startswith("K")

    def parse_line(self, line: str, model: AqdefObjectModel, context: ParserContext) -> None:
        """Parse a K-key line and route the value by the level of its key.

        Raises
        ------
            AqdefValidityError: If the index is malformed or a value refers to
                an unknown characteristic.

        """
        if self._is_ignored(line):
            return

        kkey = KKey.of(line[:5])
        index, value_index_number = self._parse_index(kkey, line)

        first_space = line.find(" ", 5)
        value_text = line[first_space:].strip() if first_space != -1 else ""
        value = self._convert_value(kkey, value_text, context)

        # Empty value records still advance the value counter.
        if value is None and not kkey.is_value_level:
            return

        level = kkey.level
        if level is KKeyLevel.PART:
            part_index = PartIndex(index)
            model.put_part_entry(kkey, part_index, value)
            context.current_part_index = part_index

        elif level is KKeyLevel.CHARACTERISTIC:
            characteristic_index = CharacteristicIndex(self._part_index_for(index, context), index)
            model.put_characteristic_entry(kkey, characteristic_index, value)

        elif level is KKeyLevel.GROUP:
            group_index = GroupIndex(self._part_index_for(index, context), index)
            model.put_group_entry(kkey, group_index, value)

        elif level is KKeyLevel.VALUE:
            value_index = self._value_index_for(
                kkey, index, value_index_number, model, context
            )
            model.put_value_entry(kkey, value_index, value)

        elif level is KKeyLevel.SIMPLE_HIERARCHY:
            model.put_hierarchy_entry(kkey, index, value)

        elif level is KKeyLevel.HIERARCHY:
            if is_supported_hierarchy_key(kkey):
                model.put_hierarchy_entry(kkey, index, value)
            else:
                message = f"Unsupported hierarchy k-key {kkey}. Key will be ignored!"
                context.report.add_warning(
                    IssueCodes.W005_UNSUPPORTED_HIERARCHY_KEY, message, context.current_line, kkey
                )
                logger.warning("%s %s", context.log_prefix, message)

        else:
            message = f"Unknown level of k-key {kkey}. Key will be ignored!"
            context.report.add_warning(
                IssueCodes.W004_UNKNOWN_LEVEL, message, context.current_line, kkey
            )
            if not self.options.is_logging_suppressed_for(kkey):
                logger.warning("%s %s", context.log_prefix, message)

    @staticmethod
    def _is_ignored(line: str) -> bool:
        if len(line) < 5:
            return True
        for prefix in _IGNORED_LINE_PREFIXES:
            if line.rstrip() == prefix:
                return True
            if line.startswith((prefix + " ", prefix + INDEX_SEPARATOR)):
                return True
        return line.startswith(_IGNORED_KKEY_PREFIXES)

    @staticmethod
    def _parse_index(kkey: KKey, line: str) -> tuple[int, int | None]:
        """Return the index and the explicit value index of a line."""
        if len(line) <= 5 or line[5] != INDEX_SEPARATOR:
            return 1, None

        first_space = line.find(" ", 5)
        if first_space == -1:
            first_space = len(line)
        index_text = line[6:first_space]

        if INDEX_SEPARATOR in index_text:
            if not kkey.is_value_level:
                raise AqdefValidityError(
                    f"K-key index ({index_text}) contains a value index but the K-key "
                    f"({kkey}) is not a value key."
                )
            characteristic_text, _, value_index_text = index_text.partition(INDEX_SEPARATOR)
            return _parse_int(characteristic_text), _parse_int(value_index_text)

        if not index_text.strip():
            return 1, None
        return _parse_int(index_text), None

    @staticmethod
    def _part_index_for(index: int, context: ParserContext) -> PartIndex:
        if index == 0:
            return PartIndex(0)

        current_part_index = context.current_part_index
        if current_part_index is None or current_part_index.index == 0:
            return PartIndex(1)
        return current_part_index

    @staticmethod
    def _value_index_for(
        kkey: KKey,
        index: int,
        value_index_number: int | None,
        model: AqdefObjectModel,
        context: ParserContext,
    ) -> ValueIndex:
        if index == 0:
            part_index: PartIndex | None = PartIndex(0)
        else:
            part_index = model.find_part_index_for_characteristic(index)
            if part_index is None:
                raise AqdefValidityError(
                    f"Characteristic with index {index} was not found. Can't parse value."
                )

        characteristic_index = CharacteristicIndex(part_index, index)
        if value_index_number is not None:
            return ValueIndex.of(characteristic_index, value_index_number)
        return context.value_index_counter.get_index(characteristic_index, kkey)


def _parse_int(text: str) -> int:
    if not _INDEX_PATTERN.fullmatch(text):
        raise AqdefValidityError(f"K-key index is invalid: {text}")
    return int(text)


class BinaryLineParser(AbstractLineParser):
    """Parses measured values in the binary form.

    Characteristics are separated by ``0x0F`` and the fields of one
    characteristic by ``0x14``. The n-th block belongs to characteristic n.
    """

    def __init__(
        self,
        repository: KKeyRepository | None = None,
        options: ParserOptions | None = None,
    ) -> None:
        super().__init__(repository, options)
        self._decimal_converter = DecimalConverter()

    def is_line_supported(self, line: str) -> bool:
        if CHARACTERISTIC_SEPARATOR in line or DATA_SEPARATOR in line:
            return True
        try:
            self._decimal_converter.parse(line)
        except KKeyValueConversionError:
            return False
        return True

    def parse_line(self, line: str, model: AqdefObjectModel, context: ParserContext) -> None:
        """Parse one line of measured values.

        Raises
        ------
            AqdefValidityError: If a block refers to a characteristic that
                doesn't exist or has more fields than its layout allows.

        """
        blocks = split_dropping_trailing_empty(line, CHARACTERISTIC_SEPARATOR)
        for characteristic_number, block in enumerate(blocks, start=1):
            fields = split_dropping_trailing_empty(block, DATA_SEPARATOR)

            part_index = model.find_part_index_for_characteristic(characteristic_number)
            if part_index is None:
                raise AqdefValidityError(
                    f"Characteristic with index {characteristic_number} was not found. "
                    "Can't parse value."
                )
            characteristic_index = CharacteristicIndex(part_index, characteristic_number)

            field_keys = self._field_keys(model, characteristic_index, len(fields))
            if len(fields) > len(field_keys):
                raise AqdefValidityError(
                    f"Measured values of characteristic {characteristic_index} have "
                    f"{len(fields)} fields, at most {len(field_keys)} are allowed."
                )

            for key, text in zip(field_keys, fields):
                if key == IGNORED_BINARY_KEY:
                    continue
                kkey = KKey.of(key)
                value = self._convert_value(kkey, text, context)
                if value is not None:
                    value_index = context.value_index_counter.get_index(characteristic_index, kkey)
                    model.put_value_entry(kkey, value_index, value)

    @staticmethod
    def _field_keys(
        model: AqdefObjectModel, characteristic_index: CharacteristicIndex, field_count: int
    ) -> tuple[str, ...]:
        is_attributive: bool | None = None

        characteristic = model.get_characteristic_entries(characteristic_index)
        if characteristic is not None:
            characteristic_type = characteristic.get_value("K2004")
            if characteristic_type is not None:
                is_attributive = characteristic_type in _ATTRIBUTIVE_CHARACTERISTIC_TYPES

        if is_attributive is None:
            is_attributive = field_count > len(VARIABLE_VALUE_FIELDS)

        return ATTRIBUTIVE_VALUE_FIELDS if is_attributive else VARIABLE_VALUE_FIELDS
