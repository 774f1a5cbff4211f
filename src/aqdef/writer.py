"""Write object models as DFQ text."""

from __future__ import annotations

import io
from collections.abc import Iterable
from pathlib import Path
from typing import Any, TextIO

from aqdef.constants import INDEX_SEPARATOR, LINE_SEPARATOR, VALUES_SEPARATOR
from aqdef.errors import DfqWriterError
from aqdef.kkey import KKey
from aqdef.model.entries import Entry
from aqdef.model.object_model import AqdefObjectModel
from aqdef.registry import KKeyRepository, lookup_metadata


class AqdefWriter:
    """Write an :class:`AqdefObjectModel` in the DFQ format.

    The model is normalized before writing. Records are emitted part by
    part: part fields, then each characteristic followed by its values,
    then the groups of the part. Hierarchy nodes and bindings come last.
    Custom K-keys are never written.

    Usage:
        writer = AqdefWriter()
        writer.write(model, Path("output.dfq"))

    Or in memory:
        text = writer.write_to_string(model)
    """

    def __init__(self, repository: KKeyRepository | None = None) -> None:
        """Initialize the writer.

        Args:
        ----
            repository: K-key registry providing the converters. Defaults to
                the shared instance.

        """
        self.repository = repository

    def write(self, model: AqdefObjectModel, output_path: Path, encoding: str = "utf-8") -> None:
        """Write the model to a DFQ file.

        Args:
        ----
            model: The model to write.
            output_path: Output file path. Parent directories will be created.
            encoding: Text encoding of the file.

        """
        content = self.write_bytes(model, encoding)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "wb") as f:
            f.write(content)

    def write_bytes(self, model: AqdefObjectModel, encoding: str = "utf-8") -> bytes:
        """Return the DFQ content encoded as bytes."""
        return self.write_to_string(model).encode(encoding)

    def write_to_string(self, model: AqdefObjectModel) -> str:
        """Return the DFQ content as a string."""
        buffer = io.StringIO(newline="")
        self.write_to(model, buffer)
        return buffer.getvalue()

    def write_to(self, model: AqdefObjectModel, stream: TextIO) -> None:
        """Write the DFQ content to an open text stream.

        Raises
        ------
            DfqWriterError: If a K-key is unknown or a value can't be formatted.

        """
        model.normalize()

        # Total number of characteristics comes first.
        self._write_record(stream, "K0100", None, str(model.get_characteristic_count()))

        for part in model.get_parts():
            self._write_entries(stream, part, lambda index: index.index)

            for characteristic in model.get_characteristics(part.index):
                self._write_entries(
                    stream, characteristic, lambda index: index.characteristic_index
                )
                # Value records carry the characteristic index.
                for value in model.get_values(characteristic.index):
                    self._write_entries(
                        stream,
                        value,
                        lambda index: index.characteristic_index.characteristic_index,
                    )

            for group in model.get_groups(part.index):
                self._write_entries(stream, group, lambda index: index.group_index)

        hierarchy = model.hierarchy
        self._write_entries(stream, hierarchy.node_definitions(), lambda index: index.index)
        self._write_entries(stream, hierarchy.node_bindings(), lambda index: index.index)

    def _write_entries(
        self, stream: TextIO, entries: Iterable[Entry[Any]], index_of: Any
    ) -> None:
        for entry in entries:
            if not entry.key.should_be_written_to_dfq:
                continue
            text = self._format_value(entry.key, entry.value)
            self._write_record(stream, entry.key.key, index_of(entry.index), text)

    def _format_value(self, kkey: KKey, value: Any) -> str | None:
        metadata = lookup_metadata(kkey, self.repository)
        if metadata is None:
            raise DfqWriterError(f"Can't find converter for unknown k-key {kkey}")

        try:
            text = metadata.converter.format(value)
        except Exception as e:
            raise DfqWriterError(
                f"Failed to convert value ({value!r}) of k-key {kkey} to string."
            ) from e

        return text.strip() if text is not None else None

    @staticmethod
    def _write_record(stream: TextIO, key: str, index: int | None, text: str | None) -> None:
        stream.write(key)
        if index is not None:
            stream.write(INDEX_SEPARATOR)
            stream.write(str(index))
        stream.write(VALUES_SEPARATOR)
        stream.write(text or "")
        stream.write(LINE_SEPARATOR)
