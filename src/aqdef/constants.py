"""Characters that structure a DFQ file."""

from __future__ import annotations

LINE_SEPARATOR = "\r\n"
"""Record terminator used when writing."""

VALUES_SEPARATOR = " "
"""Separates the K-key (and its index) from the value on a keyed line."""

DATA_SEPARATOR = "\x14"
"""Separates the fields of one characteristic on a measured-value line."""

CHARACTERISTIC_SEPARATOR = "\x0f"
"""Separates characteristics on a measured-value line."""

INDEX_SEPARATOR = "/"
"""Separates the K-key from its index."""
