"""CLI support module for aqdef."""

from aqdef.cli.exception_handler import handle_exceptions

__all__ = [
    "handle_exceptions",
]
