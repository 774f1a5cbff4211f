"""Parser configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from aqdef.errors import ConfigurationError


class ParserOptions(BaseModel):
    """Options controlling diagnostics of :class:`~aqdef.parser.AqdefParser`.

    The options never change what is parsed, only what is logged.

    Example YAML::

        suppress_invalid_kkey_logging: false
        suppress_invalid_kkey_logging_for:
          - K0011
          - K2099

    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    suppress_invalid_kkey_logging: Annotated[
        bool,
        Field(default=False, description="Don't log unknown K-keys and unconvertible values"),
    ]
    suppress_invalid_kkey_logging_for: Annotated[
        frozenset[str],
        Field(
            default=frozenset(),
            description="K-keys whose unknown-key and conversion warnings are not logged",
        ),
    ]

    @field_validator("suppress_invalid_kkey_logging_for", mode="before")
    @classmethod
    def validate_kkeys(cls, v: Any) -> Any:
        """Accept any iterable of K-key strings."""
        if v is None:
            return frozenset()
        if isinstance(v, str):
            v = [v]
        keys = []
        for key in v:
            key = str(key).strip()
            if len(key) != 5 or not key.startswith("K"):
                raise ValueError(f"Not a valid K-key: {key!r}")
            keys.append(key)
        return frozenset(keys)

    def is_logging_suppressed_for(self, kkey: object) -> bool:
        """Whether warnings about ``kkey`` should stay silent."""
        return (
            self.suppress_invalid_kkey_logging
            or str(kkey) in self.suppress_invalid_kkey_logging_for
        )


def load_parser_options(path: Path) -> ParserOptions:
    """Load parser options from a YAML file.

    Args:
    ----
        path: Path to the YAML file.

    Returns:
    -------
        Validated parser options. An empty file yields the defaults.

    Raises:
    ------
        ConfigurationError: If the file cannot be read or is invalid.

    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"YAML parsing error: {e}", path) from e
    except OSError as e:
        raise ConfigurationError(f"File read error: {e}", path) from e

    if data is None:
        return ParserOptions()
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Expected dictionary at root level, got {type(data).__name__}", path
        )

    try:
        return ParserOptions.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid parser options: {e}", path) from e
