"""
Mapper settings.

Settings can be given in code or read from the environment:

- ``GRAPH_MAPPER_STRICT_MODE``: ``1``, ``true``, ``yes`` or ``on`` enables strict mode
- ``GRAPH_MAPPER_NAME_SUFFIXES``: comma separated target name suffixes
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from .constants import (
    DEFAULT_NAME_SUFFIXES,
    ENV_NAME_SUFFIXES,
    ENV_STRICT_MODE,
    TRUTHY_VALUES,
)


@dataclass(frozen=True)
class MapperConfig:
    """
    Settings a Mapper starts from.

    Attributes:
        strict_mode: Fail on unmatched properties and impossible conversions
        name_suffixes: Suffixes tolerated between source and target property names
    """

    strict_mode: bool = False
    name_suffixes: tuple[str, ...] = DEFAULT_NAME_SUFFIXES

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "MapperConfig":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ`` (for testing)

        Unset variables keep their defaults.
        """
        if environ is None:
            environ = os.environ

        strict_mode = cls.strict_mode
        raw_strict = environ.get(ENV_STRICT_MODE)
        if raw_strict is not None:
            strict_mode = raw_strict.strip().lower() in TRUTHY_VALUES

        name_suffixes = cls.name_suffixes
        raw_suffixes = environ.get(ENV_NAME_SUFFIXES)
        if raw_suffixes is not None:
            name_suffixes = tuple(s.strip() for s in raw_suffixes.split(",") if s.strip())

        return cls(strict_mode=strict_mode, name_suffixes=name_suffixes)
