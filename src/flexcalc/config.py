"""Run configuration and its JSON persistence."""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass
from pathlib import Path

from flexcalc._constants import DEFAULT_PRECISION, HEADER_MARKER

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass
class FlexcalcConfig:
    """Settings shared by the pipeline and the command-line tool.

    Attributes:
        marker: Character that introduces a frame header line.
        precision: Decimal places used when printing the score.
        log_level: Name of the :mod:`logging` level for the CLI.

    Raises:
        ValueError: If any field is out of range.
    """

    marker: str = HEADER_MARKER
    precision: int = DEFAULT_PRECISION
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if len(self.marker) != 1 or self.marker.isspace():
            raise ValueError(
                f"marker must be a single non-whitespace character, "
                f"got {self.marker!r}"
            )
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise ValueError(f"precision must be an int, got {self.precision!r}")
        if self.precision < 0:
            raise ValueError(f"precision must be non-negative, got {self.precision}")
        self.log_level = str(self.log_level).upper()
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(_LOG_LEVELS)}, "
                f"got {self.log_level!r}"
            )

    @property
    def logging_level(self) -> int:
        """Numeric :mod:`logging` level for :attr:`log_level`."""
        return logging.getLevelName(self.log_level)

    def to_dict(self) -> dict:
        """Serialise to a dict, omitting fields at their default value."""
        return {
            f.name: getattr(self, f.name)
            for f in dataclasses.fields(self)
            if getattr(self, f.name) != f.default
        }

    @classmethod
    def from_dict(cls, data: dict) -> FlexcalcConfig:
        """Create from a dict; unknown keys raise :class:`ValueError`."""
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"unknown config keys: {sorted(unknown)}")
        return cls(**data)


def save_config(path: str | Path, config: FlexcalcConfig) -> None:
    """Write *config* to a JSON file with two-space indentation."""
    Path(path).write_text(json.dumps(config.to_dict(), indent=2) + "\n")


def load_config(path: str | Path) -> FlexcalcConfig:
    """Load a :class:`FlexcalcConfig` from a JSON file.

    All keys are optional; missing keys take their defaults.

    Raises:
        ValueError: If the file is not a JSON object or holds unknown
            keys or invalid values.
    """
    data = json.loads(Path(path).read_text())
    if not isinstance(data, dict):
        raise ValueError(
            f"config file must hold a JSON object, got {type(data).__name__}"
        )
    return FlexcalcConfig.from_dict(data)
