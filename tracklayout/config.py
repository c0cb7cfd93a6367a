"""Configuration parsing for the tracklayout command."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# Use tomllib (Python 3.11+) with fallback to tomli
if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError as e:
        raise ImportError(
            "tomli is required for Python < 3.11. Install with: pip install tomli"
        ) from e

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class OutputConfig:
    """Model document output configuration."""

    indent: int = 2

    def __post_init__(self) -> None:
        """Validate output configuration."""
        if self.indent < 0:
            raise ValueError(f"indent must be >= 0, got {self.indent}")


@dataclass
class CheckConfig:
    """Which properties --check requires of a model."""

    require_complete: bool = True
    require_correct: bool = True
    show_warnings: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"
    file: str | None = None

    def __post_init__(self) -> None:
        """Validate and normalize the log level."""
        self.level = self.level.upper()
        if self.level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"level must be one of {', '.join(VALID_LOG_LEVELS)}, "
                f"got {self.level}"
            )

    @property
    def level_number(self) -> int:
        """Numeric logging level."""
        return int(getattr(logging, self.level))


@dataclass
class Config:
    """Main configuration container."""

    output: OutputConfig = field(default_factory=OutputConfig)
    check: CheckConfig = field(default_factory=CheckConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Create Config from a dictionary (e.g., parsed TOML)."""
        output_section = data.get("output", {})
        check_section = data.get("check", {})
        logging_section = data.get("logging", {})

        return cls(
            output=OutputConfig(
                indent=output_section.get("indent", 2),
            ),
            check=CheckConfig(
                require_complete=check_section.get("require_complete", True),
                require_correct=check_section.get("require_correct", True),
                show_warnings=check_section.get("show_warnings", True),
            ),
            logging=LoggingConfig(
                level=logging_section.get("level", "WARNING"),
                file=logging_section.get("file"),
            ),
        )

    @classmethod
    def from_toml(cls, path: str | Path) -> Config:
        """Load configuration from a TOML file."""
        path = Path(path)
        with path.open("rb") as f:
            data = tomllib.load(f)
        return cls.from_dict(data)


def load_config(path: str | Path) -> Config:
    """Load configuration from a TOML file.

    This is a convenience function that wraps Config.from_toml().

    Args:
        path: Path to the TOML configuration file.

    Returns:
        Parsed Config object.
    """
    return Config.from_toml(path)
