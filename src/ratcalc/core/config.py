"""
Configuration for ratcalc.

Settings are read from ``ratcalc.toml``:

    [limits]
    max_tokens = 4096   # tokens per expression
    max_nesting = 64    # parenthesis nesting depth
    max_depth = 4096    # expression tree depth

    [logging]
    level = "WARNING"

The RATCALC_LOG_LEVEL environment variable overrides ``[logging] level``.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from ratcalc.core.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "ratcalc.toml"

# Environment variable name (follows the LOG_LEVEL convention)
LOG_LEVEL_ENV_VAR = "RATCALC_LOG_LEVEL"

_DEFAULT_LOG_LEVEL = "WARNING"
_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class EvalLimits(BaseModel):
    """Resource bounds applied by the parsing pipeline."""

    max_tokens: int = Field(default=4096, gt=0, description="Maximum tokens per expression")
    max_nesting: int = Field(default=64, gt=0, description="Maximum parenthesis nesting depth")
    max_depth: int = Field(default=4096, gt=0, description="Maximum expression tree depth")

    model_config = ConfigDict(frozen=True)


# =============================================================================
# File configuration
# =============================================================================


@dataclass
class LimitsConfig:
    """Resource limits configuration."""

    max_tokens: int = 4096
    max_nesting: int = 64
    max_depth: int = 4096

    def to_limits(self) -> EvalLimits:
        return EvalLimits(
            max_tokens=self.max_tokens,
            max_nesting=self.max_nesting,
            max_depth=self.max_depth,
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = _DEFAULT_LOG_LEVEL


@dataclass
class CalcConfig:
    """
    ratcalc configuration loaded from ratcalc.toml.

    All sections are optional; missing values take their defaults.
    """

    limits: LimitsConfig = field(default_factory=LimitsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    source: Path | None = None


def _positive_int(section: dict[str, object], key: str, default: int) -> int:
    value = section.get(key, default)
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise ConfigError(f"[limits] {key} must be a positive integer, got {value!r}")
    return value


def _section(data: dict[str, object], name: str) -> dict[str, object]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table")
    return section


def load_config(path: Path | None = None) -> CalcConfig:
    """Load configuration from a TOML file.

    Args:
        path: Config file. Defaults to ./ratcalc.toml; when that file does not
            exist the defaults are returned.

    Returns:
        The parsed configuration, with the environment log level applied.

    Raises:
        ConfigError: If the file is missing (explicit path), unreadable, or
            holds invalid values.
    """
    if path is None:
        candidate = Path.cwd() / CONFIG_FILENAME
        if not candidate.exists():
            logger.debug("No %s found, using defaults", CONFIG_FILENAME)
            return CalcConfig(logging=LoggingConfig(level=resolve_log_level(None)))
        path = candidate
    elif not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    limits_data = _section(data, "limits")
    logging_data = _section(data, "logging")

    limits = LimitsConfig(
        max_tokens=_positive_int(limits_data, "max_tokens", 4096),
        max_nesting=_positive_int(limits_data, "max_nesting", 64),
        max_depth=_positive_int(limits_data, "max_depth", 4096),
    )

    level = logging_data.get("level")
    if level is not None and not isinstance(level, str):
        raise ConfigError(f"[logging] level must be a string, got {level!r}")

    logger.debug("Loaded config from %s", path)
    return CalcConfig(
        limits=limits,
        logging=LoggingConfig(level=resolve_log_level(level)),
        source=path,
    )


def resolve_log_level(configured: str | None) -> str:
    """Resolve the effective log level name.

    Resolution order:
    1. RATCALC_LOG_LEVEL environment variable
    2. ``configured`` (the [logging] level from ratcalc.toml)
    3. WARNING

    Unknown names fall back to WARNING with a warning.
    """
    env_value = os.environ.get(LOG_LEVEL_ENV_VAR, "").upper().strip()
    level = env_value or (configured or _DEFAULT_LOG_LEVEL).upper().strip()

    if level not in _VALID_LOG_LEVELS:
        logger.warning(
            "Unknown log level '%s'. Valid values: %s. Defaulting to %s.",
            level,
            ", ".join(sorted(_VALID_LOG_LEVELS)),
            _DEFAULT_LOG_LEVEL,
        )
        return _DEFAULT_LOG_LEVEL
    return level
