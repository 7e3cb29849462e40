#!/usr/bin/env python3
"""
Configuration Management for cent

Handles environment-based configuration for the money kernel: how binary
float inputs are treated, which rounding mode (if any) is applied by default,
the default currency, and logging. Values come from environment variables,
optionally loaded from a .env file.
"""

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any

from dotenv import load_dotenv

from .currencies import find_currency
from .errors import InvalidInputError
from .rounding import RoundingMode

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


class NumberInputMode(Enum):
    """Policy for amounts supplied as binary floats."""

    WARN = "warn"  # log a warning when the float may be imprecise
    ERROR = "error"  # raise PrecisionLossError when the float may be imprecise
    SILENT = "silent"  # accept every float
    NEVER = "never"  # reject every float


@dataclass
class Config:
    """
    Main configuration class for cent.

    Loads configuration from environment variables with safe defaults:
    strict (non-rounding) arithmetic, USD as the default currency and a
    warning for imprecise float inputs.
    """

    environment: Environment

    # Numeric policy
    number_input_mode: NumberInputMode = NumberInputMode.WARN
    precision_warning_threshold: int = 15
    default_rounding_mode: RoundingMode | None = None
    default_currency: str = "USD"
    strict_precision: bool = False

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Build a Config from CENT_* variables, LOG_LEVEL and DEBUG."""
        env = Environment(os.getenv("CENT_ENV", "development"))

        rounding_name = os.getenv("CENT_DEFAULT_ROUNDING_MODE", "none").strip()
        rounding_mode = None if rounding_name.lower() in ("", "none") else RoundingMode.from_name(rounding_name)

        return cls(
            environment=env,
            number_input_mode=NumberInputMode(os.getenv("CENT_NUMBER_INPUT_MODE", "warn").lower()),
            precision_warning_threshold=int(os.getenv("CENT_PRECISION_WARNING_THRESHOLD", "15")),
            default_rounding_mode=rounding_mode,
            default_currency=os.getenv("CENT_DEFAULT_CURRENCY", "USD").upper(),
            strict_precision=os.getenv("CENT_STRICT_PRECISION", "false").lower() == "true",
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Return human-readable problems with this configuration (empty when valid)."""
        errors = []

        if self.precision_warning_threshold <= 0:
            errors.append("CENT_PRECISION_WARNING_THRESHOLD must be positive")

        if find_currency(self.default_currency) is None:
            errors.append(f"CENT_DEFAULT_CURRENCY is not a known currency: {self.default_currency}")

        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"LOG_LEVEL is not a valid logging level: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """Configure root logging and the ``cent`` logger level."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")
        logging.getLogger("cent").setLevel(logging.DEBUG if self.debug else level)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                result[f.name] = value.name if isinstance(value, RoundingMode) else value.value
            elif value is None and f.name == "default_rounding_mode":
                result[f.name] = "none"
            else:
                result[f.name] = value
        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Return the process-wide configuration, loading and validating it on first use."""
    global _config
    if _config is None:
        try:
            config = Config.from_environment()
        except ValueError as e:
            raise InvalidInputError(f"Invalid configuration: {e}", cause=e) from e

        errors = config.validate()
        if errors:
            raise InvalidInputError(f"Configuration validation failed: {'; '.join(errors)}")

        config.setup_logging()
        _config = config

    return _config


def reload_config() -> Config:
    """Discard the cached configuration and read the environment again."""
    global _config
    _config = None
    return get_config()


@contextmanager
def override_config(**changes: Any) -> Iterator[Config]:
    """
    Temporarily replace fields of the global configuration.

    Example:
        with override_config(number_input_mode=NumberInputMode.ERROR):
            Money.from_float(0.1, "USD")
    """
    global _config
    previous = get_config()
    _config = replace(previous, **changes)
    try:
        yield _config
    finally:
        _config = previous


def is_development() -> bool:
    """Check if running in development environment."""
    return get_config().environment == Environment.DEVELOPMENT


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST


def is_production() -> bool:
    """Check if running in production environment."""
    return get_config().environment == Environment.PRODUCTION
