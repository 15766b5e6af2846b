#!/usr/bin/env python3
"""
Configuration Management for Obrafin

Handles environment-based configuration with sensible defaults and validation.
Supports multiple environments (development, test, production).
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_TOLERANCE_DAYS = 2
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class ReconciliationConfig:
    """Bank reconciliation settings."""

    tolerance_days: int = DEFAULT_TOLERANCE_DAYS


@dataclass
class TaxConfig:
    """Tax bookkeeping settings."""

    # Display only; the IVA split itself is fixed at 19%
    iva_rate_pct: int = 19


@dataclass
class AnalysisConfig:
    """Reporting and chart configuration."""

    output_dir: Path
    chart_width: int = 12
    chart_height: int = 6
    dpi: int = 150


@dataclass
class Config:
    """
    Main configuration class for the ledger application.

    Loads configuration from environment variables with defaults and
    validation for each environment type.
    """

    environment: Environment

    # Core directories
    data_dir: Path
    output_dir: Path

    # Component configurations
    reconciliation: ReconciliationConfig
    tax: TaxConfig
    analysis: AnalysisConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("OBRAFIN_ENV", "development"))

        # Base directories
        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_obrafin"
            base_dir = Path(os.getenv("OBRAFIN_DATA_DIR", str(default_test_dir)))
        else:
            base_dir = Path(os.getenv("OBRAFIN_DATA_DIR", "./data")).expanduser().resolve()

        data_dir = base_dir
        output_dir = data_dir / "exports"

        # Ensure directories exist
        for directory in [data_dir, output_dir]:
            directory.mkdir(parents=True, exist_ok=True)

        reconciliation = ReconciliationConfig(
            tolerance_days=_parse_int(
                os.getenv("OBRAFIN_RECONCILE_TOLERANCE_DAYS"), DEFAULT_TOLERANCE_DAYS
            ),
        )

        tax = TaxConfig(iva_rate_pct=_parse_int(os.getenv("OBRAFIN_IVA_RATE_PCT"), 19))

        analysis = AnalysisConfig(
            output_dir=output_dir / "charts",
            chart_width=_parse_int(os.getenv("CHART_WIDTH"), 12),
            chart_height=_parse_int(os.getenv("CHART_HEIGHT"), 6),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            output_dir=output_dir,
            reconciliation=reconciliation,
            tax=tax,
            analysis=analysis,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        for name, path in [("data_dir", self.data_dir), ("output_dir", self.output_dir)]:
            if not path.exists():
                errors.append(f"{name} does not exist: {path}")

        if self.reconciliation.tolerance_days < 0:
            errors.append("Reconciliation tolerance days must be non-negative")

        if self.analysis.chart_width <= 0 or self.analysis.chart_height <= 0:
            errors.append("Chart dimensions must be positive")

        if self.log_level not in VALID_LOG_LEVELS:
            errors.append(f"Unknown log level: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        # Configure format based on environment
        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # Reduce noise from plotting libraries outside development
        if self.environment != Environment.DEVELOPMENT:
            logging.getLogger("matplotlib").setLevel(logging.WARNING)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a printable dictionary."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, (Path, Enum)):
                # Nested dataclass
                result[field_name] = {
                    nested_name: str(nested_value) if isinstance(nested_value, Path) else nested_value
                    for nested_name, nested_value in field_value.__dict__.items()
                }
            elif isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


def _parse_int(value: str | None, default: int) -> int:
    """Parse an integer environment value, falling back to a default."""
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        # Validate configuration
        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        # Setup logging
        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def get_data_dir() -> Path:
    """Get the data directory path."""
    return get_config().data_dir


def get_output_dir() -> Path:
    """Get the output directory path."""
    return get_config().output_dir


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST
