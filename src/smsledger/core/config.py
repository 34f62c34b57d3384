#!/usr/bin/env python3
"""
Configuration Management for the SMS Ledger

Handles environment-based configuration with defaults and validation.
Supports multiple environments (development, test, production).
"""

import logging
import os
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_CARD_SENDER_KEYWORDS = ["HDFC", "ICICI", "SBI", "AXIS", "KOTAK", "YES", "BANK", "CARD"]


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class StorageConfig:
    """Record store settings."""

    store_file: Path


@dataclass
class IngestionConfig:
    """SMS ingestion settings."""

    # Inbox reads are capped like the on-device query
    max_messages: int = 1000
    # Sender address keywords that mark a message as coming from a bank or card issuer
    card_sender_keywords: list = field(default_factory=lambda: list(DEFAULT_CARD_SENDER_KEYWORDS))


@dataclass
class Config:
    """
    Main configuration class for the SMS ledger.

    Loads configuration from environment variables with defaults
    and validation for each environment type.
    """

    environment: Environment

    # Core directories
    data_dir: Path

    # Component configurations
    storage: StorageConfig
    ingestion: IngestionConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("SMSLEDGER_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_smsledger"
            data_dir = Path(os.getenv("SMSLEDGER_DATA_DIR", str(default_test_dir)))
        else:
            data_dir = Path(os.getenv("SMSLEDGER_DATA_DIR", "./data")).expanduser().resolve()

        data_dir.mkdir(parents=True, exist_ok=True)

        store_file = os.getenv("SMSLEDGER_STORE_FILE")
        storage = StorageConfig(
            store_file=Path(store_file).expanduser() if store_file else data_dir / "ledger.json",
        )

        ingestion = IngestionConfig(
            max_messages=int(os.getenv("SMSLEDGER_MAX_MESSAGES", "1000")),
            card_sender_keywords=_parse_list(
                os.getenv("SMSLEDGER_CARD_SENDERS", ",".join(DEFAULT_CARD_SENDER_KEYWORDS))
            ),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            storage=storage,
            ingestion=ingestion,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.data_dir.exists():
            errors.append(f"data_dir does not exist: {self.data_dir}")

        if self.ingestion.max_messages <= 0:
            errors.append("SMSLEDGER_MAX_MESSAGES must be positive")

        if not self.ingestion.card_sender_keywords:
            errors.append("SMSLEDGER_CARD_SENDERS must name at least one sender keyword")

        if self.storage.store_file.exists() and self.storage.store_file.is_dir():
            errors.append(f"Store file is a directory: {self.storage.store_file}")

        if self.log_level not in logging.getLevelNamesMapping():
            errors.append(f"Unknown LOG_LEVEL: {self.log_level}")

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

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a JSON-friendly dictionary."""
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


def _parse_list(value: str, delimiter: str = ",") -> list:
    """Parse comma-separated string into list, handling empty values."""
    if not value:
        return []
    return [item.strip() for item in value.split(delimiter) if item.strip()]


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config = Config.from_environment()

        # Validate configuration
        errors = config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        # Setup logging
        config.setup_logging()
        _config = config

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()
