"""
Configuration management for the RouteFinder application.

This module handles loading, saving, and validating application configuration
using Pydantic models for type safety and validation.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class SearchConfig(BaseModel):
    """Bounds and policies for itinerary searches."""

    max_iterations: int = Field(200_000, gt=0, description="Frontier pops before a search gives up")
    max_transfers: int = Field(50, ge=0, description="Itineraries with more transfers are discarded")
    default_limit: int = Field(5, ge=1, description="Number of routes for top-K searches")
    reject_same_city: bool = True


class GeneratorConfig(BaseModel):
    """Configuration for synthetic timetable generation."""

    rows: int = Field(5, ge=1)
    cols: int = Field(5, ge=1)
    departures_per_station: int = Field(5, ge=0)
    seed: Optional[int] = None


class LoggingConfig(BaseModel):
    """Configuration for application logging."""

    level: str = "WARNING"
    log_file: Optional[str] = None

    @field_validator("level")
    @classmethod
    def validate_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {value}")
        return level


class ConfigData(BaseModel):
    """Main configuration data model."""

    search: SearchConfig = SearchConfig()
    generator: GeneratorConfig = GeneratorConfig()
    logging: LoggingConfig = LoggingConfig()
    timetable_path: Optional[str] = None


class ConfigurationError(Exception):
    """Exception raised for configuration-related errors."""

    pass


class ConfigManager:
    """
    Manages application configuration with file persistence.

    Handles loading configuration from JSON files, creating default
    configurations, and saving changes back to disk.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file. If None, uses the
                per-user configuration directory
        """
        if config_path is None:
            self.config_path = self.get_default_config_path()
        else:
            self.config_path = Path(config_path)
        self.config: Optional[ConfigData] = None

        logger.debug(f"ConfigManager initialized with path: {self.config_path}")

    @staticmethod
    def get_default_config_path() -> Path:
        """
        Get the default configuration file path.

        On Windows, uses APPDATA/RouteFinder/config.json
        On Linux, uses XDG_CONFIG_HOME/RouteFinder/config.json or ~/.config/RouteFinder/config.json

        Returns:
            Path: Default configuration file path
        """
        if os.name == "nt":  # Windows
            appdata = os.environ.get("APPDATA")
            if appdata:
                return Path(appdata) / "RouteFinder" / "config.json"
        else:  # Linux/Unix
            xdg_config = os.environ.get("XDG_CONFIG_HOME")
            if xdg_config:
                return Path(xdg_config) / "RouteFinder" / "config.json"
            return Path.home() / ".config" / "RouteFinder" / "config.json"

        # Fallback to current directory for development
        return Path("config.json")

    def load_config(self) -> ConfigData:
        """
        Load configuration from file.

        If the configuration file doesn't exist, creates a default one.

        Returns:
            ConfigData: The loaded configuration

        Raises:
            ConfigurationError: If the configuration file is invalid
        """
        logger.debug(f"Loading config from: {self.config_path}")

        if not self.config_path.exists():
            logger.info(f"Config file doesn't exist, creating default at: {self.config_path}")
            self.create_default_config()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self.config = ConfigData(**data)
            logger.debug(f"Successfully loaded config from: {self.config_path}")
            return self.config
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in config file: {e}")
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration values: {e}")
        except (OSError, TypeError) as e:
            raise ConfigurationError(f"Failed to load config: {e}")

    def save_config(self, config: ConfigData) -> bool:
        """
        Save configuration to file.

        Args:
            config: Configuration data to save

        Returns:
            bool: True if saved successfully, False otherwise
        """
        logger.info(f"Saving config to: {self.config_path}")

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                json.dump(config.model_dump(), f, indent=2, ensure_ascii=False)
            self.config = config
            logger.info(f"Successfully saved config to: {self.config_path}")
            return True
        except OSError as e:
            logger.error(f"Failed to save config to {self.config_path}: {e}")
            return False

    def create_default_config(self) -> None:
        """Create a default configuration file."""
        if not self.save_config(ConfigData()):
            raise ConfigurationError(f"Cannot create default config at {self.config_path}")
