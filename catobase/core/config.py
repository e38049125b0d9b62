"""Configuration management for catobase."""

import os
import logging
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field
import configparser

from .exceptions import ConfigurationError

REGISTRY_ENV_VAR = "CATOBASE_REGISTRY"


@dataclass
class RegistryConfig:
    """Registry and category settings."""
    path: Path = Path(".catodb")
    categories_file: Optional[Path] = None
    snapshot_suffix: str = ".copy"
    encoding: str = "utf-8"


@dataclass
class WebConfig:
    """Web API configuration settings."""
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_enabled: bool = False
    file_path: Optional[Path] = None
    file_max_size_mb: int = 10
    file_backup_count: int = 5
    console_enabled: bool = True

    def __post_init__(self):
        if self.file_path is None:
            self.file_path = Path.home() / ".catobase" / "logs" / "catobase.log"


@dataclass
class AppConfig:
    """Main application configuration."""
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    web: WebConfig = field(default_factory=WebConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    app_name: str = "catobase"
    version: str = "0.1.0"


class ConfigManager:
    """Manages application configuration from an INI file and the environment."""

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Path to configuration file. If None, uses default location.
                A missing file leaves the defaults in place.
        """
        if config_file is None:
            config_file = Path.home() / ".catobase" / "config.ini"

        self.config_file = Path(config_file)
        self.config = AppConfig()
        self.logger = logging.getLogger(__name__)

        if self.config_file.exists():
            self.load_from_file()
        self.apply_environment()

    def load_from_file(self) -> None:
        """Load configuration from INI file."""
        parser = configparser.ConfigParser(interpolation=None)
        try:
            parser.read(self.config_file)
            self._apply_parser(parser)
        except (configparser.Error, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration file {self.config_file}: {e}") from e

        self.logger.info(f"Configuration loaded from {self.config_file}")

    def _apply_parser(self, parser: configparser.ConfigParser) -> None:
        """Copy the values present in parser onto the configuration."""
        if 'registry' in parser:
            section = parser['registry']
            if 'path' in section:
                self.config.registry.path = Path(section['path'])
            if section.get('categories_file'):
                self.config.registry.categories_file = Path(section['categories_file'])
            if 'snapshot_suffix' in section:
                self.config.registry.snapshot_suffix = section.get('snapshot_suffix')
            if 'encoding' in section:
                self.config.registry.encoding = section.get('encoding')

        if 'web' in parser:
            section = parser['web']
            if 'host' in section:
                self.config.web.host = section.get('host')
            if 'port' in section:
                self.config.web.port = section.getint('port')
            if 'debug' in section:
                self.config.web.debug = section.getboolean('debug')

        if 'logging' in parser:
            section = parser['logging']
            if 'level' in section:
                self.config.logging.level = section.get('level')
            if 'format' in section:
                self.config.logging.format = section.get('format')
            if 'file_enabled' in section:
                self.config.logging.file_enabled = section.getboolean('file_enabled')
            if 'file_path' in section:
                self.config.logging.file_path = Path(section.get('file_path'))
            if 'file_max_size_mb' in section:
                self.config.logging.file_max_size_mb = section.getint('file_max_size_mb')
            if 'file_backup_count' in section:
                self.config.logging.file_backup_count = section.getint('file_backup_count')
            if 'console_enabled' in section:
                self.config.logging.console_enabled = section.getboolean('console_enabled')

    def apply_environment(self) -> None:
        """Apply environment overrides."""
        registry_path = os.environ.get(REGISTRY_ENV_VAR)
        if registry_path:
            self.config.registry.path = Path(registry_path)

    def save_to_file(self) -> None:
        """Save current configuration to INI file."""
        self.config_file.parent.mkdir(parents=True, exist_ok=True)

        parser = configparser.ConfigParser(interpolation=None)

        parser['registry'] = {
            'path': str(self.config.registry.path),
            'categories_file': str(self.config.registry.categories_file or ''),
            'snapshot_suffix': self.config.registry.snapshot_suffix,
            'encoding': self.config.registry.encoding
        }

        parser['web'] = {
            'host': self.config.web.host,
            'port': str(self.config.web.port),
            'debug': str(self.config.web.debug)
        }

        parser['logging'] = {
            'level': self.config.logging.level,
            'format': self.config.logging.format,
            'file_enabled': str(self.config.logging.file_enabled),
            'file_path': str(self.config.logging.file_path),
            'file_max_size_mb': str(self.config.logging.file_max_size_mb),
            'file_backup_count': str(self.config.logging.file_backup_count),
            'console_enabled': str(self.config.logging.console_enabled)
        }

        with open(self.config_file, 'w') as f:
            parser.write(f)

        self.logger.info(f"Configuration saved to {self.config_file}")

    def get_config(self) -> AppConfig:
        """Get the current configuration."""
        return self.config

    def set_value(self, key: str, value: str) -> object:
        """
        Set a configuration value from its string form and save the file.

        Args:
            key: Dotted key such as ``registry.path``
            value: New value, converted to the type of the current setting

        Returns:
            The converted value
        """
        keys = key.split('.')
        if len(keys) != 2:
            raise ConfigurationError("Key must be in format 'section.key' (e.g., 'registry.path')")

        section, setting = keys
        if not hasattr(self.config, section):
            raise ConfigurationError(f"Unknown configuration section: {section}")
        section_obj = getattr(self.config, section)
        if not hasattr(section_obj, setting):
            raise ConfigurationError(f"Unknown setting '{setting}' in section '{section}'")

        current_value = getattr(section_obj, setting)
        try:
            if isinstance(current_value, bool):
                converted_value = value.lower() in ('true', '1', 'yes', 'on')
            elif isinstance(current_value, int):
                converted_value = int(value)
            elif setting == 'categories_file':
                converted_value = Path(value) if value else None
            elif isinstance(current_value, Path):
                converted_value = Path(value)
            else:
                converted_value = value
        except ValueError as e:
            raise ConfigurationError(f"Invalid value for {key}: {value!r}") from e

        setattr(section_obj, setting, converted_value)
        self.save_to_file()
        return converted_value


_config_manager = None


def get_config() -> AppConfig:
    """Get the global application configuration."""
    return get_config_manager().get_config()


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def setup_config(config_file: Optional[Path] = None) -> ConfigManager:
    """
    Set up global configuration.

    Args:
        config_file: Optional path to configuration file

    Returns:
        ConfigManager instance
    """
    global _config_manager
    _config_manager = ConfigManager(config_file)
    return _config_manager
