"""
Managers Package

Application-level configuration management.
"""

from .config_manager import (
    ConfigData,
    ConfigManager,
    ConfigurationError,
    GeneratorConfig,
    LoggingConfig,
    SearchConfig,
)

__all__ = [
    'ConfigData',
    'ConfigManager',
    'ConfigurationError',
    'GeneratorConfig',
    'LoggingConfig',
    'SearchConfig'
]
