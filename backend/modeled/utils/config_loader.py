"""Configuration loader for TOML config files"""

import toml
import os
from typing import Dict, Any, Optional

from modeled.models.config import AppConfig, StorageConfig, EditorConfig


DEFAULT_CONFIG_PATH = "config.toml"


class ConfigLoader:
    """Load and validate configuration from TOML file"""

    required_sections = ['app', 'storage', 'editor']

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        self.config_path = config_path
        self._config: Dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        """Load configuration from TOML file"""
        if not os.path.exists(self.config_path):
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Please copy config.example.toml to {self.config_path}"
            )

        with open(self.config_path, 'r') as f:
            self._config = toml.load(f)

        self._validate()

    def _validate(self) -> None:
        """Validate configuration has required sections"""
        for section in self.required_sections:
            if section not in self._config:
                raise ValueError(f"Missing required configuration section: {section}")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-notation key"""
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get an entire configuration section"""
        return self._config.get(section, {})

    @property
    def app(self) -> AppConfig:
        return AppConfig(**self.get_section('app'))

    @property
    def storage(self) -> StorageConfig:
        return StorageConfig(**self.get_section('storage'))

    @property
    def editor(self) -> EditorConfig:
        return EditorConfig(**self.get_section('editor'))

    @property
    def all(self) -> Dict[str, Any]:
        """Get all configuration"""
        return self._config


# Global config instance
_config: Optional[ConfigLoader] = None
_config_path: str = DEFAULT_CONFIG_PATH


def get_config() -> ConfigLoader:
    """Get the global configuration instance"""
    global _config
    if _config is None:
        _config = ConfigLoader(_config_path)
    return _config


def reload_config(config_path: Optional[str] = None) -> ConfigLoader:
    """Reload the configuration, optionally from a different file"""
    global _config, _config_path
    if config_path is not None:
        _config_path = config_path
    _config = None
    return get_config()
