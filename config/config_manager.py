"""
Configuration manager for the WattCanvas EIA Dashboard.

This module provides a class for loading, accessing, and saving configuration
from YAML files. It handles nested configuration properties using dot notation
and provides type-safe access to configuration values.

Services receive the values they need from a ConfigManager instance instead of
reading module-level globals, so the backend base URL is resolved once when
the services are built.
"""

import copy
import os
import yaml
import logging
from typing import Any, Dict, Optional

from config.constants import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_CONFIG,
    DEFAULT_API_BASE_URL,
    ENV_API_BASE_URL,
    ENV_SUPABASE_URL,
    ENV_SUPABASE_KEY,
)

# Set up logger
logger = logging.getLogger(__name__)

class ConfigManager:
    """
    Configuration manager that reads from YAML files with dot notation access.

    - Loads configuration from a YAML file merged over the defaults
    - Provides access to nested properties using dot notation
    - Lets environment variables override connection settings

    Attributes:
        config_path (str): Path to the YAML configuration file
        config (dict): The loaded configuration dictionary
    """

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        """
        Initialize the configuration manager

        Args:
            config_path (str): Path to the YAML configuration file
        """
        self.config_path = config_path
        self.config = {}

        self.load_config()

    def load_config(self) -> None:
        """
        Load configuration from YAML file

        If the configuration file doesn't exist, a default one is written.
        If loading fails, the defaults are used.
        """
        self.config = copy.deepcopy(DEFAULT_CONFIG)

        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    loaded_config = yaml.safe_load(f) or {}
                    self._deep_merge(self.config, loaded_config)
            except (OSError, yaml.YAMLError) as e:
                logger.error(f"Error loading configuration file: {str(e)}")
        else:
            logger.info(f"Configuration file not found. Creating default at {self.config_path}")
            self.save()

    def _ensure_config_dir(self) -> None:
        """Ensure the directory for the configuration file exists"""
        config_dir = os.path.dirname(self.config_path)
        if config_dir and not os.path.exists(config_dir):
            os.makedirs(config_dir, exist_ok=True)

    def _deep_merge(self, base: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
        """
        Deep merge two dictionaries, modifying base

        Args:
            base: Base dictionary to be updated
            update: Dictionary with updates to apply

        Returns:
            The updated base dictionary
        """
        for key, value in update.items():
            if isinstance(value, dict) and key in base and isinstance(base[key], dict):
                base[key] = self._deep_merge(base[key], value)
            else:
                base[key] = value
        return base

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation

        Args:
            key: Configuration key (can be nested with dots, e.g. 'api.base_url')
            default: Default value to return if key not found

        Returns:
            The configuration value or default
        """
        value = self.config
        for part in key.split('.'):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]

        return value

    def get_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        """Get an integer configuration value, falling back to default on bad input."""
        value = self.get(key, default)
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def get_float(self, key: str, default: Optional[float] = None) -> Optional[float]:
        """Get a float configuration value, falling back to default on bad input."""
        value = self.get(key, default)
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value using dot notation

        Args:
            key: Configuration key (can be nested with dots)
            value: Value to set
        """
        parts = key.split('.')

        config = self.config
        for part in parts[:-1]:
            if part not in config or not isinstance(config[part], dict):
                config[part] = {}
            config = config[part]
        config[parts[-1]] = value

    def save(self) -> bool:
        """
        Save configuration to YAML file

        Returns:
            bool: True if save was successful, False otherwise
        """
        try:
            self._ensure_config_dir()
            with open(self.config_path, 'w') as f:
                yaml.dump(self.config, f, default_flow_style=False)
            return True
        except OSError as e:
            logger.error(f"Error saving configuration: {str(e)}")
            return False

    def get_api_base_url(self) -> str:
        """
        Get the backend aggregation API base URL

        The environment variable wins over the configuration file.

        Returns:
            str: Base URL without a trailing slash
        """
        base_url = os.environ.get(ENV_API_BASE_URL) or self.get('api.base_url') or DEFAULT_API_BASE_URL
        return base_url.rstrip('/')

    def get_api_timeout(self) -> Optional[float]:
        """Request timeout in seconds, or None for no timeout."""
        return self.get_float('api.timeout', None)

    def get_supabase_url(self) -> Optional[str]:
        return os.environ.get(ENV_SUPABASE_URL) or self.get('auth.supabase_url') or None

    def get_supabase_key(self) -> Optional[str]:
        return os.environ.get(ENV_SUPABASE_KEY) or self.get('auth.supabase_key') or None

    def get_dashboard_defaults(self) -> Dict[str, Any]:
        """
        Get the default filter selections for the dashboard

        Returns:
            dict: default_frequency, default_metric, lookback_years, max_display
        """
        return {
            'default_frequency': self.get('dashboard.default_frequency'),
            'default_metric': self.get('dashboard.default_metric'),
            'lookback_years': self.get_int('dashboard.lookback_years', 1),
            'max_display': self.get_int('dashboard.max_display', 2)
        }
