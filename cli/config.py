#!/usr/bin/env python3
"""
Configuration Management Module for the ERP Fixtures CLI

Handles hierarchical configuration loading, environment variable mapping
and validation of generator settings.
"""

import os
import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional, List, Union

import yaml

# Configuration file locations in order of precedence (highest to lowest)
CONFIG_SEARCH_PATHS = [
    Path.cwd() / '.erp-fixtures.yml',
    Path.cwd() / '.erp-fixtures.json',
    Path.home() / '.erp-fixtures' / 'config.yml',
    Path.home() / '.erp-fixtures' / 'config.json',
]

# Environment variable prefix
ENV_PREFIX = 'ERP_'

# Default configuration values
DEFAULT_CONFIG = {
    'generator': {
        'count': 1000,
        'output': 'scripts.json',
        'mode': 'valid',     # valid, invalid
        'seed': None
    },
    'policy': {
        'emergency': 'computed'  # computed, fixed
    },
    'progress': {
        'interval': 100
    },
    'json': {
        'indent': None
    }
}

VALID_MODES = ['valid', 'invalid']
VALID_POLICIES = ['computed', 'fixed']


class ConfigurationError(Exception):
    """Raised when a configuration source cannot be used."""
    pass


class ConfigurationManager:
    """Manages hierarchical configuration with environment variable support."""

    def __init__(self, config_file: Optional[str] = None,
                 environ: Optional[Dict[str, str]] = None,
                 search_paths: Optional[List[Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Explicit configuration file path
            environ: Environment mapping (defaults to os.environ)
            search_paths: Locations probed when no file is given
        """
        self.logger = logging.getLogger('erp-fixtures.config')
        self.config_file = config_file
        self.environ = environ if environ is not None else os.environ
        self.search_paths = search_paths if search_paths is not None else CONFIG_SEARCH_PATHS
        self._config_cache = None
        self._config_sources = []

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from all sources in hierarchical order.

        Returns:
            Merged configuration dictionary
        """
        if self._config_cache is not None:
            return self._config_cache

        configs = [DEFAULT_CONFIG]
        self._config_sources = ["defaults"]

        if self.config_file:
            path = Path(self.config_file)
            if not path.exists():
                raise ConfigurationError(f"Config file not found: {path}")
            configs.append(self._load_config_file(path))
            self._config_sources.append(f"file:{path}")
        else:
            for config_path in self.search_paths:
                if config_path.exists():
                    configs.append(self._load_config_file(config_path))
                    self._config_sources.append(f"file:{config_path}")
                    self.logger.debug(f"Loaded config from {config_path}")
                    break  # Use first found config file

        env_config = self._load_environment_variables()
        if env_config:
            configs.append(env_config)
            self._config_sources.append("environment")

        self._config_cache = self._deep_merge(*configs)
        return self._config_cache

    def _load_config_file(self, path: Path) -> Dict[str, Any]:
        """Load configuration from file."""
        try:
            with open(path, 'r') as f:
                if path.suffix in ['.yml', '.yaml']:
                    data = yaml.safe_load(f)
                elif path.suffix == '.json':
                    data = json.load(f)
                else:
                    raise ConfigurationError(f"Unknown config file format: {path}")
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load config from {path}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        return data

    def _load_environment_variables(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env_config = {}

        for key, value in self.environ.items():
            if key.startswith(ENV_PREFIX):
                # e.g., ERP_GENERATOR_COUNT -> {'generator': {'count': value}}
                parts = key[len(ENV_PREFIX):].lower().split('_')
                current = env_config

                for part in parts[:-1]:
                    current = current.setdefault(part, {})

                current[parts[-1]] = self._parse_env_value(value)

        return env_config

    def _parse_env_value(self, value: str) -> Union[str, int, float, bool, None]:
        """Parse environment variable value to appropriate type."""
        try:
            return json.loads(value)
        except ValueError:
            pass

        if value.lower() in ['true', 'yes']:
            return True
        elif value.lower() in ['false', 'no']:
            return False

        return value

    def _deep_merge(self, *dicts: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge multiple dictionaries."""
        result = {}

        for dictionary in dicts:
            for key, value in dictionary.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = self._deep_merge(result[key], value)
                elif isinstance(value, dict):
                    result[key] = self._deep_merge(value)
                else:
                    result[key] = value

        return result

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        Args:
            key_path: Dot-separated path (e.g., 'generator.count')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        current = self.load()

        for key in key_path.split('.'):
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default

        return current

    def validate(self) -> List[str]:
        """
        Validate current configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        count = self.get('generator.count')
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            errors.append(f"generator.count must be a non-negative integer: {count}")

        mode = self.get('generator.mode')
        if mode not in VALID_MODES:
            errors.append(f"Invalid generator mode: {mode}")

        seed = self.get('generator.seed')
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
            errors.append(f"generator.seed must be an integer: {seed}")

        if not self.get('generator.output'):
            errors.append("generator.output is required")

        policy = self.get('policy.emergency')
        if policy not in VALID_POLICIES:
            errors.append(f"Invalid emergency threshold policy: {policy}")

        interval = self.get('progress.interval')
        if isinstance(interval, bool) or not isinstance(interval, int) or interval < 0:
            errors.append(f"progress.interval must be a non-negative integer: {interval}")

        indent = self.get('json.indent')
        if indent is not None and (isinstance(indent, bool) or not isinstance(indent, int) or indent < 0):
            errors.append(f"json.indent must be a non-negative integer: {indent}")

        return errors

    def get_sources(self) -> List[str]:
        """Get list of configuration sources that were loaded."""
        self.load()
        return self._config_sources

    def reset(self):
        """Reset configuration cache."""
        self._config_cache = None
        self._config_sources = []
