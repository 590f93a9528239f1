"""YAML configuration loading and validation.

This module handles loading mirror configuration from YAML files.
The configuration file is optional: without one, every option takes its
default value.
"""

import os
from typing import Any, Dict, List

import yaml

from .errors import ConfigError, FilesystemError
from .models import SyncOptions


class ConfigLoader:
    """Handles configuration file loading, validation, and saving.

    Configuration file structure:
        source_dir: source
        output_dir: docs
        clean: true
        heading: true
        concurrency: 4
        exports: [txt, docx]
    """

    DEFAULT_CONFIG_PATH = '.docs-mirror/config.yaml'

    # Default values for optional fields
    DEFAULTS: Dict[str, Any] = {
        'source_dir': 'source',
        'output_dir': 'docs',
        'clean': True,
        'heading': True,
        'concurrency': 4,
        'exports': ['txt', 'docx'],
    }

    @classmethod
    def load(cls, config_path: str) -> SyncOptions:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            SyncOptions object with parsed configuration

        Raises:
            FilesystemError: If file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise FilesystemError(
                config_path,
                'read',
                'Configuration file not found'
            )
        except PermissionError:
            raise FilesystemError(
                config_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'read',
                str(e)
            )

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        # An empty file means "all defaults"
        if config_dict is None:
            return SyncOptions()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def load_or_default(cls, config_path: str) -> SyncOptions:
        """Load configuration, falling back to defaults when the file is missing.

        Raises:
            FilesystemError: If the file exists but cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        if not os.path.exists(config_path):
            return SyncOptions()
        return cls.load(config_path)

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> SyncOptions:
        """Parse and validate configuration dictionary.

        Args:
            config_dict: Raw configuration dictionary from YAML

        Returns:
            Validated SyncOptions object

        Raises:
            ConfigError: If configuration is invalid
        """
        unknown = set(config_dict.keys()) - set(cls.DEFAULTS.keys())
        if unknown:
            raise ConfigError(
                f"Unknown fields: {', '.join(sorted(str(k) for k in unknown))}"
            )

        values = {**cls.DEFAULTS, **config_dict}

        source_dir = cls._parse_dir(values['source_dir'], 'source_dir')
        output_dir = cls._parse_dir(values['output_dir'], 'output_dir')

        for flag in ('clean', 'heading'):
            if not isinstance(values[flag], bool):
                raise ConfigError(
                    f"Field '{flag}' must be true or false, got {type(values[flag]).__name__}",
                    flag
                )

        concurrency = values['concurrency']
        # bool is an int subclass; reject "concurrency: true"
        if isinstance(concurrency, bool) or not isinstance(concurrency, int):
            raise ConfigError(
                f"Field 'concurrency' must be an integer, got {type(concurrency).__name__}",
                'concurrency'
            )
        if concurrency < 1:
            raise ConfigError(
                f"Field 'concurrency' must be at least 1, got {concurrency}",
                'concurrency'
            )

        exports = cls._parse_exports(values['exports'])

        return SyncOptions(
            source_dir=source_dir,
            output_dir=output_dir,
            clean=values['clean'],
            heading=values['heading'],
            concurrency=concurrency,
            exports=exports,
        )

    @staticmethod
    def _parse_dir(value: Any, field_name: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(
                f"Field '{field_name}' must be a non-empty string",
                field_name
            )
        return value.strip()

    @staticmethod
    def _parse_exports(value: Any) -> List[str]:
        if isinstance(value, str):
            value = value.split(',')
        if not isinstance(value, list):
            raise ConfigError(
                f"Field 'exports' must be a list, got {type(value).__name__}",
                'exports'
            )
        exports = [str(fmt).strip().lower() for fmt in value if str(fmt).strip()]
        if not exports:
            raise ConfigError(
                "At least one export format is required",
                'exports'
            )
        return exports
