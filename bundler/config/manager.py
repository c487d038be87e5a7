"""
Settings manager for the code bundler.

Loads, validates and merges BundlerSettings from multiple sources:
- System defaults
- User configuration (~/.code-bundler/config.yaml)
- Project configuration (./.code-bundler/config.yaml)
- Explicit configuration (--config file.yaml)
- Environment variables
- CLI arguments (highest precedence)
"""

import os
import re
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from .environment import EnvironmentVariables
from .schema import DEFAULT_EXCLUDED_DIRS, BundlerSettings, LogLevel
from .yaml_parser import ConfigurationYAMLParser, YAMLParsingError


CONFIG_DIR_NAME = ".code-bundler"
CONFIG_FILE_NAME = "config.yaml"


class ConfigurationManager:
    """Manages settings loading, validation, and environment variable integration."""

    def __init__(self, user_config_path: Optional[Path] = None,
                 project_config_path: Optional[Path] = None):
        self.user_config_path = user_config_path or Path.home() / CONFIG_DIR_NAME / CONFIG_FILE_NAME
        self.project_config_path = project_config_path or Path.cwd() / CONFIG_DIR_NAME / CONFIG_FILE_NAME
        self.yaml_parser = ConfigurationYAMLParser()

    def load_settings(self,
                      config_file: Optional[str] = None,
                      cli_overrides: Optional[Dict[str, Any]] = None) -> BundlerSettings:
        """
        Load settings from all sources with proper precedence.

        Precedence order (highest to lowest):
        1. CLI arguments (cli_overrides, None values ignored)
        2. Environment variables
        3. Explicit config file (--config)
        4. Project config (./.code-bundler/config.yaml)
        5. User config (~/.code-bundler/config.yaml)
        6. System defaults

        Raises:
            ValueError: If a settings file is invalid or the merged settings fail validation
        """
        config_dict = self._get_default_config()

        if self.user_config_path.exists():
            config_dict.update(self._load_yaml_file(self.user_config_path))

        if self.project_config_path.exists():
            config_dict.update(self._load_yaml_file(self.project_config_path))

        if config_file:
            config_dict.update(self._load_yaml_file(Path(config_file)))

        config_dict.update(self._load_environment_variables())

        if cli_overrides:
            config_dict.update({k: v for k, v in cli_overrides.items() if v is not None})

        config_dict = self.substitute_environment_variables(config_dict)

        known = {f.name for f in fields(BundlerSettings)}
        settings = BundlerSettings(**{k: v for k, v in config_dict.items() if k in known})
        settings.log_level = str(settings.log_level).lower()

        errors = settings.validate()
        if errors:
            raise ValueError("Invalid configuration:\n" + "\n".join(f"  - {e}" for e in errors))
        return settings

    def substitute_environment_variables(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Substitute ${VAR} and ${VAR:-default} syntax with environment variable values.

        Raises:
            ValueError: If a required environment variable is missing
        """
        def substitute_value(value):
            if not isinstance(value, str):
                return value

            pattern = r'\$\{([^}]+)\}'

            def replace_var(match):
                var_expr = match.group(1)

                if ':-' in var_expr:
                    var_name, default_value = var_expr.split(':-', 1)
                    return os.environ.get(var_name, default_value)
                if var_expr not in os.environ:
                    raise ValueError(f"Required environment variable '{var_expr}' is not set")
                return os.environ[var_expr]

            return re.sub(pattern, replace_var, value)

        def substitute_recursive(obj):
            if isinstance(obj, dict):
                return {k: substitute_recursive(v) for k, v in obj.items()}
            elif isinstance(obj, list):
                return [substitute_recursive(item) for item in obj]
            return substitute_value(obj)

        return substitute_recursive(config_dict)

    def settings_as_dict(self, settings: BundlerSettings) -> Dict[str, Any]:
        return asdict(settings)

    def _get_default_config(self) -> Dict[str, Any]:
        """Get system default settings values."""
        return {
            'log_level': LogLevel.WARNING.value,
            'log_file': None,
            'encoding': 'utf-8',
            'excluded_dirs': list(DEFAULT_EXCLUDED_DIRS),
            'default_author': None,
        }

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load and validate one YAML settings file."""
        try:
            config_dict, validation_errors = self.yaml_parser.validate_and_parse_file(file_path)
        except YAMLParsingError as e:
            raise ValueError(str(e))

        if validation_errors:
            error_msg = f"Configuration validation errors in {file_path}:\n" + \
                        "\n".join(f"  - {error}" for error in validation_errors)
            raise ValueError(error_msg)

        return config_dict

    def _load_environment_variables(self) -> Dict[str, Any]:
        """Load settings from environment variables."""
        env_config: Dict[str, Any] = {}
        env_vars = EnvironmentVariables

        if env_vars.LOG_LEVEL in os.environ:
            env_config['log_level'] = os.environ[env_vars.LOG_LEVEL]

        if env_vars.LOG_FILE in os.environ:
            env_config['log_file'] = os.environ[env_vars.LOG_FILE] or None

        if env_vars.ENCODING in os.environ:
            env_config['encoding'] = os.environ[env_vars.ENCODING]

        if env_vars.EXCLUDED_DIRS in os.environ:
            env_config['excluded_dirs'] = env_vars.split_list(os.environ[env_vars.EXCLUDED_DIRS])

        if env_vars.AUTHOR in os.environ:
            env_config['default_author'] = os.environ[env_vars.AUTHOR] or None

        return env_config

    def list_sources(self, config_file: Optional[str] = None) -> List[str]:
        """Settings files that exist and would be read, lowest precedence first."""
        candidates = [self.user_config_path, self.project_config_path]
        if config_file:
            candidates.append(Path(config_file))
        return [str(path) for path in candidates if path.exists()]
