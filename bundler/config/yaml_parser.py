"""
YAML parser with validation for bundler settings files.

Provides YAML parsing with detailed error reporting (file, line and column)
and structural validation of the settings keys.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple


class YAMLParsingError(Exception):
    """Custom exception for YAML parsing errors with enhanced context."""

    def __init__(self, message: str, file_path: Optional[Path] = None,
                 line_number: Optional[int] = None, column: Optional[int] = None):
        self.file_path = file_path
        self.line_number = line_number
        self.column = column

        error_parts = [message]

        if file_path:
            error_parts.append(f"File: {file_path}")

        if line_number is not None:
            if column is not None:
                error_parts.append(f"Line {line_number}, Column {column}")
            else:
                error_parts.append(f"Line {line_number}")

        super().__init__(" | ".join(error_parts))


class ConfigurationYAMLParser:
    """YAML parser for settings files with validation and error reporting."""

    EXPECTED_KEYS = {'log_level', 'log_file', 'encoding', 'excluded_dirs', 'default_author'}

    def parse_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Parse a YAML settings file.

        Raises:
            YAMLParsingError: If YAML is invalid or file cannot be read
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return self._load(f.read(), file_path)

        except FileNotFoundError:
            raise YAMLParsingError("Configuration file not found", file_path)

        except PermissionError:
            raise YAMLParsingError("Permission denied reading configuration file", file_path)

        except UnicodeDecodeError as e:
            raise YAMLParsingError(f"File encoding error: {e}", file_path)

    def parse_string(self, yaml_content: str) -> Dict[str, Any]:
        """Parse YAML settings from a string."""
        return self._load(yaml_content, None)

    def _load(self, yaml_content: str, file_path: Optional[Path]) -> Dict[str, Any]:
        try:
            content = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            line_number = None
            column = None

            if hasattr(e, 'problem_mark') and e.problem_mark:
                line_number = e.problem_mark.line + 1  # YAML marks are 0-based
                column = e.problem_mark.column + 1

            if hasattr(e, 'problem') and e.problem:
                message = f"YAML parsing error: {e.problem}"
            else:
                message = f"YAML parsing error: {str(e)}"

            raise YAMLParsingError(message, file_path, line_number, column)

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise YAMLParsingError("Configuration root must be a mapping", file_path)
        return content

    def validate_configuration_structure(self, config_dict: Dict[str, Any]) -> List[str]:
        """
        Validate settings dictionary structure.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        unknown_keys = set(config_dict.keys()) - self.EXPECTED_KEYS
        if unknown_keys:
            errors.append(f"Unknown configuration keys: {', '.join(sorted(unknown_keys))}")

        for key in ('log_level', 'log_file', 'encoding', 'default_author'):
            value = config_dict.get(key)
            if value is not None and not isinstance(value, str):
                errors.append(f"{key} must be a string")

        if 'excluded_dirs' in config_dict:
            excluded = config_dict['excluded_dirs']
            if not isinstance(excluded, list):
                errors.append("excluded_dirs must be a list")
            elif any(not isinstance(name, str) for name in excluded):
                errors.append("excluded_dirs entries must be strings")

        return errors

    def validate_and_parse_file(self, file_path: Path) -> Tuple[Dict[str, Any], List[str]]:
        """
        Parse and validate a YAML settings file in one step.

        Returns:
            Tuple of (parsed_config, validation_errors)
        """
        config_dict = self.parse_file(file_path)
        validation_errors = self.validate_configuration_structure(config_dict)
        return config_dict, validation_errors
