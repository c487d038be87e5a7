"""
Environment variable integration for the code bundler.

Centralizes the environment variable names read by the settings loader and
provides validation and documentation for them.
"""

import os
from typing import Dict, List


class EnvironmentVariables:
    """Centralized environment variable definitions and utilities."""

    LOG_LEVEL = "CODE_BUNDLER_LOG_LEVEL"
    LOG_FILE = "CODE_BUNDLER_LOG_FILE"
    ENCODING = "CODE_BUNDLER_ENCODING"
    EXCLUDED_DIRS = "CODE_BUNDLER_EXCLUDED_DIRS"
    AUTHOR = "CODE_BUNDLER_AUTHOR"

    @classmethod
    def get_variable_documentation(cls) -> Dict[str, str]:
        """Get documentation for all environment variables."""
        return {
            cls.LOG_LEVEL: "Default logging level (debug, info, warning, error)",
            cls.LOG_FILE: "Optional log file path (rotated at 10MB)",
            cls.ENCODING: "Text encoding for source files and the bundle (default: utf-8)",
            cls.EXCLUDED_DIRS: "Comma separated directory names skipped during discovery",
            cls.AUTHOR: "Author written at the top of the bundle when --author is not given",
        }

    @staticmethod
    def split_list(value: str) -> List[str]:
        """Split a comma separated variable into its non-empty entries."""
        return [item.strip() for item in value.split(",") if item.strip()]

    @classmethod
    def validate_environment_setup(cls) -> List[str]:
        """
        Check the environment for settings that are accepted but suspicious.

        Invalid values are rejected by the settings loader itself.

        Returns:
            List of warnings
        """
        warnings = []

        excluded = os.environ.get(cls.EXCLUDED_DIRS)
        if excluded is not None and not cls.split_list(excluded):
            warnings.append(f"{cls.EXCLUDED_DIRS} is set but empty; no directories will be skipped")

        return warnings
