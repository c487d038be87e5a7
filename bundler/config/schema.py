"""
Configuration schema and data models for the code bundler.

This module defines:
- BundleConfig: the immutable, validated description of one bundle run
- SortMode: the three supported orderings
- BundlerSettings: ambient settings (logging, encoding, excluded directories)
  loaded from YAML files and environment variables
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bundler.errors import (
    InvalidOutputPathError,
    InvalidSortModeError,
    NoLanguagesSpecifiedError,
)


REQUIRED_OUTPUT_EXTENSION = ".txt"
ALL_LANGUAGES = "all"
DEFAULT_EXCLUDED_DIRS = ("bin", "obj", "debug", "release")


class SortMode(str, Enum):
    """Supported file orderings."""
    NONE = ""
    ALPHABETICAL = "abc"
    BY_EXTENSION = "type"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortMode":
        """Parse a CLI sort value; None or empty means no sorting."""
        if isinstance(value, SortMode):
            return value
        if value is None or not str(value).strip():
            return cls.NONE
        normalized = str(value).strip().lower()
        for mode in cls:
            if mode.value and mode.value == normalized:
                return mode
        raise InvalidSortModeError(
            "Sort option must be either 'abc' or 'type' or left empty.",
            sort_value=str(value),
        )


class LogLevel(Enum):
    """Supported logging levels."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class BundleConfig(BaseModel):
    """Validated description of a single bundle run.

    Fields are validated in declaration order, so a bad output path is
    rejected before the language list is even looked at.

    Attributes:
        output_path: Bundle file path, must end with .txt (any case)
        languages: Ordered set of lowercase extension tokens, or ('all',)
        include_source_note: Prefix each file with a '// Source:' line
        sort_mode: File ordering
        remove_empty_lines: Drop blank and whitespace-only lines
        author: Optional author written as the first line
    """
    model_config = ConfigDict(frozen=True)

    output_path: str = Field(..., description="Bundle file path (.txt)")
    languages: Tuple[str, ...] = Field(..., description="Extension tokens or 'all'")
    include_source_note: bool = Field(default=False, description="Write source path comments")
    sort_mode: SortMode = Field(default=SortMode.NONE, description="File ordering")
    remove_empty_lines: bool = Field(default=False, description="Drop blank lines")
    author: Optional[str] = Field(default=None, description="Author header")

    @field_validator("output_path", mode="before")
    @classmethod
    def validate_output_path(cls, v: Any) -> str:
        """Output must be a non-blank path ending in .txt (case-insensitive)."""
        if v is None or not str(v).strip():
            raise InvalidOutputPathError("Output file must be a valid .txt file.")
        path = os.fspath(v) if isinstance(v, os.PathLike) else str(v)
        if not path.lower().endswith(REQUIRED_OUTPUT_EXTENSION):
            raise InvalidOutputPathError(
                "Output file must be a valid .txt file.",
                output_path=path,
            )
        return path

    @field_validator("languages", mode="before")
    @classmethod
    def validate_languages(cls, v: Any) -> Tuple[str, ...]:
        """Normalize to lowercase tokens without dots, deduplicated in order."""
        if v is None:
            raise NoLanguagesSpecifiedError(
                "You must specify at least one programming language."
            )
        tokens = [v] if isinstance(v, str) else list(v)
        if not tokens or any(token is None or not str(token).strip() for token in tokens):
            raise NoLanguagesSpecifiedError(
                "You must specify at least one programming language."
            )

        normalized: List[str] = []
        for token in tokens:
            token = str(token).strip().lower()
            if token.startswith("."):
                token = token[1:]
            if not token:
                raise NoLanguagesSpecifiedError(
                    "You must specify at least one programming language."
                )
            if token not in normalized:
                normalized.append(token)
        return tuple(normalized)

    @field_validator("sort_mode", mode="before")
    @classmethod
    def validate_sort_mode(cls, v: Any) -> SortMode:
        return SortMode.parse(v)

    @field_validator("author", mode="before")
    @classmethod
    def validate_author(cls, v: Any) -> Optional[str]:
        if v is None or not str(v).strip():
            return None
        return str(v)

    @property
    def all_languages(self) -> bool:
        """True when the 'all' sentinel disables language filtering."""
        return ALL_LANGUAGES in self.languages

    @property
    def resolved_output_path(self) -> str:
        return os.path.abspath(self.output_path)


@dataclass
class BundlerSettings:
    """Ambient settings shared by every command.

    Attributes:
        log_level: Logging level (debug, info, warning, error)
        log_file: Optional log file path
        encoding: Text encoding used to read source files and write the bundle
        excluded_dirs: Directory names skipped during discovery (any case)
        default_author: Author used when --author is not given
    """
    log_level: str = LogLevel.WARNING.value
    log_file: Optional[str] = None
    encoding: str = "utf-8"
    excluded_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDED_DIRS))
    default_author: Optional[str] = None

    def validate(self) -> List[str]:
        """Validate settings and return list of errors."""
        errors = []

        try:
            LogLevel(str(self.log_level).lower())
        except ValueError:
            valid_levels = [l.value for l in LogLevel]
            errors.append(f"Invalid log_level '{self.log_level}'. Valid options: {valid_levels}")

        try:
            "".encode(self.encoding)
        except (LookupError, TypeError):
            errors.append(f"Unknown encoding '{self.encoding}'")

        if not isinstance(self.excluded_dirs, list):
            errors.append("excluded_dirs must be a list of directory names")
        elif any(not isinstance(name, str) or not name.strip() for name in self.excluded_dirs):
            errors.append("excluded_dirs entries must be non-empty strings")

        return errors
