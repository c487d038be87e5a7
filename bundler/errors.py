"""
Bundler Error Hierarchy

Defines all custom exceptions used by the bundler.
Each stage (validation, discovery, filtering, assembly, wizard, persistence)
raises its own error type, and the CLI reports them in one place.

Error Categories:
- Argument Errors: Invalid output path, missing languages, unknown sort mode
- Selection Errors: No files matched the requested languages
- File System Errors: Missing root directory, access denied, other I/O failures
- Wizard Errors: Answers that must be asked again, invalid response file path

None of these subclass ValueError, so they pass through pydantic validators
unchanged instead of being wrapped in a ValidationError.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence


class BundleError(Exception):
    """Base exception for all bundler errors.

    All bundler-specific exceptions inherit from this class,
    allowing the CLI to report them with a single handler.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidOutputPathError(BundleError):
    """Output path is missing or does not end in the required extension.

    Attributes:
        output_path: The rejected path (if any was given)
    """

    def __init__(self, message: str, output_path: Optional[str] = None):
        super().__init__(message)
        self.output_path = output_path


class NoLanguagesSpecifiedError(BundleError):
    """Language list is empty or contains a blank entry."""
    pass


class InvalidSortModeError(BundleError):
    """Sort value is outside the recognized set.

    Attributes:
        sort_value: The rejected sort value
    """

    def __init__(self, message: str, sort_value: Optional[str] = None):
        super().__init__(message)
        self.sort_value = sort_value


class NoMatchError(BundleError):
    """The language filter produced zero candidate files.

    Attributes:
        languages: The requested language tokens
    """

    def __init__(self, message: str, languages: Sequence[str] = ()):
        super().__init__(message)
        self.languages = list(languages)


class DirectoryNotFoundError(BundleError):
    """The root traversal directory does not exist.

    Attributes:
        path: The missing directory
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class AccessDeniedError(BundleError):
    """Permission failure reading a source file or writing the output.

    Attributes:
        path: Path where access was denied
        original_error: The underlying PermissionError
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.path = path
        self.original_error = original_error


class GenericIOError(BundleError):
    """Any other I/O failure (disk full, path too long, etc.).

    Attributes:
        path: Path involved in the failed operation
        original_error: The underlying OSError
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.path = path
        self.original_error = original_error


class InvalidAnswerError(BundleError):
    """A wizard answer could not be understood and should be asked again.

    Attributes:
        answer: The raw answer that was rejected
    """

    def __init__(self, message: str, answer: Optional[str] = None):
        super().__init__(message)
        self.answer = answer


class ResponseFileError(BundleError):
    """Response file path is invalid, or the file cannot be read.

    Attributes:
        path: The response file path
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


def translate_os_error(error: OSError, path: str, action: str) -> BundleError:
    """Map an OSError raised while touching ``path`` to the bundler taxonomy.

    Args:
        error: The OSError that was raised
        path: The file or directory being accessed
        action: Short description of the operation ("read", "write", ...)

    Returns:
        DirectoryNotFoundError, AccessDeniedError or GenericIOError
    """
    if isinstance(error, PermissionError):
        return AccessDeniedError(
            f"Access denied to the specified path: {path}",
            path=path,
            original_error=error,
        )
    if isinstance(error, (FileNotFoundError, NotADirectoryError)) and action == "scan":
        return DirectoryNotFoundError(f"Directory not found: {path}", path=path)
    reason = error.strerror or str(error)
    return GenericIOError(
        f"Failed to {action} {path}: {reason}",
        path=path,
        original_error=error,
    )


@dataclass
class BundleErrorInfo:
    """Structured error information for user-friendly error reporting.

    Attributes:
        error_type: Type of error (e.g., "NoMatchError")
        message: Human-readable error message
        details: Additional context (path, languages, etc.)
        suggestion: Suggested action for the user
    """
    error_type: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    @classmethod
    def from_exception(cls, error: Exception) -> "BundleErrorInfo":
        """Create BundleErrorInfo from an exception.

        Args:
            error: Exception to convert

        Returns:
            BundleErrorInfo with details extracted from the exception
        """
        error_type = type(error).__name__
        message = str(error)
        details = {}
        suggestion = ""

        if isinstance(error, InvalidOutputPathError):
            if error.output_path:
                details["output_path"] = error.output_path
            suggestion = "Output file must be a valid .txt file."

        elif isinstance(error, NoLanguagesSpecifiedError):
            suggestion = "Pass at least one --language, or 'all'."

        elif isinstance(error, InvalidSortModeError):
            if error.sort_value is not None:
                details["sort_value"] = error.sort_value
            suggestion = "Use --sort abc, --sort type, or leave it out."

        elif isinstance(error, NoMatchError):
            details["languages"] = error.languages
            suggestion = "Check the language tokens, or run from the project root."

        elif isinstance(error, DirectoryNotFoundError):
            if error.path:
                details["path"] = error.path
            suggestion = "Run the command from an existing directory."

        elif isinstance(error, (AccessDeniedError, GenericIOError)):
            if error.path:
                details["path"] = error.path
            suggestion = "Check file permissions and available disk space."

        elif isinstance(error, ResponseFileError):
            if error.path:
                details["path"] = error.path
            suggestion = "Provide a full path including a file name with .rsp extension."

        return cls(
            error_type=error_type,
            message=message,
            details=details,
            suggestion=suggestion,
        )

    def format_line(self) -> str:
        """One-line message shown to the user."""
        return f"Error: {self.message}"
