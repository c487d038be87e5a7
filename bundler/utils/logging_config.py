"""
Logging Configuration and Progress Reporting

This module provides configurable logging levels and progress indicators
for the code bundler:
- Configurable logging levels (debug, info, warning, error)
- Progress indicator while files are written to the bundle
- Debug logging of the effective settings
- Optional log file output with rotation
"""

import logging
import logging.handlers
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Optional


class ProgressIndicator:
    """
    Simple progress indicator for long-running operations.

    Provides visual feedback while a bundle is being assembled.
    """

    def __init__(self, description: str, total_steps: Optional[int] = None):
        self.description = description
        self.total_steps = total_steps
        self.current_step = 0
        self.start_time = time.time()
        self._last_update = 0

    def update(self, step: Optional[int] = None, message: Optional[str] = None):
        """Update progress indicator."""
        if step is not None:
            self.current_step = step
        else:
            self.current_step += 1

        # Redraw at most twice a second
        current_time = time.time()
        if current_time - self._last_update < 0.5:
            return

        self._last_update = current_time
        elapsed = current_time - self.start_time

        if self.total_steps:
            percentage = (self.current_step / self.total_steps) * 100
            progress_bar = self._create_progress_bar(percentage)
            status = f"{progress_bar} {percentage:.1f}% ({self.current_step}/{self.total_steps})"
        else:
            spinner = self._get_spinner_char()
            status = f"{spinner} Step {self.current_step}"

        display_message = message or self.description
        print(f"\r{display_message} {status} [{elapsed:.1f}s]", end="", file=sys.stderr, flush=True)

    def finish(self, message: Optional[str] = None, ok: bool = True):
        """Complete the progress indicator.

        A failed run prints no summary of its own; the caller reports the
        error. Only a partly drawn progress line is terminated.
        """
        if not ok:
            if self._last_update:
                print(file=sys.stderr)
            return
        elapsed = time.time() - self.start_time
        final_message = message or f"{self.description} completed"
        print(f"\r{final_message} [OK] [{elapsed:.1f}s]", file=sys.stderr)

    def _create_progress_bar(self, percentage: float, width: int = 20) -> str:
        """Create a text-based progress bar."""
        filled = int(width * percentage / 100)
        bar = "#" * filled + "-" * (width - filled)
        return f"[{bar}]"

    def _get_spinner_char(self) -> str:
        """Get rotating spinner character."""
        chars = "|/-\\"
        return chars[self.current_step % len(chars)]


class LoggingConfig:
    """
    Centralized logging configuration for the code bundler.

    Provides configurable logging levels, optional file output,
    and integration with progress reporting.
    """

    def __init__(self):
        self._configured = False
        self._log_file_handler: Optional[logging.Handler] = None
        self._console_handler: Optional[logging.Handler] = None

    def configure_logging(
        self,
        level: str = "warning",
        log_file: Optional[str] = None,
        include_timestamps: bool = True,
        include_module_names: bool = True,
        max_log_file_size: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
        force: bool = False,
    ) -> None:
        """
        Configure logging for the application.

        Args:
            level: Logging level (debug, info, warning, error)
            log_file: Optional log file path
            include_timestamps: Whether to include timestamps in log messages
            include_module_names: Whether to include module names
            max_log_file_size: Maximum log file size before rotation
            backup_count: Number of backup log files to keep
            force: Reconfigure even if logging was already configured
        """
        if self._configured and not force:
            return

        log_level = self._get_log_level(level)

        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)

        # Only remove handlers we installed ourselves
        for handler in (self._console_handler, self._log_file_handler):
            if handler is not None:
                root_logger.removeHandler(handler)
                handler.close()
        self._log_file_handler = None

        console_formatter = self._create_console_formatter(
            include_timestamps, include_module_names, level.lower() == "debug"
        )

        self._console_handler = logging.StreamHandler(sys.stderr)
        self._console_handler.setLevel(log_level)
        self._console_handler.setFormatter(console_formatter)
        root_logger.addHandler(self._console_handler)

        if log_file:
            self._configure_file_logging(
                log_file, self._create_file_formatter(), log_level,
                max_log_file_size, backup_count
            )

        self._configured = True

        logger = logging.getLogger(__name__)
        logger.debug(f"Logging configured: level={level}, file={log_file}")

    def _get_log_level(self, level_str: str) -> int:
        """Convert string log level to logging constant."""
        level_map = {
            "debug": logging.DEBUG,
            "info": logging.INFO,
            "warning": logging.WARNING,
            "error": logging.ERROR
        }
        return level_map.get(level_str.lower(), logging.WARNING)

    def _create_console_formatter(
        self,
        include_timestamps: bool,
        include_module_names: bool,
        debug_mode: bool
    ) -> logging.Formatter:
        """Create formatter for console output."""
        parts = []

        if include_timestamps:
            parts.append("%(asctime)s")

        if debug_mode and include_module_names:
            parts.append("%(name)s")

        parts.extend(["%(levelname)s", "%(message)s"])

        return logging.Formatter(
            " - ".join(parts),
            datefmt="%H:%M:%S" if not debug_mode else "%Y-%m-%d %H:%M:%S"
        )

    def _create_file_formatter(self) -> logging.Formatter:
        """Create formatter for file output."""
        return logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    def _configure_file_logging(
        self,
        log_file: str,
        formatter: logging.Formatter,
        log_level: int,
        max_size: int,
        backup_count: int
    ) -> None:
        """Configure file logging with rotation."""
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)

            self._log_file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=max_size,
                backupCount=backup_count,
                encoding='utf-8'
            )
            self._log_file_handler.setLevel(log_level)
            self._log_file_handler.setFormatter(formatter)
            logging.getLogger().addHandler(self._log_file_handler)

        except OSError as e:
            # Console logging keeps working without the file
            logger = logging.getLogger(__name__)
            logger.warning(f"Failed to setup log file {log_file}: {e}")

    @contextmanager
    def progress_context(self, description: str, total_steps: Optional[int] = None):
        """
        Context manager for progress indication.

        Usage:
            with logging_config.progress_context("Bundling files") as progress:
                bundler.run(config, progress=progress)
        """
        progress = ProgressIndicator(description, total_steps)
        try:
            yield progress
        except Exception:
            progress.finish(ok=False)
            raise
        else:
            progress.finish()

    def log_configuration_details(self, config: Dict[str, Any]) -> None:
        """Log configuration details at debug level."""
        logger = logging.getLogger(__name__)

        if not logger.isEnabledFor(logging.DEBUG):
            return

        logger.debug("=== Configuration Details ===")
        for key, value in config.items():
            logger.debug(f"  {key}: {value}")
        logger.debug("=== End Configuration ===")

    def log_operation_timing(self, operation: str, duration: float) -> None:
        """Log operation timing information."""
        logger = logging.getLogger(__name__)

        if duration < 1.0:
            logger.debug(f"{operation} completed in {duration*1000:.0f}ms")
        else:
            logger.info(f"{operation} completed in {duration:.1f}s")


# Global logging configuration instance
logging_config = LoggingConfig()


def configure_logging(level: str = "warning", log_file: Optional[str] = None) -> None:
    """
    Convenience function to configure logging.

    Args:
        level: Logging level (debug, info, warning, error)
        log_file: Optional log file path
    """
    logging_config.configure_logging(level=level, log_file=log_file)


def get_progress_context(description: str, total_steps: Optional[int] = None):
    """
    Convenience function to get progress context.

    Args:
        description: Description of the operation
        total_steps: Total number of steps (None for indeterminate)

    Returns:
        Progress context manager
    """
    return logging_config.progress_context(description, total_steps)
