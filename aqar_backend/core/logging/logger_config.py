"""
Central logging configuration for the Aqar backend.
"""

import logging

from ...config import Settings
from .file_logger import FileLogger, configure_external_loggers, setup_file_logging
from .middleware import RequestIdFilter
from .structured_logger import setup_structured_logging


class LoggingConfig:
    """Central logging configuration manager."""

    def __init__(self):
        self.file_logger: FileLogger | None = None
        self.request_filter: RequestIdFilter | None = None
        self._is_configured = False

    def setup(self, settings: Settings) -> logging.Logger:
        """
        Configure logging once per process.

        File logging goes through a background queue; otherwise records are
        written straight to stdout.
        """
        if self._is_configured:
            return get_logger()

        self.request_filter = RequestIdFilter()
        use_json_format = settings.log_format.lower() == "json"

        if settings.log_to_file:
            self.file_logger = setup_file_logging(
                log_file_path=settings.log_file_path,
                log_level=settings.log_level,
                use_json_format=use_json_format,
                max_bytes=settings.log_max_bytes,
                backup_count=settings.log_backup_count,
            )

        if self.file_logger:
            queue_handler = self.file_logger.get_queue_handler()
            queue_handler.addFilter(self.request_filter)
            configure_external_loggers(
                queue_handler, getattr(logging, settings.log_level.upper())
            )
        else:
            logger = setup_structured_logging(settings.log_level, use_json_format)
            for handler in logger.handlers:
                handler.addFilter(self.request_filter)

        self._is_configured = True
        return get_logger()

    def shutdown(self) -> None:
        """Shutdown logging gracefully."""
        if self.file_logger:
            self.file_logger.stop()
            self.file_logger = None
        self._is_configured = False


_logging_config = LoggingConfig()


def setup_logging(settings: Settings) -> logging.Logger:
    """Set up logging from application settings."""
    return _logging_config.setup(settings)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Optional module name; names outside the package are prefixed

    Returns:
        Logger instance
    """
    if not name:
        return logging.getLogger("aqar_backend")
    if name.startswith("aqar_backend"):
        return logging.getLogger(name)
    return logging.getLogger(f"aqar_backend.{name}")


def shutdown_logging() -> None:
    """Shutdown logging gracefully."""
    _logging_config.shutdown()
