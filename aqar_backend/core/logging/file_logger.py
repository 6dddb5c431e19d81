"""
Queue-based file logging with rotation.
Log records are handed to a background listener so request handlers never
block on disk writes.
"""

import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler

from .structured_logger import LIBRARY_LOG_LEVELS, build_formatter


class FileLogger:
    """Queue-based file logger with rotation capabilities."""

    def __init__(
        self,
        log_file_path: str = "logs/app.log",
        max_bytes: int = 50 * 1024 * 1024,  # 50MB
        backup_count: int = 5,
        log_level: str = "INFO",
        use_json_format: bool = True,
    ):
        self.log_file_path = log_file_path
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self.log_level = getattr(logging, log_level.upper())
        self.use_json_format = use_json_format
        self._log_queue: queue.Queue = queue.Queue()
        self._listener: QueueListener | None = None
        self._queue_handler: QueueHandler | None = None

        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

    def build_handlers(self) -> list[logging.Handler]:
        """Console handler plus a rotating file handler."""
        file_handler = RotatingFileHandler(
            self.log_file_path, maxBytes=self.max_bytes, backupCount=self.backup_count
        )
        console_handler = logging.StreamHandler(sys.stdout)

        for handler in (console_handler, file_handler):
            handler.setLevel(self.log_level)
            handler.setFormatter(build_formatter(self.use_json_format))

        return [console_handler, file_handler]

    def start(self) -> None:
        self._listener = QueueListener(
            self._log_queue, *self.build_handlers(), respect_handler_level=True
        )
        self._listener.start()

    def get_queue_handler(self) -> QueueHandler:
        """Get the queue handler for adding to loggers."""
        if self._queue_handler is None:
            self._queue_handler = QueueHandler(self._log_queue)
            self._queue_handler.setLevel(self.log_level)
        return self._queue_handler

    def stop(self) -> None:
        """Flush queued records and stop the listener."""
        if self._listener:
            self._listener.stop()
            self._listener = None


def setup_file_logging(
    log_file_path: str = "logs/app.log",
    log_level: str = "INFO",
    use_json_format: bool = True,
    max_bytes: int = 50 * 1024 * 1024,
    backup_count: int = 5,
) -> FileLogger | None:
    """
    Set up file logging with queue-based writing.

    Returns:
        FileLogger instance, or None if the log file cannot be opened
    """
    try:
        file_logger = FileLogger(
            log_file_path=log_file_path,
            max_bytes=max_bytes,
            backup_count=backup_count,
            log_level=log_level,
            use_json_format=use_json_format,
        )
        file_logger.start()
        return file_logger

    except OSError as e:
        logging.error(f"Failed to setup file logging: {e}")
        return None


def _route_to_queue(logger_name: str, queue_handler: QueueHandler, level: int) -> None:
    routed = logging.getLogger(logger_name)
    routed.handlers = [queue_handler]
    routed.propagate = False
    routed.setLevel(level)


def configure_external_loggers(
    queue_handler: QueueHandler, app_level: int = logging.INFO
) -> None:
    """Send the app, library and ``warnings`` loggers through the queue."""
    _route_to_queue("aqar_backend", queue_handler, app_level)
    _route_to_queue("fastapi", queue_handler, logging.INFO)
    for logger_name, level in LIBRARY_LOG_LEVELS.items():
        _route_to_queue(logger_name, queue_handler, level)

    logging.captureWarnings(True)
    _route_to_queue("py.warnings", queue_handler, logging.WARNING)
