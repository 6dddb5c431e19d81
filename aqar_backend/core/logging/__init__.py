"""Logging infrastructure for the Aqar backend."""

from .file_logger import FileLogger, configure_external_loggers, setup_file_logging
from .logger_config import get_logger, setup_logging, shutdown_logging
from .middleware import (
    RequestIdFilter,
    RequestIdMiddleware,
    get_request_id,
    set_request_id,
)

__all__ = [
    "FileLogger",
    "setup_file_logging",
    "configure_external_loggers",
    "get_logger",
    "setup_logging",
    "shutdown_logging",
    "RequestIdMiddleware",
    "RequestIdFilter",
    "get_request_id",
    "set_request_id",
]
