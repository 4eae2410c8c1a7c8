"""
Copyright (c) Microsoft Corporation.
Licensed under the MIT license.

Logging module for connection_string.
Logging is off until setup_logging() is called and costs a single level check while off.
"""

import datetime
import logging
import os
import sys
import threading
from logging.handlers import RotatingFileHandler
from typing import Optional

from connection_string.helpers import sanitize_connection_string


# Output destination constants
STDOUT = 'stdout'
FILE = 'file'
BOTH = 'both'
OUTPUT_MODES = (FILE, STDOUT, BOTH)

LOGGER_NAME = 'connection_string'
LOG_DIR_NAME = 'connection_string_logs'
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'


def _default_log_file() -> str:
    """Path of a new trace file under ./connection_string_logs/"""
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    return os.path.join(
        os.getcwd(), LOG_DIR_NAME, f"connection_string_trace_{timestamp}_{os.getpid()}.log"
    )


class ConnectionStringLogger:
    """
    Singleton DEBUG logger for connection_string.

    Every message is passed through sanitize_connection_string() so that
    passwords and tokens never reach a handler.
    """

    _instance: Optional['ConnectionStringLogger'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'ConnectionStringLogger':
        """Ensure singleton pattern"""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    instance = super(ConnectionStringLogger, cls).__new__(cls)
                    instance._logger = logging.getLogger(LOGGER_NAME)
                    instance._logger.propagate = False
                    instance._reset()
                    cls._instance = instance
        return cls._instance

    def _reset(self):
        """Close all handlers and disable logging"""
        for handler in self._logger.handlers[:]:
            handler.close()
            self._logger.removeHandler(handler)
        self._logger.setLevel(logging.CRITICAL)
        self._output_mode = FILE
        self._log_file = None

    def _setLevel(self, level: int, output: str = FILE, log_file_path: Optional[str] = None):
        """
        Replace the handlers and set the level (use setup_logging() instead).

        Args:
            level: Logging level (typically DEBUG)
            output: Output mode (FILE, STDOUT, BOTH)
            log_file_path: Optional custom path for the log file

        Raises:
            ValueError: If output mode is invalid
        """
        if output not in OUTPUT_MODES:
            raise ValueError(
                f"Invalid output mode: {output}. Must be one of: {', '.join(OUTPUT_MODES)}"
            )

        self._reset()
        self._output_mode = output
        formatter = logging.Formatter(LOG_FORMAT)
        handlers = []

        if output in (FILE, BOTH):
            self._log_file = log_file_path or _default_log_file()
            log_dir = os.path.dirname(self._log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            # 10MB per file, 5 backups
            handlers.append(RotatingFileHandler(self._log_file, maxBytes=10 * 1024 * 1024, backupCount=5))

        if output in (STDOUT, BOTH):
            handlers.append(logging.StreamHandler(sys.stdout))

        for handler in handlers:
            handler.setFormatter(formatter)
            self._logger.addHandler(handler)
        self._logger.setLevel(level)

    def debug(self, msg: str, *args):
        """Log a sanitized message at DEBUG level"""
        if not self._logger.isEnabledFor(logging.DEBUG):
            return
        if args:
            msg = msg % args
        # stacklevel=2 attributes the record to the caller of debug()
        self._logger.debug(sanitize_connection_string(msg), stacklevel=2)

    def isEnabledFor(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    @property
    def handlers(self) -> list:
        return self._logger.handlers

    @property
    def output(self) -> str:
        return self._output_mode

    @property
    def log_file(self) -> Optional[str]:
        """Current log file path (None if file output is disabled)"""
        return self._log_file

    @property
    def level(self) -> int:
        return self._logger.level


# Singleton logger instance
logger = ConnectionStringLogger()


def setup_logging(output: str = FILE, log_file_path: Optional[str] = None):
    """
    Enable DEBUG logging for troubleshooting.

    Args:
        output: Where to send logs: 'file' (default), 'stdout' or 'both'
        log_file_path: Optional custom path for the log file.
                       If not specified, a file is created in ./connection_string_logs/

    Returns:
        The package logger

    Examples:
        import connection_string

        connection_string.setup_logging(output='stdout')
        connection_string.setup_logging(output='both', log_file_path="/tmp/debug.log")
    """
    logger._setLevel(logging.DEBUG, output, log_file_path)
    return logger
