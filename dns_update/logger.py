#!/usr/bin/env python3
"""
Logger Module

Console logging with ANSI colors and level symbols, stdout/stderr split,
a SUCCESS level for completed record changes and optional systemd journal
integration.

License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

import os
import sys
import logging
import threading
from typing import Optional, Dict, Any

from . import __syslog_identifier__

################################################################################
# ANSI COLORS & SYMBOLS
################################################################################

class Colors:
    """ANSI color codes for terminal output."""
    RED = '\033[0;31m'
    GREEN = '\033[0;32m'
    YELLOW = '\033[1;33m'
    BLUE = '\033[0;34m'
    BOLD_RED = '\033[1;31m'
    NC = '\033[0m'
    RESET = '\033[0m'


LOG_COLORS = {
    'DEBUG': Colors.BLUE,
    'INFO': Colors.NC,
    'SUCCESS': Colors.GREEN,
    'WARNING': Colors.YELLOW,
    'ERROR': Colors.RED,
    'CRITICAL': Colors.BOLD_RED,
    'RESET': Colors.RESET
}

LOG_SYMBOLS = {
    'DEBUG': 'd',
    'INFO': 'ℹ',
    'SUCCESS': '✓',
    'WARNING': '!',
    'ERROR': '✗',
    'CRITICAL': '✗',
    'ARROW': '>'
}

# Between INFO (20) and WARNING (30)
SUCCESS_LEVEL = 25
logging.addLevelName(SUCCESS_LEVEL, 'SUCCESS')

################################################################################
# FORMATTER & FILTER CLASSES
################################################################################

class ColoredFormatter(logging.Formatter):
    """Formatter prefixing each message with a level symbol, optionally colored."""

    COLORS = LOG_COLORS
    SYMBOLS = LOG_SYMBOLS

    def __init__(self, use_colors: bool = True, include_timestamp: bool = False) -> None:
        self.use_colors = use_colors
        format_string = '%(asctime)s - %(message)s' if include_timestamp else '%(message)s'
        super().__init__(format_string, datefmt='%H:%M:%S')

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors and symbols."""
        level_name = record.levelname
        symbol = self.SYMBOLS.get(level_name, '')
        message = record.getMessage()
        if symbol:
            message = f"{symbol} {message}"
        if self.use_colors:
            message = f"{self.COLORS.get(level_name, '')}{message}{self.COLORS['RESET']}"

        # Format a copy so other handlers still see the original message
        record = logging.makeLogRecord(record.__dict__)
        record.msg = message
        record.args = None
        return super().format(record)


class MaxLevelFilter(logging.Filter):
    """Pass only records strictly below the given level."""

    def __init__(self, max_level: int) -> None:
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.max_level

################################################################################
# LOGGER MANAGER
################################################################################

class LoggerManager:
    """Logger factory with console and systemd journal handlers."""

    _loggers: Dict[str, logging.Logger] = {}
    _lock = threading.Lock()

    @classmethod
    def get_logger(cls, name: str, **kwargs: Any) -> logging.Logger:
        """Get or create logger instance (thread-safe). Accepts level and use_colors,
        which are re-applied when the logger already exists."""
        with cls._lock:
            if name not in cls._loggers:
                cls._loggers[name] = cls._create_logger(name, **kwargs)
            else:
                cls._reconfigure(cls._loggers[name], **kwargs)
            return cls._loggers[name]

    @classmethod
    def _reconfigure(cls, logger: logging.Logger, **kwargs: Any) -> None:
        if kwargs.get('level') is not None:
            logger.setLevel(kwargs['level'])
        if kwargs.get('use_colors') is not None:
            for handler in logger.handlers:
                if isinstance(handler.formatter, ColoredFormatter):
                    handler.formatter.use_colors = kwargs['use_colors']

    @classmethod
    def _create_logger(cls, name: str, **kwargs: Any) -> logging.Logger:
        """Create new logger. Level from kwargs, else DEBUG=1 env var, else INFO."""
        log_level: Optional[int] = kwargs.get('level')
        use_colors = kwargs.get('use_colors')
        if use_colors is None:
            use_colors = sys.stdout.isatty()

        if log_level is None:
            log_level = logging.DEBUG if os.getenv('DEBUG', '0') == '1' else logging.INFO

        logger = logging.getLogger(name)
        logger.setLevel(log_level)
        logger.propagate = False

        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        cls._setup_console_handlers(logger, use_colors)
        cls._setup_journal_handler(logger)

        return logger

    @classmethod
    def _setup_console_handlers(cls, logger: logging.Logger, use_colors: bool) -> None:
        """Progress goes to stdout, warnings and errors to stderr."""
        formatter = ColoredFormatter(use_colors=use_colors)

        stdout_handler = logging.StreamHandler(sys.stdout)
        stdout_handler.setLevel(logging.DEBUG)
        stdout_handler.addFilter(MaxLevelFilter(logging.WARNING))
        stdout_handler.setFormatter(formatter)
        logger.addHandler(stdout_handler)

        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(logging.WARNING)
        stderr_handler.setFormatter(formatter)
        logger.addHandler(stderr_handler)

    @classmethod
    def _setup_journal_handler(cls, logger: logging.Logger) -> None:
        """Attach systemd journal handler when the systemd binding is installed."""
        try:
            from systemd import journal
        except ImportError:
            return

        identifier = os.environ.get('SYSLOG_IDENTIFIER') or __syslog_identifier__
        try:
            journal_handler = journal.JournalHandler(SYSLOG_IDENTIFIER=identifier)
        except OSError as e:
            print(f"Warning: Could not setup journal logging: {e}", file=sys.stderr)
            return
        journal_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        logger.addHandler(journal_handler)


def success(self: logging.Logger, message: str, *args: Any, **kwargs: Any) -> None:
    """Log a success message."""
    if self.isEnabledFor(SUCCESS_LEVEL):
        self._log(SUCCESS_LEVEL, message, args, **kwargs)

# Add success method to Logger class
logging.Logger.success = success
