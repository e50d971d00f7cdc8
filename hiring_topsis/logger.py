# -*- coding: utf-8 -*-
"""
Logging system for the candidate ranking engine.

Features:
- Colored console output with level-based styling
- Clean file logging (no ANSI codes) with rotation
- Structured JSON logging for machine parsing
- Hierarchical module loggers under ``hiring_topsis``
- Context tracking (position, analysis phase)
- Phase timing and ranking tables for the pipeline
"""

import logging
import logging.handlers
import json
import sys
import os
import re
import time
import threading
from pathlib import Path
from datetime import datetime
from typing import Optional, Dict, Any, List, Union, Callable, Sequence
from contextlib import contextmanager
from functools import wraps
from enum import Enum


# =============================================================================
# Constants
# =============================================================================

LOG_NAME = "hiring_topsis"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_DATE_FORMAT = "%H:%M:%S"
MAX_LOG_SIZE = 5 * 1024 * 1024  # 5 MB
BACKUP_COUNT = 3


class LogLevel(Enum):
    """Log level enumeration."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


# =============================================================================
# ANSI Colors
# =============================================================================

class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    BOLD = "\033[1m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    BRIGHT_RED = "\033[91m"

    ANSI_PATTERN = re.compile(r'\033\[[0-9;]*m')

    @classmethod
    def strip(cls, text: str) -> str:
        """Remove all ANSI codes from text."""
        return cls.ANSI_PATTERN.sub('', text)

    @classmethod
    def supports_color(cls) -> bool:
        """Check if the attached terminal supports colors."""
        if os.getenv("NO_COLOR"):
            return False
        if os.getenv("FORCE_COLOR"):
            return True
        if not hasattr(sys.stdout, "isatty") or not sys.stdout.isatty():
            return False
        if sys.platform == "win32":
            return os.getenv("TERM") == "xterm" or bool(os.getenv("WT_SESSION"))
        return True


# =============================================================================
# Formatters
# =============================================================================

class ColoredFormatter(logging.Formatter):
    """Console formatter with level-based ANSI coloring."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.CYAN,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BRIGHT_RED + Colors.BOLD,
    }

    def __init__(
        self,
        fmt: Optional[str] = None,
        datefmt: Optional[str] = None,
        use_colors: bool = True
    ):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors and Colors.supports_color()

    def format(self, record: logging.LogRecord) -> str:
        # Work on a copy so other handlers see the plain record
        record = logging.makeLogRecord(record.__dict__)

        if self.use_colors:
            color = self.LEVEL_COLORS.get(record.levelno, "")
            record.levelname = f"{color}{Colors.BOLD}{record.levelname:8}{Colors.RESET}"
            record.msg = f"{color}{record.msg}{Colors.RESET}"

        return super().format(record)


class CleanFormatter(logging.Formatter):
    """File formatter that strips ANSI codes."""

    def format(self, record: logging.LogRecord) -> str:
        record = logging.makeLogRecord(record.__dict__)
        if isinstance(record.msg, str):
            record.msg = Colors.strip(record.msg)
        return super().format(record)


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Context values set through ``log_context`` (for example ``position``)
    appear as top-level keys.
    """

    _DEFAULT_KEYS = frozenset({
        'name', 'msg', 'args', 'created', 'filename', 'funcName',
        'levelname', 'levelno', 'lineno', 'module', 'msecs',
        'pathname', 'process', 'processName', 'relativeCreated',
        'stack_info', 'exc_info', 'exc_text', 'thread', 'threadName',
        'taskName', 'message'
    })

    def __init__(self, include_extra: bool = True):
        super().__init__()
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": Colors.strip(record.getMessage()),
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        if self.include_extra:
            for key, value in record.__dict__.items():
                if key in self._DEFAULT_KEYS:
                    continue
                try:
                    json.dumps(value)
                    log_data[key] = value
                except (TypeError, ValueError):
                    log_data[key] = str(value)

        return json.dumps(log_data, ensure_ascii=False, default=str)


# =============================================================================
# Handlers
# =============================================================================

class SafeRotatingFileHandler(logging.handlers.RotatingFileHandler):
    """Rotating file handler serialized with its own lock."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._emit_lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        with self._emit_lock:
            try:
                super().emit(record)
            except Exception:
                self.handleError(record)


# =============================================================================
# Context
# =============================================================================

class LogContext:
    """Thread-local key/value context attached to every record."""
    _local = threading.local()

    @classmethod
    def get(cls) -> Dict[str, Any]:
        if not hasattr(cls._local, 'context'):
            cls._local.context = {}
        return cls._local.context

    @classmethod
    def set(cls, key: str, value: Any) -> None:
        cls.get()[key] = value

    @classmethod
    def remove(cls, key: str) -> None:
        cls.get().pop(key, None)

    @classmethod
    def clear(cls) -> None:
        cls._local.context = {}


class ContextFilter(logging.Filter):
    """Copies the current ``LogContext`` onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in LogContext.get().items():
            setattr(record, key, value)
        return True


# =============================================================================
# Phase Tracking
# =============================================================================

class ProgressLogger:
    """
    Context manager that logs start, completion and duration of a phase.

    Example:
        with ProgressLogger(logger, "Ranking candidates"):
            result = rank(candidates, attributes)
    """

    def __init__(self, logger: logging.Logger, operation: str):
        self.logger = logger
        self.operation = operation
        self.start_time = 0.0
        self.elapsed = 0.0
        self.status = "pending"

    def __enter__(self) -> 'ProgressLogger':
        self.start_time = time.time()
        self.status = "running"
        LogContext.set("phase", self.operation)
        self.logger.info(f"▶ Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.elapsed = time.time() - self.start_time
        LogContext.remove("phase")

        if exc_type is None:
            self.status = "completed"
            self.logger.info(f"✓ Completed: {self.operation} ({self.elapsed:.3f}s)")
        else:
            self.status = "failed"
            self.logger.error(
                f"✗ Failed: {self.operation} ({self.elapsed:.3f}s) - "
                f"{exc_type.__name__}: {exc_val}"
            )
        return False


# =============================================================================
# Logger Factory
# =============================================================================

class LoggerFactory:
    """Centralized logger configuration and lookup."""

    _loggers: Dict[str, logging.Logger] = {}
    _configured: bool = False
    _root_logger: Optional[logging.Logger] = None

    @classmethod
    def setup(
        cls,
        name: str = LOG_NAME,
        level: Union[int, str, LogLevel] = logging.INFO,
        log_file: Optional[Path] = None,
        json_file: Optional[Path] = None,
        console: bool = True,
        use_colors: bool = True,
        max_bytes: int = MAX_LOG_SIZE,
        backup_count: int = BACKUP_COUNT,
        console_level: Union[int, str, LogLevel, None] = None,
    ) -> logging.Logger:
        """
        Configure the package logger.

        Parameters
        ----------
        name : str
            Logger name
        level : int, str, or LogLevel
            Logger level
        log_file : Path, optional
            Plain text log file, always written at DEBUG level
        json_file : Path, optional
            JSON lines log file
        console : bool
            Enable console output
        use_colors : bool
            Colored console output when the terminal supports it
        console_level : int, str, or LogLevel, optional
            Console level when it differs from ``level``

        Returns
        -------
        logging.Logger
        """
        level = _coerce_level(level)
        console_level = _coerce_level(console_level) if console_level is not None else level

        logger = logging.getLogger(name)
        logger.setLevel(level)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.filters.clear()
        logger.propagate = False
        logger.addFilter(ContextFilter())

        if console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(console_level)
            if use_colors:
                console_fmt = ColoredFormatter(
                    fmt='%(asctime)s │ %(levelname)s │ %(message)s',
                    datefmt=CONSOLE_DATE_FORMAT,
                    use_colors=use_colors,
                )
            else:
                console_fmt = CleanFormatter(
                    fmt='%(asctime)s | %(levelname)-8s | %(message)s',
                    datefmt=CONSOLE_DATE_FORMAT
                )
            console_handler.setFormatter(console_fmt)
            logger.addHandler(console_handler)

        if log_file:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = SafeRotatingFileHandler(
                log_file, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8'
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(CleanFormatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s',
                datefmt=DEFAULT_DATE_FORMAT
            ))
            logger.addHandler(file_handler)

        if json_file:
            json_file = Path(json_file)
            json_file.parent.mkdir(parents=True, exist_ok=True)
            json_handler = SafeRotatingFileHandler(
                json_file, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8'
            )
            json_handler.setLevel(level)
            json_handler.setFormatter(JSONFormatter())
            logger.addHandler(json_handler)

        cls._root_logger = logger
        cls._loggers[name] = logger
        cls._configured = True
        return logger

    @classmethod
    def get_logger(cls, name: str = LOG_NAME) -> logging.Logger:
        """
        Get a logger, creating it as a child of the configured root.

        Before ``setup`` has run, a child logger of ``hiring_topsis`` is
        returned without attaching handlers, so importing the engine never
        prints anything.
        """
        if name in cls._loggers:
            return cls._loggers[name]

        root_name = cls._root_logger.name if cls._root_logger else LOG_NAME
        if name == root_name or name.startswith(root_name + "."):
            logger = logging.getLogger(name)
        else:
            logger = logging.getLogger(f"{root_name}.{name}")

        cls._loggers[name] = logger
        return logger

    @classmethod
    def get_module_logger(cls, module_name: str) -> logging.Logger:
        """Get a logger for a package module, e.g. ``'mcdm.topsis'``."""
        root_name = cls._root_logger.name if cls._root_logger else LOG_NAME
        return cls.get_logger(f"{root_name}.{module_name}")

    @classmethod
    def reset(cls) -> None:
        """Forget cached loggers (used by tests)."""
        cls._loggers = {}
        cls._configured = False
        cls._root_logger = None


def _coerce_level(level: Union[int, str, LogLevel]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    if isinstance(level, LogLevel):
        return level.value
    return level


# =============================================================================
# Convenience Functions
# =============================================================================

def setup_logger(
    name: str = LOG_NAME,
    level: Union[int, str] = logging.INFO,
    console: bool = True,
    debug_file: Optional[Path] = None,
    json_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Setup the package logger (convenience function).

    Console output is plain text at ``level``; the optional debug file
    receives everything at DEBUG level.
    """
    return LoggerFactory.setup(
        name=name,
        level=logging.DEBUG,
        log_file=debug_file,
        json_file=json_file,
        console=console,
        use_colors=False,
        console_level=level,
    )


def get_logger(name: str = LOG_NAME) -> logging.Logger:
    """Get existing logger or create a child of the package logger."""
    return LoggerFactory.get_logger(name)


def get_module_logger(module_name: str) -> logging.Logger:
    """Get a logger for a specific module."""
    return LoggerFactory.get_module_logger(module_name)


# =============================================================================
# Decorators
# =============================================================================

def log_execution(
    logger: Optional[logging.Logger] = None,
    level: int = logging.DEBUG,
    show_args: bool = False,
) -> Callable:
    """Decorator to log entry, completion time and failures of a function."""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            log = logger or get_logger()
            func_name = func.__qualname__

            if show_args:
                args_str = ", ".join(
                    [repr(a)[:50] for a in args] +
                    [f"{k}={repr(v)[:50]}" for k, v in kwargs.items()]
                )
                log.log(level, f"Calling {func_name}({args_str})")
            else:
                log.log(level, f"Calling {func_name}")

            start = time.time()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                log.error(f"{func_name} failed after {time.time() - start:.3f}s: {e}")
                raise
            log.log(level, f"{func_name} completed ({time.time() - start:.3f}s)")
            return result

        return wrapper
    return decorator


def log_exceptions(
    logger: Optional[logging.Logger] = None,
    level: int = logging.ERROR,
) -> Callable:
    """Decorator that logs an exception with traceback and re-raises it."""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                (logger or get_logger()).log(
                    level, f"Exception in {func.__qualname__}: {e}", exc_info=True
                )
                raise

        return wrapper
    return decorator


# =============================================================================
# Context Managers
# =============================================================================

@contextmanager
def log_context(**kwargs):
    """
    Add temporary context to every record logged inside the block.

    Example:
        with log_context(position="Senior Developer"):
            logger.info("Ranking 12 candidates")
    """
    for key, value in kwargs.items():
        LogContext.set(key, value)
    try:
        yield
    finally:
        for key in kwargs:
            LogContext.remove(key)


@contextmanager
def timed_operation(logger: logging.Logger, operation: str, level: int = logging.INFO):
    """Log the start and duration of an operation."""
    start = time.time()
    logger.log(level, f"Starting: {operation}")
    try:
        yield
    finally:
        logger.log(level, f"Finished: {operation} ({time.time() - start:.3f}s)")


# =============================================================================
# Pipeline Output
# =============================================================================

class PipelineLogger:
    """Structured banners, metrics and ranking tables for analysis runs."""

    STATUS_ICONS = {
        "info": "•",
        "done": "✓",
        "skip": "⊘",
        "warn": "⚡",
        "error": "✗",
    }

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def banner(self, title: str, char: str = "═", width: int = 60) -> None:
        self.logger.info(char * width)
        self.logger.info(title.center(width))
        self.logger.info(char * width)

    def section(self, title: str) -> None:
        self.logger.info('─' * 40)
        self.logger.info(f"  {title}")
        self.logger.info('─' * 40)

    def metric(self, name: str, value: Any, unit: str = "") -> None:
        value_str = f"{value:.4f}" if isinstance(value, float) else str(value)
        self.logger.info(f"  • {name}: {value_str} {unit}".rstrip())

    def metrics(self, metrics_dict: Dict[str, Any]) -> None:
        for name, value in metrics_dict.items():
            self.metric(name, value)

    def ranking(self, rankings: Sequence[Any], title: str = "Rankings", top_n: int = 5) -> None:
        """Log ``(rank, name, score)`` rows or ``RankingResult`` objects."""
        self.logger.info(f"  {title} (Top {top_n}):")
        for row in list(rankings)[:top_n]:
            if hasattr(row, 'closeness_score'):
                rank, name, score = row.rank, row.candidate_name, row.closeness_score
            else:
                rank, name, score = row
            self.logger.info(f"    {rank:>3}. {name}: {score:.4f}")

    def step(self, message: str, status: str = "info") -> None:
        icon = self.STATUS_ICONS.get(status, "•")
        if status == "warn":
            self.logger.warning(f"  {icon} {message}")
        elif status == "error":
            self.logger.error(f"  {icon} {message}")
        else:
            self.logger.info(f"  {icon} {message}")


__all__ = [
    'setup_logger',
    'get_logger',
    'get_module_logger',
    'LoggerFactory',
    'ProgressLogger',
    'PipelineLogger',
    'LogContext',
    'ContextFilter',
    'LogLevel',
    'Colors',
    'ColoredFormatter',
    'CleanFormatter',
    'JSONFormatter',
    'SafeRotatingFileHandler',
    'log_execution',
    'log_exceptions',
    'log_context',
    'timed_operation',
    'LOG_NAME',
]
