"""Process-wide logging functions that record the caller's location."""

from __future__ import annotations

import inspect
import threading
from typing import Any, Optional, Tuple

from xcl.log_format import LogLevel
from xcl.log_manager import LogManageConfig
from xcl.logger import LogConfig, Logger

_default: Optional[Logger] = None
_default_lock = threading.Lock()


def default_logger() -> Logger:
    """The shared logger, created on first use."""
    global _default
    with _default_lock:
        if _default is None:
            _default = Logger()
        return _default


def configure(config: LogConfig, manage_config: Optional[LogManageConfig] = None) -> None:
    default_logger().configure(config, manage_config)


def _caller(depth: int) -> Tuple[str, int, str]:
    frame = inspect.currentframe()
    for _ in range(depth):
        if frame is None:
            break
        frame = frame.f_back
    if frame is None:
        return "", 0, ""
    try:
        return frame.f_code.co_filename, frame.f_lineno, frame.f_code.co_name
    finally:
        del frame


def _message(fmt: str, args: Tuple[Any, ...]) -> str:
    return fmt % args if args else fmt


def log(level: int, fmt: str, *args: Any) -> None:
    """Log ``fmt % args`` through the shared logger."""
    file, line, func = _caller(2)
    default_logger().write(level, file, line, func, _message(fmt, args))


def print_log(level: int, fmt: str, *args: Any) -> None:
    """Print ``fmt % args`` to the console only."""
    file, line, func = _caller(2)
    default_logger().echo(level, file, line, func, _message(fmt, args))


def log_assert(pred: Any, fmt: str = "assertion failed", *args: Any) -> None:
    """Log an error and raise AssertionError when ``pred`` is false."""
    if not pred:
        file, line, func = _caller(2)
        message = _message(fmt, args)
        default_logger().write(LogLevel.ERROR, file, line, func, message)
        raise AssertionError(message)


def print_assert(pred: Any, fmt: str = "assertion failed", *args: Any) -> None:
    """Print an error and raise AssertionError when ``pred`` is false."""
    if not pred:
        file, line, func = _caller(2)
        message = _message(fmt, args)
        default_logger().echo(LogLevel.ERROR, file, line, func, message)
        raise AssertionError(message)