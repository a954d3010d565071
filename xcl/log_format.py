"""Expansion of ``${name}`` variables in log line and log file name formats."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Callable, Dict, List, Optional


class LogLevel(IntEnum):
    """Severity of a log record."""

    VERBOSE = 0
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4
    FATAL = 5

    @property
    def label(self) -> str:
        """The lower-case name used in formatted output."""
        return _LEVEL_NAMES[self]


_LEVEL_NAMES = {
    LogLevel.VERBOSE: "verbose",
    LogLevel.DEBUG: "debug",
    LogLevel.INFO: "info",
    LogLevel.WARNING: "warning",
    LogLevel.ERROR: "error",
    LogLevel.FATAL: "fatal",
}


@dataclass
class LogContext:
    """Everything a format variable may refer to."""

    level: LogLevel
    file: str = ""
    line: int = 0
    func: str = ""
    tag: str = "null"
    message: str = ""
    time: datetime = field(default_factory=datetime.now)

    @property
    def ms(self) -> int:
        return self.time.microsecond // 1000


def _filename(ctx: LogContext) -> str:
    sep = ctx.file.rfind("/")
    if sep < 0 and os.name == "nt":
        sep = ctx.file.rfind("\\")
    return ctx.file[sep + 1:] if sep >= 0 else "null"


def _datetime(ctx: LogContext) -> str:
    t = ctx.time
    return (
        f"{t.year:04d}-{t.month:02d}-{t.day:02d} "
        f"{t.hour:02d}:{t.minute:02d}:{t.second:02d}.{ctx.ms:03d}"
    )


_VARIABLES: Dict[str, Callable[[LogContext], str]] = {
    "path": lambda ctx: ctx.file,
    "level": lambda ctx: LogLevel(ctx.level).label,
    "function": lambda ctx: ctx.func,
    "filename": _filename,
    "tag": lambda ctx: ctx.tag,
    "line": lambda ctx: str(ctx.line),
    "year": lambda ctx: f"{ctx.time.year:04d}",
    "month": lambda ctx: f"{ctx.time.month:02d}",
    "day": lambda ctx: f"{ctx.time.day:02d}",
    "hour": lambda ctx: f"{ctx.time.hour:02d}",
    "minute": lambda ctx: f"{ctx.time.minute:02d}",
    "second": lambda ctx: f"{ctx.time.second:02d}",
    "datetime": _datetime,
    "message": lambda ctx: ctx.message,
}


def format_log(fmt: str, ctx: LogContext, limit: Optional[int] = None) -> str:
    """Expand the variables in ``fmt``; at most ``limit`` characters are kept.

    Unknown variables and an unclosed ``${`` are copied unchanged.
    """
    parts: List[str] = []
    total = 0
    pos = 0
    size = len(fmt)
    while pos < size and (limit is None or total < limit):
        if not fmt.startswith("${", pos):
            nxt = fmt.find("${", pos)
            end = size if nxt < 0 else nxt
            piece = fmt[pos:end]
            pos = end
        else:
            close = fmt.find("}", pos + 2)
            if close < 0:
                piece = fmt[pos:]
                pos = size
            else:
                handler = _VARIABLES.get(fmt[pos + 2:close])
                piece = handler(ctx) if handler else fmt[pos:close + 1]
                pos = close + 1
        parts.append(piece)
        total += len(piece)
    text = "".join(parts)
    return text if limit is None else text[:max(limit, 0)]