"""Logger that formats records and sends them to the console and a log file."""

from __future__ import annotations

import os
import sys
import threading
from dataclasses import dataclass
from typing import Optional

from xcl.log_file_writer import LogFileWriter
from xcl.log_format import LogContext, LogLevel, format_log
from xcl.log_manager import LogManageConfig, LogManager

DEFAULT_LOG_FORMAT = "${datetime} [${tag}] [${level}] ${filename}:${line} ${function} ${message}"
MAX_LOG_LINE = 4096


@dataclass
class LogConfig:
    """Logger settings; a ``write_level`` of None disables writing to files."""

    tag: str = "null"
    file_fmt: str = ""
    log_fmt: str = ""
    write_level: Optional[int] = None
    show_level: int = LogLevel.VERBOSE


def _valid(level: Optional[int]) -> bool:
    return level is not None and LogLevel.VERBOSE <= level <= LogLevel.ERROR


def _needs_manager(cfg: Optional[LogManageConfig]) -> bool:
    return cfg is not None and any(
        v >= 0 for v in (cfg.single_log_limit, cfg.total_log_limit, cfg.max_logs, cfg.log_validity)
    )


def _emit(text: str, level: int) -> None:
    stream = sys.stdout if level < LogLevel.WARNING else sys.stderr
    stream.write(text)
    stream.flush()


class Logger:
    """Prints records at or above the show level and writes those at or above
    the write level. Only levels from VERBOSE to ERROR are handled."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.tag = "null"
        self.log_format = DEFAULT_LOG_FORMAT
        self.print_level: int = LogLevel.VERBOSE
        self.write_level: Optional[int] = None
        self._writer: Optional[LogFileWriter] = None

    def configure(self, config: LogConfig, manage_config: Optional[LogManageConfig] = None) -> None:
        """Apply ``config``; raises ValueError if writing cannot be set up."""
        with self._lock:
            if _valid(config.write_level):
                self._configure_writer(config.file_fmt or "", manage_config)
                self.write_level = config.write_level
            else:
                self._close_writer()
                self.write_level = None
            self.tag = config.tag or "null"
            self.log_format = config.log_fmt or DEFAULT_LOG_FORMAT
            self.print_level = config.show_level

    def _configure_writer(self, file_fmt: str, cfg: Optional[LogManageConfig]) -> None:
        if not file_fmt:
            raise ValueError("a log file format is required for writing")
        writer = self._writer
        if writer is None:
            self._writer = self._new_writer(file_fmt, cfg)
            return
        same_dir = (os.path.dirname(file_fmt) or ".") == writer.directory
        if not self._same_manager(cfg) or not same_dir:
            self._close_writer()
            self._writer = self._new_writer(file_fmt, cfg)
            return
        name_fmt = os.path.basename(file_fmt)
        if name_fmt != writer.name_format:
            writer.change_name_format(name_fmt)

    def _same_manager(self, cfg: Optional[LogManageConfig]) -> bool:
        assert self._writer is not None
        manager = self._writer.manager
        if manager is None:
            return not _needs_manager(cfg)
        if not _needs_manager(cfg):
            return False
        return manager.config == cfg

    @staticmethod
    def _new_writer(file_fmt: str, cfg: Optional[LogManageConfig]) -> LogFileWriter:
        manager = LogManager(cfg) if cfg is not None and _needs_manager(cfg) else None
        try:
            return LogFileWriter(file_fmt, manager)
        except BaseException:
            if manager is not None:
                manager.clear()
            raise

    def _close_writer(self) -> None:
        writer = self._writer
        if writer is None:
            return
        manager = writer.manager
        writer.close()
        if manager is not None:
            manager.clear()
        self._writer = None

    def _writes(self, level: int) -> bool:
        return self._writer is not None and self.write_level is not None and level >= self.write_level

    def _build(self, level: int, file: str, line: int, func: str, message: str) -> tuple:
        ctx = LogContext(
            level=LogLevel(level), file=file, line=line, func=func, tag=self.tag, message=message
        )
        return ctx, format_log(self.log_format, ctx, MAX_LOG_LINE) + "\n"

    def write(self, level: int, file: str, line: int, func: str, message: str) -> None:
        """Log a record to the file and the console as the levels allow."""
        if not _valid(level) or (not self._writes(level) and level < self.print_level):
            return
        ctx, text = self._build(level, file, line, func, message)
        with self._lock:
            if self._writes(level):
                assert self._writer is not None
                self._writer.write(text.encode(), ctx)
            if level >= self.print_level:
                _emit(text, level)

    def echo(self, level: int, file: str, line: int, func: str, message: str) -> None:
        """Log a record to the console only."""
        if not _valid(level) or level < self.print_level:
            return
        _, text = self._build(level, file, line, func, message)
        with self._lock:
            _emit(text, level)

    def close(self) -> None:
        """Stop writing to files and release the current one."""
        with self._lock:
            self._close_writer()
            self.write_level = None