"""Writes log records to files named from a format, slicing and rotating them."""

from __future__ import annotations

import os
import time
from datetime import date
from typing import BinaryIO, Optional, Union

from xcl.log_format import LogContext, format_log
from xcl.log_manager import LogManager

_SLICE_PREFIX = ".[slice"
_LOG_EXT = ".log"
_DIGITS = "0123456789"


def slice_name(name: str) -> Optional[str]:
    """The name of the next slice after the log file ``name``.

    ``app.log`` becomes ``app.[slice1].log`` and ``app.[sliceN].log`` becomes
    ``app.[sliceN+1].log``. Any other shape gives None.
    """
    ext = name.rfind(".")
    if ext < 0:
        return None
    prev = name.rfind(".", 0, ext)
    if prev < 0:
        return f"{name[:ext]}{_SLICE_PREFIX}1]{_LOG_EXT}"
    rest = name[prev:]
    if not rest.startswith(_SLICE_PREFIX):
        return None
    close = rest.find("]", len(_SLICE_PREFIX))
    if close < 0 or rest[close + 1:] != _LOG_EXT:
        return None
    digits = rest[len(_SLICE_PREFIX):close]
    if any(c not in _DIGITS for c in digits):
        return None
    part = int(digits) if digits else 0
    return f"{name[:prev]}{_SLICE_PREFIX}{part + 1}]{_LOG_EXT}"


class LogFileWriter:
    """Appends to a log file whose name is expanded from a ``.log`` format.

    A new file is started when the day changes and the expanded name differs,
    or, under a manager, when the current file reaches its size limit.
    """

    def __init__(self, file_fmt: str, manager: Optional[LogManager] = None) -> None:
        name_fmt = os.path.basename(file_fmt)
        if not name_fmt.endswith(_LOG_EXT):
            raise ValueError(f"log file format {file_fmt!r} must end with {_LOG_EXT}")
        self.name_format = name_fmt
        self.directory = os.path.dirname(file_fmt) or "."
        self.name = ""
        self._fp: Optional[BinaryIO] = None
        self._ctime = -1
        self._closed = False
        if manager is not None:
            manager.scan(self.directory, False)
        self.manager = manager
        self._limit = -1 if manager is None else manager.current_write_limit()
        self._day = date.today()

    def _path(self, name: str) -> str:
        return os.path.join(self.directory, name)

    def _update_day(self) -> bool:
        today = date.today()
        if today == self._day:
            return False
        self._day = today
        return True

    def _open(self, name: str) -> None:
        self._fp = open(self._path(name), "ab")
        self._ctime = time.time_ns() // 1_000_000
        self.name = name

    def _finish(self) -> None:
        if self._fp is not None:
            self._fp.close()
            self._fp = None
        if self.manager is None:
            return
        self.manager.add(self._path(self.name), self._ctime)
        self._limit = self.manager.current_write_limit()

    def _reserve(self) -> None:
        manager = self.manager
        if manager is None:
            return
        max_logs = manager.config.max_logs
        while self._limit == 0 or (max_logs >= 0 and manager.window() == max_logs):
            if manager.pop() is None:
                raise OSError("no log file can be discarded to make room")
            self._limit = manager.current_write_limit()

    def _pre_write(self, ctx: LogContext) -> None:
        if not self.name:
            name = format_log(self.name_format, ctx)
            self._reserve()
            self._open(name)
            return
        day_changed = self._update_day()
        new_name = format_log(self.name_format, ctx) if day_changed else None
        if not day_changed or new_name == self.name:
            if self._limit != 0:
                return
            new_name = slice_name(self.name)
            if new_name is None:
                raise OSError(f"cannot slice log file {self.name!r}")
        self._finish()
        self._reserve()
        self._open(new_name)

    def write(self, data: Union[bytes, str], ctx: LogContext) -> None:
        """Append ``data``, moving on to further files as limits require."""
        if self._closed:
            raise ValueError("writer is closed")
        if isinstance(data, str):
            data = data.encode()
        view = memoryview(data)
        while view:
            self._pre_write(ctx)
            size = len(view) if self._limit < 0 or self._limit >= len(view) else self._limit
            if size <= 0:
                raise OSError("log file has no room left")
            assert self._fp is not None
            self._fp.write(view[:size])
            self._fp.flush()
            if self._limit >= 0:
                self._limit -= size
            view = view[size:]

    def change_name_format(self, name_fmt: str) -> None:
        """Finish the current file; later writes go to files named by ``name_fmt``."""
        if self._fp is not None:
            self._finish()
        self.name_format = name_fmt
        self.name = ""

    def close(self) -> None:
        if self._fp is not None:
            self._fp.close()
        self._fp = None
        self.name = ""
        self._limit = 0
        self._ctime = -1
        self.manager = None
        self._closed = True

    def __enter__(self) -> LogFileWriter:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()