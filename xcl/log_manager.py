"""Tracks log files and discards the oldest ones to keep within limits."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Callable, Optional

from xcl.heap import Heap

PathCallback = Callable[[str], bool]


@dataclass(frozen=True)
class LogManageConfig:
    """Limits on kept logs; a negative value means no limit."""

    single_log_limit: int = -1
    total_log_limit: int = -1
    max_logs: int = -1
    log_validity: int = -1
    filter: Optional[PathCallback] = None
    discard_cb: Optional[PathCallback] = None


@dataclass
class LogFileInfo:
    """A tracked log file; ``ctime`` is in milliseconds."""

    path: str
    ctime: int
    size: int


def _by_ctime(a: LogFileInfo, b: LogFileInfo) -> int:
    return (a.ctime > b.ctime) - (a.ctime < b.ctime)


class LogManager:
    """Keeps the set of log files within count, size and age limits."""

    def __init__(self, config: LogManageConfig) -> None:
        if 0 <= config.total_log_limit < config.single_log_limit and config.single_log_limit >= 0:
            raise ValueError(
                f"total log limit {config.total_log_limit} < "
                f"single log limit {config.single_log_limit}"
            )
        self.config = config
        self.total_log_size = -1
        self._infos: Optional[Heap] = None
        if config.max_logs > 0 or config.total_log_limit > 0:
            self._infos = Heap(_by_ctime)
            self.total_log_size = 0

    def _discard(self, path: str) -> None:
        if self.config.discard_cb is not None:
            if not self.config.discard_cb(path):
                raise OSError(f"cannot discard log {path}")
        else:
            os.remove(path)

    def pop(self) -> Optional[LogFileInfo]:
        """Discard the oldest tracked log and return it; None if none is tracked."""
        if not self._infos:
            return None
        info = self._infos.top()
        self._discard(info.path)
        self._infos.pop()
        self.total_log_size -= info.size
        return info

    def add(self, path: str, ctime: int = -1) -> None:
        """Take ``path`` into account, discarding it or older logs as the limits demand.

        Files not ending in ``.log`` or rejected by the filter are ignored.
        ``ctime`` in milliseconds overrides the file's own when positive.
        """
        if not path.endswith(".log"):
            return
        config = self.config
        if config.filter is not None and not config.filter(path):
            return
        if 0 in (config.max_logs, config.total_log_limit, config.log_validity, config.single_log_limit):
            self._discard(path)
            return
        st = os.stat(path)
        if config.log_validity > 0 and time.time() - st.st_ctime > config.log_validity:
            self._discard(path)
            return
        if config.single_log_limit > 0 and st.st_size > config.single_log_limit:
            self._discard(path)
            return
        if config.total_log_limit > 0 and st.st_size > config.total_log_limit:
            self._discard(path)
            return
        if self._infos is None:
            return
        if config.max_logs > 0 and len(self._infos) == config.max_logs:
            self.pop()
        while (
            config.total_log_limit > 0
            and self.total_log_size + st.st_size > config.total_log_limit
        ):
            if self.pop() is None:
                break
        stamp = ctime if ctime > 0 else int(st.st_ctime) * 1000
        self._infos.push(LogFileInfo(path, stamp, st.st_size))
        self.total_log_size += st.st_size

    def clear(self) -> None:
        """Forget every tracked log without touching the files."""
        if self._infos is not None:
            self._infos.clear()
            self.total_log_size = 0

    def scan(self, directory: str, recursive: bool = False) -> None:
        """Add every file found in ``directory``."""
        if recursive:
            for root, dirs, files in os.walk(directory):
                dirs.sort()
                for name in sorted(files):
                    self.add(os.path.join(root, name))
        else:
            with os.scandir(directory) as entries:
                paths = sorted(e.path for e in entries if e.is_file())
            for path in paths:
                self.add(path)

    def current_write_limit(self) -> int:
        """Bytes the current log may still take; -1 when unlimited."""
        total = self.config.total_log_limit
        single = self.config.single_log_limit
        if total < 0 and single < 0:
            return -1
        if total < 0:
            return single
        remaining = total - self.total_log_size
        if single < 0:
            return remaining
        return min(remaining, single)

    def window(self) -> int:
        """Number of tracked logs, or -1 when logs are not tracked."""
        return len(self._infos) if self._infos is not None else -1