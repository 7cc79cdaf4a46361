# app/repositories/locks.py
from __future__ import annotations
import logging
import threading
import time
from contextlib import contextmanager
from typing import Iterator

from app.errors import StoreBusyError

log = logging.getLogger(__name__)


class ReadWriteLock:
    """Many readers or one writer. Waiting writers block new readers."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @staticmethod
    def _remaining(deadline: float | None) -> float | None:
        if deadline is None:
            return None
        return max(0.0, deadline - time.monotonic())

    def acquire_read(self, timeout: float | None = None) -> bool:
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            ok = self._cond.wait_for(
                lambda: not self._writer and not self._writers_waiting,
                self._remaining(deadline),
            )
            if not ok:
                return False
            self._readers += 1
            return True

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self, timeout: float | None = None) -> bool:
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            self._writers_waiting += 1
            try:
                ok = self._cond.wait_for(
                    lambda: not self._writer and self._readers == 0,
                    self._remaining(deadline),
                )
            finally:
                self._writers_waiting -= 1
            if not ok:
                # readers held back by us may proceed now
                self._cond.notify_all()
                return False
            self._writer = True
            return True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read(self, timeout: float | None = None) -> Iterator[None]:
        if not self.acquire_read(timeout):
            log.warning("gave up waiting %.3fs for read lock", timeout)
            raise StoreBusyError()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self, timeout: float | None = None) -> Iterator[None]:
        if not self.acquire_write(timeout):
            log.warning("gave up waiting %.3fs for write lock", timeout)
            raise StoreBusyError()
        try:
            yield
        finally:
            self.release_write()
