"""
读写锁

多个读者共享, 写者独占; 有写者在等待时新的读者会阻塞, 避免探针持续读取时写者饿死。
不可重入: 持有锁期间不要再次获取。
"""

import threading
from contextlib import contextmanager
from typing import Iterator


class ReadWriteLock:
    """基于 threading.Condition 的读写锁

    Example:
        lock = ReadWriteLock()

        with lock.read_locked():
            value = shared["ready"]

        with lock.write_locked():
            shared["ready"] = True
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self):
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() 调用次数多于 acquire_read()")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self):
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() 调用时未持有写锁")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        """共享模式"""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """独占模式"""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    def __repr__(self) -> str:
        return (
            f"ReadWriteLock(readers={self._readers}, writer={self._writer}, "
            f"writers_waiting={self._writers_waiting})"
        )
