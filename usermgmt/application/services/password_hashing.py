"""Password hashing strategies."""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import TypeVar

from werkzeug.security import check_password_hash, generate_password_hash

from usermgmt.domain.users.repositories import PasswordHasher
from usermgmt.shared.errors.base import ServiceUnavailableError
from usermgmt.shared.logging import logger

T = TypeVar("T")


class WerkzeugPasswordHasher(PasswordHasher):
    def __init__(self, method: str = "scrypt") -> None:
        self._method = method

    def hash(self, password: str) -> str:
        return str(generate_password_hash(password, method=self._method))

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed or "$" not in hashed:
            return False
        try:
            return bool(check_password_hash(hashed, password))
        except (ValueError, TypeError):
            logger.warning("password_hashing: unreadable stored hash")
            return False


class HashingBusyError(ServiceUnavailableError):
    def __init__(self) -> None:
        super().__init__("hashing_busy")


class PooledPasswordHasher(PasswordHasher):
    """Runs a hasher on a dedicated, bounded thread pool.

    At most ``queue_size`` calls may be running or waiting at once; further
    calls fail fast with :class:`HashingBusyError`.
    """

    def __init__(
        self,
        inner: PasswordHasher,
        *,
        workers: int = 4,
        queue_size: int = 32,
        timeout: float = 10.0,
    ) -> None:
        self._inner = inner
        self._timeout = timeout
        self._slots = threading.BoundedSemaphore(max(queue_size, workers))
        self._executor = ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="password-hash"
        )

    def hash(self, password: str) -> str:
        return self._run(self._inner.hash, password)

    def verify(self, password: str, hashed: str) -> bool:
        return self._run(self._inner.verify, password, hashed)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True, cancel_futures=True)
        logger.info("password_hashing: executor stopped")

    def _run(self, fn: Callable[..., T], *args: str) -> T:
        if not self._slots.acquire(blocking=False):
            logger.warning("password_hashing: queue full, rejecting")
            raise HashingBusyError()

        try:
            future: Future[T] = self._executor.submit(fn, *args)
        except RuntimeError:
            self._slots.release()
            raise
        future.add_done_callback(lambda _: self._slots.release())

        try:
            return future.result(timeout=self._timeout)
        except FutureTimeoutError:
            future.cancel()
            logger.warning(f"password_hashing: no result within {self._timeout}s")
            raise HashingBusyError() from None


__all__ = ["HashingBusyError", "PooledPasswordHasher", "WerkzeugPasswordHasher"]
