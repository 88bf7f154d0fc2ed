"""Hold another object's lock from a background thread.

`ObjectLocker` splits acquiring and releasing a lock into two calls that may
come from different threads: `lock` starts a holder thread that acquires the
target and keeps it until `unlock` is called.
"""

import logging
import threading
from typing import Protocol

logger = logging.getLogger(__name__)


class Lockable(Protocol):
    def acquire(self, blocking: bool = ..., timeout: float = ...) -> bool: ...

    def release(self) -> None: ...


class ObjectLocker:
    """Two-phase lock/unlock of a lockable target.

    The target can be anything with ``acquire``/``release``: a
    `threading.Lock`, `RLock`, `Condition` or `Semaphore`.
    """

    def __init__(self, target: Lockable) -> None:
        if target is None:
            raise ValueError("ObjectLocker target must not be None")
        self._target: Lockable = target
        self._state: threading.Lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self._release: threading.Event = threading.Event()
        self._held: threading.Event = threading.Event()

    def lock(self) -> bool:
        """Start holding the target.

        Returns immediately; the holder thread may still be waiting for the
        target. Use `wait_locked` to block until it actually holds it.

        Returns:
            False if a holder thread is already running
        """
        with self._state:
            if self._thread is not None:
                return False
            self._release = threading.Event()
            self._held = threading.Event()
            self._thread = threading.Thread(
                target=self._hold,
                args=(self._release, self._held),
                name=f"ObjectLocker-{id(self._target):x}",
                daemon=True,
            )
            self._thread.start()
            return True

    def unlock(self) -> bool:
        """Ask the holder thread to release the target.

        Returns:
            False if no holder thread is running
        """
        with self._state:
            if self._thread is None:
                return False
            self._release.set()
            return True

    def is_locked(self) -> bool:
        """True while the holder thread owns the target."""
        return self._held.is_set()

    def is_active(self) -> bool:
        """True from `lock` until the holder thread has released the target."""
        return self._thread is not None

    def wait_locked(self, timeout: float | None = None) -> bool:
        """Block until the holder owns the target; False on timeout."""
        return self._held.wait(timeout)

    def join(self, timeout: float | None = None) -> None:
        """Wait for the holder thread to finish after `unlock`."""
        thread = self._thread
        if thread is not None:
            thread.join(timeout)

    def _hold(self, release: threading.Event, held: threading.Event) -> None:
        try:
            self._target.acquire()
            try:
                held.set()
                logger.debug("holding %r", self._target)
                release.wait()
            finally:
                held.clear()
                self._target.release()
                logger.debug("released %r", self._target)
        finally:
            with self._state:
                self._thread = None
