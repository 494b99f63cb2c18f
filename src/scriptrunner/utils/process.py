"""Process-wide helpers."""

from __future__ import annotations

import os
from pathlib import Path

import portalocker

from scriptrunner.logging import get_logger


class SingleInstance:
    """Host lock: one runner per machine, owner pid written into the lock file."""

    def __init__(self, lockfile: Path) -> None:
        self.lockfile = lockfile
        self.logger = get_logger("host-lock")
        self._handle: portalocker.Lock | None = None

    @property
    def held(self) -> bool:
        return self._handle is not None

    def acquire(self) -> bool:
        if self._handle is not None:
            return True
        self.lockfile.parent.mkdir(parents=True, exist_ok=True)
        handle = portalocker.Lock(str(self.lockfile), mode="w", timeout=0, fail_when_locked=True)
        try:
            stream = handle.acquire()
        except portalocker.exceptions.LockException:
            self.logger.warning("Runner lock {} is held by another host", self.lockfile)
            return False
        stream.write(str(os.getpid()))
        stream.flush()
        self._handle = handle
        self.logger.debug("Acquired runner lock {}", self.lockfile)
        return True

    def release(self) -> None:
        if self._handle is None:
            return
        self._handle.release()
        self._handle = None
        self.logger.debug("Released runner lock {}", self.lockfile)

    def __enter__(self) -> SingleInstance:
        if not self.acquire():
            raise RuntimeError(f"runner host lock {self.lockfile} is already held")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        self.release()
