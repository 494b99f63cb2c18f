"""Host signal sources feeding the runner's event loop."""

from __future__ import annotations

import asyncio
from collections import defaultdict
from collections.abc import Callable
from enum import Enum
from typing import Any

from scriptrunner.logging import get_logger

SignalHandler = Callable[[Any], None]


class Signal(str, Enum):
    POWER_OFF = "power.off"
    CONFIGURATION_CHANGED = "display.configuration_changed"
    PERMISSION_TOKEN = "capture.permission_token"


class SignalBus:
    """Pub/sub for host signals, dispatched on a single asyncio loop.

    ``emit`` runs handlers inline and must be called from the loop thread.
    Hosts delivering from other threads use ``post``, which queues the
    dispatch onto the attached loop so handlers never interleave.
    """

    def __init__(self) -> None:
        self._subscribers: defaultdict[Signal, list[SignalHandler]] = defaultdict(list)
        self._loop: asyncio.AbstractEventLoop | None = None
        self.logger = get_logger("signals")

    def attach(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    def subscribe(self, signal: Signal, handler: SignalHandler) -> None:
        if handler not in self._subscribers[signal]:
            self._subscribers[signal].append(handler)

    def unsubscribe(self, signal: Signal, handler: SignalHandler) -> None:
        if handler in self._subscribers[signal]:
            self._subscribers[signal].remove(handler)

    def subscriber_count(self, signal: Signal) -> int:
        return len(self._subscribers.get(signal, ()))

    def emit(self, signal: Signal, payload: Any = None) -> None:
        handlers = list(self._subscribers.get(signal, ()))
        if not handlers:
            self.logger.debug("No subscribers for {}", signal.value)
            return
        for handler in handlers:
            try:
                handler(payload)
            except Exception as exc:
                self.logger.exception("Error in handler for {}: {}", signal.value, exc)

    def post(self, signal: Signal, payload: Any = None) -> None:
        if self._loop is None:
            raise RuntimeError("SignalBus.post() before attach()")
        self._loop.call_soon_threadsafe(self.emit, signal, payload)
