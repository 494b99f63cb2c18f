"""Session state and the idempotent pause/stop protocol."""

from __future__ import annotations

from scriptrunner.core.interfaces import AutomationEngine
from scriptrunner.core.state import PauseReason, SessionState
from scriptrunner.logging import get_logger


class SessionController:
    """Owns the automation session's state.

    ``pause`` is the only guard against concurrent pause attempts: it succeeds
    once for a running session and rejects every later call without touching
    the engine, so any number of signal handlers may call it in any order.
    """

    def __init__(self, engine: AutomationEngine) -> None:
        self.engine = engine
        self.logger = get_logger("session")
        self._state = SessionState.IDLE

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is SessionState.RUNNING

    @property
    def is_paused(self) -> bool:
        return self._state is SessionState.PAUSED

    def start(self) -> bool:
        if self._state is not SessionState.IDLE:
            self.logger.debug("Start ignored in state {}", self._state.value)
            return False
        self._state = SessionState.RUNNING
        self.logger.info("Session running")
        return True

    def pause(self, reason: PauseReason) -> bool:
        """Attempt RUNNING -> PAUSED. True only if this call made the transition."""
        if self._state is not SessionState.RUNNING:
            self.logger.debug(
                "Pause ({}) rejected in state {}", reason.value, self._state.value
            )
            return False
        if not self.engine.pause():
            self.logger.warning("Engine refused pause ({})", reason.value)
            return False
        self._state = SessionState.PAUSED
        self.logger.info("Session paused ({})", reason.value)
        return True

    def resume(self) -> bool:
        if self._state is not SessionState.PAUSED:
            self.logger.debug("Resume rejected in state {}", self._state.value)
            return False
        if not self.engine.resume():
            self.logger.warning("Engine refused resume")
            return False
        self._state = SessionState.RUNNING
        self.logger.info("Session resumed")
        return True

    def stop(self) -> None:
        if self._state is SessionState.STOPPED:
            return
        previous = self._state
        # Stopped even if the engine fails to release; the caller logs the error.
        self._state = SessionState.STOPPED
        self.logger.info("Session stopped (was {})", previous.value)
        self.engine.stop()
