"""Runner lifecycle: reacts to host signals and tears everything down."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

from scriptrunner.config import PauseSettings
from scriptrunner.core import messages
from scriptrunner.core.gate import PermissionTokenGate, TokenStore
from scriptrunner.core.interfaces import Collaborators
from scriptrunner.core.overlay import OverlayController
from scriptrunner.core.session import SessionController
from scriptrunner.core.signals import Signal, SignalBus
from scriptrunner.core.state import DisplayMetrics, PauseReason, SessionState
from scriptrunner.logging import get_logger


class RunnerController:
    """Coordinates the session, overlay and token gate on one asyncio loop.

    A power-off and a configuration change can be delivered almost together
    for the same physical event. Power-off pauses at once; the configuration
    path waits ``config_change_delay_s`` first, so when both arrive the late
    ``pause`` is rejected by the session and nothing is notified twice.
    """

    def __init__(
        self,
        collaborators: Collaborators,
        settings: PauseSettings | None = None,
        signals: SignalBus | None = None,
        token_store: TokenStore | None = None,
    ) -> None:
        self.collaborators = collaborators
        self.settings = settings or PauseSettings()
        self.signals = signals or SignalBus()
        self.logger = get_logger("runner")
        self.session = SessionController(collaborators.engine)
        self.overlay = OverlayController(collaborators.overlay)
        self.gate = PermissionTokenGate(
            collaborators.capture, collaborators.notifier, token_store
        )
        self._loop: asyncio.AbstractEventLoop | None = None
        self._delayed_pause: asyncio.TimerHandle | None = None
        self._dialogs: set[asyncio.Task[None]] = set()
        self._handlers: dict[Signal, Callable[[Any], None]] = {
            Signal.POWER_OFF: lambda _payload: self.on_power_off(),
            Signal.CONFIGURATION_CHANGED: self.on_configuration_changed,
            Signal.PERMISSION_TOKEN: self.on_permission_token_received,
        }
        self._initialized = False
        self._torn_down = False

    @property
    def active(self) -> bool:
        return self._initialized and not self._torn_down

    @property
    def delayed_pause_pending(self) -> bool:
        return self._delayed_pause is not None

    # -- lifecycle ---------------------------------------------------------

    def init(self) -> None:
        if self._initialized or self._torn_down:
            return
        self._loop = asyncio.get_running_loop()
        self._initialized = True
        self.logger.info("Script runner created")

        self.collaborators.notification.show()
        self.session.start()

        self.signals.attach(self._loop)
        for signal, handler in self._handlers.items():
            self.signals.subscribe(signal, handler)

        prefs = self.collaborators.preferences
        if self.gate.on_init(prefs.wants_permission_token(), self.gate.token_present):
            self._refresh_overlay()

    def teardown(self) -> None:
        if self._torn_down:
            return
        self._torn_down = True
        self.logger.info("Script runner destroyed")

        self._guarded("cancel pending tasks", self._cancel_pending)
        self._guarded("stop session", self.session.stop)
        self._guarded("release capture", self.gate.release)
        self._guarded("hide overlay", self.overlay.hide)
        self._guarded("hide notification", self.collaborators.notification.hide)
        self._guarded("unregister signals", self._unsubscribe)

    on_init = init
    on_teardown = teardown

    # -- signals -----------------------------------------------------------

    def on_power_off(self) -> None:
        if not self.active:
            return
        self.logger.debug("SCREEN OFF")
        self._guarded("power-off pause", self._pause_for_power_off)

    def on_configuration_changed(self, metrics: DisplayMetrics | None = None) -> None:
        if not self.active:
            return
        if metrics is None:
            metrics = self.collaborators.display.current_metrics()
        if self._refresh_overlay(metrics):
            return
        self._schedule_delayed_pause()

    def on_permission_token_received(self, token: Any) -> None:
        if not self.active:
            return
        if token is None:
            self.logger.warning("Permission token signal carried no token")
            return
        self.gate.on_token_received(token)
        # Geometry may have changed since the last token.
        self._refresh_overlay()

    # -- manual controls ---------------------------------------------------

    def pause(self, reason: PauseReason = PauseReason.MANUAL) -> bool:
        return self.session.pause(reason)

    def resume(self) -> bool:
        return self.session.resume()

    def stop(self) -> None:
        self.session.stop()

    @property
    def state(self) -> SessionState:
        return self.session.state

    # -- internals ---------------------------------------------------------

    def _refresh_overlay(self, metrics: DisplayMetrics | None = None) -> bool:
        if metrics is None:
            metrics = self.collaborators.display.current_metrics()
        return self.overlay.refresh(
            metrics,
            self.collaborators.preferences.game_area_mode(),
            allow_show=not self.gate.token_request_pending,
        )

    def _schedule_delayed_pause(self) -> None:
        if self._delayed_pause is not None:
            self.logger.debug("Delayed pause already pending")
            return
        delay = self.settings.config_change_delay_s
        self.logger.debug("Pausing in {:.2f}s unless already paused", delay)
        self._delayed_pause = self._loop.call_later(delay, self._delayed_pause_fired)

    def _delayed_pause_fired(self) -> None:
        self._delayed_pause = None
        if not self.active:
            return
        self._guarded("config-change pause", self._pause_for_config_change)

    def _pause_for_power_off(self) -> None:
        if not self.session.pause(PauseReason.POWER_OFF):
            return
        notifier = self.collaborators.notifier
        notifier.notify(messages.SCREEN_TURNED_OFF)
        task = self._loop.create_task(
            notifier.show_dialog(messages.SCRIPT_PAUSED, messages.SCREEN_TURNED_OFF)
        )
        self._dialogs.add(task)
        task.add_done_callback(self._dialog_done)

    def _pause_for_config_change(self) -> None:
        if self.session.pause(PauseReason.CONFIG_CHANGE):
            self.collaborators.notifier.toast(messages.SCRIPT_PAUSED)

    def _dialog_done(self, task: asyncio.Task[None]) -> None:
        self._dialogs.discard(task)
        if task.cancelled():
            return
        if (exc := task.exception()) is not None:
            self.logger.opt(exception=exc).error("Pause dialog failed: {}", exc)

    def _cancel_pending(self) -> None:
        if self._delayed_pause is not None:
            self._delayed_pause.cancel()
            self._delayed_pause = None
            self.logger.debug("Cancelled delayed pause")
        for task in list(self._dialogs):
            task.cancel()
        self._dialogs.clear()

    def _unsubscribe(self) -> None:
        for signal, handler in self._handlers.items():
            self.signals.unsubscribe(signal, handler)

    def _guarded(self, step: str, action: Callable[[], Any]) -> None:
        try:
            action()
        except Exception as exc:
            self.logger.exception("Step '{}' failed: {}", step, exc)
