"""Recording fakes for the runner's collaborators."""

from __future__ import annotations

import asyncio

import pytest

from scriptrunner.config import PauseSettings
from scriptrunner.core.controller import RunnerController
from scriptrunner.core.interfaces import Collaborators
from scriptrunner.core.state import DisplayMetrics, GameAreaMode

LANDSCAPE = DisplayMetrics(1920, 1080)
PORTRAIT = DisplayMetrics(1080, 1920)

# Short enough to keep the suite fast, long enough to race against.
DELAY_S = 0.05


class FakeEngine:
    def __init__(self) -> None:
        self.calls: list[str] = []
        self.refuse_pause = False
        self.fail_pause = False
        self.fail_stop = False

    def pause(self) -> bool:
        self.calls.append("pause")
        if self.fail_pause:
            raise RuntimeError("engine gone")
        return not self.refuse_pause

    def resume(self) -> bool:
        self.calls.append("resume")
        return True

    def stop(self) -> None:
        self.calls.append("stop")
        if self.fail_stop:
            raise RuntimeError("engine wedged")


class FakeCapture:
    def __init__(self) -> None:
        self.prepare_calls = 0
        self.release_calls = 0
        self.fail_prepare = False
        self.fail_release = False

    def prepare(self) -> None:
        self.prepare_calls += 1
        if self.fail_prepare:
            raise OSError("no projection")

    def release(self) -> None:
        self.release_calls += 1
        if self.fail_release:
            raise OSError("already closed")


class FakeOverlay:
    def __init__(self) -> None:
        self.calls: list[str] = []
        self.fail_hide = False

    def show(self) -> None:
        self.calls.append("show")

    def hide(self) -> None:
        self.calls.append("hide")
        if self.fail_hide:
            raise RuntimeError("window gone")


class FakeNotification:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def show(self) -> None:
        self.calls.append("show")

    def hide(self) -> None:
        self.calls.append("hide")


class FakeNotifier:
    def __init__(self) -> None:
        self.notifications: list[str] = []
        self.toasts: list[str] = []
        self.dialogs: list[tuple[str, str]] = []
        self.dismissed = asyncio.Event()
        self.block_dialogs = False
        self.dialog_cancelled = False

    def notify(self, message: str) -> None:
        self.notifications.append(message)

    def toast(self, message: str) -> None:
        self.toasts.append(message)

    async def show_dialog(self, title: str, message: str) -> None:
        self.dialogs.append((title, message))
        if self.block_dialogs:
            try:
                await self.dismissed.wait()
            except asyncio.CancelledError:
                self.dialog_cancelled = True
                raise


class FakeDisplay:
    def __init__(self, metrics: DisplayMetrics = LANDSCAPE) -> None:
        self.metrics = metrics

    def current_metrics(self) -> DisplayMetrics:
        return self.metrics


class FakePreferences:
    def __init__(self, mode: GameAreaMode = GameAreaMode.DEFAULT, wants_token: bool = False) -> None:
        self.mode = mode
        self.wants_token = wants_token

    def game_area_mode(self) -> GameAreaMode:
        return self.mode

    def wants_permission_token(self) -> bool:
        return self.wants_token


@pytest.fixture
def collaborators() -> Collaborators:
    return Collaborators(
        engine=FakeEngine(),
        capture=FakeCapture(),
        overlay=FakeOverlay(),
        notification=FakeNotification(),
        notifier=FakeNotifier(),
        display=FakeDisplay(),
        preferences=FakePreferences(),
    )


@pytest.fixture
def controller(collaborators: Collaborators) -> RunnerController:
    return RunnerController(
        collaborators, settings=PauseSettings(config_change_delay_s=DELAY_S)
    )
