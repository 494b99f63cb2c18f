"""Contracts for the collaborators the runner controller drives."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from scriptrunner.core.state import DisplayMetrics, GameAreaMode


class AutomationEngine(Protocol):
    def pause(self) -> bool: ...

    def resume(self) -> bool: ...

    def stop(self) -> None: ...


class CaptureResource(Protocol):
    def prepare(self) -> None: ...

    def release(self) -> None: ...


class OverlayRenderer(Protocol):
    def show(self) -> None: ...

    def hide(self) -> None: ...


class NotificationSurface(Protocol):
    """Persistent status indicator shown while the runner is alive."""

    def show(self) -> None: ...

    def hide(self) -> None: ...


class Notifier(Protocol):
    def notify(self, message: str) -> None: ...

    def toast(self, message: str) -> None: ...

    async def show_dialog(self, title: str, message: str) -> None:
        """May suspend until the user dismisses the dialog."""
        ...


class DisplayGeometry(Protocol):
    def current_metrics(self) -> DisplayMetrics: ...


class Preferences(Protocol):
    def game_area_mode(self) -> GameAreaMode: ...

    def wants_permission_token(self) -> bool: ...


@dataclass(slots=True)
class Collaborators:
    """Everything the controller talks to, handed over once at construction."""

    engine: AutomationEngine
    capture: CaptureResource
    overlay: OverlayRenderer
    notification: NotificationSurface
    notifier: Notifier
    display: DisplayGeometry
    preferences: Preferences
