"""Collaborators that report to the log instead of a real device.

Used by the CLI host to replay signal scenarios on a desktop.
"""

from __future__ import annotations

import asyncio

import typer

from scriptrunner.config import DisplaySettings, PreferenceSettings
from scriptrunner.core.state import DisplayMetrics, GameAreaMode
from scriptrunner.logging import get_logger


class ConsoleEngine:
    def __init__(self) -> None:
        self.logger = get_logger("engine")
        self.paused = False
        self.stopped = False

    def pause(self) -> bool:
        if self.paused or self.stopped:
            return False
        self.paused = True
        self.logger.info("Script execution suspended")
        return True

    def resume(self) -> bool:
        if not self.paused or self.stopped:
            return False
        self.paused = False
        self.logger.info("Script execution resumed")
        return True

    def stop(self) -> None:
        if self.stopped:
            return
        self.stopped = True
        self.logger.info("Script stopped")


class ConsoleCapture:
    def __init__(self) -> None:
        self.logger = get_logger("capture")

    def prepare(self) -> None:
        self.logger.info("Screenshot service prepared")

    def release(self) -> None:
        self.logger.info("Screenshot service closed, image cache cleared")


class ConsoleOverlay:
    def __init__(self) -> None:
        self.logger = get_logger("overlay-renderer")

    def show(self) -> None:
        self.logger.info("Play button shown")

    def hide(self) -> None:
        self.logger.info("Play button hidden")


class ConsoleNotification:
    def __init__(self) -> None:
        self.logger = get_logger("notification")

    def show(self) -> None:
        self.logger.info("Status notification posted")

    def hide(self) -> None:
        self.logger.info("Status notification removed")


class ConsoleNotifier:
    """Echoes messages to the terminal; dialogs auto-dismiss after a timeout."""

    def __init__(self, dialog_timeout_s: float = 0.5) -> None:
        self.dialog_timeout_s = dialog_timeout_s

    def notify(self, message: str) -> None:
        typer.secho(f"[notify] {message}", fg=typer.colors.YELLOW)

    def toast(self, message: str) -> None:
        typer.secho(f"[toast] {message}", fg=typer.colors.CYAN)

    async def show_dialog(self, title: str, message: str) -> None:
        typer.secho(f"[dialog] {title}: {message}", fg=typer.colors.MAGENTA, bold=True)
        await asyncio.sleep(self.dialog_timeout_s)


class SimulatedDisplay:
    """Display whose geometry is changed by the scenario driver."""

    def __init__(self, settings: DisplaySettings) -> None:
        self.metrics = DisplayMetrics(settings.width_pixels, settings.height_pixels)

    def current_metrics(self) -> DisplayMetrics:
        return self.metrics


class SettingsPreferences:
    def __init__(self, settings: PreferenceSettings) -> None:
        self.settings = settings

    def game_area_mode(self) -> GameAreaMode:
        return self.settings.game_area_mode

    def wants_permission_token(self) -> bool:
        return self.settings.wants_permission_token
