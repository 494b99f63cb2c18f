"""Floating play-button overlay visibility."""

from __future__ import annotations

from scriptrunner.core.interfaces import OverlayRenderer
from scriptrunner.core.state import DisplayMetrics, GameAreaMode, OverlayState
from scriptrunner.logging import get_logger


def should_show(metrics: DisplayMetrics, mode: GameAreaMode) -> bool:
    # Hidden in portrait, unless on a dual-screen device.
    return metrics.is_landscape or mode is GameAreaMode.DUO


class OverlayController:
    def __init__(self, renderer: OverlayRenderer) -> None:
        self.renderer = renderer
        self.logger = get_logger("overlay")
        self._state = OverlayState.HIDDEN

    @property
    def state(self) -> OverlayState:
        return self._state

    @property
    def visible(self) -> bool:
        return self._state is OverlayState.VISIBLE

    def show(self) -> bool:
        if self._state is OverlayState.VISIBLE:
            return False
        self.renderer.show()
        self._state = OverlayState.VISIBLE
        self.logger.debug("Overlay shown")
        return True

    def hide(self) -> bool:
        if self._state is OverlayState.HIDDEN:
            return False
        self.renderer.hide()
        self._state = OverlayState.HIDDEN
        self.logger.debug("Overlay hidden")
        return True

    def refresh(
        self, metrics: DisplayMetrics, mode: GameAreaMode, *, allow_show: bool = True
    ) -> bool:
        """Show or hide for the given geometry; returns the ``should_show`` verdict.

        With ``allow_show`` false the overlay may be hidden but is never shown.
        """
        wanted = should_show(metrics, mode)
        self.logger.trace(
            "{} ({}) mode={} -> {}",
            "LANDSCAPE" if metrics.is_landscape else "PORTRAIT",
            metrics,
            mode.value,
            "show" if wanted else "hide",
        )
        if wanted and allow_show:
            self.show()
        elif not wanted:
            self.hide()
        return wanted
