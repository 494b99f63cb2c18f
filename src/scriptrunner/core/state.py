"""Runtime state containers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SessionState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"


class PauseReason(str, Enum):
    """Why a pause was attempted. Logged only, never branched on."""

    POWER_OFF = "power_off"
    CONFIG_CHANGE = "config_change"
    MANUAL = "manual"


class OverlayState(str, Enum):
    VISIBLE = "visible"
    HIDDEN = "hidden"


class GameAreaMode(str, Enum):
    DEFAULT = "default"
    SAFE_AREA = "safe_area"
    DUO = "duo"


@dataclass(slots=True, frozen=True)
class DisplayMetrics:
    width_pixels: int
    height_pixels: int

    @property
    def is_landscape(self) -> bool:
        return self.width_pixels >= self.height_pixels

    @classmethod
    def parse(cls, text: str) -> DisplayMetrics:
        """Build metrics from a ``WIDTHxHEIGHT`` string such as ``1080x1920``."""
        width, sep, height = text.lower().partition("x")
        if not sep:
            raise ValueError(f"expected WIDTHxHEIGHT, got {text!r}")
        return cls(width_pixels=int(width), height_pixels=int(height))

    def __str__(self) -> str:
        return f"{self.width_pixels}x{self.height_pixels}"
