"""Application configuration models and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from scriptrunner.core.state import GameAreaMode


class AppPaths(BaseModel):
    """Resolved directories for scriptrunner runtime assets."""

    base_dir: Path = Field(
        default_factory=lambda: Path(
            os.getenv("SCRIPTRUNNER_HOME", Path.home() / ".scriptrunner")
        )
    )

    @property
    def config_dir(self) -> Path:
        return self.base_dir / "config"

    @property
    def logs_dir(self) -> Path:
        return self.base_dir / "logs"

    @property
    def cache_dir(self) -> Path:
        return self.base_dir / "cache"

    @property
    def lock_file(self) -> Path:
        return self.base_dir / "scriptrunner.lock"

    def ensure(self) -> None:
        for path in (self.base_dir, self.config_dir, self.logs_dir, self.cache_dir):
            path.mkdir(parents=True, exist_ok=True)


class PauseSettings(BaseModel):
    # Lets the power-off path win when both signals describe one physical event.
    config_change_delay_s: float = Field(default=1.0, gt=0.0, le=10.0)


class PreferenceSettings(BaseModel):
    game_area_mode: GameAreaMode = GameAreaMode.DEFAULT
    wants_permission_token: bool = True


class DisplaySettings(BaseModel):
    width_pixels: int = Field(default=1920, ge=1)
    height_pixels: int = Field(default=1080, ge=1)


class RunnerSettings(BaseModel):
    app_name: str = "scriptrunner"
    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    paths: AppPaths = Field(default_factory=AppPaths)
    pause: PauseSettings = Field(default_factory=PauseSettings)
    preferences: PreferenceSettings = Field(default_factory=PreferenceSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)


def _maybe_float(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _maybe_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    lowered = value.lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    return None


def load_settings(env_path: Path | None = None) -> RunnerSettings:
    """Load runner settings from environment variables and defaults."""

    env_file = env_path or Path('.env')
    if env_file.exists():
        load_dotenv(env_file)

    overrides: dict[str, Any] = {}

    if (delay := _maybe_float(os.getenv('SCRIPTRUNNER_PAUSE_DELAY'))) is not None:
        overrides.setdefault('pause', {})['config_change_delay_s'] = delay

    if mode := os.getenv('SCRIPTRUNNER_GAME_AREA_MODE'):
        overrides.setdefault('preferences', {})['game_area_mode'] = mode.lower()

    if (wants_token := _maybe_bool(os.getenv('SCRIPTRUNNER_WANTS_TOKEN'))) is not None:
        overrides.setdefault('preferences', {})['wants_permission_token'] = wants_token

    if level := os.getenv('SCRIPTRUNNER_LOG_LEVEL'):
        overrides['log_level'] = level.upper()

    settings = RunnerSettings(**overrides)
    settings.paths.ensure()
    return settings
