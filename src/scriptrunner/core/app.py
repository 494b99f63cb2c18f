"""scriptrunner composition root."""

from __future__ import annotations

from dataclasses import dataclass

from scriptrunner.config import RunnerSettings
from scriptrunner.core.controller import RunnerController
from scriptrunner.core.gate import TokenStore
from scriptrunner.core.interfaces import Collaborators
from scriptrunner.core.signals import SignalBus
from scriptrunner.logging import get_logger


@dataclass(slots=True)
class RunnerContext:
    settings: RunnerSettings
    signals: SignalBus
    tokens: TokenStore
    controller: RunnerController

    def start(self) -> None:
        self.controller.init()

    def stop(self) -> None:
        self.controller.teardown()


def build_context(
    settings: RunnerSettings,
    collaborators: Collaborators,
    tokens: TokenStore | None = None,
) -> RunnerContext:
    signals = SignalBus()
    tokens = tokens if tokens is not None else TokenStore()
    controller = RunnerController(
        collaborators,
        settings=settings.pause,
        signals=signals,
        token_store=tokens,
    )

    logger = get_logger("bootstrap")
    logger.info("Runner context ready")

    return RunnerContext(
        settings=settings,
        signals=signals,
        tokens=tokens,
        controller=controller,
    )
