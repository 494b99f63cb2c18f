"""scriptrunner host entrypoint.

Plays the role of the host service: creates the runner, feeds it a scripted
sequence of host signals and destroys it again.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass

from scriptrunner.config import RunnerSettings, load_settings
from scriptrunner.core.app import build_context
from scriptrunner.core.interfaces import Collaborators
from scriptrunner.core.signals import Signal
from scriptrunner.core.state import DisplayMetrics, SessionState
from scriptrunner.logging import configure_logging, get_logger
from scriptrunner.services.console import (
    ConsoleCapture,
    ConsoleEngine,
    ConsoleNotification,
    ConsoleNotifier,
    ConsoleOverlay,
    SettingsPreferences,
    SimulatedDisplay,
)
from scriptrunner.utils.process import SingleInstance

STEP_KINDS = ("power-off", "rotate", "token", "wait", "resume")


@dataclass(slots=True, frozen=True)
class Step:
    kind: str
    arg: str = ""

    @classmethod
    def parse(cls, text: str) -> Step:
        kind, _, arg = text.strip().partition(":")
        kind = kind.lower()
        if kind not in STEP_KINDS:
            raise ValueError(f"unknown step {text!r}; expected one of {', '.join(STEP_KINDS)}")
        if kind == "rotate":
            DisplayMetrics.parse(arg)
        elif kind == "wait":
            float(arg)
        return cls(kind=kind, arg=arg)


def console_collaborators(settings: RunnerSettings) -> Collaborators:
    return Collaborators(
        engine=ConsoleEngine(),
        capture=ConsoleCapture(),
        overlay=ConsoleOverlay(),
        notification=ConsoleNotification(),
        notifier=ConsoleNotifier(),
        display=SimulatedDisplay(settings.display),
        preferences=SettingsPreferences(settings.preferences),
    )


async def run_scenario(
    settings: RunnerSettings,
    steps: Iterable[Step],
    collaborators: Collaborators | None = None,
) -> SessionState:
    """Run the controller through ``steps`` and return the state seen before teardown."""

    logger = get_logger("host")
    collaborators = collaborators or console_collaborators(settings)
    ctx = build_context(settings, collaborators)
    ctx.start()
    try:
        for step in steps:
            logger.debug("Step {}{}", step.kind, f":{step.arg}" if step.arg else "")
            if step.kind == "power-off":
                ctx.signals.post(Signal.POWER_OFF)
            elif step.kind == "rotate":
                metrics = DisplayMetrics.parse(step.arg)
                display = collaborators.display
                if isinstance(display, SimulatedDisplay):
                    display.metrics = metrics
                ctx.signals.post(Signal.CONFIGURATION_CHANGED, metrics)
            elif step.kind == "token":
                ctx.signals.post(Signal.PERMISSION_TOKEN, step.arg or "token")
            elif step.kind == "resume":
                ctx.controller.resume()
            elif step.kind == "wait":
                await asyncio.sleep(float(step.arg))
            # Let the posted signal dispatch before the next step.
            await asyncio.sleep(0)
        final_state = ctx.controller.state
    finally:
        ctx.stop()
    logger.info("Scenario finished in state {}", final_state.value)
    return final_state


def main(step_texts: Iterable[str] = ()) -> SessionState:
    steps = [Step.parse(text) for text in step_texts]
    settings: RunnerSettings = load_settings()
    configure_logging(settings)
    logger = get_logger("main")

    with SingleInstance(settings.paths.lock_file):
        logger.info("scriptrunner host ready ({} steps)", len(steps))
        return asyncio.run(run_scenario(settings, steps))


if __name__ == "__main__":
    main()
