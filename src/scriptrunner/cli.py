"""Typer CLI for scriptrunner."""

from __future__ import annotations

import json
import platform

import typer

from scriptrunner.config import load_settings
from scriptrunner.logging import configure_logging
from scriptrunner.main import STEP_KINDS
from scriptrunner.main import main as launch

app = typer.Typer(no_args_is_help=True)


@app.command()
def run(
    steps: list[str] = typer.Argument(
        None,
        help=f"Signal steps to replay: {', '.join(STEP_KINDS)} "
        "(e.g. power-off rotate:1080x1920 wait:1.5 token:abc).",
    ),
) -> None:
    """Start a runner, replay host signals, then tear it down."""

    try:
        state = launch(steps or [])
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    typer.echo(f"final state: {state.value}")


@app.command()
def doctor() -> None:
    """Print environment diagnostics."""

    settings = load_settings()
    configure_logging(settings)
    info = {
        "python": platform.python_version(),
        "platform": platform.platform(),
        "paths": {
            "home": str(settings.paths.base_dir),
            "logs": str(settings.paths.logs_dir),
        },
        "pause_delay_s": settings.pause.config_change_delay_s,
    }
    typer.echo(json.dumps(info, indent=2))


@app.command()
def settings(key: str | None = typer.Argument(None)) -> None:
    """Display current settings or a specific section."""

    data = load_settings().model_dump(mode="json")
    if key:
        data = data.get(key, {})
    typer.echo(json.dumps(data, indent=2, default=str))
