"""
CLI entry point for the step calculator.
"""

import asyncio
import logging
import sys

import typer

from .common.config import load_config, set_active_config
from .components.calculator.controller import CalculatorController
from .components.calculator.events import InputChanged, TriggerComputation
from .components.calculator.state import UIState
from .components.calculator.stepper import Stepper
from .components.calculator.validator import validate

# Force unbuffered output for live progress updates when supported
_reconf = getattr(sys.stdout, "reconfigure", None)
if callable(_reconf):
    _reconf(line_buffering=True)

cli_app = typer.Typer(help="Reveal triangular-number prefix arrays one step at a time.")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


async def run_computation(text: str, time_unit_seconds: float) -> list[tuple[int, ...]]:
    """Drive a controller through one computation and echo every emitted array."""
    controller = CalculatorController(Stepper(time_unit_seconds=time_unit_seconds))
    target = validate(text).value
    emitted: list[tuple[int, ...]] = []
    finished = asyncio.Event()

    def _on_state(state: UIState) -> None:
        if state.target != target or not state.series:
            return
        if not emitted or emitted[-1] != state.series:
            emitted.append(state.series)
            typer.echo(f"{state.target}: {list(state.series)}")
        if len(state.series) == target:
            finished.set()

    controller.subscribe(_on_state)
    controller.start()
    try:
        controller.submit(InputChanged(text))
        controller.submit(TriggerComputation())
        await controller.join()
        if target:
            await finished.wait()
    finally:
        await controller.close()
    return emitted


@cli_app.command()
def compute(
    number: str = typer.Argument(..., help="A whole number from 0 to 99."),
    time_unit: float | None = typer.Option(
        None, "--time-unit", help="Seconds per time unit (step k waits k * 100 units)."
    ),
    config: str | None = typer.Option(
        None, "--config", "-c", help="Path to an alternative stepcalc_config.yaml file."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Compute without the TUI, printing each array as it is revealed."""
    _configure_logging(verbose)
    result = validate(number)
    if not result.is_valid:
        typer.echo(f"❌ {result.error}: {number!r}", err=True)
        raise typer.Exit(1)

    stepcalc_config = load_config(config)
    set_active_config(stepcalc_config)
    unit = time_unit if time_unit is not None else stepcalc_config.time_unit_seconds
    if unit <= 0:
        typer.echo("❌ --time-unit must be positive", err=True)
        raise typer.Exit(1)

    typer.echo(f"{result.value}:")
    asyncio.run(run_computation(number, unit))


@cli_app.command()
def tui(
    config: str | None = typer.Option(
        None, "--config", "-c", help="Path to an alternative stepcalc_config.yaml file."
    ),
    log: str | None = typer.Option(None, "--log", "-l", help="Path to write a session log file."),
    debug: bool = typer.Option(
        False, "--debug", "-d", help="Enable debug logging to a temporary file."
    ),
    initial: str | None = typer.Option(
        None, "--initial", "-i", help="Text the input field starts with."
    ),
) -> None:
    """Start the Step Calculator TUI."""
    from .components.tui.stepcalc_tui import StepcalcTUI

    stepcalc_config = load_config(config)
    set_active_config(stepcalc_config)

    app = StepcalcTUI(config=stepcalc_config, log_file=log, debug=debug, initial_text=initial)
    app.run()


def main() -> None:
    cli_app()


if __name__ == "__main__":
    main()
