from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, Optional, Union

import typer
from pydantic import ValidationError

from cli.config import CLIConfig, load_config
from cli.render import render_alerts, render_error, render_persisted
from datastore.mock_motion_table import MockMotionTable, build_default_table
from logging_config import configure_logging
from models.errors import MotionValidationError, RecordNotFoundError
from models.readings import MeterReading, MovingMotion, StaticMotion, parse_motion
from services.repository import MotionRepository
from services.rules import notify_me_on_moving_high_consumption_device, sanity_check_sensitivity


@dataclass
class CLIState:
    config: CLIConfig
    table: MockMotionTable
    repository: MotionRepository


app = typer.Typer(
    help="Validate motion readings and run sensitivity and consumption checks.",
    context_settings={"help_option_names": ["-h", "--help"]},
)

_ReadingPath = typer.Argument(
    ..., exists=True, dir_okay=False, readable=True, help="Path to a JSON reading."
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


def _fail(message: str) -> NoReturn:
    render_error(message)
    raise typer.Exit(code=1)


def _load_motion(path: Path) -> Union[StaticMotion, MovingMotion]:
    try:
        return parse_motion(path.read_text())
    except ValidationError as exc:
        _fail(f"Invalid motion reading in {path}: {exc.error_count()} error(s)\n{exc}")


def _load_meter(path: Path) -> MeterReading:
    try:
        return MeterReading.model_validate_json(path.read_text())
    except ValidationError as exc:
        _fail(f"Invalid meter reading in {path}: {exc.error_count()} error(s)\n{exc}")


@app.callback()
def main(
    ctx: typer.Context,
    table_path: Optional[Path] = typer.Option(
        None,
        "--table-path",
        "-t",
        dir_okay=False,
        help="JSON file backing the motion table (defaults to MOTION_TABLE_PERSISTENCE_PATH).",
    ),
    in_memory: bool = typer.Option(
        False,
        "--in-memory",
        help="Keep the motion table in memory only.",
    ),
    threshold_hours: Optional[float] = typer.Option(
        None,
        "--threshold-hours",
        help="Hours between opposite-state readings before a sensitivity alert.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(
        table_path=table_path,
        threshold_hours=threshold_hours,
        in_memory=in_memory,
    )
    table = build_default_table(
        name=config.table_name,
        path=str(config.table_path) if config.table_path else "",
    )
    ctx.obj = CLIState(config=config, table=table, repository=MotionRepository(table))


@app.command("record")
def record_command(
    ctx: typer.Context,
    reading: Path = _ReadingPath,
) -> None:
    """Validate a moving reading and store a sanitized copy."""
    state = _get_state(ctx)
    motion = _load_motion(reading)
    try:
        persisted = asyncio.run(state.repository.create_moving_motion(motion))
    except MotionValidationError as exc:
        _fail(f"Validation failed ({exc.kind.value}): {exc.detail}")
    typer.secho("Reading stored.", fg=typer.colors.GREEN)
    render_persisted(persisted)


@app.command("seed")
def seed_command(
    ctx: typer.Context,
    reading: Path = _ReadingPath,
) -> None:
    """Add a reading of either state to the history without validation."""
    state = _get_state(ctx)
    motion = _load_motion(reading)
    record_id = state.table.add_reading(motion)
    typer.echo(f"Seeded {motion.status} reading for device {motion.device_id}. record_id={record_id}")


@app.command("check-sensitivity")
def check_sensitivity_command(
    ctx: typer.Context,
    reading: Path = _ReadingPath,
) -> None:
    """Compare a reading with the device's last opposite-state record."""
    state = _get_state(ctx)
    motion = _load_motion(reading)
    try:
        alert = asyncio.run(
            sanity_check_sensitivity(
                motion, state.repository, threshold_hours=state.config.threshold_hours
            )
        )
    except RecordNotFoundError as exc:
        _fail(str(exc))
    render_alerts([alert] if alert is not None else [])


@app.command("check-consumption")
def check_consumption_command(
    ctx: typer.Context,
    motion_reading: Path = _ReadingPath,
    meter_reading: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="Path to a JSON meter reading."
    ),
) -> None:
    """Attribute high power consumption to device movement."""
    _get_state(ctx)
    motion = _load_motion(motion_reading)
    meter = _load_meter(meter_reading)
    try:
        alerts = notify_me_on_moving_high_consumption_device(motion, meter)
    except MotionValidationError as exc:
        _fail(f"Validation failed ({exc.kind.value}): {exc.detail}")
    render_alerts(alerts)


def run() -> None:
    configure_logging()
    app()
