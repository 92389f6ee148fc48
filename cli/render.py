from __future__ import annotations

from typing import Any, Iterable

import typer

from models.readings import PersistedMotion
from services.rules import Alert


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_alerts(alerts: Iterable[Alert]) -> None:
    echo_heading("Alerts")
    rendered = False
    for alert in alerts:
        typer.secho(f"  - [{alert.rule.value}] {alert.message}", fg=typer.colors.YELLOW)
        rendered = True
    if not rendered:
        typer.echo("No alerts.")


def render_persisted(persisted: PersistedMotion) -> None:
    echo_heading("Stored Reading")
    reading = persisted.reading
    echo_key_values(
        [
            ("record_id", persisted.record_id),
            ("stored_at", persisted.stored_at.isoformat()),
            ("device_id", reading.device_id),
            ("sensor_id", reading.sensor_id),
            ("timestamp", reading.timestamp.isoformat()),
            ("speed", reading.speed),
        ]
    )


def render_error(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED, err=True)
