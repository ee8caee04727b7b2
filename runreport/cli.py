from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from pydantic import ValidationError

from .limits import LimitSettings, load_limit_settings
from .record import FunctionRunResult
from .report import ReportStyle, render_report
from .telemetry import timed
from .units import BYTE_SIZE, INSTRUCTION_COUNT

app = typer.Typer(help="Render sandboxed run results as annotated reports")


@app.callback()
def _root_callback():
    """runreport CLI root."""
    pass


def _settings_or_exit(config: Optional[Path], scale_factor: Optional[float]) -> LimitSettings:
    try:
        return load_limit_settings(config, scale_factor=scale_factor)
    except (TypeError, ValueError) as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(1)


@app.command("show")
def cmd_show(
    record: Path = typer.Argument(..., exists=True, dir_okay=False, help="Serialized run result (JSON)"),
    scale_factor: Optional[float] = typer.Option(None, help="Scale factor applied to the default limits"),
    config: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Limit settings YAML/JSON"),
    plain: bool = typer.Option(False, "--plain", help="Render without terminal styling"),
    as_json: bool = typer.Option(False, "--json", help="Print the record as JSON instead of the report"),
):
    """Print the report for a serialized run result."""
    load_dotenv()
    settings = _settings_or_exit(config, scale_factor)
    try:
        result = FunctionRunResult.from_json(record.read_bytes(), scale_factor=settings.scale_factor)
    except ValidationError as exc:
        typer.echo(f"ERROR: invalid run result {record}: {exc}", err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(result.to_json())
        return

    style = ReportStyle.plain() if plain else ReportStyle()
    with timed("render", run=result.name) as stats:
        text = render_report(result, result.limits(settings), style)
        stats["chars"] = len(text)
    typer.echo(text, nl=False)


@app.command("limits")
def cmd_limits(
    scale_factor: Optional[float] = typer.Option(None, help="Scale factor applied to the default limits"),
    config: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Limit settings YAML/JSON"),
):
    """Print the effective resource limits."""
    load_dotenv()
    limits = _settings_or_exit(config, scale_factor).scaled()
    typer.echo(BYTE_SIZE.format("Input Size", limits.input_size, limits.input_size))
    typer.echo(BYTE_SIZE.format("Output Size", limits.output_size, limits.output_size))
    typer.echo(INSTRUCTION_COUNT.format("Instructions", limits.instructions, limits.instructions))


if __name__ == "__main__":
    app()
