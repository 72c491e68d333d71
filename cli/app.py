from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_evaluation, render_location, render_locations
from cli.samples import parse_samples
from logging_config import configure_logging


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for querying the river water-quality advisory service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1, message="CLI state is uninitialized.")
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Advisory API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="HTTP timeout in seconds.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Emit diagnostic log records on stderr.",
    ),
) -> None:
    """Entry point for the CLI."""
    configure_logging("DEBUG" if verbose else "ERROR")
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("locations")
def locations_command(ctx: typer.Context) -> None:
    """List monitoring locations and whether they need treatment."""
    state = _get_state(ctx)
    render_locations(state.client.list_locations())


@app.command("show")
def show_command(
    ctx: typer.Context,
    location_id: str = typer.Argument(..., help="Location identifier, e.g. loc-01."),
) -> None:
    """Show the advisory for a single location."""
    state = _get_state(ctx)
    render_location(state.client.get_location(location_id))


@app.command("evaluate")
def evaluate_command(
    ctx: typer.Context,
    file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="CSV with hour,turbidity,ph,dissolved_oxygen,bod."
    ),
) -> None:
    """Evaluate a sample series read from a CSV file."""
    state = _get_state(ctx)
    try:
        with file.open("r", encoding="utf-8", newline="") as handle:
            parsed = parse_samples(handle, source=str(file))
    except ValueError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    for error in parsed.errors:
        typer.secho(
            f"Skipped row {error.row_number}: {error.reason}",
            fg=typer.colors.YELLOW,
            err=True,
        )

    typer.echo(f"Evaluating {len(parsed.samples)} samples against {state.config.base_url} ...")
    result = state.client.evaluate(parsed.samples)
    typer.echo()
    render_evaluation(result)
