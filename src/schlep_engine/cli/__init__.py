"""CLI module for schlep-engine."""

from __future__ import annotations

import json
from collections.abc import Callable  # noqa: TC003
from typing import Any

import httpx
import typer
from pydantic import BaseModel  # noqa: TC002

from schlep_engine import __version__
from schlep_engine.client import SchlepClient
from schlep_engine.config import Settings, load_settings
from schlep_engine.exceptions import ApiError, ConfigurationError
from schlep_engine.models import TrainConfig
from schlep_engine.observability import LogLevel, configure_logging


EXIT_API_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_TRANSPORT_ERROR = 3


app = typer.Typer(
    name="schlep",
    help="Command-line client for the Schlep-engine API.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:  # noqa: FBT001
    """Print version and exit."""
    if value:
        typer.echo(f"schlep version {__version__}")
        raise typer.Exit


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(  # noqa: FBT001
        False,  # noqa: FBT003
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(  # noqa: FBT001
        False,  # noqa: FBT003
        "--verbose",
        "-V",
        help="Enable verbose (debug) logging.",
    ),
    quiet: bool = typer.Option(  # noqa: FBT001
        False,  # noqa: FBT003
        "--quiet",
        "-q",
        help="Only show warnings and errors.",
    ),
    config_file: str | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file.",
    ),
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        help="Override the API base URL.",
    ),
) -> None:
    """Schlep-engine CLI."""
    del version  # Handled by callback

    if verbose and quiet:
        typer.echo("Error: --verbose and --quiet are mutually exclusive.", err=True)
        raise typer.Exit(1)

    try:
        settings = load_settings(config_file)
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(EXIT_CONFIG_ERROR) from exc

    if verbose:
        level = LogLevel.DEBUG
    elif quiet:
        level = LogLevel.WARNING
    else:
        level = settings.log_level

    configure_logging(level=level)

    if base_url is not None:
        settings = settings.model_copy(update={"base_url": base_url.rstrip("/")})
    ctx.obj = settings


def _run(ctx: typer.Context, call: Callable[[SchlepClient], BaseModel]) -> None:
    """Run one API call and print its result, mapping errors to exit codes."""
    settings: Settings = ctx.obj
    try:
        with SchlepClient.from_settings(settings) as client:
            result = call(client)
    except ApiError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(EXIT_API_ERROR) from exc
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(EXIT_CONFIG_ERROR) from exc
    except httpx.TransportError as exc:
        typer.echo(f"Error: could not reach {settings.base_url}: {exc}", err=True)
        raise typer.Exit(EXIT_TRANSPORT_ERROR) from exc

    typer.echo(result.model_dump_json(indent=2))


def _parse_param(raw: str) -> tuple[str, Any]:
    """Split ``KEY=VALUE``; VALUE is read as JSON when it parses."""
    key, sep, value = raw.partition("=")
    if not sep or not key:
        msg = f"Expected KEY=VALUE, got {raw!r}"
        raise typer.BadParameter(msg, param_hint="--param")
    try:
        return key, json.loads(value)
    except ValueError:
        return key, value


@app.command()
def upload(
    ctx: typer.Context,
    data: str = typer.Argument(..., help="Data to upload, as text."),
) -> None:
    """Upload data for processing."""
    _run(ctx, lambda client: client.upload(data))


@app.command()
def train(
    ctx: typer.Context,
    model_type: str | None = typer.Option(
        None,
        "--model-type",
        "-m",
        help="Model type to train.",
    ),
    dataset_id: str | None = typer.Option(
        None,
        "--dataset-id",
        "-d",
        help="Dataset to train on.",
    ),
    params: list[str] | None = typer.Option(
        None,
        "--param",
        "-p",
        help="Training parameter as KEY=VALUE (repeatable).",
    ),
    config_json: str | None = typer.Option(
        None,
        "--config-json",
        help="Full training configuration as JSON, sent verbatim.",
    ),
) -> None:
    """Start training a model."""
    config: TrainConfig | str
    if config_json is not None:
        if model_type or dataset_id or params:
            msg = "--config-json cannot be combined with other training options."
            raise typer.BadParameter(msg, param_hint="--config-json")
        config = config_json
    else:
        config = TrainConfig(
            model_type=model_type,
            dataset_id=dataset_id,
            parameters=dict(_parse_param(p) for p in params or []),
        )

    _run(ctx, lambda client: client.train(config))


@app.command()
def deploy(
    ctx: typer.Context,
    model_id: str = typer.Argument(..., help="Model to deploy."),
) -> None:
    """Deploy a trained model."""
    _run(ctx, lambda client: client.deploy(model_id))


@app.command()
def status(
    ctx: typer.Context,
    job_id: str = typer.Argument(..., help="Job to look up."),
) -> None:
    """Show the status of a job."""
    _run(ctx, lambda client: client.status(job_id))


__all__ = ["app"]
