"""gdyn CLI: operator console for the Grafeas DynamoDB table."""

from __future__ import annotations

from typing import Optional

import typer

from grafeas_dynamodb.cli import info, init_cmd, notes, occurrences, projects
from grafeas_dynamodb.logging_config import configure_logging

app = typer.Typer(
    name="gdyn",
    help="gdyn: inspect and provision the Grafeas DynamoDB table.",
    no_args_is_help=True,
)


class _State:
    """Global CLI state shared across subcommands."""

    table: str | None = None
    region: str | None = None
    endpoint_url: str | None = None
    config: str | None = None
    json_output: bool = False


state = _State()


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError, version

        try:
            v = version("grafeas-dynamodb")
        except PackageNotFoundError:
            from grafeas_dynamodb import __version__ as v
        print(f"gdyn {v}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    table: Optional[str] = typer.Option(
        None,
        "--table",
        envvar="GRAFEAS_DYNAMODB_TABLE",
        help="DynamoDB table name (default: grafeas)",
    ),
    region: Optional[str] = typer.Option(
        None, "--region", envvar="GRAFEAS_DYNAMODB_REGION", help="AWS region"
    ),
    endpoint_url: Optional[str] = typer.Option(
        None,
        "--endpoint-url",
        envvar="GRAFEAS_DYNAMODB_ENDPOINT_URL",
        help="DynamoDB endpoint (e.g. http://localhost:8000 for DynamoDB Local)",
    ),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        envvar="GRAFEAS_DYNAMODB_CONFIG",
        help="Grafeas server YAML config file",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output"),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="DEBUG, INFO, WARNING or ERROR"
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version", is_eager=True, callback=_version_callback
    ),
) -> None:
    """Global options for all gdyn commands."""
    if log_level is not None and log_level.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR"}:
        raise typer.BadParameter(f"Unknown log level {log_level!r}", param_hint="--log-level")
    configure_logging(level=log_level.upper() if log_level else None)  # type: ignore[arg-type]

    state.table = table
    state.region = region
    state.endpoint_url = endpoint_url
    state.config = config
    state.json_output = json_output
    if ctx.invoked_subcommand is None and not version:
        print(ctx.get_help())
        raise typer.Exit()


app.add_typer(projects.app, name="projects", help="Inspect projects")
app.add_typer(notes.app, name="notes", help="Inspect notes and their occurrences")
app.add_typer(occurrences.app, name="occurrences", help="Inspect occurrences")

app.command(name="init")(init_cmd.init_cmd)
app.command(name="info")(info.info_cmd)


def main() -> None:
    app()
