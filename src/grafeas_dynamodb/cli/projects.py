"""gdyn projects: inspect stored projects."""

from __future__ import annotations

import typer

from grafeas_dynamodb.cli import _exitcodes as ec
from grafeas_dynamodb.cli._output import print_error, print_object, print_page, to_data
from grafeas_dynamodb.cli._storage import collect_pages, open_cli_storage
from grafeas_dynamodb.errors import GrafeasStorageError

app = typer.Typer(no_args_is_help=True)


@app.command(name="list")
def list_projects_cmd(
    page_size: int = typer.Option(50, "--page-size", help="Max rows per page"),
    page_token: str = typer.Option("", "--page-token", help="Continuation token"),
    all_pages: bool = typer.Option(False, "--all", help="Follow continuation tokens"),
) -> None:
    """List projects."""
    from grafeas_dynamodb.cli import state

    try:
        storage = open_cli_storage()
        projects, token = collect_pages(
            lambda t: storage.list_projects(page_size=page_size, page_token=t),
            page_token,
            all_pages=all_pages,
        )
    except (GrafeasStorageError, OSError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(ec.for_error(e))

    print_page(["name"], [[p.name] for p in projects], token, json_mode=state.json_output)


@app.command(name="get")
def get_project_cmd(
    project_id: str = typer.Argument(..., help="Project id"),
) -> None:
    """Show one project."""
    from grafeas_dynamodb.cli import state

    try:
        project = open_cli_storage().get_project(project_id)
    except (GrafeasStorageError, OSError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(ec.for_error(e))

    print_object(to_data(project), json_mode=state.json_output)
