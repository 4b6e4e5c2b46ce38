"""gdyn occurrences: inspect stored occurrences."""

from __future__ import annotations

import typer

from grafeas_dynamodb.cli import _exitcodes as ec
from grafeas_dynamodb.cli._output import print_error, print_object, print_page, to_data
from grafeas_dynamodb.cli._storage import collect_pages, open_cli_storage
from grafeas_dynamodb.errors import GrafeasStorageError

app = typer.Typer(no_args_is_help=True)


@app.command(name="list")
def list_occurrences_cmd(
    project_id: str = typer.Argument(..., help="Project id"),
    page_size: int = typer.Option(50, "--page-size", help="Max rows per page"),
    page_token: str = typer.Option("", "--page-token", help="Continuation token"),
    all_pages: bool = typer.Option(False, "--all", help="Follow continuation tokens"),
) -> None:
    """List the occurrences of a project."""
    from grafeas_dynamodb.cli import state

    try:
        storage = open_cli_storage()
        occurrences, token = collect_pages(
            lambda t: storage.list_occurrences(project_id, page_size=page_size, page_token=t),
            page_token,
            all_pages=all_pages,
        )
    except (GrafeasStorageError, OSError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(ec.for_error(e))

    rows = [[o.name, o.note_name, o.resource.uri if o.resource else ""] for o in occurrences]
    print_page(["name", "noteName", "resource"], rows, token, json_mode=state.json_output)


@app.command(name="get")
def get_occurrence_cmd(
    project_id: str = typer.Argument(..., help="Project id"),
    occurrence_id: str = typer.Argument(..., help="Occurrence id"),
) -> None:
    """Show one occurrence."""
    from grafeas_dynamodb.cli import state

    try:
        occurrence = open_cli_storage().get_occurrence(project_id, occurrence_id)
    except (GrafeasStorageError, OSError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(ec.for_error(e))

    print_object(to_data(occurrence), json_mode=state.json_output)


@app.command(name="note")
def get_occurrence_note_cmd(
    project_id: str = typer.Argument(..., help="Project id"),
    occurrence_id: str = typer.Argument(..., help="Occurrence id"),
) -> None:
    """Show the note an occurrence references."""
    from grafeas_dynamodb.cli import state

    try:
        note = open_cli_storage().get_occurrence_note(project_id, occurrence_id)
    except (GrafeasStorageError, OSError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(ec.for_error(e))

    print_object(to_data(note), json_mode=state.json_output)
