"""gdyn notes: inspect notes and the occurrences linked to them."""

from __future__ import annotations

import typer

from grafeas_dynamodb.cli import _exitcodes as ec
from grafeas_dynamodb.cli._output import print_error, print_object, print_page, to_data
from grafeas_dynamodb.cli._storage import collect_pages, open_cli_storage
from grafeas_dynamodb.errors import GrafeasStorageError

app = typer.Typer(no_args_is_help=True)


@app.command(name="list")
def list_notes_cmd(
    project_id: str = typer.Argument(..., help="Project id"),
    page_size: int = typer.Option(50, "--page-size", help="Max rows per page"),
    page_token: str = typer.Option("", "--page-token", help="Continuation token"),
    all_pages: bool = typer.Option(False, "--all", help="Follow continuation tokens"),
) -> None:
    """List the notes of a project."""
    from grafeas_dynamodb.cli import state

    try:
        storage = open_cli_storage()
        notes, token = collect_pages(
            lambda t: storage.list_notes(project_id, page_size=page_size, page_token=t),
            page_token,
            all_pages=all_pages,
        )
    except (GrafeasStorageError, OSError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(ec.for_error(e))

    rows = [[n.name, n.kind.value, n.short_description] for n in notes]
    print_page(["name", "kind", "shortDescription"], rows, token, json_mode=state.json_output)


@app.command(name="get")
def get_note_cmd(
    project_id: str = typer.Argument(..., help="Project id"),
    note_id: str = typer.Argument(..., help="Note id"),
) -> None:
    """Show one note."""
    from grafeas_dynamodb.cli import state

    try:
        note = open_cli_storage().get_note(project_id, note_id)
    except (GrafeasStorageError, OSError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(ec.for_error(e))

    print_object(to_data(note), json_mode=state.json_output)


@app.command(name="occurrences")
def list_note_occurrences_cmd(
    project_id: str = typer.Argument(..., help="Project id of the note"),
    note_id: str = typer.Argument(..., help="Note id"),
    page_size: int = typer.Option(50, "--page-size", help="Max rows per page"),
    page_token: str = typer.Option("", "--page-token", help="Continuation token"),
    all_pages: bool = typer.Option(False, "--all", help="Follow continuation tokens"),
) -> None:
    """List occurrences, across all projects, that reference a note."""
    from grafeas_dynamodb.cli import state

    try:
        storage = open_cli_storage()
        occurrences, token = collect_pages(
            lambda t: storage.list_note_occurrences(
                project_id, note_id, page_size=page_size, page_token=t
            ),
            page_token,
            all_pages=all_pages,
        )
    except (GrafeasStorageError, OSError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(ec.for_error(e))

    rows = [[o.name, o.resource.uri if o.resource else ""] for o in occurrences]
    print_page(["name", "resource"], rows, token, json_mode=state.json_output)
