"""gdyn init: create the table and its secondary index."""

from __future__ import annotations

import typer

from grafeas_dynamodb.cli import _exitcodes as ec
from grafeas_dynamodb.cli._output import print_error, print_object
from grafeas_dynamodb.cli._storage import open_client, resolve_config
from grafeas_dynamodb.config import SchemaConfig
from grafeas_dynamodb.errors import GrafeasStorageError
from grafeas_dynamodb.provision import ensure_table, table_definition


def init_cmd(
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the table definition only"),
    no_wait: bool = typer.Option(False, "--no-wait", help="Do not wait for the table to become active"),
) -> None:
    """Create the DynamoDB table if it does not exist."""
    from grafeas_dynamodb.cli import state

    json_mode = state.json_output
    schema = SchemaConfig()

    try:
        if dry_run:
            config = resolve_config()
            print_object(table_definition(config.table_name, schema), json_mode=True)
            return

        client, config = open_client()
        created = ensure_table(client, config.table_name, schema, wait=not no_wait)
    except (OSError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(ec.USAGE_ERROR)
    except GrafeasStorageError as e:
        print_error(str(e))
        raise typer.Exit(ec.for_error(e))

    data = {
        "table_name": config.table_name,
        "status": "created" if created else "exists",
    }
    if json_mode:
        print_object(data, json_mode=True)
    elif created:
        print(f"Created table: {config.table_name}")
    else:
        print(f"Table already exists: {config.table_name}")
