"""gdyn info: show table status and key layout."""

from __future__ import annotations

import typer

from grafeas_dynamodb.cli import _exitcodes as ec
from grafeas_dynamodb.cli._output import print_error, print_object
from grafeas_dynamodb.cli._storage import open_client
from grafeas_dynamodb.errors import GrafeasStorageError
from grafeas_dynamodb.provision import describe_table


def info_cmd() -> None:
    """Describe the configured table."""
    from grafeas_dynamodb.cli import state

    try:
        client, config = open_client()
        info = describe_table(client, config.table_name)
    except (OSError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(ec.USAGE_ERROR)
    except GrafeasStorageError as e:
        print_error(str(e))
        raise typer.Exit(ec.for_error(e))

    if state.json_output:
        print_object(info, json_mode=True)
        return

    print(f"Table: {info['table_name']}")
    print(f"Status: {info['status']}")
    print(f"Items: {info['item_count']}")
    print(f"Billing: {info['billing_mode']}")
    key_schema = info["key_schema"]
    print(f"Key: {key_schema.get('HASH')} / {key_schema.get('RANGE')}")
    for name, keys in info["indexes"].items():
        print(f"Index {name}: {keys.get('HASH')} / {keys.get('RANGE')}")
