"""Table provisioning for the single-table layout."""

from __future__ import annotations

from typing import Any

import structlog
from botocore.exceptions import BotoCoreError, ClientError, WaiterError

from grafeas_dynamodb._client import error_code, translate_error
from grafeas_dynamodb.config import SchemaConfig

logger = structlog.get_logger(__name__)


def table_definition(table_name: str, schema: SchemaConfig) -> dict[str, Any]:
    """CreateTable request for the table and its overloaded secondary index."""
    return {
        "TableName": table_name,
        "AttributeDefinitions": [
            {"AttributeName": schema.partition_key, "AttributeType": "S"},
            {"AttributeName": schema.sort_key, "AttributeType": "S"},
            {"AttributeName": schema.data_key, "AttributeType": "S"},
        ],
        "KeySchema": [
            {"AttributeName": schema.partition_key, "KeyType": "HASH"},
            {"AttributeName": schema.sort_key, "KeyType": "RANGE"},
        ],
        "GlobalSecondaryIndexes": [
            {
                "IndexName": schema.index_name,
                "KeySchema": [
                    {"AttributeName": schema.sort_key, "KeyType": "HASH"},
                    {"AttributeName": schema.data_key, "KeyType": "RANGE"},
                ],
                "Projection": {"ProjectionType": "ALL"},
            }
        ],
        "BillingMode": "PAY_PER_REQUEST",
    }


def ensure_table(
    client: Any,
    table_name: str,
    schema: SchemaConfig,
    *,
    wait: bool = True,
) -> bool:
    """Create the table if missing. Returns True when it was created."""
    try:
        client.create_table(**table_definition(table_name, schema))
    except ClientError as e:
        if error_code(e) == "ResourceInUseException":
            logger.info("provision.table_exists", table=table_name)
            return False
        raise translate_error("create_table", e) from e
    except BotoCoreError as e:
        raise translate_error("create_table", e) from e

    logger.info("provision.table_created", table=table_name)
    if wait:
        try:
            client.get_waiter("table_exists").wait(TableName=table_name)
        except WaiterError as e:
            raise translate_error("create_table", e) from e
    return True


def describe_table(client: Any, table_name: str) -> dict[str, Any]:
    """Summarize table status, key schema and index layout."""
    try:
        table = client.describe_table(TableName=table_name)["Table"]
    except (ClientError, BotoCoreError) as e:
        raise translate_error("describe_table", e) from e

    return {
        "table_name": table.get("TableName", table_name),
        "status": table.get("TableStatus"),
        "item_count": table.get("ItemCount"),
        "billing_mode": (table.get("BillingModeSummary") or {}).get("BillingMode"),
        "key_schema": {k["KeyType"]: k["AttributeName"] for k in table.get("KeySchema", [])},
        "indexes": {
            gsi["IndexName"]: {k["KeyType"]: k["AttributeName"] for k in gsi.get("KeySchema", [])}
            for gsi in table.get("GlobalSecondaryIndexes", [])
        },
    }
