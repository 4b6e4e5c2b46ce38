"""Write paths: conditional single-row writes and two-row transactions."""

from __future__ import annotations

from typing import Any, Mapping

from botocore.exceptions import BotoCoreError, ClientError

from grafeas_dynamodb._client import (
    CONDITIONAL_CHECK_FAILED,
    TRANSACTION_CANCELED,
    cancellation_codes,
    error_code,
    translate_error,
)
from grafeas_dynamodb.codec import Row, SchemaCodec
from grafeas_dynamodb.config import SchemaConfig


class ConditionFailed(Exception):
    """A write precondition did not hold.

    ``index`` is the position of the failing item within a transaction, or 0
    for single-row writes.
    """

    def __init__(self, index: int = 0) -> None:
        self.index = index
        super().__init__(f"condition check failed on item {index}")


class TransactionalWriter:
    def __init__(self, client: Any, table_name: str, schema: SchemaConfig, codec: SchemaCodec) -> None:
        self._client = client
        self._table_name = table_name
        self._schema = schema
        self._codec = codec

    def _condition(
        self,
        *,
        exists: bool,
        expected: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        fn = "attribute_exists" if exists else "attribute_not_exists"
        names = {"#pk": self._schema.partition_key, "#sk": self._schema.sort_key}
        clauses = [f"{fn}(#pk)", f"{fn}(#sk)"]
        values: dict[str, Any] = {}
        for i, (attr, value) in enumerate((expected or {}).items()):
            names[f"#c{i}"] = attr
            values[f":c{i}"] = value
            clauses.append(f"#c{i} = :c{i}")
        out: dict[str, Any] = {
            "ConditionExpression": " AND ".join(clauses),
            "ExpressionAttributeNames": names,
        }
        if values:
            out["ExpressionAttributeValues"] = self._codec.serialize(values)
        return out

    def _call(self, operation: str, fn: Any, **kwargs: Any) -> None:
        try:
            fn(**kwargs)
        except ClientError as e:
            code = error_code(e)
            if code == CONDITIONAL_CHECK_FAILED:
                raise ConditionFailed() from e
            if code == TRANSACTION_CANCELED:
                reasons = cancellation_codes(e)
                if "ConditionalCheckFailed" in reasons:
                    raise ConditionFailed(reasons.index("ConditionalCheckFailed")) from e
            raise translate_error(operation, e) from e
        except BotoCoreError as e:
            raise translate_error(operation, e) from e

    # -- single row ----------------------------------------------------------

    def put_new(self, row: Row) -> None:
        """Put a row that must not exist yet."""
        self._call(
            "put_item",
            self._client.put_item,
            TableName=self._table_name,
            Item=self._codec.to_item(row),
            **self._condition(exists=False),
        )

    def put_existing(self, row: Row) -> None:
        """Replace a row that must already exist."""
        self._call(
            "put_item",
            self._client.put_item,
            TableName=self._table_name,
            Item=self._codec.to_item(row),
            **self._condition(exists=True),
        )

    def delete_existing(self, key: Mapping[str, str]) -> None:
        self._call(
            "delete_item",
            self._client.delete_item,
            TableName=self._table_name,
            Key=self._codec.serialize(key),
            **self._condition(exists=True),
        )

    # -- transactions --------------------------------------------------------

    def transact_put(
        self,
        primary: Row,
        link: Row,
        *,
        create: bool,
        expected: Mapping[str, str] | None = None,
    ) -> None:
        """Atomically put a primary row (conditionally) and its link row.

        With ``create`` the primary must not exist; otherwise it must exist and
        match every attribute in ``expected``. The link row is written
        unconditionally.
        """
        primary_put: dict[str, Any] = {
            "TableName": self._table_name,
            "Item": self._codec.to_item(primary),
            **self._condition(exists=not create, expected=expected),
        }
        link_put = {"TableName": self._table_name, "Item": self._codec.to_item(link)}
        self._call(
            "transact_write_items",
            self._client.transact_write_items,
            TransactItems=[{"Put": primary_put}, {"Put": link_put}],
        )

    def transact_delete(self, primary_key: Mapping[str, str], link_key: Mapping[str, str]) -> None:
        """Atomically delete an existing primary row and its link row."""
        primary_delete: dict[str, Any] = {
            "TableName": self._table_name,
            "Key": self._codec.serialize(primary_key),
            **self._condition(exists=True),
        }
        link_delete = {"TableName": self._table_name, "Key": self._codec.serialize(link_key)}
        self._call(
            "transact_write_items",
            self._client.transact_write_items,
            TransactItems=[{"Delete": primary_delete}, {"Delete": link_delete}],
        )
