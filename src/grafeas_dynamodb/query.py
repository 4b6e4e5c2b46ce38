"""Read paths: consistent primary-key lookups and secondary-index range queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, TypeVar

import structlog
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel

from grafeas_dynamodb._client import translate_error
from grafeas_dynamodb.codec import Row, SchemaCodec
from grafeas_dynamodb.config import SchemaConfig
from grafeas_dynamodb.errors import InvalidPageTokenError
from grafeas_dynamodb.keys import IndexQuery
from grafeas_dynamodb.pagination import decode_page_token, encode_page_token

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


@dataclass
class Page(Generic[M]):
    """One page of decoded records plus the token resuming after it."""

    items: list[M] = field(default_factory=list)
    next_page_token: str = ""


class QueryEngine:
    def __init__(self, client: Any, table_name: str, schema: SchemaConfig, codec: SchemaCodec) -> None:
        self._client = client
        self._table_name = table_name
        self._schema = schema
        self._codec = codec

    def get(self, key: Mapping[str, str]) -> Row | None:
        """Strongly consistent lookup; ``None`` when absent or degenerate."""
        try:
            resp = self._client.get_item(
                TableName=self._table_name,
                Key=self._codec.serialize(key),
                ConsistentRead=True,
            )
        except (ClientError, BotoCoreError) as e:
            raise translate_error("get_item", e) from e

        row = self._codec.from_item(resp.get("Item"))
        if row.is_degenerate:
            return None
        return row

    def build_request(
        self,
        query: IndexQuery,
        page_size: int,
        exclusive_start_key: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        s = self._schema
        names = {"#hash": s.sort_key, "#kind": s.kind_key}
        values: dict[str, Any] = {
            ":hash": query.hash_value,
            ":kind": self._codec.kind_token(query.kind),
        }
        key_expr = "#hash = :hash"
        if query.range_value is not None:
            names["#range"] = s.data_key
            values[":range"] = query.range_value
            key_expr = f"{key_expr} AND #range = :range"

        req: dict[str, Any] = {
            "TableName": self._table_name,
            "IndexName": s.index_name,
            "KeyConditionExpression": key_expr,
            "FilterExpression": "#kind = :kind",
            "ExpressionAttributeNames": names,
            "ExpressionAttributeValues": self._codec.serialize(values),
            "ScanIndexForward": True,
        }
        if page_size > 0:
            req["Limit"] = page_size
        if exclusive_start_key:
            req["ExclusiveStartKey"] = self._codec.serialize(exclusive_start_key)
        return req

    def list_page(
        self,
        query: IndexQuery,
        model: type[M],
        *,
        page_size: int,
        page_token: str = "",
    ) -> Page[M]:
        """Query one page of the index.

        Malformed tokens and backend failures yield an empty page with an empty
        token rather than an error. Rows whose payload does not decode raise
        :class:`DeserializationError`.
        """
        start_key = None
        if page_token:
            try:
                start_key = decode_page_token(page_token, self._schema)
            except InvalidPageTokenError:
                logger.warning("query.invalid_page_token", token=page_token, index_hash=query.hash_value)
                return Page()

        req = self.build_request(query, page_size, start_key)
        try:
            resp = self._client.query(**req)
        except (ClientError, BotoCoreError) as e:
            logger.error(
                "query.list_failed",
                index_hash=query.hash_value,
                index_range=query.range_value,
                error=str(translate_error("query", e)),
            )
            return Page()

        items = [
            self._codec.decode(self._codec.from_item(item).payload, model)
            for item in resp.get("Items", [])
        ]
        last = resp.get("LastEvaluatedKey")
        token = encode_page_token(self._codec.deserialize(last) if last else None, self._schema)
        return Page(items=items, next_page_token=token)
