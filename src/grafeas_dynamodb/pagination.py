"""Continuation tokens for index queries.

A token is the three key attributes of the last evaluated index row joined by
the schema delimiter: ``<PartitionKey>&<SortKey>&<Data>``.
"""

from __future__ import annotations

from typing import Mapping

from grafeas_dynamodb.config import SchemaConfig
from grafeas_dynamodb.errors import InternalError, InvalidPageTokenError


def encode_page_token(last_key: Mapping[str, str] | None, schema: SchemaConfig) -> str:
    """Encode a last-evaluated key; ``None`` (scan exhausted) encodes to ``""``."""
    if not last_key:
        return ""
    parts = [
        last_key.get(schema.partition_key, ""),
        last_key.get(schema.sort_key, ""),
        last_key.get(schema.data_key, ""),
    ]
    if not all(parts):
        raise InternalError(f"Incomplete last evaluated key: {dict(last_key)!r}")
    return schema.token_delimiter.join(parts)


def decode_page_token(token: str, schema: SchemaConfig) -> dict[str, str]:
    """Decode a token into an exclusive start key of plain string attributes."""
    parts = token.split(schema.token_delimiter)
    if len(parts) != 3 or not all(parts):
        raise InvalidPageTokenError(token)
    return {
        schema.partition_key: parts[0],
        schema.sort_key: parts[1],
        schema.data_key: parts[2],
    }
