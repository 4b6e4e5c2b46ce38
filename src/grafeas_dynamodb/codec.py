"""Conversion between records, JSON payloads and DynamoDB attribute maps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, TypeVar

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from grafeas_dynamodb.config import SchemaConfig
from grafeas_dynamodb.errors import DeserializationError, SerializationError
from grafeas_dynamodb.keys import RowKey, RowKind

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class Row:
    """One physical row: key attributes plus the serialized record."""

    key: RowKey
    payload: str
    note_name: str | None = None

    @property
    def is_degenerate(self) -> bool:
        return not self.key.partition_key


class SchemaCodec:
    def __init__(self, schema: SchemaConfig) -> None:
        self.schema = schema
        self._serializer = TypeSerializer()
        self._deserializer = TypeDeserializer()

    # -- payload -----------------------------------------------------------

    def encode(self, entity: BaseModel) -> str:
        kind = getattr(entity, "resource_kind", type(entity).__name__)
        try:
            return entity.model_dump_json(by_alias=True, exclude_none=True)
        except (PydanticSerializationError, TypeError, ValueError) as e:
            raise SerializationError(kind, str(e)) from e

    def decode(self, payload: str, model: type[M]) -> M:
        kind = getattr(model, "resource_kind", model.__name__)
        try:
            return model.model_validate_json(payload)
        except (ValidationError, ValueError) as e:
            raise DeserializationError(kind, str(e)) from e

    # -- attribute maps ----------------------------------------------------

    def kind_token(self, kind: RowKind) -> str:
        if kind is RowKind.NOTE_LINK:
            return self.schema.note_link_kind
        return self.schema.entity_kind

    def to_item(self, row: Row) -> dict[str, Any]:
        s = self.schema
        plain: dict[str, Any] = {
            s.partition_key: row.key.partition_key,
            s.sort_key: row.key.sort_key,
            s.data_key: row.key.data,
            s.json_key: row.payload,
            s.kind_key: self.kind_token(row.key.kind),
        }
        if row.note_name is not None:
            plain[s.note_name_key] = row.note_name
        return self.serialize(plain)

    def from_item(self, item: Mapping[str, Any] | None) -> Row:
        """Decode a low-level attribute map; a missing item decodes to a degenerate row."""
        s = self.schema
        if not item:
            return Row(RowKey("", "", ""), "")
        try:
            plain = self.deserialize(item)
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
            raise DeserializationError("row", str(e)) from e

        values: dict[str, str] = {}
        for attr in (s.partition_key, s.sort_key, s.data_key, s.json_key):
            value = plain.get(attr, "")
            if not isinstance(value, str):
                raise DeserializationError(
                    "row", f"attribute {attr!r} must be a string, got {type(value).__name__}"
                )
            values[attr] = value

        kind_token = plain.get(s.kind_key, s.entity_kind)
        if kind_token == s.note_link_kind:
            kind = RowKind.NOTE_LINK
        elif kind_token == s.entity_kind:
            kind = RowKind.ENTITY
        else:
            raise DeserializationError("row", f"unknown row kind {kind_token!r}")

        note_name = plain.get(s.note_name_key)
        if note_name is not None and not isinstance(note_name, str):
            raise DeserializationError("row", f"attribute {s.note_name_key!r} must be a string")

        key = RowKey(values[s.partition_key], values[s.sort_key], values[s.data_key], kind)
        return Row(key, values[s.json_key], note_name)

    def serialize(self, plain: Mapping[str, Any]) -> dict[str, Any]:
        return {k: self._serializer.serialize(v) for k, v in plain.items()}

    def deserialize(self, item: Mapping[str, Any]) -> dict[str, Any]:
        return {k: self._deserializer.deserialize(v) for k, v in item.items()}
