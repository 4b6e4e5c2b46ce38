"""Configuration for the DynamoDB storage adapter."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class DynamoDbConfig:
    """Connection target and table for the storage adapter."""

    table_name: str
    region: str | None = None
    endpoint_url: str | None = None
    request_timeout_s: float = 10.0
    max_attempts: int = 1
    create_table: bool = False

    def __post_init__(self) -> None:
        if not self.table_name:
            raise ValueError("table_name is required")
        if self.request_timeout_s <= 0:
            raise ValueError("request_timeout_s must be > 0")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> DynamoDbConfig:
        """Build config from a storage config mapping.

        Accepts the plugin layout used by Grafeas server config files::

            table: grafeas
            aws:
              endpoint: http://localhost:8000
              region: eu-west-2
        """
        aws = data.get("aws") or {}
        if not isinstance(aws, Mapping):
            raise ValueError("'aws' section must be a mapping")
        table = data.get("table") or data.get("table_name")
        if not isinstance(table, str) or not table:
            raise ValueError("'table' is required in DynamoDB storage config")
        kwargs: dict[str, Any] = {
            "table_name": table,
            "region": aws.get("region"),
            "endpoint_url": aws.get("endpoint"),
        }
        if "request_timeout_s" in data:
            kwargs["request_timeout_s"] = float(data["request_timeout_s"])
        if "max_attempts" in data:
            kwargs["max_attempts"] = int(data["max_attempts"])
        if "create_table" in data:
            kwargs["create_table"] = bool(data["create_table"])
        return cls(**kwargs)

    @classmethod
    def from_env(cls, table_name: str | None = None) -> DynamoDbConfig:
        """Build config from GRAFEAS_DYNAMODB_* environment variables."""
        table = table_name or os.getenv("GRAFEAS_DYNAMODB_TABLE") or "grafeas"
        timeout = os.getenv("GRAFEAS_DYNAMODB_TIMEOUT_S")
        return cls(
            table_name=table,
            region=os.getenv("GRAFEAS_DYNAMODB_REGION") or os.getenv("AWS_REGION"),
            endpoint_url=os.getenv("GRAFEAS_DYNAMODB_ENDPOINT_URL"),
            request_timeout_s=float(timeout) if timeout else 10.0,
        )


@dataclass(frozen=True)
class SchemaConfig:
    """Physical attribute names and key tokens of the single-table layout."""

    partition_key: str = "PartitionKey"
    sort_key: str = "SortKey"
    data_key: str = "Data"
    json_key: str = "Json"
    kind_key: str = "RowKind"
    note_name_key: str = "NoteName"
    index_name: str = "GSI_1"
    project_sk: str = "PROJECT"
    note_sk: str = "NOTE"
    occurrence_sk: str = "OCCURRENCE"
    entity_kind: str = "ENTITY"
    note_link_kind: str = "NOTE_LINK"
    token_delimiter: str = "&"

    def __post_init__(self) -> None:
        attrs = [
            self.partition_key,
            self.sort_key,
            self.data_key,
            self.json_key,
            self.kind_key,
            self.note_name_key,
        ]
        if any(not a for a in attrs) or len(set(attrs)) != len(attrs):
            raise ValueError(f"Attribute names must be non-empty and distinct: {attrs}")
        discriminators = self.discriminators
        if len(set(discriminators)) != len(discriminators):
            raise ValueError(f"Type discriminators must be distinct: {discriminators}")
        for token in discriminators:
            # Full note names always contain '/', so a discriminator without one
            # can never share a SortKey value with a note-link row.
            if not token or "/" in token:
                raise ValueError(f"Invalid type discriminator {token!r}")
        if self.entity_kind == self.note_link_kind:
            raise ValueError("Row kind tokens must be distinct")
        if len(self.token_delimiter) != 1 or self.token_delimiter == "/":
            raise ValueError(f"Invalid token delimiter {self.token_delimiter!r}")

    @property
    def discriminators(self) -> tuple[str, str, str]:
        return (self.project_sk, self.note_sk, self.occurrence_sk)
