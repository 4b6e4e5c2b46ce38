"""CLI helpers for config resolution and adapter construction."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any, Callable, TypeVar

import yaml

from grafeas_dynamodb._client import create_client
from grafeas_dynamodb.config import DynamoDbConfig
from grafeas_dynamodb.storage import DynamoDbStorage

T = TypeVar("T")


def load_config_file(path: str) -> DynamoDbConfig:
    """Load DynamoDB settings from a Grafeas server YAML config.

    Accepts the full server layout (``grafeas.dynamodb``) or a bare
    ``{table, aws}`` mapping.
    """
    raw = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path!r} must contain a mapping")
    section: Any = raw
    if "grafeas" in raw:
        grafeas = raw["grafeas"] or {}
        storage_type = grafeas.get("storage_type", "dynamodb")
        if storage_type != "dynamodb":
            raise ValueError(f"Unknown storage type {storage_type!r}, must be 'dynamodb'")
        section = grafeas.get("dynamodb") or {}
    return DynamoDbConfig.from_mapping(section)


def resolve_config() -> DynamoDbConfig:
    """Build adapter config from the config file or environment plus CLI overrides."""
    from grafeas_dynamodb.cli import state

    base = load_config_file(state.config) if state.config else DynamoDbConfig.from_env(state.table)
    overrides = {
        key: value
        for key, value in (
            ("table_name", state.table),
            ("region", state.region),
            ("endpoint_url", state.endpoint_url),
        )
        if value
    }
    return dataclasses.replace(base, **overrides)


def open_client() -> tuple[Any, DynamoDbConfig]:
    config = resolve_config()
    return create_client(config), config


def open_cli_storage() -> DynamoDbStorage:
    """Open the storage adapter using global CLI settings."""
    client, config = open_client()
    return DynamoDbStorage(client, config)


def collect_pages(
    fetch: Callable[[str], tuple[list[T], str]],
    page_token: str,
    *,
    all_pages: bool,
) -> tuple[list[T], str]:
    """Fetch one page, or every page from ``page_token`` onward when ``all_pages``."""
    items, token = fetch(page_token)
    if not all_pages:
        return items, token
    collected = list(items)
    while token:
        items, token = fetch(token)
        collected.extend(items)
    return collected, ""
