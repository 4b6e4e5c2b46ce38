"""Shared test fixtures for grafeas-dynamodb tests."""

from __future__ import annotations

import pytest

from grafeas_dynamodb.config import DynamoDbConfig, SchemaConfig
from grafeas_dynamodb.storage import DynamoDbStorage
from grafeas_dynamodb.types import Note, NoteKind, Occurrence, Project, RelatedUrl, Resource
from tests.fake_dynamodb import FakeDynamoDbClient

# --- Sample records ---


def make_note(short: str = "CVE-2024-0001", **kwargs) -> Note:
    return Note(
        short_description=short,
        long_description=f"{short} in libexample",
        kind=NoteKind.VULNERABILITY,
        related_url=[RelatedUrl(url="https://example.test/advisory", label="advisory")],
        **kwargs,
    )


def make_occurrence(note_name: str, uri: str = "https://registry.test/app@sha256:abc", **kwargs) -> Occurrence:
    return Occurrence(
        note_name=note_name,
        kind=NoteKind.VULNERABILITY,
        resource=Resource(uri=uri),
        **kwargs,
    )


# --- Fixtures ---


@pytest.fixture
def schema() -> SchemaConfig:
    return SchemaConfig()


@pytest.fixture
def fake_client(schema) -> FakeDynamoDbClient:
    """In-memory DynamoDB client with an empty ``grafeas`` table."""
    return FakeDynamoDbClient("grafeas", schema)


@pytest.fixture
def storage(fake_client, schema) -> DynamoDbStorage:
    return DynamoDbStorage(fake_client, DynamoDbConfig(table_name="grafeas"), schema)


@pytest.fixture
def seeded(storage) -> DynamoDbStorage:
    """Two projects, three notes in ``p1`` and one occurrence per note."""
    storage.create_project("p1", Project())
    storage.create_project("p2", Project())
    for i in range(3):
        storage.create_note("p1", f"n{i}", "tester", make_note(f"CVE-2024-000{i}"))
    for i in range(3):
        storage.create_occurrence("p2", "tester", make_occurrence(f"projects/p1/notes/n{i}"))
    return storage
