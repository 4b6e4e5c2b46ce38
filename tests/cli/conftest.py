"""Shared fixtures for CLI tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from typer.testing import CliRunner

from grafeas_dynamodb.cli import app
from grafeas_dynamodb.config import DynamoDbConfig
from grafeas_dynamodb.storage import DynamoDbStorage
from grafeas_dynamodb.types import Project
from tests.conftest import make_note, make_occurrence
from tests.fake_dynamodb import FakeDynamoDbClient

if TYPE_CHECKING:
    from click.testing import Result


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli_client(monkeypatch):
    """Route every CLI-created client to one in-memory table."""
    for var in ("GRAFEAS_DYNAMODB_TABLE", "GRAFEAS_DYNAMODB_CONFIG", "GRAFEAS_DYNAMODB_ENDPOINT_URL"):
        monkeypatch.delenv(var, raising=False)
    client = FakeDynamoDbClient("grafeas")
    configs: list[DynamoDbConfig] = []

    def _create_client(config):
        configs.append(config)
        return client

    monkeypatch.setattr("grafeas_dynamodb.cli._storage.create_client", _create_client)
    client.configs = configs
    return client


@pytest.fixture
def seeded_client(cli_client):
    """A table holding two projects, two notes and three occurrences."""
    storage = DynamoDbStorage(cli_client, DynamoDbConfig(table_name="grafeas"))
    storage.create_project("p1", Project())
    storage.create_project("p2", Project())
    storage.create_note("p1", "n1", "tester", make_note("CVE-2024-0001"))
    storage.create_note("p1", "n2", "tester", make_note("CVE-2024-0002"))
    storage.create_occurrence("p2", "tester", make_occurrence("projects/p1/notes/n1", uri="img-a"))
    storage.create_occurrence("p2", "tester", make_occurrence("projects/p1/notes/n1", uri="img-b"))
    storage.create_occurrence("p2", "tester", make_occurrence("projects/p1/notes/n2", uri="img-c"))
    return cli_client


def occurrence_ids(client: FakeDynamoDbClient, project_id: str) -> list[str]:
    storage = DynamoDbStorage(client, DynamoDbConfig(table_name="grafeas"))
    occurrences, _ = storage.list_occurrences(project_id)
    return [o.name.rsplit("/", 1)[1] for o in occurrences]


def invoke(runner: CliRunner, args: list[str]) -> "Result":
    """Invoke the CLI without swallowing unexpected exceptions."""
    return runner.invoke(app, args, catch_exceptions=False)
