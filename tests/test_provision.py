"""Tests for table provisioning and description."""

from __future__ import annotations

import pytest

from grafeas_dynamodb.config import SchemaConfig
from grafeas_dynamodb.errors import StorageBackendError, UnavailableError
from grafeas_dynamodb.provision import describe_table, ensure_table, table_definition
from grafeas_dynamodb.types import Project
from tests.fake_dynamodb import FakeDynamoDbClient


def test_table_definition(schema):
    definition = table_definition("grafeas", schema)
    assert definition["TableName"] == "grafeas"
    assert definition["BillingMode"] == "PAY_PER_REQUEST"
    assert definition["KeySchema"] == [
        {"AttributeName": "PartitionKey", "KeyType": "HASH"},
        {"AttributeName": "SortKey", "KeyType": "RANGE"},
    ]
    (gsi,) = definition["GlobalSecondaryIndexes"]
    assert gsi["IndexName"] == "GSI_1"
    assert gsi["KeySchema"] == [
        {"AttributeName": "SortKey", "KeyType": "HASH"},
        {"AttributeName": "Data", "KeyType": "RANGE"},
    ]
    assert gsi["Projection"] == {"ProjectionType": "ALL"}
    assert {a["AttributeName"] for a in definition["AttributeDefinitions"]} == {
        "PartitionKey",
        "SortKey",
        "Data",
    }


def test_table_definition_follows_schema():
    schema = SchemaConfig(partition_key="pk", sort_key="sk", data_key="gsi_sk", index_name="by_type")
    definition = table_definition("t", schema)
    assert definition["GlobalSecondaryIndexes"][0]["IndexName"] == "by_type"
    assert definition["KeySchema"][0]["AttributeName"] == "pk"


class TestEnsureTable:
    def test_creates_missing_table(self, schema):
        client = FakeDynamoDbClient("other", schema)
        assert ensure_table(client, "grafeas", schema) is True
        assert "grafeas" in client.tables
        assert client.definitions["grafeas"] == table_definition("grafeas", schema)

    def test_existing_table_is_not_an_error(self, fake_client, schema):
        assert ensure_table(fake_client, "grafeas", schema) is False

    def test_no_wait(self, schema):
        client = FakeDynamoDbClient("other", schema)
        ensure_table(client, "grafeas", schema, wait=False)
        assert [op for op, _ in client.calls] == ["create_table"]

    def test_access_denied(self, fake_client, schema):
        fake_client.fail_next("create_table", "AccessDeniedException")
        with pytest.raises(StorageBackendError):
            ensure_table(fake_client, "new", schema)

    def test_throttled(self, fake_client, schema):
        fake_client.fail_next("create_table", "LimitExceededException")
        with pytest.raises(StorageBackendError):
            ensure_table(fake_client, "new", schema)
        fake_client.fail_next("create_table", "ThrottlingException")
        with pytest.raises(UnavailableError):
            ensure_table(fake_client, "new", schema)


class TestDescribeTable:
    def test_summary(self, storage, fake_client):
        storage.create_project("p1", Project())
        info = describe_table(fake_client, "grafeas")
        assert info["table_name"] == "grafeas"
        assert info["status"] == "ACTIVE"
        assert info["item_count"] == 1
        assert info["billing_mode"] == "PAY_PER_REQUEST"
        assert info["key_schema"] == {"HASH": "PartitionKey", "RANGE": "SortKey"}
        assert info["indexes"] == {"GSI_1": {"HASH": "SortKey", "RANGE": "Data"}}

    def test_missing_table(self, fake_client):
        with pytest.raises(StorageBackendError):
            describe_table(fake_client, "missing")
