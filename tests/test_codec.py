"""Tests for record and attribute-map conversion."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from grafeas_dynamodb.codec import Row, SchemaCodec
from grafeas_dynamodb.errors import DeserializationError, InternalError, SerializationError
from grafeas_dynamodb.keys import RowKey, RowKind
from grafeas_dynamodb.types import Note, NoteKind, Occurrence, Project
from tests.conftest import make_note


@pytest.fixture
def codec(schema):
    return SchemaCodec(schema)


class TestPayload:
    def test_encode_uses_camel_case_and_drops_unset_times(self, codec):
        payload = json.loads(codec.encode(make_note(name="projects/p/notes/n")))
        assert payload["name"] == "projects/p/notes/n"
        assert payload["shortDescription"] == "CVE-2024-0001"
        assert payload["kind"] == "VULNERABILITY"
        assert payload["relatedUrl"] == [{"url": "https://example.test/advisory", "label": "advisory"}]
        assert "createTime" not in payload

    def test_decode_restores_record(self, codec):
        note = make_note(name="projects/p/notes/n", create_time=datetime(2024, 1, 2, tzinfo=timezone.utc))
        assert codec.decode(codec.encode(note), Note) == note

    def test_unknown_fields_round_trip(self, codec):
        # Kind-specific details are not modelled but must survive storage.
        raw = '{"name": "projects/p/occurrences/o", "noteName": "projects/p/notes/n", ' \
              '"vulnerability": {"severity": "HIGH", "cvssScore": 7.5}}'
        occ = codec.decode(raw, Occurrence)
        assert json.loads(codec.encode(occ))["vulnerability"] == {"severity": "HIGH", "cvssScore": 7.5}

    def test_decode_accepts_snake_case(self, codec):
        occ = codec.decode('{"note_name": "projects/p/notes/n"}', Occurrence)
        assert occ.note_name == "projects/p/notes/n"

    def test_decode_invalid_json(self, codec):
        with pytest.raises(DeserializationError) as exc:
            codec.decode("{not json", Note)
        assert exc.value.kind == "Note"
        assert isinstance(exc.value, InternalError)

    def test_decode_wrong_shape(self, codec):
        with pytest.raises(DeserializationError):
            codec.decode('{"kind": "NOT_A_KIND"}', Note)

    def test_encode_failure(self, codec):
        project = Project(name="projects/p", labels={object()})  # extra field that JSON cannot hold
        with pytest.raises(SerializationError) as exc:
            codec.encode(project)
        assert exc.value.kind == "Project"


class TestAttributeMaps:
    def test_to_item_entity(self, codec):
        row = Row(RowKey("projects/p/notes/n", "NOTE", "p"), '{"name":"projects/p/notes/n"}')
        assert codec.to_item(row) == {
            "PartitionKey": {"S": "projects/p/notes/n"},
            "SortKey": {"S": "NOTE"},
            "Data": {"S": "p"},
            "Json": {"S": '{"name":"projects/p/notes/n"}'},
            "RowKind": {"S": "ENTITY"},
        }

    def test_to_item_link_carries_note_name(self, codec):
        row = Row(
            RowKey("projects/p/occurrences/o", "projects/q/notes/n", "projects/p/occurrences/o", RowKind.NOTE_LINK),
            "{}",
            note_name="projects/q/notes/n",
        )
        item = codec.to_item(row)
        assert item["RowKind"] == {"S": "NOTE_LINK"}
        assert item["NoteName"] == {"S": "projects/q/notes/n"}

    def test_from_item_inverts_to_item(self, codec):
        row = Row(RowKey("projects/p/occurrences/o", "OCCURRENCE", "p"), "{}", note_name="projects/p/notes/n")
        assert codec.from_item(codec.to_item(row)) == row

    @pytest.mark.parametrize("item", [None, {}])
    def test_missing_item_is_degenerate(self, codec, item):
        row = codec.from_item(item)
        assert row.is_degenerate
        assert row.payload == ""

    def test_missing_kind_defaults_to_entity(self, codec):
        item = {
            "PartitionKey": {"S": "projects/p"},
            "SortKey": {"S": "PROJECT"},
            "Data": {"S": "projects/p"},
            "Json": {"S": "{}"},
        }
        assert codec.from_item(item).key.kind is RowKind.ENTITY

    def test_non_string_attribute(self, codec):
        item = {"PartitionKey": {"S": "projects/p"}, "SortKey": {"S": "PROJECT"}, "Json": {"N": "5"}}
        with pytest.raises(DeserializationError, match="Json"):
            codec.from_item(item)

    def test_unknown_row_kind(self, codec):
        item = {"PartitionKey": {"S": "projects/p"}, "SortKey": {"S": "PROJECT"}, "RowKind": {"S": "OTHER"}}
        with pytest.raises(DeserializationError, match="OTHER"):
            codec.from_item(item)

    def test_malformed_attribute_value(self, codec):
        with pytest.raises(DeserializationError):
            codec.from_item({"PartitionKey": {"XX": "projects/p"}})


def test_note_kind_values():
    assert NoteKind("VULNERABILITY") is NoteKind.VULNERABILITY
