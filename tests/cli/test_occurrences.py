"""Tests for gdyn occurrences commands."""

import json

from tests.cli.conftest import invoke, occurrence_ids


def test_list(runner, seeded_client):
    result = invoke(runner, ["--json", "occurrences", "list", "p2"])
    assert result.exit_code == 0
    items = json.loads(result.stdout)["items"]
    assert len(items) == 3
    assert {o["noteName"] for o in items} == {"projects/p1/notes/n1", "projects/p1/notes/n2"}
    got = json.loads(invoke(runner, ["--json", "occurrences", "get", "p2", items[0]["name"].rsplit("/", 1)[1]]).stdout)
    assert got["noteName"] == items[0]["noteName"]
    assert "note_name" not in items[0]


def test_list_text(runner, seeded_client):
    result = invoke(runner, ["occurrences", "list", "p2"])
    assert result.exit_code == 0
    assert "img-c" in result.output


def test_get(runner, seeded_client):
    occ_id = occurrence_ids(seeded_client, "p2")[0]
    result = invoke(runner, ["--json", "occurrences", "get", "p2", occ_id])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["name"] == f"projects/p2/occurrences/{occ_id}"
    assert data["noteName"].startswith("projects/p1/notes/")


def test_get_missing(runner, seeded_client):
    result = invoke(runner, ["occurrences", "get", "p2", "missing"])
    assert result.exit_code == 3


def test_note(runner, seeded_client):
    occ_id = occurrence_ids(seeded_client, "p2")[0]
    expected = json.loads(invoke(runner, ["--json", "occurrences", "get", "p2", occ_id]).stdout)["noteName"]
    result = invoke(runner, ["--json", "occurrences", "note", "p2", occ_id])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["name"] == expected


def test_list_backend_failure_prints_empty_page(runner, seeded_client):
    seeded_client.fail_next("query", "InternalServerError")
    result = invoke(runner, ["occurrences", "list", "p2"])
    assert result.exit_code == 0
    assert "(no results)" in result.output
