"""Tests for resource name formatting and parsing."""

from __future__ import annotations

import pytest

from grafeas_dynamodb.errors import InvalidArgumentError, InvalidNameError
from grafeas_dynamodb.names import (
    format_note,
    format_occurrence,
    format_project,
    parse_note,
)


def test_format_names():
    assert format_project("p1") == "projects/p1"
    assert format_note("p1", "n1") == "projects/p1/notes/n1"
    assert format_occurrence("p1", "o1") == "projects/p1/occurrences/o1"


def test_parse_note_inverts_format():
    assert parse_note(format_note("p1", "CVE-1")) == ("p1", "CVE-1")


@pytest.mark.parametrize(
    "name",
    [
        "",
        "projects/p1",
        "projects/p1/notes/",
        "projects//notes/n1",
        "projects/p1/occurrences/o1",
        "projects/p1/notes/n1/extra",
    ],
)
def test_parse_note_rejects_malformed(name):
    with pytest.raises(InvalidNameError) as exc:
        parse_note(name)
    assert exc.value.name == name
    assert isinstance(exc.value, InvalidArgumentError)
