"""Resource name formatting for projects, notes and occurrences."""

from __future__ import annotations

import re

from grafeas_dynamodb.errors import InvalidNameError

PROJECTS_COLLECTION = "projects"
NOTES_COLLECTION = "notes"
OCCURRENCES_COLLECTION = "occurrences"

_NOTE_RE = re.compile(r"^projects/([^/]+)/notes/([^/]+)$")


def format_project(project_id: str) -> str:
    return f"{PROJECTS_COLLECTION}/{project_id}"


def format_note(project_id: str, note_id: str) -> str:
    return f"{PROJECTS_COLLECTION}/{project_id}/{NOTES_COLLECTION}/{note_id}"


def format_occurrence(project_id: str, occurrence_id: str) -> str:
    return f"{PROJECTS_COLLECTION}/{project_id}/{OCCURRENCES_COLLECTION}/{occurrence_id}"


def parse_note(name: str) -> tuple[str, str]:
    """Return ``(project_id, note_id)`` of ``projects/{project_id}/notes/{note_id}``."""
    m = _NOTE_RE.match(name)
    if m is None:
        raise InvalidNameError(name, "projects/{project_id}/notes/{note_id}")
    return m.group(1), m.group(2)
