"""Project, Note and Occurrence records persisted by the adapter.

Field names follow the Grafeas v1beta1 resources and serialize with camelCase
aliases, matching the JSON mapping of the protobuf messages. Kind-specific
details (``vulnerability``, ``build``, ``attestation``...) are not modelled
individually; they are kept as extra fields and round-trip unchanged.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class NoteKind(str, Enum):
    NOTE_KIND_UNSPECIFIED = "NOTE_KIND_UNSPECIFIED"
    VULNERABILITY = "VULNERABILITY"
    BUILD = "BUILD"
    IMAGE = "IMAGE"
    PACKAGE = "PACKAGE"
    DEPLOYMENT = "DEPLOYMENT"
    DISCOVERY = "DISCOVERY"
    ATTESTATION = "ATTESTATION"


class _Resource(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class Project(_Resource):
    resource_kind: ClassVar[str] = "Project"

    name: str = ""


class RelatedUrl(_Resource):
    url: str = ""
    label: str = ""


class Note(_Resource):
    resource_kind: ClassVar[str] = "Note"

    name: str = ""
    short_description: str = ""
    long_description: str = ""
    kind: NoteKind = NoteKind.NOTE_KIND_UNSPECIFIED
    related_url: list[RelatedUrl] = Field(default_factory=list)
    expiration_time: datetime | None = None
    create_time: datetime | None = None
    update_time: datetime | None = None
    related_note_names: list[str] = Field(default_factory=list)


class Resource(_Resource):
    """The artifact an occurrence applies to."""

    uri: str = ""
    name: str = ""
    content_hash: dict[str, Any] | None = None


class Occurrence(_Resource):
    resource_kind: ClassVar[str] = "Occurrence"

    name: str = ""
    resource: Resource | None = None
    note_name: str = ""
    kind: NoteKind = NoteKind.NOTE_KIND_UNSPECIFIED
    remediation: str = ""
    create_time: datetime | None = None
    update_time: datetime | None = None


class FixableTotalByDigest(_Resource):
    resource: Resource | None = None
    severity: str = ""
    fixable_count: int = 0
    total_count: int = 0


class VulnerabilityOccurrencesSummary(_Resource):
    counts: list[FixableTotalByDigest] = Field(default_factory=list)
