"""Physical key layout of the single table.

Every entity lives in one table keyed on ``(PartitionKey, SortKey)``; the
``GSI_1`` index is keyed on ``(SortKey, Data)`` and serves two access patterns:

======================  ==================  ====================  =================
Row                     PartitionKey        SortKey               Data
======================  ==================  ====================  =================
Project                 projects/p          PROJECT               projects/p
Note                    projects/p/notes/n  NOTE                  p
Occurrence              projects/p/occ…/o   OCCURRENCE            p
Occurrence note link    projects/p/occ…/o   projects/q/notes/n    projects/p/occ…/o
======================  ==================  ====================  =================

Listing by type queries the index with ``SortKey = <discriminator>`` (and
``Data = <project id>`` for notes and occurrences). Listing occurrences of a
note queries it with ``SortKey = <note name>``. Rows carry a ``RowKind`` tag so
both patterns stay separable even though they share the index.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from grafeas_dynamodb.config import SchemaConfig


class RowKind(str, Enum):
    ENTITY = "ENTITY"
    NOTE_LINK = "NOTE_LINK"


@dataclass(frozen=True)
class RowKey:
    """Key attributes of one physical row."""

    partition_key: str
    sort_key: str
    data: str
    kind: RowKind = RowKind.ENTITY


@dataclass(frozen=True)
class IndexQuery:
    """Parameters of a range query against the secondary index."""

    hash_value: str
    range_value: str | None
    kind: RowKind


class KeyBuilder:
    """Derives physical keys from entity names; names are used verbatim."""

    def __init__(self, schema: SchemaConfig) -> None:
        self.schema = schema

    def project(self, project_name: str) -> RowKey:
        return RowKey(project_name, self.schema.project_sk, project_name)

    def note(self, note_name: str, project_id: str) -> RowKey:
        return RowKey(note_name, self.schema.note_sk, project_id)

    def occurrence(self, occurrence_name: str, project_id: str) -> RowKey:
        return RowKey(occurrence_name, self.schema.occurrence_sk, project_id)

    def occurrence_link(self, occurrence_name: str, note_name: str) -> RowKey:
        # Data holds the occurrence name so links of one note sort by occurrence.
        return RowKey(occurrence_name, note_name, occurrence_name, RowKind.NOTE_LINK)

    def primary_key(self, name: str, discriminator: str) -> dict[str, str]:
        """Table key of an entity's primary row."""
        return {self.schema.partition_key: name, self.schema.sort_key: discriminator}

    def link_key(self, occurrence_name: str, note_name: str) -> dict[str, str]:
        return {self.schema.partition_key: occurrence_name, self.schema.sort_key: note_name}

    def projects_scan(self) -> IndexQuery:
        return IndexQuery(self.schema.project_sk, None, RowKind.ENTITY)

    def notes_scan(self, project_id: str) -> IndexQuery:
        return IndexQuery(self.schema.note_sk, project_id, RowKind.ENTITY)

    def occurrences_scan(self, project_id: str) -> IndexQuery:
        return IndexQuery(self.schema.occurrence_sk, project_id, RowKind.ENTITY)

    def note_occurrences_scan(self, note_name: str) -> IndexQuery:
        return IndexQuery(note_name, None, RowKind.NOTE_LINK)
