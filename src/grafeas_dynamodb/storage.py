"""DynamoDB-backed project and Grafeas storage.

:class:`DynamoDbStorage` implements :class:`StorageProtocol`, the project,
note and occurrence contract consumed by a Grafeas API server. The server
constructs the adapter (usually through :func:`open_storage`) and injects it;
there is no registry.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Mapping, Protocol, Sequence, runtime_checkable

import structlog

from grafeas_dynamodb._client import create_client
from grafeas_dynamodb.codec import Row, SchemaCodec
from grafeas_dynamodb.config import DynamoDbConfig, SchemaConfig
from grafeas_dynamodb.errors import (
    AlreadyExistsError,
    ConditionFailedError,
    GrafeasStorageError,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
)
from grafeas_dynamodb.keys import KeyBuilder
from grafeas_dynamodb.names import format_note, format_occurrence, format_project, parse_note
from grafeas_dynamodb.provision import ensure_table
from grafeas_dynamodb.query import QueryEngine
from grafeas_dynamodb.types import Note, Occurrence, Project, VulnerabilityOccurrencesSummary
from grafeas_dynamodb.writer import ConditionFailed, TransactionalWriter

logger = structlog.get_logger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@runtime_checkable
class StorageProtocol(Protocol):
    """Project and Grafeas storage contract consumed by the API server."""

    def create_project(self, project_id: str, project: Project) -> Project: ...

    def get_project(self, project_id: str) -> Project: ...

    def list_projects(
        self, filter: str = "", *, page_size: int = 0, page_token: str = ""
    ) -> tuple[list[Project], str]: ...

    def delete_project(self, project_id: str) -> None: ...

    def create_note(self, project_id: str, note_id: str, user_id: str, note: Note) -> Note: ...

    def batch_create_notes(
        self, project_id: str, user_id: str, notes: Mapping[str, Note]
    ) -> tuple[list[Note], list[GrafeasStorageError]]: ...

    def get_note(self, project_id: str, note_id: str) -> Note: ...

    def list_notes(
        self, project_id: str, filter: str = "", *, page_token: str = "", page_size: int = 0
    ) -> tuple[list[Note], str]: ...

    def update_note(
        self,
        project_id: str,
        note_id: str,
        note: Note,
        update_mask: Sequence[str] | None = None,
    ) -> Note: ...

    def delete_note(self, project_id: str, note_id: str) -> None: ...

    def create_occurrence(self, project_id: str, user_id: str, occurrence: Occurrence) -> Occurrence: ...

    def batch_create_occurrences(
        self, project_id: str, user_id: str, occurrences: Sequence[Occurrence]
    ) -> tuple[list[Occurrence], list[GrafeasStorageError]]: ...

    def get_occurrence(self, project_id: str, occurrence_id: str) -> Occurrence: ...

    def list_occurrences(
        self, project_id: str, filter: str = "", *, page_token: str = "", page_size: int = 0
    ) -> tuple[list[Occurrence], str]: ...

    def update_occurrence(
        self,
        project_id: str,
        occurrence_id: str,
        occurrence: Occurrence,
        update_mask: Sequence[str] | None = None,
    ) -> Occurrence: ...

    def delete_occurrence(self, project_id: str, occurrence_id: str) -> None: ...

    def get_occurrence_note(self, project_id: str, occurrence_id: str) -> Note: ...

    def list_note_occurrences(
        self,
        note_project_id: str,
        note_id: str,
        filter: str = "",
        *,
        page_token: str = "",
        page_size: int = 0,
    ) -> tuple[list[Occurrence], str]: ...

    def get_vulnerability_occurrences_summary(
        self, project_id: str, filter: str = ""
    ) -> VulnerabilityOccurrencesSummary: ...


class DynamoDbStorage:
    """Single-table DynamoDB implementation of :class:`StorageProtocol`.

    Holds only a client and immutable configuration, so one instance can be
    shared by any number of concurrent callers. Nothing is cached and nothing
    is retried: conditional-write losers get :class:`AlreadyExistsError` or
    :class:`NotFoundError` and decide for themselves.
    """

    def __init__(
        self,
        client: Any,
        config: DynamoDbConfig,
        schema: SchemaConfig | None = None,
    ) -> None:
        self.config = config
        self.table_name = config.table_name
        self.schema = schema or SchemaConfig()
        self._keys = KeyBuilder(self.schema)
        self._codec = SchemaCodec(self.schema)
        self._query = QueryEngine(client, self.table_name, self.schema, self._codec)
        self._writer = TransactionalWriter(client, self.table_name, self.schema, self._codec)

    def _ignored_filter(self, operation: str, filter: str) -> None:
        if filter:
            logger.debug("storage.filter_ignored", operation=operation, filter=filter)

    # -- projects ------------------------------------------------------------

    def create_project(self, project_id: str, project: Project) -> Project:
        name = format_project(project_id)
        project = project.model_copy(deep=True)
        project.name = name
        row = Row(self._keys.project(name), self._codec.encode(project))
        try:
            self._writer.put_new(row)
        except ConditionFailed:
            raise AlreadyExistsError("Project", name) from None
        return project

    def get_project(self, project_id: str) -> Project:
        name = format_project(project_id)
        row = self._query.get(self._keys.primary_key(name, self.schema.project_sk))
        if row is None:
            raise NotFoundError("Project", name)
        return self._codec.decode(row.payload, Project)

    def list_projects(
        self, filter: str = "", *, page_size: int = 0, page_token: str = ""
    ) -> tuple[list[Project], str]:
        self._ignored_filter("list_projects", filter)
        page = self._query.list_page(
            self._keys.projects_scan(), Project, page_size=page_size, page_token=page_token
        )
        return page.items, page.next_page_token

    def delete_project(self, project_id: str) -> None:
        name = format_project(project_id)
        try:
            self._writer.delete_existing(self._keys.primary_key(name, self.schema.project_sk))
        except ConditionFailed:
            raise NotFoundError("Project", name) from None

    # -- notes ---------------------------------------------------------------

    def create_note(self, project_id: str, note_id: str, user_id: str, note: Note) -> Note:
        name = format_note(project_id, note_id)
        note = note.model_copy(deep=True)
        note.name = name
        note.create_time = _now()
        row = Row(self._keys.note(name, project_id), self._codec.encode(note))
        try:
            self._writer.put_new(row)
        except ConditionFailed:
            raise AlreadyExistsError("Note", name) from None
        return note

    def batch_create_notes(
        self, project_id: str, user_id: str, notes: Mapping[str, Note]
    ) -> tuple[list[Note], list[GrafeasStorageError]]:
        """Create each note in turn; failures are skipped and reported."""
        created: list[Note] = []
        errors: list[GrafeasStorageError] = []
        for note_id, note in notes.items():
            try:
                created.append(self.create_note(project_id, note_id, user_id, note))
            except GrafeasStorageError as e:
                logger.info("storage.batch_note_skipped", project_id=project_id, note_id=note_id, error=str(e))
                errors.append(e)
        return created, errors

    def get_note(self, project_id: str, note_id: str) -> Note:
        name = format_note(project_id, note_id)
        row = self._query.get(self._keys.primary_key(name, self.schema.note_sk))
        if row is None:
            raise NotFoundError("Note", name)
        return self._codec.decode(row.payload, Note)

    def list_notes(
        self, project_id: str, filter: str = "", *, page_token: str = "", page_size: int = 0
    ) -> tuple[list[Note], str]:
        self._ignored_filter("list_notes", filter)
        page = self._query.list_page(
            self._keys.notes_scan(project_id), Note, page_size=page_size, page_token=page_token
        )
        return page.items, page.next_page_token

    def update_note(
        self,
        project_id: str,
        note_id: str,
        note: Note,
        update_mask: Sequence[str] | None = None,
    ) -> Note:
        """Replace the stored note.

        ``update_mask`` is accepted for interface compatibility but not
        applied: the whole payload is replaced.
        """
        name = format_note(project_id, note_id)
        if update_mask:
            logger.debug("storage.update_mask_ignored", name=name, mask=list(update_mask))
        note = note.model_copy(deep=True)
        note.name = name
        note.update_time = _now()
        row = Row(self._keys.note(name, project_id), self._codec.encode(note))
        try:
            self._writer.put_existing(row)
        except ConditionFailed:
            raise NotFoundError("Note", name) from None
        return note

    def delete_note(self, project_id: str, note_id: str) -> None:
        name = format_note(project_id, note_id)
        try:
            self._writer.delete_existing(self._keys.primary_key(name, self.schema.note_sk))
        except ConditionFailed:
            raise NotFoundError("Note", name) from None

    # -- occurrences ---------------------------------------------------------

    def _occurrence_rows(self, occurrence: Occurrence, project_id: str) -> tuple[Row, Row]:
        payload = self._codec.encode(occurrence)
        primary = Row(
            self._keys.occurrence(occurrence.name, project_id),
            payload,
            note_name=occurrence.note_name,
        )
        link = Row(
            self._keys.occurrence_link(occurrence.name, occurrence.note_name),
            payload,
            note_name=occurrence.note_name,
        )
        return primary, link

    def create_occurrence(self, project_id: str, user_id: str, occurrence: Occurrence) -> Occurrence:
        # The link row is keyed on the note name; a malformed one could collide
        # with the primary row key or be empty.
        parse_note(occurrence.note_name)
        occurrence = occurrence.model_copy(deep=True)
        occurrence.name = format_occurrence(project_id, str(uuid.uuid4()))
        occurrence.create_time = _now()
        primary, link = self._occurrence_rows(occurrence, project_id)
        try:
            self._writer.transact_put(primary, link, create=True)
        except ConditionFailed:
            raise AlreadyExistsError("Occurrence", occurrence.name) from None
        return occurrence

    def batch_create_occurrences(
        self, project_id: str, user_id: str, occurrences: Sequence[Occurrence]
    ) -> tuple[list[Occurrence], list[GrafeasStorageError]]:
        """Create each occurrence in turn; failures are skipped and reported."""
        created: list[Occurrence] = []
        errors: list[GrafeasStorageError] = []
        for occurrence in occurrences:
            try:
                created.append(self.create_occurrence(project_id, user_id, occurrence))
            except GrafeasStorageError as e:
                logger.info("storage.batch_occurrence_skipped", project_id=project_id, error=str(e))
                errors.append(e)
        return created, errors

    def _get_occurrence_row(self, name: str) -> Row:
        row = self._query.get(self._keys.primary_key(name, self.schema.occurrence_sk))
        if row is None:
            raise NotFoundError("Occurrence", name)
        return row

    def get_occurrence(self, project_id: str, occurrence_id: str) -> Occurrence:
        row = self._get_occurrence_row(format_occurrence(project_id, occurrence_id))
        return self._codec.decode(row.payload, Occurrence)

    def list_occurrences(
        self, project_id: str, filter: str = "", *, page_token: str = "", page_size: int = 0
    ) -> tuple[list[Occurrence], str]:
        self._ignored_filter("list_occurrences", filter)
        page = self._query.list_page(
            self._keys.occurrences_scan(project_id),
            Occurrence,
            page_size=page_size,
            page_token=page_token,
        )
        return page.items, page.next_page_token

    def update_occurrence(
        self,
        project_id: str,
        occurrence_id: str,
        occurrence: Occurrence,
        update_mask: Sequence[str] | None = None,
    ) -> Occurrence:
        """Replace the stored occurrence and its note link in one transaction.

        ``update_mask`` is accepted but not applied. The referenced note cannot
        change: the link row of the old note would be left behind.
        """
        parse_note(occurrence.note_name)
        name = format_occurrence(project_id, occurrence_id)
        if update_mask:
            logger.debug("storage.update_mask_ignored", name=name, mask=list(update_mask))
        occurrence = occurrence.model_copy(deep=True)
        occurrence.name = name
        occurrence.update_time = _now()
        primary, link = self._occurrence_rows(occurrence, project_id)
        try:
            self._writer.transact_put(
                primary,
                link,
                create=False,
                expected={self.schema.note_name_key: occurrence.note_name},
            )
        except ConditionFailed:
            current = self._get_occurrence_row(name)
            if current.note_name is None:
                raise InternalError(f"Stored occurrence {name!r} has no note reference attribute") from None
            if current.note_name != occurrence.note_name:
                raise InvalidArgumentError(
                    f"Occurrence {name!r} references note {current.note_name!r}; "
                    f"cannot change it to {occurrence.note_name!r}"
                ) from None
            # Same note: the row was replaced or recreated between the check and the write.
            raise ConditionFailedError(f"Occurrence {name!r} changed during update; retry") from None
        return occurrence

    def delete_occurrence(self, project_id: str, occurrence_id: str) -> None:
        """Delete both rows of an occurrence.

        The note-link key is only known from the stored row, so this reads
        before it deletes. If the occurrence disappears in between, the
        conditional delete fails and :class:`NotFoundError` is raised.
        """
        name = format_occurrence(project_id, occurrence_id)
        row = self._get_occurrence_row(name)
        note_name = row.note_name or self._codec.decode(row.payload, Occurrence).note_name
        try:
            self._writer.transact_delete(
                self._keys.primary_key(name, self.schema.occurrence_sk),
                self._keys.link_key(name, note_name),
            )
        except ConditionFailed:
            raise NotFoundError("Occurrence", name) from None

    # -- relationships -------------------------------------------------------

    def get_occurrence_note(self, project_id: str, occurrence_id: str) -> Note:
        occurrence = self.get_occurrence(project_id, occurrence_id)
        note_project_id, note_id = parse_note(occurrence.note_name)
        return self.get_note(note_project_id, note_id)

    def list_note_occurrences(
        self,
        note_project_id: str,
        note_id: str,
        filter: str = "",
        *,
        page_token: str = "",
        page_size: int = 0,
    ) -> tuple[list[Occurrence], str]:
        self._ignored_filter("list_note_occurrences", filter)
        page = self._query.list_page(
            self._keys.note_occurrences_scan(format_note(note_project_id, note_id)),
            Occurrence,
            page_size=page_size,
            page_token=page_token,
        )
        return page.items, page.next_page_token

    def get_vulnerability_occurrences_summary(
        self, project_id: str, filter: str = ""
    ) -> VulnerabilityOccurrencesSummary:
        # Not implemented by this backend; always an empty summary.
        return VulnerabilityOccurrencesSummary()


def open_storage(config: DynamoDbConfig, schema: SchemaConfig | None = None) -> DynamoDbStorage:
    """Build a client from ``config`` and return the storage adapter.

    Creates the table first when ``config.create_table`` is set.
    """
    schema = schema or SchemaConfig()
    client = create_client(config)
    if config.create_table:
        ensure_table(client, config.table_name, schema)
    return DynamoDbStorage(client, config, schema)


__all__ = [
    "DynamoDbStorage",
    "StorageProtocol",
    "open_storage",
]
