"""grafeas-dynamodb: single-table DynamoDB storage for Grafeas projects, notes and occurrences."""

__version__ = "0.2.0"

from grafeas_dynamodb.config import DynamoDbConfig, SchemaConfig
from grafeas_dynamodb.errors import (
    AlreadyExistsError,
    ConditionFailedError,
    DeserializationError,
    GrafeasStorageError,
    InternalError,
    InvalidArgumentError,
    InvalidNameError,
    InvalidPageTokenError,
    NotFoundError,
    SerializationError,
    StorageBackendError,
    UnavailableError,
)
from grafeas_dynamodb.logging_config import configure_logging
from grafeas_dynamodb.provision import ensure_table, table_definition
from grafeas_dynamodb.storage import DynamoDbStorage, StorageProtocol, open_storage
from grafeas_dynamodb.types import (
    Note,
    NoteKind,
    Occurrence,
    Project,
    RelatedUrl,
    Resource,
    VulnerabilityOccurrencesSummary,
)

__all__ = [
    "__version__",
    "DynamoDbConfig",
    "SchemaConfig",
    "DynamoDbStorage",
    "StorageProtocol",
    "open_storage",
    "ensure_table",
    "table_definition",
    "configure_logging",
    "Project",
    "Note",
    "NoteKind",
    "Occurrence",
    "RelatedUrl",
    "Resource",
    "VulnerabilityOccurrencesSummary",
    "GrafeasStorageError",
    "ConditionFailedError",
    "NotFoundError",
    "AlreadyExistsError",
    "InvalidArgumentError",
    "InvalidNameError",
    "InvalidPageTokenError",
    "InternalError",
    "SerializationError",
    "DeserializationError",
    "UnavailableError",
    "StorageBackendError",
]
