"""boto3 client construction and botocore error translation."""

from __future__ import annotations

from typing import Any

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectionClosedError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)

from grafeas_dynamodb.config import DynamoDbConfig
from grafeas_dynamodb.errors import GrafeasStorageError, StorageBackendError, UnavailableError

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"
TRANSACTION_CANCELED = "TransactionCanceledException"

_TRANSIENT_CODES = {
    "ProvisionedThroughputExceededException",
    "ThrottlingException",
    "RequestLimitExceeded",
    "InternalServerError",
    "ServiceUnavailable",
    "TransactionInProgressException",
}
_TRANSIENT_EXCEPTIONS = (
    ConnectionClosedError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)


def create_client(config: DynamoDbConfig) -> Any:
    """Create a low-level DynamoDB client bounded by the configured timeouts."""
    session = boto3.Session(region_name=config.region)
    return session.client(
        "dynamodb",
        region_name=config.region,
        endpoint_url=config.endpoint_url,
        config=BotoConfig(
            connect_timeout=config.request_timeout_s,
            read_timeout=config.request_timeout_s,
            retries={"max_attempts": config.max_attempts, "mode": "standard"},
        ),
    )


def error_code(err: Exception) -> str:
    if isinstance(err, ClientError):
        return str(err.response.get("Error", {}).get("Code", ""))
    return ""


def cancellation_codes(err: Exception) -> list[str]:
    """Per-item reason codes of a cancelled transaction, in request order."""
    if not isinstance(err, ClientError):
        return []
    reasons = err.response.get("CancellationReasons") or []
    return [str(r.get("Code") or "None") for r in reasons]


def is_transient(err: Exception) -> bool:
    if isinstance(err, _TRANSIENT_EXCEPTIONS):
        return True
    code = error_code(err)
    if code in _TRANSIENT_CODES:
        return True
    if code == TRANSACTION_CANCELED:
        codes = set(cancellation_codes(err))
        return bool(codes & {"ThrottlingError", "TransactionConflict", "ProvisionedThroughputExceeded"})
    return False


def translate_error(operation: str, err: Exception) -> GrafeasStorageError:
    """Map a boto3/botocore failure onto the adapter's error taxonomy."""
    if is_transient(err):
        return UnavailableError(operation, str(err))
    if isinstance(err, (ClientError, BotoCoreError)):
        return StorageBackendError(operation, str(err))
    return StorageBackendError(operation, f"{type(err).__name__}: {err}")
