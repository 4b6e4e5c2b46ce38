"""Process exit codes for gdyn commands."""

SUCCESS = 0
GENERAL_ERROR = 1
USAGE_ERROR = 2
NOT_FOUND = 3
BACKEND_UNAVAILABLE = 4
EXECUTION_FAILURE = 5


def for_error(err: Exception) -> int:
    """Exit code reported for a storage error."""
    from grafeas_dynamodb.errors import InvalidArgumentError, NotFoundError, UnavailableError

    if isinstance(err, NotFoundError):
        return NOT_FOUND
    if isinstance(err, UnavailableError):
        return BACKEND_UNAVAILABLE
    if isinstance(err, (InvalidArgumentError, OSError, ValueError)):
        return USAGE_ERROR
    return EXECUTION_FAILURE
