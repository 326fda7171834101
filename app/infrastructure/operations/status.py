"""Outcome codes shared by store and provider calls."""

from enum import Enum


class OperationStatus(Enum):
    """Outcome of a store or provider call.

    Attributes:
        SUCCESS: Call completed
        TRANSIENT_ERROR: Provider timeout, throttling or 5xx
        PERMANENT_ERROR: Rejected input, bad credentials, malformed response
        UNAUTHORIZED: Provider refused the credentials
        NOT_FOUND: Document, table or remote resource does not exist
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
