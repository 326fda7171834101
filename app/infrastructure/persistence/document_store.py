"""Document store interface.

Collections hold schemaless documents addressed by id. The notification
pipeline only needs point reads, writes and simple filtered queries, so the
interface stays small enough to be backed by DynamoDB in production and by a
dict in tests.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

from infrastructure.operations import OperationResult

Document = Dict[str, Any]

SUPPORTED_OPERATORS = ("==", "in", "array-contains-any")


class DocumentStoreError(Exception):
    """Raised when the backing store fails a read or write.

    Attributes:
        response: the OperationResult reported by the backend
    """

    def __init__(self, message: str, response: Optional[OperationResult] = None):
        super().__init__(message)
        self.response = response


@dataclass(frozen=True)
class QueryFilter:
    """A single ``field <op> value`` condition; filters are AND-ed.

    ``in`` and ``array-contains-any`` expect a list value.
    """

    field: str
    op: str
    value: Any

    def __post_init__(self):
        if self.op not in SUPPORTED_OPERATORS:
            raise ValueError(f"Unsupported query operator: {self.op}")
        if self.op != "==" and not isinstance(self.value, (list, tuple, set)):
            raise ValueError(f"Operator {self.op!r} requires a list value")

    def matches(self, document: Document) -> bool:
        """Evaluate the filter against an in-memory document."""
        actual = document.get(self.field)
        if self.op == "==":
            return actual == self.value
        if self.op == "in":
            return actual in self.value
        if not isinstance(actual, (list, tuple, set)):
            return False
        return any(item in actual for item in self.value)


class DocumentStore(Protocol):
    """Get/set/add/query over named collections.

    Returned documents always include their ``id``. Implementations raise
    ``DocumentStoreError`` on backend failure; a missing document is ``None``,
    not an error.
    """

    def get(self, collection: str, doc_id: str) -> Optional[Document]: ...

    def set(
        self, collection: str, doc_id: str, data: Document, merge: bool = False
    ) -> None: ...

    def add(self, collection: str, data: Document) -> str: ...

    def query(
        self, collection: str, filters: Sequence[QueryFilter] = ()
    ) -> List[Document]: ...
