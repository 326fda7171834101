"""Document persistence for users, employees, templates and provider configs."""

from infrastructure.persistence.document_store import (
    Document,
    DocumentStore,
    DocumentStoreError,
    QueryFilter,
)
from infrastructure.persistence.dynamodb_store import DynamoDBDocumentStore

__all__ = [
    "Document",
    "DocumentStore",
    "DocumentStoreError",
    "DynamoDBDocumentStore",
    "QueryFilter",
]
