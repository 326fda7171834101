"""DynamoDB-backed document store.

Table layout: one table per collection, named
``<DYNAMODB_TABLE_PREFIX><collection>``, with a string partition key ``id``.
Queries are scans with a filter expression; the collections read by the
notification path (users, employees, templates, provider configs) are small.
"""

import uuid
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

import structlog
from boto3.dynamodb.conditions import Attr, ConditionExpressionBuilder
from boto3.dynamodb.types import TypeDeserializer, TypeSerializer

from infrastructure.clients.aws import DynamoDBClient
from infrastructure.configuration.integrations.aws import AwsSettings
from infrastructure.operations import OperationStatus
from infrastructure.persistence.document_store import (
    Document,
    DocumentStoreError,
    QueryFilter,
)

logger = structlog.get_logger()

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def _to_dynamo_value(value: Any) -> Any:
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: _to_dynamo_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_dynamo_value(v) for v in value]
    return value


def _from_dynamo_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: _from_dynamo_value(v) for k, v in value.items()}
    if isinstance(value, (list, set)):
        return [_from_dynamo_value(v) for v in value]
    return value


def serialize_item(document: Document) -> Dict[str, Any]:
    """Plain dict → DynamoDB typed attribute map."""
    return {
        key: _serializer.serialize(_to_dynamo_value(value))
        for key, value in document.items()
    }


def deserialize_item(item: Dict[str, Any]) -> Document:
    """DynamoDB typed attribute map → plain dict."""
    return {
        key: _from_dynamo_value(_deserializer.deserialize(value))
        for key, value in item.items()
    }


def build_condition(filters: Sequence[QueryFilter]):
    """Translate filters into a boto3 condition, or None for no filter."""
    condition = None
    for f in filters:
        if f.op == "==":
            clause = Attr(f.field).eq(_to_dynamo_value(f.value))
        elif f.op == "in":
            clause = Attr(f.field).is_in([_to_dynamo_value(v) for v in f.value])
        else:
            # contains() also matches substrings of string attributes.
            values = list(f.value)
            clause = Attr(f.field).contains(_to_dynamo_value(values[0]))
            for value in values[1:]:
                clause = clause | Attr(f.field).contains(_to_dynamo_value(value))
            clause = Attr(f.field).attribute_type("L") & clause
        condition = clause if condition is None else condition & clause
    return condition


class DynamoDBDocumentStore:
    """DocumentStore implementation over DynamoDB.

    Args:
        client: DynamoDBClient used for every call
        aws_settings: AwsSettings providing the table prefix
    """

    def __init__(self, client: DynamoDBClient, aws_settings: AwsSettings) -> None:
        self._client = client
        self._settings = aws_settings

    def _table(self, collection: str) -> str:
        return self._settings.table_name(collection)

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        result = self._client.get_item(
            self._table(collection), Key={"id": {"S": doc_id}}
        )
        if not result.is_success:
            raise DocumentStoreError(
                f"Failed to read {collection}/{doc_id}: {result.message}", result
            )
        item = (result.data or {}).get("Item")
        if not item:
            return None
        return deserialize_item(item)

    def set(
        self, collection: str, doc_id: str, data: Document, merge: bool = False
    ) -> None:
        document = dict(data)
        if merge:
            existing = self.get(collection, doc_id) or {}
            document = {**existing, **document}
        document["id"] = doc_id

        result = self._client.put_item(
            self._table(collection), Item=serialize_item(document)
        )
        if not result.is_success:
            raise DocumentStoreError(
                f"Failed to write {collection}/{doc_id}: {result.message}", result
            )
        logger.debug("document_written", collection=collection, doc_id=doc_id)

    def add(self, collection: str, data: Document) -> str:
        doc_id = uuid.uuid4().hex
        self.set(collection, doc_id, data)
        return doc_id

    def query(
        self, collection: str, filters: Sequence[QueryFilter] = ()
    ) -> List[Document]:
        scan_kwargs: Dict[str, Any] = {}
        condition = build_condition(filters)
        if condition is not None:
            expression = ConditionExpressionBuilder().build_expression(condition)
            scan_kwargs["FilterExpression"] = expression.condition_expression
            scan_kwargs["ExpressionAttributeNames"] = (
                expression.attribute_name_placeholders
            )
            scan_kwargs["ExpressionAttributeValues"] = {
                placeholder: _serializer.serialize(value)
                for placeholder, value in expression.attribute_value_placeholders.items()
            }

        result = self._client.scan(self._table(collection), **scan_kwargs)
        if result.status == OperationStatus.NOT_FOUND:
            logger.warning("collection_table_missing", collection=collection)
            return []
        if not result.is_success:
            raise DocumentStoreError(
                f"Failed to query {collection}: {result.message}", result
            )
        documents = [deserialize_item(item) for item in result.data or []]
        membership = [f for f in filters if f.op == "array-contains-any"]
        return [d for d in documents if all(f.matches(d) for f in membership)]
