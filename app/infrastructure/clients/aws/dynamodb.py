"""DynamoDB client.

Thin wrapper over the low-level DynamoDB API. Items use the typed attribute
format (``{"id": {"S": "abc"}}``); conversion to plain dicts happens in the
document store.
"""

from typing import Any, Dict

from infrastructure.clients.aws.client import execute_aws_api_call
from infrastructure.clients.aws.session_provider import SessionProvider
from infrastructure.operations.result import OperationResult


class DynamoDBClient:
    """Client for DynamoDB operations.

    All methods return OperationResult.

    Args:
        session_provider: SessionProvider instance for credential/config management
    """

    def __init__(self, session_provider: SessionProvider) -> None:
        self._session_provider = session_provider

    def _call(self, method: str, **kwargs) -> OperationResult:
        return execute_aws_api_call(
            "dynamodb",
            method,
            **self._session_provider.build_client_kwargs(),
            **kwargs,
        )

    def get_item(
        self, table_name: str, Key: Dict[str, Any], **kwargs
    ) -> OperationResult:
        """Get one item by primary key.

        Returns:
            OperationResult whose ``data`` is the raw response; ``Item`` is
            absent when the key does not exist.
        """
        return self._call("get_item", TableName=table_name, Key=Key, **kwargs)

    def put_item(
        self, table_name: str, Item: Dict[str, Any], **kwargs
    ) -> OperationResult:
        """Create or replace an item."""
        return self._call("put_item", TableName=table_name, Item=Item, **kwargs)

    def scan(self, table_name: str, **kwargs) -> OperationResult:
        """Scan a table, following pagination.

        Returns:
            OperationResult with the list of typed items in ``data``.
        """
        return self._call(
            "scan",
            TableName=table_name,
            keys=["Items"],
            force_paginate=True,
            **kwargs,
        )
