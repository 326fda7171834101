"""AWS clients used by the document store.

    from infrastructure.clients.aws import DynamoDBClient, SessionProvider

    client = DynamoDBClient(SessionProvider(region="ca-central-1"))
    result = client.get_item("users", {"id": {"S": "u-1"}})
"""

from infrastructure.clients.aws.dynamodb import DynamoDBClient
from infrastructure.clients.aws.session_provider import SessionProvider

__all__ = [
    "DynamoDBClient",
    "SessionProvider",
]
