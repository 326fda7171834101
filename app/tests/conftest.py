import pytest

from infrastructure.configuration import Settings
from infrastructure.configuration.infrastructure import ServerSettings
from infrastructure.configuration.integrations import (
    AwsSettings,
    NotificationSettings,
)
from tests.fixtures.document_store import InMemoryDocumentStore

FCM_CREDENTIALS = '{"type": "service_account", "project_id": "test-project"}'


@pytest.fixture
def document_store():
    """Empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def notification_settings():
    return NotificationSettings(
        DISPATCH_MAX_WORKERS=4,
        FCM_PROJECT_ID="test-project",
        FCM_CREDENTIALS_JSON=FCM_CREDENTIALS,
    )


@pytest.fixture
def aws_settings():
    return AwsSettings(
        AWS_REGION="ca-central-1",
        DYNAMODB_TABLE_PREFIX="test_",
    )


@pytest.fixture
def settings(notification_settings, aws_settings):
    """Settings with deterministic values for every section."""
    return Settings(
        PREFIX="test-",
        APP_NAME="Acme",
        GIT_SHA="abc123",
        aws=aws_settings,
        notifications=notification_settings,
        server=ServerSettings(
            APP_URL="https://app.example.com",
            CORS_ALLOW_ORIGINS="https://app.example.com",
        ),
    )
