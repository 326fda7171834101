"""AWS integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class AwsSettings(IntegrationSettings):
    """AWS configuration for the document store.

    Every document collection (users, employees, email_templates, ...) maps to
    one DynamoDB table named ``<DYNAMODB_TABLE_PREFIX><collection>``.

    Environment Variables:
        AWS_REGION: AWS region for services (default: ca-central-1)
        DYNAMODB_ENDPOINT_URL: Custom endpoint, e.g. LocalStack (optional)
        DYNAMODB_TABLE_PREFIX: Prefix prepended to every collection name
        DYNAMODB_ROLE_ARN: Role to assume for DynamoDB access (optional)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        region = settings.aws.AWS_REGION
        table = settings.aws.table_name("users")
        ```
    """

    AWS_REGION: str = Field(default="ca-central-1", alias="AWS_REGION")
    DYNAMODB_ENDPOINT_URL: str | None = Field(
        default=None, alias="DYNAMODB_ENDPOINT_URL"
    )
    DYNAMODB_TABLE_PREFIX: str = Field(default="", alias="DYNAMODB_TABLE_PREFIX")
    DYNAMODB_ROLE_ARN: str | None = Field(default=None, alias="DYNAMODB_ROLE_ARN")

    THROTTLING_ERRS: list[str] = [
        "Throttling",
        "ThrottlingException",
        "ProvisionedThroughputExceededException",
        "RequestLimitExceeded",
    ]

    def table_name(self, collection: str) -> str:
        """Return the DynamoDB table backing a document collection."""
        return f"{self.DYNAMODB_TABLE_PREFIX}{collection}"
