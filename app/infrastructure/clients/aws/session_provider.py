"""Session provider for AWS client operations.

Builds the boto3 session and client kwargs (region, LocalStack endpoint,
optional assumed role) shared by every call.
"""

from typing import Any, Dict, Optional

import structlog

logger = structlog.get_logger()


class SessionProvider:
    """Holds region, endpoint and role configuration for AWS clients.

    Args:
        region: AWS region for all clients (e.g., 'ca-central-1')
        endpoint_url: Custom endpoint URL (LocalStack, DynamoDB Local)
        role_arn: Role assumed for every call, if set
    """

    def __init__(
        self,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        role_arn: Optional[str] = None,
    ) -> None:
        self.region = region
        self.endpoint_url = endpoint_url
        self.role_arn = role_arn

    def build_client_kwargs(self) -> Dict[str, Any]:
        """Return ``session_config``, ``client_config`` and ``role_arn``
        ready to be splatted into ``execute_aws_api_call``."""
        session_config = {}
        client_config = {}

        if self.region:
            session_config["region_name"] = self.region
            client_config["region_name"] = self.region

        if self.endpoint_url:
            client_config["endpoint_url"] = self.endpoint_url

        logger.debug(
            "built_client_kwargs",
            session_config=session_config,
            client_config=client_config,
            role_arn=self.role_arn,
        )
        return {
            "session_config": session_config or None,
            "client_config": client_config or None,
            "role_arn": self.role_arn,
        }
