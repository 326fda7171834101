"""Base AWS client utilities.

Provides `get_boto3_client` and `execute_aws_api_call` following the
OperationResult pattern. Configuration is passed in as parameters; nothing is
read from settings at import time.
"""

from typing import Any, Dict, List, Optional

import boto3  # type: ignore
from botocore.client import BaseClient  # type: ignore
from botocore.exceptions import BotoCoreError, ClientError  # type: ignore
import structlog

from infrastructure.operations import OperationResult, classify_aws_error

logger = structlog.get_logger()


def get_boto3_client(
    service_name: str,
    session_config: Optional[Dict[str, Any]] = None,
    client_config: Optional[Dict[str, Any]] = None,
    role_arn: Optional[str] = None,
    session_name: str = "NotificationServiceSession",
) -> BaseClient:
    """Create a boto3 client for the given service.

    Args:
        service_name: AWS service name (e.g., 'dynamodb')
        session_config: Optional boto3 session kwargs (e.g., region_name)
        client_config: Optional client kwargs (e.g., endpoint_url)
        role_arn: Optional role to assume before creating the client
        session_name: Name for the assumed role session

    Returns:
        botocore client instance
    """
    session_config = session_config or {}
    client_config = client_config or {}

    if role_arn:
        sts = boto3.client("sts")
        assumed = sts.assume_role(RoleArn=role_arn, RoleSessionName=session_name)
        creds = assumed["Credentials"]
        session = boto3.Session(
            aws_access_key_id=creds["AccessKeyId"],
            aws_secret_access_key=creds["SecretAccessKey"],
            aws_session_token=creds["SessionToken"],
            **session_config,
        )
    else:
        session = boto3.Session(**session_config)

    return session.client(service_name, **client_config)


def _paginate(client: BaseClient, method: str, keys: Optional[List[str]], kwargs):
    paginator = client.get_paginator(method)
    results: List[Any] = []
    for page in paginator.paginate(**kwargs):
        for key in keys or []:
            results.extend(page.get(key, []))
    return results


def execute_aws_api_call(
    service_name: str,
    method: str,
    keys: Optional[List[str]] = None,
    role_arn: Optional[str] = None,
    session_config: Optional[Dict[str, Any]] = None,
    client_config: Optional[Dict[str, Any]] = None,
    force_paginate: bool = False,
    **kwargs,
) -> OperationResult:
    """Execute one AWS API call and wrap the outcome in an OperationResult.

    Args:
        service_name: AWS service name
        method: Client method name, e.g. ``get_item``
        keys: Page keys collected when paginating, e.g. ``["Items"]``
        role_arn: Optional role to assume
        session_config: boto3 session kwargs
        client_config: boto3 client kwargs
        force_paginate: Walk every page and return the concatenated ``keys``
        **kwargs: Parameters forwarded to the API method

    Returns:
        OperationResult with the raw response (or the collected list when
        paginating) in ``data``. ClientErrors are classified; nothing raises.
    """
    try:
        client = get_boto3_client(
            service_name,
            session_config=session_config,
            client_config=client_config,
            role_arn=role_arn,
        )
        if force_paginate:
            data = _paginate(client, method, keys, kwargs)
        else:
            data = getattr(client, method)(**kwargs)
        return OperationResult.success(
            data=data, message=f"{service_name}.{method} succeeded"
        )

    except ClientError as e:
        result = classify_aws_error(e)
        logger.error(
            "aws_api_error",
            service=service_name,
            method=method,
            error=str(e),
            error_code=result.error_code,
        )
        return result

    except BotoCoreError as e:
        logger.error(
            "aws_api_connection_error",
            service=service_name,
            method=method,
            error=str(e),
        )
        return classify_aws_error(e)
