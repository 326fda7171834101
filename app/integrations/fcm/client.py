"""Firebase Cloud Messaging (HTTP v1) client."""

import json
import threading
from typing import Dict, Optional

from google.oauth2 import service_account
from googleapiclient.discovery import Resource, build

from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult, classify_google_api_error

logger = get_module_logger()

FCM_SCOPE = "https://www.googleapis.com/auth/firebase.messaging"


class FcmClient:
    """Sends push messages to single device tokens.

    Credentials are parsed once per client and refresh their own access
    token. Resource objects from the Google API client are not thread-safe,
    so each worker thread builds its own service on first use.

    Args:
        credentials_json: Service account key content
        project_id: Firebase project id
    """

    def __init__(self, credentials_json: str, project_id: str) -> None:
        self._credentials_json = credentials_json
        self._project_id = project_id
        self._credentials = None
        self._lock = threading.Lock()
        self._local = threading.local()

    def _get_credentials(self):
        with self._lock:
            if self._credentials is None:
                try:
                    creds_info = json.loads(self._credentials_json)
                except (TypeError, json.JSONDecodeError) as e:
                    logger.error("invalid_fcm_credentials_json", error=str(e))
                    raise ValueError("Invalid FCM credentials JSON") from e
                self._credentials = service_account.Credentials.from_service_account_info(
                    creds_info
                ).with_scopes([FCM_SCOPE])
            return self._credentials

    def _service(self) -> Resource:
        service = getattr(self._local, "service", None)
        if service is None:
            service = build(
                "fcm",
                "v1",
                credentials=self._get_credentials(),
                cache_discovery=False,
                static_discovery=False,
            )
            self._local.service = service
        return service

    def send(
        self,
        token: str,
        title: str,
        body: str,
        data: Optional[Dict[str, str]] = None,
        link: Optional[str] = None,
    ) -> OperationResult:
        """Send one notification to ``token``.

        Returns:
            OperationResult with ``message_id`` (the FCM message name) in data.
        """
        message = {
            "token": token,
            "notification": {"title": title, "body": body},
            "data": {k: str(v) for k, v in (data or {}).items()},
        }
        if link:
            message["webpush"] = {"fcm_options": {"link": link}}

        try:
            response = (
                self._service()
                .projects()
                .messages()
                .send(parent=f"projects/{self._project_id}", body={"message": message})
                .execute()
            )
        except ValueError as e:
            return OperationResult.permanent_error(str(e), error_code="INVALID_CREDENTIALS")
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("fcm_send_failed", error=str(e))
            return classify_google_api_error(e)

        return OperationResult.success(
            data={"message_id": response.get("name")}, message="Push message sent"
        )
