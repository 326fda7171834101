"""Notification service for dependency injection.

Provides a class-based interface to the notification system for easier DI and testing.
"""

from typing import Dict, List, Optional, TYPE_CHECKING

import structlog

from infrastructure.notifications.config_repository import ProviderConfigRepository
from infrastructure.notifications.dispatcher import NotificationDispatcher
from infrastructure.notifications.errors import NoMatchingRecipientsError
from infrastructure.notifications.history import (
    PushHistory,
    STATUS_NO_TARGETS,
    STATUS_SENT,
)
from infrastructure.notifications.models import (
    Channel,
    DispatchResult,
    NotificationRequest,
    NotificationTarget,
    PushDispatchSummary,
)
from infrastructure.notifications.recipients import RecipientResolver
from infrastructure.notifications.templates import TemplateStore
from infrastructure.operations import OperationResult
from infrastructure.persistence import DocumentStore

if TYPE_CHECKING:
    from infrastructure.configuration import Settings
    from infrastructure.notifications.channels.base import NotificationChannel

logger = structlog.get_logger()


class NotificationService:
    """Class-based notification service.

    Wraps the NotificationDispatcher with a service interface to support
    dependency injection and easier testing with mocks.

    Usage:
        # Via dependency injection
        from infrastructure.services import NotificationServiceDep

        @router.post("/email/send")
        def send_email(
            notification_service: NotificationServiceDep,
            payload: EmailSendRequest,
        ):
            result = notification_service.send(payload.to_request())
            return {"success": result.success, "result": result}

        # Direct instantiation
        from infrastructure.services import get_settings, get_document_store
        from infrastructure.notifications import NotificationService

        service = NotificationService(get_settings(), get_document_store())
        result = service.send(request)
    """

    def __init__(
        self,
        settings: "Settings",
        store: DocumentStore,
        channels: Optional[Dict[Channel, "NotificationChannel"]] = None,
        dispatcher: Optional[NotificationDispatcher] = None,
    ):
        """Initialize notification service.

        Args:
            settings: Settings instance (required, passed from provider).
            store: Document store with users, employees, templates and
                provider configurations.
            channels: Optional dict of Channel to NotificationChannel instances.
                     If not provided, creates default channels based on settings.
            dispatcher: Optional pre-configured NotificationDispatcher instance.
                       If not provided, creates one with channels.
        """
        self._settings = settings
        self._store = store
        self._templates = TemplateStore(store, company_name=settings.APP_NAME)
        self._history = PushHistory(store)

        if dispatcher is None:
            if channels is None:
                # Import here to avoid circular dependency at module level
                from infrastructure.notifications.channels.email import EmailChannel
                from infrastructure.notifications.channels.push import PushChannel
                from infrastructure.notifications.channels.whatsapp import (
                    WhatsAppChannel,
                )

                channels = {
                    Channel.EMAIL: EmailChannel(settings.notifications),
                    Channel.WHATSAPP: WhatsAppChannel(settings.notifications),
                    Channel.PUSH: PushChannel(app_url=settings.server.APP_URL),
                }

            dispatcher = NotificationDispatcher(
                channels=channels,
                resolver=RecipientResolver(store),
                templates=self._templates,
                config_repository=ProviderConfigRepository(
                    store, settings.notifications
                ),
                max_workers=settings.notifications.DISPATCH_MAX_WORKERS,
            )

        self._dispatcher = dispatcher

    def send(self, request: NotificationRequest) -> DispatchResult:
        """Resolve, render and send ``request`` on each of its channels.

        Args:
            request: Target, content and channels of the notification

        Returns:
            DispatchResult listing every attempted send
        """
        return self._dispatcher.dispatch(request)

    def send_push(
        self,
        title: str,
        body: str,
        roles: Optional[List[str]] = None,
        user_ids: Optional[List[str]] = None,
    ) -> PushDispatchSummary:
        """Broadcast a literal push notification and record it in the history.

        Users without a registered device count towards nothing; when no
        device at all is targeted the history records ``no_targets``.
        """
        roles = roles or []
        user_ids = user_ids or []
        target = NotificationTarget(roles=roles, user_ids=user_ids)

        result = None
        if not target.is_empty:
            try:
                result = self.send(
                    NotificationRequest(
                        to=target, subject=title, body=body, channels=[Channel.PUSH]
                    )
                )
            except NoMatchingRecipientsError:
                result = None

        device_results = [
            r for r in (result.per_recipient_results if result else []) if r.recipient
        ]
        if not device_results:
            logger.info("push_no_targets", roles=roles, user_ids=user_ids)
            self._history.record(title, body, roles, user_ids, status=STATUS_NO_TARGETS)
            return PushDispatchSummary(success=False, status=STATUS_NO_TARGETS)

        success_count = sum(1 for r in device_results if r.success)
        failure_count = len(device_results) - success_count
        self._history.record(
            title,
            body,
            roles,
            user_ids,
            success_count=success_count,
            failure_count=failure_count,
            total_tokens=len(device_results),
            status=STATUS_SENT,
        )
        return PushDispatchSummary(
            success=True,
            success_count=success_count,
            failure_count=failure_count,
            total_tokens=len(device_results),
            status=STATUS_SENT,
            per_recipient_results=device_results,
        )

    @property
    def templates(self) -> TemplateStore:
        """Template store used for rendering and template administration."""
        return self._templates

    @property
    def store(self) -> DocumentStore:
        return self._store

    def list_channels(self) -> List[str]:
        """List all registered channel names."""
        return self._dispatcher.get_available_channels()

    def health_check(self) -> Dict[str, OperationResult]:
        """Health of every channel against its active provider configuration."""
        return self._dispatcher.health_check()

    @property
    def dispatcher(self) -> NotificationDispatcher:
        """Access underlying NotificationDispatcher instance."""
        return self._dispatcher
