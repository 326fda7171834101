"""Notification dispatcher.

Runs one notification request through its stages:

    VALIDATING → RESOLVING → RENDERING → SENDING → AGGREGATING → DONE

Every stage fails fast except SENDING, where each (recipient, channel) send
is isolated: a provider error only marks that entry as failed. Sends run
concurrently on a bounded thread pool and the result is produced once all of
them have completed.

Usage Example:
    dispatcher = NotificationDispatcher(
        channels={Channel.EMAIL: EmailChannel(settings.notifications)},
        resolver=RecipientResolver(store),
        templates=TemplateStore(store, company_name="Acme"),
        config_repository=ProviderConfigRepository(store, settings.notifications),
    )

    result = dispatcher.dispatch(
        NotificationRequest(
            to=NotificationTarget(roles=["Admin"]),
            template_slug="admin_new_advance_salary_request",
            data={"employee_name": "Jane Doe", "amount": "500"},
        )
    )
    logger.info("dispatched", sent=result.success_count, failed=result.failure_count)
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import structlog

from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.config_repository import ProviderConfigRepository
from infrastructure.notifications.errors import (
    ConfigurationError,
    NoMatchingRecipientsError,
    NotificationError,
    TemplateInactiveError,
    TemplateNotFoundError,
    ValidationError,
)
from infrastructure.notifications.models import (
    Channel,
    DispatchResult,
    DispatchState,
    NotificationRequest,
    ProviderConfig,
    Recipient,
    RecipientResult,
    SendResult,
)
from infrastructure.notifications.recipients import RecipientResolver
from infrastructure.notifications.templates import TemplateStore
from infrastructure.operations import OperationResult

logger = structlog.get_logger()


@dataclass(frozen=True)
class _SendJob:
    channel: NotificationChannel
    recipient: Recipient
    subject: str
    body: str
    config: ProviderConfig
    url: Optional[str] = None


class NotificationDispatcher:
    """Multi-channel notification dispatcher.

    Attributes:
        channels: Sender per channel
        resolver: Expands targets into recipients
        templates: Renders template slugs
        config_repository: Source of the active provider configuration
        max_workers: Upper bound of concurrent provider calls
    """

    def __init__(
        self,
        channels: Dict[Channel, NotificationChannel],
        resolver: RecipientResolver,
        templates: TemplateStore,
        config_repository: ProviderConfigRepository,
        max_workers: int = 8,
    ):
        self.channels = channels
        self.resolver = resolver
        self.templates = templates
        self.config_repository = config_repository
        self.max_workers = max_workers

        logger.info(
            "initialized_notification_dispatcher",
            channels=[c.value for c in channels],
            max_workers=max_workers,
        )

    def dispatch(self, request: NotificationRequest) -> DispatchResult:
        """Send ``request`` and aggregate the per-recipient outcomes.

        Returns:
            DispatchResult with ``success`` true when at least one send
            succeeded and one entry per attempted send.

        Raises:
            ValidationError: missing content fields, empty target, unknown channel
            NoMatchingRecipientsError: nobody to send to; no provider is called
            TemplateNotFoundError / TemplateInactiveError: the only requested
                channel has no usable template
            ConfigurationError: no active provider configuration for the only
                requested channel
        """
        self._enter(DispatchState.VALIDATING)
        self._validate(request)

        self._enter(DispatchState.RESOLVING)
        recipients = {
            channel: self.resolver.resolve(request.to, channel)
            for channel in request.channels
        }
        if not any(recipients.values()):
            logger.warning(
                "dispatch_no_matching_recipients",
                channels=[c.value for c in request.channels],
            )
            raise NoMatchingRecipientsError()

        self._enter(DispatchState.RENDERING)
        candidates = [c for c in request.channels if recipients[c]]
        messages, skipped = self._render(request, candidates)

        self._enter(DispatchState.SENDING)
        configs, skipped_for_config = self._load_configs(list(messages))
        skipped.extend(skipped_for_config)

        jobs: List[_SendJob] = []
        for channel_name, config in configs.items():
            subject, body = messages[channel_name]
            for recipient in recipients[channel_name]:
                jobs.append(
                    _SendJob(
                        channel=self.channels[channel_name],
                        recipient=recipient,
                        subject=subject,
                        body=body,
                        config=config,
                        url=request.url,
                    )
                )
        results = self._send_all(jobs)

        self._enter(DispatchState.AGGREGATING)
        dispatch_result = DispatchResult.aggregate(results, skipped)
        logger.info(
            "notification_dispatched",
            template_slug=request.template_slug,
            channels=[c.value for c in configs],
            skipped_channels=[c.value for c in skipped],
            total_attempts=len(results),
            success_count=dispatch_result.success_count,
            success=dispatch_result.success,
        )

        self._enter(DispatchState.DONE)
        return dispatch_result

    def _enter(self, state: DispatchState) -> None:
        logger.debug("dispatch_state", state=state.value)

    def _validate(self, request: NotificationRequest) -> None:
        missing = request.missing_content_fields()
        if missing:
            raise ValidationError.missing_fields(
                missing, "Provide templateSlug, or both subject and body"
            )
        if request.to.is_empty:
            raise ValidationError.missing_fields(["to"])
        if not request.channels:
            raise ValidationError.missing_fields(["channels"])
        unknown = [c.value for c in request.channels if c not in self.channels]
        if unknown:
            raise ValidationError(
                f"Unsupported channels: {', '.join(unknown)}",
                details={"channels": unknown},
            )

    def _render(
        self, request: NotificationRequest, channels: List[Channel]
    ) -> Tuple[Dict[Channel, Tuple[str, str]], List[Channel]]:
        """Render per channel; literal subject/body bypass the template store.

        A channel whose template is missing or disabled is skipped when other
        channels remain; otherwise the template error propagates.
        """
        if not request.template_slug:
            literal = (request.subject or "", request.body or "")
            return {channel: literal for channel in channels}, []

        messages: Dict[Channel, Tuple[str, str]] = {}
        skipped: List[Channel] = []
        first_error: Optional[NotificationError] = None
        for channel in channels:
            try:
                rendered = self.templates.render(
                    request.template_slug, request.data, channel
                )
            except (TemplateNotFoundError, TemplateInactiveError) as e:
                first_error = first_error or e
                skipped.append(channel)
                logger.warning(
                    "channel_skipped_template_unavailable",
                    channel=channel.value,
                    template_slug=request.template_slug,
                    reason=e.error_code,
                )
                continue
            messages[channel] = self.channels[channel].format_message(
                rendered.subject, rendered.body
            )

        if not messages and first_error is not None:
            raise first_error
        return messages, skipped

    def _load_configs(
        self, channels: List[Channel]
    ) -> Tuple[Dict[Channel, ProviderConfig], List[Channel]]:
        """Read one configuration snapshot per channel for this dispatch."""
        configs: Dict[Channel, ProviderConfig] = {}
        skipped: List[Channel] = []
        first_error: Optional[ConfigurationError] = None
        for channel in channels:
            try:
                configs[channel] = self.config_repository.get_active(channel)
            except ConfigurationError as e:
                if len(channels) == 1:
                    raise
                first_error = first_error or e
                skipped.append(channel)
                logger.warning(
                    "channel_skipped_no_active_config",
                    channel=channel.value,
                    error=e.message,
                )
        if not configs and first_error is not None:
            raise first_error
        return configs, skipped

    def _send_all(self, jobs: List[_SendJob]) -> List[RecipientResult]:
        """Run every send and return the results in job order."""
        if not jobs:
            return []

        results: List[Optional[RecipientResult]] = [None] * len(jobs)
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(jobs))) as executor:
            future_to_index = {
                executor.submit(
                    job.channel.send,
                    job.recipient,
                    job.subject,
                    job.body,
                    job.config,
                    url=job.url,
                ): index
                for index, job in enumerate(jobs)
            }
            for future in as_completed(future_to_index):
                index = future_to_index[future]
                job = jobs[index]
                try:
                    send_result = future.result()
                except Exception as e:  # pylint: disable=broad-except
                    logger.exception(
                        "channel_exception",
                        channel=job.recipient.channel.value,
                        recipient=job.recipient.address,
                        error=str(e),
                    )
                    send_result = SendResult.failed(
                        f"Channel exception: {e}", "CHANNEL_EXCEPTION"
                    )
                results[index] = RecipientResult.from_send(job.recipient, send_result)

        return [r for r in results if r is not None]

    def get_available_channels(self) -> List[str]:
        """Names of the configured channels."""
        return [c.value for c in self.channels]

    def health_check(self) -> Dict[str, OperationResult]:
        """Check every channel against its active configuration."""
        health: Dict[str, OperationResult] = {}
        for channel_name, channel in self.channels.items():
            try:
                config = self.config_repository.get_active(channel_name)
            except ConfigurationError as e:
                health[channel_name.value] = OperationResult.permanent_error(
                    e.message, error_code=e.error_code
                )
                continue
            health[channel_name.value] = channel.health_check(config)
        return health
