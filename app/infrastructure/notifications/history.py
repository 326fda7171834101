"""Push notification history.

Every push dispatch leaves a record in ``push_notifications`` so
administrators can see what was broadcast and how many devices it reached.
"""

from datetime import datetime, timezone
from typing import List, Optional

import structlog

from infrastructure.persistence import DocumentStore, DocumentStoreError

logger = structlog.get_logger()

PUSH_HISTORY_COLLECTION = "push_notifications"

STATUS_SENT = "sent"
STATUS_NO_TARGETS = "no_targets"


class PushHistory:
    """Writes push dispatch records.

    Args:
        store: Document store holding ``push_notifications``
    """

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def record(
        self,
        title: str,
        body: str,
        target_roles: List[str],
        user_ids: List[str],
        success_count: int = 0,
        failure_count: int = 0,
        total_tokens: int = 0,
        status: str = STATUS_SENT,
    ) -> Optional[str]:
        """Store one history record and return its id.

        A failed write is logged and ``None`` is returned; it never fails the
        dispatch that was already sent.
        """
        record = {
            "title": title,
            "body": body,
            "target_roles": list(target_roles),
            "user_ids": list(user_ids),
            "sent_at": datetime.now(timezone.utc).isoformat(),
            "success_count": success_count,
            "failure_count": failure_count,
            "total_tokens": total_tokens,
            "created_by": "system",
            "status": status,
        }
        try:
            record_id = self._store.add(PUSH_HISTORY_COLLECTION, record)
        except DocumentStoreError as e:
            logger.error("push_history_write_failed", status=status, error=str(e))
            return None
        logger.info(
            "push_history_recorded",
            record_id=record_id,
            status=status,
            success_count=success_count,
            failure_count=failure_count,
        )
        return record_id
