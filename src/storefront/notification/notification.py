"""Notification aggregate. One email queued after an order commits.

Notifications are written by post-commit handlers and sent by the dispatcher.
A failed send never touches the order; the notification records the failure
and can be retried until ``max_retries`` is reached.

State Machine:
    PENDING → SENT
    PENDING → FAILED → (retry) → PENDING
"""

from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.notification.events import (
    NotificationFailed,
    NotificationQueued,
    NotificationRetried,
    NotificationSent,
)
from storefront.utils.time import utc_now


class NotificationKind(Enum):
    ORDER_CONFIRMATION = "OrderConfirmation"
    OPERATIONS_ALERT = "OperationsAlert"


class NotificationStatus(Enum):
    PENDING = "Pending"
    SENT = "Sent"
    FAILED = "Failed"


_VALID_TRANSITIONS = {
    NotificationStatus.PENDING: {NotificationStatus.SENT, NotificationStatus.FAILED},
    NotificationStatus.FAILED: {NotificationStatus.PENDING},  # Via retry
    NotificationStatus.SENT: set(),  # Terminal
}


@storefront.aggregate
class Notification:
    order_id: Identifier(required=True)
    recipient: String(required=True, max_length=255)
    kind: String(choices=NotificationKind, required=True)

    subject: String(max_length=500)
    body: Text(required=True)

    status: String(choices=NotificationStatus, default=NotificationStatus.PENDING.value)
    sent_at: DateTime()
    failure_reason: String(max_length=500)

    retry_count: Integer(default=0)
    max_retries: Integer(default=3)

    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def queue(cls, order_id, recipient, kind, subject, body, max_retries=3):
        """Create a notification in PENDING status."""
        now = utc_now()
        notification = cls(
            order_id=order_id,
            recipient=recipient,
            kind=kind,
            subject=subject,
            body=body,
            status=NotificationStatus.PENDING.value,
            retry_count=0,
            max_retries=max_retries,
            created_at=now,
            updated_at=now,
        )
        notification.raise_(
            NotificationQueued(
                notification_id=str(notification.id),
                order_id=str(order_id),
                recipient=recipient,
                kind=kind,
                queued_at=now,
            )
        )
        return notification

    def _assert_can_transition(self, target_status):
        current = NotificationStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def mark_sent(self):
        self._assert_can_transition(NotificationStatus.SENT)

        now = utc_now()
        self.status = NotificationStatus.SENT.value
        self.sent_at = now
        self.failure_reason = None
        self.updated_at = now

        self.raise_(NotificationSent(notification_id=str(self.id), recipient=self.recipient, sent_at=now))

    def mark_failed(self, reason):
        self._assert_can_transition(NotificationStatus.FAILED)

        now = utc_now()
        self.status = NotificationStatus.FAILED.value
        self.failure_reason = reason[:500]
        self.retry_count = self.retry_count + 1
        self.updated_at = now

        self.raise_(
            NotificationFailed(
                notification_id=str(self.id),
                recipient=self.recipient,
                reason=self.failure_reason,
                retry_count=self.retry_count,
                max_retries=self.max_retries,
                failed_at=now,
            )
        )

    def retry(self):
        """Put a failed notification back in the queue."""
        if NotificationStatus(self.status) != NotificationStatus.FAILED:
            raise ValidationError({"status": ["Only failed notifications can be retried"]})
        if self.retry_count >= self.max_retries:
            raise ValidationError({"retry_count": ["Maximum retry attempts exceeded"]})

        now = utc_now()
        self.status = NotificationStatus.PENDING.value
        self.failure_reason = None
        self.updated_at = now

        self.raise_(
            NotificationRetried(
                notification_id=str(self.id),
                recipient=self.recipient,
                retry_count=self.retry_count,
                retried_at=now,
            )
        )
