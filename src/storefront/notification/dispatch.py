"""Sends queued notifications through the configured mailer.

Reacts to NotificationQueued and NotificationRetried and updates the
notification to SENT or FAILED based on the mailer's answer.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.mail import get_mailer
from storefront.notification.events import NotificationQueued, NotificationRetried
from storefront.notification.notification import Notification, NotificationStatus

logger = structlog.get_logger(__name__)


def send_notification(notification: Notification) -> None:
    """Send one PENDING notification and record the outcome on it."""
    try:
        result = get_mailer().send(
            to=notification.recipient,
            subject=notification.subject or "",
            body=notification.body,
        )
        if result.get("status") == "sent":
            notification.mark_sent()
        else:
            notification.mark_failed(result.get("error") or "Unknown dispatch error")
    except Exception as e:
        notification.mark_failed(str(e))
        logger.error(
            "Notification dispatch failed",
            notification_id=str(notification.id),
            error=str(e),
        )


@storefront.event_handler(part_of=Notification)
class NotificationDispatcher:
    @handle(NotificationQueued)
    def on_notification_queued(self, event: NotificationQueued) -> None:
        self._dispatch(event.notification_id)

    @handle(NotificationRetried)
    def on_notification_retried(self, event: NotificationRetried) -> None:
        self._dispatch(event.notification_id)

    def _dispatch(self, notification_id) -> None:
        repo = current_domain.repository_for(Notification)
        try:
            notification = repo.get(notification_id)
        except ObjectNotFoundError:
            logger.error("Failed to load notification for dispatch", notification_id=str(notification_id))
            return

        if NotificationStatus(notification.status) != NotificationStatus.PENDING:
            logger.info(
                "Notification not in PENDING status, skipping dispatch",
                notification_id=str(notification_id),
                status=notification.status,
            )
            return

        send_notification(notification)
        repo.add(notification)
