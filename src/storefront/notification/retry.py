"""Notification retry and pending sweep."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.errors import NotificationNotFound
from storefront.notification.dispatch import send_notification
from storefront.notification.notification import Notification, NotificationStatus

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Notification")
class RetryNotification:
    """Request to retry a failed notification."""

    notification_id: Identifier(required=True)


@storefront.command(part_of="Notification")
class DispatchPendingNotifications:
    """Send every notification still waiting in PENDING, oldest first."""

    limit: Integer(default=100, min_value=1)


@storefront.command_handler(part_of=Notification)
class NotificationQueueHandler:
    @handle(RetryNotification)
    def retry_notification(self, command: RetryNotification):
        repo = current_domain.repository_for(Notification)
        try:
            notification = repo.get(command.notification_id)
        except ObjectNotFoundError:
            raise NotificationNotFound(f"Notification {command.notification_id} does not exist")
        notification.retry()
        repo.add(notification)

    @handle(DispatchPendingNotifications)
    def dispatch_pending(self, command: DispatchPendingNotifications) -> dict:
        repo = current_domain.repository_for(Notification)
        pending = (
            repo._dao.query.filter(status=NotificationStatus.PENDING.value)
            .order_by("created_at")
            .limit(command.limit)
            .all()
            .items
        )

        sent = 0
        for notification in pending:
            send_notification(notification)
            repo.add(notification)
            if notification.status == NotificationStatus.SENT.value:
                sent += 1

        logger.info("Pending notifications dispatched", attempted=len(pending), sent=sent)
        return {"attempted": len(pending), "sent": sent}
