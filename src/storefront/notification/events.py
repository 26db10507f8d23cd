"""Domain events for the Notification aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Notification")
class NotificationQueued:
    """A notification was created and is waiting to be sent."""

    __version__ = 1

    notification_id: Identifier(required=True)
    order_id: Identifier(required=True)
    recipient: String(required=True)
    kind: String(required=True)
    queued_at: DateTime(required=True)


@storefront.event(part_of="Notification")
class NotificationSent:
    __version__ = 1

    notification_id: Identifier(required=True)
    recipient: String(required=True)
    sent_at: DateTime(required=True)


@storefront.event(part_of="Notification")
class NotificationFailed:
    """Sending a notification failed; it may be retried."""

    __version__ = 1

    notification_id: Identifier(required=True)
    recipient: String(required=True)
    reason: String(required=True)
    retry_count: Integer(required=True)
    max_retries: Integer(required=True)
    failed_at: DateTime(required=True)


@storefront.event(part_of="Notification")
class NotificationRetried:
    """A failed notification was put back in the queue."""

    __version__ = 1

    notification_id: Identifier(required=True)
    recipient: String(required=True)
    retry_count: Integer(required=True)
    retried_at: DateTime(required=True)
