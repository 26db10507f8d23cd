"""Post-commit reactions to OrderPlaced.

Runs only after the order's Unit of Work has committed. Queues the buyer
confirmation and the operations alert, and empties the buyer's cart. Each
reaction is isolated: a failure is logged and never reaches the caller who
placed the order.
"""

import json

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.notification.notification import Notification, NotificationKind
from storefront.notification.templates import get_template
from storefront.order.events import OrderPlaced
from storefront.order.order import Order
from storefront.settings import get_settings

logger = structlog.get_logger(__name__)


def _template_context(event: OrderPlaced, currency: str) -> dict:
    return {
        "order_id": str(event.order_id),
        "name": event.recipient_name,
        "phone": event.recipient_phone,
        "address": event.shipping_address,
        "lines": json.loads(event.lines),
        "value": event.value,
        "actual_value": event.actual_value,
        "fee_ship": event.fee_ship,
        "point_used": event.point_used,
        "point_earned": event.point_earned,
        "promotion_code": event.promotion_code,
        "currency": currency,
    }


def queue_notification(order_id: str, recipient: str, kind: str, context: dict) -> Notification:
    rendered = get_template(kind).render(context)
    notification = Notification.queue(
        order_id=order_id,
        recipient=recipient,
        kind=kind,
        subject=rendered["subject"],
        body=rendered["body"],
    )
    current_domain.repository_for(Notification).add(notification)
    return notification


@storefront.event_handler(part_of=Order)
class OrderNotificationsHandler:
    """Queues the buyer confirmation and the operations alert."""

    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        settings = get_settings()
        context = _template_context(event, settings.currency)

        deliveries = [
            (event.recipient_email, NotificationKind.ORDER_CONFIRMATION.value),
            (settings.operations_email, NotificationKind.OPERATIONS_ALERT.value),
        ]
        for recipient, kind in deliveries:
            try:
                queue_notification(str(event.order_id), recipient, kind, context)
            except Exception as exc:
                logger.error(
                    "Failed to queue order notification",
                    order_id=str(event.order_id),
                    kind=kind,
                    error=str(exc),
                )


@storefront.event_handler(part_of=Order)
class OrderCartHandler:
    """Empties the buyer's cart once their order is committed."""

    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        if not event.customer_id:
            return

        repo = current_domain.repository_for(Cart)
        try:
            cart = repo.find_for_customer(str(event.customer_id))
            if cart is None:
                return
            cart.clear()
            repo.add(cart)
        except Exception as exc:
            logger.error(
                "Failed to clear cart after order",
                order_id=str(event.order_id),
                customer_id=str(event.customer_id),
                error=str(exc),
            )
