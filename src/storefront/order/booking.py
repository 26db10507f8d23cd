"""Books the parcel with the carrier once an order is committed.

Booking is best-effort: the order stands whether or not the carrier accepts
the parcel, and a failure is only logged.
"""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.order.events import OrderPlaced
from storefront.order.order import Order
from storefront.order.shipment_draft import build_shipment_draft
from storefront.settings import get_settings
from storefront.shipping import get_carrier

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=Order)
class OrderShipmentHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        order_id = str(event.order_id)
        try:
            order = current_domain.repository_for(Order).get(order_id)
            partner_id = get_carrier().create_shipment(build_shipment_draft(order, get_settings()))
        except Exception as exc:
            logger.error("Failed to book shipment", order_id=order_id, error=str(exc))
            return

        logger.info("Shipment booked", order_id=order_id, partner_id=partner_id)
