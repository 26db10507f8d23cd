"""Carrier status callback for placed orders.

The carrier reports the order id it was given (``partner_id``), a status code,
the final shipping fee and an optional reason. Pricing is not re-run; only the
fee, the fee-adjusted value and the status fields change.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import OrderNotFound
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class UpdateShipmentStatus:
    partner_id = Identifier(required=True)
    status_id = Integer()
    fee = Float(min_value=0.0)
    reason_code = String(max_length=50)
    reason = Text()


@storefront.command_handler(part_of=Order)
class UpdateShipmentStatusHandler:
    @handle(UpdateShipmentStatus)
    def update_shipment_status(self, command: UpdateShipmentStatus):
        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(command.partner_id)
        except ObjectNotFoundError:
            raise OrderNotFound(f"Order {command.partner_id} does not exist")

        changed = order.record_shipment_status(
            status_id=command.status_id,
            fee=command.fee,
            reason_code=command.reason_code,
            reason=command.reason,
        )
        if not changed:
            logger.info("Shipment status already recorded", order_id=command.partner_id)
            return

        repo.add(order)
        logger.info(
            "Shipment status recorded",
            order_id=command.partner_id,
            status_id=command.status_id,
            fee_ship=order.fee_ship,
            value=order.value,
        )
