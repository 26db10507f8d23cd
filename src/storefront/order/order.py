"""Order aggregate with OrderLine entity and recipient/address value objects.

An order is written once at placement with a snapshot of every unit price.
Afterwards only the carrier's shipment status, the shipping fee and the
value adjusted for that fee change.
"""

import json
from datetime import datetime
from enum import Enum

from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from storefront.domain import storefront
from storefront.order.events import OrderPlaced, ShipmentStatusUpdated
from storefront.shared.lifecycle import Lifecycle
from storefront.utils.time import utc_now


class DeliverOption(Enum):
    NONE = "none"
    XTEAM = "xteam"


@storefront.value_object(part_of="Order")
class Recipient:
    name: String(required=True, max_length=255)
    phone: String(required=True, max_length=20)
    email: String(required=True, max_length=255)


@storefront.value_object(part_of="Order")
class DeliveryAddress:
    province: String(required=True, max_length=100)
    district: String(required=True, max_length=100)
    ward: String(max_length=100)
    street: String(max_length=255)
    address: String(required=True, max_length=500)
    note: Text()

    def one_line(self) -> str:
        """``address, ward, district, province`` with blank parts left out."""
        parts = [self.address, self.ward, self.district, self.province]
        return ", ".join(part for part in parts if part)


@storefront.entity(part_of="Order")
class OrderLine:
    product_id: Identifier(required=True)
    product_name: String(required=True, max_length=255)
    quantity: Integer(required=True, min_value=1)
    unit_price: Float(required=True, min_value=0.0)
    weight: Integer(default=0, min_value=0)  # grams, per unit

    @property
    def total(self) -> float:
        return self.unit_price * self.quantity


@storefront.aggregate
class Order:
    customer_id: Identifier()

    recipient: ValueObject(Recipient, required=True)
    address: ValueObject(DeliveryAddress, required=True)
    deliver_option: String(choices=DeliverOption, default=DeliverOption.NONE.value)

    lines: HasMany(OrderLine)

    # Money
    value: Float(required=True)  # pre-discount total; carrier fee adjustments apply on top
    actual_value: Float(required=True, min_value=0.0)
    fee_ship: Float(default=0.0, min_value=0.0)

    # Discounts
    point_used: Integer(min_value=0)
    point_earned: Integer(min_value=0)
    promotion_id: Identifier()
    promotion_code: String(max_length=50)

    # Carrier feedback
    status_id: Integer()
    reason_code: String(max_length=50)
    reason: Text()

    placed_at: DateTime()
    lifecycle: ValueObject(Lifecycle)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        recipient: Recipient,
        address: DeliveryAddress,
        priced_lines,
        value: float,
        actual_value: float,
        fee_ship: float,
        deliver_option: str = DeliverOption.NONE.value,
        customer_id=None,
        point_used=None,
        point_earned=None,
        promotion_id=None,
        promotion_code=None,
        placed_at: datetime | None = None,
    ):
        now = placed_at or utc_now()
        order = cls(
            customer_id=customer_id,
            recipient=recipient,
            address=address,
            deliver_option=deliver_option,
            value=value,
            actual_value=actual_value,
            fee_ship=fee_ship,
            point_used=point_used,
            point_earned=point_earned,
            promotion_id=promotion_id,
            promotion_code=promotion_code,
            placed_at=now,
            lifecycle=Lifecycle.start(now),
        )
        for line in priced_lines:
            order.add_lines(
                OrderLine(
                    product_id=line.product_id,
                    product_name=line.name,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    weight=line.weight,
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id) if customer_id else None,
                recipient_name=recipient.name,
                recipient_email=recipient.email,
                recipient_phone=recipient.phone,
                shipping_address=address.one_line(),
                lines=json.dumps(
                    [
                        {
                            "product_id": str(line.product_id),
                            "name": line.product_name,
                            "quantity": line.quantity,
                            "unit_price": line.unit_price,
                            "line_total": line.total,
                        }
                        for line in order.lines
                    ]
                ),
                value=value,
                actual_value=actual_value,
                fee_ship=fee_ship,
                point_used=point_used,
                point_earned=point_earned,
                promotion_code=promotion_code,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Carrier feedback
    # -------------------------------------------------------------------
    def record_shipment_status(self, status_id=None, fee=None, reason_code=None, reason=None) -> bool:
        """Apply a carrier status report. Returns False when nothing changed.

        A new fee replaces the old one inside ``value``, so reporting the same
        fee twice leaves ``value`` where it is.
        """
        new_fee = self.fee_ship if fee is None else float(fee)
        new_value = self.value - (self.fee_ship or 0.0) + new_fee

        unchanged = (
            self.status_id == status_id
            and self.reason_code == reason_code
            and self.reason == reason
            and self.fee_ship == new_fee
            and self.value == new_value
        )
        if unchanged:
            return False

        now = utc_now()
        previous_fee = self.fee_ship
        self.status_id = status_id
        self.reason_code = reason_code
        self.reason = reason
        self.fee_ship = new_fee
        self.value = new_value
        self.lifecycle = self.lifecycle.touched(now)

        self.raise_(
            ShipmentStatusUpdated(
                order_id=str(self.id),
                status_id=status_id,
                reason_code=reason_code,
                reason=reason,
                previous_fee_ship=previous_fee,
                fee_ship=new_fee,
                value=new_value,
                updated_at=now,
            )
        )
        return True
