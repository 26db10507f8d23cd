"""PlaceOrder command and the checkout orchestrator that handles it.

Runs every step of placement inside the handler's Unit of Work:

1. Validate that every product exists, is on sale and has stock.
2. Price each line at its effective unit price.
3. Redeem loyalty points (authenticated callers only).
4. Earn loyalty points on the pre-discount total (authenticated callers only).
5. Redeem the promotion code, if any.
6. Decide free shipping, otherwise ask the carrier for a fee.
7. Persist the order, decrement stock, and stage customer and promotion changes.

All checks run before anything is staged, and any error aborts the Unit of
Work, so a failed placement leaves stock, points and promotion usage exactly as
they were. Notifications and cart clearing happen after commit, in
``storefront.notification.order_events``.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.customer import loyalty
from storefront.customer.customer import Customer
from storefront.domain import storefront
from storefront.errors import CustomerNotFound, PointsBelowMinimum
from storefront.order.order import DeliverOption, DeliveryAddress, Order, Recipient
from storefront.order.shipment_draft import build_shipment_draft, grams_to_kg
from storefront.product import inventory
from storefront.product.pricing import price_lines
from storefront.promotion import engine as promotions
from storefront.promotion.promotion import Promotion
from storefront.settings import get_settings
from storefront.shipping.fees import resolve_fee
from storefront.shipping.port import Destination
from storefront.utils.logging import add_context
from storefront.utils.time import utc_now

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    """Place an order for a list of products.

    ``customer_id`` identifies the authenticated caller; anonymous orders
    neither spend nor earn points.
    """

    customer_id = Identifier()

    name = String(required=True, max_length=255)
    phone = String(required=True, max_length=20)
    email = String(required=True, max_length=255)

    province = String(required=True, max_length=100)
    district = String(required=True, max_length=100)
    ward = String(max_length=100)
    street = String(max_length=255)
    address = String(required=True, max_length=500)
    note = Text()
    deliver_option = String(choices=DeliverOption, default=DeliverOption.NONE.value)

    point_used = Integer(min_value=0)
    promotion_code = String(max_length=50)

    items = Text(required=True)  # JSON: [{"product_id": ..., "quantity": ...}]


def parse_items(raw) -> list[tuple[str, int]]:
    """Turn the command's item payload into ``(product_id, quantity)`` pairs."""
    try:
        items = json.loads(raw) if isinstance(raw, str) else raw
    except json.JSONDecodeError:
        raise ValidationError({"items": ["Items must be a JSON list"]})
    if not isinstance(items, list):
        raise ValidationError({"items": ["Items must be a list"]})
    if not items:
        raise ValidationError({"items": ["An order needs at least one product"]})

    requests = []
    for item in items:
        if not isinstance(item, dict):
            raise ValidationError({"items": ["Every item must be an object with product_id and quantity"]})
        product_id = item.get("product_id")
        quantity = item.get("quantity")
        if not product_id:
            raise ValidationError({"items": ["Every item needs a product_id"]})
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise ValidationError({"items": [f"Quantity for {product_id} must be a positive integer"]})
        requests.append((str(product_id), quantity))
    return requests


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command: PlaceOrder) -> dict:
        settings = get_settings()
        now = utc_now()
        requests = parse_items(command.items)

        add_context(customer_id=command.customer_id)

        products = inventory.check_availability(requests)
        priced_lines, total_value = price_lines([(products[pid], qty) for pid, qty in requests], now)
        actual_value = total_value

        customer = None
        point_used = None
        point_earned = None
        if command.customer_id:
            customer = _load_customer(command.customer_id)

            if command.point_used:
                if command.point_used < settings.min_points_redeemable:
                    raise PointsBelowMinimum(
                        f"At least {settings.min_points_redeemable} points must be spent, got {command.point_used}"
                    )
                actual_value -= loyalty.redeem(customer, command.point_used, settings)
                point_used = command.point_used

            point_earned = loyalty.earn(customer, total_value, settings) or None

        promotion = None
        free_shipping = False
        if command.promotion_code:
            promotion, discount = promotions.redeem(command.promotion_code, total_value, now)
            actual_value -= discount.amount
            free_shipping = discount.free_shipping

        actual_value = max(actual_value, 0.0)

        destination = Destination(
            province=command.province,
            district=command.district,
            ward=command.ward,
            street=command.street,
            address=command.address,
        )
        weight_kg = sum(grams_to_kg(line.weight) * line.quantity for line in priced_lines)
        fee_ship = resolve_fee(
            destination,
            weight_kg,
            command.deliver_option or DeliverOption.NONE.value,
            total_value,
            free_shipping,
            settings,
        )

        order = Order.place(
            recipient=Recipient(name=command.name, phone=command.phone, email=command.email),
            address=DeliveryAddress(
                province=command.province,
                district=command.district,
                ward=command.ward,
                street=command.street,
                address=command.address,
                note=command.note,
            ),
            priced_lines=priced_lines,
            value=total_value,
            actual_value=actual_value,
            fee_ship=fee_ship,
            deliver_option=command.deliver_option or DeliverOption.NONE.value,
            customer_id=command.customer_id,
            point_used=point_used,
            point_earned=point_earned,
            promotion_id=str(promotion.id) if promotion else None,
            promotion_code=promotion.code if promotion else None,
            placed_at=now,
        )

        current_domain.repository_for(Order).add(order)
        inventory.reserve(products, requests)
        if customer is not None and (point_used or point_earned):
            current_domain.repository_for(Customer).add(customer)
        if promotion is not None:
            current_domain.repository_for(Promotion).add(promotion)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            value=total_value,
            actual_value=actual_value,
            fee_ship=fee_ship,
            point_used=point_used,
            point_earned=point_earned,
            promotion_code=command.promotion_code,
        )

        return build_shipment_draft(order, settings)


def _load_customer(customer_id) -> Customer:
    try:
        customer = current_domain.repository_for(Customer).get(customer_id)
    except ObjectNotFoundError:
        raise CustomerNotFound(f"Customer {customer_id} does not exist")
    if customer.lifecycle.is_deleted:
        raise CustomerNotFound(f"Customer {customer_id} does not exist")
    return customer
