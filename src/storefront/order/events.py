"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """An order was persisted along with its stock, point and promotion changes.

    Carries everything the post-commit handlers need to notify the buyer and
    operations, and to empty the customer's cart.
    """

    __version__ = 1

    order_id: Identifier(required=True)
    customer_id: Identifier()
    recipient_name: String(required=True)
    recipient_email: String(required=True)
    recipient_phone: String(required=True)
    shipping_address: String(required=True)
    lines: Text(required=True)  # JSON: [{product_id, name, quantity, unit_price, line_total}]
    value: Float(required=True)
    actual_value: Float(required=True)
    fee_ship: Float(required=True)
    point_used: Integer()
    point_earned: Integer()
    promotion_code: String()
    placed_at: DateTime(required=True)


@storefront.event(part_of="Order")
class ShipmentStatusUpdated:
    """The carrier reported a new status or fee for an order's shipment."""

    __version__ = 1

    order_id: Identifier(required=True)
    status_id: Integer()
    reason_code: String()
    reason: String()
    previous_fee_ship: Float()
    fee_ship: Float()
    value: Float(required=True)
    updated_at: DateTime(required=True)
