"""Parcel request handed to the carrier after an order is placed.

The carrier collects ``pick_money`` (what the buyer still owes plus the
shipping fee) on delivery and insures the parcel for the pre-discount value.
"""

from storefront.order.order import Order
from storefront.settings import Settings

HAMLET_OTHER = "Khác"
TRANSPORT_ROAD = "road"


def grams_to_kg(grams: int | None) -> float:
    return (grams or 0) / 1000


def build_shipment_draft(order: Order, settings: Settings) -> dict:
    pickup = settings.pickup
    return {
        "products": [
            {
                "name": line.product_name,
                "weight": grams_to_kg(line.weight),
                "quantity": line.quantity,
                "product_code": index,
            }
            for index, line in enumerate(order.lines)
        ],
        "order": {
            "id": str(order.id),
            "pick_name": pickup.name,
            "pick_address": pickup.address,
            "pick_province": pickup.province,
            "pick_district": pickup.district,
            "pick_ward": pickup.ward,
            "pick_tel": pickup.tel,
            "tel": order.recipient.phone,
            "name": order.recipient.name,
            "address": order.address.address,
            "province": order.address.province,
            "district": order.address.district,
            "ward": order.address.ward,
            "hamlet": HAMLET_OTHER,
            "is_freeship": 1,
            "pick_money": order.actual_value + order.fee_ship,
            "value": order.value,
            "transport": TRANSPORT_ROAD,
            "deliver_option": order.deliver_option,
            "note": order.address.note,
        },
    }
