"""Shipping fee resolution for checkout.

Free shipping wins whenever any trigger fires: a shipping promotion or an
order value above the configured threshold. Otherwise the carrier quotes the
fee. A carrier without a price of its own, an unreachable carrier or an
undeliverable quote all fall back to the configured flat fee.
"""

import structlog

from storefront.settings import Settings
from storefront.shipping import get_carrier
from storefront.shipping.port import Destination

logger = structlog.get_logger(__name__)


def qualifies_for_free_shipping(total_value: float, settings: Settings) -> bool:
    return total_value > settings.free_ship_threshold


def resolve_fee(
    destination: Destination,
    weight_kg: float,
    deliver_option: str,
    total_value: float,
    free_shipping: bool,
    settings: Settings,
) -> float:
    if free_shipping or qualifies_for_free_shipping(total_value, settings):
        return 0.0

    try:
        quote = get_carrier().quote(destination, weight_kg, deliver_option, total_value)
    except Exception as exc:
        logger.warning(
            "Shipping quote failed, charging flat fee",
            province=destination.province,
            district=destination.district,
            error=str(exc),
        )
        return settings.flat_shipping_fee

    if not quote.get("deliverable", True):
        logger.warning(
            "Carrier cannot deliver to destination, charging flat fee",
            province=destination.province,
            district=destination.district,
        )
        return settings.flat_shipping_fee

    if quote.get("fee") is None:
        return settings.flat_shipping_fee

    return float(quote["fee"])
