"""Resolve a promotion code and apply it to an order total."""

from datetime import datetime

import structlog
from protean.utils.globals import current_domain

from storefront.errors import PromotionNotFound
from storefront.promotion.promotion import Promotion, PromotionDiscount

logger = structlog.get_logger(__name__)


def find_usable(code: str, now: datetime) -> Promotion:
    """Return the promotion behind ``code`` or raise why it cannot be used."""
    promotion = current_domain.repository_for(Promotion).find_by_code(code)
    if promotion is None:
        raise PromotionNotFound(f"No promotion with code {code}")

    promotion.assert_usable(now)
    return promotion


def redeem(code: str, total: float, now: datetime) -> tuple[Promotion, PromotionDiscount]:
    """Resolve ``code``, compute its discount on ``total`` and count the use.

    The caller stages the returned promotion in its Unit of Work, so the usage
    counter persists only if the whole order commits.
    """
    promotion = find_usable(code, now)
    discount = promotion.redeem(total, now)

    logger.info(
        "Promotion redeemed",
        code=code,
        used_times=promotion.used_times,
        discount=discount.amount,
        free_shipping=discount.free_shipping,
    )
    return promotion, discount
