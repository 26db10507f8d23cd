"""Earning and redeeming loyalty points.

Earning: orders below ``earn_threshold`` (1,000,000) earn nothing. Above it the
total is expressed in millions, rounded half-up to one decimal, and scaled by
``earn_points_per_unit``. A 1,550,000 order therefore earns 16 points and a
1,549,999 order earns 15.

Redeeming: each point is worth ``point_value`` (1,000) off the order.
"""

from decimal import ROUND_HALF_UP, Decimal

from storefront.settings import Settings

_ONE_DECIMAL = Decimal("0.1")


def points_for(total: float | None, settings: Settings) -> int:
    if not total or total < settings.earn_threshold:
        return 0

    units = (Decimal(str(total)) / Decimal(str(settings.earn_threshold))).quantize(
        _ONE_DECIMAL, rounding=ROUND_HALF_UP
    )
    return int(units * settings.earn_points_per_unit)


def earn(customer, total: float, settings: Settings) -> int:
    """Credit the points ``total`` earns. Returns the points credited (possibly 0)."""
    points = points_for(total, settings)
    if points > 0:
        customer.earn_points(points)
    return points


def redeem(customer, points: int, settings: Settings) -> float:
    """Spend ``points`` and return the money discount they are worth.

    Raises ``InsufficientPoints`` without touching the balance.
    """
    customer.spend_points(points)
    return points * settings.point_value
