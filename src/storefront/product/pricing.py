"""Effective unit prices and order totals.

A sale price applies only while its end date lies in the future; a sale price
without an end date is ignored. Prices are evaluated at placement time and
never cached.
"""

from dataclasses import dataclass
from datetime import datetime

from storefront.utils.time import as_utc


@dataclass(frozen=True)
class PricedLine:
    product_id: str
    name: str
    quantity: int
    unit_price: float
    weight: int  # grams

    @property
    def total(self) -> float:
        return self.unit_price * self.quantity


def effective_unit_price(product, now: datetime) -> float:
    if product.sale_price is not None and product.sale_end_at is not None and as_utc(product.sale_end_at) > as_utc(now):
        return product.sale_price
    return product.price


def line_total(product, quantity: int, now: datetime) -> float:
    return effective_unit_price(product, now) * quantity


def price_lines(pairs, now: datetime) -> tuple[list[PricedLine], float]:
    """Price ``(product, quantity)`` pairs in order.

    Returns the priced lines and their pre-discount total.
    """
    lines = [
        PricedLine(
            product_id=str(product.id),
            name=product.name,
            quantity=quantity,
            unit_price=effective_unit_price(product, now),
            weight=product.weight or 0,
        )
        for product, quantity in pairs
    ]
    return lines, sum(line.total for line in lines)
