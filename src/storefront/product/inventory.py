"""Availability checks and stock decrements for checkout.

Reservation runs in two phases inside the caller's Unit of Work. The read phase
loads and validates every product before anything changes; the write phase
decrements stock through ``Product.reserve`` and stages the products for
commit. Quantities requested for the same product are summed before checking.
"""

from collections import OrderedDict

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.errors import ProductUnavailable
from storefront.product.product import Product

logger = structlog.get_logger(__name__)


def requested_quantities(requests) -> "OrderedDict[str, int]":
    """Sum quantities per product id, keeping first-seen order.

    ``requests`` is an iterable of ``(product_id, quantity)`` pairs.
    """
    totals: OrderedDict[str, int] = OrderedDict()
    for product_id, quantity in requests:
        totals[str(product_id)] = totals.get(str(product_id), 0) + quantity
    return totals


def check_availability(requests) -> dict[str, Product]:
    """Load and validate every requested product. Raises ``ProductUnavailable``."""
    repo = current_domain.repository_for(Product)
    products = {}

    for product_id, quantity in requested_quantities(requests).items():
        try:
            product = repo.get(product_id)
        except ObjectNotFoundError:
            logger.info("Requested product does not exist", product_id=product_id)
            raise ProductUnavailable(f"Product {product_id} does not exist")

        if not product.has_stock_for(quantity):
            logger.info(
                "Requested product unavailable",
                product_id=product_id,
                requested=quantity,
                in_stock=product.inventory,
                is_active=product.is_active,
                is_deleted=product.lifecycle.is_deleted,
            )
            raise ProductUnavailable(f"Product {product_id} cannot supply {quantity} unit(s)")

        products[product_id] = product

    return products


def reserve(products: dict[str, Product], requests) -> None:
    """Decrement stock for every request and stage the products for commit."""
    repo = current_domain.repository_for(Product)
    for product_id, quantity in requested_quantities(requests).items():
        product = products[product_id]
        product.reserve(quantity)
        repo.add(product)
