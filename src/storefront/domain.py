"""Storefront domain: checkout over a product catalog.

Every aggregate that takes part in order placement lives in this one domain,
so a single Unit of Work covers stock reservation, point movements, promotion
usage and the persisted order.
"""

from protean.domain import Domain

storefront = Domain(name="storefront")