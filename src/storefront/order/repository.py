"""Repository for the Order aggregate."""

from protean.exceptions import InvalidOperationError

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def find_for_customer(self, customer_id: str, offset: int = 0, limit: int = 10) -> list[Order]:
        """A customer's orders, newest first."""
        return (
            self._dao.query.filter(customer_id=customer_id)
            .order_by("-placed_at")
            .offset(offset)
            .limit(limit)
            .all()
            .items
        )

    def remove(self, order):
        raise InvalidOperationError("Orders are never hard-deleted")
