"""Repository for the Cart aggregate."""

from storefront.cart.cart import Cart
from storefront.domain import storefront


@storefront.repository(part_of=Cart)
class CartRepository:
    def find_for_customer(self, customer_id: str) -> Cart | None:
        results = self._dao.query.filter(customer_id=customer_id).all().items
        return results[0] if results else None

    def for_customer(self, customer_id: str) -> Cart:
        """Return the customer's cart, creating an unsaved empty one if none exists."""
        return self.find_for_customer(customer_id) or Cart.create(customer_id=customer_id)
