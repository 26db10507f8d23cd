"""Repository for the Product aggregate."""

from protean.exceptions import InvalidOperationError

from storefront.domain import storefront
from storefront.product.product import Product


@storefront.repository(part_of=Product)
class ProductRepository:
    def remove(self, product):
        raise InvalidOperationError("Products are soft-deleted; use Product.soft_delete()")
