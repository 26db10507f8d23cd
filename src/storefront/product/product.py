"""Product aggregate, the slice of the catalog that checkout depends on.

Checkout reads a product's price, optional time-boxed sale price, stock level
and shipping weight (grams). Stock only moves through ``reserve()``.
"""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.errors import ProductUnavailable
from storefront.product.events import ProductAdded, ProductRemoved, StockReserved
from storefront.shared.lifecycle import Lifecycle
from storefront.utils.time import utc_now


@storefront.aggregate
class Product:
    name: String(required=True, max_length=255, unique=True)
    slug: String(required=True, max_length=255, unique=True)
    description: Text()
    thumbnail_url: String(max_length=500)

    price: Float(required=True, min_value=0.0)
    sale_price: Float(min_value=0.0)
    sale_end_at: DateTime()

    inventory: Integer(default=0, min_value=0)
    weight: Integer(default=0, min_value=0)  # grams

    is_active: Boolean(default=True)
    lifecycle: ValueObject(Lifecycle)

    @invariant.post
    def sale_price_must_not_exceed_price(self):
        if self.sale_price is not None and self.price is not None and self.sale_price > self.price:
            raise ValidationError({"sale_price": ["Sale price cannot exceed the regular price"]})

    @classmethod
    def add(
        cls,
        name,
        slug,
        price,
        inventory=0,
        weight=0,
        sale_price=None,
        sale_end_at=None,
        description=None,
        thumbnail_url=None,
        is_active=True,
    ):
        now = utc_now()
        product = cls(
            name=name,
            slug=slug,
            price=price,
            sale_price=sale_price,
            sale_end_at=sale_end_at,
            inventory=inventory,
            weight=weight,
            description=description,
            thumbnail_url=thumbnail_url,
            is_active=is_active,
            lifecycle=Lifecycle.start(now),
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=name,
                slug=slug,
                inventory=inventory,
                added_at=now,
            )
        )
        return product

    def is_available(self) -> bool:
        return bool(self.is_active) and not self.lifecycle.is_deleted

    def has_stock_for(self, quantity: int) -> bool:
        return self.is_available() and quantity <= self.inventory

    def reserve(self, quantity: int):
        """Take ``quantity`` units out of stock for an order."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if not self.has_stock_for(quantity):
            raise ProductUnavailable(f"Product {self.id} cannot supply {quantity} unit(s)")

        now = utc_now()
        self.inventory = self.inventory - quantity
        self.lifecycle = self.lifecycle.touched(now)

        self.raise_(
            StockReserved(
                product_id=str(self.id),
                quantity=quantity,
                remaining=self.inventory,
                reserved_at=now,
            )
        )

    def soft_delete(self):
        if self.lifecycle.is_deleted:
            return
        now = utc_now()
        self.lifecycle = self.lifecycle.deleted(now)
        self.raise_(ProductRemoved(product_id=str(self.id), removed_at=now))
