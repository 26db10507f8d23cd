"""Domain events for the Cart aggregate."""

from protean.fields import DateTime, Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartItemAdded:
    """A product was added to the cart, or its quantity increased."""

    __version__ = 1

    cart_id: Identifier(required=True)
    customer_id: Identifier(required=True)
    product_id: Identifier(required=True)
    quantity: Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    cart_id: Identifier(required=True)
    customer_id: Identifier(required=True)
    product_id: Identifier(required=True)


@storefront.event(part_of="Cart")
class CartCleared:
    """All items were removed from the cart, typically after an order was placed."""

    __version__ = 1

    cart_id: Identifier(required=True)
    customer_id: Identifier(required=True)
    items_removed: Integer(required=True)
    cleared_at: DateTime(required=True)
