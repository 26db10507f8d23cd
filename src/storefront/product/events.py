"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A product was added to the catalog."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    inventory: Integer(required=True)
    added_at: DateTime(required=True)


@storefront.event(part_of="Product")
class StockReserved:
    """Units of a product were taken out of inventory for an order."""

    __version__ = 1

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    remaining: Integer(required=True)
    reserved_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductRemoved:
    """A product was soft-deleted from the catalog."""

    __version__ = 1

    product_id: Identifier(required=True)
    removed_at: DateTime(required=True)
