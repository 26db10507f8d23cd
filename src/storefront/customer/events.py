"""Domain events for the Customer aggregate."""

from protean.fields import DateTime, Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Customer")
class PointsEarned:
    """Loyalty points were credited to a customer."""

    __version__ = 1

    customer_id: Identifier(required=True)
    points: Integer(required=True)
    balance: Integer(required=True)
    earned_at: DateTime(required=True)


@storefront.event(part_of="Customer")
class PointsSpent:
    """Loyalty points were redeemed against an order."""

    __version__ = 1

    customer_id: Identifier(required=True)
    points: Integer(required=True)
    balance: Integer(required=True)
    spent_at: DateTime(required=True)
