"""Domain events for the Promotion aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Promotion")
class PromotionCreated:
    """A promotion code was issued."""

    __version__ = 1

    promotion_id: Identifier(required=True)
    code: String(required=True)
    promotion_type: String(required=True)
    target: String(required=True)
    value: Float(required=True)
    max_used_times: Integer()
    expired_at: DateTime()
    created_at: DateTime(required=True)


@storefront.event(part_of="Promotion")
class PromotionRedeemed:
    """A promotion code was applied to an order."""

    __version__ = 1

    promotion_id: Identifier(required=True)
    code: String(required=True)
    used_times: Integer(required=True)
    discount: Float(required=True)
    redeemed_at: DateTime(required=True)


@storefront.event(part_of="Promotion")
class PromotionActivated:
    __version__ = 1

    promotion_id: Identifier(required=True)
    activated_at: DateTime(required=True)


@storefront.event(part_of="Promotion")
class PromotionDeactivated:
    __version__ = 1

    promotion_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)


@storefront.event(part_of="Promotion")
class PromotionDeleted:
    """A promotion was soft-deleted; its code no longer resolves."""

    __version__ = 1

    promotion_id: Identifier(required=True)
    deleted_at: DateTime(required=True)


@storefront.event(part_of="Promotion")
class PromotionRestored:
    __version__ = 1

    promotion_id: Identifier(required=True)
    restored_at: DateTime(required=True)
