"""Discount codes with expiry and usage limits.

A promotion either reduces the order value (``target="product"``) by a
percentage capped at ``max_value`` or by a fixed amount, or waives shipping
(``target="shipping"``). A code is usable while it is active, not deleted,
not expired and below ``max_used_times``. Expiry is checked before usage, so
an expired and exhausted code reports expiry.
"""

import secrets
import string
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.errors import PromotionExhausted, PromotionExpired, PromotionNotFound
from storefront.promotion.events import (
    PromotionActivated,
    PromotionCreated,
    PromotionDeactivated,
    PromotionDeleted,
    PromotionRedeemed,
    PromotionRestored,
)
from storefront.shared.lifecycle import Lifecycle
from storefront.utils.time import as_utc, utc_now

_CODE_ALPHABET = string.ascii_uppercase + string.digits
_CODE_LENGTH = 9


class PromotionType(Enum):
    PERCENT = "percent"
    MONEY = "money"


class PromotionTarget(Enum):
    PRODUCT = "product"
    SHIPPING = "shipping"


_CODE_PREFIX = {
    PromotionTarget.PRODUCT.value: "PD",
    PromotionTarget.SHIPPING.value: "SH",
}


def generate_code(target: str) -> str:
    """Random code such as ``PD7K2M9QXA4`` (product) or ``SH...`` (shipping)."""
    suffix = "".join(secrets.choice(_CODE_ALPHABET) for _ in range(_CODE_LENGTH))
    return f"{_CODE_PREFIX[target]}{suffix}"


@dataclass(frozen=True)
class PromotionDiscount:
    """What a promotion does to one order."""

    promotion_id: str
    code: str
    amount: float = 0.0
    free_shipping: bool = False


@storefront.aggregate
class Promotion:
    name: String(required=True, max_length=255)
    description: Text()
    code: String(required=True, max_length=50, unique=True)

    promotion_type: String(choices=PromotionType, required=True)
    target: String(choices=PromotionTarget, required=True)
    value: Float(required=True, min_value=0.0)
    max_value: Float(min_value=0.0)

    used_times: Integer(default=0, min_value=0)
    max_used_times: Integer(min_value=0)
    expired_at: DateTime()
    created_by: String(max_length=255)

    is_active: Boolean(default=True)
    lifecycle: ValueObject(Lifecycle)

    @invariant.post
    def percentage_must_not_exceed_hundred(self):
        if self.promotion_type == PromotionType.PERCENT.value and self.value is not None and self.value > 100:
            raise ValidationError({"value": ["A percentage promotion cannot exceed 100"]})

    @classmethod
    def create(
        cls,
        name,
        promotion_type,
        target,
        value,
        code=None,
        description=None,
        max_value=None,
        max_used_times=None,
        expired_at=None,
        created_by=None,
    ):
        now = utc_now()
        promotion = cls(
            name=name,
            description=description,
            code=code or generate_code(target),
            promotion_type=promotion_type,
            target=target,
            value=value,
            max_value=max_value,
            used_times=0,
            max_used_times=max_used_times,
            expired_at=expired_at,
            created_by=created_by,
            lifecycle=Lifecycle.start(now),
        )
        promotion.raise_(
            PromotionCreated(
                promotion_id=str(promotion.id),
                code=promotion.code,
                promotion_type=promotion_type,
                target=target,
                value=value,
                max_used_times=max_used_times,
                expired_at=expired_at,
                created_at=now,
            )
        )
        return promotion

    # -------------------------------------------------------------------
    # Usability
    # -------------------------------------------------------------------
    @property
    def frees_shipping(self) -> bool:
        return self.target == PromotionTarget.SHIPPING.value

    def is_expired(self, now: datetime) -> bool:
        return self.expired_at is not None and as_utc(self.expired_at) < as_utc(now)

    def is_exhausted(self) -> bool:
        return self.max_used_times is not None and self.max_used_times <= self.used_times

    def assert_usable(self, now: datetime):
        """Raise the first reason this code cannot be used right now."""
        if not self.is_active or self.lifecycle.is_deleted:
            raise PromotionNotFound(f"Promotion {self.code} is not available")
        if self.is_expired(now):
            raise PromotionExpired(f"Promotion {self.code} expired at {self.expired_at.isoformat()}")
        if self.is_exhausted():
            raise PromotionExhausted(f"Promotion {self.code} was used {self.used_times} time(s)")

    def discount_for(self, total: float) -> PromotionDiscount:
        if self.frees_shipping:
            return PromotionDiscount(promotion_id=str(self.id), code=self.code, free_shipping=True)

        if self.promotion_type == PromotionType.PERCENT.value:
            amount = total * self.value / 100
            if self.max_value is not None:
                amount = min(amount, self.max_value)
        else:
            amount = min(self.value, total)

        return PromotionDiscount(promotion_id=str(self.id), code=self.code, amount=amount)

    def redeem(self, total: float, now: datetime) -> PromotionDiscount:
        """Apply this promotion to an order worth ``total`` and count the use."""
        self.assert_usable(now)

        discount = self.discount_for(total)
        self.used_times = self.used_times + 1
        self.lifecycle = self.lifecycle.touched(now)

        self.raise_(
            PromotionRedeemed(
                promotion_id=str(self.id),
                code=self.code,
                used_times=self.used_times,
                discount=discount.amount,
                redeemed_at=now,
            )
        )
        return discount

    # -------------------------------------------------------------------
    # Administration
    # -------------------------------------------------------------------
    def activate(self):
        if self.is_active:
            return
        now = utc_now()
        self.is_active = True
        self.lifecycle = self.lifecycle.touched(now)
        self.raise_(PromotionActivated(promotion_id=str(self.id), activated_at=now))

    def deactivate(self):
        if not self.is_active:
            return
        now = utc_now()
        self.is_active = False
        self.lifecycle = self.lifecycle.touched(now)
        self.raise_(PromotionDeactivated(promotion_id=str(self.id), deactivated_at=now))

    def soft_delete(self):
        if self.lifecycle.is_deleted:
            raise ValidationError({"promotion": ["Promotion is already deleted"]})
        now = utc_now()
        self.lifecycle = self.lifecycle.deleted(now)
        self.raise_(PromotionDeleted(promotion_id=str(self.id), deleted_at=now))

    def restore(self):
        if not self.lifecycle.is_deleted:
            raise ValidationError({"promotion": ["Only deleted promotions can be restored"]})
        now = utc_now()
        self.lifecycle = self.lifecycle.restored(now)
        self.raise_(PromotionRestored(promotion_id=str(self.id), restored_at=now))
