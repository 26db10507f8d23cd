"""Creation, update and soft-delete metadata shared by aggregates.

Embedded in every aggregate that is soft-deleted rather than removed. The
value is immutable; each transition returns a new ``Lifecycle``.
"""

from datetime import datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime

from storefront.domain import storefront


@storefront.value_object
class Lifecycle:
    is_deleted: Boolean(default=False)
    deleted_at: DateTime()
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def deleted_records_carry_a_deletion_time(self):
        if self.is_deleted and self.deleted_at is None:
            raise ValidationError({"deleted_at": ["Deleted records must record when they were deleted"]})

    @classmethod
    def start(cls, now: datetime) -> "Lifecycle":
        return cls(is_deleted=False, created_at=now, updated_at=now)

    def touched(self, now: datetime) -> "Lifecycle":
        return Lifecycle(
            is_deleted=self.is_deleted,
            deleted_at=self.deleted_at,
            created_at=self.created_at,
            updated_at=now,
        )

    def deleted(self, now: datetime) -> "Lifecycle":
        return Lifecycle(is_deleted=True, deleted_at=now, created_at=self.created_at, updated_at=now)

    def restored(self, now: datetime) -> "Lifecycle":
        return Lifecycle(is_deleted=False, deleted_at=None, created_at=self.created_at, updated_at=now)
