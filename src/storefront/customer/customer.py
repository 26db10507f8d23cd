"""Customer aggregate: the loyalty side of a registered shopper.

Authentication and profile management live outside this service; checkout
only needs the point balance and a contact address.
"""

from protean.exceptions import ValidationError
from protean.fields import Integer, String, ValueObject

from storefront.customer.events import PointsEarned, PointsSpent
from storefront.domain import storefront
from storefront.errors import InsufficientPoints
from storefront.shared.lifecycle import Lifecycle
from storefront.utils.time import utc_now


@storefront.aggregate
class Customer:
    name: String(required=True, max_length=255)
    email: String(required=True, max_length=255, unique=True)
    point: Integer(default=0, min_value=0)

    lifecycle: ValueObject(Lifecycle)

    @classmethod
    def register(cls, name, email, point=0):
        now = utc_now()
        return cls(name=name, email=email, point=point, lifecycle=Lifecycle.start(now))

    def earn_points(self, points: int):
        if points <= 0:
            raise ValidationError({"point": ["Earned points must be positive"]})

        now = utc_now()
        self.point = self.point + points
        self.lifecycle = self.lifecycle.touched(now)
        self.raise_(PointsEarned(customer_id=str(self.id), points=points, balance=self.point, earned_at=now))

    def spend_points(self, points: int):
        """Deduct ``points`` from the balance. Leaves the balance untouched on failure."""
        if points <= 0:
            raise ValidationError({"point": ["Spent points must be positive"]})
        if points > self.point:
            raise InsufficientPoints(f"Requested {points} point(s), balance is {self.point}")

        now = utc_now()
        self.point = self.point - points
        self.lifecycle = self.lifecycle.touched(now)
        self.raise_(PointsSpent(customer_id=str(self.id), points=points, balance=self.point, spent_at=now))
