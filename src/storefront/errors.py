"""Business errors raised by checkout and promotion operations.

Every error is a ``protean.exceptions.ValidationError`` so a failure inside a
command handler aborts its Unit of Work the same way field validation does.
Each class carries a stable ``code`` for API clients and the HTTP status the
API layer answers with.
"""

from protean.exceptions import ValidationError


class StorefrontError(ValidationError):
    code = "storefront_error"
    message = "Request could not be completed"
    status_code = 400

    def __init__(self, detail=None):
        self.detail = detail
        super().__init__({self.code: [detail or self.message]})

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "detail": self.detail}


class ProductUnavailable(StorefrontError):
    code = "product_not_available"
    message = "Product is not available in the requested quantity"


class InsufficientPoints(StorefrontError):
    code = "not_enough_point"
    message = "Not enough loyalty points"


class PointsBelowMinimum(StorefrontError):
    code = "point_below_minimum"
    message = "Points spent are below the redeemable minimum"


class CustomerNotFound(StorefrontError):
    code = "customer_not_found"
    message = "Customer not found"
    status_code = 404


class PromotionNotFound(StorefrontError):
    code = "promotion_not_found"
    message = "Promotion not found"
    status_code = 404


class PromotionExpired(StorefrontError):
    code = "promotion_expired"
    message = "Promotion has expired"


class PromotionExhausted(StorefrontError):
    code = "promotion_max_used"
    message = "Promotion has reached its usage limit"


class DuplicatePromotionCode(StorefrontError):
    code = "promotion_code_taken"
    message = "Promotion code is already in use"


class OrderNotFound(StorefrontError):
    code = "order_not_found"
    message = "Order not found"
    status_code = 404


class NotificationNotFound(StorefrontError):
    code = "notification_not_found"
    message = "Notification not found"
    status_code = 404


class NotAuthenticated(StorefrontError):
    code = "not_authenticated"
    message = "This operation needs a signed-in customer"
    status_code = 401
