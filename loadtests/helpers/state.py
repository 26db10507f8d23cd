"""Per-user state tracking for the storefront load test.

Each Locust user keeps its own ids so follow-up requests can reference
what earlier requests created.
"""

from dataclasses import dataclass, field


@dataclass
class CheckoutState:
    customer_id: str | None = None
    promotion_id: str | None = None
    promotion_code: str | None = None
    cart_product_ids: list[str] = field(default_factory=list)
    order_id: str | None = None
