"""Shipping adapter registry.

Provides get_carrier() / set_carrier() to swap implementations:
- FlatRateShipping by default (SHIPPING_ADAPTER=flat)
- FakeCarrier for development and testing (SHIPPING_ADAPTER=fake)
"""

import os

from storefront.shipping.port import ShippingPort

_current_carrier: ShippingPort | None = None


def get_carrier() -> ShippingPort:
    """Return the configured shipping adapter (singleton)."""
    global _current_carrier
    if _current_carrier is None:
        adapter = os.environ.get("SHIPPING_ADAPTER", "flat")
        if adapter == "flat":
            from storefront.shipping.flat_rate import FlatRateShipping

            _current_carrier = FlatRateShipping()
        elif adapter == "fake":
            from storefront.shipping.fake_carrier import FakeCarrier

            _current_carrier = FakeCarrier()
        else:
            raise ValueError(f"Unknown shipping adapter: {adapter}")
    return _current_carrier


def set_carrier(carrier: ShippingPort) -> None:
    """Override the active shipping adapter (useful for tests)."""
    global _current_carrier
    _current_carrier = carrier


def reset_carrier() -> None:
    """Reset to the environment-selected adapter."""
    global _current_carrier
    _current_carrier = None
