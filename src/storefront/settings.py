"""Business settings for checkout: thresholds, fees and the pickup location.

Settings are an immutable object built once from ``STOREFRONT_*`` environment
variables and handed explicitly to pricing, loyalty, promotion and shipping
code. ``configure()`` installs a specific instance (tests, app startup);
``get_settings()`` returns the installed one.
"""

import os

from pydantic import BaseModel, Field

_ENV_PREFIX = "STOREFRONT_"


class PickupLocation(BaseModel):
    """Warehouse the carrier collects parcels from."""

    model_config = {"frozen": True}

    name: str = "Storefront Warehouse"
    address: str = "1 Kho Hang"
    province: str = "Hà Nội"
    district: str = "Cầu Giấy"
    ward: str = "Dịch Vọng"
    tel: str = "0900000000"


class Settings(BaseModel):
    model_config = {"frozen": True}

    currency: str = "VND"

    # Shipping
    free_ship_threshold: float = Field(2_000_000, ge=0)
    flat_shipping_fee: float = Field(30_000, ge=0)

    # Loyalty
    point_value: float = Field(1_000, gt=0)
    min_points_redeemable: int = Field(20, ge=0)
    earn_threshold: float = Field(1_000_000, gt=0)
    earn_points_per_unit: int = Field(10, ge=0)

    # Notifications
    operations_email: str = "operations@storefront.local"

    pickup: PickupLocation = PickupLocation()

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Build settings from ``STOREFRONT_*`` variables, falling back to defaults.

        ``STOREFRONT_FREE_SHIP_THRESHOLD=2500000`` overrides
        ``free_ship_threshold``; ``STOREFRONT_PICKUP_TEL`` overrides
        ``pickup.tel``.
        """
        environ = os.environ if environ is None else environ

        values = {}
        for name in cls.model_fields:
            if name == "pickup":
                continue
            raw = environ.get(f"{_ENV_PREFIX}{name.upper()}")
            if raw is not None:
                values[name] = raw

        pickup = {}
        for name in PickupLocation.model_fields:
            raw = environ.get(f"{_ENV_PREFIX}PICKUP_{name.upper()}")
            if raw is not None:
                pickup[name] = raw
        if pickup:
            values["pickup"] = PickupLocation(**pickup)

        return cls(**values)


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the installed settings, building them from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def configure(settings: Settings) -> Settings:
    """Install ``settings`` as the process-wide checkout configuration."""
    global _settings
    _settings = settings
    return _settings


def reset_settings():
    """Drop the installed settings (useful for testing)."""
    global _settings
    _settings = None
