"""What an order total would earn, without placing the order."""

from storefront.customer.loyalty import points_for
from storefront.settings import get_settings


def preview_points(total: float) -> dict:
    settings = get_settings()
    return {"total": total, "points": points_for(total, settings)}
