"""Abstract interface for the delivery carrier.

Checkout programs against this port; adapters are swapped via configuration.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Destination:
    province: str
    district: str
    ward: str | None = None
    street: str | None = None
    address: str | None = None


class ShippingPort(ABC):
    """Abstract interface for shipping carriers."""

    @abstractmethod
    def quote(
        self,
        destination: Destination,
        weight_kg: float,
        deliver_option: str,
        value: float,
    ) -> dict:
        """Quote the delivery fee for a parcel.

        Returns:
            dict with keys: fee (None when the carrier has no price of its
            own and the configured flat fee applies), insurance_fee,
            deliverable (bool)
        """
        ...

    @abstractmethod
    def create_shipment(self, draft: dict) -> str:
        """Book a parcel from a shipment draft.

        Returns:
            The partner id the carrier quotes back in status reports.
        """
        ...
