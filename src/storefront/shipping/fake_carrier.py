"""Carrier double with configurable quotes.

Records every quote request and booking so tests can assert what checkout
asked for.
"""

from storefront.shipping.port import Destination, ShippingPort


class FakeCarrier(ShippingPort):
    def __init__(self):
        self.quotes: list[dict] = []
        self.shipments: list[dict] = []
        self.fee = 30_000.0
        self.insurance_fee = 0.0
        self.deliverable = True
        self.should_succeed = True
        self.failure_reason = "Carrier unavailable"

    def configure(
        self,
        fee: float = 30_000.0,
        deliverable: bool = True,
        should_succeed: bool = True,
        failure_reason: str = "Carrier unavailable",
    ):
        """Configure the fake carrier behavior for testing."""
        self.fee = fee
        self.deliverable = deliverable
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def quote(self, destination: Destination, weight_kg: float, deliver_option: str, value: float) -> dict:
        self.quotes.append(
            {
                "destination": destination,
                "weight_kg": weight_kg,
                "deliver_option": deliver_option,
                "value": value,
            }
        )
        if not self.should_succeed:
            raise ConnectionError(self.failure_reason)

        return {"fee": self.fee, "insurance_fee": self.insurance_fee, "deliverable": self.deliverable}

    def create_shipment(self, draft: dict) -> str:
        self.shipments.append(draft)
        if not self.should_succeed:
            raise ConnectionError(self.failure_reason)

        return draft["order"]["id"]

    def reset(self):
        self.quotes.clear()
        self.shipments.clear()
        self.configure()
