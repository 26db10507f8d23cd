"""Application tests for booking the parcel after an order commits."""

import json

import pytest
from protean import current_domain
from storefront.errors import ProductUnavailable
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder


def _place(items, **overrides):
    defaults = {
        "name": "Pham Thi D",
        "phone": "0901234567",
        "email": "d.pham@example.com",
        "province": "Đà Nẵng",
        "district": "Hải Châu",
        "address": "9 Bạch Đằng",
        "items": json.dumps([{"product_id": str(p.id), "quantity": q} for p, q in items]),
    }
    defaults.update(overrides)
    return current_domain.process(PlaceOrder(**defaults), asynchronous=False)


class TestShipmentBooking:
    def test_committed_order_is_booked_with_its_draft(self, make_product, fake_carrier):
        product = make_product(price=300_000.0, weight=700)

        draft = _place([(product, 2)])

        assert len(fake_carrier.shipments) == 1
        booked = fake_carrier.shipments[0]
        assert booked["order"]["id"] == draft["order"]["id"]
        assert booked["order"]["pick_money"] == draft["order"]["pick_money"]
        assert booked["products"][0]["weight"] == 0.7

    def test_carrier_outage_does_not_fail_placement(self, make_product, fake_carrier):
        fake_carrier.configure(should_succeed=False)
        product = make_product(inventory=2)

        draft = _place([(product, 1)])

        assert len(fake_carrier.shipments) == 1
        assert current_domain.repository_for(Order).get(draft["order"]["id"]).fee_ship == 30_000

    def test_rejected_order_is_never_booked(self, make_product, fake_carrier):
        product = make_product(inventory=1)

        with pytest.raises(ProductUnavailable):
            _place([(product, 3)])

        assert fake_carrier.shipments == []
