"""Integration tests for the shipping fee quote endpoint."""

QUOTE = {"province": "Hà Nội", "district": "Ba Đình", "ward": "Phúc Xá", "address": "12 Phó Đức Chính"}


class TestShippingFeeEndpoint:
    def test_flat_fee_by_default(self, client):
        response = client.get("/shipping/fee", params={**QUOTE, "weight": 800})
        assert response.status_code == 200
        assert response.json() == {"fee": 30_000}

    def test_order_value_above_threshold_ships_free(self, client):
        response = client.get("/shipping/fee", params={**QUOTE, "weight": 800, "value": 2_000_001})
        assert response.json() == {"fee": 0}

    def test_carrier_receives_weight_in_kilograms(self, client, fake_carrier):
        fake_carrier.configure(fee=18_000)

        response = client.get("/shipping/fee", params={**QUOTE, "weight": 1200, "deliver_option": "xteam"})

        assert response.json() == {"fee": 18_000}
        quote = fake_carrier.quotes[0]
        assert quote["weight_kg"] == 1.2
        assert quote["deliver_option"] == "xteam"
        assert quote["destination"].district == "Ba Đình"

    def test_destination_is_required(self, client):
        assert client.get("/shipping/fee", params={"weight": 800}).status_code == 422

    def test_unknown_deliver_option_is_rejected(self, client):
        response = client.get("/shipping/fee", params={**QUOTE, "weight": 800, "deliver_option": "drone"})
        assert response.status_code == 422
