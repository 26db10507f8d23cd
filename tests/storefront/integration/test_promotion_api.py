"""Integration tests for the promotion endpoints."""

from datetime import timedelta

from storefront.utils.time import utc_now


def _create(client, **overrides):
    body = {"name": "Summer sale", "promotion_type": "percent", "target": "product", "value": 10}
    body.update(overrides)
    return client.post("/promotions", json=body)


class TestCreatePromotionEndpoint:
    def test_create(self, client):
        response = _create(client, code="PDSUMMER001")
        assert response.status_code == 201
        assert response.json()["code"] == "PDSUMMER001"

    def test_generated_shipping_code(self, client):
        response = _create(client, target="shipping", promotion_type="money", value=30_000)
        assert response.json()["code"].startswith("SH")

    def test_duplicate_code(self, client):
        _create(client, code="PDSUMMER001")
        response = _create(client, code="PDSUMMER001")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "promotion_code_taken"

    def test_percentage_above_100_is_rejected(self, client):
        response = _create(client, value=150)
        assert response.status_code == 400

    def test_unknown_type_is_rejected(self, client):
        assert _create(client, promotion_type="bogus").status_code == 422


class TestCheckPromotionEndpoint:
    def test_usable_code(self, client):
        _create(client, code="PDSUMMER001", max_value=50_000)

        response = client.get("/promotions/PDSUMMER001/check")

        assert response.status_code == 200
        assert response.json()["max_value"] == 50_000

    def test_unknown_code(self, client):
        response = client.get("/promotions/NOPE/check")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "promotion_not_found"

    def test_expired_code(self, client):
        _create(client, code="PDOLD000001", expired_at=(utc_now() - timedelta(days=1)).isoformat())

        response = client.get("/promotions/PDOLD000001/check")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "promotion_expired"


class TestPromotionLifecycleEndpoints:
    def test_deactivate_and_activate(self, client):
        promotion_id = _create(client, code="PDSUMMER001").json()["promotion_id"]

        assert client.put(f"/promotions/{promotion_id}/deactivate").status_code == 200
        assert client.get("/promotions/PDSUMMER001/check").status_code == 404

        assert client.put(f"/promotions/{promotion_id}/activate").status_code == 200
        assert client.get("/promotions/PDSUMMER001/check").status_code == 200

    def test_delete_and_restore(self, client):
        promotion_id = _create(client, code="PDSUMMER001").json()["promotion_id"]

        assert client.delete(f"/promotions/{promotion_id}").status_code == 200
        assert client.get("/promotions/PDSUMMER001/check").status_code == 404

        assert client.put(f"/promotions/{promotion_id}/restore").status_code == 200
        assert client.get("/promotions/PDSUMMER001/check").status_code == 200

    def test_restore_live_promotion_is_rejected(self, client):
        promotion_id = _create(client, code="PDSUMMER001").json()["promotion_id"]
        assert client.put(f"/promotions/{promotion_id}/restore").status_code == 400

    def test_unknown_promotion(self, client):
        assert client.put("/promotions/no-such-id/deactivate").status_code == 404
