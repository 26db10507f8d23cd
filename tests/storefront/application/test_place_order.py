"""Application tests for the PlaceOrder command."""

import json
from datetime import timedelta

import pytest
from protean import current_domain
from storefront.customer.customer import Customer
from storefront.errors import (
    CustomerNotFound,
    InsufficientPoints,
    PointsBelowMinimum,
    ProductUnavailable,
    PromotionExhausted,
    PromotionExpired,
    PromotionNotFound,
)
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder
from storefront.product.product import Product
from storefront.promotion.promotion import Promotion
from storefront.utils.time import utc_now


def _place(items, **overrides):
    defaults = {
        "name": "Nguyen Van A",
        "phone": "0912345678",
        "email": "a.nguyen@example.com",
        "province": "Hà Nội",
        "district": "Ba Đình",
        "ward": "Phúc Xá",
        "address": "12 Phó Đức Chính",
        "items": json.dumps([{"product_id": str(p.id), "quantity": q} for p, q in items]),
    }
    defaults.update(overrides)
    return current_domain.process(PlaceOrder(**defaults), asynchronous=False)


def _orders():
    return current_domain.repository_for(Order)._dao.query.all().items


def _reload(cls, record):
    return current_domain.repository_for(cls).get(record.id)


class TestShippingFee:
    def test_flat_fee_below_threshold(self, make_product):
        product = make_product(price=500_000.0)
        draft = _place([(product, 2)])

        assert draft["order"]["value"] == 1_000_000
        assert draft["order"]["pick_money"] == 1_030_000
        order = _orders()[0]
        assert order.fee_ship == 30_000
        assert order.actual_value == 1_000_000

    def test_exactly_threshold_still_pays_fee(self, make_product):
        product = make_product(price=1_000_000.0)
        _place([(product, 2)])
        assert _orders()[0].fee_ship == 30_000

    def test_above_threshold_ships_free(self, make_product):
        product = make_product(price=1_000_001.0)
        draft = _place([(product, 2)])
        assert _orders()[0].fee_ship == 0
        assert draft["order"]["pick_money"] == 2_000_002

    def test_carrier_quote_used_when_available(self, make_product, fake_carrier):
        fake_carrier.configure(fee=18_000)
        product = make_product(price=100_000.0, weight=1_500)
        _place([(product, 2)], deliver_option="xteam")

        assert _orders()[0].fee_ship == 18_000
        assert fake_carrier.quotes[0]["weight_kg"] == 3.0
        assert fake_carrier.quotes[0]["deliver_option"] == "xteam"

    def test_carrier_outage_charges_flat_fee(self, make_product, fake_carrier):
        fake_carrier.configure(should_succeed=False)
        product = make_product(price=100_000.0)
        _place([(product, 1)])
        assert _orders()[0].fee_ship == 30_000


class TestLinesAndStock:
    def test_order_persists_lines_with_unit_price_snapshot(self, make_product, tomorrow):
        product = make_product(price=300_000.0, sale_price=250_000.0, sale_end_at=tomorrow)
        draft = _place([(product, 2)])

        order = current_domain.repository_for(Order).get(draft["order"]["id"])
        assert len(order.lines) == 1
        assert order.lines[0].unit_price == 250_000
        assert order.lines[0].product_name == product.name
        assert order.value == 500_000

    def test_expired_sale_charges_regular_price(self, make_product, yesterday):
        product = make_product(price=300_000.0, sale_price=250_000.0, sale_end_at=yesterday)
        _place([(product, 1)])
        assert _orders()[0].value == 300_000

    def test_inventory_decremented(self, make_product):
        product = make_product(inventory=5)
        _place([(product, 3)])
        assert _reload(Product, product).inventory == 2

    def test_one_line_per_requested_item(self, make_product):
        product = make_product(inventory=5)
        _place([(product, 1), (product, 2)])
        order = _orders()[0]
        assert [line.quantity for line in order.lines] == [1, 2]
        assert _reload(Product, product).inventory == 2

    def test_repeated_product_quantities_are_summed_for_stock(self, make_product):
        product = make_product(inventory=3)
        with pytest.raises(ProductUnavailable):
            _place([(product, 2), (product, 2)])
        assert _reload(Product, product).inventory == 3

    def test_insufficient_stock_rejects_whole_order(self, make_product):
        plenty = make_product(inventory=10)
        scarce = make_product(inventory=1)

        with pytest.raises(ProductUnavailable):
            _place([(plenty, 1), (scarce, 2)])

        assert _reload(Product, plenty).inventory == 10
        assert _orders() == []

    def test_inactive_product_is_unavailable(self, make_product):
        product = make_product(is_active=False)
        with pytest.raises(ProductUnavailable):
            _place([(product, 1)])

    def test_unknown_product_is_unavailable(self):
        with pytest.raises(ProductUnavailable):
            current_domain.process(
                PlaceOrder(
                    name="A",
                    phone="0900000000",
                    email="a@example.com",
                    province="Hà Nội",
                    district="Ba Đình",
                    address="1 Phố",
                    items=json.dumps([{"product_id": "missing", "quantity": 1}]),
                ),
                asynchronous=False,
            )


class TestLoyaltyPoints:
    def test_points_reduce_actual_value(self, make_product, make_customer):
        customer = make_customer(point=50)
        product = make_product(price=250_000.0)

        draft = _place([(product, 2)], customer_id=str(customer.id), point_used=30)

        order = _orders()[0]
        assert order.actual_value == 470_000
        assert order.point_used == 30
        assert order.point_earned is None
        assert draft["order"]["pick_money"] == 470_000 + 30_000
        assert _reload(Customer, customer).point == 20

    def test_points_earned_on_pre_discount_total(self, make_product, make_customer):
        customer = make_customer(point=0)
        product = make_product(price=775_000.0)

        _place([(product, 2)], customer_id=str(customer.id))

        assert _orders()[0].point_earned == 16
        assert _reload(Customer, customer).point == 16

    def test_spend_and_earn_in_same_order(self, make_product, make_customer):
        customer = make_customer(point=100)
        product = make_product(price=1_000_000.0)

        _place([(product, 1)], customer_id=str(customer.id), point_used=40)

        assert _reload(Customer, customer).point == 100 - 40 + 10

    def test_insufficient_points_abort_everything(self, make_product, make_customer):
        customer = make_customer(point=25)
        product = make_product(inventory=4)

        with pytest.raises(InsufficientPoints):
            _place([(product, 1)], customer_id=str(customer.id), point_used=30)

        assert _reload(Customer, customer).point == 25
        assert _reload(Product, product).inventory == 4
        assert _orders() == []

    def test_points_below_minimum_rejected(self, make_product, make_customer):
        customer = make_customer(point=100)
        product = make_product()

        with pytest.raises(PointsBelowMinimum):
            _place([(product, 1)], customer_id=str(customer.id), point_used=19)

        assert _reload(Customer, customer).point == 100

    def test_anonymous_orders_ignore_points(self, make_product):
        product = make_product(price=1_500_000.0)
        _place([(product, 1)], point_used=30)

        order = _orders()[0]
        assert order.point_used is None
        assert order.point_earned is None
        assert order.actual_value == 1_500_000

    def test_unknown_customer_rejected(self, make_product):
        product = make_product()
        with pytest.raises(CustomerNotFound):
            _place([(product, 1)], customer_id="no-such-customer")


class TestPromotions:
    def test_capped_percentage(self, make_product, make_promotion):
        promotion = make_promotion(code="PDCAP000001", value=10.0, max_value=50_000.0)
        product = make_product(price=500_000.0)

        _place([(product, 2)], promotion_code="PDCAP000001")

        order = _orders()[0]
        assert order.actual_value == 950_000
        assert order.promotion_code == "PDCAP000001"
        assert order.promotion_id == str(promotion.id)
        assert _reload(Promotion, promotion).used_times == 1

    def test_money_promotion(self, make_product, make_promotion):
        make_promotion(code="PDMONEY0001", promotion_type="money", value=70_000.0)
        product = make_product(price=200_000.0)

        _place([(product, 1)], promotion_code="PDMONEY0001")

        assert _orders()[0].actual_value == 130_000

    def test_shipping_promotion_waives_fee(self, make_product, make_promotion):
        make_promotion(code="SHFREE00001", target="shipping", promotion_type="money", value=30_000.0)
        product = make_product(price=200_000.0)

        draft = _place([(product, 1)], promotion_code="SHFREE00001")

        order = _orders()[0]
        assert order.fee_ship == 0
        assert order.actual_value == 200_000
        assert draft["order"]["pick_money"] == 200_000

    def test_unknown_code(self, make_product):
        product = make_product(inventory=2)
        with pytest.raises(PromotionNotFound):
            _place([(product, 1)], promotion_code="NOPE")
        assert _reload(Product, product).inventory == 2

    def test_expired_code(self, make_product, make_promotion, yesterday):
        make_promotion(code="PDOLD000001", expired_at=yesterday)
        with pytest.raises(PromotionExpired):
            _place([(make_product(), 1)], promotion_code="PDOLD000001")

    def test_exhausted_code_rolls_back_points_and_stock(self, make_product, make_customer, make_promotion):
        promotion = make_promotion(code="PDUSED00001", max_used_times=0)
        customer = make_customer(point=50)
        product = make_product(inventory=3)

        with pytest.raises(PromotionExhausted):
            _place([(product, 1)], customer_id=str(customer.id), point_used=30, promotion_code="PDUSED00001")

        assert _reload(Customer, customer).point == 50
        assert _reload(Product, product).inventory == 3
        assert _reload(Promotion, promotion).used_times == 0
        assert _orders() == []

    def test_last_use_of_a_code(self, make_product, make_promotion):
        promotion = make_promotion(code="PDONCE00001", max_used_times=1)

        _place([(make_product(), 1)], promotion_code="PDONCE00001")
        with pytest.raises(PromotionExhausted):
            _place([(make_product(), 1)], promotion_code="PDONCE00001")

        assert _reload(Promotion, promotion).used_times == 1
        assert len(_orders()) == 1

    def test_actual_value_never_negative(self, make_product, make_customer, make_promotion):
        make_promotion(code="PDBIG000001", promotion_type="money", value=80_000.0)
        customer = make_customer(point=50)
        product = make_product(price=100_000.0)

        draft = _place([(product, 1)], customer_id=str(customer.id), point_used=50, promotion_code="PDBIG000001")

        assert _orders()[0].actual_value == 0
        assert draft["order"]["pick_money"] == 30_000


class TestPayloadValidation:
    def test_empty_items_rejected(self):
        from protean.exceptions import ValidationError

        with pytest.raises(ValidationError):
            current_domain.process(
                PlaceOrder(
                    name="A",
                    phone="0900000000",
                    email="a@example.com",
                    province="Hà Nội",
                    district="Ba Đình",
                    address="1 Phố",
                    items=json.dumps([]),
                ),
                asynchronous=False,
            )

    def test_zero_quantity_rejected(self, make_product):
        from protean.exceptions import ValidationError

        product = make_product(inventory=5)
        with pytest.raises(ValidationError):
            _place([(product, 0)])
        assert _reload(Product, product).inventory == 5


class TestSideEffectIsolation:
    def test_mail_outage_does_not_fail_placement(self, make_product, mailer):
        mailer.configure(should_succeed=False)
        product = make_product(inventory=2)

        draft = _place([(product, 1)])

        assert draft["order"]["id"]
        assert _reload(Product, product).inventory == 1


class TestItemPayloadShape:
    @pytest.mark.parametrize("raw", ["[1]", '["prod-001"]', "[[1, 2]]", '{"product_id": "prod-001"}', "not json"])
    def test_malformed_items_raise_validation_error(self, raw):
        from protean.exceptions import ValidationError

        from storefront.order.placement import parse_items

        with pytest.raises(ValidationError):
            parse_items(raw)

    def test_non_object_item_rejected_through_command(self, make_product):
        from protean.exceptions import ValidationError

        product = make_product(inventory=5)
        with pytest.raises(ValidationError):
            current_domain.process(
                PlaceOrder(
                    name="A",
                    phone="0900000000",
                    email="a@example.com",
                    province="Hà Nội",
                    district="Ba Đình",
                    address="1 Phố",
                    items="[1]",
                ),
                asynchronous=False,
            )
        assert _reload(Product, product).inventory == 5
