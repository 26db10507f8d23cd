"""Shared BDD fixtures and step definitions for checkout."""

import json
from datetime import timedelta

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from storefront.customer.customer import Customer
from storefront.errors import StorefrontError
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder
from storefront.product.product import Product
from storefront.utils.time import utc_now


@pytest.fixture()
def catalogue():
    """Products created by Given steps, keyed by name."""
    return {}


@pytest.fixture()
def place_order(catalogue):
    """Place an order and capture either the draft or the business error."""

    def _place(name, quantity, **fields):
        command = PlaceOrder(
            name="Nguyen Van A",
            phone="0912345678",
            email="a.nguyen@example.com",
            province="Hà Nội",
            district="Ba Đình",
            address="12 Phó Đức Chính",
            items=json.dumps([{"product_id": str(catalogue[name].id), "quantity": quantity}]),
            **fields,
        )
        try:
            return {"draft": current_domain.process(command, asynchronous=False), "error": None}
        except StorefrontError as exc:
            return {"draft": None, "error": exc}

    return _place


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced at {price:d} with {stock:d} in stock'))
def _(catalogue, make_product, name, price, stock):
    catalogue[name] = make_product(name=name, price=float(price), inventory=stock)


@given(parsers.cfparse("a customer with {points:d} points"), target_fixture="customer")
def _(make_customer, points):
    return make_customer(point=points)


@given(parsers.cfparse('a percent promotion "{code}" of {value:d} capped at {cap:d}'))
def _(make_promotion, code, value, cap):
    make_promotion(code=code, value=float(value), max_value=float(cap))


@given(parsers.cfparse('an expired promotion "{code}" with no uses left'))
def _(make_promotion, code):
    make_promotion(
        code=code,
        expired_at=utc_now() - timedelta(days=1),
        max_used_times=0,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{name}" has {stock:d} left in stock'))
def _(catalogue, name, stock):
    product = current_domain.repository_for(Product).get(catalogue[name].id)
    assert product.inventory == stock


@then(parsers.cfparse("the customer has {points:d} points"))
def _(customer, points):
    assert current_domain.repository_for(Customer).get(customer.id).point == points


@then(parsers.cfparse("the order value is {value:d}"))
def _(placed, value):
    assert current_domain.repository_for(Order).get(placed).value == value
