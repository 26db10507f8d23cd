"""BDD tests for carrier shipment status updates."""

from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when
from storefront.order.order import Order
from storefront.order.shipment import UpdateShipmentStatus

scenarios("features/shipment_status.feature")


@given(parsers.cfparse('an order for {quantity:d} of "{name}" was placed'), target_fixture="placed")
def _(place_order, quantity, name):
    return place_order(name, quantity)["draft"]["order"]["id"]


@when(parsers.cfparse("the carrier reports status {status_id:d} with fee {fee:d}"))
def _(placed, status_id, fee):
    current_domain.process(
        UpdateShipmentStatus(partner_id=placed, status_id=status_id, fee=float(fee)),
        asynchronous=False,
    )


@then(parsers.cfparse("the order status is {status_id:d}"))
def _(placed, status_id):
    assert current_domain.repository_for(Order).get(placed).status_id == status_id
