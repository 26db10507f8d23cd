"""Application tests for cart commands."""

from protean import current_domain
from storefront.cart.cart import Cart
from storefront.cart.items import AddToCart, RemoveFromCart


def _cart(customer_id="cust-001"):
    return current_domain.repository_for(Cart).find_for_customer(customer_id)


class TestAddToCart:
    def test_first_item_creates_cart(self):
        current_domain.process(AddToCart(customer_id="cust-001", product_id="prod-001", quantity=2), asynchronous=False)
        cart = _cart()
        assert cart is not None
        assert cart.items[0].quantity == 2

    def test_items_accumulate_in_one_cart(self):
        current_domain.process(AddToCart(customer_id="cust-001", product_id="prod-001", quantity=1), asynchronous=False)
        current_domain.process(AddToCart(customer_id="cust-001", product_id="prod-002", quantity=3), asynchronous=False)
        current_domain.process(AddToCart(customer_id="cust-001", product_id="prod-001", quantity=1), asynchronous=False)

        cart = _cart()
        quantities = {str(i.product_id): i.quantity for i in cart.items}
        assert quantities == {"prod-001": 2, "prod-002": 3}
        assert len(current_domain.repository_for(Cart)._dao.query.all().items) == 1


class TestRemoveFromCart:
    def test_remove_item(self):
        current_domain.process(AddToCart(customer_id="cust-001", product_id="prod-001", quantity=1), asynchronous=False)
        current_domain.process(RemoveFromCart(customer_id="cust-001", product_id="prod-001"), asynchronous=False)
        assert len(_cart().items) == 0

    def test_remove_keeps_other_items(self):
        current_domain.process(AddToCart(customer_id="cust-001", product_id="prod-001", quantity=1), asynchronous=False)
        current_domain.process(AddToCart(customer_id="cust-001", product_id="prod-002", quantity=1), asynchronous=False)
        current_domain.process(RemoveFromCart(customer_id="cust-001", product_id="prod-001"), asynchronous=False)
        assert [str(i.product_id) for i in _cart().items] == ["prod-002"]
