from datetime import timedelta

import pytest
from protean.integrations.pytest import DomainFixture
from protean.utils.globals import current_domain


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()

        for _, broker in current_domain.brokers.items():
            broker._data_reset()

        current_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def settings():
    """Default checkout settings, isolated from the developer's environment."""
    from storefront.settings import Settings, configure, reset_settings

    installed = configure(Settings())
    yield installed
    reset_settings()


@pytest.fixture(autouse=True)
def mailer():
    from storefront.mail import reset_mailer, set_mailer
    from storefront.mail.fake_mailer import FakeMailer

    fake = FakeMailer()
    set_mailer(fake)
    yield fake
    reset_mailer()


@pytest.fixture(autouse=True)
def carrier():
    from storefront.shipping import reset_carrier, set_carrier
    from storefront.shipping.flat_rate import FlatRateShipping

    flat = FlatRateShipping()
    set_carrier(flat)
    yield flat
    reset_carrier()


@pytest.fixture()
def fake_carrier():
    from storefront.shipping import set_carrier
    from storefront.shipping.fake_carrier import FakeCarrier

    fake = FakeCarrier()
    set_carrier(fake)
    return fake


# ---------------------------------------------------------------------------
# Persisted record factories
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_product():
    from storefront.product.product import Product

    counter = {"n": 0}

    def _make(price=100_000.0, inventory=10, weight=500, **overrides):
        counter["n"] += 1
        n = counter["n"]
        defaults = {
            "name": f"Product {n}",
            "slug": f"product-{n}",
            "price": price,
            "inventory": inventory,
            "weight": weight,
        }
        defaults.update(overrides)
        product = Product.add(**defaults)
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture()
def make_customer():
    from storefront.customer.customer import Customer

    counter = {"n": 0}

    def _make(point=0, **overrides):
        counter["n"] += 1
        defaults = {"name": "Tran Thi B", "email": f"buyer{counter['n']}@example.com", "point": point}
        defaults.update(overrides)
        customer = Customer.register(**defaults)
        current_domain.repository_for(Customer).add(customer)
        return customer

    return _make


@pytest.fixture()
def make_promotion():
    from storefront.promotion.promotion import Promotion

    def _make(code="PDTEST00001", promotion_type="percent", target="product", value=10.0, **overrides):
        promotion = Promotion.create(
            name=overrides.pop("name", f"Promotion {code}"),
            code=code,
            promotion_type=promotion_type,
            target=target,
            value=value,
            **overrides,
        )
        current_domain.repository_for(Promotion).add(promotion)
        return promotion

    return _make


@pytest.fixture()
def tomorrow():
    from storefront.utils.time import utc_now

    return utc_now() + timedelta(days=1)


@pytest.fixture()
def yesterday():
    from storefront.utils.time import utc_now

    return utc_now() - timedelta(days=1)
