"""Repository for the Customer aggregate."""

from protean.exceptions import InvalidOperationError

from storefront.customer.customer import Customer
from storefront.domain import storefront


@storefront.repository(part_of=Customer)
class CustomerRepository:
    def remove(self, customer):
        raise InvalidOperationError("Customers are never hard-deleted")
