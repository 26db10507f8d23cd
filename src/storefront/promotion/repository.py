"""Repository for the Promotion aggregate."""

from protean.exceptions import InvalidOperationError

from storefront.domain import storefront
from storefront.promotion.promotion import Promotion


@storefront.repository(part_of=Promotion)
class PromotionRepository:
    def find_by_code(self, code: str) -> Promotion | None:
        """Look up a promotion by code, including deleted and inactive ones."""
        results = self._dao.query.filter(code=code).all().items
        return results[0] if results else None

    def remove(self, promotion):
        raise InvalidOperationError("Promotions are soft-deleted; use Promotion.soft_delete()")
