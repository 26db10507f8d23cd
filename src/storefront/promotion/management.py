"""Promotion administration commands.

Codes are issued, switched on or off, soft-deleted and restored. A deleted
promotion keeps its code reserved, so a new promotion cannot reuse it.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import DuplicatePromotionCode, PromotionNotFound
from storefront.promotion.promotion import Promotion, PromotionTarget, PromotionType


@storefront.command(part_of="Promotion")
class CreatePromotion:
    """Issue a promotion. A code is generated from the target when none is given."""

    name = String(required=True, max_length=255)
    description = Text()
    code = String(max_length=50)
    promotion_type = String(choices=PromotionType, required=True)
    target = String(choices=PromotionTarget, required=True)
    value = Float(required=True, min_value=0.0)
    max_value = Float(min_value=0.0)
    max_used_times = Integer(min_value=0)
    expired_at = DateTime()
    created_by = String(max_length=255)


@storefront.command(part_of="Promotion")
class ActivatePromotion:
    promotion_id = Identifier(required=True)


@storefront.command(part_of="Promotion")
class DeactivatePromotion:
    promotion_id = Identifier(required=True)


@storefront.command(part_of="Promotion")
class DeletePromotion:
    promotion_id = Identifier(required=True)


@storefront.command(part_of="Promotion")
class RestorePromotion:
    promotion_id = Identifier(required=True)


def _load(repo, promotion_id) -> Promotion:
    try:
        return repo.get(promotion_id)
    except ObjectNotFoundError:
        raise PromotionNotFound(f"Promotion {promotion_id} does not exist")


@storefront.command_handler(part_of=Promotion)
class ManagePromotionHandler:
    @handle(CreatePromotion)
    def create_promotion(self, command):
        repo = current_domain.repository_for(Promotion)
        if command.code and repo.find_by_code(command.code) is not None:
            raise DuplicatePromotionCode(f"Code {command.code} is already in use")

        promotion = Promotion.create(
            name=command.name,
            description=command.description,
            code=command.code,
            promotion_type=command.promotion_type,
            target=command.target,
            value=command.value,
            max_value=command.max_value,
            max_used_times=command.max_used_times,
            expired_at=command.expired_at,
            created_by=command.created_by,
        )
        repo.add(promotion)
        return {"promotion_id": str(promotion.id), "code": promotion.code}

    @handle(ActivatePromotion)
    def activate_promotion(self, command):
        repo = current_domain.repository_for(Promotion)
        promotion = _load(repo, command.promotion_id)
        promotion.activate()
        repo.add(promotion)

    @handle(DeactivatePromotion)
    def deactivate_promotion(self, command):
        repo = current_domain.repository_for(Promotion)
        promotion = _load(repo, command.promotion_id)
        promotion.deactivate()
        repo.add(promotion)

    @handle(DeletePromotion)
    def delete_promotion(self, command):
        repo = current_domain.repository_for(Promotion)
        promotion = _load(repo, command.promotion_id)
        promotion.soft_delete()
        repo.add(promotion)

    @handle(RestorePromotion)
    def restore_promotion(self, command):
        repo = current_domain.repository_for(Promotion)
        promotion = _load(repo, command.promotion_id)
        promotion.restore()
        repo.add(promotion)
