"""FastAPI endpoints for orders, promotions, carts, shipping and notifications.

The signed-in customer is identified by the ``X-Customer-Id`` header.
"""

import json

from fastapi import APIRouter, Header, Query
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    AddToCartRequest,
    CartItemView,
    CartView,
    CreatePromotionRequest,
    OrderLineView,
    OrderSummaryView,
    PlaceOrderRequest,
    PointsPreviewResponse,
    PromotionCreatedResponse,
    PromotionView,
    ShipmentDraftResponse,
    ShipmentStatusRequest,
    ShippingFeeResponse,
    StatusResponse,
)
from storefront.cart.cart import Cart
from storefront.cart.items import AddToCart, RemoveFromCart
from storefront.errors import NotAuthenticated
from storefront.notification.retry import RetryNotification
from storefront.order.order import DeliverOption, Order
from storefront.order.placement import PlaceOrder
from storefront.order.points import preview_points
from storefront.order.shipment import UpdateShipmentStatus
from storefront.order.shipment_draft import grams_to_kg
from storefront.promotion.engine import find_usable
from storefront.promotion.management import (
    ActivatePromotion,
    CreatePromotion,
    DeactivatePromotion,
    DeletePromotion,
    RestorePromotion,
)
from storefront.settings import get_settings
from storefront.shipping.fees import resolve_fee
from storefront.shipping.port import Destination
from storefront.utils.time import utc_now

order_router = APIRouter(prefix="/orders", tags=["orders"])
promotion_router = APIRouter(prefix="/promotions", tags=["promotions"])
cart_router = APIRouter(prefix="/cart", tags=["cart"])
shipping_router = APIRouter(prefix="/shipping", tags=["shipping"])
notification_router = APIRouter(prefix="/notifications", tags=["notifications"])


def _signed_in(customer_id: str | None) -> str:
    if not customer_id:
        raise NotAuthenticated("Send the X-Customer-Id header")
    return customer_id


# --- Order endpoints ---


@order_router.post("", status_code=201, response_model=ShipmentDraftResponse)
async def place_order(
    body: PlaceOrderRequest,
    customer_id: str | None = Header(None, alias="X-Customer-Id"),
) -> ShipmentDraftResponse:
    command = PlaceOrder(
        customer_id=customer_id,
        name=body.name,
        phone=body.phone,
        email=body.email,
        province=body.province,
        district=body.district,
        ward=body.ward,
        street=body.street,
        address=body.address,
        note=body.note,
        deliver_option=body.deliver_option,
        point_used=body.point_used,
        promotion_code=body.promotion_code,
        items=json.dumps([item.model_dump() for item in body.items]),
    )
    draft = current_domain.process(command, asynchronous=False)
    return ShipmentDraftResponse(**draft)


@order_router.post("/shipment-status", response_model=StatusResponse)
async def update_shipment_status(body: ShipmentStatusRequest) -> StatusResponse:
    command = UpdateShipmentStatus(
        partner_id=body.partner_id,
        status_id=body.status_id,
        fee=body.fee,
        reason_code=body.reason_code,
        reason=body.reason,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@order_router.get("/points", response_model=PointsPreviewResponse)
async def points_preview(total: float = Query(..., ge=0)) -> PointsPreviewResponse:
    return PointsPreviewResponse(**preview_points(total))


@order_router.get("/mine", response_model=list[OrderSummaryView])
async def my_orders(
    offset: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
    customer_id: str | None = Header(None, alias="X-Customer-Id"),
) -> list[OrderSummaryView]:
    orders = current_domain.repository_for(Order).find_for_customer(_signed_in(customer_id), offset, limit)
    return [
        OrderSummaryView(
            order_id=str(order.id),
            value=order.value,
            actual_value=order.actual_value,
            fee_ship=order.fee_ship,
            point_used=order.point_used,
            point_earned=order.point_earned,
            promotion_code=order.promotion_code,
            status_id=order.status_id,
            placed_at=order.placed_at,
            lines=[
                OrderLineView(
                    product_id=str(line.product_id),
                    product_name=line.product_name,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                )
                for line in order.lines
            ],
        )
        for order in orders
    ]


# --- Promotion endpoints ---


@promotion_router.post("", status_code=201, response_model=PromotionCreatedResponse)
async def create_promotion(body: CreatePromotionRequest) -> PromotionCreatedResponse:
    command = CreatePromotion(
        name=body.name,
        description=body.description,
        code=body.code,
        promotion_type=body.promotion_type,
        target=body.target,
        value=body.value,
        max_value=body.max_value,
        max_used_times=body.max_used_times,
        expired_at=body.expired_at,
        created_by=body.created_by,
    )
    result = current_domain.process(command, asynchronous=False)
    return PromotionCreatedResponse(**result)


@promotion_router.get("/{code}/check", response_model=PromotionView)
async def check_promotion(code: str) -> PromotionView:
    promotion = find_usable(code, utc_now())
    return PromotionView(
        code=promotion.code,
        name=promotion.name,
        description=promotion.description,
        promotion_type=promotion.promotion_type,
        target=promotion.target,
        value=promotion.value,
        max_value=promotion.max_value,
        expired_at=promotion.expired_at,
    )


@promotion_router.put("/{promotion_id}/activate", response_model=StatusResponse)
async def activate_promotion(promotion_id: str) -> StatusResponse:
    current_domain.process(ActivatePromotion(promotion_id=promotion_id), asynchronous=False)
    return StatusResponse()


@promotion_router.put("/{promotion_id}/deactivate", response_model=StatusResponse)
async def deactivate_promotion(promotion_id: str) -> StatusResponse:
    current_domain.process(DeactivatePromotion(promotion_id=promotion_id), asynchronous=False)
    return StatusResponse()


@promotion_router.delete("/{promotion_id}", response_model=StatusResponse)
async def delete_promotion(promotion_id: str) -> StatusResponse:
    current_domain.process(DeletePromotion(promotion_id=promotion_id), asynchronous=False)
    return StatusResponse()


@promotion_router.put("/{promotion_id}/restore", response_model=StatusResponse)
async def restore_promotion(promotion_id: str) -> StatusResponse:
    current_domain.process(RestorePromotion(promotion_id=promotion_id), asynchronous=False)
    return StatusResponse()


# --- Cart endpoints ---


@cart_router.get("", response_model=CartView)
async def get_cart(customer_id: str | None = Header(None, alias="X-Customer-Id")) -> CartView:
    customer_id = _signed_in(customer_id)
    cart = current_domain.repository_for(Cart).find_for_customer(customer_id)
    items = [] if cart is None else cart.items
    return CartView(
        customer_id=customer_id,
        items=[CartItemView(product_id=str(item.product_id), quantity=item.quantity) for item in items],
    )


@cart_router.post("/items", status_code=201, response_model=StatusResponse)
async def add_to_cart(
    body: AddToCartRequest,
    customer_id: str | None = Header(None, alias="X-Customer-Id"),
) -> StatusResponse:
    command = AddToCart(customer_id=_signed_in(customer_id), product_id=body.product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.delete("/items/{product_id}", response_model=StatusResponse)
async def remove_from_cart(
    product_id: str,
    customer_id: str | None = Header(None, alias="X-Customer-Id"),
) -> StatusResponse:
    command = RemoveFromCart(customer_id=_signed_in(customer_id), product_id=product_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# --- Shipping endpoints ---


@shipping_router.get("/fee", response_model=ShippingFeeResponse)
async def shipping_fee(
    province: str = Query(..., min_length=1),
    district: str = Query(..., min_length=1),
    weight: int = Query(..., ge=0, description="Parcel weight in grams"),
    deliver_option: str = Query(DeliverOption.NONE.value, pattern="^(none|xteam)$"),
    ward: str | None = None,
    street: str | None = None,
    address: str | None = None,
    value: float = Query(0, ge=0),
) -> ShippingFeeResponse:
    destination = Destination(province=province, district=district, ward=ward, street=street, address=address)
    fee = resolve_fee(destination, grams_to_kg(weight), deliver_option, value, False, get_settings())
    return ShippingFeeResponse(fee=fee)


# --- Notification endpoints ---


@notification_router.post("/{notification_id}/retry", response_model=StatusResponse)
async def retry_notification(notification_id: str) -> StatusResponse:
    current_domain.process(RetryNotification(notification_id=notification_id), asynchronous=False)
    return StatusResponse()
