"""Pydantic request/response schemas for the Storefront API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Order Schemas ---


class OrderItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(..., ge=1)


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Nguyen Van A",
                    "phone": "0912345678",
                    "email": "a.nguyen@example.com",
                    "province": "Hà Nội",
                    "district": "Ba Đình",
                    "ward": "Phúc Xá",
                    "street": "Phó Đức Chính",
                    "address": "12 Phó Đức Chính",
                    "note": "Call before delivery",
                    "deliver_option": "none",
                    "point_used": 30,
                    "promotion_code": "PDSUMMER2026",
                    "items": [{"product_id": "prod-001", "quantity": 2}],
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    phone: str = Field(..., max_length=20)
    email: str = Field(..., max_length=255)
    province: str = Field(..., max_length=100)
    district: str = Field(..., max_length=100)
    ward: str | None = Field(None, max_length=100)
    street: str | None = Field(None, max_length=255)
    address: str = Field(..., max_length=500)
    note: str | None = None
    deliver_option: str = Field("none", pattern="^(none|xteam)$")
    point_used: int | None = Field(None, ge=0)
    promotion_code: str | None = Field(None, max_length=50)
    items: list[OrderItemRequest] = Field(..., min_length=1)


class ShipmentStatusRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "partner_id": "ord-001",
                    "status_id": 5,
                    "fee": 22000,
                    "reason_code": "",
                    "reason": "",
                }
            ]
        }
    }

    partner_id: str
    status_id: int | None = None
    fee: float | None = Field(None, ge=0)
    reason_code: str | None = Field(None, max_length=50)
    reason: str | None = None


class ShipmentDraftResponse(BaseModel):
    products: list[dict]
    order: dict


class PointsPreviewResponse(BaseModel):
    total: float
    points: int


class OrderLineView(BaseModel):
    product_id: str
    product_name: str
    quantity: int
    unit_price: float


class OrderSummaryView(BaseModel):
    order_id: str
    value: float
    actual_value: float
    fee_ship: float
    point_used: int | None = None
    point_earned: int | None = None
    promotion_code: str | None = None
    status_id: int | None = None
    placed_at: datetime | None = None
    lines: list[OrderLineView] = []


# --- Shipping Schemas ---


class ShippingFeeResponse(BaseModel):
    fee: float


# --- Promotion Schemas ---


class CreatePromotionRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Summer sale",
                    "promotion_type": "percent",
                    "target": "product",
                    "value": 10,
                    "max_value": 50000,
                    "max_used_times": 100,
                    "expired_at": "2026-09-01T00:00:00Z",
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    description: str | None = None
    code: str | None = Field(None, max_length=50)
    promotion_type: str = Field(..., pattern="^(percent|money)$")
    target: str = Field(..., pattern="^(product|shipping)$")
    value: float = Field(..., ge=0)
    max_value: float | None = Field(None, ge=0)
    max_used_times: int | None = Field(None, ge=0)
    expired_at: datetime | None = None
    created_by: str | None = Field(None, max_length=255)


class PromotionCreatedResponse(BaseModel):
    promotion_id: str
    code: str


class PromotionView(BaseModel):
    code: str
    name: str
    description: str | None = None
    promotion_type: str
    target: str
    value: float
    max_value: float | None = None
    expired_at: datetime | None = None


# --- Cart Schemas ---


class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(..., ge=1)


class CartItemView(BaseModel):
    product_id: str
    quantity: int


class CartView(BaseModel):
    customer_id: str
    items: list[CartItemView] = []


# --- Common ---


class StatusResponse(BaseModel):
    status: str = "ok"
