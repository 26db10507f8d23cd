"""Faker-based payload generators for the storefront load test.

Payloads match the field names of the API's Pydantic request schemas.
Product ids come from a seeded catalogue (see ``manage.py seed-catalogue``)
and are read from ``STOREFRONT_LOADTEST_PRODUCTS`` as a comma-separated list.
"""

import os
import random
import uuid

from faker import Faker

fake = Faker()

PROVINCES = {
    "Hà Nội": ["Ba Đình", "Hoàn Kiếm", "Đống Đa", "Cầu Giấy"],
    "Hồ Chí Minh": ["Quận 1", "Quận 3", "Bình Thạnh", "Phú Nhuận"],
    "Đà Nẵng": ["Hải Châu", "Sơn Trà", "Thanh Khê"],
}


def catalogue_product_ids() -> list[str]:
    raw = os.environ.get("STOREFRONT_LOADTEST_PRODUCTS", "")
    return [product_id.strip() for product_id in raw.split(",") if product_id.strip()]


def customer_id() -> str:
    return f"cust-lt-{uuid.uuid4().hex[:8]}"


def recipient_data() -> dict:
    province = random.choice(list(PROVINCES))
    return {
        "name": fake.name()[:255],
        "phone": f"09{random.randint(10_000_000, 99_999_999)}",
        "email": f"lt.{uuid.uuid4().hex[:8]}@example.com",
        "province": province,
        "district": random.choice(PROVINCES[province]),
        "ward": f"Phường {random.randint(1, 20)}",
        "street": fake.street_name()[:255],
        "address": fake.street_address()[:500],
        "note": random.choice([None, "Gọi trước khi giao", "Giao giờ hành chính"]),
    }


def order_items(product_ids: list[str], max_lines: int = 3) -> list[dict]:
    chosen = random.sample(product_ids, k=min(len(product_ids), random.randint(1, max_lines)))
    return [{"product_id": product_id, "quantity": random.randint(1, 2)} for product_id in chosen]


def order_data(product_ids: list[str], promotion_code: str | None = None) -> dict:
    payload = recipient_data()
    payload["items"] = order_items(product_ids)
    if promotion_code:
        payload["promotion_code"] = promotion_code
    return payload


def promotion_data() -> dict:
    if random.random() < 0.3:
        return {
            "name": f"Free shipping {fake.word()}"[:255],
            "promotion_type": "money",
            "target": "shipping",
            "value": 30_000,
            "max_used_times": 5,
        }
    return {
        "name": f"Sale {fake.word()}"[:255],
        "promotion_type": "percent",
        "target": "product",
        "value": random.choice([5, 10, 15, 20]),
        "max_value": random.choice([50_000, 100_000, 200_000]),
        "max_used_times": 5,
        "created_by": "loadtest",
    }


def shipment_status_data(order_id: str) -> dict:
    return {
        "partner_id": order_id,
        "status_id": random.choice([2, 3, 4, 5]),
        "fee": random.choice([18_000, 22_000, 30_000, 35_000]),
    }
