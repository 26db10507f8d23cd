"""Checkout load test scenarios.

A stateful journey from promotion issue through cart, checkout and the
carrier's status callback, plus a lighter read-mostly browsing user.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    catalogue_product_ids,
    customer_id,
    order_data,
    promotion_data,
    shipment_status_data,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CheckoutState


class CheckoutJourney(SequentialTaskSet):
    """Issue Promotion -> Fill Cart -> Preview Points -> Place Order -> Shipment Callback.

    Exercises every write path that touches the order's Unit of Work:
    stock reservation, promotion usage and the post-commit notifications.
    """

    def on_start(self):
        self.state = CheckoutState(customer_id=customer_id())
        self.product_ids = catalogue_product_ids()
        if not self.product_ids:
            self.interrupt(reschedule=False)

    @task
    def issue_promotion(self):
        with self.client.post(
            "/promotions",
            json=promotion_data(),
            catch_response=True,
            name="POST /promotions",
        ) as resp:
            if resp.status_code == 201:
                body = resp.json()
                self.state.promotion_id = body["promotion_id"]
                self.state.promotion_code = body["code"]
            else:
                resp.failure(f"Create promotion failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def fill_cart(self):
        for product_id in random.sample(self.product_ids, k=min(2, len(self.product_ids))):
            with self.client.post(
                "/cart/items",
                json={"product_id": product_id, "quantity": 1},
                headers={"X-Customer-Id": self.state.customer_id},
                catch_response=True,
                name="POST /cart/items",
            ) as resp:
                if resp.status_code == 201:
                    self.state.cart_product_ids.append(product_id)
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def preview_points(self):
        self.client.get(
            "/orders/points",
            params={"total": random.choice([500_000, 1_200_000, 3_000_000])},
            name="GET /orders/points",
        )

    @task
    def place_order(self):
        with self.client.post(
            "/orders",
            json=order_data(self.state.cart_product_ids or self.product_ids, self.state.promotion_code),
            headers={"X-Customer-Id": self.state.customer_id},
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["order"]["id"]
            elif resp.status_code in (400, 404):
                # Stock runs out and promotions hit their usage cap under load
                resp.success()
                self.interrupt()
            else:
                resp.failure(f"Place order failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def view_my_orders(self):
        self.client.get(
            "/orders/mine",
            headers={"X-Customer-Id": self.state.customer_id},
            name="GET /orders/mine",
        )

    @task
    def report_shipment_status(self):
        with self.client.post(
            "/orders/shipment-status",
            json=shipment_status_data(self.state.order_id),
            catch_response=True,
            name="POST /orders/shipment-status",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Shipment status failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CheckoutUser(HttpUser):
    wait_time = between(1, 3)
    tasks = [CheckoutJourney]


class BrowsingUser(HttpUser):
    """Reads only: cart views, code checks and points previews."""

    wait_time = between(0.5, 2)

    def on_start(self):
        self.customer_id = customer_id()

    @task(3)
    def view_cart(self):
        self.client.get("/cart", headers={"X-Customer-Id": self.customer_id}, name="GET /cart")

    @task(2)
    def preview_points(self):
        self.client.get(
            "/orders/points",
            params={"total": random.randint(100_000, 5_000_000)},
            name="GET /orders/points",
        )

    @task(1)
    def check_unknown_code(self):
        with self.client.get(
            "/promotions/PDNOTREAL00/check",
            catch_response=True,
            name="GET /promotions/{code}/check",
        ) as resp:
            if resp.status_code == 404:
                resp.success()
