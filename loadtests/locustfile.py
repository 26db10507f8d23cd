"""Storefront load testing: Locust entry point.

Usage:
    # Seed products first and export their ids:
    python src/manage.py seed-catalogue --count 20
    export STOREFRONT_LOADTEST_PRODUCTS=<ids printed above>

    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Headless (CI mode):
    locust -f loadtests/locustfile.py CheckoutUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import time

from locust import events

from loadtests.data_generators import catalogue_product_ids
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.checkout import BrowsingUser, CheckoutUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log the API error body for every failed request."""
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 500:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    product_count = len(catalogue_product_ids())
    if product_count:
        print(f"[LOADTEST] Catalogue products: {product_count}")
    else:
        print("[LOADTEST] STOREFRONT_LOADTEST_PRODUCTS is empty; checkout journeys will stop early")
    print()


@events.test_stop.add_listener
def on_test_stop(**_kwargs):
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}\n")
