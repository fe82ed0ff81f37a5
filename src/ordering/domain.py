"""Ordering bounded context — orders, delivery tracking and checkout pricing.

Turns a submitted checkout into an immutable Order with a tracking code, follows
its delivery status, and answers the pricing questions the storefront asks
before submitting (coupon validation, shipping options).
"""

import os

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging(log_dir=os.getenv("LOG_DIR"))

ordering = Domain(name="ordering")

logger = get_logger(__name__)
