"""Catalogue bounded context — Products, Collections, and Product Reviews.

Backs the storefront listings (shop, search, product pages, collections) and
the dashboard endpoints used to manage them.
"""

import os

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging(log_dir=os.getenv("LOG_DIR"))

logger = get_logger(__name__)

# Domain Composition Root
catalogue = Domain(name="catalogue")
