"""Content bounded context — the MAEVA blog.

Editorial articles about traditional Algerian dress, styling advice and shop
news. Posts are addressed by a unique slug and count their views.
"""

import os

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging(log_dir=os.getenv("LOG_DIR"))

logger = get_logger(__name__)

content = Domain(name="content")
