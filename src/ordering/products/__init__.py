"""Product directory factory.

Provides get_product_directory() / set_product_directory() to swap
implementations:
- FakeProductDirectory for development and testing (default)
- CatalogueProductDirectory when the app serves both contexts
"""

from ordering.products.fake_adapter import FakeProductDirectory
from ordering.products.port import ProductDirectory

_current_directory: ProductDirectory | None = None


def get_product_directory() -> ProductDirectory:
    """Return the current product directory. Defaults to an empty fake."""
    global _current_directory
    if _current_directory is None:
        _current_directory = FakeProductDirectory()
    return _current_directory


def set_product_directory(directory: ProductDirectory) -> None:
    """Override the active product directory (the app and tests do this)."""
    global _current_directory
    _current_directory = directory


def reset_product_directory() -> None:
    """Reset to the default directory."""
    global _current_directory
    _current_directory = None
