"""Abstract port for looking up catalogue products while placing an order.

The ordering context never reads the catalogue's tables; it asks this port
whether a product exists, what it is called and what it costs. Adapters:
- FakeProductDirectory for tests and local development
- CatalogueProductDirectory for the deployed shop
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ProductSnapshot:
    """The catalogue facts an order line needs."""

    product_id: str
    name: str
    price: float
    image_urls: list[str] = field(default_factory=list)


class ProductDirectory(ABC):
    @abstractmethod
    def find(self, product_id: str) -> ProductSnapshot | None:
        """Return the product, or None if the catalogue does not know it."""
