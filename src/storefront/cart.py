"""Client-side shopping cart.

``CartStore`` owns the shopper's cart lines and mirrors them to local storage
under a fixed key. A line is identified by ``(product_id, color, size)``:
the same garment in two sizes is two lines.

Totals are derived from the lines on every read and never stored.
"""

import json
from typing import NamedTuple

import structlog
from pydantic import AliasChoices, Field, TypeAdapter

from shared.schemas import CamelModel
from storefront.config import EmptyCartPolicy

logger = structlog.get_logger(__name__)


class CartError(Exception):
    """Base class for cart rule violations."""


class InvalidQuantity(CartError):
    """A quantity that is not a positive integer."""


class QuantityOutOfRange(CartError):
    """A quantity change the cart page refuses (zero, negative or above the cap)."""


class CartLine(CamelModel):
    product_id: str = Field(
        validation_alias=AliasChoices("productId", "product_id", "_id"),
        serialization_alias="productId",
    )
    name: str
    price: float = Field(ge=0)
    image_url: str | None = None
    quantity: int = Field(ge=1)
    color: str | None = None
    size: str | None = None

    @property
    def key(self) -> "LineKey":
        return LineKey(self.product_id, self.color, self.size)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class LineKey(NamedTuple):
    product_id: str
    color: str | None = None
    size: str | None = None


_LINES = TypeAdapter(list[CartLine])


def _check_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidQuantity(f"Quantity must be a positive integer, got {quantity!r}")
    return quantity


class CartStore:
    """The shopper's cart, persisted to a ``LocalStorage``.

    The store is constructed explicitly and handed to whatever needs it (the
    cart page, the checkout session). Storage failures are logged and never
    interrupt an in-memory change.
    """

    def __init__(self, storage, key: str = "cart", empty_cart_policy: EmptyCartPolicy = EmptyCartPolicy.CLEAR):
        self.storage = storage
        self.key = key
        self.empty_cart_policy = EmptyCartPolicy(empty_cart_policy)
        self._lines: list[CartLine] = self._hydrate()

    @classmethod
    def from_settings(cls, settings, storage) -> "CartStore":
        return cls(storage, key=settings.cart_key, empty_cart_policy=settings.empty_cart_policy)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines)

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self._lines)

    @property
    def total_price(self) -> float:
        return sum(line.line_total for line in self._lines)

    def is_empty(self) -> bool:
        return not self._lines

    def line_for(self, key: LineKey) -> CartLine | None:
        for line in self._lines:
            if line.key == key:
                return line
        return None

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, line: CartLine) -> CartLine:
        """Add ``line``, merging quantities into an existing line with the same key."""
        for index, existing in enumerate(self._lines):
            if existing.key == line.key:
                merged = existing.model_copy(update={"quantity": existing.quantity + line.quantity})
                self._lines[index] = merged
                break
        else:
            merged = line.model_copy()
            self._lines.append(merged)

        self._persist()
        return merged

    def remove_item(self, product_id: str, color: str | None = None, size: str | None = None) -> int:
        """Remove the lines selected by a possibly partial key.

        Color and size together select one exact line. A single axis selects
        every line of the product with that color (or size). With neither,
        only the first line of the product is removed. Returns the number of
        lines removed.
        """
        selected = set(self._select(product_id, color, size))
        self._lines = [line for index, line in enumerate(self._lines) if index not in selected]
        if selected:
            self._persist()
        return len(selected)

    def update_quantity(self, product_id: str, quantity: int, color: str | None = None, size: str | None = None) -> int:
        """Set the quantity of the lines ``remove_item`` would select.

        No upper bound applies here; the cart page enforces its own cap.
        """
        quantity = _check_quantity(quantity)
        selected = self._select(product_id, color, size)
        for index in selected:
            self._lines[index] = self._lines[index].model_copy(update={"quantity": quantity})
        if selected:
            self._persist()
        return len(selected)

    def remove_line(self, key: LineKey) -> bool:
        """Remove the line with exactly this key, if present."""
        remaining = [line for line in self._lines if line.key != key]
        removed = len(remaining) != len(self._lines)
        if removed:
            self._lines = remaining
            self._persist()
        return removed

    def set_line_quantity(self, key: LineKey, quantity: int) -> bool:
        """Set the quantity of the line with exactly this key, if present."""
        quantity = _check_quantity(quantity)
        for index, line in enumerate(self._lines):
            if line.key == key:
                self._lines[index] = line.model_copy(update={"quantity": quantity})
                self._persist()
                return True
        return False

    def clear(self) -> None:
        """Empty the cart and drop the persisted copy."""
        self._lines = []
        self._remove_persisted()

    def to_json(self) -> str:
        return json.dumps([line.model_dump(by_alias=True) for line in self._lines], ensure_ascii=False)

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _select(self, product_id, color, size) -> list[int]:
        candidates = [index for index, line in enumerate(self._lines) if line.product_id == product_id]
        if color is not None and size is not None:
            return [i for i in candidates if self._lines[i].color == color and self._lines[i].size == size]
        if color is not None:
            return [i for i in candidates if self._lines[i].color == color]
        if size is not None:
            return [i for i in candidates if self._lines[i].size == size]
        return candidates[:1]

    def _hydrate(self) -> list[CartLine]:
        try:
            raw = self.storage.get_item(self.key)
            if not raw:
                return []
            return _LINES.validate_python(json.loads(raw))
        except Exception:
            logger.warning("cart_load_failed", key=self.key, exc_info=True)
            return []

    def _persist(self) -> None:
        if not self._lines:
            if self.empty_cart_policy is EmptyCartPolicy.CLEAR:
                self._remove_persisted()
            return
        try:
            self.storage.set_item(self.key, self.to_json())
        except Exception:
            logger.warning("cart_save_failed", key=self.key, exc_info=True)

    def _remove_persisted(self) -> None:
        try:
            self.storage.remove_item(self.key)
        except Exception:
            logger.warning("cart_remove_failed", key=self.key, exc_info=True)
