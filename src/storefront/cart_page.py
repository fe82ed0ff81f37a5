"""Cart page adapter.

Holds the quantity rules the shopper-facing inputs enforce before the cart
store is touched: every change must be between 1 and ``max_quantity``.
The store itself accepts any positive quantity.
"""

import structlog

from storefront.cart import CartLine, CartStore, LineKey, QuantityOutOfRange

logger = structlog.get_logger(__name__)

DEFAULT_MAX_QUANTITY = 20


class CartPage:
    def __init__(self, store: CartStore, max_quantity: int = DEFAULT_MAX_QUANTITY):
        self.store = store
        self.max_quantity = max_quantity

    def _guard(self, quantity) -> int:
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise QuantityOutOfRange(f"Quantity must be a whole number, got {quantity!r}")
        if quantity <= 0 or quantity > self.max_quantity:
            raise QuantityOutOfRange(f"Quantity must be between 1 and {self.max_quantity}, got {quantity}")
        return quantity

    def add_to_cart(
        self,
        product_id: str,
        name: str,
        price: float,
        quantity: int = 1,
        image_url: str | None = None,
        color: str | None = None,
        size: str | None = None,
    ) -> CartLine:
        line = CartLine(
            product_id=product_id,
            name=name,
            price=price,
            quantity=self._guard(quantity),
            image_url=image_url,
            color=color,
            size=size,
        )
        return self.store.add_item(line)

    def change_quantity(self, key: LineKey, quantity: int) -> bool:
        """Set a line's quantity from the cart page's quantity input."""
        quantity = self._guard(quantity)
        logger.debug("cart_quantity_changed", product_id=key.product_id, quantity=quantity)
        return self.store.set_line_quantity(key, quantity)

    def increment(self, key: LineKey) -> bool:
        line = self.store.line_for(key)
        if line is None:
            return False
        return self.change_quantity(key, line.quantity + 1)

    def decrement(self, key: LineKey) -> bool:
        line = self.store.line_for(key)
        if line is None:
            return False
        return self.change_quantity(key, line.quantity - 1)

    def remove(self, key: LineKey) -> bool:
        return self.store.remove_line(key)

    def clear(self) -> None:
        self.store.clear()

    def summary(self) -> dict:
        return {
            "totalItems": self.store.total_items,
            "totalPrice": self.store.total_price,
            "lines": [line.model_dump(by_alias=True) for line in self.store.lines],
        }
