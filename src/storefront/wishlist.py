"""Client-side wishlist.

A plain list of product ids kept in local storage under ``wishlist``. Unlike
the cart, nothing is cached in memory: every call reads the stored list, so
two pages sharing a storage always agree.
"""

import json

import structlog

logger = structlog.get_logger(__name__)


class Wishlist:
    def __init__(self, storage, key: str = "wishlist"):
        self.storage = storage
        self.key = key

    @classmethod
    def from_settings(cls, settings, storage) -> "Wishlist":
        return cls(storage, key=settings.wishlist_key)

    def items(self) -> list[str]:
        """Product ids in the order they were added."""
        try:
            raw = self.storage.get_item(self.key)
            ids = json.loads(raw) if raw else []
        except Exception:
            logger.warning("wishlist_load_failed", key=self.key, exc_info=True)
            return []
        if not isinstance(ids, list):
            logger.warning("wishlist_malformed", key=self.key)
            return []
        return [str(product_id) for product_id in ids]

    def __contains__(self, product_id: str) -> bool:
        return product_id in self.items()

    def __len__(self) -> int:
        return len(self.items())

    def toggle(self, product_id: str) -> bool:
        """Add the product, or remove it if already there; True when it was added."""
        ids = self.items()
        added = product_id not in ids
        if added:
            ids.append(product_id)
        else:
            ids.remove(product_id)
        self._save(ids)
        return added

    def clear(self) -> None:
        self._save([])

    def _save(self, ids: list[str]) -> None:
        try:
            self.storage.set_item(self.key, json.dumps(ids))
        except Exception:
            logger.warning("wishlist_save_failed", key=self.key, exc_info=True)
