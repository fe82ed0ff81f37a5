"""In-memory product directory for tests and local development."""

from ordering.products.port import ProductDirectory, ProductSnapshot


class FakeProductDirectory(ProductDirectory):
    def __init__(self, products: list[ProductSnapshot] | None = None) -> None:
        self.products: dict[str, ProductSnapshot] = {}
        self.calls: list[str] = []
        for product in products or []:
            self.register(product)

    def register(self, product: ProductSnapshot) -> None:
        self.products[product.product_id] = product

    def find(self, product_id: str) -> ProductSnapshot | None:
        self.calls.append(product_id)
        return self.products.get(product_id)
