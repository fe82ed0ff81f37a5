"""Product directory backed by the catalogue domain.

Both contexts run in the same process; lookups switch into the catalogue's
domain context for the duration of the read.
"""

from protean.exceptions import ObjectNotFoundError

from ordering.products.port import ProductDirectory, ProductSnapshot


class CatalogueProductDirectory(ProductDirectory):
    def find(self, product_id: str) -> ProductSnapshot | None:
        from catalogue.domain import catalogue
        from catalogue.product.product import Product

        with catalogue.domain_context():
            try:
                product = catalogue.repository_for(Product).get(product_id)
            except ObjectNotFoundError:
                return None
            return ProductSnapshot(
                product_id=str(product.id),
                name=product.name,
                price=product.effective_price(),
                image_urls=product.image_url_list(),
            )
