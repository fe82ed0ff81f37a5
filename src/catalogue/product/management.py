"""Product management — commands and handler used by the dashboard."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=100)
    reference: String(required=True, max_length=50)
    description: Text(required=True)
    price: Float(required=True, min_value=0.0)
    stock: Integer(default=0)
    category: String(required=True, max_length=100)
    fabric: String(max_length=100)
    colors: Text()  # JSON array
    sizes: Text()  # JSON array
    promotion: Boolean(default=False)
    promo_price: Float()
    featured: Boolean(default=False)
    image_urls: Text()  # JSON array


@catalogue.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=100)
    reference: String(max_length=50)
    description: Text()
    price: Float(min_value=0.0)
    stock: Integer()
    category: String(max_length=100)
    fabric: String(max_length=100)
    colors: Text()
    sizes: Text()
    sold: Integer()
    promotion: Boolean()
    promo_price: Float()
    featured: Boolean()
    image_urls: Text()


@catalogue.command(part_of="Product")
class RemoveProduct:
    product_id: Identifier(required=True)


def _loads(value):
    if value is None:
        return None
    return json.loads(value) if isinstance(value, str) else value


def _ensure_unique_reference(repo, reference, product_id=None):
    clashes = repo._dao.query.filter(reference=reference).all().items
    if any(str(p.id) != str(product_id) for p in clashes):
        raise ValidationError({"reference": ["Product reference must be unique"]})


@catalogue.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        repo = current_domain.repository_for(Product)
        _ensure_unique_reference(repo, command.reference.strip())

        product = Product.create(
            name=command.name,
            reference=command.reference,
            description=command.description,
            price=command.price,
            category=command.category,
            stock=command.stock or 0,
            fabric=command.fabric,
            colors=_loads(command.colors),
            sizes=_loads(command.sizes),
            promotion=bool(command.promotion),
            promo_price=command.promo_price,
            featured=bool(command.featured),
            image_urls=_loads(command.image_urls),
        )
        repo.add(product)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        if command.reference is not None:
            _ensure_unique_reference(repo, command.reference.strip(), product.id)

        product.update(
            name=command.name,
            reference=command.reference,
            description=command.description,
            price=command.price,
            stock=command.stock,
            category=command.category,
            fabric=command.fabric,
            sold=command.sold,
            promotion=command.promotion,
            promo_price=command.promo_price,
            featured=command.featured,
            colors=_loads(command.colors),
            sizes=_loads(command.sizes),
            image_urls=_loads(command.image_urls),
        )
        repo.add(product)

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
