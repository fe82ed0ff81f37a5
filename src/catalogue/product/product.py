"""Product aggregate root — a garment offered in the MAEVA shop."""

import json
from datetime import datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from catalogue.domain import catalogue

# Fields the dashboard may change through UpdateProduct
_EDITABLE_FIELDS = (
    "name",
    "reference",
    "description",
    "price",
    "stock",
    "category",
    "fabric",
    "sold",
    "promotion",
    "promo_price",
    "featured",
)
_LIST_FIELDS = ("colors", "sizes", "image_urls")


def _dump_list(values):
    if values is None:
        return json.dumps([])
    if isinstance(values, str):
        values = [v.strip() for v in values.split(",") if v.strip()]
    return json.dumps(list(values))


@catalogue.aggregate
class Product:
    """Product aggregate root.

    Colors, sizes and image URLs are stored as JSON arrays.
    """

    name: String(required=True, max_length=100)
    reference: String(required=True, max_length=50)
    description: Text(required=True)
    price: Float(required=True, min_value=0.0)
    stock: Integer(default=0, min_value=0)
    category: String(required=True, max_length=100)
    fabric: String(max_length=100)
    colors: Text()
    sizes: Text()
    sold: Integer(default=0, min_value=0)
    promotion: Boolean(default=False)
    promo_price: Float(min_value=0.0)
    featured: Boolean(default=False)
    image_urls: Text()
    rating: Float(default=0.0, min_value=0.0, max_value=5.0)
    review_count: Integer(default=0, min_value=0)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def promo_price_must_undercut_price(self):
        if not self.promotion:
            return
        if self.promo_price is None or self.promo_price >= self.price:
            raise ValidationError(
                {"promo_price": ["A promotional price lower than the regular price is required"]}
            )

    @classmethod
    def create(
        cls,
        name,
        reference,
        description,
        price,
        category,
        stock=0,
        fabric=None,
        colors=None,
        sizes=None,
        promotion=False,
        promo_price=None,
        featured=False,
        image_urls=None,
    ):
        from catalogue.product.events import ProductAdded

        now = datetime.now()
        product = cls(
            name=name,
            reference=reference.strip(),
            description=description,
            price=price,
            stock=stock,
            category=category.strip(),
            fabric=fabric,
            colors=_dump_list(colors),
            sizes=_dump_list(sizes),
            promotion=promotion,
            promo_price=promo_price,
            featured=featured,
            image_urls=_dump_list(image_urls),
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=product.id,
                reference=product.reference,
                name=name,
                category=product.category,
                price=price,
                added_at=now,
            )
        )
        return product

    def update(self, **changes):
        """Apply a partial update; ``None`` values leave the field untouched."""
        from catalogue.product.events import ProductUpdated

        changed = []
        with atomic_change(self):
            for field_name in _EDITABLE_FIELDS:
                value = changes.get(field_name)
                if value is not None and value != getattr(self, field_name):
                    setattr(self, field_name, value)
                    changed.append(field_name)
            for field_name in _LIST_FIELDS:
                value = changes.get(field_name)
                if value is not None:
                    setattr(self, field_name, _dump_list(value))
                    changed.append(field_name)

        if not changed:
            return

        self.updated_at = datetime.now()
        self.raise_(
            ProductUpdated(
                product_id=self.id,
                changed_fields=json.dumps(changed),
                price=self.price,
                updated_at=self.updated_at,
            )
        )

    def record_rating(self, rating, review_count):
        """Store the rating aggregated from the product's reviews."""
        self.rating = round(rating, 2)
        self.review_count = review_count
        self.updated_at = datetime.now()

    # -------------------------------------------------------------------
    # Read helpers
    # -------------------------------------------------------------------
    def color_list(self):
        return json.loads(self.colors) if self.colors else []

    def size_list(self):
        return json.loads(self.sizes) if self.sizes else []

    def image_url_list(self):
        return json.loads(self.image_urls) if self.image_urls else []

    def effective_price(self):
        """Price the shopper pays: the promotional price while a promotion runs."""
        if self.promotion and self.promo_price is not None:
            return self.promo_price
        return self.price

    def matches_search(self, term):
        term = term.lower()
        return term in (self.name or "").lower() or term in (self.reference or "").lower()
