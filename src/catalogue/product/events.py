"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductAdded:
    """A new product was added to the catalogue from the dashboard."""

    __version__ = 1

    product_id: Identifier(required=True)
    reference: String(required=True)
    name: String(required=True)
    category: String(required=True)
    price: Float(required=True)
    added_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductUpdated:
    """One or more product fields were edited."""

    __version__ = 1

    product_id: Identifier(required=True)
    changed_fields: Text(required=True)  # JSON array of field names
    price: Float(required=True)
    updated_at: DateTime(required=True)

