"""Domain events for the Collection aggregate."""

from protean.fields import Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Collection")
class CollectionCreated:
    """A new collection was created from the dashboard."""

    __version__ = 1

    collection_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    status: String(required=True)


@catalogue.event(part_of="Collection")
class CollectionUpdated:
    """A collection's details, status or images changed."""

    __version__ = 1

    collection_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    status: String(required=True)
