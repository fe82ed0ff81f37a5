"""Collection aggregate root — a curated, publishable grouping of garments."""

import json
from datetime import datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, String, Text

from catalogue.domain import catalogue
from shared.slugs import slugify

MAX_TAGS = 10


class CollectionStatus(Enum):
    PUBLISHED = "published"
    DRAFT = "draft"
    ARCHIVED = "archived"


@catalogue.aggregate
class Collection:
    """A named selection of products shown on the collections pages.

    The slug always follows the name; tags and images are JSON arrays.
    """

    name: String(required=True, max_length=100)
    slug: String(required=True, max_length=120)
    description: String(max_length=500)
    images: Text()
    is_featured: Boolean(default=False)
    status: String(choices=CollectionStatus, default=CollectionStatus.DRAFT.value)
    tags: Text()
    seo_title: String(max_length=60)
    seo_description: String(max_length=160)
    sort_order: Integer(default=0, min_value=0)
    metadata: Text()
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def tags_cannot_exceed_maximum(self):
        if self.tags and len(json.loads(self.tags)) > MAX_TAGS:
            raise ValidationError({"tags": [f"Cannot have more than {MAX_TAGS} tags"]})

    @classmethod
    def create(
        cls,
        name,
        description=None,
        images=None,
        status=None,
        tags=None,
        is_featured=False,
        seo_title=None,
        seo_description=None,
        sort_order=0,
        metadata=None,
    ):
        from catalogue.collection.events import CollectionCreated

        now = datetime.now()
        collection = cls(
            name=name.strip(),
            slug=slugify(name),
            description=description,
            images=json.dumps(images or []),
            status=status or CollectionStatus.DRAFT.value,
            tags=json.dumps(tags or []),
            is_featured=is_featured,
            seo_title=seo_title,
            seo_description=seo_description,
            sort_order=sort_order or 0,
            metadata=json.dumps(metadata or {}),
            created_at=now,
            updated_at=now,
        )
        collection.raise_(
            CollectionCreated(
                collection_id=collection.id,
                name=collection.name,
                slug=collection.slug,
                status=collection.status,
            )
        )
        return collection

    def update(
        self,
        name=None,
        description=None,
        status=None,
        tags=None,
        is_featured=None,
        seo_title=None,
        seo_description=None,
        sort_order=None,
        metadata=None,
        new_images=None,
        images_to_remove=None,
    ):
        from catalogue.collection.events import CollectionUpdated

        with atomic_change(self):
            if name is not None and name.strip() != self.name:
                self.name = name.strip()
                self.slug = slugify(name)
            if description is not None:
                self.description = description
            if status is not None:
                self.status = status
            if tags is not None:
                self.tags = json.dumps(tags)
            if is_featured is not None:
                self.is_featured = is_featured
            if seo_title is not None:
                self.seo_title = seo_title
            if seo_description is not None:
                self.seo_description = seo_description
            if sort_order is not None:
                self.sort_order = sort_order
            if metadata is not None:
                self.metadata = json.dumps(metadata)
            if new_images or images_to_remove:
                removed = set(images_to_remove or [])
                kept = [url for url in self.image_list() if url not in removed]
                self.images = json.dumps(kept + list(new_images or []))

        self.updated_at = datetime.now()
        self.raise_(
            CollectionUpdated(
                collection_id=self.id,
                name=self.name,
                slug=self.slug,
                status=self.status,
            )
        )

    def image_list(self):
        return json.loads(self.images) if self.images else []

    def tag_list(self):
        return json.loads(self.tags) if self.tags else []

    def metadata_dict(self):
        return json.loads(self.metadata) if self.metadata else {}

    def matches_search(self, term):
        term = term.lower()
        haystack = [self.name or "", self.description or "", *self.tag_list()]
        return any(term in text.lower() for text in haystack)
