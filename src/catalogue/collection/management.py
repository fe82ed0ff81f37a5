"""Collection management — commands and handler."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.collection.collection import Collection
from catalogue.domain import catalogue
from shared.slugs import slugify


@catalogue.command(part_of="Collection")
class CreateCollection:
    name: String(required=True, max_length=100)
    description: String(max_length=500)
    images: Text()  # JSON array of URLs
    status: String(max_length=20)
    tags: Text()  # JSON array
    is_featured: Boolean(default=False)
    seo_title: String(max_length=60)
    seo_description: String(max_length=160)
    sort_order: Integer(default=0)
    metadata: Text()  # JSON object


@catalogue.command(part_of="Collection")
class UpdateCollection:
    collection_id: Identifier(required=True)
    name: String(max_length=100)
    description: String(max_length=500)
    status: String(max_length=20)
    tags: Text()
    is_featured: Boolean()
    seo_title: String(max_length=60)
    seo_description: String(max_length=160)
    sort_order: Integer()
    metadata: Text()
    new_images: Text()  # JSON array of URLs to append
    images_to_remove: Text()  # JSON array of URLs to drop


@catalogue.command(part_of="Collection")
class DeleteCollection:
    collection_id: Identifier(required=True)


def _loads(value):
    if value is None:
        return None
    return json.loads(value) if isinstance(value, str) else value


def _ensure_unique_name(repo, name, collection_id=None):
    slug = slugify(name)
    clashes = [c for c in repo._dao.query.all().items if c.slug == slug or c.name == name.strip()]
    if any(str(c.id) != str(collection_id) for c in clashes):
        raise ValidationError({"name": ["A collection with this name already exists"]})


@catalogue.command_handler(part_of=Collection)
class ManageCollectionHandler:
    @handle(CreateCollection)
    def create_collection(self, command):
        repo = current_domain.repository_for(Collection)
        _ensure_unique_name(repo, command.name)

        collection = Collection.create(
            name=command.name,
            description=command.description,
            images=_loads(command.images),
            status=command.status,
            tags=_loads(command.tags),
            is_featured=bool(command.is_featured),
            seo_title=command.seo_title,
            seo_description=command.seo_description,
            sort_order=command.sort_order,
            metadata=_loads(command.metadata),
        )
        repo.add(collection)
        return str(collection.id)

    @handle(UpdateCollection)
    def update_collection(self, command):
        repo = current_domain.repository_for(Collection)
        collection = repo.get(command.collection_id)

        if command.name is not None:
            _ensure_unique_name(repo, command.name, collection.id)

        collection.update(
            name=command.name,
            description=command.description,
            status=command.status,
            tags=_loads(command.tags),
            is_featured=command.is_featured,
            seo_title=command.seo_title,
            seo_description=command.seo_description,
            sort_order=command.sort_order,
            metadata=_loads(command.metadata),
            new_images=_loads(command.new_images),
            images_to_remove=_loads(command.images_to_remove),
        )
        repo.add(collection)

    @handle(DeleteCollection)
    def delete_collection(self, command):
        repo = current_domain.repository_for(Collection)
        collection = repo.get(command.collection_id)
        repo._dao.delete(collection)
