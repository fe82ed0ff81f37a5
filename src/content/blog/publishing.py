"""Blog publishing — commands and handler for the editorial dashboard.

Posts are addressed by slug everywhere, so the handler resolves slugs to
aggregates and keeps them unique.
"""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, String, Text
from protean.utils.globals import current_domain

from content.blog.post import BlogPost, normalize_slug
from content.domain import content


@content.command(part_of="BlogPost")
class WritePost:
    title: String(required=True, max_length=100)
    body: Text(required=True)
    slug: String(max_length=150)
    excerpt: String(max_length=200)
    image: String(max_length=500)
    author: String(max_length=100)
    category: String(max_length=100)
    tags: Text()  # JSON array
    is_published: Boolean(default=True)


@content.command(part_of="BlogPost")
class RevisePost:
    slug: String(required=True, max_length=150)
    title: String(max_length=100)
    body: Text()
    new_slug: String(max_length=150)
    excerpt: String(max_length=200)
    image: String(max_length=500)
    author: String(max_length=100)
    category: String(max_length=100)
    tags: Text()
    is_published: Boolean()


@content.command(part_of="BlogPost")
class DeletePost:
    slug: String(required=True, max_length=150)


def find_post_by_slug(slug):
    """Return the post with ``slug`` or raise ``ObjectNotFoundError``."""
    repo = current_domain.repository_for(BlogPost)
    posts = repo._dao.query.filter(slug=slug.strip().lower()).all().items
    if not posts:
        raise ObjectNotFoundError(f"Blog post `{slug}` does not exist")
    return posts[0]


def _ensure_unique_slug(repo, slug, post_id=None):
    clashes = repo._dao.query.filter(slug=slug).all().items
    if any(str(p.id) != str(post_id) for p in clashes):
        raise ValidationError({"slug": ["A post with this slug already exists"]})


@content.command_handler(part_of=BlogPost)
class PublishingHandler:
    @handle(WritePost)
    def write_post(self, command):
        repo = current_domain.repository_for(BlogPost)
        _ensure_unique_slug(repo, normalize_slug(command.slug or command.title))

        post = BlogPost.write(
            title=command.title,
            body=command.body,
            slug=command.slug,
            excerpt=command.excerpt,
            image=command.image,
            author=command.author,
            category=command.category,
            tags=json.loads(command.tags) if command.tags else None,
            is_published=command.is_published if command.is_published is not None else True,
        )
        repo.add(post)
        return post.slug

    @handle(RevisePost)
    def revise_post(self, command):
        repo = current_domain.repository_for(BlogPost)
        post = find_post_by_slug(command.slug)

        if command.new_slug:
            _ensure_unique_slug(repo, normalize_slug(command.new_slug), post.id)

        post.revise(
            title=command.title,
            body=command.body,
            slug=command.new_slug,
            excerpt=command.excerpt,
            image=command.image,
            author=command.author,
            category=command.category,
            tags=json.loads(command.tags) if command.tags else None,
            is_published=command.is_published,
        )
        repo.add(post)
        return post.slug

    @handle(DeletePost)
    def delete_post(self, command):
        repo = current_domain.repository_for(BlogPost)
        post = find_post_by_slug(command.slug)
        repo._dao.delete(post)
