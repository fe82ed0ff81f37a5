"""BlogPost aggregate root."""

import json
import re
from datetime import datetime

from protean import atomic_change
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, String, Text

from content.domain import content
from shared.slugs import slugify

DEFAULT_AUTHOR = "Admin"
DEFAULT_CATEGORY = "Uncategorized"

_SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def normalize_slug(value):
    """Lowercase a supplied slug, or derive one from free text."""
    candidate = value.strip().lower()
    if _SLUG_PATTERN.match(candidate):
        return candidate
    slug = slugify(candidate)
    if not slug:
        raise ValidationError({"slug": ["Slug must contain at least one letter or digit"]})
    return slug


@content.aggregate
class BlogPost:
    """A blog article. Tags are stored as a JSON array."""

    title: String(required=True, max_length=100)
    slug: String(required=True, max_length=150)
    body: Text(required=True)
    excerpt: String(max_length=200)
    image: String(max_length=500)
    author: String(max_length=100, default=DEFAULT_AUTHOR)
    category: String(max_length=100, default=DEFAULT_CATEGORY)
    tags: Text()
    view_count: Integer(default=0, min_value=0)
    is_published: Boolean(default=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def write(
        cls,
        title,
        body,
        slug=None,
        excerpt=None,
        image=None,
        author=None,
        category=None,
        tags=None,
        is_published=True,
    ):
        from content.blog.events import BlogPostPublished

        now = datetime.now()
        post = cls(
            title=title,
            slug=normalize_slug(slug or title),
            body=body,
            excerpt=excerpt,
            image=image,
            author=author or DEFAULT_AUTHOR,
            category=category or DEFAULT_CATEGORY,
            tags=json.dumps(tags or []),
            is_published=is_published,
            created_at=now,
            updated_at=now,
        )
        if post.is_published:
            post.raise_(BlogPostPublished(post_id=post.id, slug=post.slug, title=post.title, published_at=now))
        return post

    def revise(self, **changes):
        """Apply a partial edit; ``None`` values are ignored."""
        from content.blog.events import BlogPostPublished

        was_published = self.is_published
        with atomic_change(self):
            for field_name in ("title", "excerpt", "image", "author", "category", "is_published"):
                value = changes.get(field_name)
                if value is not None:
                    setattr(self, field_name, value)
            if changes.get("body") is not None:
                self.body = changes["body"]
            if changes.get("slug") is not None:
                self.slug = normalize_slug(changes["slug"])
            if changes.get("tags") is not None:
                self.tags = json.dumps(changes["tags"])
        self.updated_at = datetime.now()

        if self.is_published and not was_published:
            self.raise_(
                BlogPostPublished(post_id=self.id, slug=self.slug, title=self.title, published_at=self.updated_at)
            )

    def record_view(self):
        self.view_count = (self.view_count or 0) + 1

    def tag_list(self):
        return json.loads(self.tags) if self.tags else []
