from protean.fields import DateTime, Identifier, String

from content.domain import content


@content.event(part_of="BlogPost")
class BlogPostPublished:
    """A post became visible on the public blog."""

    __version__ = 1

    post_id: Identifier(required=True)
    slug: String(required=True)
    title: String(required=True)
    published_at: DateTime(required=True)
