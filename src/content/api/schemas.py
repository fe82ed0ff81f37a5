"""Pydantic request/response schemas for the blog API."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from shared.schemas import CamelModel, Pagination


class WritePostRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Le karakou, histoire d'un costume",
                    "content": "Né à Alger au XIXe siècle, le karakou...",
                    "excerpt": "Aux origines du costume algérois.",
                    "category": "Histoire",
                    "tags": ["karakou", "alger"],
                }
            ]
        }
    }

    title: str = Field(..., max_length=100)
    content: str = Field(..., min_length=1)
    slug: str | None = Field(None, max_length=150)
    excerpt: str | None = Field(None, max_length=200)
    image: str | None = Field(None, max_length=500)
    author: str | None = Field(None, max_length=100)
    category: str | None = Field(None, max_length=100)
    tags: list[str] = []
    is_published: bool = True


class RevisePostRequest(CamelModel):
    title: str | None = Field(None, max_length=100)
    content: str | None = None
    slug: str | None = Field(None, max_length=150)
    excerpt: str | None = Field(None, max_length=200)
    image: str | None = Field(None, max_length=500)
    author: str | None = Field(None, max_length=100)
    category: str | None = Field(None, max_length=100)
    tags: list[str] | None = None
    is_published: bool | None = None


class BlogPostResponse(CamelModel):
    id: str
    title: str
    slug: str
    content: str
    excerpt: str | None = None
    image: str | None = None
    author: str
    category: str
    tags: list[str] = []
    view_count: int = 0
    is_published: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_post(cls, post) -> BlogPostResponse:
        return cls(
            id=str(post.id),
            title=post.title,
            slug=post.slug,
            content=post.body,
            excerpt=post.excerpt,
            image=post.image,
            author=post.author,
            category=post.category,
            tags=post.tag_list(),
            view_count=post.view_count or 0,
            is_published=bool(post.is_published),
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class BlogPostEnvelope(CamelModel):
    success: bool = True
    data: BlogPostResponse


class BlogPostListResponse(CamelModel):
    success: bool = True
    data: list[BlogPostResponse]
    pagination: Pagination


class SlugResponse(CamelModel):
    success: bool = True
    slug: str


# --- Contact Schemas ---


class SendContactRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Amina B.",
                    "phone": "0555123456",
                    "email": "amina@example.dz",
                    "subject": "Retouche",
                    "message": "Proposez-vous des retouches sur les caftans ?",
                }
            ]
        }
    }

    name: str | None = None
    phone: str | None = None
    email: str | None = None
    subject: str | None = None
    message: str | None = None


class UpdateContactStatusRequest(CamelModel):
    status: str | None = None


class ContactResponse(CamelModel):
    id: str
    name: str
    phone: str
    email: str
    subject: str
    message: str
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_message(cls, msg) -> ContactResponse:
        return cls(
            id=str(msg.id),
            name=msg.name,
            phone=msg.phone,
            email=msg.email,
            subject=msg.subject,
            message=msg.message,
            status=msg.status,
            created_at=msg.created_at,
            updated_at=msg.updated_at,
        )
