"""FastAPI routes for the blog."""

import json

from fastapi import APIRouter, HTTPException, Query
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from content.api.schemas import (
    BlogPostEnvelope,
    BlogPostListResponse,
    BlogPostResponse,
    RevisePostRequest,
    SlugResponse,
    WritePostRequest,
)
from content.blog.post import BlogPost
from content.blog.publishing import DeletePost, RevisePost, WritePost, find_post_by_slug
from shared.schemas import StatusResponse, paginate

blog_router = APIRouter(prefix="/api/blog", tags=["blog"])


def _post_or_404(slug):
    try:
        return find_post_by_slug(slug)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="Blog post not found")


@blog_router.get("", response_model=BlogPostListResponse)
async def list_posts(
    category: str | None = None,
    tag: str | None = None,
    include_drafts: bool = Query(False, alias="all"),
    limit: int = Query(10, ge=1),
    page: int = Query(1, ge=1),
) -> BlogPostListResponse:
    """Published posts, newest first. ``all=true`` includes drafts."""
    posts = current_domain.repository_for(BlogPost)._dao.query.all().items
    if not include_drafts:
        posts = [p for p in posts if p.is_published]
    if category:
        posts = [p for p in posts if p.category == category]
    if tag:
        posts = [p for p in posts if tag in p.tag_list()]

    posts.sort(key=lambda p: p.created_at, reverse=True)
    page_items, pagination = paginate(posts, page, limit)
    return BlogPostListResponse(
        data=[BlogPostResponse.from_post(p) for p in page_items],
        pagination=pagination,
    )


@blog_router.get("/{slug}", response_model=BlogPostEnvelope)
async def read_post(slug: str) -> BlogPostEnvelope:
    """Fetch a post and count the view."""
    post = _post_or_404(slug)
    post.record_view()
    current_domain.repository_for(BlogPost).add(post)
    return BlogPostEnvelope(data=BlogPostResponse.from_post(post))


@blog_router.post("", status_code=201, response_model=SlugResponse)
async def write_post(body: WritePostRequest) -> SlugResponse:
    command = WritePost(
        title=body.title,
        body=body.content,
        slug=body.slug,
        excerpt=body.excerpt,
        image=body.image,
        author=body.author,
        category=body.category,
        tags=json.dumps(body.tags),
        is_published=body.is_published,
    )
    slug = current_domain.process(command, asynchronous=False)
    return SlugResponse(slug=slug)


@blog_router.put("/{slug}", response_model=BlogPostEnvelope)
async def revise_post(slug: str, body: RevisePostRequest) -> BlogPostEnvelope:
    _post_or_404(slug)
    command = RevisePost(
        slug=slug,
        title=body.title,
        body=body.content,
        new_slug=body.slug,
        excerpt=body.excerpt,
        image=body.image,
        author=body.author,
        category=body.category,
        tags=json.dumps(body.tags) if body.tags is not None else None,
        is_published=body.is_published,
    )
    new_slug = current_domain.process(command, asynchronous=False)
    return BlogPostEnvelope(data=BlogPostResponse.from_post(find_post_by_slug(new_slug)))


@blog_router.delete("/{slug}", response_model=StatusResponse)
async def delete_post(slug: str) -> StatusResponse:
    _post_or_404(slug)
    current_domain.process(DeletePost(slug=slug), asynchronous=False)
    return StatusResponse(message="Blog post deleted")
