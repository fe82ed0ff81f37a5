"""FastAPI endpoints for the Catalogue domain.

Writes go through domain commands; reads query the repositories directly and
shape the results for the storefront.
"""

import json

from fastapi import APIRouter, HTTPException, Query
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    CategoryListResponse,
    CollectionListResponse,
    CollectionResponse,
    CollectionResponseEnvelope,
    CreateCollectionRequest,
    CreateProductRequest,
    PostReviewRequest,
    ProductListResponse,
    ProductResponse,
    ProductResponseEnvelope,
    ProductReviewsResponse,
    ReviewResponse,
    UpdateCollectionRequest,
    UpdateProductRequest,
)
from catalogue.collection.collection import Collection
from catalogue.collection.management import CreateCollection, DeleteCollection, UpdateCollection
from catalogue.product.management import AddProduct, RemoveProduct, UpdateProduct
from catalogue.product.product import Product
from catalogue.review.review import Review
from catalogue.review.submission import PostReview
from shared.schemas import IdResponse, StatusResponse, paginate

product_router = APIRouter(prefix="/api/products", tags=["products"])
collection_router = APIRouter(prefix="/api/collection", tags=["collections"])
review_router = APIRouter(prefix="/api/reviews", tags=["reviews"])
category_router = APIRouter(prefix="/api/categories", tags=["categories"])


def _dump(values):
    return json.dumps(values) if values is not None else None


def _get_or_404(aggregate_cls, identifier, label):
    try:
        return current_domain.repository_for(aggregate_cls).get(identifier)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail=f"{label} not found")


# --- Product endpoints ---


@product_router.get("", response_model=ProductListResponse | ProductResponseEnvelope)
async def list_products(
    id: str | None = None,
    category: str | None = None,
    search: str | None = None,
    featured: bool | None = None,
    promotion: bool | None = None,
    exclude: str | None = None,
    limit: int = Query(10, ge=1),
    page: int = Query(1, ge=1),
):
    """List products, newest first, or fetch a single one with ``id``."""
    if id:
        product = _get_or_404(Product, id, "Product")
        return ProductResponseEnvelope(data=ProductResponse.from_product(product))

    products = current_domain.repository_for(Product)._dao.query.all().items
    if category:
        products = [p for p in products if p.category == category]
    if search:
        products = [p for p in products if p.matches_search(search)]
    if featured is not None:
        products = [p for p in products if bool(p.featured) == featured]
    if promotion is not None:
        products = [p for p in products if bool(p.promotion) == promotion]
    if exclude:
        products = [p for p in products if str(p.id) != exclude]

    products.sort(key=lambda p: p.created_at, reverse=True)
    page_items, pagination = paginate(products, page, limit)
    return ProductListResponse(
        data=[ProductResponse.from_product(p) for p in page_items],
        pagination=pagination,
    )


@product_router.get("/{product_id}", response_model=ProductResponseEnvelope)
async def get_product(product_id: str) -> ProductResponseEnvelope:
    product = _get_or_404(Product, product_id, "Product")
    return ProductResponseEnvelope(data=ProductResponse.from_product(product))


@product_router.post("", status_code=201, response_model=IdResponse)
async def add_product(body: CreateProductRequest) -> IdResponse:
    command = AddProduct(
        name=body.name,
        reference=body.reference,
        description=body.description,
        price=body.price,
        stock=body.stock,
        category=body.category,
        fabric=body.fabric,
        colors=_dump(body.colors),
        sizes=_dump(body.sizes),
        promotion=body.promotion,
        promo_price=body.promo_price,
        featured=body.featured,
        image_urls=_dump(body.image_urls),
    )
    result = current_domain.process(command, asynchronous=False)
    return IdResponse(id=result)


@product_router.put("/{product_id}", response_model=ProductResponseEnvelope)
async def update_product(product_id: str, body: UpdateProductRequest) -> ProductResponseEnvelope:
    _get_or_404(Product, product_id, "Product")
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        reference=body.reference,
        description=body.description,
        price=body.price,
        stock=body.stock,
        category=body.category,
        fabric=body.fabric,
        colors=_dump(body.colors),
        sizes=_dump(body.sizes),
        sold=body.sold,
        promotion=body.promotion,
        promo_price=body.promo_price,
        featured=body.featured,
        image_urls=_dump(body.image_urls),
    )
    current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get(product_id)
    return ProductResponseEnvelope(data=ProductResponse.from_product(product))


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def remove_product(product_id: str) -> StatusResponse:
    _get_or_404(Product, product_id, "Product")
    current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
    return StatusResponse(message="Product deleted")


# --- Category endpoints ---


@category_router.get("", response_model=CategoryListResponse)
async def list_categories() -> CategoryListResponse:
    """Distinct categories of the catalogue, in the order products first used them."""
    products = current_domain.repository_for(Product)._dao.query.all().items
    products.sort(key=lambda p: p.created_at)
    categories = dict.fromkeys(p.category for p in products if p.category)
    return CategoryListResponse(data=list(categories))


# --- Collection endpoints ---


def _find_collection(id_or_slug):
    repo = current_domain.repository_for(Collection)
    matches = repo._dao.query.filter(slug=id_or_slug).all().items
    if matches:
        return matches[0]
    return _get_or_404(Collection, id_or_slug, "Collection")


@collection_router.get("", response_model=CollectionListResponse)
async def list_collections(
    status: str | None = None,
    featured: bool | None = None,
    search: str | None = None,
    limit: int = Query(20, ge=1),
    page: int = Query(1, ge=1),
) -> CollectionListResponse:
    """List collections ordered by sort order, then newest first."""
    collections = current_domain.repository_for(Collection)._dao.query.all().items
    if status:
        collections = [c for c in collections if c.status == status]
    if featured is not None:
        collections = [c for c in collections if bool(c.is_featured) == featured]
    if search:
        collections = [c for c in collections if c.matches_search(search)]

    collections.sort(key=lambda c: c.created_at, reverse=True)
    collections.sort(key=lambda c: c.sort_order or 0)
    page_items, pagination = paginate(collections, page, limit)
    return CollectionListResponse(
        data=[CollectionResponse.from_collection(c) for c in page_items],
        pagination=pagination,
    )


@collection_router.get("/{id_or_slug}", response_model=CollectionResponseEnvelope)
async def get_collection(id_or_slug: str) -> CollectionResponseEnvelope:
    collection = _find_collection(id_or_slug)
    return CollectionResponseEnvelope(data=CollectionResponse.from_collection(collection))


@collection_router.post("", status_code=201, response_model=IdResponse)
async def create_collection(body: CreateCollectionRequest) -> IdResponse:
    command = CreateCollection(
        name=body.name,
        description=body.description,
        images=_dump(body.images),
        status=body.status,
        tags=_dump(body.tags),
        is_featured=body.is_featured,
        seo_title=body.seo_title,
        seo_description=body.seo_description,
        sort_order=body.sort_order,
        metadata=_dump(body.metadata),
    )
    result = current_domain.process(command, asynchronous=False)
    return IdResponse(id=result)


@collection_router.put("/{id_or_slug}", response_model=CollectionResponseEnvelope)
async def update_collection(id_or_slug: str, body: UpdateCollectionRequest) -> CollectionResponseEnvelope:
    collection = _find_collection(id_or_slug)
    command = UpdateCollection(
        collection_id=str(collection.id),
        name=body.name,
        description=body.description,
        status=body.status,
        tags=_dump(body.tags),
        is_featured=body.is_featured,
        seo_title=body.seo_title,
        seo_description=body.seo_description,
        sort_order=body.sort_order,
        metadata=_dump(body.metadata),
        new_images=_dump(body.new_images),
        images_to_remove=_dump(body.images_to_remove),
    )
    current_domain.process(command, asynchronous=False)
    updated = current_domain.repository_for(Collection).get(collection.id)
    return CollectionResponseEnvelope(data=CollectionResponse.from_collection(updated))


@collection_router.delete("/{id_or_slug}", response_model=StatusResponse)
async def delete_collection(id_or_slug: str) -> StatusResponse:
    collection = _find_collection(id_or_slug)
    current_domain.process(DeleteCollection(collection_id=str(collection.id)), asynchronous=False)
    return StatusResponse(message="Collection deleted")


# --- Review endpoints ---


@review_router.get("", response_model=ProductReviewsResponse)
async def list_reviews(product_id: str = Query(..., alias="productId")) -> ProductReviewsResponse:
    product = _get_or_404(Product, product_id, "Product")
    reviews = current_domain.repository_for(Review)._dao.query.filter(product_id=str(product.id)).all().items
    reviews.sort(key=lambda r: r.created_at, reverse=True)
    return ProductReviewsResponse(
        reviews=[
            ReviewResponse(
                id=str(r.id),
                product_id=str(r.product_id),
                user_name=r.user_name,
                rating=r.rating,
                comment=r.comment,
                images=r.image_list(),
                created_at=r.created_at,
            )
            for r in reviews
        ],
        rating=product.rating or 0.0,
        review_count=product.review_count or 0,
    )


@review_router.post("", status_code=201, response_model=IdResponse)
async def post_review(body: PostReviewRequest) -> IdResponse:
    if not body.product_id or body.rating is None or not body.comment:
        raise HTTPException(status_code=400, detail="Missing required data")
    _get_or_404(Product, body.product_id, "Product")

    command = PostReview(
        product_id=body.product_id,
        rating=body.rating,
        comment=body.comment,
        images=_dump(body.images),
    )
    result = current_domain.process(command, asynchronous=False)
    return IdResponse(id=result)
