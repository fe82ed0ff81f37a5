"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from shared.schemas import CamelModel, Pagination

# --- Product Request Schemas ---


class CreateProductRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Karakou Algérois",
                    "reference": "KRK-001",
                    "description": "Karakou brodé au fil d'or, velours bordeaux.",
                    "price": 45000,
                    "stock": 3,
                    "category": "karakou",
                    "fabric": "velours",
                    "colors": ["bordeaux", "noir"],
                    "sizes": ["S", "M", "L"],
                    "promotion": True,
                    "promoPrice": 39000,
                    "imageUrls": ["https://cdn.maeva.dz/krk-001.jpg"],
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    reference: str = Field(..., max_length=50)
    description: str
    price: float = Field(..., ge=0)
    stock: int = Field(0, ge=0)
    category: str = Field(..., max_length=100)
    fabric: str | None = Field(None, max_length=100)
    colors: list[str] = []
    sizes: list[str] = []
    promotion: bool = False
    promo_price: float | None = Field(None, ge=0)
    featured: bool = False
    image_urls: list[str] = []


class UpdateProductRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "price": 42000,
                    "stock": 5,
                    "promotion": False,
                }
            ]
        }
    }

    name: str | None = Field(None, max_length=100)
    reference: str | None = Field(None, max_length=50)
    description: str | None = None
    price: float | None = Field(None, ge=0)
    stock: int | None = Field(None, ge=0)
    category: str | None = Field(None, max_length=100)
    fabric: str | None = Field(None, max_length=100)
    colors: list[str] | None = None
    sizes: list[str] | None = None
    sold: int | None = Field(None, ge=0)
    promotion: bool | None = None
    promo_price: float | None = Field(None, ge=0)
    featured: bool | None = None
    image_urls: list[str] | None = None


# --- Product Response Schemas ---


class ProductResponse(CamelModel):
    id: str
    name: str
    reference: str
    description: str
    price: float
    stock: int
    category: str
    fabric: str | None = None
    colors: list[str] = []
    sizes: list[str] = []
    sold: int = 0
    promotion: bool = False
    promo_price: float | None = None
    featured: bool = False
    image_urls: list[str] = []
    rating: float = 0.0
    review_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> ProductResponse:
        return cls(
            id=str(product.id),
            name=product.name,
            reference=product.reference,
            description=product.description,
            price=product.price,
            stock=product.stock,
            category=product.category,
            fabric=product.fabric,
            colors=product.color_list(),
            sizes=product.size_list(),
            sold=product.sold or 0,
            promotion=bool(product.promotion),
            promo_price=product.promo_price,
            featured=bool(product.featured),
            image_urls=product.image_url_list(),
            rating=product.rating or 0.0,
            review_count=product.review_count or 0,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductResponseEnvelope(CamelModel):
    success: bool = True
    data: ProductResponse


class ProductListResponse(CamelModel):
    success: bool = True
    data: list[ProductResponse]
    pagination: Pagination


class CategoryListResponse(CamelModel):
    success: bool = True
    data: list[str]


# --- Collection Schemas ---


class CreateCollectionRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Mariage 2026",
                    "description": "Tenues de cérémonie pour la saison des mariages.",
                    "status": "published",
                    "tags": ["mariage", "cérémonie"],
                    "isFeatured": True,
                    "sortOrder": 1,
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    description: str | None = Field(None, max_length=500)
    images: list[str] = []
    status: str | None = Field(None, max_length=20)
    tags: list[str] = []
    is_featured: bool = False
    seo_title: str | None = Field(None, max_length=60)
    seo_description: str | None = Field(None, max_length=160)
    sort_order: int = Field(0, ge=0)
    metadata: dict = {}


class UpdateCollectionRequest(CamelModel):
    name: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=500)
    status: str | None = Field(None, max_length=20)
    tags: list[str] | None = None
    is_featured: bool | None = None
    seo_title: str | None = Field(None, max_length=60)
    seo_description: str | None = Field(None, max_length=160)
    sort_order: int | None = Field(None, ge=0)
    metadata: dict | None = None
    new_images: list[str] | None = None
    images_to_remove: list[str] | None = None


class CollectionResponse(CamelModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    images: list[str] = []
    is_featured: bool = False
    status: str
    tags: list[str] = []
    seo_title: str | None = None
    seo_description: str | None = None
    sort_order: int = 0
    metadata: dict = {}
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_collection(cls, collection) -> CollectionResponse:
        return cls(
            id=str(collection.id),
            name=collection.name,
            slug=collection.slug,
            description=collection.description,
            images=collection.image_list(),
            is_featured=bool(collection.is_featured),
            status=collection.status,
            tags=collection.tag_list(),
            seo_title=collection.seo_title,
            seo_description=collection.seo_description,
            sort_order=collection.sort_order or 0,
            metadata=collection.metadata_dict(),
            created_at=collection.created_at,
            updated_at=collection.updated_at,
        )


class CollectionResponseEnvelope(CamelModel):
    success: bool = True
    data: CollectionResponse


class CollectionListResponse(CamelModel):
    success: bool = True
    data: list[CollectionResponse]
    pagination: Pagination


# --- Review Schemas ---


class PostReviewRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "productId": "a4c1f0e2-7a1b-4f7e-9a55-1c2d3e4f5a6b",
                    "rating": 5,
                    "comment": "Broderie magnifique, taille parfaite.",
                    "images": [],
                }
            ]
        }
    }

    product_id: str | None = None
    rating: int | None = None
    comment: str | None = None
    images: list[str] = []


class ReviewResponse(CamelModel):
    id: str
    product_id: str
    user_name: str
    rating: int
    comment: str
    images: list[str] = []
    created_at: datetime | None = None


class ProductReviewsResponse(CamelModel):
    reviews: list[ReviewResponse]
    rating: float
    review_count: int
