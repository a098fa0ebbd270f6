"""Pydantic request/response schemas for the catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from storefront.api.schemas import CamelModel

# --- Product ---


class CreateProductRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Wireless Headphones",
                    "description": "Over-ear, noise cancelling, 30h battery.",
                    "price": 129.99,
                    "subcategory": "c0a8012e-7f4b-4d1e-9f7e-1b2c3d4e5f60",
                    "images": ["https://cdn.example.com/headphones.jpg"],
                    "stock": 25,
                    "productType": "featured",
                    "featured": True,
                    "discount": 10,
                }
            ]
        }
    }

    name: str = Field(..., max_length=200)
    description: str
    price: float = Field(..., ge=0)
    subcategory: str
    images: list[str] = Field(default_factory=list)
    stock: int = Field(0, ge=0)
    product_type: str | None = None
    featured: bool = False
    best_seller: bool = False
    special_offer: bool = False
    discount: float = Field(0.0, ge=0, le=100)


class UpdateProductRequest(CamelModel):
    name: str | None = Field(None, max_length=200)
    description: str | None = None
    price: float | None = Field(None, ge=0)
    subcategory: str | None = None
    images: list[str] | None = None
    stock: int | None = Field(None, ge=0)
    product_type: str | None = None
    featured: bool | None = None
    best_seller: bool | None = None
    special_offer: bool | None = None
    discount: float | None = Field(None, ge=0, le=100)
    is_active: bool | None = None


class SetStockRequest(CamelModel):
    model_config = {"json_schema_extra": {"examples": [{"stock": 40}]}}

    stock: int | None = None


class CategoryRef(CamelModel):
    id: str
    name: str


class ProductData(CamelModel):
    id: str
    name: str
    description: str
    price: float
    price_after_discount: float
    discount: float
    subcategory: CategoryRef | None = None
    subcategory_id: str
    images: list[str]
    stock: int
    is_active: bool
    product_type: str
    featured: bool
    best_seller: bool
    special_offer: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product, category_names: dict[str, str] | None = None) -> ProductData:
        names = category_names or {}
        subcategory_id = str(product.subcategory_id)
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description,
            price=product.price,
            price_after_discount=product.price_after_discount,
            discount=product.discount or 0.0,
            subcategory=CategoryRef(id=subcategory_id, name=names[subcategory_id])
            if subcategory_id in names
            else None,
            subcategory_id=subcategory_id,
            images=product.image_urls,
            stock=product.stock,
            is_active=product.is_active,
            product_type=product.product_type,
            featured=product.featured,
            best_seller=product.best_seller,
            special_offer=product.special_offer,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


# --- Category ---


class CreateCategoryRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Audio",
                    "description": "Headphones, speakers and accessories",
                    "image": "https://cdn.example.com/audio.jpg",
                    "parent": "6f1d2c3b-0a9e-4d8c-b7a6-5e4f3d2c1b0a",
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    description: str | None = None
    image: str | None = None
    parent: str | None = None


class UpdateCategoryRequest(CamelModel):
    name: str | None = Field(None, max_length=100)
    description: str | None = None
    image: str | None = None
    is_active: bool | None = None
    parent: str | None = None


class SubcategoryData(CamelModel):
    id: str
    name: str
    image: str = ""
    is_active: bool
    parent: str | None = None


class CategoryData(CamelModel):
    id: str
    name: str
    description: str | None = None
    image: str = ""
    parent: str | None = None
    ancestors: list[str] = Field(default_factory=list)
    is_active: bool
    subcategories: list[SubcategoryData] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_category(cls, category, children=()) -> CategoryData:
        return cls(
            id=str(category.id),
            name=category.name,
            description=category.description,
            image=category.image or "",
            parent=str(category.parent_id) if category.parent_id else None,
            ancestors=category.ancestor_ids(),
            is_active=category.is_active,
            subcategories=[
                SubcategoryData(
                    id=str(child.id),
                    name=child.name,
                    image=child.image or "",
                    is_active=child.is_active,
                    parent=str(child.parent_id) if child.parent_id else None,
                )
                for child in children
            ],
            created_at=category.created_at,
            updated_at=category.updated_at,
        )
