"""FastAPI endpoints for products and categories."""

import json

from fastapi import APIRouter, Depends, Query
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.api.schemas import ApiResponse, MessageResponse, PaginationSchema
from storefront.api.security import require_admin
from storefront.catalogue import queries
from storefront.catalogue.api.schemas import (
    CategoryData,
    CreateCategoryRequest,
    CreateProductRequest,
    ProductData,
    SetStockRequest,
    UpdateCategoryRequest,
    UpdateProductRequest,
)
from storefront.catalogue.category.management import CreateCategory, DeleteCategory, UpdateCategory
from storefront.catalogue.product.management import (
    CreateProduct,
    DeleteProduct,
    SetProductStock,
    UpdateProduct,
    process_stock_command,
)

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])


def _product_page(page) -> ApiResponse[list[ProductData]]:
    names = queries.category_names(product.subcategory_id for product in page.items)
    return ApiResponse[list[ProductData]](
        data=[ProductData.from_product(product, names) for product in page.items],
        pagination=PaginationSchema(**page.pagination()),
    )


def _product_data(product_id: str) -> ProductData:
    product = queries.get_product(product_id)
    return ProductData.from_product(product, queries.category_names([product.subcategory_id]))


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@product_router.get("", response_model=ApiResponse[list[ProductData]], response_model_exclude_none=True)
async def list_products(
    page: int = 1,
    limit: int = 12,
    subcategory: str | None = None,
    search: str | None = None,
    min_price: float | None = Query(None, alias="minPrice"),
    max_price: float | None = Query(None, alias="maxPrice"),
    featured: bool | None = None,
    best_seller: bool | None = Query(None, alias="bestSeller"),
    special_offer: bool | None = Query(None, alias="specialOffer"),
    sort: str | None = None,
):
    """Active products, filtered and paginated."""
    return _product_page(
        queries.list_products(
            page=page,
            limit=limit,
            subcategory_id=subcategory,
            search=search,
            min_price=min_price,
            max_price=max_price,
            featured=featured,
            best_seller=best_seller,
            special_offer=special_offer,
            sort=sort,
        )
    )


@product_router.get(
    "/admin",
    response_model=ApiResponse[list[ProductData]],
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
)
async def list_products_for_admin(
    page: int = 1,
    limit: int = 20,
    subcategory: str | None = None,
    search: str | None = None,
    sort: str | None = None,
):
    """Every product, including inactive ones."""
    return _product_page(
        queries.list_products(
            page=page,
            limit=limit,
            subcategory_id=subcategory,
            search=search,
            sort=sort,
            include_inactive=True,
        )
    )


@product_router.get(
    "/subcategory/{category_id}",
    response_model=ApiResponse[list[ProductData]],
    response_model_exclude_none=True,
)
async def list_products_in_subcategory(category_id: str, page: int = 1, limit: int = 12, sort: str | None = None):
    return _product_page(queries.list_products(page=page, limit=limit, subcategory_id=category_id, sort=sort))


@product_router.get("/{product_id}", response_model=ApiResponse[ProductData], response_model_exclude_none=True)
async def get_product(product_id: str):
    return ApiResponse[ProductData](data=_product_data(product_id))


@product_router.post(
    "",
    status_code=201,
    response_model=ApiResponse[ProductData],
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
)
async def create_product(body: CreateProductRequest):
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        subcategory_id=body.subcategory,
        images=json.dumps(body.images),
        stock=body.stock,
        product_type=body.product_type,
        featured=body.featured,
        best_seller=body.best_seller,
        special_offer=body.special_offer,
        discount=body.discount,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ApiResponse[ProductData](message="Product created successfully", data=_product_data(product_id))


@product_router.put(
    "/{product_id}",
    response_model=ApiResponse[ProductData],
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
)
async def update_product(product_id: str, body: UpdateProductRequest):
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        subcategory_id=body.subcategory,
        images=json.dumps(body.images) if body.images is not None else None,
        stock=body.stock,
        product_type=body.product_type,
        featured=body.featured,
        best_seller=body.best_seller,
        special_offer=body.special_offer,
        discount=body.discount,
        is_active=body.is_active,
    )
    process_stock_command(command)
    return ApiResponse[ProductData](message="Product updated successfully", data=_product_data(product_id))


@product_router.patch(
    "/{product_id}/stock",
    response_model=ApiResponse[ProductData],
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
)
async def set_product_stock(product_id: str, body: SetStockRequest):
    if body.stock is None:
        raise ValidationError({"stock": ["Stock value is required"]})
    process_stock_command(SetProductStock(product_id=product_id, stock=body.stock))
    return ApiResponse[ProductData](message="Stock updated", data=_product_data(product_id))


@product_router.delete("/{product_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
async def delete_product(product_id: str):
    process_stock_command(DeleteProduct(product_id=product_id))
    return MessageResponse(message="Product deleted successfully")


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------
@category_router.get("", response_model=ApiResponse[list[CategoryData]], response_model_exclude_none=True)
async def list_categories():
    """Active top-level categories with their active subcategories."""
    tree = queries.storefront_categories()
    return ApiResponse[list[CategoryData]](
        data=[CategoryData.from_category(category, children) for category, children in tree],
        count=len(tree),
    )


@category_router.get(
    "/admin",
    response_model=ApiResponse[list[CategoryData]],
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
)
async def list_categories_for_admin():
    categories = queries.all_categories()
    return ApiResponse[list[CategoryData]](
        data=[CategoryData.from_category(category, children) for category, children in categories],
        count=len(categories),
    )


@category_router.get("/{category_id}", response_model=ApiResponse[CategoryData], response_model_exclude_none=True)
async def get_category(category_id: str):
    category, children = queries.get_category(category_id)
    return ApiResponse[CategoryData](data=CategoryData.from_category(category, children))


@category_router.post(
    "",
    status_code=201,
    response_model=ApiResponse[CategoryData],
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
)
async def create_category(body: CreateCategoryRequest):
    command = CreateCategory(
        name=body.name,
        description=body.description,
        image=body.image,
        parent_id=body.parent,
    )
    category_id = current_domain.process(command, asynchronous=False)
    category, children = queries.get_category(category_id)
    return ApiResponse[CategoryData](
        message="Category created successfully",
        data=CategoryData.from_category(category, children),
    )


@category_router.put(
    "/{category_id}",
    response_model=ApiResponse[CategoryData],
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
)
async def update_category(category_id: str, body: UpdateCategoryRequest):
    command = UpdateCategory(
        category_id=category_id,
        name=body.name,
        description=body.description,
        image=body.image,
        is_active=body.is_active,
        parent_id=body.parent,
    )
    current_domain.process(command, asynchronous=False)
    category, children = queries.get_category(category_id)
    return ApiResponse[CategoryData](
        message="Category updated successfully",
        data=CategoryData.from_category(category, children),
    )


@category_router.delete("/{category_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
async def delete_category(category_id: str):
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return MessageResponse(message="Category deleted successfully")
