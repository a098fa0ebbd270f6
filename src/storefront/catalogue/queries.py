"""Read side of the catalogue: product listings and the category tree."""

from protean.utils.globals import current_domain
from protean.utils.query import Q

from storefront.catalogue.category.category import Category
from storefront.catalogue.product.product import Product
from storefront.shared.pagination import Page, fetch_page, resolve_sort

PRODUCT_SORT_FIELDS = {
    "createdAt": "created_at",
    "created_at": "created_at",
    "updatedAt": "updated_at",
    "name": "name",
    "price": "price",
    "priceAfterDiscount": "price_after_discount",
    "stock": "stock",
}


def list_products(
    page: int = 1,
    limit: int = 12,
    subcategory_id: str | None = None,
    search: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    featured: bool | None = None,
    best_seller: bool | None = None,
    special_offer: bool | None = None,
    sort: str | None = None,
    include_inactive: bool = False,
) -> Page:
    """Filtered, sorted, paginated product listing.

    The public storefront only sees active products; administrators pass
    ``include_inactive=True``.
    """
    ordering = resolve_sort(sort, PRODUCT_SORT_FIELDS)
    query = current_domain.repository_for(Product)._dao.query

    if not include_inactive:
        query = query.filter(is_active=True)
    if subcategory_id:
        query = query.filter(subcategory_id=str(subcategory_id))
    if search and search.strip():
        term = search.strip()
        query = query.filter(Q(name__icontains=term) | Q(description__icontains=term))
    if min_price is not None:
        query = query.filter(price__gte=min_price)
    if max_price is not None:
        query = query.filter(price__lte=max_price)
    if featured is not None:
        query = query.filter(featured=featured)
    if best_seller is not None:
        query = query.filter(best_seller=best_seller)
    if special_offer is not None:
        query = query.filter(special_offer=special_offer)

    return fetch_page(query.order_by(ordering), page, limit)


def get_product(product_id: str) -> Product:
    return current_domain.repository_for(Product).get(product_id)


def category_names(category_ids) -> dict[str, str]:
    """Map category ids to names, for showing a product's subcategory."""
    ids = list({str(category_id) for category_id in category_ids if category_id})
    if not ids:
        return {}
    categories = current_domain.repository_for(Category)._dao.query.filter(id__in=ids).all().items
    return {str(category.id): category.name for category in categories}


def storefront_categories() -> list[tuple[Category, list[Category]]]:
    """Active top-level categories, each with its active direct subcategories."""
    repo = current_domain.repository_for(Category)
    roots = repo._dao.query.filter(parent_id=None, is_active=True).order_by("name").all().items
    return [(root, repo.children_of(root.id, active_only=True)) for root in roots]


def all_categories() -> list[tuple[Category, list[Category]]]:
    """Every category, newest first, with all of its direct subcategories."""
    repo = current_domain.repository_for(Category)
    categories = repo._dao.query.order_by("-created_at").all().items
    return [(category, repo.children_of(category.id)) for category in categories]


def get_category(category_id: str) -> tuple[Category, list[Category]]:
    repo = current_domain.repository_for(Category)
    category = repo.get(category_id)
    return category, repo.children_of(category.id, active_only=True)
