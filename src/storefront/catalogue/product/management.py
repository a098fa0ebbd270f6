"""Product management: commands and handlers used by administrators."""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.shared.errors import NotFoundError
from storefront.shared.locks import hold_locks

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=200)
    description: Text(required=True)
    price: Float(required=True, min_value=0.0)
    subcategory_id: Identifier(required=True)
    images: Text()  # JSON: list of image URLs
    stock: Integer(default=0, min_value=0)
    product_type: String(max_length=20)
    featured: Boolean(default=False)
    best_seller: Boolean(default=False)
    special_offer: Boolean(default=False)
    discount: Float(default=0.0, min_value=0.0, max_value=100.0)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=200)
    description: Text()
    price: Float(min_value=0.0)
    subcategory_id: Identifier()
    images: Text()  # JSON: list of image URLs
    stock: Integer(min_value=0)
    product_type: String(max_length=20)
    featured: Boolean()
    best_seller: Boolean()
    special_offer: Boolean()
    discount: Float(min_value=0.0, max_value=100.0)
    is_active: Boolean()


@storefront.command(part_of="Product")
class SetProductStock:
    product_id: Identifier(required=True)
    stock: Integer(required=True, min_value=0)


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


def _ensure_subcategory(subcategory_id):
    try:
        current_domain.repository_for(Category).get(subcategory_id)
    except ObjectNotFoundError:
        raise NotFoundError("Subcategory not found", status_code=400)


def process_stock_command(command):
    """Run a command that rewrites a product's stock while holding its lock."""
    with hold_locks([command.product_id]):
        return current_domain.process(command, asynchronous=False)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        _ensure_subcategory(command.subcategory_id)

        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            subcategory_id=command.subcategory_id,
            images=json.loads(command.images) if command.images else [],
            stock=command.stock,
            product_type=command.product_type,
            featured=command.featured,
            best_seller=command.best_seller,
            special_offer=command.special_offer,
            discount=command.discount,
        )
        current_domain.repository_for(Product).add(product)

        logger.info("Product created", product_id=str(product.id), stock=product.stock)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        if command.subcategory_id:
            _ensure_subcategory(command.subcategory_id)

        product.update(
            images=json.loads(command.images) if command.images is not None else None,
            name=command.name,
            description=command.description,
            price=command.price,
            subcategory_id=command.subcategory_id,
            product_type=command.product_type,
            featured=command.featured,
            best_seller=command.best_seller,
            special_offer=command.special_offer,
            discount=command.discount,
            is_active=command.is_active,
        )
        if command.stock is not None and command.stock != product.stock:
            product.set_stock(command.stock)
        repo.add(product)

    @handle(SetProductStock)
    def set_product_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.set_stock(command.stock)
        repo.add(product)

        logger.info("Product stock set", product_id=str(product.id), stock=product.stock)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)

        logger.info("Product deleted", product_id=str(product.id))
