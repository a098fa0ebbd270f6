"""Category management: commands and handlers."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.domain import storefront
from storefront.shared.errors import InvalidStateError, NotFoundError

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    description: Text()
    image: String(max_length=500)
    parent_id: Identifier()


@storefront.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)
    description: Text()
    image: String(max_length=500)
    is_active: Boolean()
    parent_id: Identifier()


@storefront.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier(required=True)


def _load_parent(repo, parent_id):
    try:
        return repo.get(parent_id)
    except ObjectNotFoundError:
        raise NotFoundError("Parent category not found", status_code=400)


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)
        if repo.find_by_name(command.name):
            raise ValidationError({"name": ["Category already exists"]})

        parent = _load_parent(repo, command.parent_id) if command.parent_id else None
        category = Category.create(
            name=command.name,
            description=command.description,
            image=command.image,
            parent=parent,
        )
        repo.add(category)

        logger.info("Category created", category_id=str(category.id), parent_id=category.parent_id)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        if command.parent_id:
            if str(command.parent_id) == str(category.id):
                raise ValidationError({"parent": ["Category cannot be its own parent"]})
            category.attach_to(_load_parent(repo, command.parent_id))

        if command.name and command.name != category.name:
            if repo.find_by_name(command.name, exclude_id=category.id):
                raise ValidationError({"name": ["Category name already exists"]})

        category.update_details(
            name=command.name,
            description=command.description,
            image=command.image,
            is_active=command.is_active,
        )
        repo.add(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        from storefront.catalogue.product.product import Product

        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        product_count = (
            current_domain.repository_for(Product)._dao.query.filter(subcategory_id=str(category.id)).all().total
        )
        if product_count > 0:
            raise InvalidStateError(
                f"Cannot delete category. It has {product_count} product(s) associated with it."
            )
        if repo.children_of(category.id):
            raise InvalidStateError("Cannot delete category. It has subcategories.")

        repo._dao.delete(category)
        logger.info("Category deleted", category_id=str(category.id))
