"""Category aggregate root and repository.

Categories form a tree. Each category keeps a materialized list of its
ancestors (root first), recomputed from the parent whenever the parent is
assigned, so "is X below Y" checks never need to walk the tree.
"""

import json
from datetime import datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, String, Text

from storefront.domain import storefront


@storefront.aggregate
class Category:
    """A product grouping. Products hang off leaf categories (subcategories)."""

    name: String(required=True, max_length=100)
    description: Text()
    image: String(max_length=500, default="")
    parent_id: Identifier()
    ancestors: Text(default="[]")  # JSON: list of ancestor ids, root first
    is_active: Boolean(default=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, name, description=None, image=None, parent=None):
        now = datetime.now()
        category = cls(
            name=name.strip(),
            description=description.strip() if description else None,
            image=image or "",
            created_at=now,
            updated_at=now,
        )
        category.attach_to(parent)
        return category

    def ancestor_ids(self) -> list[str]:
        return json.loads(self.ancestors) if self.ancestors else []

    def attach_to(self, parent):
        """Place this category under ``parent`` (or at the top level when None).

        Refuses any parent that would make the category its own ancestor.
        """
        if parent is None:
            self.parent_id = None
            self.ancestors = "[]"
            return

        if str(parent.id) == str(self.id):
            raise ValidationError({"parent": ["Category cannot be its own parent"]})
        if str(self.id) in parent.ancestor_ids():
            raise ValidationError({"parent": ["Invalid parent - would create a circular hierarchy"]})

        self.parent_id = str(parent.id)
        self.ancestors = json.dumps(parent.ancestor_ids() + [str(parent.id)])
        self.updated_at = datetime.now()

    def update_details(self, name=None, description=None, image=None, is_active=None):
        if name:
            self.name = name.strip()
        if description is not None:
            self.description = description.strip()
        if image is not None:
            self.image = image
        if is_active is not None:
            self.is_active = is_active
        self.updated_at = datetime.now()


@storefront.repository(part_of=Category)
class CategoryRepository:
    def find_by_name(self, name: str, exclude_id: str | None = None) -> Category | None:
        """Case-insensitive lookup used to keep category names unique."""
        matches = self._dao.query.filter(name__iexact=name.strip()).all().items
        for category in matches:
            if exclude_id is None or str(category.id) != str(exclude_id):
                return category
        return None

    def children_of(self, category_id: str, active_only: bool = False) -> list[Category]:
        query = self._dao.query.filter(parent_id=str(category_id))
        if active_only:
            query = query.filter(is_active=True)
        return query.order_by("name").all().items
