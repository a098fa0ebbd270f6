"""Tests for the Category aggregate and its ancestor bookkeeping."""

import pytest
from protean.exceptions import ValidationError

from storefront.catalogue.category.category import Category


class TestCategoryTree:
    def test_root_category_has_no_ancestors(self):
        category = Category.create(name=" Electronics ")
        assert category.name == "Electronics"
        assert category.parent_id is None
        assert category.ancestor_ids() == []

    def test_child_records_parent_and_ancestors(self):
        root = Category.create(name="Electronics")
        child = Category.create(name="Audio", parent=root)
        grandchild = Category.create(name="Headphones", parent=child)

        assert child.parent_id == str(root.id)
        assert grandchild.ancestor_ids() == [str(root.id), str(child.id)]

    def test_category_cannot_be_its_own_parent(self):
        category = Category.create(name="Electronics")
        with pytest.raises(ValidationError) as exc:
            category.attach_to(category)
        assert exc.value.messages["parent"] == ["Category cannot be its own parent"]

    def test_descendant_cannot_become_parent(self):
        root = Category.create(name="Electronics")
        child = Category.create(name="Audio", parent=root)

        with pytest.raises(ValidationError) as exc:
            root.attach_to(child)
        assert "circular" in exc.value.messages["parent"][0]

    def test_detaching_clears_ancestors(self):
        root = Category.create(name="Electronics")
        child = Category.create(name="Audio", parent=root)
        child.attach_to(None)

        assert child.parent_id is None
        assert child.ancestor_ids() == []


class TestCategoryDetails:
    def test_update_details_changes_only_given_values(self):
        category = Category.create(name="Books", description="Paper")
        category.update_details(description="Paper and ebooks", is_active=False)

        assert category.name == "Books"
        assert category.description == "Paper and ebooks"
        assert category.is_active is False
