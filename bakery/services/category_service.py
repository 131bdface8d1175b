"""
Category Service Module.
Handles category CRUD and the referential-integrity guard on deletion.
"""
import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from bakery.core.exceptions import ConflictError, NotFoundError, ResourceInUseError, ValidationError
from bakery.models.category import Category
from bakery.repositories.category_repository import CategoryRepository
from bakery.repositories.product_repository import ProductRepository
from bakery.utils.validation import coerce_text, slugify

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "slug")


class CategoryService:
    """Service for managing product categories."""

    @staticmethod
    def list_categories(db: Session) -> List[Category]:
        return CategoryRepository(db).list_by_name()

    @staticmethod
    def get_category(db: Session, category_id: str) -> Category:
        category = CategoryRepository(db).get_by_id(category_id)
        if not category:
            raise NotFoundError("Category not found")
        return category

    @staticmethod
    def create_category(db: Session, data: Dict[str, Any], commit: bool = True) -> Category:
        """Create a category; the slug defaults to one derived from the name."""
        name = coerce_text(data.get("name"), "Category name")
        if not name:
            raise ValidationError("Category name is required")

        slug = slugify(coerce_text(data.get("slug"), "Category slug") or name)
        if not slug:
            raise ValidationError("Category slug could not be derived from its name")

        repo = CategoryRepository(db)
        if repo.slug_taken(slug):
            raise ConflictError(f"A category with slug '{slug}' already exists")

        category = repo.create(Category(name=name, slug=slug))
        if commit:
            db.commit()
            db.refresh(category)
        logger.info("Created category id=%s slug=%s", category.id, category.slug)
        return category

    @staticmethod
    def update_category(
        db: Session, category_id: str, data: Dict[str, Any], commit: bool = True
    ) -> Category:
        """
        Merge name and/or slug into a category.

        Products filed under the category follow a rename so they keep
        pointing at it.
        """
        repo = CategoryRepository(db)
        category = repo.get_by_id(category_id)
        if not category:
            raise NotFoundError("Category not found")

        fields = {key: value for key, value in (data or {}).items() if key in EDITABLE_FIELDS}
        new_name = category.name
        new_slug = category.slug

        if "name" in fields:
            new_name = coerce_text(fields["name"], "Category name")
            if not new_name:
                raise ValidationError("Category name cannot be empty")
        if "slug" in fields:
            new_slug = slugify(coerce_text(fields["slug"], "Category slug") or new_name)
            if not new_slug:
                raise ValidationError("Category slug cannot be empty")
            if repo.slug_taken(new_slug, exclude_id=category.id):
                raise ConflictError(f"A category with slug '{new_slug}' already exists")

        if new_name != category.name or new_slug != category.slug:
            ProductRepository(db).rename_category(category.slug, new_slug, new_name)

        category.name = new_name
        category.slug = new_slug
        repo.update(category)

        if commit:
            db.commit()
            db.refresh(category)
        logger.info("Updated category id=%s", category.id)
        return category

    @staticmethod
    def delete_category(db: Session, category_id: str) -> None:
        """
        Delete a category that no product references.

        Raises:
            ResourceInUseError: If at least one product is filed under it
        """
        repo = CategoryRepository(db)
        category = repo.get_by_id(category_id)
        if not category:
            raise NotFoundError("Category not found")

        if ProductRepository(db).any_in_category(category.slug):
            raise ResourceInUseError(
                "Category in use: it is associated with one or more products"
            )

        repo.delete(category)
        db.commit()
        logger.info("Deleted category id=%s", category_id)
