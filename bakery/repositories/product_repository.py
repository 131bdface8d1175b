"""Product repository for catalogue queries."""

from typing import Optional, List
from sqlalchemy import desc
from sqlalchemy.orm import Session

from bakery.repositories.base_repository import BaseRepository
from bakery.models.product import Product


class ProductRepository(BaseRepository[Product]):
    """Repository for Product model operations."""

    def __init__(self, db: Session):
        super().__init__(Product, db)

    def get_by_slug(self, slug: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.slug == slug).first()

    def list_products(
        self,
        slug: Optional[str] = None,
        category_slug: Optional[str] = None,
        featured: Optional[bool] = None,
    ) -> List[Product]:
        """
        List products filtered by a single equality predicate.

        The slug filter takes precedence over the category filter, which takes
        precedence over the featured flag.

        Returns:
            Products ordered by creation time (newest first)
        """
        query = self.db.query(Product)
        if slug:
            query = query.filter(Product.slug == slug)
        elif category_slug:
            query = query.filter(Product.category_slug == category_slug)
        elif featured is not None:
            query = query.filter(Product.featured == featured)
        return query.order_by(desc(Product.created_at)).all()

    def slug_taken(self, slug: str, exclude_id: Optional[str] = None) -> bool:
        query = self.db.query(Product.id).filter(Product.slug == slug)
        if exclude_id:
            query = query.filter(Product.id != exclude_id)
        return query.first() is not None

    def any_in_category(self, category_slug: str) -> bool:
        """Check whether at least one product references the category slug."""
        return (
            self.db.query(Product.id)
            .filter(Product.category_slug == category_slug)
            .limit(1)
            .first()
            is not None
        )

    def rename_category(self, old_slug: str, new_slug: str, new_name: str) -> int:
        """
        Repoint products from one category slug to another.

        Returns:
            Number of products updated
        """
        updated = (
            self.db.query(Product)
            .filter(Product.category_slug == old_slug)
            .update(
                {Product.category_slug: new_slug, Product.category: new_name},
                synchronize_session="fetch",
            )
        )
        self.db.flush()
        return updated
