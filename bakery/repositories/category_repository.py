"""Category repository."""

from typing import Optional, List
from sqlalchemy import asc
from sqlalchemy.orm import Session

from bakery.repositories.base_repository import BaseRepository
from bakery.models.category import Category


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category model operations."""

    def __init__(self, db: Session):
        super().__init__(Category, db)

    def get_by_slug(self, slug: str) -> Optional[Category]:
        return self.db.query(Category).filter(Category.slug == slug).first()

    def list_by_name(self) -> List[Category]:
        """Get all categories ordered by name (A-Z)."""
        return self.db.query(Category).order_by(asc(Category.name)).all()

    def slug_taken(self, slug: str, exclude_id: Optional[str] = None) -> bool:
        query = self.db.query(Category.id).filter(Category.slug == slug)
        if exclude_id:
            query = query.filter(Category.id != exclude_id)
        return query.first() is not None
