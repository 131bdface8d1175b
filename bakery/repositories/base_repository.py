"""Base repository class with the persistence operations every store shares."""

from typing import Generic, TypeVar, Type, Optional, Any
from sqlalchemy.orm import Session

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base repository over one mapped model.

    Writes are flushed, never committed: services decide when a unit of work
    ends, so several repository calls can share one transaction.
    """

    def __init__(self, model: Type[T], db: Session):
        self.model = model
        self.db = db

    def get_by_id(self, id: Any) -> Optional[T]:
        """
        Get entity by primary key.

        Returns:
            Entity or None if not found
        """
        return self.db.query(self.model).filter(self.model.id == id).first()

    def create(self, obj: T) -> T:
        """Add a new entity and load its server-side defaults."""
        self.db.add(obj)
        self.db.flush()
        self.db.refresh(obj)
        return obj

    def update(self, obj: T) -> T:
        """Flush pending attribute changes on an entity."""
        self.db.flush()
        self.db.refresh(obj)
        return obj

    def delete(self, obj: T) -> None:
        self.db.delete(obj)
        self.db.flush()
