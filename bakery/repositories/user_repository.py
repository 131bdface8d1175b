"""Back-office account store."""

from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from bakery.repositories.base_repository import BaseRepository
from bakery.models.user import User


class UserRepository(BaseRepository[User]):
    def __init__(self, db: Session):
        super().__init__(User, db)

    def get_by_email(self, email: Optional[str]) -> Optional[User]:
        """Look an account up by email, ignoring case and surrounding blanks."""
        if not email:
            return None
        return self.db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()

    def get_active(self, user_id: int) -> Optional[User]:
        """Account behind a session token, or None if missing or deactivated."""
        return (
            self.db.query(User)
            .filter(User.id == user_id, User.is_active.is_(True))
            .first()
        )
