"""Order repository."""

from typing import List
from sqlalchemy import desc
from sqlalchemy.orm import Session

from bakery.repositories.base_repository import BaseRepository
from bakery.models.order import Order


class OrderRepository(BaseRepository[Order]):
    def __init__(self, db: Session):
        super().__init__(Order, db)

    def list_newest_first(self) -> List[Order]:
        return self.db.query(Order).order_by(desc(Order.created_at)).all()
