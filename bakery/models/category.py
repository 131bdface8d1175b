from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from bakery.db.session import Base
import uuid


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    name = Column(String(256), nullable=False)
    slug = Column(String(256), unique=True, index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
