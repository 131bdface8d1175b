from sqlalchemy import Column, String, Text, Boolean, DateTime, Numeric, JSON
from sqlalchemy.sql import func
from bakery.db.session import Base
import uuid


class Product(Base):
    __tablename__ = "products"

    id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    slug = Column(String(256), unique=True, index=True, nullable=False)
    name = Column(String(256), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    category = Column(String(256), nullable=True)  # display name of the category
    category_slug = Column(String(256), index=True, nullable=True)  # reference to Category.slug
    images = Column(JSON, nullable=False, default=list)  # public URLs
    featured = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
