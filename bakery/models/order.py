from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Numeric, JSON
from bakery.db.session import Base
import uuid


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    customer_phone = Column(String(64), nullable=False, index=True)
    items = Column(JSON, nullable=False)  # [{product_id, name, quantity, price}]
    subtotal = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    created_at = Column(
        DateTime(timezone=True), nullable=False, index=True,
        default=lambda: datetime.now(timezone.utc),
    )
