from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime, Enum, JSON
from bakery.db.session import Base
import enum
import uuid


class ChangeType(enum.Enum):
    product_create = "product_create"
    product_update = "product_update"
    category_create = "category_create"
    category_update = "category_update"
    site_config_update = "site_config_update"


# Change types that modify an existing row and therefore need a target_id
TARGETED_CHANGE_TYPES = {ChangeType.product_update, ChangeType.category_update}


class ChangeRequestStatus(enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class ChangeRequest(Base):
    __tablename__ = "change_requests"

    id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    type = Column(Enum(ChangeType), nullable=False)
    target_id = Column(String(32), nullable=True)  # Null for *_create and site_config_update
    data = Column(JSON, nullable=False)  # Copy of the proposed fields
    submitted_by = Column(String(256), nullable=False)
    submitted_at = Column(
        DateTime(timezone=True), nullable=False, index=True,
        default=lambda: datetime.now(timezone.utc),
    )
    status = Column(Enum(ChangeRequestStatus), nullable=False, default=ChangeRequestStatus.pending, index=True)
    change_summary = Column(Text, nullable=True)
    reviewed_by = Column(String(256), nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
