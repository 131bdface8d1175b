"""Change request schemas for the approval workflow."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from bakery.models.change_request import ChangeRequestStatus, ChangeType


class ChangeRequestCreate(BaseModel):
    """
    Proposed change. Fields are optional here so that missing values are
    reported by the service with a 400 rather than a schema error.
    """

    type: Optional[str] = Field(
        None,
        description="product_create, product_update, category_create, category_update or site_config_update",
    )
    target_id: Optional[str] = Field(None, description="Required for product_update and category_update")
    data: Optional[Dict[str, Any]] = Field(None, description="Proposed field values")
    change_summary: Optional[str] = None


class ChangeRequestDecision(BaseModel):
    status: Optional[str] = Field(None, description="New status: approved or rejected")


class ChangeRequestOut(BaseModel):
    id: str
    type: ChangeType
    target_id: Optional[str] = None
    data: Dict[str, Any]
    submitted_by: str
    submitted_at: datetime
    status: ChangeRequestStatus
    change_summary: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DecisionOut(BaseModel):
    message: str
    id: str
    status: ChangeRequestStatus
