from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class CategoryCreate(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None


class CategoryOut(BaseModel):
    id: str
    name: str
    slug: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
