"""Product schemas for request/response validation."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class ProductOut(BaseModel):
    id: str
    slug: str
    name: str
    description: Optional[str] = None
    price: float
    category: Optional[str] = None
    category_slug: Optional[str] = None
    images: List[str] = []
    featured: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ImageUploadOut(BaseModel):
    """Public URLs of freshly stored images, for use in a product change request."""

    urls: List[str]
