from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SiteConfigUpdate(BaseModel):
    """Partial update; only the fields sent are merged."""

    home_banner_url: Optional[str] = None
    about_image_url: Optional[str] = None
    about_story: Optional[str] = None
    social_instagram: Optional[str] = None
    social_facebook: Optional[str] = None
    social_whatsapp: Optional[str] = None


class SiteConfigOut(BaseModel):
    home_banner_url: Optional[str] = None
    about_image_url: Optional[str] = None
    about_story: Optional[str] = None
    social_instagram: Optional[str] = None
    social_facebook: Optional[str] = None
    social_whatsapp: Optional[str] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
