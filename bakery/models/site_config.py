from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from bakery.db.session import Base

SITE_CONFIG_ID = "main"


class SiteConfig(Base):
    """Singleton row holding the editable site content."""

    __tablename__ = "site_config"

    id = Column(String(32), primary_key=True, default=SITE_CONFIG_ID)
    home_banner_url = Column(String(1024), nullable=True)
    about_image_url = Column(String(1024), nullable=True)
    about_story = Column(Text, nullable=True)
    social_instagram = Column(String(512), nullable=True)
    social_facebook = Column(String(512), nullable=True)
    social_whatsapp = Column(String(64), nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
