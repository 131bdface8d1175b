"""Repository for the singleton site configuration row."""

from typing import Optional
from sqlalchemy.orm import Session

from bakery.repositories.base_repository import BaseRepository
from bakery.models.site_config import SiteConfig, SITE_CONFIG_ID


class SiteConfigRepository(BaseRepository[SiteConfig]):
    def __init__(self, db: Session):
        super().__init__(SiteConfig, db)

    def get_main(self) -> Optional[SiteConfig]:
        return self.get_by_id(SITE_CONFIG_ID)

    def get_or_create_main(self) -> SiteConfig:
        config = self.get_main()
        if config is None:
            config = self.create(SiteConfig(id=SITE_CONFIG_ID))
        return config
