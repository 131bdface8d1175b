"""
Site Configuration Service Module.
The site configuration is a single row that is merged into, never replaced.
"""
import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from bakery.core.exceptions import ValidationError
from bakery.models.site_config import SiteConfig
from bakery.repositories.site_config_repository import SiteConfigRepository
from bakery.utils.validation import coerce_text

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "home_banner_url",
    "about_image_url",
    "about_story",
    "social_instagram",
    "social_facebook",
    "social_whatsapp",
)


class SiteConfigService:
    @staticmethod
    def get_config(db: Session) -> Optional[SiteConfig]:
        """The configuration row, or None if it was never saved."""
        return SiteConfigRepository(db).get_main()

    @staticmethod
    def as_dict(config: Optional[SiteConfig]) -> Dict[str, Any]:
        if config is None:
            return {}
        return {field: getattr(config, field) for field in EDITABLE_FIELDS}

    @staticmethod
    def update_config(db: Session, data: Dict[str, Any], commit: bool = True) -> SiteConfig:
        """Merge the given fields into the configuration, creating it if absent."""
        fields = {key: value for key, value in (data or {}).items() if key in EDITABLE_FIELDS}
        if not fields:
            raise ValidationError(
                f"No site configuration fields provided. Allowed: {', '.join(EDITABLE_FIELDS)}"
            )

        for key, value in fields.items():
            if value is not None:
                fields[key] = coerce_text(value, key)

        repo = SiteConfigRepository(db)
        config = repo.get_or_create_main()
        for key, value in fields.items():
            setattr(config, key, value)
        repo.update(config)

        if commit:
            db.commit()
            db.refresh(config)
        logger.info("Updated site configuration fields=%s", sorted(fields))
        return config
