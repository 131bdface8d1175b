from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bakery.core.security import require_permission
from bakery.db.session import get_db
from bakery.models.user import User
from bakery.schemas.site_config import SiteConfigOut, SiteConfigUpdate
from bakery.services import permission_service as perm
from bakery.services.site_config_service import SiteConfigService

router = APIRouter()


@router.get("", response_model=SiteConfigOut)
def get_site_config(
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(require_permission(perm.READ, perm.SITE_CONFIG)),
):
    """Current site content; every field is null until first saved."""
    config = SiteConfigService.get_config(db)
    if config is None:
        return SiteConfigOut()
    return config


@router.put("", response_model=SiteConfigOut)
def update_site_config(
    payload: SiteConfigUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(perm.UPDATE, perm.SITE_CONFIG)),
):
    return SiteConfigService.update_config(db, payload.model_dump(exclude_unset=True))
