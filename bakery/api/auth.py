import secrets
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from bakery.core.config import settings
from bakery.core.rate_limit import limiter
from bakery.core.security import get_current_user
from bakery.db.session import get_db
from bakery.models.user import User
from bakery.schemas.token import Token
from bakery.schemas.user import PasswordChange, RoleSetupResult, UserCreate, UserOut
from bakery.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
@limiter.limit("3/hour")
def register_user(request: Request, data: UserCreate, db: Session = Depends(get_db)):
    return AuthService.register_user(db, data.full_name, data.email, data.password)


@router.post("/token", response_model=Token)
@limiter.limit("5/minute")
def login(request: Request, form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    return AuthService.login(db, form_data.username, form_data.password)


@router.get("/me", response_model=UserOut)
@limiter.limit("30/minute")
def get_me(request: Request, current_user: User = Depends(get_current_user)):
    return current_user


@router.post("/change-password")
@limiter.limit("5/minute")
def change_password(
    request: Request,
    payload: PasswordChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    AuthService.change_password(db, current_user, payload.current_password, payload.new_password)
    return {"message": "Password updated successfully"}


@router.post("/setup-roles", response_model=List[RoleSetupResult])
@limiter.limit("5/minute")
def setup_roles(
    request: Request,
    x_setup_token: Optional[str] = Header(None),
    db: Session = Depends(get_db),
):
    """
    Assign the admin and social media roles to the configured accounts.
    Requires the X-Setup-Token header to match the SETUP_TOKEN setting.
    """
    if not settings.SETUP_TOKEN:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Role setup is disabled")
    if not x_setup_token or not secrets.compare_digest(x_setup_token, settings.SETUP_TOKEN):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid setup token")
    return AuthService.setup_roles(db, settings.ADMIN_EMAIL, settings.SOCIAL_MEDIA_EMAIL)
