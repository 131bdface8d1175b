"""
Unit tests for core security module.
Tests JWT token creation, verification, and the permission dependency.
"""
import pytest
from datetime import timedelta
from jose import jwt
from fastapi import HTTPException
from sqlalchemy.orm import Session

from bakery.core.config import settings
from bakery.core.exceptions import PermissionDeniedError
from bakery.core.security import create_access_token, require_permission, verify_token
from bakery.models.user import User, UserRole
from bakery.services import permission_service as perm


class TestCreateAccessToken:
    def test_create_token_with_role(self):
        token = create_access_token({"sub": "123", "role": UserRole.social_media})

        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        assert payload["sub"] == "123"
        assert payload["role"] == "social_media"
        assert "exp" in payload

    def test_create_token_without_role(self):
        token = create_access_token({"sub": "123", "role": None}, expires_delta=timedelta(minutes=30))

        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        assert payload["role"] is None


class TestVerifyToken:
    def test_verify_valid_token(self, db: Session, admin_user: User):
        token = create_access_token({"sub": str(admin_user.id)})

        user = verify_token(token, db)
        assert user.id == admin_user.id

    def test_verify_expired_token(self, db: Session, admin_user: User):
        token = create_access_token({"sub": str(admin_user.id)}, expires_delta=timedelta(seconds=-1))

        with pytest.raises(HTTPException) as exc_info:
            verify_token(token, db)
        assert exc_info.value.status_code == 401

    @pytest.mark.parametrize("data", [{"sub": "99999"}, {"email": "x@padaria.com.br"}, {"sub": "abc"}])
    def test_verify_bad_subject(self, db: Session, data):
        with pytest.raises(HTTPException) as exc_info:
            verify_token(create_access_token(data), db)
        assert exc_info.value.status_code == 401

    def test_verify_invalid_token(self, db: Session):
        with pytest.raises(HTTPException) as exc_info:
            verify_token("invalid_token", db)
        assert exc_info.value.status_code == 401


class TestRequirePermission:
    def test_allowed(self, admin_user: User):
        checker = require_permission(perm.REVIEW, perm.CHANGE_REQUEST)
        assert checker(current_user=admin_user).id == admin_user.id

    def test_anonymous_allowed_for_storefront(self):
        checker = require_permission(perm.READ, perm.PRODUCT)
        assert checker(current_user=None) is None

    def test_anonymous_needs_login(self):
        checker = require_permission(perm.READ, perm.ORDER)
        with pytest.raises(HTTPException) as exc_info:
            checker(current_user=None)
        assert exc_info.value.status_code == 401

    def test_denied(self, social_user: User):
        checker = require_permission(perm.REVIEW, perm.CHANGE_REQUEST)
        with pytest.raises(PermissionDeniedError):
            checker(current_user=social_user)
