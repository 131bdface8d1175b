"""
Authentication Service Module.
Handles back-office account registration, sign-in, password re-verification
and the bootstrap of the admin / social media roles.
"""
import logging
from typing import Optional, Dict, Any, List

from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from bakery.core.exceptions import ConflictError, PermissionDeniedError, ValidationError
from bakery.core.security import create_access_token
from bakery.models.user import User, UserRole
from bakery.repositories.user_repository import UserRepository
from bakery.utils.hash import check_password_policy, hash_password, verify_password
from bakery.utils.validation import validate_email_format

logger = logging.getLogger(__name__)


class AuthService:
    """Service for managing authentication and user operations."""

    @staticmethod
    def register_user(db: Session, full_name: str, email: str, password: str) -> User:
        """
        Register a new account. New accounts carry no role, so they have no
        back-office access until an admin role is assigned.
        """
        if not full_name or not full_name.strip():
            raise ValidationError("Full name is required")
        email = (email or "").strip().lower()
        if not validate_email_format(email):
            raise ValidationError("Invalid email address")
        check_password_policy(password)

        repo = UserRepository(db)
        if repo.get_by_email(email):
            raise ConflictError("Email already registered")

        user = repo.create(
            User(
                full_name=full_name.strip(),
                email=email,
                password_hash=hash_password(password),
                role=None,
            )
        )
        db.commit()
        db.refresh(user)
        logger.info("Registered user id=%s", user.id)
        return user

    @staticmethod
    def login(db: Session, email: str, password: str) -> Dict[str, Any]:
        """Verify credentials and issue a bearer token."""
        user = UserRepository(db).get_by_email(email)
        if not user or not user.is_active or not verify_password(password, user.password_hash):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

        token = create_access_token({"sub": str(user.id), "role": user.role})
        return {
            "access_token": token,
            "token_type": "bearer",
            "role": user.role.value if user.role else None,
        }

    @staticmethod
    def change_password(db: Session, user: User, current_password: str, new_password: str) -> None:
        """Re-verify the current password before replacing it."""
        if not verify_password(current_password, user.password_hash):
            raise PermissionDeniedError("Current password is incorrect")
        check_password_policy(new_password)
        if current_password == new_password:
            raise ValidationError("New password must differ from the current password")

        user.password_hash = hash_password(new_password)
        db.commit()
        logger.info("Password changed for user id=%s", user.id)

    @staticmethod
    def assign_role(db: Session, email: Optional[str], role: UserRole) -> str:
        """
        Give an existing account a back-office role.

        Returns:
            Human-readable outcome for the setup report
        """
        if not email:
            return f"No account configured for role '{role.value}'."

        user = UserRepository(db).get_by_email(email)
        if user is None:
            return f"ERROR: user {email} not found. Register the account first."

        if user.role == role:
            return f"Role '{role.value}' for {email} verified."

        user.role = role
        db.commit()
        logger.info("Assigned role %s to user id=%s", role.value, user.id)
        return f"Role '{role.value}' assigned to {email}."

    @staticmethod
    def setup_roles(
        db: Session, admin_email: Optional[str], social_media_email: Optional[str]
    ) -> List[Dict[str, Optional[str]]]:
        """Assign the admin and social media roles to the configured accounts."""
        return [
            {"user": admin_email, "status": AuthService.assign_role(db, admin_email, UserRole.admin)},
            {
                "user": social_media_email,
                "status": AuthService.assign_role(db, social_media_email, UserRole.social_media),
            },
        ]
