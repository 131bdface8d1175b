"""
Permission Service - Centralized Authorization Policy

Every endpoint asks one question, ``can(actor, action, resource)``, instead of
comparing roles inline. The policy table below is the only place where the
capabilities of each role are spelled out.
"""

from typing import Optional, FrozenSet, Tuple

from bakery.core.exceptions import PermissionDeniedError
from bakery.models.user import User, UserRole

# Actions
READ = "read"
CREATE = "create"
UPDATE = "update"
DELETE = "delete"
REVIEW = "review"
EXPORT = "export"

# Resources
PRODUCT = "product"
PRODUCT_IMAGE = "product_image"
CATEGORY = "category"
SITE_CONFIG = "site_config"
CHANGE_REQUEST = "change_request"
ORDER = "order"
DASHBOARD = "dashboard"
REPORT = "report"

Capability = Tuple[str, str]

ANONYMOUS_CAPABILITIES: FrozenSet[Capability] = frozenset(
    {
        (READ, PRODUCT),
        (READ, CATEGORY),
        (READ, SITE_CONFIG),
        (CREATE, ORDER),  # checkout
    }
)

SOCIAL_MEDIA_CAPABILITIES: FrozenSet[Capability] = ANONYMOUS_CAPABILITIES | frozenset(
    {
        (CREATE, CHANGE_REQUEST),
        (READ, CHANGE_REQUEST),
        (CREATE, PRODUCT_IMAGE),
        (READ, ORDER),
        (READ, DASHBOARD),
    }
)


class PermissionService:
    """Single authorization policy for all back-office and storefront operations."""

    @staticmethod
    def effective_role(actor: Optional[User]) -> Optional[UserRole]:
        """Role that applies to the actor; inactive or role-less users act anonymously."""
        if actor is None or not actor.is_active:
            return None
        return actor.role

    @staticmethod
    def can(actor: Optional[User], action: str, resource: str) -> bool:
        """
        Decide whether an actor may perform an action on a resource type.

        Args:
            actor: Authenticated user, or None for anonymous storefront visitors
            action: One of the action constants of this module
            resource: One of the resource constants of this module

        Returns:
            True if allowed
        """
        role = PermissionService.effective_role(actor)
        if role == UserRole.admin:
            return True
        if role == UserRole.social_media:
            return (action, resource) in SOCIAL_MEDIA_CAPABILITIES
        return (action, resource) in ANONYMOUS_CAPABILITIES

    @staticmethod
    def require(actor: Optional[User], action: str, resource: str) -> None:
        """
        Raise unless ``can(actor, action, resource)``.

        Raises:
            PermissionDeniedError: If the policy denies the action
        """
        if not PermissionService.can(actor, action, resource):
            raise PermissionDeniedError(
                f"Access denied. You cannot {action} {resource.replace('_', ' ')}."
            )
