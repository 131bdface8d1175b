"""
Mutation applier for approved change requests.

Dispatches a proposed mutation to the resource manager that owns the target.
Writes are flushed but never committed here: the caller commits them together
with the change request's status transition.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

from sqlalchemy.orm import Session

from bakery.core.exceptions import UnknownChangeTypeError, ValidationError
from bakery.models.change_request import ChangeType
from bakery.services.category_service import CategoryService
from bakery.services.product_service import ProductService
from bakery.services.site_config_service import SiteConfigService

logger = logging.getLogger(__name__)


@dataclass
class MutationOutcome:
    """What an applied mutation touched."""

    resource_id: str
    discarded_images: List[str] = field(default_factory=list)


class MutationApplier:
    def __init__(self, db: Session):
        self.db = db
        self._handlers: Dict[ChangeType, Callable[[Optional[str], Dict[str, Any]], MutationOutcome]] = {
            ChangeType.product_create: self._create_product,
            ChangeType.product_update: self._update_product,
            ChangeType.category_create: self._create_category,
            ChangeType.category_update: self._update_category,
            ChangeType.site_config_update: self._update_site_config,
        }

    def apply(
        self,
        change_type: Union[ChangeType, str],
        target_id: Optional[str],
        data: Dict[str, Any],
    ) -> MutationOutcome:
        """
        Apply one mutation.

        Raises:
            UnknownChangeTypeError: For anything outside the closed change type set
            NotFoundError: If an update target does not exist
            ValidationError: If the data breaks the target resource's rules
        """
        try:
            change_type = ChangeType(change_type)
        except ValueError:
            logger.error("Refusing to apply unknown change type %r", change_type)
            raise UnknownChangeTypeError(f"Unknown change type: {change_type}")

        handler = self._handlers.get(change_type)
        if handler is None:
            logger.error("No handler registered for change type %s", change_type.value)
            raise UnknownChangeTypeError(f"Unknown change type: {change_type.value}")

        outcome = handler(target_id, dict(data or {}))
        logger.info("Applied %s to resource id=%s", change_type.value, outcome.resource_id)
        return outcome

    @staticmethod
    def _require_target(target_id: Optional[str]) -> str:
        if not target_id:
            raise ValidationError("target_id is required for update changes")
        return target_id

    def _create_product(self, target_id, data) -> MutationOutcome:
        product = ProductService.create_product(self.db, data, commit=False)
        return MutationOutcome(resource_id=product.id)

    def _update_product(self, target_id, data) -> MutationOutcome:
        product, discarded = ProductService.update_product(
            self.db, self._require_target(target_id), data, commit=False
        )
        return MutationOutcome(resource_id=product.id, discarded_images=discarded)

    def _create_category(self, target_id, data) -> MutationOutcome:
        category = CategoryService.create_category(self.db, data, commit=False)
        return MutationOutcome(resource_id=category.id)

    def _update_category(self, target_id, data) -> MutationOutcome:
        category = CategoryService.update_category(
            self.db, self._require_target(target_id), data, commit=False
        )
        return MutationOutcome(resource_id=category.id)

    def _update_site_config(self, target_id, data) -> MutationOutcome:
        config = SiteConfigService.update_config(self.db, data, commit=False)
        return MutationOutcome(resource_id=config.id)
