"""
Change Request Service Module.
Submission and review of content changes proposed by the social media role.

A submitted change never touches its target. Approval claims the request with
a conditional status write and applies the mutation in the same transaction,
so a request is applied at most once and a failed application leaves it
pending for another attempt.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from bakery.core.exceptions import ConflictError, NotFoundError, ValidationError
from bakery.models.change_request import (
    ChangeRequest,
    ChangeRequestStatus,
    ChangeType,
    TARGETED_CHANGE_TYPES,
)
from bakery.repositories.change_request_repository import ChangeRequestRepository
from bakery.services.mutation_applier import MutationApplier
from bakery.services.product_service import ProductService
from bakery.storage import ObjectStorage
from bakery.utils.validation import sanitize_string

logger = logging.getLogger(__name__)

DECISIONS = (ChangeRequestStatus.approved, ChangeRequestStatus.rejected)


class ChangeRequestService:
    """Service for the pending-change approval workflow."""

    @staticmethod
    def submit(
        db: Session,
        *,
        change_type: Optional[str],
        data: Optional[Dict[str, Any]],
        submitted_by: Optional[str],
        change_summary: Optional[str] = None,
        target_id: Optional[str] = None,
    ) -> ChangeRequest:
        """
        Record a proposed change for review.

        The request is always created pending with a server timestamp.

        Raises:
            ValidationError: If type, data or submitter is missing or invalid
        """
        if not change_type:
            raise ValidationError("Change type is required")
        try:
            change_type = ChangeType(change_type)
        except ValueError:
            raise ValidationError(
                f"Invalid change type. Must be one of: {[t.value for t in ChangeType]}"
            )

        if not isinstance(data, dict) or not data:
            raise ValidationError("Change data is required")
        if not submitted_by or not submitted_by.strip():
            raise ValidationError("Submitter is required")

        if change_type in TARGETED_CHANGE_TYPES:
            if not target_id:
                raise ValidationError(f"target_id is required for {change_type.value}")
        else:
            target_id = None

        change = ChangeRequestRepository(db).create(
            ChangeRequest(
                type=change_type,
                target_id=target_id,
                data=dict(data),
                submitted_by=submitted_by.strip(),
                change_summary=sanitize_string(change_summary, max_length=500) or "",
                status=ChangeRequestStatus.pending,
            )
        )
        db.commit()
        db.refresh(change)
        logger.info(
            "Change request id=%s type=%s submitted by %s",
            change.id, change_type.value, change.submitted_by,
        )
        return change

    @staticmethod
    def get_request(db: Session, request_id: str) -> ChangeRequest:
        change = ChangeRequestRepository(db).get_by_id(request_id)
        if not change:
            raise NotFoundError("Change request not found")
        return change

    @staticmethod
    def list_pending(db: Session) -> List[ChangeRequest]:
        """Pending requests, newest submission first."""
        return ChangeRequestRepository(db).list_requests(ChangeRequestStatus.pending)

    @staticmethod
    def list_requests(db: Session, status: Optional[str] = None) -> List[ChangeRequest]:
        """All requests, optionally filtered by status, newest submission first."""
        status_filter = None
        if status:
            try:
                status_filter = ChangeRequestStatus(status)
            except ValueError:
                raise ValidationError(
                    f"Invalid status. Must be one of: {[s.value for s in ChangeRequestStatus]}"
                )
        return ChangeRequestRepository(db).list_requests(status_filter)

    @staticmethod
    def decide(
        db: Session,
        storage: ObjectStorage,
        request_id: str,
        decision: Optional[str],
        reviewer: str,
    ) -> ChangeRequest:
        """
        Approve or reject a pending change request.

        Raises:
            ValidationError: If the decision is not 'approved' or 'rejected'
            NotFoundError: If the request does not exist
            ConflictError: If the request was already decided
        """
        try:
            decision = ChangeRequestStatus(decision)
        except ValueError:
            decision = None
        if decision not in DECISIONS:
            raise ValidationError("Invalid status. Must be 'approved' or 'rejected'")

        repo = ChangeRequestRepository(db)
        change = repo.get_by_id(request_id)
        if not change:
            raise NotFoundError("Change request not found")
        if change.status != ChangeRequestStatus.pending:
            raise ConflictError("This change request has already been processed")

        change_type, target_id, data = change.type, change.target_id, dict(change.data or {})
        outcome = None
        try:
            if not repo.transition_status(
                request_id, ChangeRequestStatus.pending, decision, reviewed_by=reviewer
            ):
                raise ConflictError("This change request has already been processed")
            if decision == ChangeRequestStatus.approved:
                outcome = MutationApplier(db).apply(change_type, target_id, data)
            db.commit()
        except Exception as exc:
            db.rollback()
            logger.warning(
                "Decision %s on change request id=%s failed, request left pending: %s",
                decision.value, request_id, exc,
            )
            raise

        if outcome and outcome.discarded_images:
            ProductService.discard_images(storage, outcome.discarded_images)

        db.refresh(change)
        logger.info("Change request id=%s %s by %s", request_id, decision.value, reviewer)
        return change
