"""Change request store."""

from datetime import datetime, timezone
from typing import Optional, List
from sqlalchemy import desc
from sqlalchemy.orm import Session

from bakery.repositories.base_repository import BaseRepository
from bakery.models.change_request import ChangeRequest, ChangeRequestStatus


class ChangeRequestRepository(BaseRepository[ChangeRequest]):
    """Repository for ChangeRequest model operations."""

    def __init__(self, db: Session):
        super().__init__(ChangeRequest, db)

    def list_requests(
        self, status: Optional[ChangeRequestStatus] = None
    ) -> List[ChangeRequest]:
        """
        Get change requests, optionally filtered by status.

        Args:
            status: Optional status filter

        Returns:
            List of change requests ordered by submission time (newest first)
        """
        query = self.db.query(ChangeRequest)
        if status is not None:
            query = query.filter(ChangeRequest.status == status)
        return query.order_by(desc(ChangeRequest.submitted_at)).all()

    def transition_status(
        self,
        request_id: str,
        expected: ChangeRequestStatus,
        new_status: ChangeRequestStatus,
        reviewed_by: Optional[str] = None,
    ) -> bool:
        """
        Atomically move a request from ``expected`` to ``new_status``.

        Issued as a single conditional UPDATE, so of two concurrent callers
        only one can observe the expected status. The caller owns the
        transaction.

        Returns:
            True if this call performed the transition, False otherwise
        """
        updated = (
            self.db.query(ChangeRequest)
            .filter(ChangeRequest.id == request_id, ChangeRequest.status == expected)
            .update(
                {
                    ChangeRequest.status: new_status,
                    ChangeRequest.reviewed_by: reviewed_by,
                    ChangeRequest.reviewed_at: datetime.now(timezone.utc),
                },
                synchronize_session="fetch",
            )
        )
        return updated == 1
