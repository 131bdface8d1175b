from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from bakery.core.security import require_permission
from bakery.db.session import get_db, get_storage
from bakery.models.user import User
from bakery.schemas.change_request import (
    ChangeRequestCreate,
    ChangeRequestDecision,
    ChangeRequestOut,
    DecisionOut,
)
from bakery.services import permission_service as perm
from bakery.services.change_request_service import ChangeRequestService
from bakery.storage import ObjectStorage

router = APIRouter()


@router.post("", response_model=ChangeRequestOut, status_code=status.HTTP_201_CREATED)
def submit_change_request(
    payload: ChangeRequestCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(perm.CREATE, perm.CHANGE_REQUEST)),
):
    """
    Propose a change for admin review. The target resource is not modified
    until the request is approved.
    """
    return ChangeRequestService.submit(
        db,
        change_type=payload.type,
        data=payload.data,
        submitted_by=current_user.email,
        change_summary=payload.change_summary,
        target_id=payload.target_id,
    )


@router.get("", response_model=List[ChangeRequestOut])
def list_change_requests(
    status_filter: Optional[str] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(perm.READ, perm.CHANGE_REQUEST)),
):
    return ChangeRequestService.list_requests(db, status_filter)


@router.get("/pending", response_model=List[ChangeRequestOut])
def list_pending_change_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(perm.READ, perm.CHANGE_REQUEST)),
):
    return ChangeRequestService.list_pending(db)


@router.get("/{request_id}", response_model=ChangeRequestOut)
def get_change_request(
    request_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(perm.READ, perm.CHANGE_REQUEST)),
):
    return ChangeRequestService.get_request(db, request_id)


@router.put("/{request_id}", response_model=DecisionOut)
def decide_change_request(
    request_id: str,
    payload: ChangeRequestDecision,
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    current_user: User = Depends(require_permission(perm.REVIEW, perm.CHANGE_REQUEST)),
):
    """
    Approve or reject a pending change request.

    Approval applies the proposed change; if that fails the request stays
    pending and the error is returned.
    """
    change = ChangeRequestService.decide(db, storage, request_id, payload.status, current_user.email)
    return DecisionOut(
        message=f"Change {change.status.value} successfully.",
        id=change.id,
        status=change.status,
    )
