from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from bakery.core.security import require_permission
from bakery.db.session import get_db
from bakery.models.user import User
from bakery.schemas.dashboard import DashboardStats
from bakery.services import permission_service as perm
from bakery.services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(
    days: int = Query(7, ge=1, le=90, description="Days covered by the orders-per-day series"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(perm.READ, perm.DASHBOARD)),
):
    """
    Get aggregated sales statistics for the dashboard.

    Returns:
    - Total orders and revenue
    - Top 5 products by quantity sold
    - Orders per day
    - Customers by total spend
    """
    return DashboardService.get_stats(db, days=days)
