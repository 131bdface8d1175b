from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from bakery.core.security import require_permission
from bakery.db.session import get_db
from bakery.models.user import User
from bakery.services import permission_service as perm
from bakery.services.export_service import export_orders_csv, export_products_csv

router = APIRouter()


def _csv_response(data: bytes, prefix: str) -> Response:
    filename = f"{prefix}-{datetime.now().strftime('%Y-%m-%d')}.csv"
    return Response(
        content=data,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/products.csv")
def export_products(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(perm.EXPORT, perm.REPORT)),
):
    return _csv_response(export_products_csv(db), "products")


@router.get("/orders.csv")
def export_orders(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(perm.EXPORT, perm.REPORT)),
):
    return _csv_response(export_orders_csv(db), "orders")
