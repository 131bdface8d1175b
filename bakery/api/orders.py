from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from bakery.core.config import settings
from bakery.core.rate_limit import limiter
from bakery.core.security import require_permission
from bakery.db.session import get_db
from bakery.models.user import User
from bakery.schemas.order import OrderCreate, OrderCreatedOut, OrderOut
from bakery.services import permission_service as perm
from bakery.services.order_service import OrderService

router = APIRouter()


@router.post("", response_model=OrderCreatedOut, status_code=status.HTTP_201_CREATED)
@limiter.limit("10/minute")
def create_order(
    request: Request,
    payload: OrderCreate,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(require_permission(perm.CREATE, perm.ORDER)),
):
    """
    Record a checkout and return the WhatsApp link that sends the order to
    the store.
    """
    items = [item.model_dump() for item in payload.items] if payload.items else None
    order = OrderService.create_order(db, payload.customer_phone, items)
    number = OrderService.whatsapp_number(db, settings.WHATSAPP_NUMBER)
    return OrderCreatedOut(
        order=OrderOut.model_validate(order),
        whatsapp_url=OrderService.build_whatsapp_url(order, number),
    )


@router.get("", response_model=List[OrderOut])
def list_orders(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(perm.READ, perm.ORDER)),
):
    return OrderService.list_orders(db)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(perm.READ, perm.ORDER)),
):
    return OrderService.get_order(db, order_id)


@router.delete("/{order_id}")
def delete_order(
    order_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(perm.DELETE, perm.ORDER)),
):
    OrderService.delete_order(db, order_id)
    return {"message": "Order deleted successfully"}
