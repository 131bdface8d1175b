from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel


class OrderItemIn(BaseModel):
    product_id: Optional[str] = None
    name: Optional[str] = None
    quantity: Optional[int] = None
    price: Optional[Union[float, str]] = None


class OrderCreate(BaseModel):
    customer_phone: Optional[str] = None
    items: Optional[List[OrderItemIn]] = None


class OrderItemOut(BaseModel):
    product_id: str
    name: str
    quantity: int
    price: float


class OrderOut(BaseModel):
    id: str
    customer_phone: str
    items: List[OrderItemOut]
    subtotal: float
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class OrderCreatedOut(BaseModel):
    order: OrderOut
    whatsapp_url: str
