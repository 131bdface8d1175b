from typing import List

from pydantic import BaseModel


class TopProduct(BaseModel):
    name: str
    quantity: int


class DailyOrders(BaseModel):
    date: str
    orders: int


class CustomerSummary(BaseModel):
    phone: str
    total_orders: int
    total_spent: float


class DashboardStats(BaseModel):
    total_orders: int
    total_revenue: float
    top_products: List[TopProduct]
    orders_by_day: List[DailyOrders]
    customers: List[CustomerSummary]
