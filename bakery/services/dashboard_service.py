"""
Dashboard Service Module.
Aggregated sales figures for the back-office dashboard.
"""
from collections import Counter
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from bakery.core.exceptions import ValidationError
from bakery.models.order import Order

TOP_PRODUCTS_LIMIT = 5


def _order_day(created_at: Optional[datetime]) -> Optional[date]:
    if created_at is None:
        return None
    if created_at.tzinfo is not None:
        created_at = created_at.astimezone(timezone.utc)
    return created_at.date()


class DashboardService:
    @staticmethod
    def get_stats(db: Session, days: int = 7, today: Optional[date] = None) -> Dict[str, Any]:
        """
        Get aggregated statistics for the dashboard.

        Returns:
        - Total order count and revenue
        - Top products by quantity sold
        - Orders per day for the last ``days`` days (oldest first, zero-filled)
        - Customers grouped by phone, biggest spenders first
        """
        if days < 1 or days > 90:
            raise ValidationError("days must be between 1 and 90")
        today = today or datetime.now(timezone.utc).date()

        total_orders, total_revenue = db.query(
            func.count(Order.id), func.coalesce(func.sum(Order.subtotal), 0)
        ).one()

        customer_rows = (
            db.query(
                Order.customer_phone,
                func.count(Order.id).label("total_orders"),
                func.sum(Order.subtotal).label("total_spent"),
            )
            .group_by(Order.customer_phone)
            .order_by(desc("total_spent"))
            .all()
        )
        customers = [
            {
                "phone": row.customer_phone,
                "total_orders": row.total_orders,
                "total_spent": round(float(row.total_spent or 0), 2),
            }
            for row in customer_rows
        ]

        # Items live in a JSON column, so quantities and days are tallied here
        product_quantities: Counter = Counter()
        window = [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
        per_day = {day: 0 for day in window}
        for items, created_at in db.query(Order.items, Order.created_at).all():
            for item in items or []:
                product_quantities[item["name"]] += item["quantity"]
            day = _order_day(created_at)
            if day in per_day:
                per_day[day] += 1

        return {
            "total_orders": total_orders,
            "total_revenue": round(float(total_revenue), 2),
            "top_products": [
                {"name": name, "quantity": quantity}
                for name, quantity in product_quantities.most_common(TOP_PRODUCTS_LIMIT)
            ],
            "orders_by_day": [
                {"date": day.isoformat(), "orders": count} for day, count in per_day.items()
            ],
            "customers": customers,
        }
