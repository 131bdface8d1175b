"""
CSV reports for the back office: product catalogue and order history.
"""
from typing import Any, Dict, List
import csv
import io

from sqlalchemy.orm import Session

from bakery.repositories.order_repository import OrderRepository
from bakery.repositories.product_repository import ProductRepository
from bakery.utils.formatting import format_brl, format_datetime_br

PRODUCT_CSV_COLUMNS = [
    "Product ID",
    "Name",
    "Slug",
    "Description",
    "Price",
    "Category",
    "Category Slug",
    "Featured",
    "Created At",
    "Image URLs",
]

ORDER_CSV_COLUMNS = [
    "Order ID",
    "Customer Phone",
    "Order Date",
    "Order Subtotal (R$)",
    "Product ID",
    "Product Name",
    "Quantity",
    "Unit Price (R$)",
    "Item Total (R$)",
]


def products_to_rows(products) -> List[Dict[str, Any]]:
    return [
        {
            "Product ID": p.id,
            "Name": p.name,
            "Slug": p.slug,
            "Description": p.description or "",
            "Price": format_brl(p.price),
            "Category": p.category or "",
            "Category Slug": p.category_slug or "",
            "Featured": "Yes" if p.featured else "No",
            "Created At": format_datetime_br(p.created_at),
            "Image URLs": ", ".join(p.images or []),
        }
        for p in products
    ]


def orders_to_rows(orders) -> List[Dict[str, Any]]:
    """One row per order item; orders without items are skipped."""
    rows = []
    for order in orders:
        for item in order.items or []:
            rows.append(
                {
                    "Order ID": order.id,
                    "Customer Phone": order.customer_phone or "N/A",
                    "Order Date": format_datetime_br(order.created_at),
                    "Order Subtotal (R$)": format_brl(order.subtotal),
                    "Product ID": item["product_id"],
                    "Product Name": item["name"],
                    "Quantity": item["quantity"],
                    "Unit Price (R$)": format_brl(item["price"]),
                    "Item Total (R$)": format_brl(item["quantity"] * item["price"]),
                }
            )
    return rows


def generate_csv_bytes(rows: List[Dict[str, Any]], columns: List[str]) -> bytes:
    """
    Generate CSV bytes from a list of row dictionaries.
    Encoded with a BOM so spreadsheet tools detect UTF-8.
    """
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=columns)
    writer.writeheader()
    writer.writerows(rows)
    return output.getvalue().encode("utf-8-sig")


def export_products_csv(db: Session) -> bytes:
    products = ProductRepository(db).list_products()
    return generate_csv_bytes(products_to_rows(products), PRODUCT_CSV_COLUMNS)


def export_orders_csv(db: Session) -> bytes:
    orders = OrderRepository(db).list_newest_first()
    return generate_csv_bytes(orders_to_rows(orders), ORDER_CSV_COLUMNS)
