"""
Tests for the CSV reports.
"""
import csv
import io
from datetime import datetime

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from bakery.models.order import Order
from bakery.models.product import Product
from bakery.services.export_service import (
    ORDER_CSV_COLUMNS,
    PRODUCT_CSV_COLUMNS,
    export_orders_csv,
    export_products_csv,
    generate_csv_bytes,
)


def _rows(data: bytes):
    return list(csv.DictReader(io.StringIO(data.decode("utf-8-sig"))))


def test_generate_csv_bytes_has_bom():
    data = generate_csv_bytes([{"A": "ç"}], ["A"])
    assert data.startswith(b"\xef\xbb\xbf")
    assert data.decode("utf-8-sig").splitlines() == ["A", "ç"]


def test_products_csv(db: Session, product: Product):
    rows = _rows(export_products_csv(db))

    assert len(rows) == 1
    assert list(rows[0].keys()) == PRODUCT_CSV_COLUMNS
    assert rows[0]["Name"] == "Bolo de Cenoura"
    assert rows[0]["Price"] == "25,90"
    assert rows[0]["Category"] == "Bolos"
    assert rows[0]["Featured"] == "No"
    assert rows[0]["Image URLs"] == ", ".join(product.images)


def test_orders_csv_one_row_per_item(db: Session):
    db.add(
        Order(
            customer_phone="12982398984",
            items=[
                {"product_id": "p1", "name": "Bolo", "quantity": 2, "price": 20.0},
                {"product_id": "p2", "name": "Pão", "quantity": 1, "price": 4.5},
            ],
            subtotal=44.5,
            created_at=datetime(2026, 10, 18, 9, 30),
        )
    )
    db.add(Order(customer_phone="999999999", items=[], subtotal=0, created_at=datetime(2026, 10, 17, 8, 0)))
    db.commit()

    rows = _rows(export_orders_csv(db))

    assert len(rows) == 2
    assert list(rows[0].keys()) == ORDER_CSV_COLUMNS
    assert rows[0]["Order Date"] == "18/10/2026 09:30"
    assert rows[0]["Order Subtotal (R$)"] == "44,50"
    assert rows[0]["Item Total (R$)"] == "40,00"
    assert rows[1]["Product Name"] == "Pão"
    assert rows[1]["Unit Price (R$)"] == "4,50"


def test_export_endpoints(client: TestClient, admin_headers, social_headers, product: Product):
    response = client.get("/api/exports/products.csv", headers=admin_headers)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment" in response.headers["content-disposition"]
    assert _rows(response.content)[0]["Slug"] == "bolo-de-cenoura"

    assert client.get("/api/exports/orders.csv", headers=admin_headers).status_code == 200
    assert client.get("/api/exports/orders.csv", headers=social_headers).status_code == 403
