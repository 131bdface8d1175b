"""
Order Service Module.
Records checkout orders and builds the WhatsApp hand-off link that completes
the purchase outside the store.
"""
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from sqlalchemy.orm import Session

from bakery.core.exceptions import NotFoundError, ValidationError
from bakery.models.order import Order
from bakery.repositories.order_repository import OrderRepository
from bakery.repositories.site_config_repository import SiteConfigRepository
from bakery.utils.formatting import format_brl
from bakery.utils.validation import coerce_price, coerce_text, validate_phone

logger = logging.getLogger(__name__)

WHATSAPP_BASE_URL = "https://wa.me"


def _clean_item(item: Dict[str, Any]) -> Dict[str, Any]:
    name = coerce_text(item.get("name"), "Item name")
    product_id = item.get("product_id")
    if not product_id or not name:
        raise ValidationError("Each order item needs a product_id and a name")

    quantity = item.get("quantity")
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError(f"Invalid quantity for '{name}'")

    return {
        "product_id": str(product_id),
        "name": name,
        "quantity": quantity,
        "price": coerce_price(item.get("price")),
    }


class OrderService:
    """Service for storefront orders."""

    @staticmethod
    def create_order(
        db: Session, customer_phone: Optional[str], items: Optional[List[Dict[str, Any]]]
    ) -> Order:
        """
        Record an order. The subtotal is computed from the items.

        Raises:
            ValidationError: If the phone is missing or the items are empty/invalid
        """
        phone = validate_phone(customer_phone)
        if not items:
            raise ValidationError("An order needs at least one item")

        cleaned = [_clean_item(dict(item)) for item in items]
        subtotal = round(sum(item["quantity"] * item["price"] for item in cleaned), 2)

        order = OrderRepository(db).create(
            Order(customer_phone=phone, items=cleaned, subtotal=subtotal)
        )
        db.commit()
        db.refresh(order)
        logger.info("Recorded order id=%s subtotal=%.2f", order.id, subtotal)
        return order

    @staticmethod
    def list_orders(db: Session) -> List[Order]:
        return OrderRepository(db).list_newest_first()

    @staticmethod
    def get_order(db: Session, order_id: str) -> Order:
        order = OrderRepository(db).get_by_id(order_id)
        if not order:
            raise NotFoundError("Order not found")
        return order

    @staticmethod
    def delete_order(db: Session, order_id: str) -> None:
        repo = OrderRepository(db)
        order = repo.get_by_id(order_id)
        if not order:
            raise NotFoundError("Order not found")
        repo.delete(order)
        db.commit()
        logger.info("Deleted order id=%s", order_id)

    @staticmethod
    def whatsapp_number(db: Session, default_number: str) -> str:
        """Store WhatsApp number: site configuration first, then the configured default."""
        config = SiteConfigRepository(db).get_main()
        number = (config.social_whatsapp if config else None) or default_number
        return "".join(ch for ch in number if ch.isdigit())

    @staticmethod
    def build_whatsapp_message(order: Order) -> str:
        lines = "\n".join(
            f"- {item['quantity']}x {item['name']} (R$ {format_brl(item['price'])})"
            for item in order.items
        )
        return (
            "Olá! Gostaria de fazer o seguinte pedido:\n\n"
            f"{lines}\n\n"
            f"*Total: R$ {format_brl(order.subtotal)}*"
        )

    @staticmethod
    def build_whatsapp_url(order: Order, number: str) -> str:
        message = OrderService.build_whatsapp_message(order)
        return f"{WHATSAPP_BASE_URL}/{number}?text={quote(message, safe='')}"
