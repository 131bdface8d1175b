"""Repository layer for database access."""

from bakery.repositories.user_repository import UserRepository
from bakery.repositories.product_repository import ProductRepository
from bakery.repositories.category_repository import CategoryRepository
from bakery.repositories.site_config_repository import SiteConfigRepository
from bakery.repositories.change_request_repository import ChangeRequestRepository
from bakery.repositories.order_repository import OrderRepository

__all__ = [
    "UserRepository",
    "ProductRepository",
    "CategoryRepository",
    "SiteConfigRepository",
    "ChangeRequestRepository",
    "OrderRepository",
]
