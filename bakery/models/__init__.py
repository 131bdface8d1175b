from .user import User, UserRole
from .product import Product
from .category import Category
from .site_config import SiteConfig, SITE_CONFIG_ID
from .change_request import ChangeRequest, ChangeRequestStatus, ChangeType
from .order import Order
