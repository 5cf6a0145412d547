# artisan_alley/db/models/__init__.py

from .authenticity_status import AuthenticityStatus
from .category import Category
from .product import Product
from .user import User

__all__ = [
    'AuthenticityStatus',
    'Category',
    'Product',
    'User',
]
