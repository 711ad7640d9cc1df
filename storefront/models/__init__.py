"""Database models."""

from storefront.models.user import AdminUser
from storefront.models.setting import Setting

__all__ = [
    "AdminUser",
    "Setting",
]
