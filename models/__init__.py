"""
Модуль: `models/__init__.py`.
Назначение: Импорт моделей для корректной регистрации в SQLAlchemy metadata.
"""

from .user import User
from .farm import Farm
from .product import Product

__all__ = ["User", "Farm", "Product"]
