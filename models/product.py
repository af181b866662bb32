"""
Программа: «Farm Grocery» – маркетплейс фермерских хозяйств и продуктов.
Модуль: models/product.py – модель продукта.

Назначение модуля:
- Описание ORM-модели Product: название, цена, категория, ферма и автор.
- Проверка полей при каждом присваивании (создание и полное обновление).
- Ссылка на ферму не ограничена внешним ключом: после удаления фермы продукт
  сохраняет «висячий» `farm_id`.
"""

from datetime import datetime

from flask import current_app
from sqlalchemy.orm import validates

from extensions import db
from utils.errors import ValidationError
from utils.fields import check_price, normalize_text


class Product(db.Model):
    """Класс `Product` описывает товар фермы."""
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    category = db.Column(db.String(20), nullable=False, index=True)
    farm_id = db.Column(db.Integer, nullable=False, index=True)
    author_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    author = db.relationship("User", back_populates="products")
    farm = db.relationship(
        "Farm",
        primaryjoin="foreign(Product.farm_id) == Farm.id",
        viewonly=True,
        lazy="joined",
    )

    @validates("name")
    def _validate_name(self, key, value):
        cleaned = normalize_text(value)
        if not cleaned:
            raise ValidationError("Product name is required.")
        return cleaned

    @validates("price")
    def _validate_price(self, key, value):
        return check_price(value)

    @validates("category")
    def _validate_category(self, key, value):
        categories = current_app.config["PRODUCT_CATEGORIES"]
        category = normalize_text(value).lower()
        if category not in categories:
            raise ValidationError("Category must be one of: " + ", ".join(categories) + ".")
        return category

    @property
    def is_orphan(self) -> bool:
        return self.farm is None
