"""
Программа: «Farm Grocery» – маркетплейс фермерских хозяйств и продуктов.
Модуль: models/farm.py – модель фермы.

Назначение модуля:
- Описание ORM-модели Farm: название, город, контактный email и автор.
- Упорядоченный список идентификаторов продуктов фермы (`product_ids`),
  который пополняется при добавлении продукта и не очищается при удалении.
"""

from datetime import datetime

from sqlalchemy.orm import object_session, validates

from extensions import db
from models.product import Product
from utils.errors import ValidationError
from utils.fields import normalize_email, normalize_text


class Farm(db.Model):
    """Класс `Farm` описывает ферму, принадлежащую одному пользователю."""
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    city = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    author_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    product_ids = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    author = db.relationship("User", back_populates="farms")

    @validates("name", "city")
    def _validate_required_text(self, key, value):
        cleaned = normalize_text(value)
        if not cleaned:
            raise ValidationError(f"Farm {key} is required.")
        return cleaned

    @validates("email")
    def _validate_email(self, key, value):
        email = normalize_email(value)
        if not email:
            raise ValidationError("Farm email must be a valid email address.")
        return email

    @validates("author_id", "author")
    def _validate_author(self, key, value):
        # автор задаётся один раз при создании
        new_author_id = value.id if key == "author" and value is not None else value
        if self.author_id is not None and new_author_id != self.author_id:
            raise ValidationError("Farm author cannot be changed.")
        return value

    def attach_product(self, product) -> None:
        """Сохраняет продукт и дописывает его id в конец `product_ids` в той же транзакции.

        Список перечитывается под блокировкой строки после вставки продукта,
        иначе параллельное добавление затёрло бы чужой id.
        """
        session = object_session(self)
        session.add(product)
        session.flush()
        session.refresh(self, attribute_names=["product_ids"], with_for_update=True)
        self.product_ids = [*(self.product_ids or []), product.id]

    @property
    def products(self) -> list:
        """Продукты фермы в порядке добавления; удалённые id пропускаются."""
        ids = list(self.product_ids or [])
        if not ids:
            return []
        found = {product.id: product for product in Product.query.filter(Product.id.in_(ids)).all()}
        return [found[product_id] for product_id in ids if product_id in found]
