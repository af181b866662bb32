"""
Программа: «Farm Grocery» – маркетплейс фермерских хозяйств и продуктов.
Модуль: models/user.py – модель пользователя системы.

Назначение модуля:
- Описание ORM-модели User: логин, хеш пароля и контактные данные профиля.
- Связи с фермами и продуктами, автором которых является пользователь.
"""

from datetime import datetime

from flask_login import UserMixin
from extensions import db


class User(UserMixin, db.Model):
    """Класс `User` описывает владельца ферм и продуктов."""
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    password_hash = db.Column(db.String(200), nullable=False)
    first_name = db.Column(db.String(80), nullable=True)
    last_name = db.Column(db.String(80), nullable=True)
    email = db.Column(db.String(120), nullable=True)
    phone = db.Column(db.String(20), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    farms = db.relationship("Farm", back_populates="author", lazy=True)
    products = db.relationship("Product", back_populates="author", lazy=True)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part) or self.username
