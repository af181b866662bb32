"""
Модуль: `utils/fields.py`.
Назначение: Нормализация и разбор полей форм (текст, email, телефон, цена).
"""

import re
from decimal import Decimal, InvalidOperation

from utils.errors import ValidationError


EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
# Numeric(10, 2)
MAX_PRICE = Decimal("99999999.99")
CENT = Decimal("0.01")


def normalize_text(value: str | None) -> str:
    if not value:
        return ""
    return value.strip()


def normalize_email(value: str | None) -> str:
    """Возвращает email в нижнем регистре или пустую строку, если адрес некорректен."""
    email = normalize_text(value).lower()
    if not email or not EMAIL_RE.match(email):
        return ""
    return email


def normalize_phone(value: str | None) -> str:
    """Приводит телефон к виду `+<цифры>`; пустая строка, если цифр не 10-15."""
    raw = normalize_text(value)
    if not raw:
        return ""

    digits = re.sub(r"\D", "", raw)
    if not (10 <= len(digits) <= 15):
        return ""

    return f"+{digits}"


def check_price(value) -> Decimal:
    """Проверяет цену: число от 0 до MAX_PRICE, не больше двух знаков после запятой."""
    try:
        price = Decimal(str(value))
    except (InvalidOperation, TypeError):
        raise ValidationError("Price must be a number.") from None
    if not price.is_finite():
        raise ValidationError("Price must be a number.")
    if price < 0:
        raise ValidationError("Price must not be negative.")
    if price > MAX_PRICE:
        raise ValidationError(f"Price must not exceed {MAX_PRICE}.")
    if price != price.quantize(CENT):
        raise ValidationError("Price must have at most two decimal places.")
    return price.quantize(CENT)


def parse_price(value: str | None) -> Decimal:
    """Разбирает цену из формы."""
    raw = normalize_text(value)
    if not raw:
        raise ValidationError("Price is required.")
    return check_price(raw)
