"""
Модуль: `utils/guards.py`.
Назначение: Проверки прав доступа к маршрутам.

- `is_logged_in` – требует аутентифицированного пользователя (Flask-Login).
- `is_author` – текущий пользователь должен быть автором фермы из параметра `id`.
- `is_author_product` – то же для продукта.

Загруженная запись кладётся в `g.farm` / `g.product`, чтобы обработчик не
читал её повторно. Отсутствующая запись считается отказом в доступе.
"""

from functools import wraps

from flask import current_app, flash, g, redirect, url_for
from flask_babel import gettext as _
from flask_login import current_user, login_required

from extensions import db
from models.farm import Farm
from models.product import Product

is_logged_in = login_required


def owns(record, user) -> bool:
    """Сравнивает автора записи с идентичностью пользователя."""
    if record is None or user is None or not user.is_authenticated:
        return False
    return record.author_id == user.id


def is_author(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        farm = db.session.get(Farm, kwargs["id"])
        if farm is None:
            flash(_("Farm not found."), "error")
            return redirect(url_for("farms_index"))
        if not owns(farm, current_user):
            current_app.logger.warning(
                "Пользователь %s не является автором фермы %s", current_user.id, farm.id
            )
            flash(_("You do not have permission to do that!"), "error")
            return redirect(url_for("farms_show", id=farm.id))
        g.farm = farm
        return view(*args, **kwargs)

    return wrapper


def is_author_product(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        product = db.session.get(Product, kwargs["id"])
        if product is None:
            flash(_("Product not found."), "error")
            return redirect(url_for("products_index"))
        if not owns(product, current_user):
            current_app.logger.warning(
                "Пользователь %s не является автором продукта %s", current_user.id, product.id
            )
            flash(_("You do not have permission to do that!"), "error")
            return redirect(url_for("products_show", id=product.id))
        g.product = product
        return view(*args, **kwargs)

    return wrapper
