"""
Программа: «Farm Grocery» – маркетплейс фермерских хозяйств и продуктов.
Модуль: routes/products.py – маршруты каталога продуктов.

Назначение модуля:
- Каталог с фильтром по категории (`?category=fruit`).
- Просмотр, редактирование и удаление продукта его автором.
"""

from flask import abort, current_app, flash, g, redirect, render_template, request, url_for
from flask_babel import gettext as _
from flask_login import current_user

from extensions import db
from models.product import Product
from utils.errors import ValidationError
from utils.fields import parse_price
from utils.guards import is_author_product, is_logged_in


def filter_products(category: str | None) -> tuple[list[Product], str]:
    """Возвращает продукты точной категории (или все) и подпись активного фильтра."""
    query = Product.query.order_by(Product.created_at, Product.id)
    if category:
        return query.filter(Product.category == category).all(), category
    return query.all(), "All"


def register_routes(app):
    """Регистрирует маршруты `/products`."""

    @app.get("/products")
    def products_index():
        products, category = filter_products(request.args.get("category"))
        return render_template(
            "products/index.html",
            products=products,
            category=category,
            categories=current_app.config["PRODUCT_CATEGORIES"],
        )

    @app.get("/products/<int:id>")
    def products_show(id):
        product = db.session.get(Product, id)
        if product is None:
            abort(404)
        return render_template("products/show.html", product=product, farm=product.farm)

    @app.get("/products/<int:id>/edit")
    @is_logged_in
    @is_author_product
    def products_edit(id):
        return render_template(
            "products/edit.html",
            product=g.product,
            categories=current_app.config["PRODUCT_CATEGORIES"],
        )

    @app.put("/products/<int:id>")
    @is_logged_in
    @is_author_product
    def products_update(id):
        product = g.product
        try:
            product.name = request.form.get("name")
            product.price = parse_price(request.form.get("price"))
            product.category = request.form.get("category")
        except ValidationError as exc:
            db.session.rollback()
            flash(exc.message, "error")
            return redirect(url_for("products_edit", id=id))

        db.session.commit()
        current_app.logger.info("Продукт %s обновлён пользователем %s", id, current_user.id)
        flash(_("Product updated!"), "success")
        return redirect(url_for("products_show", id=id))

    @app.delete("/products/<int:id>")
    @is_logged_in
    @is_author_product
    def products_delete(id):
        product = g.product
        farm_id = product.farm_id
        # id продукта остаётся в списке product_ids фермы
        db.session.delete(product)
        db.session.commit()
        current_app.logger.info("Продукт %s удалён пользователем %s", id, current_user.id)
        flash(_("Product deleted!"), "success")
        return redirect(url_for("farms_show", id=farm_id))
