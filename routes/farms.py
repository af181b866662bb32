"""
Программа: «Farm Grocery» – маркетплейс фермерских хозяйств и продуктов.
Модуль: routes/farms.py – маршруты ферм и добавления продуктов в ферму.

Назначение модуля:
- Список ферм, создание, просмотр и удаление фермы её автором.
- Форма и обработчик создания продукта внутри фермы.
"""

from flask import abort, current_app, flash, g, redirect, render_template, request, url_for
from flask_babel import gettext as _
from flask_login import current_user

from extensions import db
from models.farm import Farm
from models.product import Product
from utils.errors import ValidationError
from utils.fields import parse_price
from utils.guards import is_author, is_logged_in


def register_routes(app):
    """Регистрирует маршруты `/farms`."""

    @app.get("/farms")
    def farms_index():
        # Без пагинации: список растёт вместе с числом ферм
        farms = Farm.query.order_by(Farm.created_at, Farm.id).all()
        return render_template("farms/index.html", farms=farms)

    @app.get("/farms/new")
    @is_logged_in
    def farms_new():
        return render_template("farms/new.html")

    @app.post("/farms")
    @is_logged_in
    def farms_create():
        try:
            farm = Farm(
                name=request.form.get("name"),
                city=request.form.get("city"),
                email=request.form.get("email"),
                author_id=current_user.id,
            )
        except ValidationError as exc:
            flash(exc.message, "error")
            return redirect(url_for("farms_new"))

        db.session.add(farm)
        db.session.commit()
        current_app.logger.info("Ферма %s создана пользователем %s", farm.id, current_user.id)
        flash(_("Farm created!"), "success")
        return redirect(url_for("farms_index"))

    @app.get("/farms/<int:id>")
    def farms_show(id):
        farm = db.session.get(Farm, id)
        if farm is None:
            abort(404)
        return render_template("farms/show.html", farm=farm, products=farm.products)

    @app.delete("/farms/<int:id>")
    @is_logged_in
    @is_author
    def farms_delete(id):
        # Продукты фермы не удаляются и остаются с висячим farm_id
        db.session.delete(g.farm)
        db.session.commit()
        current_app.logger.info("Ферма %s удалена пользователем %s", id, current_user.id)
        flash(_("Deleted Farm!"), "success")
        return redirect(url_for("farms_index"))

    @app.get("/farms/<int:id>/products/new")
    @is_logged_in
    @is_author
    def farm_products_new(id):
        return render_template(
            "products/new.html",
            farm=g.farm,
            categories=current_app.config["PRODUCT_CATEGORIES"],
        )

    @app.post("/farms/<int:id>/products")
    @is_logged_in
    @is_author
    def farm_products_create(id):
        farm = g.farm
        try:
            product = Product(
                name=request.form.get("name"),
                price=parse_price(request.form.get("price")),
                category=request.form.get("category"),
                farm_id=farm.id,
                author_id=current_user.id,
            )
        except ValidationError as exc:
            flash(exc.message, "error")
            return redirect(url_for("farm_products_new", id=id))

        # Продукт и ссылка на него в ферме фиксируются одной транзакцией
        try:
            farm.attach_product(product)
            db.session.commit()
        except Exception:
            db.session.rollback()
            current_app.logger.exception("Не удалось добавить продукт в ферму %s", id)
            raise

        current_app.logger.info("Продукт %s добавлен в ферму %s", product.id, id)
        flash(_("Product added!"), "success")
        return redirect(url_for("farms_show", id=id))
