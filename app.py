"""
Название: «Farm Grocery»
Язык: Python (Flask)
Краткое описание: маркетплейс, где владельцы ферм публикуют фермы и продукты,
а покупатели просматривают их по категориям
"""

import hmac
import logging
import os
import secrets

from flask import (
    Flask,
    flash,
    jsonify,
    redirect,
    render_template,
    request,
    session,
    url_for,
)
from flask_babel import gettext as _

from config import Config
from extensions import db, login_manager, babel
import models  # noqa: F401 - регистрирует модели для db.create_all()
from routes.farms import register_routes as register_farm_routes
from routes.products import register_routes as register_product_routes
from routes.auth import RETURN_TO_KEY, register_routes as register_auth_routes
from utils.method_override import MethodOverrideMiddleware


def create_app(config_class=Config) -> Flask:
    """Фабрика приложения, собирающая все модули воедино."""
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(getattr(logging, app.config["LOG_LEVEL"], logging.INFO))

    # HTML-формы могут отправлять только GET/POST
    app.wsgi_app = MethodOverrideMiddleware(app.wsgi_app)

    # Инициализация расширений
    db.init_app(app)
    login_manager.init_app(app)

    def select_locale() -> str:
        """Выбирает язык интерфейса из заголовка Accept-Language."""
        supported_languages: tuple[str, ...] = app.config["SUPPORTED_LANGUAGES"]
        return request.accept_languages.best_match(supported_languages) or app.config["DEFAULT_LANGUAGE"]

    babel.init_app(app, locale_selector=select_locale)

    login_manager.login_view = "login"
    login_manager.login_message = "You must be signed in first!"
    login_manager.login_message_category = "error"

    os.makedirs(app.instance_path, exist_ok=True)

    # Регистрация роутов по модулям
    register_farm_routes(app)
    register_product_routes(app)
    register_auth_routes(app)

    with app.app_context():
        # Создаем отсутствующие таблицы (без изменения существующих колонок)
        db.create_all()

    def _ensure_csrf_token() -> str:
        token = session.get("csrf_token")
        if not token:
            token = secrets.token_urlsafe(32)
            session["csrf_token"] = token
        return token

    def _is_csrf_valid() -> bool:
        expected = session.get("csrf_token")
        provided = request.headers.get("X-CSRF-Token") or request.form.get("csrf_token")
        if not expected or not provided:
            return False
        return hmac.compare_digest(expected, provided)

    @login_manager.unauthorized_handler
    def handle_unauthorized():
        """Запоминает запрошенный адрес и отправляет на страницу входа."""
        if request.method == "GET":
            return_to = request.full_path if request.query_string else request.path
            session[RETURN_TO_KEY] = return_to
        flash(_(login_manager.login_message), login_manager.login_message_category)
        return redirect(url_for("login"))

    @app.context_processor
    def inject_template_globals():
        return {
            "csrf_token": _ensure_csrf_token(),
            "categories": app.config["PRODUCT_CATEGORIES"],
        }

    @app.before_request
    def enforce_csrf():
        """Отклоняет изменяющие запросы без действительного CSRF-токена."""
        if not app.config["CSRF_ENABLED"]:
            return None

        if request.method in {"GET", "HEAD", "OPTIONS", "TRACE"}:
            return None

        if request.endpoint in {"healthz"}:
            return None

        if _is_csrf_valid():
            return None

        app.logger.warning("Отклонён запрос %s %s без CSRF-токена", request.method, request.path)
        flash(_("Your form session expired. Please refresh the page and try again."), "error")
        return redirect(request.referrer or url_for("farms_index"))

    @app.after_request
    def apply_security_headers(response):
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        return response

    @app.errorhandler(404)
    def not_found(error):
        return render_template("404.html"), 404

    @app.get("/")
    def root():
        return redirect(url_for("farms_index"))

    @app.get("/healthz")
    def healthz():
        return jsonify({"status": "ok"}), 200

    return app


if __name__ == "__main__":
    app = create_app()
    is_production = os.environ.get("FLASK_ENV", "").lower() == "production"
    app.run(debug=not is_production)
