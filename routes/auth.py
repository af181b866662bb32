"""
Программа: «Farm Grocery» – маркетплейс фермерских хозяйств и продуктов.
Модуль: routes/auth.py – маршруты аутентификации и управления сессиями.

Назначение модуля:
- Регистрация новых пользователей с автоматическим входом.
- Вход с возвратом на отложенный адрес (`session["return_to"]`) и выход.
- Загрузка пользователя по идентификатору для управления сессией.
"""

from flask import current_app, render_template, request, flash, redirect, url_for, session
from flask_babel import gettext as _
from flask_login import login_user, logout_user, current_user
from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash, check_password_hash

from extensions import login_manager, db
from models.user import User
from utils.errors import RegistrationError
from utils.fields import normalize_email, normalize_phone, normalize_text

RETURN_TO_KEY = "return_to"


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))


def _validate_username(username: str) -> str | None:
    if not username:
        return "Username is required."
    if len(username) > 80:
        return "Username must not exceed 80 characters."
    if any(ch.isspace() for ch in username):
        return "Username must not contain spaces."
    return None


def register_user(form) -> User:
    """Создаёт пользователя из полей формы; ошибки данных – `RegistrationError`."""
    username = normalize_text(form.get("username"))
    password = form.get("password") or ""
    raw_email = form.get("email") or ""
    raw_phone = form.get("phone") or ""

    username_error = _validate_username(username)
    if username_error:
        raise RegistrationError(username_error)
    if not password:
        raise RegistrationError("Password is required.")

    email = normalize_email(raw_email)
    if raw_email.strip() and not email:
        raise RegistrationError("Please enter a valid email address.")
    phone = normalize_phone(raw_phone)
    if raw_phone.strip() and not phone:
        raise RegistrationError("Please enter a valid phone number (10 to 15 digits).")

    if User.query.filter_by(username=username).first():
        raise RegistrationError("A user with the given username is already registered.")

    user = User(
        username=username,
        password_hash=generate_password_hash(password, method="scrypt"),
        first_name=normalize_text(form.get("firstName")) or None,
        last_name=normalize_text(form.get("lastName")) or None,
        email=email or None,
        phone=phone or None,
    )
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise RegistrationError("A user with the given username is already registered.") from None
    return user


def pop_return_to() -> str:
    """Забирает отложенный адрес возврата один раз; чужие хосты игнорируются."""
    target = session.pop(RETURN_TO_KEY, None)
    if not target or not target.startswith("/") or target.startswith("//"):
        return url_for("farms_index")
    return target


def register_routes(app):
    @app.route("/register", methods=["GET", "POST"])
    def register():
        if request.method == "POST":
            try:
                user = register_user(request.form)
            except RegistrationError as exc:
                flash(exc.message, "error")
                return redirect(url_for("register"))

            login_user(user)
            current_app.logger.info("Зарегистрирован пользователь %s", user.username)
            flash(_("Welcome to Farm Grocery"), "success")
            return redirect(url_for("farms_index"))

        return render_template("users/register.html")

    @app.route("/login", methods=["GET", "POST"])
    def login():
        if request.method == "POST":
            username = normalize_text(request.form.get("username"))
            password = request.form.get("password") or ""

            user = User.query.filter_by(username=username).first() if username else None
            if user is None or not check_password_hash(user.password_hash, password):
                current_app.logger.info("Неудачная попытка входа для %r", username)
                flash(_("Invalid username or password."), "error")
                return redirect(url_for("login"))

            login_user(user)
            current_app.logger.info("Пользователь %s вошёл в систему", user.username)
            flash(_("Welcome Back!"), "success")
            return redirect(pop_return_to())

        return render_template("users/login.html")

    @app.get("/logout")
    def logout():
        if current_user.is_authenticated:
            current_app.logger.info("Пользователь %s вышел из системы", current_user.username)
        logout_user()
        flash(_("See you soon!"), "success")
        return redirect(url_for("farms_index"))
