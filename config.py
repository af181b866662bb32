"""
Программа: «Farm Grocery» – маркетплейс фермерских хозяйств и продуктов.
Модуль: config.py – конфигурация приложения.

Назначение модуля:
- Определение базовых параметров приложения Flask (секретный ключ, строка подключения к БД).
- Настройка cookie сессии, CSRF-защиты, языка интерфейса и уровня логирования.
- Фиксированный перечень категорий продуктов.
"""

import os
import warnings


def _get_env_bool(name: str, default: bool = False) -> bool:
    """Преобразует переменную окружения в bool."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_env_int(name: str, default: int) -> int:
    """Преобразует переменную окружения в int."""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def _is_production() -> bool:
    """Определяет production-режим по FLASK_ENV."""
    return os.environ.get("FLASK_ENV", "").strip().lower() == "production"


def build_engine_options(database_uri: str, timeout_seconds: int) -> dict:
    """Параметры движка SQLAlchemy с таймаутом обращения к хранилищу."""
    if database_uri.startswith("sqlite"):
        # sqlite3 ждёт снятия блокировки не дольше timeout секунд
        return {"connect_args": {"timeout": timeout_seconds}}
    return {
        "pool_pre_ping": True,
        "pool_timeout": timeout_seconds,
        "connect_args": {"connect_timeout": timeout_seconds},
    }


class Config:
    """Базовая конфигурация приложения."""

    _PRODUCTION = _is_production()

    SECRET_KEY = os.environ.get("SECRET_KEY")
    if not SECRET_KEY:
        if _PRODUCTION:
            raise RuntimeError(
                "SECRET_KEY environment variable is required in production. "
                "Set a strong random value before starting the app."
            )
        SECRET_KEY = "dev-insecure-secret-key"
        warnings.warn(
            "SECRET_KEY is not set. Using insecure development fallback key.",
            RuntimeWarning,
            stacklevel=1,
        )

    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        "sqlite:////app/instance/farm_grocery.db" if _PRODUCTION else "sqlite:///farm_grocery.db",
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    DB_TIMEOUT_SECONDS = _get_env_int("DB_TIMEOUT_SECONDS", 10)
    SQLALCHEMY_ENGINE_OPTIONS = build_engine_options(SQLALCHEMY_DATABASE_URI, DB_TIMEOUT_SECONDS)

    SESSION_COOKIE_SECURE = _get_env_bool("SESSION_COOKIE_SECURE", default=_PRODUCTION)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = os.environ.get("SESSION_COOKIE_SAMESITE", "Lax")
    REMEMBER_COOKIE_SECURE = SESSION_COOKIE_SECURE
    REMEMBER_COOKIE_HTTPONLY = True
    REMEMBER_COOKIE_SAMESITE = SESSION_COOKIE_SAMESITE

    CSRF_ENABLED = _get_env_bool("CSRF_ENABLED", default=True)

    SUPPORTED_LANGUAGES = ("en",)
    DEFAULT_LANGUAGE = os.environ.get("DEFAULT_LANGUAGE", "en").strip().lower() or "en"

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"

    PRODUCT_CATEGORIES = ("fruit", "vegetable", "dairy")
