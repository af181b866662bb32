"""
Модуль: `wsgi.py`.
Назначение: Точка входа для WSGI-сервера (`gunicorn wsgi:app`).
"""

from app import create_app

app = create_app()
