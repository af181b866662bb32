"""
Модуль: `utils/method_override.py`.
Назначение: WSGI-прослойка, позволяющая HTML-формам вызывать PUT/PATCH/DELETE.

Форма отправляет POST на `/products/1?_method=PUT`; прослойка подменяет
REQUEST_METHOD до маршрутизации Flask.
"""

from urllib.parse import parse_qs

OVERRIDE_PARAM = "_method"
ALLOWED_METHODS = frozenset({"PUT", "PATCH", "DELETE"})


class MethodOverrideMiddleware:
    def __init__(self, app, param: str = OVERRIDE_PARAM):
        self.app = app
        self.param = param

    def __call__(self, environ, start_response):
        if environ.get("REQUEST_METHOD", "").upper() == "POST":
            query = parse_qs(environ.get("QUERY_STRING", ""))
            values = query.get(self.param)
            if values:
                method = values[0].strip().upper()
                if method in ALLOWED_METHODS:
                    environ["REQUEST_METHOD"] = method
        return self.app(environ, start_response)
