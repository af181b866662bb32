"""
Модуль: `utils/errors.py`.
Назначение: Исключения предметной области, которые маршруты превращают во flash-сообщения.
"""


class ValidationError(ValueError):
    """Некорректное значение поля фермы, продукта или формы."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RegistrationError(Exception):
    """Регистрация отклонена: занятое имя пользователя или неверные данные профиля."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
