# core/exceptions.py

"""Исключения клиента KelasGuru"""

from typing import Optional


class KelasGuruError(Exception):
    """Базовое исключение клиента"""
    pass


class TransportError(KelasGuruError):
    """Ошибка HTTP запроса (статус или сеть)"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class MalformedResponseError(KelasGuruError):
    """Ответ backend не является структурой {success, data, error}"""
    pass


class JsonpError(KelasGuruError):
    """Ошибка запасного канала (JSONP)"""
    pass


class SessionError(KelasGuruError):
    """Повреждённые данные локальной сессии"""
    pass
