# core/__init__.py

"""Ядро клиента: транспорт, модели результатов, кэш и исключения"""

from .cache import TTLCache
from .exceptions import JsonpError, KelasGuruError, MalformedResponseError, SessionError, TransportError
from .models import ApiResult, BadgeDetail, GradeStatus, StudentSummary, calculate_level
from .transport import ApiClient

__all__ = [
    "ApiClient",
    "ApiResult",
    "BadgeDetail",
    "GradeStatus",
    "JsonpError",
    "KelasGuruError",
    "MalformedResponseError",
    "SessionError",
    "StudentSummary",
    "TTLCache",
    "TransportError",
    "calculate_level",
]
