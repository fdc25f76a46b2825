"""
KelasGuru - асинхронный клиент backend панели учителя
"""

from kelasguru.config import ClientSettings, get_settings
from kelasguru.core import ApiClient, ApiResult, TTLCache, calculate_level
from kelasguru.services import KelasGuruApi, SessionStore, StudentSession
from kelasguru.utils import setup_logger

__version__ = "1.0.0"

__all__ = [
    "ApiClient",
    "ApiResult",
    "ClientSettings",
    "KelasGuruApi",
    "SessionStore",
    "StudentSession",
    "TTLCache",
    "calculate_level",
    "get_settings",
    "setup_logger",
]
