# services/__init__.py

"""
Сервисы KelasGuru

CRUD обёртки сущностей, оценки студента, геймификация и сессия.
"""

from .api import KelasGuruApi
from .entities import EntityService
from .gamification import GamificationService
from .grades import GradeService
from .session import LoggingNavigator, Navigator, SessionStore, StudentSession, login, student_login

__all__ = [
    "EntityService",
    "GamificationService",
    "GradeService",
    "KelasGuruApi",
    "LoggingNavigator",
    "Navigator",
    "SessionStore",
    "StudentSession",
    "login",
    "student_login",
]
