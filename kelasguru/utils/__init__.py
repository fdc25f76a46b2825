# utils/__init__.py

from .logger import setup_logger
from .decorators import returns_api_result
from .tasks import gather_settled

__all__ = ["setup_logger", "returns_api_result", "gather_settled"]
