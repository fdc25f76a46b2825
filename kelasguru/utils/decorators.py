import functools
import logging

from kelasguru.core.models import ApiResult


def returns_api_result(default_error: str):
    """Любое исключение корутины превращается в ApiResult.fail"""
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                logging.getLogger(func.__module__).error(f"❌ Ошибка в {func.__name__}: {e}")
                return ApiResult.fail(str(e) or default_error)
        return wrapper
    return decorator
