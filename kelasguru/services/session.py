#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
KelasGuru Client - Student Session
Вход, проверка и выход студента с локальным хранением сессии

Автор: KelasGuru Team
Версия: 1.0.0
Дата: 2025-06-20
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from kelasguru.config import ClientSettings, get_settings
from kelasguru.core.exceptions import SessionError
from kelasguru.core.models import ApiResult
from kelasguru.core.transport import ApiClient

logger = logging.getLogger(__name__)

# ===== ЛОКАЛЬНОЕ ХРАНИЛИЩЕ =====

class SessionStore:
    """Строковое key/value хранилище в JSON файле (аналог localStorage)"""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load_json(self) -> Dict[str, str]:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            return {}
        return data if isinstance(data, dict) else {}

    def _save_json(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def get_item(self, key: str) -> Optional[str]:
        return self._load_json().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load_json()
        data[key] = value
        self._save_json(data)

    def remove_item(self, key: str) -> None:
        data = self._load_json()
        if key in data:
            del data[key]
            self._save_json(data)

# ===== НАВИГАЦИЯ =====

class Navigator:
    """Переход на другую страницу; реализуется приложением"""

    def redirect(self, location: str) -> None:
        raise NotImplementedError


class LoggingNavigator(Navigator):
    """Только записывает последнюю запрошенную страницу"""

    def __init__(self):
        self.location: Optional[str] = None

    def redirect(self, location: str) -> None:
        logger.info(f"↪️ Переход на {location}")
        self.location = location

# ===== СЕССИЯ СТУДЕНТА =====

async def login(client: ApiClient, username: str, password: str) -> ApiResult:
    """Вход учителя"""
    return await client.call("login", {"username": username, "password": password})


async def student_login(client: ApiClient, nis: str, password: str) -> ApiResult:
    """Вход студента по NIS"""
    return await client.call("studentLogin", {"nis": nis, "password": password})


class StudentSession:
    """Сессия студенческого кабинета"""

    def __init__(self, store: Optional[SessionStore] = None, navigator: Optional[Navigator] = None,
                 settings: Optional[ClientSettings] = None):
        self.settings = settings or get_settings()
        self.store = store or SessionStore(self.settings.SESSION_FILE)
        self.navigator = navigator or LoggingNavigator()
        self.key = self.settings.SESSION_KEY

    def _read(self) -> Optional[Dict[str, Any]]:
        raw = self.store.get_item(self.key)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            raise SessionError(f"Повреждённая сессия: {e}") from e

    def check_login(self) -> Optional[Dict[str, Any]]:
        """Данные студента или None с переходом на страницу входа"""
        try:
            session = self._read()
        except SessionError as e:
            logger.warning(f"⚠️ {e}, сессия удалена")
            self.store.remove_item(self.key)
            self.navigator.redirect(self.settings.LOGIN_PAGE)
            return None

        if session is None:
            self.navigator.redirect(self.settings.LOGIN_PAGE)
            return None
        return session

    def logout(self) -> None:
        self.store.remove_item(self.key)
        logger.info("👋 Студент вышел")
        self.navigator.redirect(self.settings.HOME_PAGE)

    async def login(self, client: ApiClient, nis: str, password: str) -> ApiResult:
        """Вход студента; при успехе данные сохраняются в хранилище"""
        result = await student_login(client, nis, password)
        if result.success and result.data is not None:
            self.store.set_item(self.key, json.dumps(result.data, ensure_ascii=False))
            logger.info(f"✅ Студент {nis} вошёл")
        return result
