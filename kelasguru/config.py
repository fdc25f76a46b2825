#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
KelasGuru Client - Configuration
Настройки клиента с загрузкой из переменных окружения и .env

Автор: KelasGuru Team
Версия: 1.0.0
Дата: 2025-06-20
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = (
    "https://script.google.com/macros/s/"
    "AKfycbxsXNa_SLVyp9zio3G7wxoeyU57TPN-rTXQ6_VtOmlNVb4UzSRoP1-emKTLKu54RP3xUQ/exec"
)


class ClientSettings(BaseSettings):
    """Настройки клиента KelasGuru"""

    model_config = SettingsConfigDict(
        env_prefix="KELASGURU_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===== ОСНОВНЫЕ НАСТРОЙКИ =====

    ENVIRONMENT: str = Field(
        default="development",
        description="Среда выполнения (development/production/testing)"
    )

    # ===== BACKEND =====

    API_URL: str = Field(
        default=DEFAULT_API_URL,
        description="URL опубликованного веб-приложения Apps Script"
    )

    REQUEST_TIMEOUT: float = Field(
        default=30.0,
        description="Таймаут одного HTTP запроса в секундах"
    )

    BADGE_CACHE_TTL: float = Field(
        default=60.0,
        description="Время жизни кэша определений бейджей в секундах"
    )

    # ===== СЕССИЯ СТУДЕНТА =====

    SESSION_FILE: Path = Field(
        default=Path("data/session.json"),
        description="Файл локального хранилища сессии"
    )

    SESSION_KEY: str = Field(
        default="kelasguru_siswa",
        description="Ключ, под которым хранится сессия студента"
    )

    LOGIN_PAGE: str = Field(
        default="siswa-login.html",
        description="Страница входа студента"
    )

    HOME_PAGE: str = Field(
        default="index.html",
        description="Стартовая страница после выхода"
    )

    # ===== ЛОГИРОВАНИЕ =====

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Уровень логирования (DEBUG/INFO/WARNING/ERROR/CRITICAL)"
    )

    LOG_FORMAT: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        description="Формат логов"
    )

    LOG_FILE: Optional[Path] = Field(
        default=Path("logs/kelasguru.log"),
        description="Файл логов"
    )

    LOG_TO_FILE: bool = Field(
        default=False,
        description="Писать ли логи в файл"
    )

    # ===== ВАЛИДАТОРЫ =====

    @field_validator('ENVIRONMENT')
    @classmethod
    def validate_environment(cls, v):
        """Валидация среды выполнения"""
        allowed_envs = ['development', 'production', 'testing', 'staging']
        if v.lower() not in allowed_envs:
            raise ValueError(f"ENVIRONMENT must be one of {allowed_envs}")
        return v.lower()

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        """Валидация уровня логирования"""
        allowed_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in allowed_levels:
            raise ValueError(f"LOG_LEVEL must be one of {allowed_levels}")
        return v.upper()

    @field_validator('API_URL')
    @classmethod
    def validate_api_url(cls, v):
        """Валидация адреса backend"""
        if not v.startswith(('http://', 'https://')):
            raise ValueError("API_URL must be an http(s) URL")
        return v

    @field_validator('REQUEST_TIMEOUT', 'BADGE_CACHE_TTL')
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError("value must be positive")
        return v


@lru_cache()
def get_settings() -> ClientSettings:
    """Получить экземпляр настроек (один на процесс)"""
    return ClientSettings()
