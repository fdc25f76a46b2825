#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
KelasGuru Client - Transport
Единая точка обращения к backend Apps Script с запасным JSONP каналом

Автор: KelasGuru Team
Версия: 1.0.0
Дата: 2025-06-20
"""

import asyncio
import json
import logging
import re
import time
import uuid
from typing import Any, Dict, Optional

import aiohttp

from kelasguru.config import ClientSettings, get_settings
from kelasguru.core.exceptions import JsonpError, KelasGuruError, MalformedResponseError, TransportError
from kelasguru.core.models import ApiResult

logger = logging.getLogger(__name__)

JSONP_FAILURE_MESSAGE = "Failed to load data via JSONP"

_TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, ValueError, KelasGuruError)


def encode_value(value: Any) -> str:
    """Значение параметра для form/query кодирования"""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def encode_params(params: Optional[Dict[str, Any]]) -> Dict[str, str]:
    """Параметры запроса; None пропускается"""
    return {key: encode_value(value) for key, value in (params or {}).items() if value is not None}


def unwrap_jsonp(body: str, callback_name: str) -> Any:
    """Достаёт JSON из ответа вида callbackName({...});"""
    pattern = re.compile(
        r"^\s*(?:/\*\*/\s*)?" + re.escape(callback_name) + r"\s*\((.*)\)\s*;?\s*$",
        re.DOTALL,
    )
    match = pattern.match(body)
    if not match:
        raise JsonpError(f"Ответ не вызывает {callback_name}")
    try:
        return json.loads(match.group(1))
    except ValueError as e:
        raise JsonpError(f"Некорректный JSON в JSONP ответе: {e}") from e


class ApiClient:
    """Асинхронный клиент backend: POST без доп. заголовков, при сбое GET с callback"""

    def __init__(self, settings: Optional[ClientSettings] = None,
                 session: Optional[aiohttp.ClientSession] = None):
        self.settings = settings or get_settings()
        self.api_url = self.settings.API_URL
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "ApiClient":
        self._get_session()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.settings.REQUEST_TIMEOUT)
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Закрыть HTTP сессию, если клиент её создал"""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    # ===== ОСНОВНОЙ ВЫЗОВ =====

    async def call(self, action: str, params: Optional[Dict[str, Any]] = None) -> ApiResult:
        """Вызов действия backend. Никогда не выбрасывает ошибки транспорта"""
        params = params or {}
        logger.debug(f"📡 API {action} {params}")
        try:
            result = await self._post(action, params)
            logger.debug(f"📥 API {action}: success={result.success}")
            return result
        except _TRANSPORT_ERRORS as e:
            logger.warning(f"⚠️ API {action} не удался ({e}), пробуем JSONP")
            return await self._call_jsonp(action, params)

    async def _post(self, action: str, params: Dict[str, Any]) -> ApiResult:
        form = encode_params({"action": action, **params})
        session = self._get_session()
        async with session.post(self.api_url, data=form) as response:
            if not 200 <= response.status < 300:
                raise TransportError(f"HTTP error! status: {response.status}", status=response.status)
            payload = await response.json(content_type=None)
        return self._parse_payload(payload)

    @staticmethod
    def _parse_payload(payload: Any) -> ApiResult:
        if not isinstance(payload, dict) or "success" not in payload:
            raise MalformedResponseError(f"Неожиданный ответ backend: {payload!r}")
        return ApiResult.from_dict(payload)

    # ===== JSONP =====

    @staticmethod
    def new_callback_name() -> str:
        """Уникальное имя callback для одного JSONP запроса"""
        return f"jsonpCallback_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"

    async def _call_jsonp(self, action: str, params: Dict[str, Any]) -> ApiResult:
        callback_name = self.new_callback_name()
        query = {"action": action, "callback": callback_name, **encode_params(params)}
        try:
            session = self._get_session()
            async with session.get(self.api_url, params=query) as response:
                if not 200 <= response.status < 300:
                    raise JsonpError(f"HTTP error! status: {response.status}")
                body = await response.text()
            result = self._parse_payload(unwrap_jsonp(body, callback_name))
        except _TRANSPORT_ERRORS as e:
            logger.error(f"❌ JSONP {action} не удался: {e}")
            return ApiResult.fail(JSONP_FAILURE_MESSAGE)

        logger.info(f"✅ API {action} выполнен через JSONP")
        return result
