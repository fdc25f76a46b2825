#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
KelasGuru Client - Models
Структуры результатов API и производные данные геймификации

Автор: KelasGuru Team
Версия: 1.0.0
Дата: 2025-06-20
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

# ===== ENUMS =====

class GradeStatus(Enum):
    """Статусы оценки"""
    NOT_CORRECTED = "Belum Dikoreksi"
    NOT_SUBMITTED = "Tidak Mengumpulkan"
    CORRECTED = "Dikoreksi"

# ===== УРОВНИ =====

# Пороги по убыванию: (минимальный XP, уровень)
LEVEL_THRESHOLDS: Tuple[Tuple[int, int], ...] = (
    (1500, 5),
    (700, 4),
    (300, 3),
    (100, 2),
)

NO_CLASS_LABEL = "Tanpa Kelas"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def calculate_level(xp: int) -> int:
    """Уровень 1-5 по суммарному XP"""
    for min_xp, level in LEVEL_THRESHOLDS:
        if xp >= min_xp:
            return level
    return 1


def coerce_xp(value: Any) -> int:
    """Количество XP из записи: целая часть, нечисловое значение даёт 0"""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value and abs(value) != float("inf") else 0
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def sum_xp(records: List[Dict[str, Any]]) -> int:
    return sum(coerce_xp(record.get("jumlah_xp")) for record in records)


def first_truthy(*values: Any, default: Any = None) -> Any:
    """Первое непустое значение из списка приоритетов"""
    for value in values:
        if value:
            return value
    return default


def same_id(left: Any, right: Any) -> bool:
    """Сравнение идентификаторов из таблицы (число и строка считаются равными)"""
    if left is None or right is None:
        return False
    return str(left) == str(right)

# ===== РЕЗУЛЬТАТ API =====

@dataclass
class ApiResult:
    """Ответ backend: {success, data, error} плюс прочие поля как есть"""
    success: bool
    data: Any = None
    error: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.success

    @property
    def has_list(self) -> bool:
        return self.success and isinstance(self.data, list)

    @classmethod
    def succeed(cls, data: Any = None, **extra) -> "ApiResult":
        return cls(success=True, data=data, extra=extra)

    @classmethod
    def fail(cls, error: str, data: Any = None) -> "ApiResult":
        return cls(success=False, data=data, error=error)

    def to_dict(self) -> Dict[str, Any]:
        payload = dict(self.extra)
        payload.update({
            "success": self.success,
            "data": self.data,
            "error": self.error,
        })
        return payload

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ApiResult":
        extra = {k: v for k, v in payload.items() if k not in ("success", "data", "error")}
        error = payload.get("error")
        return cls(
            success=payload.get("success") is True,
            data=payload.get("data"),
            error=str(error) if error is not None else None,
            extra=extra,
        )

    def __str__(self) -> str:
        if self.success:
            return "Success"
        return f"Error: {self.error or ''}"

# ===== ГЕЙМИФИКАЦИЯ =====

@dataclass
class BadgeDetail:
    """Бейдж студента, объединённый с определением бейджа"""
    id: Any
    nama_badge: Any = None
    deskripsi: Any = None
    icon_url: Any = None
    xp_reward: Any = None
    tanggal_perolehan: Any = None

    @classmethod
    def merge(cls, assignment: Dict[str, Any], definition: Dict[str, Any]) -> "BadgeDetail":
        return cls(
            id=assignment.get("id"),
            nama_badge=definition.get("nama_badge"),
            deskripsi=definition.get("deskripsi"),
            icon_url=definition.get("icon_url"),
            xp_reward=definition.get("xp_reward"),
            tanggal_perolehan=assignment.get("tanggal_perolehan"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "nama_badge": self.nama_badge,
            "deskripsi": self.deskripsi,
            "icon_url": self.icon_url,
            "xp_reward": self.xp_reward,
            "tanggal_perolehan": self.tanggal_perolehan,
        }


@dataclass
class StudentSummary:
    """Строка таблицы лидеров (не хранится в backend)"""
    id: Any
    xp: int = 0
    level: int = 1
    nama: Optional[str] = None
    kelas_id: Any = None
    kelas_nama: Optional[str] = None

    def add_xp(self, amount: Any) -> None:
        self.xp += coerce_xp(amount)

    def refresh_level(self) -> int:
        self.level = calculate_level(self.xp)
        return self.level

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "xp": self.xp, "level": self.level}
        if self.nama is not None:
            data["nama"] = self.nama
        if self.kelas_id is not None:
            data["kelas_id"] = self.kelas_id
        if self.kelas_nama is not None:
            data["kelas_nama"] = self.kelas_nama
        return data
