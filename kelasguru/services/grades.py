#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
KelasGuru Client - Student Grades
Оценки студента, дополненные данными из учительских таблиц

Автор: KelasGuru Team
Версия: 1.0.0
Дата: 2025-06-20
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from kelasguru.core.models import ApiResult, GradeStatus, first_truthy, same_id
from kelasguru.core.transport import ApiClient
from kelasguru.utils.tasks import gather_settled

logger = logging.getLogger(__name__)

DEFAULT_TUGAS_TITLE = "Tugas"
DEFAULT_TUGAS_CATEGORY = "Umum"


def iso_now() -> str:
    """Текущее время в формате ISO 8601 (UTC, миллисекунды, суффикс Z)"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _is_missing_score(value: Any) -> bool:
    return value is None or value == ""


def _is_zero_score(value: Any) -> bool:
    try:
        return float(value) == 0
    except (TypeError, ValueError):
        return False


def derive_grade_status(grade: Dict[str, Any]) -> str:
    """Статус оценки: явный из записи или выведенный по баллу"""
    if grade.get("status"):
        return grade["status"]
    score = grade.get("nilai")
    if _is_missing_score(score):
        return GradeStatus.NOT_CORRECTED.value
    if _is_zero_score(score):
        return GradeStatus.NOT_SUBMITTED.value
    return GradeStatus.CORRECTED.value


class GradeService:
    """Оценки для студенческого кабинета"""

    def __init__(self, client: ApiClient, now: Callable[[], str] = iso_now):
        self.client = client
        self.now = now

    async def get_siswa_nilai(self, siswa_id: Any) -> ApiResult:
        """
        Оценки студента. Ответ студенческого endpoint дополняется статусом,
        комментарием, датой и вложенным заданием из учительских endpoint'ов.
        Дополнение необязательно: при любой ошибке возвращается исходный ответ.
        """
        try:
            response = await self.client.call("getSiswaNilai", {"siswa_id": siswa_id})
        except Exception as e:
            logger.error(f"❌ Ошибка получения оценок студента: {e}")
            return ApiResult.fail(str(e))

        if not response.has_list:
            return response

        try:
            enhanced = await self._enhance(siswa_id, response.data)
        except Exception as e:
            logger.warning(f"⚠️ Не удалось дополнить оценки данными учителя: {e}")
            return response

        if enhanced is None:
            return response
        return ApiResult.succeed(enhanced)

    async def _enhance(self, siswa_id: Any, grades: List[Dict[str, Any]]) -> Optional[List[Dict[str, Any]]]:
        all_grades_response, tugas_response = await gather_settled(
            self.client.call("getNilai"),
            self.client.call("getTugas"),
        )

        if not all_grades_response.has_list:
            return None

        tugas_map: Dict[str, Dict[str, Any]] = {}
        if tugas_response.has_list:
            for tugas in tugas_response.data:
                if tugas.get("id"):
                    tugas_map[str(tugas["id"])] = tugas

        # Статус выводится до индексации, чтобы поиск по id видел его
        processed = [
            {**grade, "status": derive_grade_status(grade)}
            for grade in all_grades_response.data
        ]

        grades_map: Dict[str, Dict[str, Any]] = {}
        for grade in processed:
            if not same_id(grade.get("siswa_id"), siswa_id):
                continue
            grade_id = grade.get("id") or grade.get("nilai_id")
            if grade_id:
                grades_map[str(grade_id)] = grade

        return [self._enhance_grade(grade, grades_map, tugas_map) for grade in grades]

    def _enhance_grade(self, grade: Dict[str, Any], grades_map: Dict[str, Dict[str, Any]],
                       tugas_map: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
        full = grades_map.get(str(grade.get("id")), {})
        tugas_id = first_truthy(full.get("tugas_id"), grade.get("tugas_id"))
        tugas = tugas_map.get(str(tugas_id), {}) if tugas_id else {}

        enhanced = {
            **grade,
            "status": first_truthy(full.get("status"), grade.get("status"),
                                   default=GradeStatus.NOT_CORRECTED.value),
            "komentar": first_truthy(full.get("komentar"), grade.get("komentar"), default=""),
            "tanggal": first_truthy(full.get("tanggal_penilaian"), grade.get("tanggal_penilaian"),
                                    grade.get("created_at")) or self.now(),
        }

        nested = grade.get("tugas")
        if not isinstance(nested, dict):
            enhanced["tugas"] = {
                "id": tugas_id,
                "judul": first_truthy(tugas.get("judul"), full.get("judul"), grade.get("judul"),
                                      default=DEFAULT_TUGAS_TITLE),
                "kategori": first_truthy(tugas.get("kategori"), full.get("kategori"), grade.get("kategori"),
                                         default=DEFAULT_TUGAS_CATEGORY),
                "tanggal": first_truthy(tugas.get("tanggal"), full.get("tanggal"), grade.get("tanggal"))
                           or self.now(),
            }
        else:
            enhanced["tugas"] = {
                **nested,
                "judul": first_truthy(nested.get("judul"), tugas.get("judul"), full.get("judul"),
                                      default=DEFAULT_TUGAS_TITLE),
                "kategori": first_truthy(nested.get("kategori"), tugas.get("kategori"), full.get("kategori"),
                                         default=DEFAULT_TUGAS_CATEGORY),
                "tanggal": first_truthy(nested.get("tanggal"), tugas.get("tanggal"), full.get("tanggal"))
                           or self.now(),
            }

        return enhanced
