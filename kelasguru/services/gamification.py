#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
KelasGuru Client - Gamification
Сводка геймификации студента и таблица лидеров

Автор: KelasGuru Team
Версия: 1.0.0
Дата: 2025-06-20
"""

import logging
from typing import Any, Dict, List, Optional

from kelasguru.core.cache import TTLCache
from kelasguru.core.models import (
    NO_CLASS_LABEL, ApiResult, BadgeDetail, StudentSummary, calculate_level, coerce_xp, same_id, sum_xp,
)
from kelasguru.core.transport import ApiClient
from kelasguru.utils.decorators import returns_api_result
from kelasguru.utils.tasks import gather_settled

logger = logging.getLogger(__name__)

BADGE_CACHE_KEY = "badges"


def class_display_name(kelas: Dict[str, Any]) -> str:
    """Отображаемое имя класса: nama_kelas, затем nama, затем 'Kelas {id}'"""
    return kelas.get("nama_kelas") or kelas.get("nama") or f"Kelas {kelas.get('id')}"


def merge_badges(siswa_id: Any, definitions: List[Dict[str, Any]],
                 assignments: List[Dict[str, Any]]) -> List[BadgeDetail]:
    """Бейджи студента с деталями определения; без определения - отбрасываются"""
    badge_map = {str(badge.get("id")): badge for badge in definitions}
    merged = []
    for assignment in assignments:
        if not same_id(assignment.get("siswa_id"), siswa_id):
            continue
        definition = badge_map.get(str(assignment.get("badge_id")))
        if definition is not None:
            merged.append(BadgeDetail.merge(assignment, definition))
    return merged


class GamificationService:
    """XP, уровни и бейджи студентов"""

    def __init__(self, client: ApiClient, badge_cache: Optional[TTLCache] = None):
        self.client = client
        if badge_cache is None:
            badge_cache = TTLCache(ttl_seconds=client.settings.BADGE_CACHE_TTL)
        self.badge_cache = badge_cache

    # ===== БЕЙДЖИ =====

    async def get_badge_definitions(self) -> ApiResult:
        """Определения бейджей через общий кэш"""
        cached = self.badge_cache.get(BADGE_CACHE_KEY)
        if cached is not None:
            logger.debug("📦 Определения бейджей взяты из кэша")
            return ApiResult.succeed(cached)

        response = await self.client.call("getGamifikasiBadge")
        if response.success:
            self.badge_cache.set(BADGE_CACHE_KEY, response.data)
        return response

    # ===== СВОДКА СТУДЕНТА =====

    @returns_api_result("An error occurred while getting gamification data")
    async def get_siswa_gamification(self, siswa_id: Any) -> ApiResult:
        """
        Сводка геймификации одного студента.

        XP пересчитывается как сумма записей getGamifikasiXP, уровень
        всегда вычисляется заново, а бейджи собираются из выданных
        бейджей и определений.
        """
        gamification, xp_response, badges_response, student_badges_response = await gather_settled(
            self.client.call("getSiswaGamification", {"siswa_id": siswa_id}),
            self.client.call("getGamifikasiXP", {"siswa_id": siswa_id}),
            self.get_badge_definitions(),
            self.client.call("getSiswaBadge"),
        )

        if not gamification.success:
            return gamification

        data = gamification.data
        if not isinstance(data, dict):
            raise ValueError("Gamification data is missing")

        if xp_response.has_list:
            records = [xp for xp in xp_response.data if same_id(xp.get("siswa_id"), siswa_id)]
            data["xp"] = sum_xp(records)
        else:
            data["xp"] = coerce_xp(data.get("xp"))

        data["level"] = calculate_level(data["xp"])
        data["badges"] = []

        if badges_response.success and student_badges_response.success:
            badges = merge_badges(
                siswa_id,
                badges_response.data or [],
                student_badges_response.data or [],
            )
            data["badges"] = [badge.to_dict() for badge in badges]

        return gamification

    # ===== ТАБЛИЦА ЛИДЕРОВ =====

    @returns_api_result("An error occurred while getting leaderboard data")
    async def get_siswa_leaderboard(self) -> ApiResult:
        """Все студенты с суммой XP, уровнем, именем и классом"""
        response = await self.client.call("getGamifikasiXP")
        if not response.success:
            return ApiResult.fail(response.error or "Failed to fetch leaderboard data")

        summaries: Dict[str, StudentSummary] = {}
        for xp in response.data or []:
            key = str(xp.get("siswa_id"))
            if key not in summaries:
                summaries[key] = StudentSummary(id=xp.get("siswa_id"))
            summaries[key].add_xp(xp.get("jumlah_xp"))

        await self._attach_students(summaries)

        for summary in summaries.values():
            summary.refresh_level()

        return ApiResult.succeed([summary.to_dict() for summary in summaries.values()])

    async def _attach_students(self, summaries: Dict[str, StudentSummary]) -> None:
        """Имена и классы; ошибки этих запросов не мешают сумме XP"""
        student_response = await self.client.call("getSiswa")
        if not student_response.has_list:
            logger.warning(f"⚠️ Не удалось загрузить студентов: {student_response.error}")
            return

        students = {
            str(student["id"]): student
            for student in reversed(student_response.data)
            if student.get("id") is not None
        }
        for summary in summaries.values():
            if summary.id is None:
                continue
            student = students.get(str(summary.id))
            if student is not None:
                summary.nama = student.get("nama")
                summary.kelas_id = student.get("kelas_id")

        class_response = await self.client.call("getKelas")
        if not class_response.has_list:
            logger.warning(f"⚠️ Не удалось загрузить классы: {class_response.error}")
            return

        class_map = {str(kelas.get("id")): class_display_name(kelas) for kelas in class_response.data}
        for summary in summaries.values():
            if summary.kelas_id and str(summary.kelas_id) in class_map:
                summary.kelas_nama = class_map[str(summary.kelas_id)]
            else:
                summary.kelas_nama = NO_CLASS_LABEL
