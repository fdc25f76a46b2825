# services/api.py

"""Единый фасад всех сервисов KelasGuru"""

import logging
from typing import Any, Optional

from kelasguru.config import ClientSettings, get_settings
from kelasguru.core.cache import TTLCache
from kelasguru.core.models import ApiResult
from kelasguru.core.transport import ApiClient
from kelasguru.services import entities
from kelasguru.services.gamification import GamificationService
from kelasguru.services.grades import GradeService
from kelasguru.services.session import login, student_login

logger = logging.getLogger(__name__)


class KelasGuruApi:
    """
    Доступ ко всем операциям backend через один объект.

    Пример:
        async with KelasGuruApi() as api:
            kelas = await api.kelas.get()
            board = await api.get_siswa_leaderboard()
    """

    def __init__(self, client: Optional[ApiClient] = None, settings: Optional[ClientSettings] = None,
                 badge_cache: Optional[TTLCache] = None):
        self.settings = settings or (client.settings if client is not None else get_settings())
        self.client = client or ApiClient(self.settings)

        self.kelas = entities.KelasService(self.client)
        self.siswa = entities.SiswaService(self.client)
        self.tugas = entities.TugasService(self.client)
        self.nilai = entities.NilaiService(self.client)
        self.presensi = entities.PresensiService(self.client)
        self.detail_presensi = entities.DetailPresensiService(self.client)
        self.event = entities.EventService(self.client)
        self.jurnal = entities.JurnalService(self.client)
        self.bank_soal = entities.BankSoalService(self.client)
        self.gamifikasi_xp = entities.GamifikasiXPService(self.client)
        self.gamifikasi_badge = entities.GamifikasiBadgeService(self.client)
        self.siswa_badge = entities.SiswaBadgeService(self.client)

        self.grades = GradeService(self.client)
        self.gamification = GamificationService(
            self.client,
            badge_cache or TTLCache(ttl_seconds=self.settings.BADGE_CACHE_TTL),
        )

    async def __aenter__(self) -> "KelasGuruApi":
        await self.client.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.client.close()

    # ===== АВТОРИЗАЦИЯ =====

    async def login(self, username: str, password: str) -> ApiResult:
        return await login(self.client, username, password)

    async def student_login(self, nis: str, password: str) -> ApiResult:
        return await student_login(self.client, nis, password)

    # ===== СТУДЕНЧЕСКИЙ КАБИНЕТ =====

    async def get_siswa_nilai(self, siswa_id: Any) -> ApiResult:
        return await self.grades.get_siswa_nilai(siswa_id)

    async def get_siswa_gamification(self, siswa_id: Any) -> ApiResult:
        return await self.gamification.get_siswa_gamification(siswa_id)

    async def get_siswa_leaderboard(self) -> ApiResult:
        return await self.gamification.get_siswa_leaderboard()

    # ===== LEGACY =====

    async def get_inventaris(self) -> ApiResult:
        """Старое действие, оставлено для совместимости"""
        return await self.client.call("getInventaris")
