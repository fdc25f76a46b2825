# services/entities.py

"""
CRUD обёртки для сущностей KelasGuru.

Каждый метод формирует параметры и делегирует ApiClient.call; имя действия
строится как <операция><Сущность>, например getKelas или deleteSiswa.
Проверок на стороне клиента нет: ответ backend возвращается как есть.
"""

import logging
from typing import Any, Dict, List, Optional

from kelasguru.core.models import ApiResult
from kelasguru.core.transport import ApiClient

logger = logging.getLogger(__name__)


class EntityService:
    """Базовые операции над одним типом сущности"""

    entity_type: str = ""

    def __init__(self, client: ApiClient, entity_type: Optional[str] = None):
        self.client = client
        if entity_type:
            self.entity_type = entity_type
        if not self.entity_type:
            raise ValueError("entity_type is required")

    def _action(self, operation: str) -> str:
        return f"{operation}{self.entity_type}"

    async def get_all(self) -> ApiResult:
        return await self.client.call(self._action("get"))

    async def get_by_id(self, id: Any) -> ApiResult:
        return await self.client.call(self._action("get"), {"id": id})

    async def get(self, id: Any = None) -> ApiResult:
        """Без id - все записи, с id - одна"""
        return await self.get_by_id(id) if id else await self.get_all()

    async def get_filtered(self, **filters: Any) -> ApiResult:
        """get<E> только с заданными (непустыми) фильтрами"""
        params = {key: value for key, value in filters.items() if value}
        return await self.client.call(self._action("get"), params)

    async def get_paginated(self, page: int = 1, page_size: int = 10,
                            filters: Optional[Dict[str, Any]] = None) -> ApiResult:
        params = {"page": page, "pageSize": page_size, **(filters or {}), "paginated": True}
        return await self.client.call(self._action("get"), params)

    async def create(self, data: Dict[str, Any]) -> ApiResult:
        return await self.client.call(self._action("create"), dict(data))

    async def update(self, id: Any, data: Dict[str, Any]) -> ApiResult:
        """Поля со значением None не отправляются"""
        return await self.client.call(self._action("update"), {"id": id, **data})

    async def delete(self, id: Any) -> ApiResult:
        return await self.client.call(self._action("delete"), {"id": id})

# ===== СУЩНОСТИ =====

class KelasService(EntityService):
    """Классы"""
    entity_type = "Kelas"

    async def fetch_class_options(self) -> List[Dict[str, Any]]:
        """Список классов для выпадающих списков; [] при ошибке"""
        try:
            response = await self.get()
        except Exception as e:
            logger.error(f"❌ Исключение при загрузке классов: {e}")
            return []

        if response.has_list:
            return response.data
        logger.error(f"❌ Ошибка загрузки классов: {response.error or 'Unknown error'}")
        return []


class SiswaService(EntityService):
    """Студенты. backend читает id из id или siswa_id, поэтому отправляем оба"""
    entity_type = "Siswa"

    async def get(self, id: Any = None, kelas_id: Any = None) -> ApiResult:
        return await self.get_filtered(id=id, kelas_id=kelas_id)

    async def update(self, id: Any, data: Dict[str, Any]) -> ApiResult:
        params = {**data, "id": str(id), "siswa_id": str(id)}
        return await self.client.call("updateSiswa", params)

    async def delete(self, id: Any) -> ApiResult:
        return await self.client.call("deleteSiswa", {"id": str(id), "siswa_id": str(id)})


class TugasService(EntityService):
    """Задания"""
    entity_type = "Tugas"

    async def get(self, id: Any = None, kelas_id: Any = None) -> ApiResult:
        return await self.get_filtered(id=id, kelas_id=kelas_id)


class NilaiService(EntityService):
    """Оценки (учительский доступ)"""
    entity_type = "Nilai"

    async def get(self, id: Any = None, siswa_id: Any = None, tugas_id: Any = None) -> ApiResult:
        return await self.get_filtered(id=id, siswa_id=siswa_id, tugas_id=tugas_id)


class PresensiService(EntityService):
    """Посещаемость"""
    entity_type = "Presensi"

    async def get(self, id: Any = None, kelas_id: Any = None, tanggal: Any = None) -> ApiResult:
        return await self.get_filtered(id=id, kelas_id=kelas_id, tanggal=tanggal)


class DetailPresensiService(EntityService):
    entity_type = "DetailPresensi"

    async def get(self, id: Any = None, presensi_id: Any = None, siswa_id: Any = None) -> ApiResult:
        return await self.get_filtered(id=id, presensi_id=presensi_id, siswa_id=siswa_id)


class EventService(EntityService):
    """События"""
    entity_type = "Event"

    async def get_events(self, id: Any = None) -> ApiResult:
        return await self.get(id)


class JurnalService(EntityService):
    """Журналы уроков"""
    entity_type = "Jurnal"

    async def get(self, id: Any = None, kelas_id: Any = None) -> ApiResult:
        return await self.get_filtered(id=id, kelas_id=kelas_id)


class BankSoalService(EntityService):
    """Банк вопросов"""
    entity_type = "BankSoal"

    async def get(self, id: Any = None, kategori: Any = None) -> ApiResult:
        return await self.get_filtered(id=id, kategori=kategori)


class GamifikasiXPService(EntityService):
    """Записи начисления XP"""
    entity_type = "GamifikasiXP"

    async def get(self, siswa_id: Any = None) -> ApiResult:
        return await self.get_filtered(siswa_id=siswa_id)


class GamifikasiBadgeService(EntityService):
    """Определения бейджей"""
    entity_type = "GamifikasiBadge"


class SiswaBadgeService(EntityService):
    """Выданные студентам бейджи"""
    entity_type = "SiswaBadge"

    async def get(self, siswa_id: Any = None) -> ApiResult:
        return await self.get_filtered(siswa_id=siswa_id)
