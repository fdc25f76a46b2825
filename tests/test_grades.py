# tests/test_grades.py

import asyncio

import pytest

from conftest import fail, ok
from kelasguru.core.models import GradeStatus
from kelasguru.services.grades import GradeService, derive_grade_status

NOW = "2025-06-20T08:00:00.000Z"


@pytest.fixture
def service(fake_client):
    return GradeService(fake_client, now=lambda: NOW)


@pytest.mark.parametrize("grade,status", [
    ({}, "Belum Dikoreksi"),
    ({"nilai": None}, "Belum Dikoreksi"),
    ({"nilai": ""}, "Belum Dikoreksi"),
    ({"nilai": 0}, "Tidak Mengumpulkan"),
    ({"nilai": "0"}, "Tidak Mengumpulkan"),
    ({"nilai": 85}, "Dikoreksi"),
    ({"nilai": "72.5"}, "Dikoreksi"),
    ({"nilai": 0, "status": "Remedial"}, "Remedial"),
])
def test_derive_grade_status(grade, status):
    assert derive_grade_status(grade) == status


def test_grade_status_values():
    assert [s.value for s in GradeStatus] == ["Belum Dikoreksi", "Tidak Mengumpulkan", "Dikoreksi"]


async def test_grades_are_enhanced_from_teacher_data(service, fake_client):
    fake_client.responses = {
        "getSiswaNilai": ok([
            {"id": "N1", "tugas_id": "T1", "nilai": 90},
            {"id": "N2", "tugas_id": "T2", "nilai": 0},
            {"id": "N3", "nilai": None, "created_at": "2025-03-01"},
        ]),
        "getNilai": ok([
            {"id": "N1", "siswa_id": "S1", "tugas_id": "T1", "nilai": 90,
             "komentar": "Bagus", "tanggal_penilaian": "2025-02-10"},
            {"id": "N2", "siswa_id": "S1", "tugas_id": "T2", "nilai": 0},
            {"id": "N3", "siswa_id": "S1", "judul": "Proyek"},
            {"id": "N1", "siswa_id": "S2", "nilai": 10, "komentar": "other student"},
        ]),
        "getTugas": ok([
            {"id": "T1", "judul": "Aljabar", "kategori": "PR", "tanggal": "2025-02-01"},
        ]),
    }

    result = await service.get_siswa_nilai("S1")

    assert result.success
    first, second, third = result.data

    assert first["status"] == "Dikoreksi"
    assert first["komentar"] == "Bagus"
    assert first["tanggal"] == "2025-02-10"
    assert first["tugas"] == {"id": "T1", "judul": "Aljabar", "kategori": "PR", "tanggal": "2025-02-01"}

    assert second["status"] == "Tidak Mengumpulkan"
    assert second["komentar"] == ""
    assert second["tanggal"] == NOW
    assert second["tugas"] == {"id": "T2", "judul": "Tugas", "kategori": "Umum", "tanggal": NOW}

    assert third["status"] == "Belum Dikoreksi"
    assert third["tanggal"] == "2025-03-01"
    assert third["tugas"]["judul"] == "Proyek"
    assert third["tugas"]["id"] is None

    assert fake_client.calls[0] == ("getSiswaNilai", {"siswa_id": "S1"})


async def test_existing_nested_tugas_is_filled_not_replaced(service, fake_client):
    fake_client.responses = {
        "getSiswaNilai": ok([
            {"id": "N1", "tugas_id": "T1", "tugas": {"id": "T1", "judul": "Dari siswa", "kategori": ""}},
        ]),
        "getNilai": ok([{"id": "N1", "siswa_id": "S1", "tugas_id": "T1", "nilai": 70}]),
        "getTugas": ok([{"id": "T1", "judul": "Dari guru", "kategori": "UH", "tanggal": "2025-01-05"}]),
    }

    result = await service.get_siswa_nilai("S1")

    assert result.data[0]["tugas"] == {
        "id": "T1", "judul": "Dari siswa", "kategori": "UH", "tanggal": "2025-01-05",
    }


async def test_student_endpoint_failure_is_returned_unchanged(service, fake_client):
    failure = fail("Siswa tidak ditemukan")
    fake_client.responses = {"getSiswaNilai": failure}

    result = await service.get_siswa_nilai("S1")

    assert result is failure
    assert fake_client.actions() == ["getSiswaNilai"]


async def test_teacher_grade_failure_keeps_original_list(service, fake_client):
    original = ok([{"id": "N1", "nilai": 80}])
    fake_client.responses = {
        "getSiswaNilai": original,
        "getNilai": fail(),
        "getTugas": ok([]),
    }

    assert await service.get_siswa_nilai("S1") is original


async def test_enhancement_exception_keeps_original_list(service, fake_client):
    original = ok([{"id": "N1", "nilai": 80}])
    fake_client.responses = {
        "getSiswaNilai": original,
        "getNilai": RuntimeError("network down"),
        "getTugas": ok([]),
    }

    result = await service.get_siswa_nilai("S1")

    assert result.success
    assert result.data == [{"id": "N1", "nilai": 80}]


async def test_missing_assignments_do_not_block_enhancement(service, fake_client):
    fake_client.responses = {
        "getSiswaNilai": ok([{"id": 5, "tugas_id": 9}]),
        "getNilai": ok([{"id": 5, "siswa_id": 1, "nilai": 100}]),
        "getTugas": fail(),
    }

    result = await service.get_siswa_nilai(1)

    assert result.data[0]["status"] == "Dikoreksi"
    assert result.data[0]["tugas"]["judul"] == "Tugas"


async def test_enhancement_failure_waits_for_assignment_fetch(service, fake_client):
    finished = []

    async def slow_tugas(params):
        await asyncio.sleep(0.05)
        finished.append("getTugas")
        return ok([])

    original = ok([{"id": "N1", "nilai": 80}])
    fake_client.responses = {
        "getSiswaNilai": original,
        "getNilai": RuntimeError("network down"),
        "getTugas": slow_tugas,
    }

    assert await service.get_siswa_nilai("S1") is original
    assert finished == ["getTugas"]
