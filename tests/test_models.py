# tests/test_models.py

import pytest

from kelasguru.core.models import (
    ApiResult, StudentSummary, calculate_level, coerce_xp, first_truthy, same_id, sum_xp,
)


@pytest.mark.parametrize("xp,level", [
    (0, 1), (99, 1), (100, 2), (299, 2), (300, 3),
    (699, 3), (700, 4), (1499, 4), (1500, 5), (10_000, 5), (-20, 1),
])
def test_calculate_level_thresholds(xp, level):
    assert calculate_level(xp) == level


def test_calculate_level_is_monotonic():
    levels = [calculate_level(xp) for xp in range(0, 2000)]
    assert levels == sorted(levels)


@pytest.mark.parametrize("value,expected", [
    (None, 0), ("", 0), ("abc", 0), (True, 0),
    (50, 50), ("60", 60), (" 25 ", 25), ("12.9", 12), (7.8, 7), ("30xp", 30), ("-5", -5),
])
def test_coerce_xp(value, expected):
    assert coerce_xp(value) == expected


def test_sum_xp_ignores_missing_amounts():
    records = [{"jumlah_xp": "50"}, {"jumlah_xp": None}, {}, {"jumlah_xp": 60}, {"jumlah_xp": "n/a"}]
    assert sum_xp(records) == 110


def test_first_truthy_precedence():
    assert first_truthy(None, "", "b", "c") == "b"
    assert first_truthy(None, "", default="x") == "x"
    assert first_truthy() is None


def test_same_id_normalises_numbers_and_strings():
    assert same_id(5, "5")
    assert not same_id("S1", "S2")
    assert not same_id(None, None)


def test_api_result_from_dict_keeps_extra_fields():
    result = ApiResult.from_dict({"success": True, "data": [1], "total": 40, "page": 2})

    assert result.success
    assert result.data == [1]
    assert result.extra == {"total": 40, "page": 2}
    assert result.to_dict() == {"total": 40, "page": 2, "success": True, "data": [1], "error": None}


def test_api_result_failure_shape():
    result = ApiResult.fail("boom")

    assert not result.ok
    assert result.to_dict() == {"success": False, "data": None, "error": "boom"}
    assert str(result) == "Error: boom"


def test_api_result_success_must_be_true_boolean():
    assert not ApiResult.from_dict({"success": "false"}).success


def test_student_summary_omits_unknown_fields():
    summary = StudentSummary(id="S9")
    summary.add_xp("40")
    summary.add_xp(70)
    summary.refresh_level()

    assert summary.to_dict() == {"id": "S9", "xp": 110, "level": 2}
