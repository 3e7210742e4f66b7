"""Tests for validation and date helpers."""

from datetime import date

import pytest

from pembukuan.errors import ConflictError, ValidationError
from pembukuan.schemas.transactions import FileMetadataIn
from pembukuan.utils.date_utils import format_display_date, parse_filter_date, parse_transaction_date
from pembukuan.utils.validation import (
    OMZET_TRANSACTION_TYPES,
    PENGELUARAN_TRANSACTION_TYPES,
    ValidationResult,
    is_positive_number,
    is_valid_date_format,
    is_valid_file,
    is_valid_transaction_type,
    missing_fields,
    raise_for_result,
)


def test_missing_fields_reports_absent_and_falsy():
    payload = {"a": "x", "b": "", "c": 0, "d": None}
    assert missing_fields(payload, ["a", "b", "c", "d", "e"]) == ["b", "c", "d", "e"]


def test_missing_fields_empty_when_all_present():
    assert missing_fields({"a": 1, "b": "y"}, ["a", "b"]) == []


@pytest.mark.parametrize("value", ["25/12/2024", "01/01/2000", "29/02/2024"])
def test_valid_dates(value):
    assert is_valid_date_format(value)


@pytest.mark.parametrize("value", ["25-12-2024", "2024/12/25", "5/12/2024", "25122024", "31/02/2024", "", None, 20241225])
def test_invalid_dates(value):
    assert not is_valid_date_format(value)


def test_positive_number():
    assert is_positive_number(1)
    assert is_positive_number(0.5)
    assert not is_positive_number(0)
    assert not is_positive_number(-10)
    assert not is_positive_number("100")
    assert not is_positive_number(True)
    assert not is_positive_number(None)
    assert not is_positive_number(float("inf"))
    assert not is_positive_number(float("nan"))
    assert not is_positive_number(10 ** 400)


def test_transaction_type_sets_differ_per_surface():
    assert is_valid_transaction_type("Pemasukan", OMZET_TRANSACTION_TYPES)
    assert not is_valid_transaction_type("Operasional", OMZET_TRANSACTION_TYPES)
    assert is_valid_transaction_type("Bahan Baku", PENGELUARAN_TRANSACTION_TYPES)
    assert not is_valid_transaction_type("Pengeluaran", PENGELUARAN_TRANSACTION_TYPES)


def test_file_structure():
    assert is_valid_file({"filename": "a.pdf", "original_name": "A.pdf"})
    assert is_valid_file(FileMetadataIn(filename="a.pdf", original_name="A.pdf"))
    assert not is_valid_file({"filename": "a.pdf"})
    assert not is_valid_file(FileMetadataIn(filename="", original_name="A.pdf"))
    assert not is_valid_file(None)


def test_raise_for_result():
    raise_for_result(ValidationResult.success())

    with pytest.raises(ValidationError) as exc:
        raise_for_result(ValidationResult.failure("Bad", "details", errors=["x"]))
    assert exc.value.to_dict() == {"code": 400, "error": "Bad", "message": "details", "errors": ["x"]}

    with pytest.raises(ConflictError) as exc:
        raise_for_result(ValidationResult.duplicate("Dup"))
    assert exc.value.status_code == 409


def test_transaction_date_round_trip_display():
    parsed = parse_transaction_date("25/12/2024")
    assert parsed == date(2024, 12, 25)
    assert format_display_date(parsed) == "25/12/2024"


@pytest.mark.parametrize("value", ["31/01/2024", "31-01-2024", "31012024"])
def test_filter_date_accepts_three_encodings(value):
    assert parse_filter_date(value) == date(2024, 1, 31)


@pytest.mark.parametrize("value", ["2024-01-31", "31.01.2024", "3101202", "32/01/2024", ""])
def test_filter_date_rejects_other_values(value):
    with pytest.raises(ValueError):
        parse_filter_date(value)
