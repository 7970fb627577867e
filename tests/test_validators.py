from decimal import Decimal

import pytest

from services.validators import (
    ValidationError,
    normalize_number,
    parse_decimal,
    parse_int,
    require_fields,
    validate_email,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1 234,50", "1234.5"),
        ("10%", "0.1"),
        ("5+5", "10"),
        ("10*10", "100"),
        ("$1500", "1500"),
        ("", ""),
    ],
)
def test_normalize_number(raw, expected):
    assert normalize_number(raw) == expected


def test_parse_decimal():
    assert parse_decimal("1 234,50") == Decimal("1234.5")
    assert parse_decimal("") is None
    assert parse_decimal(None) is None
    with pytest.raises(ValidationError):
        parse_decimal("1..2", "Бюджет")


def test_parse_int():
    assert parse_int("12") == 12
    assert parse_int(" ") is None
    with pytest.raises(ValidationError) as exc_info:
        parse_int("2.5", "Количество")
    assert "целое" in str(exc_info.value)


def test_validate_email():
    assert validate_email(" anna@isofos.test ") == "anna@isofos.test"
    assert validate_email("") is None
    with pytest.raises(ValidationError):
        validate_email("anna@")


def test_require_fields_lists_missing_labels():
    with pytest.raises(ValidationError) as exc_info:
        require_fields(
            {"name": "  ", "email": None, "phone": "1"},
            {"name": "Название", "email": "Email", "phone": "Телефон"},
        )

    assert exc_info.value.fields == ["name", "email"]
    assert "Название, Email" in str(exc_info.value)
    require_fields({"name": "Ромашка"}, {"name": "Название"})
