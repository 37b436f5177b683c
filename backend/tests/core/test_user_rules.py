"""User Field Rules — verifies the rule list and validate_user ordering.

Tests:
    - A fully valid candidate yields no violations
    - Blank fields yield exactly the not-blank message
    - Each rule kind rejects what it should and skips blank values
    - Non-string text fields yield exactly the string-type message
    - Violations come back in field order
"""

from datetime import date, datetime

import pytest

from app.core.user_rules import (
    USER_RULES, validate_user, is_blank,
    not_blank, email_format, max_length, integer_type, int_range,
    choice, pattern, date_type, string_type,
)


VALID = {
    "email": "a@b.com",
    "name": "Ann",
    "age": 30,
    "sex": "female",
    "birthday": date(1990, 1, 1),
    "phone": "+1 (555) 123-4567",
}


def test_valid_candidate_has_no_violations():
    assert validate_user(VALID) == []


def test_rule_list_covers_every_field_in_order():
    assert list(USER_RULES) == ["email", "name", "age", "sex", "birthday", "phone"]


@pytest.mark.parametrize("value,expected", [
    (None, True), (False, True), ("", True), ([], True), ({}, True),
    (0, False), (" ", False), ("x", False), (True, False),
])
def test_is_blank(value, expected):
    assert is_blank(value) is expected


def test_blank_email_reports_only_not_blank():
    assert validate_user({**VALID, "email": ""}) == ["Email не должен быть пустым."]


def test_invalid_email_message_includes_value():
    assert validate_user({**VALID, "email": "nope"}) == [
        "Email 'nope' не является допустимым email адресом.",
    ]


@pytest.mark.parametrize("email", ["user@example.com", "first.last@sub.domain.ru", "ivan+news@mail.ru"])
def test_email_accepts_common_addresses(email):
    assert validate_user({**VALID, "email": email}) == []


def test_age_zero_is_not_blank():
    assert validate_user({**VALID, "age": 0}) == []


def test_boolean_age_is_rejected_by_type_rule():
    assert validate_user({**VALID, "age": True}) == ["Возраст должен быть числом."]


def test_float_age_reports_type_without_range():
    assert validate_user({**VALID, "age": 300.5}) == ["Возраст должен быть числом."]


def test_age_out_of_range_message():
    assert validate_user({**VALID, "age": 151}) == ["Возраст должен быть от 0 до 150 лет."]


def test_datetime_birthday_is_not_a_calendar_date():
    errors = validate_user({**VALID, "birthday": datetime(1990, 1, 1)})
    assert errors == ["Дата рождения должна быть корректной датой."]


def test_string_birthday_is_not_a_calendar_date():
    errors = validate_user({**VALID, "birthday": "1990-01-01"})
    assert errors == ["Дата рождения должна быть корректной датой."]


def test_violations_follow_field_order():
    errors = validate_user({
        **VALID, "phone": "555", "email": "bad", "sex": "x",
    })
    assert errors == [
        "Email 'bad' не является допустимым email адресом.",
        "Пол должен быть 'male' или 'female'.",
        "Неправильный формат номера телефона.",
    ]


def test_missing_keys_are_blank():
    assert len(validate_user({})) == 6


# --- Rule factories -----------------------------------------------------------

def test_factories_skip_blank_values():
    rules = [
        email_format("e"), max_length(1, "m"), integer_type("i"),
        int_range(0, 1, "r"), choice(["a"], "c"), pattern(r"^x$", "p"),
        date_type("d"), string_type("s"),
    ]
    for rule in rules:
        assert rule(None) is None
        assert rule("") is None


def test_not_blank_factory():
    rule = not_blank("required")
    assert rule(None) == "required"
    assert rule("ok") is None


def test_int_range_formats_bounds():
    rule = int_range(5, 9, "from {min} to {max}")
    assert rule(10) == "from 5 to 9"
    assert rule(7) is None


def test_text_rules_leave_non_strings_to_string_type():
    for rule in (
        email_format("e"), max_length(1, "m"), choice(["a"], "c"), pattern(r".*", "p"),
    ):
        assert rule(["+1 (555) 123-4567"]) is None
        assert rule({"a": 1}) is None
        assert rule(42) is None


def test_string_type_factory():
    rule = string_type("text")
    assert rule("ok") is None
    assert rule(None) is None
    assert rule(5) == "text"
    assert rule(["x"]) == "text"
    assert rule({"x": 1}) == "text"


@pytest.mark.parametrize("field,value,expected", [
    ("email", {"x": "a@b.com"}, "Email должен быть строкой."),
    ("email", ["a@b.com"], "Email должен быть строкой."),
    ("name", {"first": "Ann"}, "Имя должно быть строкой."),
    ("name", ["Ann"], "Имя должно быть строкой."),
    ("sex", ["male"], "Пол должен быть строкой."),
    ("phone", 15551234567, "Номер телефона должен быть строкой."),
])
def test_non_string_text_field_reports_type_only(field, value, expected):
    assert validate_user({**VALID, field: value}) == [expected]


@pytest.mark.parametrize("email", [
    "a b@c.d", "a@b.com\n", "user@@example.com", "user@example", "@example.com",
])
def test_email_library_rejects_malformed_addresses(email):
    assert validate_user({**VALID, "email": email}) == [
        f"Email '{email}' не является допустимым email адресом.",
    ]


def test_phone_with_trailing_newline_is_rejected():
    assert validate_user({**VALID, "phone": "+1 (555) 123-4567\n"}) == [
        "Неправильный формат номера телефона.",
    ]
