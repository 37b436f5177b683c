"""Domain Types — verifies identity types, enums and field constants."""

import re

from app.core.domain_types import UserId, Sex, USER_FIELDS, PHONE_PATTERN


def test_user_id_wraps_int():
    assert UserId(7) == 7


def test_sex_has_exactly_two_values():
    assert {s.value for s in Sex} == {"male", "female"}


def test_user_fields_exclude_system_fields():
    assert "id" not in USER_FIELDS
    assert "created_at" not in USER_FIELDS
    assert "updated_at" not in USER_FIELDS


def test_phone_pattern_digit_groups():
    assert re.match(PHONE_PATTERN, "+1 (555) 123-4567")
    assert re.match(PHONE_PATTERN, "+123 (555) 123-4567")
    assert not re.match(PHONE_PATTERN, "+1234 (555) 123-4567")
    assert not re.match(PHONE_PATTERN, "+1 (555) 123-4567\n")
