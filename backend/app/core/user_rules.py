"""User Field Rules — declarative per-field rule list and the validator that runs it.

Invariants:
    - validate_user is PURE: takes a candidate mapping, returns violation messages
    - Messages come back in field order (USER_FIELDS), then rule order within a field
    - Only not_blank inspects blank values; every other rule skips them,
      so a blank field yields exactly one message
    - Text rules (email_format, max_length, choice, pattern) skip non-strings;
      string_type reports those once
    - 0 is not blank (age=0 is valid)

Design Decisions:
    - Rules are plain callables (value -> message | None) built by small factories
    - Messages are user-facing and returned verbatim in the 400 "errors" array
    - Email syntax is checked by email-validator without DNS lookups
"""

import re
from collections.abc import Callable, Mapping, Sequence
from datetime import date, datetime

from email_validator import EmailNotValidError, validate_email

from app.core.domain_types import (
    AGE_MAX, AGE_MIN, NAME_MAX_LENGTH, PHONE_PATTERN, USER_FIELDS, Sex,
)

Rule = Callable[[object], str | None]


def is_blank(value: object) -> bool:
    """None, False, empty string and empty containers are blank."""
    if value is None or value is False:
        return True
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    return False


def _is_text(value: object) -> bool:
    return isinstance(value, str) and not is_blank(value)


# ─── Rule factories ──────────────────────────────────────────────

def not_blank(message: str) -> Rule:
    def rule(value: object) -> str | None:
        return message if is_blank(value) else None
    return rule


def string_type(message: str) -> Rule:
    def rule(value: object) -> str | None:
        if is_blank(value) or isinstance(value, str):
            return None
        return message
    return rule


def email_format(message: str) -> Rule:
    """Message may contain {value}."""
    def rule(value: object) -> str | None:
        if not _is_text(value):
            return None
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            return message.format(value=value)
        return None
    return rule


def max_length(limit: int, message: str) -> Rule:
    def rule(value: object) -> str | None:
        if not _is_text(value):
            return None
        return message if len(value) > limit else None
    return rule


def integer_type(message: str) -> Rule:
    def rule(value: object) -> str | None:
        if is_blank(value):
            return None
        if isinstance(value, int) and not isinstance(value, bool):
            return None
        return message
    return rule


def int_range(minimum: int, maximum: int, message: str) -> Rule:
    """Non-integers are left to integer_type."""
    def rule(value: object) -> str | None:
        if is_blank(value) or isinstance(value, bool) or not isinstance(value, int):
            return None
        if minimum <= value <= maximum:
            return None
        return message.format(min=minimum, max=maximum)
    return rule


def choice(choices: Sequence[str], message: str) -> Rule:
    def rule(value: object) -> str | None:
        if not _is_text(value):
            return None
        return None if value in choices else message
    return rule


def pattern(regex: str, message: str) -> Rule:
    compiled = re.compile(regex)

    def rule(value: object) -> str | None:
        if not _is_text(value):
            return None
        return None if compiled.search(value) else message
    return rule


def date_type(message: str) -> Rule:
    def rule(value: object) -> str | None:
        if is_blank(value):
            return None
        # datetime subclasses date; only a plain calendar date is accepted
        if isinstance(value, date) and not isinstance(value, datetime):
            return None
        return message
    return rule


# ─── Rule list ───────────────────────────────────────────────────

USER_RULES: dict[str, tuple[Rule, ...]] = {
    "email": (
        not_blank("Email не должен быть пустым."),
        string_type("Email должен быть строкой."),
        email_format("Email '{value}' не является допустимым email адресом."),
    ),
    "name": (
        not_blank("Имя не должно быть пустым."),
        string_type("Имя должно быть строкой."),
        max_length(
            NAME_MAX_LENGTH,
            f"Имя пользователя не должно превышать {NAME_MAX_LENGTH} символов.",
        ),
    ),
    "age": (
        not_blank("Возраст не должен быть пустым."),
        integer_type("Возраст должен быть числом."),
        int_range(AGE_MIN, AGE_MAX, "Возраст должен быть от {min} до {max} лет."),
    ),
    "sex": (
        not_blank("Пол не должен быть пустым."),
        string_type("Пол должен быть строкой."),
        choice(
            [s.value for s in Sex],
            "Пол должен быть 'male' или 'female'.",
        ),
    ),
    "birthday": (
        not_blank("Дата рождения не должна быть пустой."),
        date_type("Дата рождения должна быть корректной датой."),
    ),
    "phone": (
        not_blank("Номер телефона не должен быть пустым."),
        string_type("Номер телефона должен быть строкой."),
        pattern(PHONE_PATTERN, "Неправильный формат номера телефона."),
    ),
}


def validate_user(
    candidate: Mapping[str, object],
    rules: Mapping[str, Sequence[Rule]] = USER_RULES,
) -> list[str]:
    """Run every field rule against candidate. Returns violations in order."""
    violations: list[str] = []
    for field_name in USER_FIELDS:
        value = candidate.get(field_name)
        for rule in rules.get(field_name, ()):
            message = rule(value)
            if message is not None:
                violations.append(message)
    return violations
