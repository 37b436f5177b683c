"""User Payload Deserialization — raw request body to candidate user mapping.

Invariants:
    - parse_user_payload returns exactly the USER_FIELDS keys (missing → None)
    - Unknown keys (id, created_at, ...) are dropped: clients never set them
    - birthday is converted to datetime.date before validation runs
    - Malformed input raises DataFormatError; rule violations are NOT raised here
"""

import json
from collections.abc import Mapping
from datetime import date, datetime

from app.core.domain_types import USER_FIELDS
from app.core.errors import DataFormatError


def parse_user_payload(body: bytes | str) -> dict:
    """Decode a JSON object body into a candidate user mapping."""
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DataFormatError(f"Некорректный JSON: {e}") from e
    if not isinstance(data, dict):
        raise DataFormatError("Тело запроса должно быть JSON-объектом.")
    return candidate_from_mapping(data)


def candidate_from_mapping(data: Mapping[str, object]) -> dict:
    """Pick writable fields from an already-decoded mapping."""
    candidate = {name: data.get(name) for name in USER_FIELDS}
    candidate["birthday"] = parse_birthday(candidate["birthday"])
    return candidate


def parse_birthday(value: object) -> date | None:
    """ISO date or datetime string → date. None passes through."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        if value == "":
            return None
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(value).date()
        except ValueError:
            pass
    raise DataFormatError(
        f"Не удалось разобрать дату рождения: {value!r}", field="birthday",
    )
