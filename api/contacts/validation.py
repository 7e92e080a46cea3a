"""
Request validation for contact endpoints.

Query and path parameters arrive as raw strings. Each validator returns typed
values or raises before any database access happens:
- ContactValidationError -> 400
- ContactNotFoundError -> 404 (malformed ids are treated like unknown ids)

An empty string is treated exactly like an absent parameter.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pydantic import ValidationError

from .errors import ContactNotFoundError, ContactValidationError
from .schemas import ContactIn

# Largest value a Postgres bigint (LIMIT, OFFSET, BIGSERIAL id) accepts.
MAX_COUNT = 2**63 - 1

SORT_COLUMNS = ("id", "first_name", "last_name", "phone", "birthday")
DEFAULT_SORT_COLUMN = "id"

ASCENDING = "ASC"
DESCENDING = "DESC"

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class BirthdayFilter:
    month: int
    day: int


def _parse_int(raw: str) -> int | None:
    if not _INTEGER.fullmatch(raw):
        return None
    value = int(raw)
    if abs(value) > MAX_COUNT:
        return None
    return value


def validate_id(raw: str | None) -> int:
    raw = raw or ""
    if not (raw.isascii() and raw.isdigit()):
        raise ContactNotFoundError("invalid id parameter")
    value = int(raw)
    if value > MAX_COUNT:
        raise ContactNotFoundError("invalid id parameter")
    return value


def validate_limit_offset(raw_limit: str | None, raw_offset: str | None) -> tuple[int, int]:
    limit = MAX_COUNT
    if raw_limit:
        parsed = _parse_int(raw_limit)
        if parsed is None or parsed < 1:
            raise ContactValidationError("invalid limit parameter")
        limit = parsed

    offset = 0
    if raw_offset:
        parsed = _parse_int(raw_offset)
        if parsed is None or parsed < 0:
            raise ContactValidationError("invalid offset parameter")
        offset = parsed

    return limit, offset


def validate_name_prefix(raw: str | None, parameter: str) -> str | None:
    if not raw:
        return None
    if "\x00" in raw:
        raise ContactValidationError(f"invalid {parameter} parameter")
    return raw


def validate_order_by(raw: str | None) -> str:
    if not raw:
        return DEFAULT_SORT_COLUMN
    if raw not in SORT_COLUMNS:
        raise ContactValidationError("invalid orderby parameter")
    return raw


def validate_ascending(raw: str | None) -> str:
    # Case-sensitive on purpose: "True" and "TRUE" are rejected.
    if not raw or raw == "true":
        return ASCENDING
    if raw == "false":
        return DESCENDING
    raise ContactValidationError("invalid ascending parameter")


def validate_birthday_filter(raw: str | None) -> BirthdayFilter | None:
    """
    Parse "<month>-<day>" (e.g. "11-29").

    Month and day are not checked against the calendar; "13-40" is a valid
    filter that matches nothing.
    """
    if not raw:
        return None
    month_part, sep, day_part = raw.partition("-")
    if not sep:
        raise ContactValidationError("invalid birthday URL parameter")
    month = _parse_int(month_part)
    day = _parse_int(day_part)
    if month is None or day is None:
        raise ContactValidationError("invalid birthday URL parameter")
    return BirthdayFilter(month=month, day=day)


def validate_contact_body(body: bytes | str) -> ContactIn:
    try:
        return ContactIn.model_validate_json(body)
    except ValidationError as exc:
        raise ContactValidationError("invalid JSON") from exc
