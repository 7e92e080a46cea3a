"""
Pydantic schemas for contact endpoints.

JSON field names (`firstname`, `lastname`, ...) are the public contract; the
Python attribute names follow the table columns.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

# Fixed column order for inserts and partial updates.
CONTACT_COLUMNS = ("first_name", "last_name", "phone", "birthday")

TEXT_MAX_LENGTH = 50

# RFC 3339 timestamp with an explicit offset, e.g. 1969-03-02T00:00:00Z
_TIMESTAMP = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}(\.[0-9]+)?(Z|[+-][0-9]{2}:[0-9]{2})")


def birthday_to_date(value: datetime) -> date:
    """
    Birthdays are stored as calendar dates; aware timestamps count in UTC.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date()


def date_to_birthday(value: date | None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        value = birthday_to_date(value)
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def format_timestamp(value: datetime) -> str:
    """
    Canonical wire format: 1969-03-02T00:00:00Z
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="seconds") + "Z"


class ContactIn(BaseModel):
    """
    Request body for POST and PUT.

    Every field is optional; an omitted field and an explicit null are both
    "not provided". An empty string is a value.
    """

    first_name: str | None = Field(default=None, alias="firstname", max_length=TEXT_MAX_LENGTH)
    last_name: str | None = Field(default=None, alias="lastname", max_length=TEXT_MAX_LENGTH)
    phone: str | None = Field(default=None, max_length=TEXT_MAX_LENGTH)
    birthday: datetime | None = None

    @field_validator("first_name", "last_name", "phone")
    @classmethod
    def reject_nul(cls, value: str | None) -> str | None:
        # Postgres text cannot hold NUL.
        if value is not None and "\x00" in value:
            raise ValueError("text must not contain NUL characters")
        return value

    @field_validator("birthday", mode="before")
    @classmethod
    def require_rfc3339(cls, value: Any) -> Any:
        if value is None:
            return None
        if not isinstance(value, str) or not _TIMESTAMP.fullmatch(value):
            raise ValueError("birthday must be an RFC 3339 timestamp with offset")
        return value

    def values(self) -> dict[str, Any]:
        """
        All columns in insert order; fields not provided map to None.
        """
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
            "birthday": birthday_to_date(self.birthday) if self.birthday is not None else None,
        }

    def changes(self) -> dict[str, Any]:
        """
        Only the provided columns, in update order.
        """
        return {column: value for column, value in self.values().items() if value is not None}


class Contact(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    first_name: str | None = Field(default=None, alias="firstname")
    last_name: str | None = Field(default=None, alias="lastname")
    phone: str | None = None
    birthday: datetime | None = None

    @field_serializer("birthday", when_used="json-unless-none")
    def serialize_birthday(self, value: datetime) -> str:
        return format_timestamp(value)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Contact:
        return cls(
            id=int(row["id"]),
            first_name=row.get("first_name"),
            last_name=row.get("last_name"),
            phone=row.get("phone"),
            birthday=date_to_birthday(row.get("birthday")),
        )


class MessageResponse(BaseModel):
    message: str
