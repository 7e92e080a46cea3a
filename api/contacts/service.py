"""
Contact business logic.

Each handler validates its raw input, builds one statement, makes one
database round trip (update makes two: the update and a re-select) and shapes
the response. Failures are raised as `contacts.errors` / `core.db.StoreError`.
"""

from __future__ import annotations

import logging

from core.db import StoreError

from . import query, validation
from .errors import ContactNotFoundError, NothingToUpdateError
from .repository import ContactRepository
from .schemas import Contact

logger = logging.getLogger(__name__)


def _check_single_row(affected: int, *, action: str, contact_id: int) -> None:
    # id is the primary key, so more than one row means the table is broken.
    if affected > 1:
        raise StoreError(f"{action} affected {affected} rows for contact id {contact_id}.")
    if affected == 0:
        raise ContactNotFoundError()


async def find_contacts(
    repository: ContactRepository,
    *,
    first_name: str | None = None,
    last_name: str | None = None,
    birthday: str | None = None,
    limit: str | None = None,
    offset: str | None = None,
    order_by: str | None = None,
    ascending: str | None = None,
) -> list[Contact]:
    """
    Search contacts by name prefixes and birthday (month and day, any year),
    sorted and paged. An empty result is reported as not found.
    """
    first_name = validation.validate_name_prefix(first_name, "firstname")
    last_name = validation.validate_name_prefix(last_name, "lastname")
    birthday_filter = validation.validate_birthday_filter(birthday)
    limit_value, offset_value = validation.validate_limit_offset(limit, offset)
    column = validation.validate_order_by(order_by)
    direction = validation.validate_ascending(ascending)

    search = query.build_search_query(
        first_name_prefix=first_name,
        last_name_prefix=last_name,
        birthday=birthday_filter,
        order_by=column,
        direction=direction,
        limit=limit_value,
        offset=offset_value,
    )
    rows = await repository.search(search)
    if not rows:
        raise ContactNotFoundError()
    return [Contact.from_row(row) for row in rows]


async def create_contact(repository: ContactRepository, body: bytes | str) -> Contact:
    submitted = validation.validate_contact_body(body)
    row = await repository.insert(submitted.values())
    contact = Contact.from_row(row)
    logger.info("contact_created id=%s", contact.id)
    return contact


async def find_contact(repository: ContactRepository, raw_id: str) -> Contact:
    contact_id = validation.validate_id(raw_id)
    row = await repository.get(contact_id)
    if row is None:
        raise ContactNotFoundError()
    return Contact.from_row(row)


async def update_contact(repository: ContactRepository, raw_id: str, body: bytes | str) -> Contact:
    """
    Change only the fields present in the body and return the stored result.

    The body is checked before the id, so an empty update is rejected with
    400 even for ids that would not be found.
    """
    submitted = validation.validate_contact_body(body)
    changes = submitted.changes()
    if not changes:
        raise NothingToUpdateError()

    contact_id = validation.validate_id(raw_id)
    update = query.build_update(contact_id, changes)
    affected = await repository.update(update)
    _check_single_row(affected, action="update", contact_id=contact_id)
    logger.info("contact_updated id=%s columns=%s", contact_id, ",".join(c for c, _ in update.assignments))

    row = await repository.get(contact_id)
    if row is None:
        # Deleted between the update and the re-select.
        raise ContactNotFoundError()
    return Contact.from_row(row)


async def delete_contact(repository: ContactRepository, raw_id: str) -> dict[str, str]:
    contact_id = validation.validate_id(raw_id)
    affected = await repository.delete(contact_id)
    _check_single_row(affected, action="delete", contact_id=contact_id)
    logger.info("contact_deleted id=%s", contact_id)
    return {"message": "contact deleted"}
