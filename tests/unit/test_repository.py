"""Unit tests for `contacts.repository.ContactRepository`."""

from __future__ import annotations

from datetime import date

import pytest

from contacts import query
from contacts.repository import ContactRepository
from core.db import StoreError
from tests.fakes import RecordingDatabase

pytestmark = pytest.mark.anyio


async def test_search_sends_rendered_statement():
    db = RecordingDatabase(rows=[{"id": 1}])
    search = query.build_search_query(first_name_prefix="Er", limit=5)

    rows = await ContactRepository(db).search(search)

    assert rows == [{"id": 1}]
    statement = search.render()
    assert db.calls == [("fetch_all", statement.sql, statement.args)]


async def test_insert_returns_stored_row():
    stored = {"id": 9, "first_name": "Erika", "last_name": None, "phone": None, "birthday": date(1969, 3, 2)}
    db = RecordingDatabase(row=stored)

    row = await ContactRepository(db).insert({"first_name": "Erika", "birthday": date(1969, 3, 2)})

    assert row == stored
    method, sql, args = db.calls[0]
    assert method == "fetch_one"
    assert sql.startswith("INSERT INTO contacts")
    assert args == ("Erika", None, None, date(1969, 3, 2))


async def test_insert_without_returned_row_is_a_store_error():
    with pytest.raises(StoreError):
        await ContactRepository(RecordingDatabase(row=None)).insert({})


async def test_update_returns_rows_affected():
    db = RecordingDatabase(affected=0)
    affected = await ContactRepository(db).update(query.build_update(4, {"phone": "0815"}))
    assert affected == 0
    assert db.calls == [("execute", "UPDATE contacts SET phone = $1 WHERE id = $2", ("0815", 4))]


async def test_get_and_delete_by_id():
    db = RecordingDatabase(row=None, affected=1)
    repository = ContactRepository(db)

    assert await repository.get(3) is None
    assert await repository.delete(3) == 1
    assert [call[0] for call in db.calls] == ["fetch_one", "execute"]
    assert all(call[2] == (3,) for call in db.calls)
