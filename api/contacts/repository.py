"""
Contact persistence (raw SQL).

The repository wraps the `Database` handle created at startup; SQL text comes
from `contacts/query.py`.
"""

from __future__ import annotations

from typing import Any

from core.db import Database, StoreError

from . import query


class ContactRepository:
    def __init__(self, database: Database) -> None:
        self._db = database

    async def search(self, search: query.SearchQuery) -> list[dict[str, Any]]:
        statement = search.render()
        return await self._db.fetch_all(statement.sql, *statement.args)

    async def get(self, contact_id: int) -> dict[str, Any] | None:
        statement = query.select_by_id_statement(contact_id)
        return await self._db.fetch_one(statement.sql, *statement.args)

    async def insert(self, values: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a contact and return the stored row, including the new id.
        """
        statement = query.insert_statement(values)
        row = await self._db.fetch_one(statement.sql, *statement.args)
        if row is None or "id" not in row:
            raise StoreError("Failed to insert contact.")
        return row

    async def update(self, update: query.ContactUpdate) -> int:
        """
        Apply a partial update. Returns the number of rows affected.
        """
        statement = update.render()
        return await self._db.execute(statement.sql, *statement.args)

    async def delete(self, contact_id: int) -> int:
        statement = query.delete_statement(contact_id)
        return await self._db.execute(statement.sql, *statement.args)
