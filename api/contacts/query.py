"""
Contact SQL builders.

Filters and assignments are collected as structured data and rendered into
parameterized SQL in one place. Values are always bound parameters; the only
text ever substituted into SQL is a column name from a fixed set and the
ASC/DESC keyword.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import NothingToUpdateError
from .schemas import CONTACT_COLUMNS
from .validation import ASCENDING, DESCENDING, MAX_COUNT, SORT_COLUMNS, BirthdayFilter

TABLE = "contacts"
SELECT_COLUMNS = "id, first_name, last_name, phone, birthday"

STARTS_WITH = "starts_with"
MONTH_EQUALS = "month_equals"
DAY_EQUALS = "day_equals"

_CONDITION_TEMPLATES = {
    STARTS_WITH: "{column} LIKE {param}",
    MONTH_EQUALS: "date_part('month', {column}) = {param}",
    DAY_EQUALS: "date_part('day', {column}) = {param}",
}


@dataclass(frozen=True)
class Statement:
    sql: str
    args: tuple[Any, ...] = ()


def escape_like(value: str) -> str:
    """
    Escape LIKE wildcards so a prefix filter matches literally.
    Postgres uses backslash as the default LIKE escape character.
    """
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class _Params:
    """
    Hands out $1, $2, ... placeholders in the order values are bound.
    """

    def __init__(self) -> None:
        self.values: list[Any] = []

    def bind(self, value: Any) -> str:
        self.values.append(value)
        return f"${len(self.values)}"


@dataclass(frozen=True)
class Condition:
    column: str
    operator: str
    value: Any

    def __post_init__(self) -> None:
        if self.column not in SORT_COLUMNS:
            raise ValueError(f"Unknown contact column: {self.column!r}")
        if self.operator not in _CONDITION_TEMPLATES:
            raise ValueError(f"Unknown operator: {self.operator!r}")

    def bound_value(self) -> Any:
        if self.operator == STARTS_WITH:
            return escape_like(str(self.value)) + "%"
        return self.value

    def render(self, params: _Params) -> str:
        template = _CONDITION_TEMPLATES[self.operator]
        return template.format(column=self.column, param=params.bind(self.bound_value()))


@dataclass(frozen=True)
class Ordering:
    column: str = "id"
    direction: str = ASCENDING

    def __post_init__(self) -> None:
        if self.column not in SORT_COLUMNS:
            raise ValueError(f"Column {self.column!r} is not sortable.")
        if self.direction not in (ASCENDING, DESCENDING):
            raise ValueError(f"Invalid sort direction: {self.direction!r}")

    def render(self) -> str:
        clause = f"{self.column} {self.direction}"
        if self.column != "id":
            # Deterministic order among rows with equal sort keys.
            clause += ", id ASC"
        return clause


@dataclass
class SearchQuery:
    conditions: list[Condition] = field(default_factory=list)
    ordering: Ordering = field(default_factory=Ordering)
    limit: int = MAX_COUNT
    offset: int = 0

    def where(self, column: str, operator: str, value: Any) -> SearchQuery:
        self.conditions.append(Condition(column, operator, value))
        return self

    def render(self) -> Statement:
        params = _Params()
        sql = f"SELECT {SELECT_COLUMNS} FROM {TABLE}"
        if self.conditions:
            sql += " WHERE " + " AND ".join(c.render(params) for c in self.conditions)
        sql += f" ORDER BY {self.ordering.render()}"
        sql += f" LIMIT {params.bind(self.limit)} OFFSET {params.bind(self.offset)}"
        return Statement(sql, tuple(params.values))


def build_search_query(
    *,
    first_name_prefix: str | None = None,
    last_name_prefix: str | None = None,
    birthday: BirthdayFilter | None = None,
    order_by: str = "id",
    direction: str = ASCENDING,
    limit: int = MAX_COUNT,
    offset: int = 0,
) -> SearchQuery:
    query = SearchQuery(ordering=Ordering(order_by, direction), limit=limit, offset=offset)
    if first_name_prefix:
        query.where("first_name", STARTS_WITH, first_name_prefix)
    if last_name_prefix:
        query.where("last_name", STARTS_WITH, last_name_prefix)
    if birthday is not None:
        query.where("birthday", MONTH_EQUALS, birthday.month)
        query.where("birthday", DAY_EQUALS, birthday.day)
    return query


@dataclass(frozen=True)
class ContactUpdate:
    contact_id: int
    assignments: tuple[tuple[str, Any], ...]

    def render(self) -> Statement:
        params = _Params()
        sets = ", ".join(f"{column} = {params.bind(value)}" for column, value in self.assignments)
        where = params.bind(self.contact_id)
        return Statement(f"UPDATE {TABLE} SET {sets} WHERE id = {where}", tuple(params.values))


def build_update(contact_id: int, changes: dict[str, Any]) -> ContactUpdate:
    """
    Assignments follow CONTACT_COLUMNS order regardless of the order of `changes`.
    Raises NothingToUpdateError when no column is provided.
    """
    unknown = set(changes) - set(CONTACT_COLUMNS)
    if unknown:
        raise ValueError(f"Unknown contact columns: {sorted(unknown)}")

    assignments = tuple(
        (column, changes[column])
        for column in CONTACT_COLUMNS
        if column in changes and changes[column] is not None
    )
    if not assignments:
        raise NothingToUpdateError()
    return ContactUpdate(contact_id=contact_id, assignments=assignments)


def insert_statement(values: dict[str, Any]) -> Statement:
    columns = ", ".join(CONTACT_COLUMNS)
    placeholders = ", ".join(f"${i}" for i in range(1, len(CONTACT_COLUMNS) + 1))
    return Statement(
        f"INSERT INTO {TABLE} ({columns}) VALUES ({placeholders}) RETURNING {SELECT_COLUMNS}",
        tuple(values.get(column) for column in CONTACT_COLUMNS),
    )


def select_by_id_statement(contact_id: int) -> Statement:
    return Statement(f"SELECT {SELECT_COLUMNS} FROM {TABLE} WHERE id = $1", (contact_id,))


def delete_statement(contact_id: int) -> Statement:
    return Statement(f"DELETE FROM {TABLE} WHERE id = $1", (contact_id,))
