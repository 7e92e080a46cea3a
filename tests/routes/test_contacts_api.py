"""HTTP tests for the contacts endpoints, backed by the in-memory repository."""

from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from contacts.router import get_repository
from core.db import StoreError
from main import app
from tests.fakes import InMemoryContactRepository

ERIKA = {
    "firstname": "Erika",
    "lastname": "Mustermann",
    "phone": "+49 0815 4711",
    "birthday": "1969-03-02T00:00:00Z",
}


def test_contact_happy_path(client):
    created = client.post("/contacts", json=ERIKA)
    assert created.status_code == 201
    body = created.json()
    contact_id = body.pop("id")
    assert isinstance(contact_id, int)
    assert body == ERIKA

    fetched = client.get(f"/contacts/{contact_id}")
    assert fetched.status_code == 200
    assert fetched.json() == {"id": contact_id, **ERIKA}

    updated = client.put(f"/contacts/{contact_id}", json={"birthday": "1960-04-13T00:00:00Z"})
    assert updated.status_code == 200
    assert updated.json() == {"id": contact_id, **ERIKA, "birthday": "1960-04-13T00:00:00Z"}

    deleted = client.delete(f"/contacts/{contact_id}")
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "contact deleted"}

    assert client.get(f"/contacts/{contact_id}").status_code == 404


def test_create_with_no_fields_reports_nulls(client):
    created = client.post("/contacts", json={})
    assert created.status_code == 201
    contact_id = created.json()["id"]
    assert client.get(f"/contacts/{contact_id}").json() == {
        "id": contact_id,
        "firstname": None,
        "lastname": None,
        "phone": None,
        "birthday": None,
    }


@pytest.mark.parametrize(
    "content",
    [
        "",
        "not JSON",
        '{"firstname": "Erika" "lastname": "Mustermann"}',
        '{"firstname": "a\\u0000b"}',
        '{"phone": "0815\\u0000"}',
        '{"birthday": 0}',
        '{"birthday": "1969-03-02"}',
        '{"birthday": "1969-03-02T00:00:00"}',
    ],
)
def test_create_with_invalid_body(client, repository, content):
    response = client.post("/contacts", content=content, headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json() == {"message": "invalid JSON"}
    assert repository.rows == {}


def test_get_contact_with_invalid_id(client):
    response = client.get("/contacts/not-a-number")
    assert response.status_code == 404
    assert response.json() == {"message": "invalid id parameter"}


def test_get_missing_contact(client):
    response = client.get("/contacts/4711")
    assert response.status_code == 404
    assert response.json() == {"message": "contact not found"}


def test_update_single_field_keeps_the_others(client, repository):
    repository.add(first_name="Erika", last_name="Mustermann", phone="0815", birthday=date(1969, 3, 2))

    response = client.put("/contacts/1", json={"phone": "81970"})

    assert response.status_code == 200
    assert response.json() == {
        "id": 1,
        "firstname": "Erika",
        "lastname": "Mustermann",
        "phone": "81970",
        "birthday": "1969-03-02T00:00:00Z",
    }


def test_update_with_null_field_leaves_it_unchanged(client, repository):
    repository.add(first_name="Erika", phone="0815")
    response = client.put("/contacts/1", json={"firstname": None, "phone": ""})
    assert response.status_code == 200
    assert response.json()["firstname"] == "Erika"
    assert response.json()["phone"] == ""


@pytest.mark.parametrize("path", ["/contacts/1", "/contacts/999", "/contacts/not-a-number"])
@pytest.mark.parametrize("payload", [{}, {"phone": None}, {"email": "x@example.org"}])
def test_update_without_values_is_bad_request(client, repository, path, payload):
    repository.add(phone="0815")
    response = client.put(path, json=payload)
    assert response.status_code == 400
    assert response.json() == {"message": "no values to be updated"}


def test_update_with_invalid_json(client, repository):
    repository.add(phone="0815")
    response = client.put("/contacts/1", content="not JSON")
    assert response.status_code == 400
    assert response.json() == {"message": "invalid JSON"}


def test_update_with_nul_in_text_leaves_contact_unchanged(client, repository):
    repository.add(phone="0815")
    response = client.put("/contacts/1", json={"phone": "08\x0015"})
    assert response.status_code == 400
    assert response.json() == {"message": "invalid JSON"}
    assert client.get("/contacts/1").json()["phone"] == "0815"


@pytest.mark.parametrize("path", ["/contacts/999", "/contacts/not-a-number"])
def test_update_missing_or_invalid_id(client, path):
    response = client.put(path, json={"phone": "1"})
    assert response.status_code == 404


@pytest.mark.parametrize("path", ["/contacts/999", "/contacts/not-a-number"])
def test_delete_missing_or_invalid_id(client, path):
    assert client.delete(path).status_code == 404


def test_empty_collection_is_not_found(client):
    response = client.get("/contacts")
    assert response.status_code == 404
    assert response.json() == {"message": "contact not found"}


@pytest.mark.parametrize(
    ("query_string", "message"),
    [
        ("orderby=INVALID", "invalid orderby parameter"),
        ("ascending=INVALID", "invalid ascending parameter"),
        ("ascending=True", "invalid ascending parameter"),
        ("limit=0", "invalid limit parameter"),
        ("limit=ten", "invalid limit parameter"),
        ("offset=-1", "invalid offset parameter"),
        ("birthday=1129", "invalid birthday URL parameter"),
        ("birthday=ab-29", "invalid birthday URL parameter"),
        ("firstname=%00", "invalid firstname parameter"),
        ("lastname=Sm%00ith", "invalid lastname parameter"),
    ],
)
def test_invalid_list_parameters(client, repository, query_string, message):
    repository.add(first_name="Erika")
    response = client.get(f"/contacts?{query_string}")
    assert response.status_code == 400
    assert response.json() == {"message": message}


@pytest.fixture
def people(repository):
    repository.add(first_name="Jim", last_name="Smith", phone="3", birthday=date(1980, 11, 29))
    repository.add(first_name="Jill", last_name="Smithers", phone="1", birthday=date(1975, 3, 2))
    repository.add(first_name="Jack", last_name="Jones", phone="2", birthday=date(1990, 11, 29))
    repository.add(first_name="Ji_x", last_name="Brown", phone="4", birthday=None)
    return repository


def _ids(response):
    assert response.status_code == 200
    return [c["id"] for c in response.json()]


def test_list_all_sorted_by_id(client, people):
    assert _ids(client.get("/contacts")) == [1, 2, 3, 4]


def test_first_name_prefix(client, people):
    assert _ids(client.get("/contacts?firstname=Ji")) == [1, 2, 4]
    assert _ids(client.get("/contacts?firstname=Ji_")) == [4]


def test_last_name_prefix_excludes_other_prefixes(client, people):
    ids = _ids(client.get("/contacts?lastname=Smith"))
    assert ids == [1, 2]


def test_birthday_matches_any_year(client, people):
    assert _ids(client.get("/contacts?birthday=11-29")) == [1, 3]
    assert client.get("/contacts?birthday=12-24").status_code == 404


def test_combined_filters(client, people):
    assert _ids(client.get("/contacts?firstname=J&lastname=Smi&birthday=11-29")) == [1]


def test_order_by_birthday_descending(client, people):
    response = client.get("/contacts?lastname=S&orderby=birthday&ascending=false")
    birthdays = [c["birthday"] for c in response.json()]
    assert birthdays == sorted(birthdays, reverse=True)
    assert _ids(response) == [1, 2]


def test_order_by_phone(client, people):
    assert _ids(client.get("/contacts?orderby=phone")) == [2, 3, 1, 4]
    assert _ids(client.get("/contacts?orderby=phone&ascending=false")) == [4, 1, 3, 2]


def test_paging(client, people):
    assert _ids(client.get("/contacts?limit=2")) == [1, 2]
    assert _ids(client.get("/contacts?limit=2&offset=2")) == [3, 4]
    assert client.get("/contacts?offset=10").status_code == 404


def test_empty_parameters_mean_absent(client, people):
    assert _ids(client.get("/contacts?firstname=&limit=&offset=&orderby=&ascending=&birthday=")) == [1, 2, 3, 4]


class _FailingRepository(InMemoryContactRepository):
    async def get(self, contact_id):
        raise StoreError("connection refused")


def test_store_failure_is_internal_error():
    app.dependency_overrides[get_repository] = _FailingRepository
    try:
        response = TestClient(app).get("/contacts/1")
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 500
    assert response.json() == {"message": "internal server error"}
