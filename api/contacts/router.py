"""
Contact API endpoints.

Query and path parameters are taken as raw strings and validated in the
service layer, so malformed values produce the documented 400/404 responses
instead of FastAPI's generic 422.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, status

from . import service
from .repository import ContactRepository
from .schemas import Contact, MessageResponse

router = APIRouter()


def get_repository(request: Request) -> ContactRepository:
    return ContactRepository(request.app.state.db)


@router.get("/contacts", response_model=list[Contact])
async def find_contacts(
    firstname: str | None = Query(default=None),
    lastname: str | None = Query(default=None),
    birthday: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    offset: str | None = Query(default=None),
    orderby: str | None = Query(default=None),
    ascending: str | None = Query(default=None),
    repository: ContactRepository = Depends(get_repository),
) -> list[Contact]:
    """
    List contacts, optionally filtered and sorted.

    - `firstname`, `lastname`: match names starting with the given value
    - `birthday`: "MM-DD", matches that day in any year
    - `limit`, `offset`: paging over the sorted result
    - `orderby`: id, first_name, last_name, phone or birthday
    - `ascending`: "true" or "false"
    """
    return await service.find_contacts(
        repository,
        first_name=firstname,
        last_name=lastname,
        birthday=birthday,
        limit=limit,
        offset=offset,
        order_by=orderby,
        ascending=ascending,
    )


@router.post("/contacts", response_model=Contact, status_code=status.HTTP_201_CREATED)
async def create_contact(
    request: Request,
    repository: ContactRepository = Depends(get_repository),
) -> Contact:
    body = await request.body()
    return await service.create_contact(repository, body)


@router.get("/contacts/{contact_id}", response_model=Contact)
async def find_contact(
    contact_id: str,
    repository: ContactRepository = Depends(get_repository),
) -> Contact:
    return await service.find_contact(repository, contact_id)


@router.put("/contacts/{contact_id}", response_model=Contact)
async def update_contact(
    contact_id: str,
    request: Request,
    repository: ContactRepository = Depends(get_repository),
) -> Contact:
    """
    Update only the fields present in the JSON body.
    """
    body = await request.body()
    return await service.update_contact(repository, contact_id, body)


@router.delete("/contacts/{contact_id}", response_model=MessageResponse)
async def delete_contact(
    contact_id: str,
    repository: ContactRepository = Depends(get_repository),
) -> dict:
    return await service.delete_contact(repository, contact_id)
