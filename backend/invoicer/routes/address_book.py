from fastapi import APIRouter, Depends, Response, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from invoicer.core.error_messages import ErrorResponses
from invoicer.crud.resource_store import ConcurrentUpdateError, ResourceNotFound, contacts_store
from invoicer.db.database import get_db
from invoicer.middleware.rbac import get_current_user
from invoicer.schemas.resources import ContactSchema

address_book_router = APIRouter(tags=["Address Book"])

CONTACT_NOT_FOUND = "Contact not found."


def _contact_fields(data: ContactSchema) -> dict:
    if not data.name:
        raise ErrorResponses.bad_request("Contact name is required.")
    return {
        "name": data.name,
        "email": data.email or None,
        "address": data.address or None,
        "phone": data.phone or None,
    }


@address_book_router.get("")
async def list_contacts(user: dict = Depends(get_current_user), db: AsyncIOMotorDatabase = Depends(get_db)):
    return await contacts_store.list(db, user["_id"])


@address_book_router.post("", status_code=status.HTTP_201_CREATED)
async def create_contact(
    data: ContactSchema,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    try:
        return await contacts_store.create(db, user["_id"], _contact_fields(data))
    except ConcurrentUpdateError:
        raise ErrorResponses.SERVICE_UNAVAILABLE


@address_book_router.get("/{contact_id}")
async def get_contact(contact_id: str, user: dict = Depends(get_current_user), db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return await contacts_store.get(db, user["_id"], contact_id)
    except ResourceNotFound:
        raise ErrorResponses.not_found(CONTACT_NOT_FOUND)


@address_book_router.put("/{contact_id}")
async def update_contact(
    contact_id: str,
    data: ContactSchema,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    # PUT replaces all four fields, blanks included
    fields = _contact_fields(data)
    try:
        return await contacts_store.update(db, user["_id"], contact_id, fields)
    except ResourceNotFound:
        raise ErrorResponses.not_found(CONTACT_NOT_FOUND)
    except ConcurrentUpdateError:
        raise ErrorResponses.SERVICE_UNAVAILABLE


@address_book_router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(contact_id: str, user: dict = Depends(get_current_user), db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        await contacts_store.delete(db, user["_id"], contact_id)
    except ResourceNotFound:
        raise ErrorResponses.not_found(CONTACT_NOT_FOUND)
    except ConcurrentUpdateError:
        raise ErrorResponses.SERVICE_UNAVAILABLE
    return Response(status_code=status.HTTP_204_NO_CONTENT)
