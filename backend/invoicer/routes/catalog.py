from fastapi import APIRouter, Depends, Response, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from invoicer.core.error_messages import ErrorResponses
from invoicer.crud.resource_store import ConcurrentUpdateError, ResourceNotFound, catalog_store
from invoicer.db.database import get_db
from invoicer.middleware.rbac import get_current_user
from invoicer.schemas.resources import CatalogItemSchema

catalog_router = APIRouter(tags=["Catalog"])

ITEM_NOT_FOUND = "Catalog item not found."


@catalog_router.get("")
async def list_catalog(user: dict = Depends(get_current_user), db: AsyncIOMotorDatabase = Depends(get_db)):
    return await catalog_store.list(db, user["_id"])


@catalog_router.post("", status_code=status.HTTP_201_CREATED)
async def create_catalog_item(
    data: CatalogItemSchema,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    try:
        return await catalog_store.create(db, user["_id"], data.model_dump(mode="json"))
    except ConcurrentUpdateError:
        raise ErrorResponses.SERVICE_UNAVAILABLE


@catalog_router.get("/{item_id}")
async def get_catalog_item(item_id: str, user: dict = Depends(get_current_user), db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return await catalog_store.get(db, user["_id"], item_id)
    except ResourceNotFound:
        raise ErrorResponses.not_found(ITEM_NOT_FOUND)


@catalog_router.put("/{item_id}")
async def update_catalog_item(
    item_id: str,
    data: CatalogItemSchema,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    try:
        return await catalog_store.update(db, user["_id"], item_id, data.model_dump(mode="json", exclude_unset=True))
    except ResourceNotFound:
        raise ErrorResponses.not_found(ITEM_NOT_FOUND)
    except ConcurrentUpdateError:
        raise ErrorResponses.SERVICE_UNAVAILABLE


@catalog_router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_catalog_item(item_id: str, user: dict = Depends(get_current_user), db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        await catalog_store.delete(db, user["_id"], item_id)
    except ResourceNotFound:
        raise ErrorResponses.not_found(ITEM_NOT_FOUND)
    except ConcurrentUpdateError:
        raise ErrorResponses.SERVICE_UNAVAILABLE
    return Response(status_code=status.HTTP_204_NO_CONTENT)
