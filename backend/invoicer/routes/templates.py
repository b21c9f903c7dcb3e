# invoicer/routes/templates.py
from fastapi import APIRouter, Depends, Response, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from invoicer.core.error_messages import ErrorResponses
from invoicer.crud.resource_store import ConcurrentUpdateError, ResourceNotFound, templates_store
from invoicer.db.database import get_db
from invoicer.middleware.rbac import get_current_user
from invoicer.schemas.resources import TemplateSchema

template_router = APIRouter(tags=["Templates"])

TEMPLATE_NOT_FOUND = "Template not found."
TEMPLATE_NAME_REQUIRED = "Template name is required."


# -----------------------------
# Current user's templates
# -----------------------------
@template_router.get("")
async def list_templates(user: dict = Depends(get_current_user), db: AsyncIOMotorDatabase = Depends(get_db)):
    return await templates_store.list(db, user["_id"])


@template_router.post("", status_code=status.HTTP_201_CREATED)
async def create_template(
    data: TemplateSchema,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    if not data.name:
        raise ErrorResponses.bad_request(TEMPLATE_NAME_REQUIRED)

    template = data.model_dump(mode="json")
    template["items"] = template["items"] or []
    try:
        return await templates_store.create(db, user["_id"], template)
    except ConcurrentUpdateError:
        raise ErrorResponses.SERVICE_UNAVAILABLE


@template_router.get("/{template_id}")
async def get_template(template_id: str, user: dict = Depends(get_current_user), db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return await templates_store.get(db, user["_id"], template_id)
    except ResourceNotFound:
        raise ErrorResponses.not_found(TEMPLATE_NOT_FOUND)


@template_router.put("/{template_id}")
async def update_template(
    template_id: str,
    data: TemplateSchema,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    changes = data.model_dump(mode="json", exclude_unset=True)
    if "name" in changes and not changes["name"]:
        raise ErrorResponses.bad_request(TEMPLATE_NAME_REQUIRED)
    if "items" in changes:
        changes["items"] = changes["items"] or []

    try:
        return await templates_store.update(db, user["_id"], template_id, changes)
    except ResourceNotFound:
        raise ErrorResponses.not_found(TEMPLATE_NOT_FOUND)
    except ConcurrentUpdateError:
        raise ErrorResponses.SERVICE_UNAVAILABLE


@template_router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(template_id: str, user: dict = Depends(get_current_user), db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        await templates_store.delete(db, user["_id"], template_id)
    except ResourceNotFound:
        raise ErrorResponses.not_found(TEMPLATE_NOT_FOUND)
    except ConcurrentUpdateError:
        raise ErrorResponses.SERVICE_UNAVAILABLE
    return Response(status_code=status.HTTP_204_NO_CONTENT)
