from typing import List

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from invoicer.core.error_messages import ErrorResponses
from invoicer.crud import user_crud
from invoicer.db.database import get_db
from invoicer.middleware.rbac import require_admin
from invoicer.models.user import Role
from invoicer.schemas.user import RoleUpdateSchema, UserOut
from invoicer.serialize import user_summary

admin_router = APIRouter(tags=["Admin"])


@admin_router.get("/users", response_model=List[UserOut])
async def list_users(
    admin: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    users = await user_crud.list_users(db)
    return [user_summary(u) for u in users]


@admin_router.put("/users/{user_id}/role", response_model=UserOut)
async def update_user_role(
    user_id: str,
    data: RoleUpdateSchema,
    admin: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    # an admin can never change their own role, whatever role was asked for
    if user_id == admin["_id"]:
        raise ErrorResponses.OWN_ROLE_CHANGE

    if data.role not in (Role.USER.value, Role.ADMIN.value):
        raise ErrorResponses.INVALID_ROLE

    user = await user_crud.set_role(db, user_id, Role(data.role))
    if not user:
        raise ErrorResponses.USER_NOT_FOUND
    return user_summary(user)
