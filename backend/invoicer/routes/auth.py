import logging

from fastapi import APIRouter, Depends, Security, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from invoicer.core.error_messages import ErrorResponses
from invoicer.crud import user_crud
from invoicer.db.database import get_db
from invoicer.middleware.rbac import get_current_user
from invoicer.models.user import Role
from invoicer.schemas.user import (
    LoginSchema,
    RegisterResponse,
    RegisterSchema,
    SetupAdminSchema,
    TokenResponse,
    UserOut,
)
from invoicer.serialize import LOGIN_FIELDS, user_summary
from invoicer.utils.auth_utils import create_access_token

logger = logging.getLogger(__name__)

auth_router = APIRouter(tags=["Auth"])


# ------------------------
# Register
# ------------------------
@auth_router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(data: RegisterSchema, db: AsyncIOMotorDatabase = Depends(get_db)):
    if not data.email or not data.password:
        raise ErrorResponses.MISSING_CREDENTIALS

    try:
        user = await user_crud.create_user(db, data.email, data.password, data.name)
    except user_crud.DuplicateEmailError:
        raise ErrorResponses.USER_EXISTS

    return {
        "message": "Registration successful.",
        "isAdmin": user["role"] == Role.ADMIN.value,
    }


# ------------------------
# Login
# ------------------------
@auth_router.post("/login", response_model=TokenResponse)
async def login(data: LoginSchema, db: AsyncIOMotorDatabase = Depends(get_db)):
    if not data.email or not data.password:
        raise ErrorResponses.MISSING_CREDENTIALS

    user = await user_crud.authenticate(db, data.email, data.password)
    if not user:
        raise ErrorResponses.INVALID_CREDENTIALS

    token = create_access_token({"id": user["_id"], "email": user["email"], "role": user["role"]})
    return {"token": token, "user": user_summary(user, LOGIN_FIELDS)}


# ------------------------
# Get current user info
# ------------------------
@auth_router.get("/me", response_model=UserOut)
async def get_current_user_info(current_user: dict = Security(get_current_user)):
    return user_summary(current_user)


# ------------------------
# One-time admin bootstrap
# ------------------------
@auth_router.post("/setup-admin", response_model=UserOut)
async def setup_admin(data: SetupAdminSchema, db: AsyncIOMotorDatabase = Depends(get_db)):
    """
    Promote an existing account to ADMIN while the system has no admin at all.
    Deliberately unauthenticated: it is the recovery path when no admin can log in.
    """
    if not data.email:
        raise ErrorResponses.EMAIL_REQUIRED

    try:
        user = await user_crud.promote_first_admin(db, data.email)
    except user_crud.AdminAlreadyExistsError:
        raise ErrorResponses.ADMIN_EXISTS

    if not user:
        raise ErrorResponses.USER_NOT_FOUND
    return user_summary(user)
