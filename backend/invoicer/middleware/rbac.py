# invoicer/middleware/rbac.py
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from motor.motor_asyncio import AsyncIOMotorDatabase

from invoicer.core.error_messages import ErrorResponses
from invoicer.crud.user_crud import get_user_by_id
from invoicer.db.database import get_db
from invoicer.models.user import Role
from invoicer.utils.auth_utils import TokenError, decode_token

logger = logging.getLogger(__name__)

# auto_error is off so a missing token is a 401 and a bad one a 403
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: AsyncIOMotorDatabase = Depends(get_db),
) -> dict:
    if not token:
        raise ErrorResponses.NOT_AUTHENTICATED

    try:
        payload = decode_token(token)
    except TokenError as e:
        logger.info("Rejected token: %s", e)
        raise ErrorResponses.INVALID_TOKEN

    # Re-read the user so role changes apply without waiting for token expiry
    user = await get_user_by_id(db, payload["id"])
    if not user:
        raise ErrorResponses.USER_NOT_FOUND
    return user


async def require_admin(user: dict = Depends(get_current_user)) -> dict:
    if user.get("role") != Role.ADMIN.value:
        raise ErrorResponses.ADMIN_REQUIRED
    return user
