# invoicer/crud/user_crud.py
import logging
from typing import List, Optional

from fastapi.concurrency import run_in_threadpool
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from invoicer.db.database import SYSTEM, USERS
from invoicer.models.user import Role, User, utcnow
from invoicer.utils.hash_utils import hash_password, needs_upgrade, verify_password

logger = logging.getLogger(__name__)

BOOTSTRAP_SENTINEL = "bootstrap_admin"


class DuplicateEmailError(Exception):
    pass


class AdminAlreadyExistsError(Exception):
    pass


async def get_user_by_id(db: AsyncIOMotorDatabase, user_id: str) -> Optional[dict]:
    return await db[USERS].find_one({"_id": user_id})


async def get_user_by_email(db: AsyncIOMotorDatabase, email: str) -> Optional[dict]:
    return await db[USERS].find_one({"email": email})


async def _claim_bootstrap_admin(db: AsyncIOMotorDatabase, user_id: str) -> bool:
    """Single conditional write: only one caller can ever insert the sentinel."""
    try:
        await db[SYSTEM].insert_one({"_id": BOOTSTRAP_SENTINEL, "userId": user_id, "claimedAt": utcnow()})
    except DuplicateKeyError:
        return False
    return True


async def create_user(
    db: AsyncIOMotorDatabase, email: str, password: str, name: Optional[str] = None
) -> dict:
    """
    Insert a new user and return the stored document.

    The first account ever created becomes ADMIN. "First" needs both an empty
    users collection and winning the bootstrap sentinel, so two concurrent
    registrations on an empty store cannot both end up as admin.
    """
    if await get_user_by_email(db, email):
        raise DuplicateEmailError(email)

    # argon2 is CPU bound; keep it off the event loop
    hashed = await run_in_threadpool(hash_password, password)
    user = User(email=email, name=name, password=hashed)

    if await db[USERS].count_documents({}) == 0 and await _claim_bootstrap_admin(db, user.id):
        user.role = Role.ADMIN

    doc = user.to_document()
    try:
        await db[USERS].insert_one(doc)
    except DuplicateKeyError as e:
        # lost a race against the unique email index
        if user.role == Role.ADMIN:
            await db[SYSTEM].delete_one({"_id": BOOTSTRAP_SENTINEL, "userId": user.id})
        raise DuplicateEmailError(email) from e

    logger.info("Registered user %s (role=%s)", user.id, doc["role"])
    return doc


async def authenticate(db: AsyncIOMotorDatabase, email: str, password: str) -> Optional[dict]:
    """Return the user when the credentials match, None otherwise (never says which part failed)."""
    user = await get_user_by_email(db, email)
    if not user:
        return None

    if not await run_in_threadpool(verify_password, password, user.get("password", "")):
        return None

    if needs_upgrade(user["password"]):
        new_hash = await run_in_threadpool(hash_password, password)
        await db[USERS].update_one(
            {"_id": user["_id"]},
            {"$set": {"password": new_hash, "updatedAt": utcnow()}},
        )
        user["password"] = new_hash
        logger.info("Upgraded legacy password hash for user %s", user["_id"])

    return user


async def list_users(db: AsyncIOMotorDatabase) -> List[dict]:
    cursor = db[USERS].find({}, {"password": 0, "preferences": 0}).sort("createdAt", DESCENDING)
    return await cursor.to_list(length=None)


async def set_role(db: AsyncIOMotorDatabase, user_id: str, role: Role) -> Optional[dict]:
    return await db[USERS].find_one_and_update(
        {"_id": user_id},
        {"$set": {"role": role.value, "updatedAt": utcnow()}},
        return_document=ReturnDocument.AFTER,
    )


async def promote_first_admin(db: AsyncIOMotorDatabase, email: str) -> Optional[dict]:
    """
    One-time recovery path: make `email` an admin while no admin exists.

    Raises AdminAlreadyExistsError when an admin is present, returns None for an
    unknown email.
    """
    if await db[USERS].find_one({"role": Role.ADMIN.value}):
        raise AdminAlreadyExistsError()

    user = await db[USERS].find_one_and_update(
        {"email": email},
        {"$set": {"role": Role.ADMIN.value, "updatedAt": utcnow()}},
        return_document=ReturnDocument.AFTER,
    )
    if user:
        logger.warning("User %s promoted to ADMIN through setup-admin", user["_id"])
    return user


async def set_image_path(db: AsyncIOMotorDatabase, user_id: str, image_path: Optional[str]) -> None:
    await db[USERS].update_one(
        {"_id": user_id},
        {"$set": {"imagePath": image_path, "updatedAt": utcnow()}},
    )
