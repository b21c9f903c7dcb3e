# invoicer/crud/resource_store.py
"""
CRUD over the per-user collections kept inside `users.preferences`.

Contacts, invoices, templates and catalog items are not rows of their own; each
is a list nested in the owner's user document (`preferences.<key>`). Every
mutation reads the whole document, edits the list in memory and writes the
whole `preferences` object back. The write only lands if the document's `rev`
is still the one that was read; otherwise somebody else wrote in between and
the mutation is replayed on the fresh copy.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional
from uuid import uuid4

from motor.motor_asyncio import AsyncIOMotorDatabase

from invoicer.db.database import USERS
from invoicer.models.user import utcnow

logger = logging.getLogger(__name__)

PROTECTED_FIELDS = ("id", "createdAt")


class ResourceNotFound(Exception):
    pass


class ConcurrentUpdateError(Exception):
    pass


def timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class UserScopedStore:
    def __init__(
        self,
        key: str,
        sort_key: Optional[Callable[[dict], Any]] = None,
        reverse: bool = False,
        max_retries: int = 5,
    ):
        self.key = key
        self.sort_key = sort_key
        self.reverse = reverse
        self.max_retries = max_retries

    # -----------------------------
    # Reads
    # -----------------------------
    async def _load_items(self, db: AsyncIOMotorDatabase, user_id: str) -> List[dict]:
        user = await db[USERS].find_one({"_id": user_id}, {f"preferences.{self.key}": 1})
        if not user:
            return []
        return list((user.get("preferences") or {}).get(self.key) or [])

    async def list(self, db: AsyncIOMotorDatabase, user_id: str) -> List[dict]:
        items = await self._load_items(db, user_id)
        if self.sort_key:
            items.sort(key=self.sort_key, reverse=self.reverse)
        return items

    async def get(self, db: AsyncIOMotorDatabase, user_id: str, item_id: str) -> dict:
        for item in await self._load_items(db, user_id):
            if item.get("id") == item_id:
                return item
        raise ResourceNotFound(item_id)

    # -----------------------------
    # Writes
    # -----------------------------
    async def _mutate(self, db: AsyncIOMotorDatabase, user_id: str, change: Callable[[List[dict]], Any]):
        for attempt in range(1, self.max_retries + 1):
            user = await db[USERS].find_one({"_id": user_id})
            if not user:
                raise ResourceNotFound(user_id)

            preferences = dict(user.get("preferences") or {})
            items = list(preferences.get(self.key) or [])
            result = change(items)
            preferences[self.key] = items

            write = await db[USERS].update_one(
                {"_id": user_id, "rev": user.get("rev")},
                {"$set": {"preferences": preferences, "updatedAt": utcnow()}, "$inc": {"rev": 1}},
            )
            if write.matched_count:
                return result

            logger.info("Concurrent write on %s for user %s, retrying (%d)", self.key, user_id, attempt)

        raise ConcurrentUpdateError(f"Could not update {self.key} for user {user_id}")

    async def create(self, db: AsyncIOMotorDatabase, user_id: str, data: dict) -> dict:
        now = timestamp()
        fields = {k: v for k, v in data.items() if k not in PROTECTED_FIELDS}
        item = {"id": str(uuid4()), **fields, "createdAt": now, "updatedAt": now}

        def append(items: List[dict]) -> dict:
            items.append(item)
            return item

        return await self._mutate(db, user_id, append)

    async def update(self, db: AsyncIOMotorDatabase, user_id: str, item_id: str, data: dict) -> dict:
        fields = {k: v for k, v in data.items() if k not in PROTECTED_FIELDS}

        def merge(items: List[dict]) -> dict:
            for index, existing in enumerate(items):
                if existing.get("id") == item_id:
                    items[index] = {**existing, **fields, "id": item_id, "updatedAt": timestamp()}
                    return items[index]
            raise ResourceNotFound(item_id)

        return await self._mutate(db, user_id, merge)

    async def delete(self, db: AsyncIOMotorDatabase, user_id: str, item_id: str) -> None:
        def remove(items: List[dict]) -> None:
            for index, existing in enumerate(items):
                if existing.get("id") == item_id:
                    del items[index]
                    return
            raise ResourceNotFound(item_id)

        await self._mutate(db, user_id, remove)


contacts_store = UserScopedStore("contacts", sort_key=lambda c: (c.get("name") or "").lower())
invoices_store = UserScopedStore("invoices", sort_key=lambda i: i.get("createdAt") or "", reverse=True)
templates_store = UserScopedStore("templates")
catalog_store = UserScopedStore("catalog")
