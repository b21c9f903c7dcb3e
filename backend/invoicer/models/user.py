# invoicer/models/user.py
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(BaseModel):
    """Shape of a document in the `users` collection."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()), alias="_id")
    email: str
    name: Optional[str] = None
    password: str                      # argon2 hash, never leaves the server
    role: Role = Role.USER
    imagePath: Optional[str] = None

    # contacts / invoices / templates / catalog live in here
    preferences: Dict[str, Any] = Field(default_factory=dict)
    rev: int = 0

    createdAt: datetime = Field(default_factory=utcnow)
    updatedAt: datetime = Field(default_factory=utcnow)

    def to_document(self) -> dict:
        doc = self.model_dump(by_alias=True)
        doc["role"] = self.role.value
        return doc
