# invoicer/serialize.py
from typing import Optional

SUMMARY_FIELDS = ("id", "name", "email", "role", "imagePath", "createdAt", "updatedAt")
LOGIN_FIELDS = ("id", "name", "email", "role")


def serialize_doc(doc: Optional[dict]) -> Optional[dict]:
    """Rename Mongo's _id to id and stringify it."""
    if doc is None:
        return None
    doc = dict(doc)
    if "_id" in doc:
        doc["id"] = str(doc.pop("_id"))
    return doc


def user_summary(doc: dict, fields: tuple = SUMMARY_FIELDS) -> dict:
    """Public view of a user document: no password hash, no preferences."""
    user = serialize_doc(doc)
    return {field: user.get(field) for field in fields}
