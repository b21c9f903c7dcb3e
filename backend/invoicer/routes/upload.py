# invoicer/routes/upload.py
import logging
import os
from pathlib import Path
from typing import Optional
from uuid import uuid4

import aiofiles
import aiofiles.os
from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from invoicer.core.config import settings
from invoicer.core.error_messages import ErrorResponses
from invoicer.crud import user_crud
from invoicer.db.database import get_db
from invoicer.middleware.rbac import get_current_user

logger = logging.getLogger(__name__)

upload_router = APIRouter(tags=["Upload"])

PUBLIC_PREFIX = "/uploads/"
CHUNK_SIZE = 64 * 1024


def _local_path(image_path: str) -> Optional[Path]:
    if not image_path or not image_path.startswith(PUBLIC_PREFIX):
        return None
    return Path(settings.UPLOAD_DIR) / Path(image_path).name


async def _remove_logo_file(image_path: Optional[str]) -> None:
    path = _local_path(image_path)
    if path and await aiofiles.os.path.exists(path):
        await aiofiles.os.remove(path)


async def save_logo(file: UploadFile) -> str:
    """Stream the upload to UPLOAD_DIR, enforcing MAX_LOGO_SIZE. Returns the public path."""
    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)

    file_ext = os.path.splitext(file.filename or "")[1].lower()
    filename = f"{uuid4()}{file_ext}"
    target = upload_dir / filename

    written = 0
    async with aiofiles.open(target, "wb") as out_file:
        while True:
            chunk = await file.read(CHUNK_SIZE)
            if not chunk:
                break
            written += len(chunk)
            if written > settings.MAX_LOGO_SIZE:
                break
            await out_file.write(chunk)

    if written > settings.MAX_LOGO_SIZE:
        await aiofiles.os.remove(target)
        raise ErrorResponses.FILE_TOO_LARGE

    return f"{PUBLIC_PREFIX}{filename}"


@upload_router.post("/logo")
async def upload_logo(
    logo: Optional[UploadFile] = File(default=None),
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    if logo is None or not logo.filename:
        raise ErrorResponses.NO_FILE
    if not (logo.content_type or "").startswith("image/"):
        raise ErrorResponses.INVALID_FILE_TYPE

    image_path = await save_logo(logo)
    try:
        await user_crud.set_image_path(db, user["_id"], image_path)
    except Exception:
        # nothing references the new file
        await _remove_logo_file(image_path)
        raise

    # replaced logo is no longer referenced
    previous = user.get("imagePath")
    if previous and previous != image_path:
        await _remove_logo_file(previous)

    logger.info("Stored logo %s for user %s", image_path, user["_id"])
    return {"message": "Logo uploaded successfully.", "imagePath": image_path}


@upload_router.get("/logo")
async def get_logo(user: dict = Depends(get_current_user)):
    if not user.get("imagePath"):
        raise ErrorResponses.LOGO_NOT_FOUND
    return {"imagePath": user["imagePath"]}


@upload_router.delete("/logo", status_code=status.HTTP_204_NO_CONTENT)
async def delete_logo(user: dict = Depends(get_current_user), db: AsyncIOMotorDatabase = Depends(get_db)):
    image_path = user.get("imagePath")
    if not image_path:
        raise ErrorResponses.LOGO_NOT_FOUND

    await _remove_logo_file(image_path)
    await user_crud.set_image_path(db, user["_id"], None)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
