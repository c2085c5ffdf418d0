"""
CRM - Stockage local des fichiers uploadés

Un upload = une écriture bornée sur disque, nom préfixé par un timestamp
en millisecondes. Pas d'upload fractionné ni de protection contre les
collisions au-delà de ce préfixe.
"""

import logging
import mimetypes
from pathlib import Path

from fastapi import UploadFile

from config import UPLOAD_DIR, MAX_UPLOAD_SIZE, timestamp_ms

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads"


class UploadTooLarge(Exception):
    pass


def upload_dir() -> Path:
    UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    return UPLOAD_DIR


async def read_limited(file: UploadFile) -> bytes:
    """Lit au plus MAX_UPLOAD_SIZE octets; au-delà, UploadTooLarge"""
    content = await file.read(MAX_UPLOAD_SIZE + 1)
    if len(content) > MAX_UPLOAD_SIZE:
        raise UploadTooLarge(f"File too large. Maximum: {MAX_UPLOAD_SIZE // 1024 // 1024} MB")
    return content


def mime_type_of(file: UploadFile) -> str:
    return file.content_type or mimetypes.guess_type(file.filename or "")[0] or "application/octet-stream"


async def save_upload(file: UploadFile) -> dict:
    """
    Écrit le fichier et retourne ses métadonnées:
    storedName, fileUrl, mimeType, fileType (type MIME majeur), size
    """
    content = await read_limited(file)

    original = Path(file.filename or "upload").name
    stored_name = f"{timestamp_ms()}{original}"
    (upload_dir() / stored_name).write_bytes(content)

    mime_type = mime_type_of(file)
    logger.info(f"Stored upload {stored_name} ({len(content)} bytes)")

    return {
        "storedName": stored_name,
        "originalName": original,
        "fileUrl": f"{UPLOAD_URL_PREFIX}/{stored_name}",
        "mimeType": mime_type,
        "fileType": mime_type.split("/")[0],
        "size": len(content),
    }


def delete_stored(stored_name: str) -> bool:
    if not stored_name:
        return False
    path = UPLOAD_DIR / Path(stored_name).name
    if path.exists():
        path.unlink()
        return True
    return False
