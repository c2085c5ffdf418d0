"""
Routes pour les Fichiers et Dossiers
- Upload multipart, dossiers à un seul niveau
- Les fichiers sont servis statiquement sous /uploads
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, UploadFile, File, Form, Query

from models import FileKind, FolderCreate
from routes.crud import not_found
from services.crud import EntityService
from services.storage import save_upload, delete_stored, UploadTooLarge

router = APIRouter(prefix="/files", tags=["Files"])

file_service = EntityService("files", "File")


async def get_folder_or_400(folder_id: str) -> dict:
    folder = await file_service.get(folder_id)
    if not folder or folder.get("type") != FileKind.FOLDER.value:
        raise HTTPException(status_code=400, detail="Parent folder not found")
    return folder


@router.post("/upload", status_code=201)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    name: Optional[str] = Form(None),
    parent_id: Optional[str] = Form(None, alias="parentId"),
):
    """Upload d'un fichier, optionnellement dans un dossier"""
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")
    if parent_id:
        await get_folder_or_400(parent_id)

    try:
        stored = await save_upload(file)
    except UploadTooLarge as e:
        raise HTTPException(status_code=400, detail=str(e))

    record = await file_service.create({
        "name": name or stored["originalName"],
        "type": FileKind.FILE.value,
        "parentId": parent_id or None,
        **stored,
    })
    return {"success": True, "message": "File uploaded successfully", "data": record}


@router.post("/folder", status_code=201)
async def create_folder(data: FolderCreate):
    record = await file_service.create({
        "name": data.name,
        "type": FileKind.FOLDER.value,
        "parentId": None,
    })
    return {"success": True, "message": "Folder created successfully", "data": record}


@router.get("")
async def list_files(
    kind: Optional[FileKind] = Query(None, alias="type"),
    parent_id: Optional[str] = Query(None, alias="parentId"),
):
    """
    ?type=file|folder  filtre par nature
    ?parentId=...      contenu d'un dossier
    """
    query = {}
    if kind:
        query["type"] = kind.value
    if parent_id:
        query["parentId"] = parent_id
    records = await file_service.list(query)
    return {"success": True, "data": records, "count": len(records)}


@router.get("/{record_id}")
async def get_file(record_id: str):
    record = await file_service.get(record_id)
    if not record:
        raise not_found(file_service)
    return {"success": True, "data": record}


@router.delete("/{record_id}")
async def delete_file(record_id: str):
    record = await file_service.get(record_id)
    if not record:
        raise not_found(file_service)

    if record.get("type") == FileKind.FOLDER.value:
        children = await file_service.count({"parentId": record_id})
        if children:
            raise HTTPException(status_code=400, detail=f"Folder is not empty: {children} file(s)")
    else:
        delete_stored(record.get("storedName"))

    await file_service.delete(record_id)
    return {"success": True, "message": "File deleted successfully", "data": record}
