"""
Routes pour les Événements planifiés
- Création en multipart avec jusqu'à 5 pièces jointes
- Les pièces jointes sont supprimées du disque avec l'événement
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, UploadFile, File, Form
from pydantic import ValidationError

from models import ScheduledEventCreate, ScheduledEventUpdate
from routes.crud import register_crud_routes, validation_error
from services.crud import EntityService
from services.storage import save_upload, delete_stored, UploadTooLarge

router = APIRouter(prefix="/scheduledEvents", tags=["Scheduled events"])

scheduled_service = EntityService("scheduled_events", "Scheduled event")

MAX_ATTACHMENTS = 5


def remove_attachments(record: dict):
    for attachment in record.get("attachments") or []:
        delete_stored(attachment.get("storedName"))


@router.post("", status_code=201)
async def create_scheduled_event(
    subject: str = Form(...),
    event_type: str = Form(..., alias="eventType"),
    recurrence: str = Form(...),
    status: str = Form(...),
    priority: str = Form(...),
    assigned_user: Optional[str] = Form(None, alias="assignedUser"),
    customer: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    attachments: Optional[List[UploadFile]] = File(None),
):
    files = [f for f in attachments or [] if f.filename]
    if len(files) > MAX_ATTACHMENTS:
        raise HTTPException(status_code=400, detail=f"Too many attachments. Maximum: {MAX_ATTACHMENTS}")

    try:
        event = ScheduledEventCreate(
            subject=subject,
            event_type=event_type,
            recurrence=recurrence,
            status=status,
            priority=priority,
            assigned_user=assigned_user,
            customer=customer,
            location=location,
            date=date or None,
            description=description,
        )
    except ValidationError as e:
        raise validation_error(e)

    stored = []
    try:
        for f in files:
            stored.append(await save_upload(f))
    except UploadTooLarge as e:
        for s in stored:
            delete_stored(s["storedName"])
        raise HTTPException(status_code=400, detail=str(e))

    doc = event.to_document()
    doc["attachments"] = stored
    record = await scheduled_service.create(doc)
    return {"success": True, "message": "Scheduled event created successfully", "data": record}


register_crud_routes(
    router, scheduled_service, ScheduledEventCreate, ScheduledEventUpdate,
    with_create=False, on_delete=remove_attachments,
)
