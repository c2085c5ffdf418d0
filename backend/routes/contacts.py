"""
Routes pour les Contacts
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, UploadFile, File, Form
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from email_service import email_service
from models import ContactCreate, ContactUpdate, ContactEmail
from routes.crud import register_crud_routes, not_found, validation_error
from services.crud import EntityService
from services.storage import read_limited, mime_type_of, UploadTooLarge

router = APIRouter(prefix="/contact", tags=["Contacts"])

contact_service = EntityService("contacts", "Contact")


@router.post("/{contact_id}/email")
async def send_contact_email(
    contact_id: str,
    subject: Optional[str] = Form(None),
    message: str = Form(...),
    attachments: Optional[List[UploadFile]] = File(None),
):
    """Envoie un email HTML au contact, pièces jointes en multipart (non stockées)"""
    try:
        email = ContactEmail(**({"subject": subject} if subject else {}), message=message)
    except ValidationError as e:
        raise validation_error(e)

    contact = await contact_service.get(contact_id)
    if not contact:
        raise not_found(contact_service)

    files = []
    try:
        for f in attachments or []:
            if f.filename:
                files.append((f.filename, await read_limited(f), mime_type_of(f)))
    except UploadTooLarge as e:
        raise HTTPException(status_code=400, detail=str(e))

    sent = await run_in_threadpool(
        email_service.send_contact_email,
        contact["emailAddress"],
        contact.get("customerName", ""),
        email.subject,
        email.message,
        files,
    )
    if not sent:
        raise HTTPException(status_code=502, detail="Failed to send email")
    return {"success": True, "message": f"Email sent to {contact['emailAddress']}", "attachments": len(files)}


register_crud_routes(router, contact_service, ContactCreate, ContactUpdate)
