"""
Routes pour le profil Owner (entreprise utilisatrice du CRM)
- Formulaire multipart avec logo optionnel
- En-tête de facture dérivé du premier profil
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, UploadFile, File, Form
from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from models import OwnerProfile, INVOICE_HEADER_FIELDS
from routes.crud import not_found, validation_error
from services.crud import EntityService
from services.storage import save_upload, delete_stored, UploadTooLarge

router = APIRouter(prefix="/owner", tags=["Owner"])

owner_service = EntityService("owners", "Owner")


async def store_logo(logo: Optional[UploadFile]) -> Optional[dict]:
    if logo is None or not logo.filename:
        return None
    try:
        stored = await save_upload(logo)
    except UploadTooLarge as e:
        raise HTTPException(status_code=400, detail=f"Error uploading file: {e}")
    if stored["fileType"] != "image":
        delete_stored(stored["storedName"])
        raise HTTPException(status_code=400, detail="Logo must be an image")
    return stored


@router.get("/count")
async def owner_count():
    return {"count": await owner_service.count()}


@router.get("/invoice-header")
async def owner_for_invoice():
    """Sous-ensemble du profil affiché en tête des factures"""
    owner = await owner_service.first()
    if not owner:
        raise not_found(owner_service)
    return {
        "success": True,
        "message": "Owner data fetched successfully for invoice",
        "data": {field: owner.get(field) for field in INVOICE_HEADER_FIELDS},
    }


@router.post("", status_code=201)
async def add_owner(
    company_name: str = Form(..., alias="companyName"),
    owner_name: str = Form(..., alias="ownerName"),
    contact_number: Optional[str] = Form(None, alias="contactNumber"),
    email_address: Optional[str] = Form(None, alias="emailAddress"),
    website: Optional[str] = Form(None),
    business_registration: Optional[str] = Form(None, alias="businessRegistration"),
    company_type: Optional[str] = Form(None, alias="companyType"),
    employee_size: Optional[str] = Form(None, alias="employeeSize"),
    pan_number: Optional[str] = Form(None, alias="panNumber"),
    gst_number: Optional[str] = Form(None, alias="gstNumber"),
    document_type: Optional[str] = Form(None, alias="documentType"),
    document_number: Optional[str] = Form(None, alias="documentNumber"),
    logo: Optional[UploadFile] = File(None),
):
    try:
        profile = OwnerProfile(
            company_name=company_name,
            owner_name=owner_name,
            contact_number=contact_number,
            email_address=email_address,
            website=website,
            business_registration=business_registration,
            company_type=company_type,
            employee_size=employee_size,
            pan_number=pan_number,
            gst_number=gst_number,
            document_type=document_type,
            document_number=document_number,
        )
    except ValidationError as e:
        raise validation_error(e)

    stored = await store_logo(logo)
    doc = profile.to_document()
    doc["logo"] = stored["fileUrl"] if stored else None
    doc["logoStoredName"] = stored["storedName"] if stored else None
    doc["dataFilled"] = True

    owner = await owner_service.create(doc)
    return {"success": True, "message": "Owner added successfully", "data": owner, "datafilled": True}


@router.get("")
async def list_owners():
    owners = await owner_service.list()
    return {"success": True, "message": "Owners fetched successfully", "data": owners}


@router.get("/{owner_id}")
async def get_owner(owner_id: str):
    owner = await owner_service.get(owner_id)
    if not owner:
        raise not_found(owner_service)
    return {"success": True, "data": owner}


@router.put("/{owner_id}")
async def update_owner(
    owner_id: str,
    company_name: Optional[str] = Form(None, alias="companyName"),
    owner_name: Optional[str] = Form(None, alias="ownerName"),
    contact_number: Optional[str] = Form(None, alias="contactNumber"),
    email_address: Optional[str] = Form(None, alias="emailAddress"),
    website: Optional[str] = Form(None),
    business_registration: Optional[str] = Form(None, alias="businessRegistration"),
    company_type: Optional[str] = Form(None, alias="companyType"),
    employee_size: Optional[str] = Form(None, alias="employeeSize"),
    pan_number: Optional[str] = Form(None, alias="panNumber"),
    gst_number: Optional[str] = Form(None, alias="gstNumber"),
    document_type: Optional[str] = Form(None, alias="documentType"),
    document_number: Optional[str] = Form(None, alias="documentNumber"),
    logo: Optional[UploadFile] = File(None),
):
    """Champs vides ignorés: l'ancienne valeur est conservée"""
    existing = await owner_service.get(owner_id)
    if not existing:
        raise not_found(owner_service)

    sent = {
        "company_name": company_name,
        "owner_name": owner_name,
        "contact_number": contact_number,
        "email_address": email_address,
        "website": website,
        "business_registration": business_registration,
        "company_type": company_type,
        "employee_size": employee_size,
        "pan_number": pan_number,
        "gst_number": gst_number,
        "document_type": document_type,
        "document_number": document_number,
    }
    merged = {
        to_camel(name): value
        for name, value in sent.items() if value
    }
    try:
        profile = OwnerProfile.model_validate({**existing, **merged})
    except ValidationError as e:
        raise validation_error(e)

    changes = {k: v for k, v in profile.to_document().items() if k in merged}
    stored = await store_logo(logo)
    if stored:
        delete_stored(existing.get("logoStoredName"))
        changes["logo"] = stored["fileUrl"]
        changes["logoStoredName"] = stored["storedName"]

    if not changes:
        return {"success": True, "message": "Owner updated successfully", "data": existing}

    updated = await owner_service.update(owner_id, changes)
    return {"success": True, "message": "Owner updated successfully", "data": updated}


@router.delete("/{owner_id}")
async def delete_owner(owner_id: str):
    owner = await owner_service.delete(owner_id)
    if not owner:
        raise not_found(owner_service)
    delete_stored(owner.get("logoStoredName"))
    return {"success": True, "message": "Owner deleted successfully"}
