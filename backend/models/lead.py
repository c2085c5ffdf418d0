"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  CRM - Modèles Lead / Deal                                                   ║
║                                                                              ║
║  Lead et Deal partagent le même schéma (pipeline commercial).                ║
║  Le statut est une simple écriture de champ: aucune transition imposée,      ║
║  un Deal "Decided" peut revenir à "New".                                     ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from .common import CrmModel, PipelineStatus, DIGITS_PATTERN, check_email


class PipelineRecordCreate(CrmModel):
    """
    Création d'un lead ou d'un deal

    Exemple:
    {
        "companyName": "Acme",
        "customerName": "Jo",
        "contactNumber": "9998887777",
        "emailAddress": "jo@acme.com",
        "address": "1 Main St",
        "productName": "Widget",
        "amount": 100,
        "gstNumber": "GST123",
        "status": "New",
        "date": "2026-10-19T00:00:00Z",
        "endDate": "2026-11-18T00:00:00Z"
    }
    """
    company_name: str = Field(min_length=1)
    customer_name: str = Field(min_length=1)
    contact_number: str = Field(min_length=1, pattern=DIGITS_PATTERN)
    email_address: str
    address: str = Field(min_length=1)
    product_name: str = Field(min_length=1)
    amount: float = Field(gt=0)
    gst_number: str = Field(min_length=1)
    status: PipelineStatus = PipelineStatus.NEW
    date: datetime
    end_date: datetime
    notes: str = ""
    is_active: bool = True

    @field_validator("email_address")
    @classmethod
    def validate_email(cls, v):
        if not v:
            raise ValueError("Email address is required")
        return check_email(v)


class PipelineRecordUpdate(CrmModel):
    """Mise à jour partielle: seuls les champs envoyés sont écrits"""
    company_name: Optional[str] = Field(default=None, min_length=1)
    customer_name: Optional[str] = Field(default=None, min_length=1)
    contact_number: Optional[str] = Field(default=None, min_length=1, pattern=DIGITS_PATTERN)
    email_address: Optional[str] = None
    address: Optional[str] = Field(default=None, min_length=1)
    product_name: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[float] = Field(default=None, gt=0)
    gst_number: Optional[str] = Field(default=None, min_length=1)
    status: Optional[PipelineStatus] = None
    date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    notes: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("email_address")
    @classmethod
    def validate_email(cls, v):
        return check_email(v)


class LeadCreate(PipelineRecordCreate):
    pass


class LeadUpdate(PipelineRecordUpdate):
    pass


class LeadStatusUpdate(CrmModel):
    """Drag & drop Kanban: {leadId, status}"""
    lead_id: str
    status: PipelineStatus


class DealCreate(PipelineRecordCreate):
    pass


class DealUpdate(PipelineRecordUpdate):
    pass


class DealStatusUpdate(CrmModel):
    deal_id: str
    status: PipelineStatus
