"""
CRM - Profil de l'entreprise (Owner)
Utilisé pour l'en-tête des factures.
"""

from typing import Optional
from pydantic import Field, field_validator

from .common import CrmModel, DIGITS_PATTERN, check_email


class OwnerProfile(CrmModel):
    company_name: str = Field(min_length=1)
    owner_name: str = Field(min_length=1)
    contact_number: Optional[str] = Field(default=None, pattern=DIGITS_PATTERN)
    email_address: Optional[str] = None
    website: Optional[str] = None
    business_registration: Optional[str] = None
    company_type: Optional[str] = None
    employee_size: Optional[str] = None
    pan_number: Optional[str] = None
    gst_number: Optional[str] = None
    document_type: Optional[str] = None
    document_number: Optional[str] = None

    @field_validator("email_address")
    @classmethod
    def validate_email(cls, v):
        return check_email(v)


INVOICE_HEADER_FIELDS = ["companyName", "contactNumber", "emailAddress", "gstNumber", "website", "logo"]
