"""
CRM - Modèle Contact

Les contacts ne sont liés à aucune autre entité: companyName est une
simple chaîne répétée entre contacts, leads et deals.
"""

from typing import Optional
from pydantic import Field, field_validator

from .common import CrmModel, DIGITS_PATTERN, check_email


class ContactCreate(CrmModel):
    company_name: str = Field(min_length=2)
    customer_name: str = Field(min_length=2)
    contact_number: str = Field(min_length=1, pattern=DIGITS_PATTERN)
    email_address: str
    address: str = Field(min_length=2)
    gst_number: str = Field(min_length=1)
    description: str = ""

    @field_validator("email_address")
    @classmethod
    def validate_email(cls, v):
        if not v:
            raise ValueError("Email address is required")
        return check_email(v)


class ContactUpdate(CrmModel):
    company_name: Optional[str] = Field(default=None, min_length=2)
    customer_name: Optional[str] = Field(default=None, min_length=2)
    contact_number: Optional[str] = Field(default=None, min_length=1, pattern=DIGITS_PATTERN)
    email_address: Optional[str] = None
    address: Optional[str] = Field(default=None, min_length=2)
    gst_number: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None

    @field_validator("email_address")
    @classmethod
    def validate_email(cls, v):
        return check_email(v)


class ContactEmail(CrmModel):
    """Email libre envoyé à un contact"""
    subject: str = Field(default="(No Subject)", min_length=1)
    message: str = Field(min_length=1)
