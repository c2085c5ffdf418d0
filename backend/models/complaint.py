"""
CRM - Modèle Réclamation
"""

from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from .common import CrmModel, CaseStatus, Priority, DIGITS_PATTERN, check_email


class ComplaintCreate(CrmModel):
    company_name: Optional[str] = None
    complainer_name: str = Field(min_length=2)
    contact_number: Optional[str] = Field(default=None, pattern=DIGITS_PATTERN)
    email_address: Optional[str] = None
    subject: str = Field(min_length=2)
    date: Optional[datetime] = None
    case_status: CaseStatus = CaseStatus.PENDING
    priority: Priority = Priority.MEDIUM
    case_origin: Optional[str] = None

    @field_validator("email_address")
    @classmethod
    def validate_email(cls, v):
        return check_email(v)


class ComplaintUpdate(CrmModel):
    company_name: Optional[str] = None
    complainer_name: Optional[str] = Field(default=None, min_length=2)
    contact_number: Optional[str] = Field(default=None, pattern=DIGITS_PATTERN)
    email_address: Optional[str] = None
    subject: Optional[str] = Field(default=None, min_length=2)
    date: Optional[datetime] = None
    case_status: Optional[CaseStatus] = None
    priority: Optional[Priority] = None
    case_origin: Optional[str] = None

    @field_validator("email_address")
    @classmethod
    def validate_email(cls, v):
        return check_email(v)
