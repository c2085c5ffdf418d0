"""
CRM - Modèle Compte bancaire
"""

from enum import Enum
from typing import Optional
from pydantic import Field

from .common import CrmModel


class AccountType(str, Enum):
    CURRENT = "Current"
    SAVINGS = "Savings"
    OTHER = "Other"


class AccountCreate(CrmModel):
    account_holder_name: str = Field(min_length=2)
    account_number: str = Field(min_length=2)
    bank_name: str = Field(min_length=2)
    account_type: AccountType
    ifsc_code: str = Field(min_length=2, alias="IFSCCode")
    upi_id: str = Field(min_length=2, alias="UpiId")


class AccountUpdate(CrmModel):
    account_holder_name: Optional[str] = Field(default=None, min_length=2)
    account_number: Optional[str] = Field(default=None, min_length=2)
    bank_name: Optional[str] = Field(default=None, min_length=2)
    account_type: Optional[AccountType] = None
    ifsc_code: Optional[str] = Field(default=None, min_length=2, alias="IFSCCode")
    upi_id: Optional[str] = Field(default=None, min_length=2, alias="UpiId")
