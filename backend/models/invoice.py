"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  CRM - Modèle Facture                                                        ║
║                                                                              ║
║  Les totaux (HT, TTC, reste à payer) sont calculés côté client.              ║
║  À la création, un total absent est complété par compute_totals();           ║
║  aucun contrôle de cohérence n'est fait ensuite.                             ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from .common import CrmModel, InvoiceStatus, DIGITS_PATTERN, check_email


class InvoiceCreate(CrmModel):
    company_name: str = Field(min_length=1)
    customer_name: str = Field(min_length=1)
    contact_number: Optional[str] = Field(default=None, pattern=DIGITS_PATTERN)
    email_address: Optional[str] = None
    address: Optional[str] = None
    gst_number: Optional[str] = None
    product_name: str = Field(min_length=1)
    amount: float = Field(gt=0)
    discount: float = Field(default=0, ge=0, le=100)
    gst_rate: float = Field(default=0, ge=0)
    status: InvoiceStatus = InvoiceStatus.PENDING
    date: datetime
    end_date: Optional[datetime] = None
    paid_amount: float = Field(default=0, ge=0)
    total_without_gst: Optional[float] = None
    total_with_gst: Optional[float] = None
    remaining_amount: Optional[float] = None

    @field_validator("email_address")
    @classmethod
    def validate_email(cls, v):
        return check_email(v)


class InvoiceUpdate(CrmModel):
    company_name: Optional[str] = Field(default=None, min_length=1)
    customer_name: Optional[str] = Field(default=None, min_length=1)
    contact_number: Optional[str] = Field(default=None, pattern=DIGITS_PATTERN)
    email_address: Optional[str] = None
    address: Optional[str] = None
    gst_number: Optional[str] = None
    product_name: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[float] = Field(default=None, gt=0)
    discount: Optional[float] = Field(default=None, ge=0, le=100)
    gst_rate: Optional[float] = Field(default=None, ge=0)
    status: Optional[InvoiceStatus] = None
    date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    paid_amount: Optional[float] = Field(default=None, ge=0)
    total_without_gst: Optional[float] = None
    total_with_gst: Optional[float] = None
    remaining_amount: Optional[float] = None

    @field_validator("email_address")
    @classmethod
    def validate_email(cls, v):
        return check_email(v)


class InvoiceStatusUpdate(CrmModel):
    invoice_id: str
    status: InvoiceStatus


def compute_totals(amount: float, discount: float = 0, gst_rate: float = 0,
                   paid_amount: float = 0) -> dict:
    """
    Totaux dérivés d'une facture.
    discount et gst_rate sont des pourcentages.
    """
    discounted = amount - amount * (discount / 100)
    total_with_gst = discounted + discounted * (gst_rate / 100)
    return {
        "totalWithoutGst": round(discounted, 2),
        "totalWithGst": round(total_with_gst, 2),
        "remainingAmount": round(total_with_gst - paid_amount, 2),
    }
