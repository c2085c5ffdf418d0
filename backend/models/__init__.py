"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  CRM - Models Package                                                        ║
║                                                                              ║
║  Exporte tous les modèles pour import facile                                 ║
║  from models import LeadCreate, InvoiceUpdate, etc.                          ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

from .common import (
    CrmModel,
    PipelineStatus,
    InvoiceStatus,
    CaseStatus,
    Priority,
    is_valid_email_format,
)

from .lead import (
    LeadCreate,
    LeadUpdate,
    LeadStatusUpdate,
    DealCreate,
    DealUpdate,
    DealStatusUpdate,
)

from .invoice import (
    InvoiceCreate,
    InvoiceUpdate,
    InvoiceStatusUpdate,
    compute_totals,
)

from .account import AccountType, AccountCreate, AccountUpdate

from .contact import ContactCreate, ContactUpdate, ContactEmail

from .complaint import ComplaintCreate, ComplaintUpdate

from .task import TaskCreate, TaskUpdate, TaskStatusUpdate

from .scheduled import (
    EventType,
    Recurrence,
    ScheduledStatus,
    EventPriority,
    ScheduledEventCreate,
    ScheduledEventUpdate,
)

from .calendar import CalendarEventCreate, CalendarEventUpdate

from .owner import OwnerProfile, INVOICE_HEADER_FIELDS

from .file import FileKind, FolderCreate

from .auth import (
    UserRegister,
    UserLogin,
    VerifyEmail,
    ForgotPassword,
    ResetPassword,
)

__all__ = [
    # Base
    "CrmModel",
    "PipelineStatus",
    "InvoiceStatus",
    "CaseStatus",
    "Priority",
    "is_valid_email_format",
    # Pipeline
    "LeadCreate",
    "LeadUpdate",
    "LeadStatusUpdate",
    "DealCreate",
    "DealUpdate",
    "DealStatusUpdate",
    # Invoices
    "InvoiceCreate",
    "InvoiceUpdate",
    "InvoiceStatusUpdate",
    "compute_totals",
    # Accounts
    "AccountType",
    "AccountCreate",
    "AccountUpdate",
    # Contacts
    "ContactCreate",
    "ContactUpdate",
    "ContactEmail",
    # Complaints
    "ComplaintCreate",
    "ComplaintUpdate",
    # Tasks
    "TaskCreate",
    "TaskUpdate",
    "TaskStatusUpdate",
    # Scheduled events
    "EventType",
    "Recurrence",
    "ScheduledStatus",
    "EventPriority",
    "ScheduledEventCreate",
    "ScheduledEventUpdate",
    # Calendar
    "CalendarEventCreate",
    "CalendarEventUpdate",
    # Owner
    "OwnerProfile",
    "INVOICE_HEADER_FIELDS",
    # Files
    "FileKind",
    "FolderCreate",
    # Auth
    "UserRegister",
    "UserLogin",
    "VerifyEmail",
    "ForgotPassword",
    "ResetPassword",
]
