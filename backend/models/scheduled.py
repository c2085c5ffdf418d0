"""
CRM - Modèle Événement planifié

Les enums acceptent les variantes de casse envoyées par le frontend
("call" et "Call", "high" et "High"...), comme en base historique.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import Field

from .common import CrmModel


class EventType(str, Enum):
    CALL = "Call"
    CALL_LOWER = "call"
    MEETING = "Meeting"
    MEETING_LOWER = "meeting"
    DEMO = "Demo"
    DEMO_LOWER = "demo"
    FOLLOW_UP = "Follow-Up"
    FOLLOW_UP_LOWER = "follow-up"


class Recurrence(str, Enum):
    ONE_TIME = "one-time"
    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    YEARLY = "Yearly"


class ScheduledStatus(str, Enum):
    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    POSTPONE = "Postpone"


class EventPriority(str, Enum):
    LOW = "Low"
    LOW_LOWER = "low"
    MEDIUM = "Medium"
    MEDIUM_LOWER = "medium"
    HIGH = "High"
    HIGH_LOWER = "high"


class ScheduledEventCreate(CrmModel):
    subject: str = Field(min_length=2)
    assigned_user: Optional[str] = None
    customer: Optional[str] = None
    location: Optional[str] = None
    event_type: EventType
    recurrence: Recurrence
    status: ScheduledStatus
    priority: EventPriority
    date: Optional[datetime] = None
    description: Optional[str] = None


class ScheduledEventUpdate(CrmModel):
    subject: Optional[str] = Field(default=None, min_length=2)
    assigned_user: Optional[str] = None
    customer: Optional[str] = None
    location: Optional[str] = None
    event_type: Optional[EventType] = None
    recurrence: Optional[Recurrence] = None
    status: Optional[ScheduledStatus] = None
    priority: Optional[EventPriority] = None
    date: Optional[datetime] = None
    description: Optional[str] = None
