"""
CRM - Modèle Tâche
"""

from datetime import datetime
from typing import Optional
from pydantic import Field

from .common import CrmModel, CaseStatus, Priority


class TaskCreate(CrmModel):
    subject: str = Field(min_length=2)
    related_to: str = Field(min_length=2)
    name: str = Field(min_length=2)
    assigned: str = Field(min_length=2)
    task_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    status: CaseStatus = CaseStatus.PENDING
    priority: Priority = Priority.MEDIUM
    notes: str = ""


class TaskUpdate(CrmModel):
    subject: Optional[str] = Field(default=None, min_length=2)
    related_to: Optional[str] = Field(default=None, min_length=2)
    name: Optional[str] = Field(default=None, min_length=2)
    assigned: Optional[str] = Field(default=None, min_length=2)
    task_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    status: Optional[CaseStatus] = None
    priority: Optional[Priority] = None
    notes: Optional[str] = None


class TaskStatusUpdate(CrmModel):
    task_id: str
    status: CaseStatus
