"""
CRM - Modèle Entrée de calendrier
calendarId = catégorie d'affichage (entier) côté frontend
"""

from datetime import datetime
from typing import Optional
from pydantic import Field

from .common import CrmModel


class CalendarEventCreate(CrmModel):
    event: str = Field(min_length=1)
    date: datetime
    calendar_id: int
    title: Optional[str] = None


class CalendarEventUpdate(CrmModel):
    event: Optional[str] = Field(default=None, min_length=1)
    date: Optional[datetime] = None
    calendar_id: Optional[int] = None
    title: Optional[str] = None
