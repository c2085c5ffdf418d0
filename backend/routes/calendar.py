"""
Routes pour le Calendrier
"""

from fastapi import APIRouter

from models import CalendarEventCreate, CalendarEventUpdate
from routes.crud import register_crud_routes
from services.crud import EntityService

router = APIRouter(prefix="/calendar", tags=["Calendar"])

calendar_service = EntityService("calendar_events", "Event")

register_crud_routes(router, calendar_service, CalendarEventCreate, CalendarEventUpdate)
