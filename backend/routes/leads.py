"""
Routes pour les Leads
"""

from fastapi import APIRouter

from models import LeadCreate, LeadUpdate, LeadStatusUpdate, PipelineStatus
from routes.crud import register_crud_routes, register_status_routes, register_date_routes
from services.crud import EntityService

router = APIRouter(prefix="/lead", tags=["Leads"])

lead_service = EntityService("leads", "Lead", statuses=[s.value for s in PipelineStatus])

register_status_routes(router, lead_service, LeadStatusUpdate, "lead_id")
register_date_routes(router, lead_service)
register_crud_routes(router, lead_service, LeadCreate, LeadUpdate)
