"""
Routes pour les Deals
Même pipeline que les leads, collection séparée.
"""

from fastapi import APIRouter

from models import DealCreate, DealUpdate, DealStatusUpdate, PipelineStatus
from routes.crud import register_crud_routes, register_status_routes, register_date_routes
from services.crud import EntityService

router = APIRouter(prefix="/deal", tags=["Deals"])

deal_service = EntityService("deals", "Deal", statuses=[s.value for s in PipelineStatus])

register_status_routes(router, deal_service, DealStatusUpdate, "deal_id")
register_date_routes(router, deal_service)
register_crud_routes(router, deal_service, DealCreate, DealUpdate)
