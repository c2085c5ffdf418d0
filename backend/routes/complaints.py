"""
Routes pour les Réclamations
"""

from fastapi import APIRouter

from models import ComplaintCreate, ComplaintUpdate
from routes.crud import register_crud_routes
from services.crud import EntityService

router = APIRouter(prefix="/complaint", tags=["Complaints"])

complaint_service = EntityService("complaints", "Complaint")

register_crud_routes(router, complaint_service, ComplaintCreate, ComplaintUpdate)
