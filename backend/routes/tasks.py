"""
Routes pour les Tâches
"""

from fastapi import APIRouter

from models import TaskCreate, TaskUpdate, TaskStatusUpdate, CaseStatus
from routes.crud import register_crud_routes, register_status_routes
from services.crud import EntityService

router = APIRouter(prefix="/task", tags=["Tasks"])

task_service = EntityService("tasks", "Task", statuses=[s.value for s in CaseStatus])

register_status_routes(router, task_service, TaskStatusUpdate, "task_id")
register_crud_routes(router, task_service, TaskCreate, TaskUpdate)
