"""
Routes pour les Comptes bancaires
"""

from fastapi import APIRouter

from models import AccountCreate, AccountUpdate
from routes.crud import register_crud_routes
from services.crud import EntityService

router = APIRouter(prefix="/account", tags=["Accounts"])

account_service = EntityService("accounts", "Account")

register_crud_routes(router, account_service, AccountCreate, AccountUpdate)
