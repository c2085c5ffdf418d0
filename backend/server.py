"""
CRM - API Backend
REST sous /api/v1, Socket.IO sur /socket.io, fichiers sous /uploads

Démarre avec:
    uvicorn server:socket_app --host 0.0.0.0 --port 8000 --reload
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
import logging
import socketio

from config import client, CORS_ORIGINS, UPLOAD_DIR

# Configuration logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("crm")

# Créer l'app
app = FastAPI(
    title="CRM API",
    description="CRM: leads, deals, factures, tâches et notifications temps réel",
    version="1.0.0"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ==================== IMPORT DES ROUTES ====================

from routes import (
    auth, leads, deals, invoices, accounts, contacts, complaints,
    tasks, scheduled, calendar, notifications, owners, files, search,
)
from services.notification_bridge import sio

ENTITY_ROUTES = [
    leads, deals, invoices, accounts, contacts, complaints,
    tasks, scheduled, calendar, notifications, owners, files, search,
]

# Routes avec préfixe /api/v1
app.include_router(auth.router, prefix="/api/v1")
for module in ENTITY_ROUTES:
    app.include_router(module.router, prefix="/api/v1")

# OAuth à la racine (URL de callback déclarée chez Google)
app.include_router(auth.oauth_router)

# Fichiers uploadés
app.mount("/uploads", StaticFiles(directory=str(UPLOAD_DIR), check_dir=False), name="uploads")

# Collections indexées sur `id`
ENTITY_COLLECTIONS = [
    "leads", "deals", "invoices", "accounts", "contacts", "complaints",
    "tasks", "scheduled_events", "calendar_events", "notifications",
    "owners", "files", "users", "sessions",
]


# ==================== ROUTE RACINE ====================

@app.get("/")
async def root():
    return {
        "name": "CRM API",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs"
    }


# ==================== STARTUP ====================

@app.on_event("startup")
async def startup():
    logger.info("CRM API démarré")

    UPLOAD_DIR.mkdir(parents=True, exist_ok=True)

    from config import db

    await db.users.create_index("email", unique=True)
    await db.sessions.create_index("token")
    for name in ENTITY_COLLECTIONS:
        await db[name].create_index("id")

    logger.info("Index MongoDB créés")


@app.on_event("shutdown")
async def shutdown_db_client():
    client.close()


# Point d'entrée ASGI: Socket.IO devant FastAPI
socket_app = socketio.ASGIApp(sio, other_asgi_app=app)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(socket_app, host="0.0.0.0", port=8000)
