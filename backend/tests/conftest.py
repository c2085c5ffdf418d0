"""
CRM - Fixtures de test
Base Mongo en mémoire (mongomock-motor), uploads dans un dossier temporaire,
envoi d'emails intercepté.
Run: cd backend && pytest tests -v
"""

import socket
import threading
import time
from unittest.mock import AsyncMock

import pytest
import uvicorn
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

import config
import server
from email_service import EmailService
from routes import auth as auth_routes
from services import crud, search, notifications, storage
from services.notification_bridge import sio

DB_MODULES = [crud, search, notifications, auth_routes]


@pytest.fixture
def mock_db(monkeypatch):
    database = AsyncMongoMockClient()["crm_test"]
    for module in DB_MODULES:
        monkeypatch.setattr(module, "db", database)
    return database


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(storage, "UPLOAD_DIR", tmp_path)
    return tmp_path


@pytest.fixture
def sent_emails(monkeypatch):
    """Liste des emails 'envoyés' (to, subject, html)"""
    outbox = []

    def fake_send(self, to_email, subject, html_content, attachments=None):
        outbox.append({
            "to": to_email,
            "subject": subject,
            "html": html_content,
            "attachments": list(attachments or []),
        })
        return True

    monkeypatch.setattr(EmailService, "_send_email", fake_send)
    return outbox


@pytest.fixture
def emitted(monkeypatch):
    """Remplace sio.emit: les événements Socket.IO sont enregistrés"""
    fake_emit = AsyncMock()
    monkeypatch.setattr(sio, "emit", fake_emit)
    return fake_emit


@pytest.fixture
def client(mock_db, upload_dir, sent_emails, emitted):
    return TestClient(server.app)


LEAD_PAYLOAD = {
    "companyName": "Acme",
    "customerName": "Jo",
    "contactNumber": "9998887777",
    "emailAddress": "jo@acme.com",
    "address": "1 Main St",
    "productName": "Widget",
    "amount": 100,
    "gstNumber": "GST123",
    "status": "New",
    "date": "2024-03-15T00:00:00",
    "endDate": "2024-04-15T00:00:00",
}


@pytest.fixture
def lead_payload():
    return dict(LEAD_PAYLOAD)


@pytest.fixture
def live_server(mock_db, monkeypatch):
    """
    Vrai serveur uvicorn (Socket.IO + FastAPI) dans un thread, sur un port libre.
    Lifespan désactivé: pas de création d'index sur la vraie base.
    """
    monkeypatch.setattr(config, "db", mock_db)

    with socket.socket() as s:
        s.bind(("127.0.0.1", 0))
        port = s.getsockname()[1]

    uv_server = uvicorn.Server(uvicorn.Config(
        server.socket_app, host="127.0.0.1", port=port, log_level="warning", lifespan="off",
    ))
    thread = threading.Thread(target=uv_server.run, daemon=True)
    thread.start()

    deadline = time.monotonic() + 10
    while not uv_server.started:
        if time.monotonic() > deadline:
            pytest.fail("uvicorn did not start")
        time.sleep(0.05)

    yield f"http://127.0.0.1:{port}"

    uv_server.should_exit = True
    thread.join(timeout=10)
