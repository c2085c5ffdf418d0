"""
Configuration et utilitaires partagés
"""

import os
import hashlib
import hmac
import secrets
import uuid
from datetime import datetime, timezone
from motor.motor_asyncio import AsyncIOMotorClient
from dotenv import load_dotenv
from pathlib import Path

# Charger .env
ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')

# MongoDB
MONGO_URL = os.environ.get('MONGO_URL', 'mongodb://localhost:27017')
DB_NAME = os.environ.get('DB_NAME', 'crm_database')

client = AsyncIOMotorClient(MONGO_URL)
db = client[DB_NAME]

# URLs
FRONTEND_URL = os.environ.get('FRONTEND_URL', 'http://localhost:3000').rstrip('/')
BACKEND_URL = os.environ.get('BACKEND_URL', 'http://localhost:8000').rstrip('/')
CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')

# Uploads
UPLOAD_DIR = Path(os.environ.get('UPLOAD_DIR', str(ROOT_DIR / 'uploads')))
MAX_UPLOAD_SIZE = int(os.environ.get('MAX_UPLOAD_SIZE', 5 * 1024 * 1024))

# Sessions
SESSION_TTL_DAYS = int(os.environ.get('SESSION_TTL_DAYS', 7))
SESSION_COOKIE = "session"

# Email (SendGrid)
SENDGRID_API_KEY = os.environ.get('SENDGRID_API_KEY', '')
SENDER_EMAIL = os.environ.get('SENDER_EMAIL', 'noreply@crm.local')

# Google OAuth
GOOGLE_CLIENT_ID = os.environ.get('GOOGLE_CLIENT_ID', '')
GOOGLE_CLIENT_SECRET = os.environ.get('GOOGLE_CLIENT_SECRET', '')
GOOGLE_REDIRECT_URI = os.environ.get('GOOGLE_REDIRECT_URI', f"{BACKEND_URL}/auth/google/callback")


# ==================== HELPERS ====================

def new_id() -> str:
    return str(uuid.uuid4())


def hash_password(password: str, salt: str = None) -> str:
    """Hash PBKDF2-SHA256, format `salt$hexdigest`"""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac('sha256', password.encode(), salt.encode(), 100_000)
    return f"{salt}${digest.hex()}"


def verify_password(password: str, hashed: str) -> bool:
    if not hashed or '$' not in hashed:
        return False
    salt, _ = hashed.split('$', 1)
    return hmac.compare_digest(hash_password(password, salt), hashed)


def generate_token() -> str:
    """Génère un token de session sécurisé"""
    return secrets.token_urlsafe(32)


def generate_verification_code() -> str:
    return f"{secrets.randbelow(900000) + 100000}"


def now_iso() -> str:
    """Retourne la date/heure actuelle en ISO"""
    return datetime.now(timezone.utc).isoformat()


def timestamp_ms() -> int:
    """Timestamp en millisecondes (préfixe des fichiers uploadés)"""
    return int(datetime.now(timezone.utc).timestamp() * 1000)
