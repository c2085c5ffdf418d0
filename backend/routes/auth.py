"""
CRM - Routes Auth
Inscription avec code de vérification, login par session, reset du mot de passe,
connexion Google OAuth.
"""

import logging
from datetime import datetime, timezone, timedelta
from urllib.parse import urlencode

import httpx
from fastapi import APIRouter, HTTPException, Depends, Request, Response
from fastapi.responses import RedirectResponse
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from starlette.concurrency import run_in_threadpool

from models.auth import UserRegister, UserLogin, VerifyEmail, ForgotPassword, ResetPassword
from config import (
    db,
    FRONTEND_URL,
    SESSION_TTL_DAYS,
    SESSION_COOKIE,
    GOOGLE_CLIENT_ID,
    GOOGLE_CLIENT_SECRET,
    GOOGLE_REDIRECT_URI,
    new_id,
    hash_password,
    verify_password,
    generate_token,
    generate_verification_code,
    now_iso,
)
from email_service import email_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["Auth"])
oauth_router = APIRouter(prefix="/auth/google", tags=["Auth"])
security = HTTPBearer(auto_error=False)

CODE_TTL = timedelta(hours=1)
RESET_TTL = timedelta(hours=1)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"

# Champs jamais renvoyés au client
PRIVATE_FIELDS = {"_id": 0, "password": 0, "verificationCode": 0, "resetToken": 0}


# ==================== HELPERS ====================

def expires_in(delta: timedelta) -> str:
    return (datetime.now(timezone.utc) + delta).isoformat()


def read_token(request: Request, credentials: HTTPAuthorizationCredentials = None) -> str:
    if credentials:
        return credentials.credentials
    return request.cookies.get(SESSION_COOKIE)


async def open_session(user_id: str) -> str:
    token = generate_token()
    await db.sessions.insert_one({
        "id": new_id(),
        "token": token,
        "userId": user_id,
        "createdAt": now_iso(),
        "expiresAt": expires_in(timedelta(days=SESSION_TTL_DAYS)),
    })
    return token


def set_session_cookie(response: Response, token: str):
    response.set_cookie(
        SESSION_COOKIE,
        token,
        max_age=SESSION_TTL_DAYS * 24 * 3600,
        httponly=True,
        samesite="lax",
    )


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
):
    """Récupère l'utilisateur connecté depuis le header Bearer ou le cookie."""
    token = read_token(request, credentials)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    session = await db.sessions.find_one({
        "token": token,
        "expiresAt": {"$gt": now_iso()}
    })
    if not session:
        raise HTTPException(status_code=401, detail="Session expired")

    user = await db.users.find_one({"id": session["userId"]}, PRIVATE_FIELDS)
    if not user:
        raise HTTPException(status_code=401, detail="User not found")

    return user


# ==================== REGISTER / VERIFY ====================

@router.post("/register", status_code=201)
async def register(data: UserRegister):
    """
    Inscription: un code à 6 chiffres (valide 1h) est envoyé par email.
    Un compte non vérifié existant reçoit un nouveau code.
    """
    code = generate_verification_code()
    existing = await db.users.find_one({"email": data.email}, {"_id": 0})

    if existing and existing.get("isVerified"):
        raise HTTPException(status_code=409, detail="User already exists")

    if existing:
        await db.users.update_one(
            {"id": existing["id"]},
            {"$set": {
                "name": data.name,
                "password": hash_password(data.password),
                "verificationCode": code,
                "verificationCodeExpiresAt": expires_in(CODE_TTL),
                "updatedAt": now_iso(),
            }}
        )
        user_id = existing["id"]
        message = "Verification code resent"
    else:
        user_id = new_id()
        now = now_iso()
        await db.users.insert_one({
            "id": user_id,
            "name": data.name,
            "email": data.email,
            "password": hash_password(data.password),
            "isVerified": False,
            "isFirstLogin": True,
            "verificationCode": code,
            "verificationCodeExpiresAt": expires_in(CODE_TTL),
            "createdAt": now,
            "updatedAt": now,
        })
        message = "User registered. Please verify your email"

    sent = await run_in_threadpool(email_service.send_verification_code, data.email, data.name, code)
    if not sent:
        logger.warning(f"Verification code not delivered to {data.email}")

    logger.info(f"Register {data.email} ({message})")
    return {"success": True, "message": message, "data": {"id": user_id, "email": data.email}}


@router.post("/verify-email")
async def verify_email(data: VerifyEmail):
    user = await db.users.find_one({"verificationCode": data.verification_code}, {"_id": 0})
    if not user:
        raise HTTPException(status_code=400, detail="Invalid verification code")

    if user.get("verificationCodeExpiresAt", "") <= now_iso():
        raise HTTPException(status_code=400, detail="Verification code expired")

    await db.users.update_one(
        {"id": user["id"]},
        {
            "$set": {"isVerified": True, "updatedAt": now_iso()},
            "$unset": {"verificationCode": "", "verificationCodeExpiresAt": ""},
        }
    )
    return {"success": True, "message": "Email verified successfully"}


# ==================== LOGIN / LOGOUT ====================

@router.post("/login")
async def login(data: UserLogin, response: Response):
    """Connexion utilisateur."""
    user = await db.users.find_one({"email": data.email.lower().strip()}, {"_id": 0})

    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    if not user.get("isVerified"):
        raise HTTPException(status_code=403, detail="Please verify your email first")

    if not verify_password(data.password, user.get("password")):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = await open_session(user["id"])
    first_login = user.get("isFirstLogin", False)
    if first_login:
        await db.users.update_one({"id": user["id"]}, {"$set": {"isFirstLogin": False}})

    set_session_cookie(response, token)
    logger.info(f"Login {user['email']}")

    return {
        "success": True,
        "message": "Login successful",
        "token": token,
        "isFirstLogin": first_login,
        "redirectTo": "/Profile" if first_login else "/dashboard",
    }


@router.post("/logout")
async def logout(
    request: Request,
    response: Response,
    credentials: HTTPAuthorizationCredentials = Depends(security),
):
    token = read_token(request, credentials)
    if token:
        await db.sessions.delete_one({"token": token})
    response.delete_cookie(SESSION_COOKIE)
    return {"success": True, "message": "Logged out successfully"}


@router.get("/me")
async def me(user: dict = Depends(get_current_user)):
    return {"success": True, "data": user}


@router.delete("/me")
async def delete_me(response: Response, user: dict = Depends(get_current_user)):
    await db.sessions.delete_many({"userId": user["id"]})
    await db.users.delete_one({"id": user["id"]})
    response.delete_cookie(SESSION_COOKIE)
    logger.info(f"Account deleted: {user['email']}")
    return {"success": True, "message": "Account deleted successfully"}


# ==================== PASSWORD RESET ====================

@router.post("/forgot-password")
async def forgot_password(data: ForgotPassword):
    user = await db.users.find_one({"email": data.email.lower().strip()}, {"_id": 0})
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    token = generate_token()
    await db.users.update_one(
        {"id": user["id"]},
        {"$set": {"resetToken": token, "resetTokenExpiresAt": expires_in(RESET_TTL)}}
    )

    sent = await run_in_threadpool(email_service.send_password_reset, user["email"], user.get("name", ""), token)
    if not sent:
        logger.warning(f"Password reset link not delivered to {user['email']}")

    return {"success": True, "message": "Password reset link sent to your email"}


@router.post("/reset-password/{token}")
async def reset_password(token: str, data: ResetPassword):
    user = await db.users.find_one({
        "resetToken": token,
        "resetTokenExpiresAt": {"$gt": now_iso()}
    }, {"_id": 0})
    if not user:
        raise HTTPException(status_code=400, detail="Invalid or expired token")

    await db.users.update_one(
        {"id": user["id"]},
        {
            "$set": {"password": hash_password(data.password), "updatedAt": now_iso()},
            "$unset": {"resetToken": "", "resetTokenExpiresAt": ""},
        }
    )
    return {"success": True, "message": "Password reset successfully"}


# ==================== GOOGLE OAUTH ====================

@oauth_router.get("")
async def google_login():
    params = {
        "client_id": GOOGLE_CLIENT_ID,
        "redirect_uri": GOOGLE_REDIRECT_URI,
        "response_type": "code",
        "scope": "openid email profile",
        "access_type": "offline",
        "prompt": "select_account",
    }
    return RedirectResponse(f"{GOOGLE_AUTH_URL}?{urlencode(params)}")


async def fetch_google_profile(code: str) -> dict:
    """Échange le code OAuth contre le profil Google (sub, email, name)"""
    async with httpx.AsyncClient(timeout=10) as client:
        token_resp = await client.post(GOOGLE_TOKEN_URL, data={
            "code": code,
            "client_id": GOOGLE_CLIENT_ID,
            "client_secret": GOOGLE_CLIENT_SECRET,
            "redirect_uri": GOOGLE_REDIRECT_URI,
            "grant_type": "authorization_code",
        })
        token_resp.raise_for_status()
        access_token = token_resp.json()["access_token"]

        profile_resp = await client.get(
            GOOGLE_USERINFO_URL,
            headers={"Authorization": f"Bearer {access_token}"}
        )
        profile_resp.raise_for_status()
        return profile_resp.json()


async def upsert_google_user(profile: dict) -> dict:
    email = (profile.get("email") or "").lower()
    user = await db.users.find_one(
        {"$or": [{"googleId": profile["sub"]}, {"email": email}]},
        {"_id": 0}
    )
    if user:
        await db.users.update_one(
            {"id": user["id"]},
            {"$set": {"googleId": profile["sub"], "isVerified": True, "updatedAt": now_iso()}}
        )
        return user

    now = now_iso()
    user = {
        "id": new_id(),
        "name": profile.get("name") or email,
        "email": email,
        "googleId": profile["sub"],
        "isVerified": True,
        "isFirstLogin": True,
        "createdAt": now,
        "updatedAt": now,
    }
    await db.users.insert_one(dict(user))
    return user


@oauth_router.get("/callback")
async def google_callback(code: str = None):
    if not code:
        raise HTTPException(status_code=400, detail="Missing authorization code")

    try:
        profile = await fetch_google_profile(code)
    except httpx.HTTPError as e:
        logger.error(f"Google OAuth exchange failed: {e}")
        raise HTTPException(status_code=401, detail="Google authentication failed")

    user = await upsert_google_user(profile)
    first_login = user.get("isFirstLogin", False)
    if first_login:
        await db.users.update_one({"id": user["id"]}, {"$set": {"isFirstLogin": False}})

    token = await open_session(user["id"])
    target = "/Profile" if first_login else "/Dashboard"
    response = RedirectResponse(f"{FRONTEND_URL}{target}")
    set_session_cookie(response, token)
    return response
