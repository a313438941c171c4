import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Header, HTTPException
from pydantic import BaseModel

from config import SESSION_SECRET, SESSION_TTL_HOURS
from store_api import StoreAPI

JWT_ALGO = "HS256"

# session id -> expiry; entries past expiry are dropped on the next revoke
_revoked: Dict[str, datetime] = {}
_revoked_lock = threading.Lock()


class AdminSession(BaseModel):
    session_id: str
    email: str
    name: str
    role: str
    store_token: str
    login_time: datetime
    expires_at: datetime


def create_session_token(user: Dict[str, Any], store_token: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    payload = {
        "jti": uuid.uuid4().hex,
        "sub": user.get("email"),
        "name": user.get("fullname") or user.get("name") or "Admin",
        "role": user.get("role", "customer"),
        "store_token": store_token,
        "iat": now,
        "exp": now + timedelta(hours=SESSION_TTL_HOURS),
    }
    return jwt.encode(payload, SESSION_SECRET, algorithm=JWT_ALGO)


def decode_session_token(token: str) -> AdminSession:
    try:
        payload = jwt.decode(token, SESSION_SECRET, algorithms=[JWT_ALGO])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Session expired, please login again")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid session")
    with _revoked_lock:
        if payload.get("jti") in _revoked:
            raise HTTPException(status_code=401, detail="Session ended, please login again")
    return AdminSession(
        session_id=payload["jti"],
        email=payload["sub"],
        name=payload.get("name", "Admin"),
        role=payload.get("role", "customer"),
        store_token=payload["store_token"],
        login_time=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


def revoke_session(session: AdminSession, now: Optional[datetime] = None):
    now = now or datetime.now(timezone.utc)
    with _revoked_lock:
        for jti in [j for j, expires in _revoked.items() if expires <= now]:
            del _revoked[jti]
        _revoked[session.session_id] = session.expires_at


def login_admin(store: StoreAPI, email: str, password: str) -> Dict[str, Any]:
    """Authenticate against the store and open a console session.

    Only accounts whose store role is ``admin`` get a session. Store errors
    propagate as ``StoreAPIError``.
    """
    data = store.post("/auth/login", json={"email": email, "password": password})
    store_token = data.get("token")
    user = data.get("user") or {}
    if not store_token:
        raise HTTPException(status_code=401, detail="Login failed. Please check your credentials.")
    if user.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Access denied. Admin credentials required.")
    token = create_session_token(user, store_token)
    session = decode_session_token(token)
    return {
        "token": token,
        "user": {
            "name": session.name,
            "email": session.email,
            "role": session.role,
            "loginTime": session.login_time.isoformat(),
        },
    }


async def get_admin_session(authorization: Optional[str] = Header(default=None)) -> AdminSession:
    if not authorization:
        raise HTTPException(status_code=401, detail="Please login to access admin panel")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(status_code=401, detail="Invalid authorization header")
    session = decode_session_token(token)
    if session.role != "admin":
        raise HTTPException(status_code=403, detail="Forbidden")
    return session
