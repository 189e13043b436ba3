"""
Security utilities and authentication

Access tokens are JWT-formatted strings signed with HMAC-SHA256 using
``settings.JWT_SECRET``. Passwords are hashed with bcrypt.
"""

import base64
import hashlib
import hmac
import json
import time
from typing import Any, Callable, Dict, Optional

import bcrypt
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from event_api.core.config import settings
from event_api.core.db import get_db
from event_api.core.errors import AuthError, ForbiddenError, ValidationError
from event_api.core.roles import has_rights
from event_api.models import User
from event_api.services.repositories import UserRepo

ACCESS_TOKEN = "access"

def _b64_url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")

def _b64_url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)

def _sign(message: bytes) -> bytes:
    return hmac.new(settings.JWT_SECRET.encode("utf-8"), message, hashlib.sha256).digest()

def create_access_token(user_id: int, expires_minutes: Optional[int] = None) -> str:
    """Create a signed access token whose subject is the user id"""
    if expires_minutes is None:
        expires_minutes = settings.JWT_ACCESS_EXPIRATION_MINUTES
    now = int(time.time())
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + expires_minutes * 60,
        "type": ACCESS_TOKEN,
    }
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(payload, separators=(",", ":")).encode("utf-8"))
    signature = _sign(f"{header_b64}.{payload_b64}".encode("utf-8"))
    return f"{header_b64}.{payload_b64}.{_b64_url_encode(signature)}"

def verify_token(token: str, token_type: str = ACCESS_TOKEN) -> Dict[str, Any]:
    """Verify signature, type and expiry of a token and return its claims.

    Raises ``AuthError`` for anything that is not a valid, unexpired token
    of the requested type.
    """
    parts = token.split(".")
    if len(parts) != 3:
        raise AuthError("Invalid token")
    header_b64, payload_b64, signature_b64 = parts
    try:
        expected = _sign(f"{header_b64}.{payload_b64}".encode("utf-8"))
        if not hmac.compare_digest(expected, _b64_url_decode(signature_b64)):
            raise AuthError("Invalid token")
        payload = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except ValueError as exc:
        raise AuthError("Invalid token") from exc

    if not isinstance(payload, dict) or payload.get("type") != token_type:
        raise AuthError("Invalid token")
    exp = payload.get("exp")
    if not isinstance(exp, int) or exp < int(time.time()):
        raise AuthError("Token expired")
    return payload

def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=10)).decode("utf-8")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False

def get_token_from_header(authorization: Optional[str]) -> str:
    """Extract the bearer token from an Authorization header value"""
    if not authorization:
        raise AuthError("Authorization header is missing")
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise ValidationError("Authorization header is malformed")
    return parts[1]

def get_current_user(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the bearer token to the authenticated user"""
    payload = verify_token(get_token_from_header(authorization))
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthError("Invalid token") from exc
    user = UserRepo.get_by_id(db, user_id)
    if not user:
        raise AuthError("Please authenticate")
    return user

def require_rights(*permissions: str) -> Callable[..., User]:
    """Dependency factory gating a route on the caller's role rights"""

    def _rights_dependency(current_user: User = Depends(get_current_user)) -> User:
        if permissions and not has_rights(current_user.role, *permissions):
            raise ForbiddenError("Forbidden")
        return current_user

    return _rights_dependency
