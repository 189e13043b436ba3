"""
Authentication routes
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from event_api.core.db import get_db
from event_api.schemas.user import LoginRequest, TokenResponse
from event_api.services.user_service import UserService
from event_api.utils.security import create_access_token

router = APIRouter()

@router.post("/login", response_model=TokenResponse)
async def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db)
):
    """Exchange email and password for an access token"""
    user = UserService.authenticate(db, credentials.email, credentials.password)
    return TokenResponse(access_token=create_access_token(user.id))
