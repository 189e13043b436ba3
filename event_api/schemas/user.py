"""
Authentication Pydantic schemas
"""

from pydantic import BaseModel, EmailStr

class LoginRequest(BaseModel):
    """Email/password login request"""
    email: EmailStr
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
