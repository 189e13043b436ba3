"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""
    
    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./event_booking.db")
    
    # Security
    JWT_SECRET: str = os.getenv("JWT_SECRET", "change_me")
    JWT_ACCESS_EXPIRATION_MINUTES: int = int(os.getenv("JWT_ACCESS_EXPIRATION_MINUTES", "30"))
    
    # Admin account created by the seed script
    ADMIN_EMAIL: str = os.getenv("ADMIN_EMAIL", "admin@example.com")
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "admin@123")
    
    # Application
    PROJECT_NAME: str = "Event Booking API"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    DEFAULT_PAGE_LIMIT: int = 10
    
    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8000",
    ]
    
    class Config:
        env_file = ".env"

settings = Settings()
