"""
Common Pydantic schemas
"""

from typing import Any, Optional
from pydantic import BaseModel

class ErrorResponse(BaseModel):
    """Error response schema"""
    success: bool = False
    message: str
    error_code: Optional[str] = None
    details: Optional[Any] = None
