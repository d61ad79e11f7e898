# taskboard/models/auth.py

from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class Identity(BaseModel):
    """Authenticated caller, derived from a verified session token"""
    model_config = ConfigDict(frozen=True)

    user_id: str


class IssuedToken(BaseModel):
    token: str
    issued_at: datetime
    expires_at: datetime


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    message: str = "Login successful"
    token: str
