"""User models and authentication payloads"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.models.common import Address, utc_now


class UserRole(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class UserRegister(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)

    @field_validator('username')
    @classmethod
    def username_valid(cls, v):
        v = v.strip()
        if not v or any(ch.isspace() for ch in v):
            raise ValueError('Username cannot contain whitespace')
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class UserDB(BaseModel):
    """User as returned by the API; the password hash is never exposed."""
    id: str
    username: str
    email: str
    first_name: str
    last_name: str
    role: UserRole = UserRole.USER
    address: Optional[Address] = None
    phone: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
