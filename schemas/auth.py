# Pydantic Schemas for registration and login

from pydantic import BaseModel, Field, EmailStr, validator
from typing import Optional

from config.app_config import MIN_PASSWORD_LENGTH
from schemas.agents import CamelModel


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    full_name: str = Field(..., min_length=2, max_length=255)
    phone: Optional[str] = None

    @validator("full_name")
    def strip_name(cls, v):
        return v.strip()


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class UserResponse(CamelModel):
    id: str
    email: str
    full_name: str
    phone: Optional[str] = None
    role: str

    class Config:
        from_attributes = True

    @classmethod
    def from_profile(cls, profile) -> "UserResponse":
        role = profile.role.value if hasattr(profile.role, "value") else profile.role
        return cls(
            id=profile.id,
            email=profile.email,
            full_name=profile.full_name,
            phone=profile.phone,
            role=role,
        )
