from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class UserItemResponse(BaseModel):
    user_id: UUID
    full_name: str
    email: EmailStr
    is_active: bool

    class Config:
        from_attributes = True


class UserSignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    name: Optional[str] = Field(None, description="Display name; defaults to the part of the email before '@'")
