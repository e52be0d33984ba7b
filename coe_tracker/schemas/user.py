from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime
from uuid import UUID

from coe_tracker.schemas.base import CamelModel


class UserSync(CamelModel):
    email: EmailStr
    uid: Optional[str] = None
    display_name: Optional[str] = None
    role: Optional[str] = None


class UserResponse(CamelModel):
    id: UUID
    email: str
    uid: Optional[str] = None
    first_name: str
    last_name: str
    role: str
    join_date: Optional[datetime] = None
    created_at: Optional[datetime] = None


class AccountListResponse(BaseModel):
    accounts: list[UserResponse]


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
