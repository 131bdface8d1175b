from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr

from bakery.models.user import UserRole


class UserCreate(BaseModel):
    full_name: str
    email: EmailStr
    password: str


class UserOut(BaseModel):
    id: int
    full_name: str
    email: EmailStr
    role: Optional[UserRole] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PasswordChange(BaseModel):
    current_password: str
    new_password: str


class RoleSetupResult(BaseModel):
    user: Optional[str] = None
    status: str
