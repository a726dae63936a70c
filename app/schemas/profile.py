from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional

from app.models.user_role import AppRole


class IdentityCreate(BaseModel):
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class ProfileCreate(BaseModel):
    user_id: str
    last_name: str
    first_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    garage_id: Optional[str] = None


class ProfileUpdate(BaseModel):
    last_name: Optional[str] = None
    first_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    garage_id: Optional[str] = None


class ProfileOut(BaseModel):
    id: str
    user_id: str
    last_name: str
    first_name: str
    email: Optional[str]
    phone: Optional[str]
    garage_id: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class RoleGrant(BaseModel):
    user_id: str
    role: AppRole


class UserRoleOut(BaseModel):
    id: str
    user_id: str
    role: AppRole
    created_at: datetime

    class Config:
        from_attributes = True


class MeOut(BaseModel):
    user_id: str
    garage_id: Optional[str]
    roles: List[AppRole]
    profile: Optional[ProfileOut]
