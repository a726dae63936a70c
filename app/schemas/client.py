from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class ClientCreate(BaseModel):
    garage_id: str
    last_name: str
    first_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class ClientUpdate(BaseModel):
    garage_id: Optional[str] = None
    last_name: Optional[str] = None
    first_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class ClientOut(BaseModel):
    id: str
    garage_id: str
    last_name: str
    first_name: str
    email: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
