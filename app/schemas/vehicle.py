from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from app.models.vehicle import FuelType, VehicleCondition


class VehicleCreate(BaseModel):
    garage_id: str
    make: str
    model: str
    year: int
    price: Decimal = Field(ge=0)
    mileage: int = 0
    fuel_type: FuelType
    condition: VehicleCondition
    is_available: bool = True
    color: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None

    class Config:
        use_enum_values = True


class VehicleUpdate(BaseModel):
    garage_id: Optional[str] = None
    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    mileage: Optional[int] = None
    fuel_type: Optional[FuelType] = None
    condition: Optional[VehicleCondition] = None
    is_available: Optional[bool] = None
    color: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None

    class Config:
        use_enum_values = True


class VehicleOut(BaseModel):
    id: str
    garage_id: str
    make: str
    model: str
    year: int
    price: Decimal
    mileage: Optional[int]
    fuel_type: FuelType
    condition: VehicleCondition
    is_available: bool
    color: Optional[str]
    description: Optional[str]
    image_url: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
