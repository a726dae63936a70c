from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional


class SaleCreate(BaseModel):
    vehicle_id: str
    client_id: str
    sale_price: Decimal = Field(ge=0)
    notes: Optional[str] = None
    garage_id: Optional[str] = None      # defaults to the caller's garage
    employee_id: Optional[str] = None    # defaults to the caller's profile
    sale_date: Optional[datetime] = None


class SaleUpdate(BaseModel):
    sale_price: Optional[Decimal] = Field(default=None, ge=0)
    sale_date: Optional[datetime] = None
    notes: Optional[str] = None


class SaleVehicle(BaseModel):
    id: str
    make: str
    model: str

    class Config:
        from_attributes = True


class SaleParty(BaseModel):
    id: str
    last_name: str
    first_name: str

    class Config:
        from_attributes = True


class SaleOut(BaseModel):
    id: str
    vehicle_id: str
    client_id: str
    employee_id: str
    garage_id: str
    sale_price: Decimal
    sale_date: datetime
    notes: Optional[str]
    created_at: datetime
    vehicle: Optional[SaleVehicle] = None
    client: Optional[SaleParty] = None
    employee: Optional[SaleParty] = None

    class Config:
        from_attributes = True


class DashboardOut(BaseModel):
    total_vehicles: int
    available_vehicles: int
    total_clients: int
    total_sales: int
    revenue: Decimal
    recent_sales: List[SaleOut]


class MonthBucket(BaseModel):
    month: str
    sales: int
    amount: Decimal


class FuelBucket(BaseModel):
    fuel_type: str
    sales: int


class SalesStatsOut(BaseModel):
    total_sales: int
    revenue: Decimal
    average_price: Decimal
    sales_by_month: List[MonthBucket]
    sales_by_fuel_type: List[FuelBucket]
