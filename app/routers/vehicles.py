# app/routers/vehicles.py
"""Vehicle inventory: read by garage members, managed by garage managers and admins."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional
from app.auth import get_caller
from app.database import get_db
from app.models.vehicle import FuelType
from app.schemas.vehicle import VehicleCreate, VehicleOut, VehicleUpdate
from app.services import vehicle_service
from app.services.access_control import CallerContext

router = APIRouter()


@router.get("/vehicles", response_model=list[VehicleOut], summary="List vehicles")
def list_vehicles(
    search: Optional[str] = None,
    fuel_type: Optional[FuelType] = None,
    is_available: Optional[bool] = None,
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(get_caller),
):
    """Filter by make/model text, fuel type, or availability."""
    return vehicle_service.list_vehicles(
        db, caller, search=search,
        fuel_type=fuel_type.value if fuel_type else None,
        is_available=is_available,
    )


@router.get("/vehicles/{vehicle_id}", response_model=VehicleOut)
def get_vehicle(vehicle_id: str, db: Session = Depends(get_db),
                caller: CallerContext = Depends(get_caller)):
    return vehicle_service.get_vehicle(db, caller, vehicle_id)


@router.post("/vehicles", response_model=VehicleOut, status_code=201, summary="Add a vehicle")
def create_vehicle(body: VehicleCreate, db: Session = Depends(get_db),
                   caller: CallerContext = Depends(get_caller)):
    return vehicle_service.create_vehicle(db, caller, body.model_dump())


@router.put("/vehicles/{vehicle_id}", response_model=VehicleOut, summary="Update a vehicle")
def update_vehicle(vehicle_id: str, body: VehicleUpdate, db: Session = Depends(get_db),
                   caller: CallerContext = Depends(get_caller)):
    return vehicle_service.update_vehicle(db, caller, vehicle_id, body.model_dump(exclude_unset=True))


@router.delete("/vehicles/{vehicle_id}", summary="Remove a vehicle")
def delete_vehicle(vehicle_id: str, db: Session = Depends(get_db),
                   caller: CallerContext = Depends(get_caller)):
    vehicle_service.delete_vehicle(db, caller, vehicle_id)
    return {"status": "removed", "vehicle_id": vehicle_id}
