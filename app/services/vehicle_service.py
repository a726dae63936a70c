# app/services/vehicle_service.py
"""
Vehicle inventory. Any member of a garage reads its vehicles; managers of
that garage (and admins) add, edit and remove them.
"""

from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session
from app.models.vehicle import Vehicle
from app.services.access_control import CallerContext, Entity, visible
from app.services.records import create_record, delete_record, get_visible, update_record


def list_vehicles(
    db: Session,
    caller: CallerContext,
    search: Optional[str] = None,
    fuel_type: Optional[str] = None,
    is_available: Optional[bool] = None,
) -> List[Vehicle]:
    """Visible vehicles, newest first. `search` matches make or model, case-insensitive."""
    q = visible(db.query(Vehicle), Entity.VEHICLE, Vehicle, caller)
    if search:
        pattern = f"%{search.lower()}%"
        q = q.filter(or_(Vehicle.make.ilike(pattern), Vehicle.model.ilike(pattern)))
    if fuel_type:
        q = q.filter(Vehicle.fuel_type == fuel_type)
    if is_available is not None:
        q = q.filter(Vehicle.is_available == is_available)
    return q.order_by(Vehicle.created_at.desc()).all()


def get_vehicle(db: Session, caller: CallerContext, vehicle_id: str) -> Vehicle:
    return get_visible(db, Vehicle, Entity.VEHICLE, caller, vehicle_id)


def create_vehicle(db: Session, caller: CallerContext, values: dict) -> Vehicle:
    return create_record(db, caller, Entity.VEHICLE, Vehicle, values)


def update_vehicle(db: Session, caller: CallerContext, vehicle_id: str, changes: dict) -> Vehicle:
    vehicle = get_vehicle(db, caller, vehicle_id)
    return update_record(db, caller, Entity.VEHICLE, vehicle, changes)


def delete_vehicle(db: Session, caller: CallerContext, vehicle_id: str):
    """Fails with ConstraintViolation while a sale still references the vehicle."""
    vehicle = get_vehicle(db, caller, vehicle_id)
    delete_record(db, caller, Entity.VEHICLE, vehicle)
