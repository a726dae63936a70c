# app/services/sale_service.py
"""
Sales.

Any member of a garage may record a sale for that garage, but only for that
garage: the sale's garage must equal the caller's own profile garage, admins
included. Recording a sale marks the sold vehicle unavailable in the same
transaction, when the caller may update that vehicle. Managers (and admins)
may correct a sale afterwards. Sales are never deleted.

The vehicle, client and employee embedded in a sale are only shown when the
caller could read them directly; otherwise they come back as None.
"""

from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session
from app.config import settings
from app.database import commit
from app.exceptions import ConstraintViolation, NotFound
from app.models.profile import Profile
from app.models.sale import Sale
from app.models.vehicle import Vehicle
from app.services.access_control import (
    CallerContext, Entity, Operation, authorize, is_permitted, is_update_permitted, row_ref, visible,
)
from app.services.records import column_values, delete_record, get_visible, update_record
from app.utils.logger import get_logger

logger = get_logger(__name__)


def list_sales(db: Session, caller: CallerContext, limit: int = None) -> List[Sale]:
    q = visible(db.query(Sale), Entity.SALE, Sale, caller).order_by(Sale.sale_date.desc())
    if limit:
        q = q.limit(limit)
    return q.all()


def get_sale(db: Session, caller: CallerContext, sale_id: str) -> Sale:
    return get_visible(db, Sale, Entity.SALE, caller, sale_id)


def create_sale(db: Session, caller: CallerContext, values: dict) -> Sale:
    """
    `values` needs vehicle_id, client_id and sale_price. garage_id defaults to the
    caller's garage and employee_id to the caller's profile.
    """
    values = dict(values)
    if values.get("garage_id") is None:
        values["garage_id"] = caller.garage_id
    if values.get("employee_id") is None:
        profile = db.query(Profile).filter(Profile.user_id == caller.user_id).first()
        if profile is None:
            raise NotFound(f"No profile for identity {caller.user_id}")
        values["employee_id"] = profile.id

    authorize(caller, Operation.INSERT, Entity.SALE, row_ref(Entity.SALE, values))

    vehicle = db.query(Vehicle).filter(Vehicle.id == values["vehicle_id"]).first()
    if settings.STRICT_SALE_GARAGE_CHECK:
        _check_garage_consistency(db, values, vehicle)

    sale = Sale(**values)
    db.add(sale)
    if vehicle is not None and _may_update_vehicle(caller, vehicle):
        vehicle.is_available = False
    commit(db)
    db.refresh(sale)
    logger.info(f"[SALE] {sale.id} vehicle={sale.vehicle_id} price={sale.sale_price} "
                f"garage={sale.garage_id} by {caller.user_id}")
    return sale


def _may_update_vehicle(caller: CallerContext, vehicle: Vehicle) -> bool:
    # Same rule as update_vehicle; without it the flag is left untouched.
    ref = row_ref(Entity.VEHICLE, vehicle)
    return is_update_permitted(caller, Entity.VEHICLE, ref, ref)


def _check_garage_consistency(db: Session, values: dict, vehicle):
    garage_id = values["garage_id"]
    employee = db.query(Profile).filter(Profile.id == values["employee_id"]).first()
    if vehicle is not None and vehicle.garage_id != garage_id:
        raise ConstraintViolation(f"Vehicle {vehicle.id} does not belong to garage {garage_id}")
    if employee is not None and employee.garage_id != garage_id:
        raise ConstraintViolation(f"Employee {employee.id} does not belong to garage {garage_id}")


def update_sale(db: Session, caller: CallerContext, sale_id: str, changes: dict) -> Sale:
    sale = get_sale(db, caller, sale_id)
    return update_record(db, caller, Entity.SALE, sale, changes)


def delete_sale(db: Session, caller: CallerContext, sale_id: str):
    """No delete rule exists for sales, so this always ends in AuthorizationDenied."""
    sale = get_sale(db, caller, sale_id)
    delete_record(db, caller, Entity.SALE, sale)


def _if_visible(caller: CallerContext, entity: Entity, obj):
    if obj is None or not is_permitted(caller, Operation.SELECT, entity, row_ref(entity, obj)):
        return None
    return obj


def visible_parties(caller: CallerContext, sale: Sale) -> dict:
    """The sale's vehicle, client and employee, each None when the caller cannot read it."""
    return {
        "vehicle": _if_visible(caller, Entity.VEHICLE, sale.vehicle),
        "client": _if_visible(caller, Entity.CLIENT, sale.client),
        "employee": _if_visible(caller, Entity.PROFILE, sale.employee),
    }


def present_sale(caller: CallerContext, sale: Sale) -> dict:
    """Sale columns plus the related rows the caller is allowed to see, for SaleOut."""
    return {**column_values(sale), **visible_parties(caller, sale)}


def format_amount(amount) -> str:
    return f"{Decimal(amount):,.2f} {settings.CURRENCY}"


def render_invoice(caller: CallerContext, sale: Sale) -> str:
    parties = visible_parties(caller, sale)
    client = parties["client"]
    vehicle = parties["vehicle"]
    lines = [
        "INVOICE",
        "=======",
        "",
        f"Invoice: {sale.id[:8]}",
        f"Date: {sale.sale_date:%d %B %Y}",
        "",
        f"Client: {client.first_name} {client.last_name}" if client else "Client: -",
        f"Vehicle: {vehicle.make} {vehicle.model} ({vehicle.year})" if vehicle else "Vehicle: -",
        "",
        f"Amount: {format_amount(sale.sale_price)}",
    ]
    if sale.notes:
        lines += ["", f"Notes: {sale.notes}"]
    lines += ["", "Thank you for your business!", ""]
    return "\n".join(lines)
