# app/services/garage_service.py
"""
Garage management. Admins manage every garage; other identities only see the
garage their profile is assigned to. Deleting a garage cascades to its
vehicles, clients and sales and unassigns its profiles.
"""

from typing import List

from sqlalchemy.orm import Session
from app.models.garage import Garage
from app.services.access_control import CallerContext, Entity, visible
from app.services.records import create_record, delete_record, get_visible, update_record


def list_garages(db: Session, caller: CallerContext) -> List[Garage]:
    q = visible(db.query(Garage), Entity.GARAGE, Garage, caller)
    return q.order_by(Garage.created_at.desc()).all()


def get_garage(db: Session, caller: CallerContext, garage_id: str) -> Garage:
    return get_visible(db, Garage, Entity.GARAGE, caller, garage_id)


def create_garage(db: Session, caller: CallerContext, values: dict) -> Garage:
    return create_record(db, caller, Entity.GARAGE, Garage, values)


def update_garage(db: Session, caller: CallerContext, garage_id: str, changes: dict) -> Garage:
    garage = get_garage(db, caller, garage_id)
    return update_record(db, caller, Entity.GARAGE, garage, changes)


def delete_garage(db: Session, caller: CallerContext, garage_id: str):
    garage = get_garage(db, caller, garage_id)
    delete_record(db, caller, Entity.GARAGE, garage)
