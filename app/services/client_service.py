# app/services/client_service.py
"""Client records, scoped to a garage like vehicles."""

from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session
from app.models.client import Client
from app.services.access_control import CallerContext, Entity, visible
from app.services.records import create_record, delete_record, get_visible, update_record


def list_clients(db: Session, caller: CallerContext, search: Optional[str] = None) -> List[Client]:
    q = visible(db.query(Client), Entity.CLIENT, Client, caller)
    if search:
        pattern = f"%{search.lower()}%"
        q = q.filter(or_(
            Client.last_name.ilike(pattern),
            Client.first_name.ilike(pattern),
            Client.email.ilike(pattern),
            Client.phone.like(f"%{search}%"),
        ))
    return q.order_by(Client.last_name, Client.first_name).all()


def get_client(db: Session, caller: CallerContext, client_id: str) -> Client:
    return get_visible(db, Client, Entity.CLIENT, caller, client_id)


def create_client(db: Session, caller: CallerContext, values: dict) -> Client:
    return create_record(db, caller, Entity.CLIENT, Client, values)


def update_client(db: Session, caller: CallerContext, client_id: str, changes: dict) -> Client:
    client = get_client(db, caller, client_id)
    return update_record(db, caller, Entity.CLIENT, client, changes)


def delete_client(db: Session, caller: CallerContext, client_id: str):
    client = get_client(db, caller, client_id)
    delete_record(db, caller, Entity.CLIENT, client)
