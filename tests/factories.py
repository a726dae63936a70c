# tests/factories.py
"""Row builders used by the fixtures and tests. They write straight to the
session, bypassing the access rules, to set up a scenario."""

from datetime import datetime
from decimal import Decimal

from app.models.client import Client
from app.models.profile import Profile
from app.models.sale import Sale
from app.models.user_role import UserRole
from app.models.vehicle import Vehicle
from app.services.identity_service import create_identity, load_caller_context


def make_member(db, email, garage_id=None, roles=()):
    """Sign up an identity, then place it in a garage and grant extra roles."""
    identity = create_identity(db, email)
    profile = db.query(Profile).filter(Profile.user_id == identity.id).one()
    profile.garage_id = garage_id
    for role in roles:
        db.add(UserRole(user_id=identity.id, role=role.value))
    db.commit()
    return load_caller_context(db, identity.id)


def profile_of(db, caller):
    return db.query(Profile).filter(Profile.user_id == caller.user_id).one()


def add_vehicle(db, garage_id, make="Peugeot", model="208", fuel_type="gasoline", **extra):
    values = dict(garage_id=garage_id, make=make, model=model, year=2021,
                  price=Decimal("15000.00"), fuel_type=fuel_type, condition="used")
    values.update(extra)
    vehicle = Vehicle(**values)
    db.add(vehicle)
    db.commit()
    return vehicle


def add_client(db, garage_id, last_name="Martin", first_name="Claire", **extra):
    client = Client(garage_id=garage_id, last_name=last_name, first_name=first_name, **extra)
    db.add(client)
    db.commit()
    return client


def add_sale(db, vehicle, client, employee_caller, price="14500.00", sale_date=None):
    sale = Sale(vehicle_id=vehicle.id, client_id=client.id,
                employee_id=profile_of(db, employee_caller).id,
                garage_id=vehicle.garage_id, sale_price=Decimal(price),
                sale_date=sale_date or datetime.utcnow())
    db.add(sale)
    db.commit()
    return sale
