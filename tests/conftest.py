# tests/conftest.py
"""Shared fixtures: an in-memory SQLite database and a two-garage world."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("API_KEY", None)

from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import create_tables
from app.models.garage import Garage
from app.models.user_role import AppRole
from tests.factories import make_member


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def world(db):
    """
    Garages A and B.
    admin       admin role, no garage
    manager_a   manager of A
    employee_a  employee of A
    employee_b  employee of B
    unassigned  employee with no garage
    """
    garage_a = Garage(name="Garage A")
    garage_b = Garage(name="Garage B")
    db.add_all([garage_a, garage_b])
    db.commit()
    return SimpleNamespace(
        garage_a=garage_a.id,
        garage_b=garage_b.id,
        admin=make_member(db, "admin@example.com", roles=[AppRole.ADMIN]),
        manager_a=make_member(db, "manager.a@example.com", garage_a.id, roles=[AppRole.MANAGER]),
        employee_a=make_member(db, "employee.a@example.com", garage_a.id),
        employee_b=make_member(db, "employee.b@example.com", garage_b.id),
        unassigned=make_member(db, "new@example.com"),
    )
