# tests/test_garage_service.py
"""Garage management, garage-delete cascade and updated_at bookkeeping."""

import pytest
from app.exceptions import AuthorizationDenied, NotFound
from app.models.client import Client
from app.models.garage import Garage
from app.models.profile import Profile
from app.models.sale import Sale
from app.models.vehicle import Vehicle
from app.services import garage_service
from tests.factories import add_client, add_sale, add_vehicle


class TestGarageAccess:
    def test_admin_lists_all_garages(self, db, world):
        names = {g.name for g in garage_service.list_garages(db, world.admin)}
        assert names == {"Garage A", "Garage B"}

    def test_member_lists_only_own_garage(self, db, world):
        garages = garage_service.list_garages(db, world.employee_a)
        assert [g.id for g in garages] == [world.garage_a]

    def test_unassigned_member_sees_no_garage(self, db, world):
        assert garage_service.list_garages(db, world.unassigned) == []

    def test_other_garage_is_not_found(self, db, world):
        with pytest.raises(NotFound):
            garage_service.get_garage(db, world.employee_a, world.garage_b)

    def test_admin_creates_garage(self, db, world):
        garage = garage_service.create_garage(db, world.admin, {"name": "Garage C", "phone": "0102"})
        assert db.query(Garage).filter(Garage.id == garage.id).one().phone == "0102"

    def test_manager_cannot_create_garage(self, db, world):
        with pytest.raises(AuthorizationDenied):
            garage_service.create_garage(db, world.manager_a, {"name": "Rogue"})
        assert db.query(Garage).count() == 2

    def test_manager_cannot_rename_own_garage(self, db, world):
        with pytest.raises(AuthorizationDenied):
            garage_service.update_garage(db, world.manager_a, world.garage_a, {"name": "Mine"})


class TestGarageDeleteCascade:
    def test_delete_cascades_to_inventory_and_unassigns_profiles(self, db, world):
        vehicle = add_vehicle(db, world.garage_a)
        client = add_client(db, world.garage_a)
        add_sale(db, vehicle, client, world.employee_a)
        other_vehicle = add_vehicle(db, world.garage_b)

        garage_service.delete_garage(db, world.admin, world.garage_a)

        assert db.query(Vehicle).filter(Vehicle.garage_id == world.garage_a).count() == 0
        assert db.query(Client).filter(Client.garage_id == world.garage_a).count() == 0
        assert db.query(Sale).count() == 0
        assert db.query(Vehicle).filter(Vehicle.id == other_vehicle.id).count() == 1

        profile = db.query(Profile).filter(Profile.user_id == world.employee_a.user_id).one()
        assert profile.garage_id is None

    def test_member_cannot_delete_own_garage(self, db, world):
        with pytest.raises(AuthorizationDenied):
            garage_service.delete_garage(db, world.manager_a, world.garage_a)


class TestUpdatedAt:
    def test_update_advances_timestamp(self, db, world):
        before = garage_service.get_garage(db, world.admin, world.garage_a).updated_at
        updated = garage_service.update_garage(db, world.admin, world.garage_a, {"name": "Garage A2"})
        assert updated.updated_at > before

    def test_noop_update_still_advances_timestamp(self, db, world):
        before = garage_service.get_garage(db, world.admin, world.garage_a).updated_at
        updated = garage_service.update_garage(db, world.admin, world.garage_a, {"name": "Garage A"})
        assert updated.updated_at > before

    def test_repeated_updates_are_strictly_increasing(self, db, world):
        stamps = [
            garage_service.update_garage(db, world.admin, world.garage_a, {}).updated_at
            for _ in range(3)
        ]
        assert stamps[0] < stamps[1] < stamps[2]
